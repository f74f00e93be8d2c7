"""Shared test fixtures for React Profiler tests."""

import json
import os

import pytest

from react_profiler.models import BuildStatistics, MemorySnapshot, RenderEvent

BASE_TIMESTAMP = 1_700_000_000_000
MIB = 1024 * 1024


@pytest.fixture
def stats_data():
    """Four assets, two chunks, lodash bundled twice."""
    return {
        "assets": [
            {"name": "main.js", "size": 250000},
            {"name": "vendor.js", "size": 500000},
            {"name": "styles.css", "size": 50000},
            {"name": "logo.png", "size": 10000},
        ],
        "chunks": [
            {
                "id": 0,
                "names": ["main"],
                "size": 250000,
                "files": ["main.js"],
                "initial": True,
                "modules": [
                    {"name": "App.tsx", "size": 15000, "identifier": "src/App.tsx"},
                    {"name": "Header.tsx", "size": 8000, "identifier": "src/components/Header.tsx"},
                ],
            },
            {
                "id": 1,
                "names": ["vendor"],
                "size": 500000,
                "files": ["vendor.js"],
                "initial": True,
                "modules": [
                    {"name": "react", "size": 120000, "identifier": "node_modules/react/index.js"},
                    {"name": "react-dom", "size": 150000, "identifier": "node_modules/react-dom/index.js"},
                    {"name": "lodash", "size": 230000, "identifier": "node_modules/lodash/lodash.js"},
                ],
            },
        ],
        "modules": [
            {"name": "App.tsx", "size": 15000, "identifier": "src/App.tsx", "depth": 0, "reasons": []},
            {
                "name": "Header.tsx",
                "size": 8000,
                "identifier": "src/components/Header.tsx",
                "depth": 1,
                "reasons": [{"moduleName": "App.tsx"}],
            },
            {
                "name": "react",
                "size": 120000,
                "identifier": "node_modules/react/index.js",
                "depth": 0,
                "reasons": [],
            },
            {
                "name": "lodash",
                "size": 230000,
                "identifier": "node_modules/lodash/lodash.js",
                "depth": 0,
                "reasons": [],
            },
            {
                "name": "lodash",
                "size": 230000,
                "identifier": "node_modules/other-package/node_modules/lodash/lodash.js",
                "depth": 2,
                "reasons": [{"moduleName": "other-package"}],
            },
        ],
        "errors": [],
        "warnings": [],
        "time": 5000,
        "hash": "abc123",
    }


@pytest.fixture
def stats(stats_data):
    return BuildStatistics.from_dict(stats_data)


@pytest.fixture
def render_events_data():
    """18 events: three one-off components and 15 cheap ProductList renders."""
    events = [
        {
            "componentName": "App",
            "timestamp": BASE_TIMESTAMP,
            "duration": 5.2,
            "causeType": "parent",
            "details": "Parent component re-rendered",
        },
        {
            "componentName": "Header",
            "timestamp": BASE_TIMESTAMP + 100,
            "duration": 2.1,
            "causeType": "props",
            "details": "Props: title, className",
        },
        {
            "componentName": "UserProfile",
            "timestamp": BASE_TIMESTAMP + 200,
            "duration": 18.5,
            "causeType": "state",
            "details": "State changed",
        },
    ]
    events += [
        {
            "componentName": "ProductList",
            "timestamp": BASE_TIMESTAMP + 300 + i * 100,
            "duration": 3.2,
            "causeType": "props",
            "details": "Props: items",
        }
        for i in range(15)
    ]
    return events


@pytest.fixture
def render_events(render_events_data):
    return [RenderEvent.from_dict(e) for e in render_events_data]


@pytest.fixture
def memory_snapshots_data():
    """Four samples growing 2 MiB per step from 20 MiB."""
    base = 20 * MIB
    return [
        {
            "timestamp": BASE_TIMESTAMP + i * 3000,
            "heapUsed": base + i * 2 * MIB,
            "heapTotal": base * 1.5,
            "external": 0,
            "arrayBuffers": 0,
        }
        for i in range(4)
    ]


@pytest.fixture
def memory_snapshots(memory_snapshots_data):
    return [MemorySnapshot.from_dict(s) for s in memory_snapshots_data]


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def stats_file(tmp_path, stats_data):
    return write_json(tmp_path / "stats.json", stats_data)


@pytest.fixture
def render_events_file(tmp_path, render_events_data):
    return write_json(tmp_path / "render-events.json", render_events_data)


@pytest.fixture
def memory_file(tmp_path, memory_snapshots_data):
    return write_json(tmp_path / "memory.json", memory_snapshots_data)


@pytest.fixture
def project_dir(tmp_path):
    """Empty project directory without a webpack config."""
    project = tmp_path / "app"
    project.mkdir()
    return project


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Keep user/project config files and REACT_PROFILER_* env out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.chdir(workdir)
    for key in list(os.environ):
        if key.startswith("REACT_PROFILER_"):
            monkeypatch.delenv(key)
    return workdir
