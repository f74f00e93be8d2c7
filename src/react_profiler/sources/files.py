"""File-backed sources for captured build statistics and runtime telemetry."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

from ..exceptions import InputFormatError, InputLoadError
from ..logging_config import get_logger
from ..models import CAUSE_TYPES, BuildStatistics, MemorySnapshot, RenderEvent
from .protocols import MemoryCapture

logger = get_logger(__name__)


def read_json(path: Union[str, Path]) -> Any:
    """Read and decode a JSON capture file.

    Raises:
        InputLoadError: If the file is missing, unreadable or not valid JSON
    """
    path = Path(path)
    if not path.exists():
        raise InputLoadError(path, "file does not exist")
    if not path.is_file():
        raise InputLoadError(path, "not a regular file")
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise InputLoadError(path, f"invalid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise InputLoadError(path, str(e)) from e


def _records(data: Any, key: str, source: str) -> list[dict]:
    """Accept a bare list or an object wrapping the list under ``key``."""
    if isinstance(data, dict):
        data = data.get(key)
    if not isinstance(data, list):
        raise InputFormatError(source, f"expected a list or an object with a {key!r} list")
    bad = [i for i, item in enumerate(data) if not isinstance(item, dict)]
    if bad:
        raise InputFormatError(source, f"entry {bad[0]} is not an object")
    return data


class StatsFileSource:
    """Bundler statistics previously written with ``webpack --json``."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> BuildStatistics:
        data = read_json(self.path)
        if not isinstance(data, dict):
            raise InputFormatError("build statistics", "top level must be a JSON object")
        stats = BuildStatistics.from_dict(data)
        logger.info(
            f"Loaded build statistics from {self.path}: {len(stats.assets)} assets, "
            f"{len(stats.chunks)} chunks, {len(stats.modules)} modules"
        )
        return stats


class RenderEventFileSource:
    """Render events recorded by a browser collector.

    Events are returned in timestamp order; equal timestamps keep file order.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> list[RenderEvent]:
        raw = _records(read_json(self.path), "events", "render events")
        events = []
        for i, item in enumerate(raw):
            cause = item.get("causeType") or "parent"
            if cause not in CAUSE_TYPES:
                raise InputFormatError(
                    "render events",
                    f"event {i} has unknown causeType {cause!r}; "
                    f"expected one of {', '.join(CAUSE_TYPES)}",
                )
            events.append(RenderEvent.from_dict(item))
        events.sort(key=lambda e: e.timestamp)
        logger.info(f"Loaded {len(events)} render events from {self.path}")
        return events


class MemorySnapshotFileSource:
    """Periodic heap samples, optionally bundled with a raw heap snapshot."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> MemoryCapture:
        data = read_json(self.path)
        heap_snapshot = data.get("heapSnapshot") if isinstance(data, dict) else None
        raw = _records(data, "snapshots", "memory snapshots")
        snapshots = sorted(
            (MemorySnapshot.from_dict(item) for item in raw), key=lambda s: s.timestamp
        )
        logger.info(f"Loaded {len(snapshots)} memory snapshots from {self.path}")
        return MemoryCapture(snapshots=snapshots, heap_snapshot=heap_snapshot)
