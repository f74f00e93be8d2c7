"""Tests for heap growth analysis."""

import math

import pytest

from react_profiler.analyzers.heap import PlaceholderHeapInspector
from react_profiler.analyzers.memory import (
    analyze_memory,
    detect_leaks,
    increase_percentage,
    mean_growth,
    retained_size,
)
from react_profiler.config import ThresholdConfig
from react_profiler.models import MemoryLeak, MemorySnapshot

MIB = 1024 * 1024


def _samples(*heap_values):
    return [MemorySnapshot(timestamp=i * 1000, heap_used=v) for i, v in enumerate(heap_values)]


class _NoFindings:
    name = "none"

    def inspect(self, heap_snapshot):
        return []


class _RecordingInspector:
    name = "recording"

    def __init__(self):
        self.seen = []

    def inspect(self, heap_snapshot):
        self.seen.append(heap_snapshot)
        return [MemoryLeak(type="closures", description="Retained closures", severity="critical", retained_size=2048)]


class TestAnalyzeMemory:
    def test_sizes(self, memory_snapshots):
        analysis = analyze_memory(memory_snapshots)
        assert analysis.heap_size == 26 * MIB
        assert analysis.retained_size == 6 * MIB
        assert len(analysis.snapshots) == 4

    def test_leaks(self, memory_snapshots):
        leaks = analyze_memory(memory_snapshots).leaks
        assert [leak.type for leak in leaks] == ["consistent-growth", "detached-dom", "event-listeners"]
        growth = leaks[0]
        assert growth.severity == "critical"
        assert growth.retained_size == 8 * MIB

    def test_recommendations(self, memory_snapshots):
        recs = analyze_memory(memory_snapshots).recommendations
        assert [(r.severity, r.category) for r in recs] == [
            ("critical", "memory-leak"),
            ("warning", "detached-dom"),
            ("warning", "event-listeners"),
        ]
        assert recs[0].title == "Memory leak detected: consistent-growth"
        assert recs[0].estimated_impact == "Could prevent 8 MB memory leak"
        assert "clearInterval" in recs[0].code_example
        assert recs[1].estimated_impact == "Could free 512 KB"
        assert recs[2].estimated_impact == "Could prevent 256 KB accumulation"

    def test_empty_samples(self):
        analysis = analyze_memory([], inspector=_NoFindings())
        assert analysis.heap_size == 0
        assert analysis.retained_size == 0
        assert analysis.leaks == []
        assert analysis.recommendations == []

    def test_custom_inspector_receives_heap_snapshot(self, memory_snapshots):
        inspector = _RecordingInspector()
        analysis = analyze_memory(memory_snapshots, heap_snapshot={"nodes": []}, inspector=inspector)
        assert inspector.seen == [{"nodes": []}]
        assert analysis.leaks[-1].type == "closures"
        # critical findings from the inspector get generic advice
        rec = analysis.recommendations[1]
        assert rec.title == "Memory leak detected: closures"
        assert rec.fix == "Review component lifecycle and cleanup logic"
        assert rec.code_example == "// See documentation for examples"

    def test_high_memory_warning(self):
        recs = analyze_memory(_samples(60 * MIB), inspector=_NoFindings()).recommendations
        assert [r.category for r in recs] == ["high-memory"]
        assert recs[0].description == "Application is using 60 MB of memory"


class TestRetainedSize:
    def test_single_sample(self):
        assert retained_size(_samples(10 * MIB)) == 0

    def test_shrinking_heap_floors_at_zero(self):
        assert retained_size(_samples(30 * MIB, 20 * MIB)) == 0


class TestGrowthRule:
    def test_needs_three_samples(self):
        leaks = detect_leaks(_samples(10 * MIB, 15 * MIB))
        assert "consistent-growth" not in [leak.type for leak in leaks]

    def test_mean_growth(self):
        assert mean_growth(_samples(0, 2 * MIB, 3 * MIB)) == pytest.approx(1.5 * MIB)

    def test_growth_at_threshold_is_not_a_leak(self):
        leaks = detect_leaks(_samples(40 * MIB, 41 * MIB, 42 * MIB))
        assert leaks == []


class TestIncreaseRule:
    def test_large_increase(self):
        leaks = detect_leaks(_samples(10 * MIB, 16 * MIB))
        assert len(leaks) == 1
        leak = leaks[0]
        assert leak.type == "large-increase"
        assert leak.severity == "warning"
        assert leak.description == "Memory increased by 60.0% during testing"
        assert leak.retained_size == 6 * MIB

    def test_zero_initial_heap(self):
        assert increase_percentage(_samples(0, 1024)) == math.inf
        assert increase_percentage(_samples(0, 0)) == 0.0

    def test_zero_initial_heap_with_growth_is_reported(self):
        leaks = detect_leaks(_samples(0, 1024))
        assert [leak.type for leak in leaks] == ["large-increase"]

    def test_threshold_configurable(self):
        thresholds = ThresholdConfig(memory_increase_pct=10.0)
        leaks = detect_leaks(_samples(10 * MIB, 12 * MIB), thresholds)
        assert [leak.type for leak in leaks] == ["large-increase"]


class TestPlaceholderInspector:
    def test_fixed_findings_without_snapshot(self):
        leaks = PlaceholderHeapInspector().inspect(None)
        assert [(leak.type, leak.severity, leak.retained_size) for leak in leaks] == [
            ("detached-dom", "warning", 524288),
            ("event-listeners", "warning", 262144),
        ]

    def test_leaked_objects(self):
        detached, listeners = PlaceholderHeapInspector().inspect({"anything": True})
        assert [(o.constructor_name, o.count, o.retained_size) for o in detached.objects] == [
            ("HTMLDivElement", 15, 348160),
            ("HTMLButtonElement", 8, 176128),
        ]
        assert listeners.objects[0].location == "useEffect cleanup missing"
