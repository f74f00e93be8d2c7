"""Heap growth analysis over periodic memory samples.

Two trend rules run on the sampled ``heapUsed`` series: a mean
sample-to-sample delta above ``memory_growth_bytes`` (critical) and a
first-to-last increase above ``memory_increase_pct`` (warning). Object-level
findings come from the configured ``HeapGraphInspector``.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence

import numpy as np

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..logging_config import get_logger
from ..models import MemoryAnalysis, MemoryLeak, MemorySnapshot, Recommendation
from ..units import format_bytes
from . import remedies
from .heap import HeapGraphInspector, PlaceholderHeapInspector

logger = get_logger(__name__)

_MIN_GROWTH_SAMPLES = 3


def analyze_memory(
    snapshots: Sequence[MemorySnapshot],
    thresholds: Optional[ThresholdConfig] = None,
    heap_snapshot: Optional[Any] = None,
    inspector: Optional[HeapGraphInspector] = None,
) -> MemoryAnalysis:
    """Aggregate chronological heap samples into a ``MemoryAnalysis``."""
    thresholds = thresholds or DEFAULT_THRESHOLDS
    inspector = inspector or PlaceholderHeapInspector()
    snapshots = list(snapshots)

    leaks = detect_leaks(snapshots, thresholds)
    leaks.extend(inspector.inspect(heap_snapshot))
    recommendations = memory_recommendations(snapshots, leaks, thresholds)

    heap_size = snapshots[-1].heap_used if snapshots else 0
    retained = retained_size(snapshots)

    logger.debug(
        "Memory: %d samples, heap %s, retained %s, %d leak findings (inspector=%s)",
        len(snapshots),
        format_bytes(heap_size),
        format_bytes(retained),
        len(leaks),
        inspector.name,
    )

    return MemoryAnalysis(
        snapshots=snapshots,
        leaks=leaks,
        heap_size=heap_size,
        retained_size=retained,
        recommendations=recommendations,
    )


def retained_size(snapshots: Sequence[MemorySnapshot]) -> float:
    """Heap growth between first and last sample, floored at zero."""
    if len(snapshots) < 2:
        return 0
    return max(0, snapshots[-1].heap_used - snapshots[0].heap_used)


def mean_growth(snapshots: Sequence[MemorySnapshot]) -> float:
    """Mean delta between consecutive ``heap_used`` samples."""
    if len(snapshots) < 2:
        return 0.0
    heap = np.asarray([s.heap_used for s in snapshots], dtype=np.float64)
    return float(np.diff(heap).mean())


def increase_percentage(snapshots: Sequence[MemorySnapshot]) -> float:
    """First-to-last heap change as a percentage of the first sample."""
    if not snapshots:
        return 0.0
    initial = snapshots[0].heap_used
    increase = snapshots[-1].heap_used - initial
    if initial == 0:
        if increase > 0:
            return math.inf
        return 0.0
    return increase / initial * 100


def detect_leaks(
    snapshots: Sequence[MemorySnapshot], thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> list[MemoryLeak]:
    """Trend-based leak findings; heap-graph findings are added separately."""
    leaks: list[MemoryLeak] = []

    if len(snapshots) >= _MIN_GROWTH_SAMPLES:
        avg_growth = mean_growth(snapshots)
        if avg_growth > thresholds.memory_growth_bytes:
            leaks.append(
                MemoryLeak(
                    type="consistent-growth",
                    description="Memory usage grows consistently with interactions",
                    severity="critical",
                    # projection over the sampled window, not a measurement
                    retained_size=math.floor(avg_growth * len(snapshots)),
                )
            )

    pct = increase_percentage(snapshots)
    if pct > thresholds.memory_increase_pct:
        increase = snapshots[-1].heap_used - snapshots[0].heap_used
        leaks.append(
            MemoryLeak(
                type="large-increase",
                description=f"Memory increased by {pct:.1f}% during testing",
                severity="warning",
                retained_size=increase,
            )
        )

    return leaks


def memory_recommendations(
    snapshots: Sequence[MemorySnapshot],
    leaks: Sequence[MemoryLeak],
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> list[Recommendation]:
    recommendations: list[Recommendation] = []

    for leak in leaks:
        if leak.severity != "critical":
            continue
        recommendations.append(
            Recommendation(
                severity="critical",
                category="memory-leak",
                title=f"Memory leak detected: {leak.type}",
                description=leak.description,
                fix=remedies.leak_fix(leak.type),
                code_example=remedies.leak_example(leak.type),
                estimated_impact=f"Could prevent {format_bytes(leak.retained_size)} memory leak",
            )
        )

    detached = next((leak for leak in leaks if leak.type == "detached-dom"), None)
    if detached is not None:
        recommendations.append(
            Recommendation(
                severity="warning",
                category="detached-dom",
                title="Detached DOM nodes detected",
                description="DOM nodes are being removed but not garbage collected",
                fix="Ensure proper cleanup of DOM references in useEffect cleanup functions",
                code_example=remedies.DOM_CLEANUP,
                estimated_impact=f"Could free {format_bytes(detached.retained_size)}",
            )
        )

    listeners = next((leak for leak in leaks if leak.type == "event-listeners"), None)
    if listeners is not None:
        recommendations.append(
            Recommendation(
                severity="warning",
                category="event-listeners",
                title="Event listeners not properly cleaned up",
                description="Event listeners are accumulating without cleanup",
                fix="Always remove event listeners in cleanup functions",
                code_example=remedies.LISTENER_CLEANUP,
                estimated_impact=(
                    f"Could prevent {format_bytes(listeners.retained_size)} accumulation"
                ),
            )
        )

    final_heap = snapshots[-1].heap_used if snapshots else 0
    if final_heap > thresholds.high_memory_bytes:
        recommendations.append(
            Recommendation(
                severity="warning",
                category="high-memory",
                title="High memory usage detected",
                description=f"Application is using {format_bytes(final_heap)} of memory",
                fix=(
                    "Consider implementing virtualization for large lists and lazy "
                    "loading for heavy components"
                ),
                code_example=remedies.VIRTUALIZED_LIST,
                estimated_impact="Could reduce memory usage by 30-50%",
            )
        )

    return recommendations
