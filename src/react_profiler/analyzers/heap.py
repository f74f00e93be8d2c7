"""Heap-graph inspection seam for the memory analyzer.

Retainer-path analysis of a captured heap snapshot is not implemented. The
memory analyzer asks a ``HeapGraphInspector`` for leak findings so a real
inspector can replace the placeholder without touching aggregation or
recommendation logic.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

from ..models import LeakedObject, MemoryLeak


class HeapGraphInspector(Protocol):
    """Turns a captured heap snapshot into leak findings."""

    name: str

    def inspect(self, heap_snapshot: Optional[Any]) -> list[MemoryLeak]: ...


class PlaceholderHeapInspector:
    """Fixed detached-DOM and event-listener findings.

    HEURISTIC PLACEHOLDER: both findings are returned for every run, with or
    without a heap snapshot. Sizes and counts are illustrative estimates, not
    measurements.
    """

    name = "placeholder"

    def inspect(self, heap_snapshot: Optional[Any] = None) -> list[MemoryLeak]:
        return [self._detached_dom(), self._event_listeners()]

    @staticmethod
    def _detached_dom() -> MemoryLeak:
        return MemoryLeak(
            type="detached-dom",
            description="Potential detached DOM nodes found",
            severity="warning",
            retained_size=524_288,  # 512KB estimate
            objects=[
                LeakedObject(
                    constructor_name="HTMLDivElement",
                    count=15,
                    retained_size=348_160,
                    location="Component cleanup issue",
                ),
                LeakedObject(
                    constructor_name="HTMLButtonElement",
                    count=8,
                    retained_size=176_128,
                ),
            ],
        )

    @staticmethod
    def _event_listeners() -> MemoryLeak:
        return MemoryLeak(
            type="event-listeners",
            description="Event listeners may not be properly cleaned up",
            severity="warning",
            retained_size=262_144,  # 256KB estimate
            objects=[
                LeakedObject(
                    constructor_name="EventListener",
                    count=42,
                    retained_size=262_144,
                    location="useEffect cleanup missing",
                ),
            ],
        )
