"""Collaborator interfaces that feed the analyzers.

Each source produces exactly one analyzer's input. Sources may do I/O and
raise ``AnalysisError`` subclasses; the analyzers downstream never do.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, runtime_checkable

from ..models import BuildStatistics, MemorySnapshot, RenderEvent


@dataclass
class MemoryCapture:
    """Heap samples in chronological order plus an optional raw heap snapshot."""

    snapshots: list[MemorySnapshot] = field(default_factory=list)
    heap_snapshot: Optional[Any] = None


@runtime_checkable
class BuildStatsSource(Protocol):
    def load(self) -> BuildStatistics: ...


@runtime_checkable
class RenderEventSource(Protocol):
    def load(self) -> list[RenderEvent]: ...


@runtime_checkable
class MemorySampleSource(Protocol):
    def load(self) -> MemoryCapture: ...
