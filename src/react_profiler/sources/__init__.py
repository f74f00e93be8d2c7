"""Input sources: where each analyzer's data comes from."""

from .files import (
    MemorySnapshotFileSource,
    RenderEventFileSource,
    StatsFileSource,
    read_json,
)
from .protocols import (
    BuildStatsSource,
    MemoryCapture,
    MemorySampleSource,
    RenderEventSource,
)
from .webpack import WebpackCliSource

__all__ = [
    "BuildStatsSource",
    "RenderEventSource",
    "MemorySampleSource",
    "MemoryCapture",
    "StatsFileSource",
    "WebpackCliSource",
    "RenderEventFileSource",
    "MemorySnapshotFileSource",
    "read_json",
]
