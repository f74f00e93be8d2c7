"""Analyzers: pure transforms from collected inputs to scored analyses."""

from .bundle import analyze_bundle
from .heap import HeapGraphInspector, PlaceholderHeapInspector
from .memory import analyze_memory
from .rerender import analyze_rerenders

__all__ = [
    "analyze_bundle",
    "analyze_rerenders",
    "analyze_memory",
    "HeapGraphInspector",
    "PlaceholderHeapInspector",
]
