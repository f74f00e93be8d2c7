"""
React Profiler - bundle, re-render and memory analysis for web front ends.

Reduces bundler build statistics, captured render events and heap samples to
prioritized recommendations with remediation snippets.
"""

__version__ = "0.1.0"

from .api import analyze
from .config import ProfilerConfig, ThresholdConfig, load_config
from .models import AnalysisResult, Recommendation
from .pipeline import ProfilerPipeline

__all__ = [
    "analyze",  # Main entry point
    "ProfilerPipeline",
    "ProfilerConfig",
    "ThresholdConfig",
    "load_config",
    "AnalysisResult",
    "Recommendation",
]
