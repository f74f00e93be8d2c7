"""Exception hierarchy for React Profiler."""

from .analysis import (
    AnalysisError,
    BuildStatsError,
    InputFormatError,
    InputLoadError,
)
from .base import ProfilerError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "ProfilerError",
    "AnalysisError",
    "InputLoadError",
    "InputFormatError",
    "BuildStatsError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
