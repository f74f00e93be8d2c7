"""Public API for React Profiler.

Example:
    >>> from react_profiler import analyze
    >>>
    >>> result = analyze(
    ...     "./my-app",
    ...     stats_file="stats.json",
    ...     render_events_file="captures/render-events.json",
    ... )
    >>> result.summary.critical_issues
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import load_config
from .logging_config import get_logger
from .models import AnalysisResult
from .pipeline import ProfilerPipeline

logger = get_logger(__name__)


def analyze(
    path: str = ".",
    config_file: Optional[Path] = None,
    **overrides,
) -> AnalysisResult:
    """Profile a front-end project and return the merged result.

    Args:
        path: Project root (default: current directory)
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g. ``stats_file="stats.json"``,
            ``analyze_memory=False``, ``thresholds={"slow_render_ms": 8}``)

    Returns:
        AnalysisResult with its summary already computed. Analyzers that
        failed are listed in ``result.failures``.

    Raises:
        ConfigurationError: If configuration is invalid
        InvalidPathError: If the project path does not exist
    """
    config = load_config(config_file=config_file, project_path=path, **overrides)
    config.validate_paths()
    logger.debug(f"Profiling {config.project_root}")
    return ProfilerPipeline(config).run()
