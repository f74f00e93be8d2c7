"""Run the selected analyzers and merge their output into one result.

The three analyzers are independent: each consumes its own source and a
failure in one (missing capture, bundler error) is recorded on the result
without stopping the others. The summary is always recomputed last.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, TypeVar

from .analyzers import analyze_bundle, analyze_memory, analyze_rerenders
from .analyzers.heap import HeapGraphInspector
from .config import ProfilerConfig
from .exceptions import ProfilerError
from .logging_config import get_logger, stage_logger
from .models import AnalysisResult, MemoryAnalysis
from .sources import (
    BuildStatsSource,
    MemorySampleSource,
    MemorySnapshotFileSource,
    RenderEventFileSource,
    RenderEventSource,
    StatsFileSource,
    WebpackCliSource,
)
from .summary import calculate_summary

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class Sources:
    """Input per analyzer; ``None`` means the analyzer is skipped."""

    bundle: Optional[BuildStatsSource] = None
    rerenders: Optional[RenderEventSource] = None
    memory: Optional[MemorySampleSource] = None


def sources_from_config(config: ProfilerConfig) -> Sources:
    """Pick a source for every enabled analyzer.

    Bundle input prefers a stats file, then a webpack run when the bundler
    config exists. Runtime analyzers need a capture file. Enabled analyzers
    without input are skipped with a warning.
    """
    sources = Sources()

    if config.analyze_bundle:
        if config.stats_file:
            sources.bundle = StatsFileSource(config.stats_file)
        elif config.webpack_config_path.exists():
            sources.bundle = WebpackCliSource(
                config.project_root,
                config.webpack_config_path,
                timeout=config.webpack_timeout_seconds,
            )
        else:
            logger.warning(
                f"No webpack config found at {config.webpack_config_path} and no stats "
                "file given; skipping bundle analysis"
            )

    if config.analyze_rerenders:
        if config.render_events_file:
            sources.rerenders = RenderEventFileSource(config.render_events_file)
        else:
            logger.warning("No render events file given; skipping re-render analysis")

    if config.analyze_memory:
        if config.memory_snapshots_file:
            sources.memory = MemorySnapshotFileSource(config.memory_snapshots_file)
        else:
            logger.warning("No memory snapshots file given; skipping memory analysis")

    return sources


class ProfilerPipeline:
    """Orchestrates one profiling run.

    Usage:
        >>> pipeline = ProfilerPipeline(config, sources)
        >>> result = pipeline.run()
    """

    def __init__(
        self,
        config: ProfilerConfig,
        sources: Optional[Sources] = None,
        inspector: Optional[HeapGraphInspector] = None,
    ):
        self.config = config
        self.sources = sources if sources is not None else sources_from_config(config)
        self.inspector = inspector

    def run(self) -> AnalysisResult:
        result = AnalysisResult(
            project_path=str(self.config.project_root), timestamp=datetime.now()
        )
        thresholds = self.config.thresholds

        if self.sources.bundle is not None:
            bundle = self.sources.bundle
            result.analyses.bundle = self._stage(
                result, "bundle", lambda: analyze_bundle(bundle.load(), thresholds)
            )

        if self.sources.rerenders is not None:
            rerenders = self.sources.rerenders
            result.analyses.rerenders = self._stage(
                result, "rerenders", lambda: analyze_rerenders(rerenders.load(), thresholds)
            )

        if self.sources.memory is not None:
            result.analyses.memory = self._stage(result, "memory", self._analyze_memory)

        calculate_summary(result)
        logger.info(
            f"Analysis complete: {result.summary.total_issues} issues "
            f"({result.summary.critical_issues} critical)"
        )
        return result

    def _analyze_memory(self) -> MemoryAnalysis:
        capture = self.sources.memory.load()
        return analyze_memory(
            capture.snapshots,
            self.config.thresholds,
            heap_snapshot=capture.heap_snapshot,
            inspector=self.inspector,
        )

    @staticmethod
    def _stage(result: AnalysisResult, name: str, step: Callable[[], T]) -> Optional[T]:
        """Run one analyzer; a failure is recorded on ``result`` and yields ``None``."""
        log = stage_logger(name)
        log.info(f"Analyzing {name}...")
        try:
            return step()
        except ProfilerError as e:
            log.error(f"{name} analysis failed: {e}")
            result.failures[name] = str(e)
        except Exception as e:
            log.exception(f"{name} analysis failed unexpectedly")
            result.failures[name] = f"{type(e).__name__}: {e}"
        return None
