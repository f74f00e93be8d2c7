"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import ProfilerConfig, load_config

console = Console()


def parse_formats(value: Optional[str]) -> Optional[list[str]]:
    """Split ``json,html`` into a list; ``None`` leaves the configured formats."""
    if value is None:
        return None
    return [part.strip().lower() for part in value.split(",") if part.strip()]


def resolve_config(
    path: Optional[Path] = None,
    config: Optional[Path] = None,
    stats: Optional[Path] = None,
    webpack_config: Optional[Path] = None,
    render_events: Optional[Path] = None,
    memory_snapshots: Optional[Path] = None,
    output: Optional[Path] = None,
    formats: Optional[str] = None,
    bundle: Optional[bool] = None,
    rerenders: Optional[bool] = None,
    memory: Optional[bool] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> ProfilerConfig:
    """Build config from CLI options; unset options defer to config files."""
    overrides = {
        "project_path": str(path) if path is not None else None,
        "stats_file": str(stats) if stats is not None else None,
        "webpack_config": str(webpack_config) if webpack_config is not None else None,
        "render_events_file": str(render_events) if render_events is not None else None,
        "memory_snapshots_file": str(memory_snapshots) if memory_snapshots is not None else None,
        "output_dir": str(output) if output is not None else None,
        "formats": parse_formats(formats),
        "analyze_bundle": bundle,
        "analyze_rerenders": rerenders,
        "analyze_memory": memory,
        "verbose": verbose,
        "quiet": quiet,
    }
    return load_config(config_file=config, **overrides)
