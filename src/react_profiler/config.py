"""Configuration loading and management for React Profiler.

Configuration sources are merged in priority order:
    1. Defaults (defined in ProfilerConfig / ThresholdConfig)
    2. Global config (~/.react-profiler.toml)
    3. Project config (./react-profiler.toml)
    4. Explicit config file
    5. Environment variables (REACT_PROFILER_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, output_dir="reports")
    >>> config.verbosity
    'verbose'
    >>> config.thresholds.bundle_size_bytes
    500000
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError, InvalidPathError

Verbosity = Literal["quiet", "normal", "verbose"]

CONFIG_FILENAME = "react-profiler.toml"
ENV_PREFIX = "REACT_PROFILER_"
REPORT_FORMATS = ("json", "html", "markdown")


@dataclass(frozen=True)
class ThresholdConfig:
    """Rule thresholds shared by the three analyzers.

    Defaults are the fixed limits the recommendations are written against;
    they can be tightened or relaxed from the ``[thresholds]`` table.

    Attributes:
        Bundle:
            large_module_bytes: Modules strictly above this are "large"
            large_module_limit: Keep at most this many large modules
            bundle_size_bytes: Total asset size above this is critical
            chunk_size_bytes: Chunks above this get a warning each
            top_module_recommendations: Large modules turned into advice
            top_duplicate_recommendations: Duplicate groups turned into advice
            include_vendor_duplicates: Also group modules whose name mentions
                node_modules/webpack (excluded by default)

        Re-renders:
            unnecessary_render_count: Render count above which cheap renders
                are flagged as unnecessary
            unnecessary_render_ms: Average duration below which renders count
                as cheap
            excessive_render_count: Render count above which a component is
                checked for prop/state churn
            excessive_render_candidates: How many such components are checked
            cause_count: Per-cause event count that triggers advice
            slow_render_ms: Average duration above which renders are slow
                (one 60fps frame)
            slow_render_candidates: How many slow components are reported

        Memory:
            memory_growth_bytes: Mean heap delta per sample that signals a leak
            memory_increase_pct: First-to-last heap growth (percent) to warn on
            high_memory_bytes: Final heap size that warrants advice
    """

    # === Bundle ===
    large_module_bytes: int = 50_000
    large_module_limit: int = 20
    bundle_size_bytes: int = 500_000
    chunk_size_bytes: int = 250_000
    top_module_recommendations: int = 3
    top_duplicate_recommendations: int = 3
    include_vendor_duplicates: bool = False

    # === Re-renders ===
    unnecessary_render_count: int = 5
    unnecessary_render_ms: float = 5.0
    excessive_render_count: int = 10
    excessive_render_candidates: int = 5
    cause_count: int = 5
    slow_render_ms: float = 16.0
    slow_render_candidates: int = 3

    # === Memory ===
    memory_growth_bytes: int = 1_048_576  # 1 MiB
    memory_increase_pct: float = 50.0
    high_memory_bytes: int = 52_428_800  # 50 MiB

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        non_negative = [
            "large_module_bytes",
            "bundle_size_bytes",
            "chunk_size_bytes",
            "unnecessary_render_count",
            "unnecessary_render_ms",
            "excessive_render_count",
            "cause_count",
            "slow_render_ms",
            "memory_growth_bytes",
            "memory_increase_pct",
            "high_memory_bytes",
        ]
        for field_name in non_negative:
            if getattr(self, field_name) < 0:
                raise ValueError(f"{field_name} must be non-negative")

        limits = [
            "large_module_limit",
            "top_module_recommendations",
            "top_duplicate_recommendations",
            "excessive_render_candidates",
            "slow_render_candidates",
        ]
        for field_name in limits:
            if getattr(self, field_name) < 0:
                raise ValueError(f"{field_name} must be at least 0")


DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class ProfilerConfig:
    """Configuration for one profiling run.

    Attributes:
        Inputs:
            project_path: Front-end project root
            stats_file: Pre-built bundler statistics (``webpack --json``)
            webpack_config: Bundler config used when no stats file is given
                (defaults to ``<project>/webpack.config.js``)
            render_events_file: Captured render events (JSON)
            memory_snapshots_file: Captured heap samples (JSON)
            webpack_timeout_seconds: Limit for the bundler subprocess

        Analyzer selection:
            analyze_bundle, analyze_rerenders, analyze_memory

        Output:
            output_dir: Directory reports are written into
            formats: Report formats to write
            verbosity: Logging verbosity level
    """

    project_path: str = "."
    stats_file: Optional[str] = None
    webpack_config: Optional[str] = None
    render_events_file: Optional[str] = None
    memory_snapshots_file: Optional[str] = None
    webpack_timeout_seconds: int = 300

    analyze_bundle: bool = True
    analyze_rerenders: bool = True
    analyze_memory: bool = True

    output_dir: str = "./profiler-reports"
    formats: list[str] = field(default_factory=lambda: list(REPORT_FORMATS))
    verbosity: Verbosity = "normal"

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.webpack_timeout_seconds < 1:
            raise ValueError("webpack_timeout_seconds must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of quiet, normal, verbose")
        unknown = [f for f in self.formats if f not in REPORT_FORMATS]
        if unknown:
            raise ValueError(
                f"unknown report format(s) {', '.join(unknown)}; "
                f"choose from {', '.join(REPORT_FORMATS)}"
            )

    @property
    def project_root(self) -> Path:
        return Path(self.project_path).expanduser().resolve()

    @property
    def webpack_config_path(self) -> Path:
        """Explicit bundler config, or the conventional file in the project."""
        if self.webpack_config:
            return Path(self.webpack_config).expanduser().resolve()
        return self.project_root / "webpack.config.js"

    def validate_paths(self) -> None:
        """Check the project root exists before any analyzer runs."""
        root = self.project_root
        if not root.exists():
            raise InvalidPathError(root, "project path does not exist")
        if not root.is_dir():
            raise InvalidPathError(root, "project path is not a directory")


def load_config(config_file: Optional[Path] = None, **overrides) -> ProfilerConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options do not mask files.

    Returns:
        Validated ProfilerConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing, or a
            value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        merged.update(_load_section(global_config, "global config"))

    project_config = Path.cwd() / CONFIG_FILENAME
    if project_config.exists():
        merged.update(_load_section(project_config, "project config"))

    if config_file is not None:
        config_file = Path(config_file)
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_section(config_file, "config file"))

    merged.update(_load_env_vars())

    overrides = {k: v for k, v in overrides.items() if v is not None}
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    # Threshold overrides merge into the file table instead of replacing it
    threshold_overrides = overrides.pop("thresholds", None)
    merged.update(overrides)

    thresholds_dict = merged.pop("thresholds", None) or {}
    if not isinstance(thresholds_dict, dict):
        raise InvalidConfigError("thresholds", thresholds_dict, "must be a TOML table")
    if isinstance(threshold_overrides, ThresholdConfig):
        threshold_overrides = {
            name: getattr(threshold_overrides, name)
            for name in ThresholdConfig.__dataclass_fields__
        }
    if isinstance(threshold_overrides, dict):
        thresholds_dict = {**thresholds_dict, **threshold_overrides}
    try:
        merged["thresholds"] = ThresholdConfig(**thresholds_dict)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid [thresholds] config: {e}") from e

    try:
        return ProfilerConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _load_section(path: Path, label: str) -> dict:
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {label} '{path}': {e}") from e

    # [analyzers] bundle/rerenders/memory map onto the analyze_* flags
    analyzers = data.pop("analyzers", None)
    if isinstance(analyzers, dict):
        for name in ("bundle", "rerenders", "memory"):
            if name in analyzers:
                data[f"analyze_{name}"] = analyzers[name]
    return data


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from REACT_PROFILER_* environment variables.

    Every scalar ProfilerConfig field has a matching variable, for example
    REACT_PROFILER_STATS_FILE, REACT_PROFILER_ANALYZE_MEMORY (true/false) or
    REACT_PROFILER_WEBPACK_TIMEOUT_SECONDS. REACT_PROFILER_FORMATS takes a
    comma-separated list.

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    type_hints = get_type_hints(ProfilerConfig)

    result: dict[str, Any] = {}

    for field_name in ProfilerConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}") from e
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is list:
        return [part.strip() for part in value.split(",") if part.strip()]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If no TOML parser is available
        Exception: If TOML parsing fails
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)


DEFAULT_CONFIG_TEMPLATE = """\
# React Profiler configuration.
# Every key is optional; command-line flags take precedence.

# Pre-built bundler statistics (webpack --json > stats.json).
# stats_file = "stats.json"
webpack_config = "./webpack.config.js"

# Runtime captures recorded by your browser collector.
# render_events_file = "profiler-captures/render-events.json"
# memory_snapshots_file = "profiler-captures/memory.json"

output_dir = "./profiler-reports"
formats = ["json", "html", "markdown"]

[analyzers]
bundle = true
rerenders = true
memory = true

[thresholds]
bundle_size_bytes = 500000
chunk_size_bytes = 250000
large_module_bytes = 50000
unnecessary_render_count = 5
slow_render_ms = 16.0
memory_growth_bytes = 1048576
high_memory_bytes = 52428800
"""


def write_default_config(directory: Path, force: bool = False) -> Path:
    """Write the commented starter config into ``directory``.

    Raises:
        ConfigurationError: If the file already exists and ``force`` is False
    """
    target = Path(directory) / CONFIG_FILENAME
    if target.exists() and not force:
        raise ConfigurationError(
            f"Config file already exists: {target}", details={"hint": "use --force"}
        )
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    return target
