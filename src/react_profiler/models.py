"""Data models for React Profiler.

Input records (``BuildStatistics``, ``RenderEvent``, ``MemorySnapshot``) are
decoded leniently from the JSON the collectors produce: missing numeric
fields become 0 and missing lists become empty. Output records serialize to
plain dicts with camelCase keys via ``to_dict()`` so renderers never need to
know about the dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime
from typing import Any, Literal, Optional

Severity = Literal["critical", "warning", "info"]
CauseType = Literal["props", "state", "context", "parent"]

SEVERITIES: tuple[str, ...] = ("critical", "warning", "info")
CAUSE_TYPES: tuple[str, ...] = ("props", "state", "context", "parent")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def to_plain(value: Any) -> Any:
    """Convert dataclasses (recursively) into JSON-ready structures.

    Field names are camelCased unless a field carries ``metadata["key"]``.
    ``None`` optional fields are dropped so absent values stay absent.
    """
    if is_dataclass(value) and not isinstance(value, type):
        out: dict[str, Any] = {}
        for f in fields(value):
            item = getattr(value, f.name)
            if item is None:
                continue
            out[f.metadata.get("key", _camel(f.name))] = to_plain(item)
        return out
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value


def _num(value: Any) -> float:
    """Coerce a possibly-missing numeric field to a number (0 when absent)."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


# ---------------------------------------------------------------------------
# Bundler build statistics (input)
# ---------------------------------------------------------------------------


@dataclass
class Asset:
    name: str
    size: float = 0


@dataclass
class Chunk:
    id: Optional[str]
    names: list[str] = field(default_factory=list)
    size: float = 0
    files: list[str] = field(default_factory=list)
    initial: bool = False
    module_count: int = 0
    parents: list[str] = field(default_factory=list)


@dataclass
class Module:
    name: str
    size: float = 0
    identifier: str = ""
    depth: int = 0
    reasons: list[str] = field(default_factory=list)


@dataclass
class BuildStatistics:
    """Read-only view of a bundler's ``--json`` statistics output."""

    assets: list[Asset] = field(default_factory=list)
    chunks: list[Chunk] = field(default_factory=list)
    modules: list[Module] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BuildStatistics:
        """Decode webpack-style stats.

        Multi-compiler output nests each compilation under ``children``; those
        are flattened into one statistics object.
        """
        stats = cls(
            assets=[_asset(a) for a in data.get("assets") or [] if isinstance(a, dict)],
            chunks=[_chunk(c) for c in data.get("chunks") or [] if isinstance(c, dict)],
            modules=[_module(m) for m in data.get("modules") or [] if isinstance(m, dict)],
        )
        for child in data.get("children") or []:
            if isinstance(child, dict):
                nested = cls.from_dict(child)
                stats.assets.extend(nested.assets)
                stats.chunks.extend(nested.chunks)
                stats.modules.extend(nested.modules)
        return stats


def _asset(raw: dict[str, Any]) -> Asset:
    return Asset(name=str(raw.get("name") or ""), size=_num(raw.get("size")))


def _chunk(raw: dict[str, Any]) -> Chunk:
    modules = raw.get("modules")
    if isinstance(modules, list):
        module_count = len(modules)
    else:
        module_count = int(_num(modules))
    chunk_id = raw.get("id")
    return Chunk(
        id=None if chunk_id is None else str(chunk_id),
        names=_str_list(raw.get("names")),
        size=_num(raw.get("size")),
        files=_str_list(raw.get("files")),
        initial=bool(raw.get("initial", False)),
        module_count=module_count,
        parents=_str_list(raw.get("parents")),
    )


def _module(raw: dict[str, Any]) -> Module:
    reasons = []
    for reason in raw.get("reasons") or []:
        if isinstance(reason, dict):
            reasons.append(str(reason.get("moduleName") or "unknown"))
        else:
            reasons.append(str(reason) if reason else "unknown")
    return Module(
        name=str(raw.get("name") or ""),
        size=_num(raw.get("size")),
        identifier=str(raw.get("identifier") or ""),
        depth=int(_num(raw.get("depth"))),
        reasons=reasons,
    )


# ---------------------------------------------------------------------------
# Runtime telemetry (input)
# ---------------------------------------------------------------------------


@dataclass
class RenderEvent:
    component_name: str
    timestamp: float
    duration: float
    cause_type: str
    details: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderEvent:
        return cls(
            component_name=str(data.get("componentName") or "Anonymous"),
            timestamp=_num(data.get("timestamp")),
            duration=_num(data.get("duration")),
            cause_type=str(data.get("causeType") or "parent"),
            details=str(data.get("details") or ""),
        )


@dataclass
class MemorySnapshot:
    timestamp: float
    heap_used: float
    heap_total: float = 0
    external: float = 0
    array_buffers: float = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MemorySnapshot:
        return cls(
            timestamp=_num(data.get("timestamp")),
            heap_used=_num(data.get("heapUsed")),
            heap_total=_num(data.get("heapTotal")),
            external=_num(data.get("external")),
            array_buffers=_num(data.get("arrayBuffers")),
        )


# ---------------------------------------------------------------------------
# Shared output unit
# ---------------------------------------------------------------------------


@dataclass
class Recommendation:
    severity: Severity
    category: str  # "bundle-size", "slow-renders", ... free-form, not unique
    title: str
    description: str
    fix: str
    estimated_impact: str
    code_example: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return to_plain(self)


# ---------------------------------------------------------------------------
# Bundle analysis
# ---------------------------------------------------------------------------


@dataclass
class ChunkSummary:
    name: str
    size: float
    files: list[str]
    modules: int
    is_initial: bool
    parent_chunks: list[str]


@dataclass
class ModuleSummary:
    name: str
    size: float
    path: str
    reasons: list[str]
    depth: int


@dataclass
class DuplicateGroup:
    name: str
    instances: int
    total_size: float
    locations: list[str]


@dataclass
class AssetMetrics:
    js_size: float = 0
    css_size: float = 0
    image_size: float = 0
    other_size: float = 0

    @property
    def total(self) -> float:
        return self.js_size + self.css_size + self.image_size + self.other_size


@dataclass
class BundleAnalysis:
    total_size: float
    chunks: list[ChunkSummary]
    large_modules: list[ModuleSummary]
    duplicates: list[DuplicateGroup]
    metrics: AssetMetrics
    recommendations: list[Recommendation]

    def to_dict(self) -> dict[str, Any]:
        return to_plain(self)


# ---------------------------------------------------------------------------
# Re-render analysis
# ---------------------------------------------------------------------------


@dataclass
class RerenderCause:
    type: str
    count: int
    details: str


@dataclass
class ComponentRerenderSummary:
    name: str
    render_count: int
    avg_render_time: float
    causes: list[RerenderCause]
    is_unnecessary: bool  # heuristic: frequent but cheap renders
    location: Optional[str] = None

    def cause_count(self, cause_type: str) -> int:
        """Events attributed to ``cause_type`` (0 when never observed)."""
        for cause in self.causes:
            if cause.type == cause_type:
                return cause.count
        return 0


@dataclass
class RerenderAnalysis:
    components: list[ComponentRerenderSummary]
    total_rerenders: int
    unnecessary_rerenders: int
    recommendations: list[Recommendation]

    def to_dict(self) -> dict[str, Any]:
        return to_plain(self)


# ---------------------------------------------------------------------------
# Memory analysis
# ---------------------------------------------------------------------------


@dataclass
class LeakedObject:
    constructor_name: str = field(metadata={"key": "constructor"})
    count: int
    retained_size: float
    location: Optional[str] = None


@dataclass
class MemoryLeak:
    type: str  # "consistent-growth", "large-increase", "detached-dom", ...
    description: str
    severity: Severity
    retained_size: float
    objects: list[LeakedObject] = field(default_factory=list)


@dataclass
class MemoryAnalysis:
    snapshots: list[MemorySnapshot]
    leaks: list[MemoryLeak]
    heap_size: float
    retained_size: float
    recommendations: list[Recommendation]

    def to_dict(self) -> dict[str, Any]:
        return to_plain(self)


# ---------------------------------------------------------------------------
# Run result
# ---------------------------------------------------------------------------


@dataclass
class AnalysisSummary:
    total_issues: int = 0
    critical_issues: int = 0
    warnings: int = 0
    suggestions: list[str] = field(default_factory=list)


@dataclass
class Analyses:
    bundle: Optional[BundleAnalysis] = None
    rerenders: Optional[RerenderAnalysis] = None
    memory: Optional[MemoryAnalysis] = None


@dataclass
class AnalysisResult:
    """Everything one run produced; ``summary`` is derived, see ``summary.py``."""

    project_path: str
    timestamp: datetime = field(default_factory=datetime.now)
    analyses: Analyses = field(default_factory=Analyses)
    summary: AnalysisSummary = field(default_factory=AnalysisSummary)
    failures: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = to_plain(self)
        if not self.failures:
            data.pop("failures", None)
        return data
