"""Bundle composition analysis over bundler build statistics.

Reduces a ``BuildStatistics`` object to chunk, large-module, duplicate-module
and asset-type summaries, then maps them through the bundle thresholds into
recommendations. Pure transform: no I/O, never raises on well-typed input.
"""

from __future__ import annotations

import re
from typing import Optional

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..logging_config import get_logger
from ..models import (
    AssetMetrics,
    BuildStatistics,
    BundleAnalysis,
    ChunkSummary,
    DuplicateGroup,
    ModuleSummary,
    Recommendation,
)
from ..units import format_bytes
from . import remedies

logger = get_logger(__name__)

_SOURCE_STEM = re.compile(r"([^/\\]+)\.[jt]sx?$")
_IMAGE_SUFFIX = re.compile(r"\.(png|jpg|jpeg|gif|svg|webp)$")

# Virtual runtime and vendor entries skipped by duplicate grouping
_EXCLUDED_MARKERS = ("webpack", "node_modules")


def analyze_bundle(
    stats: BuildStatistics, thresholds: Optional[ThresholdConfig] = None
) -> BundleAnalysis:
    """Aggregate build statistics into a ``BundleAnalysis``."""
    thresholds = thresholds or DEFAULT_THRESHOLDS

    total_size = sum(asset.size or 0 for asset in stats.assets)
    chunks = summarize_chunks(stats)
    large_modules = find_large_modules(stats, thresholds)
    duplicates = find_duplicate_modules(stats, thresholds)
    metrics = calculate_asset_metrics(stats)
    recommendations = bundle_recommendations(
        total_size, chunks, large_modules, duplicates, thresholds
    )

    logger.debug(
        "Bundle: %d assets, %d chunks, %d large modules, %d duplicate groups",
        len(stats.assets),
        len(chunks),
        len(large_modules),
        len(duplicates),
    )

    return BundleAnalysis(
        total_size=total_size,
        chunks=chunks,
        large_modules=large_modules,
        duplicates=duplicates,
        metrics=metrics,
        recommendations=recommendations,
    )


def summarize_chunks(stats: BuildStatistics) -> list[ChunkSummary]:
    """One summary per chunk, largest first (stable on ties)."""
    summaries = [
        ChunkSummary(
            name=(chunk.names[0] if chunk.names else None) or chunk.id or "unknown",
            size=chunk.size or 0,
            files=list(chunk.files),
            modules=chunk.module_count,
            is_initial=chunk.initial,
            parent_chunks=list(chunk.parents),
        )
        for chunk in stats.chunks
    ]
    return sorted(summaries, key=lambda c: c.size, reverse=True)


def find_large_modules(
    stats: BuildStatistics, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> list[ModuleSummary]:
    """Modules strictly over ``large_module_bytes``, largest first, capped."""
    large = [
        ModuleSummary(
            name=module.name or "unknown",
            size=module.size or 0,
            path=module.identifier,
            reasons=list(module.reasons),
            depth=module.depth,
        )
        for module in stats.modules
        if (module.size or 0) > thresholds.large_module_bytes
    ]
    large.sort(key=lambda m: m.size, reverse=True)
    return large[: thresholds.large_module_limit]


def module_stem(name: str) -> str:
    """Base filename before a .js/.jsx/.ts/.tsx extension, else the name."""
    match = _SOURCE_STEM.search(name)
    return match.group(1) if match else name


def find_duplicate_modules(
    stats: BuildStatistics, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> list[DuplicateGroup]:
    """Group modules sharing a base filename; keep groups seen more than once.

    Modules whose raw name mentions ``webpack`` or ``node_modules`` are left
    out unless ``include_vendor_duplicates`` is set. That exclusion also hides
    repeated copies of third-party packages, so when it suppresses a repeated
    stem a warning names how many were hidden.
    """
    groups: dict[str, DuplicateGroup] = {}
    excluded_stems: dict[str, int] = {}

    for module in stats.modules:
        stem = module_stem(module.name or "")
        if not stem:
            continue
        if not thresholds.include_vendor_duplicates and any(
            marker in module.name for marker in _EXCLUDED_MARKERS
        ):
            excluded_stems[stem] = excluded_stems.get(stem, 0) + 1
            continue

        group = groups.get(stem)
        if group is None:
            groups[stem] = DuplicateGroup(
                name=stem,
                instances=1,
                total_size=module.size or 0,
                locations=[module.identifier],
            )
        else:
            group.instances += 1
            group.total_size += module.size or 0
            group.locations.append(module.identifier)

    hidden = sorted(stem for stem, count in excluded_stems.items() if count > 1)
    if hidden:
        logger.warning(
            "%d repeated vendor module name(s) excluded from duplicate detection "
            "(%s); set thresholds.include_vendor_duplicates to report them",
            len(hidden),
            ", ".join(hidden[:5]),
        )

    duplicates = [g for g in groups.values() if g.instances > 1]
    return sorted(duplicates, key=lambda g: g.total_size, reverse=True)


def calculate_asset_metrics(stats: BuildStatistics) -> AssetMetrics:
    """Partition every asset's size into exactly one type bucket."""
    metrics = AssetMetrics()
    for asset in stats.assets:
        size = asset.size or 0
        name = asset.name or ""
        if name.endswith(".js"):
            metrics.js_size += size
        elif name.endswith(".css"):
            metrics.css_size += size
        elif _IMAGE_SUFFIX.search(name):
            metrics.image_size += size
        else:
            metrics.other_size += size
    return metrics


def bundle_recommendations(
    total_size: float,
    chunks: list[ChunkSummary],
    large_modules: list[ModuleSummary],
    duplicates: list[DuplicateGroup],
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> list[Recommendation]:
    """Apply the bundle rules in order; every matching rule contributes."""
    recommendations: list[Recommendation] = []

    if total_size > thresholds.bundle_size_bytes:
        limit = f"{thresholds.bundle_size_bytes / 1000:g}KB"
        recommendations.append(
            Recommendation(
                severity="critical",
                category="bundle-size",
                title="Bundle size exceeds recommended limit",
                description=(
                    f"Total bundle size is {format_bytes(total_size)}, "
                    f"which exceeds the recommended {limit} limit."
                ),
                fix="Implement code splitting, lazy loading, and tree shaking to reduce bundle size.",
                code_example=remedies.CODE_SPLITTING,
                estimated_impact="Could reduce bundle size by 20-40%",
            )
        )

    for chunk in chunks:
        if chunk.size > thresholds.chunk_size_bytes:
            recommendations.append(
                Recommendation(
                    severity="warning",
                    category="chunk-size",
                    title=f"Large chunk detected: {chunk.name}",
                    description=(
                        f'Chunk "{chunk.name}" is {format_bytes(chunk.size)}, '
                        "which may impact initial load time."
                    ),
                    fix="Split this chunk further or lazy load it if it's not needed immediately.",
                    estimated_impact="Could improve initial load time by 1-2 seconds",
                )
            )

    for module in large_modules[: thresholds.top_module_recommendations]:
        recommendations.append(
            Recommendation(
                severity="warning",
                category="large-module",
                title=f"Large module: {module.name}",
                description=(
                    f'Module "{module.name}" is {format_bytes(module.size)}. '
                    "Consider alternatives or lazy loading."
                ),
                fix="Look for lighter alternatives or use dynamic imports to load this module on demand.",
                code_example=remedies.DYNAMIC_IMPORT,
                estimated_impact=f"Could reduce initial bundle by {format_bytes(module.size)}",
            )
        )

    for dup in duplicates[: thresholds.top_duplicate_recommendations]:
        savings = dup.total_size - dup.total_size / dup.instances
        recommendations.append(
            Recommendation(
                severity="warning",
                category="duplicate-modules",
                title=f"Duplicate module: {dup.name}",
                description=(
                    f'Module "{dup.name}" appears {dup.instances} times, '
                    f"wasting {format_bytes(dup.total_size)}."
                ),
                fix=(
                    "Configure webpack to deduplicate modules or ensure consistent "
                    "versioning across dependencies."
                ),
                code_example=remedies.DEDUPE_SPLIT_CHUNKS,
                estimated_impact=f"Could save {format_bytes(savings)}",
            )
        )

    return recommendations
