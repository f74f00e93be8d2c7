"""Component re-render analysis over captured render events.

Events are grouped by component name. Each group records how often it
rendered, how long renders took on average and which causes triggered them.
Frequent-but-cheap components are flagged as unnecessary re-renders.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..logging_config import get_logger
from ..models import (
    ComponentRerenderSummary,
    Recommendation,
    RenderEvent,
    RerenderAnalysis,
    RerenderCause,
)
from . import remedies

logger = get_logger(__name__)


def analyze_rerenders(
    events: Sequence[RenderEvent], thresholds: Optional[ThresholdConfig] = None
) -> RerenderAnalysis:
    """Aggregate render events into a ``RerenderAnalysis``."""
    thresholds = thresholds or DEFAULT_THRESHOLDS

    components = summarize_components(events, thresholds)
    unnecessary = sum(c.render_count for c in components if c.is_unnecessary)
    recommendations = rerender_recommendations(components, thresholds)

    logger.debug(
        "Re-renders: %d events across %d components, %d unnecessary",
        len(events),
        len(components),
        unnecessary,
    )

    return RerenderAnalysis(
        components=components,
        total_rerenders=len(events),
        unnecessary_rerenders=unnecessary,
        recommendations=recommendations,
    )


def summarize_components(
    events: Sequence[RenderEvent], thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> list[ComponentRerenderSummary]:
    """One summary per component name, most renders first (stable on ties)."""
    grouped: dict[str, list[RenderEvent]] = {}
    for event in events:
        grouped.setdefault(event.component_name, []).append(event)

    summaries = []
    for name, group in grouped.items():
        count = len(group)
        avg = sum(e.duration for e in group) / count
        summaries.append(
            ComponentRerenderSummary(
                name=name,
                render_count=count,
                avg_render_time=avg,
                causes=_causes(group),
                # heuristic: many renders that each finish quickly
                is_unnecessary=(
                    count > thresholds.unnecessary_render_count
                    and avg < thresholds.unnecessary_render_ms
                ),
            )
        )
    return sorted(summaries, key=lambda c: c.render_count, reverse=True)


def _causes(group: list[RenderEvent]) -> list[RerenderCause]:
    # first-seen order; details come from the first event of each cause
    causes: dict[str, RerenderCause] = {}
    for event in group:
        cause = causes.get(event.cause_type)
        if cause is None:
            causes[event.cause_type] = RerenderCause(
                type=event.cause_type, count=1, details=event.details
            )
        else:
            cause.count += 1
    return list(causes.values())


def rerender_recommendations(
    components: list[ComponentRerenderSummary],
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> list[Recommendation]:
    """Frequency rules for the busiest components, then slow-render rules."""
    recommendations: list[Recommendation] = []

    frequent = [c for c in components if c.render_count > thresholds.excessive_render_count]
    for component in frequent[: thresholds.excessive_render_candidates]:
        props = component.cause_count("props")
        if props > thresholds.cause_count:
            recommendations.append(
                Recommendation(
                    severity="warning",
                    category="excessive-renders",
                    title=f'Component "{component.name}" re-renders frequently',
                    description=(
                        f"This component rendered {component.render_count} times, "
                        "often due to prop changes."
                    ),
                    fix=(
                        "Use React.memo to prevent unnecessary re-renders when props "
                        "haven't changed."
                    ),
                    code_example=remedies.component_snippet(
                        remedies.MEMO_TEMPLATE, component.name
                    ),
                    estimated_impact=(
                        f"Could reduce renders by {math.floor(component.render_count * 0.6)} times"
                    ),
                )
            )

        state = component.cause_count("state")
        if state > thresholds.cause_count:
            recommendations.append(
                Recommendation(
                    severity="warning",
                    category="state-updates",
                    title=f'Component "{component.name}" has frequent state updates',
                    description=f"State changes are causing {state} re-renders.",
                    fix=(
                        "Consider batching state updates or using useReducer for "
                        "complex state logic."
                    ),
                    code_example=remedies.component_snippet(
                        remedies.REDUCER_TEMPLATE, component.name
                    ),
                    estimated_impact="Could reduce renders by 50-70%",
                )
            )

    slow = [c for c in components if c.avg_render_time > thresholds.slow_render_ms]
    for component in slow[: thresholds.slow_render_candidates]:
        recommendations.append(
            Recommendation(
                severity="critical",
                category="slow-renders",
                title=f'Component "{component.name}" renders slowly',
                description=(
                    f"Average render time is {component.avg_render_time:.2f}ms, "
                    "which may cause jank."
                ),
                fix=(
                    "Optimize expensive calculations with useMemo and useCallback, "
                    "or virtualize long lists."
                ),
                code_example=remedies.component_snippet(
                    remedies.MEMOIZE_TEMPLATE, component.name
                ),
                estimated_impact="Could reduce render time to under 16ms",
            )
        )

    return recommendations
