"""Merge per-analyzer recommendations into the run summary."""

from __future__ import annotations

from .models import AnalysisResult, AnalysisSummary, Recommendation


def collect_recommendations(result: AnalysisResult) -> list[Recommendation]:
    """All recommendations in fixed analyzer order: bundle, rerenders, memory."""
    recommendations: list[Recommendation] = []
    analyses = result.analyses
    for analysis in (analyses.bundle, analyses.rerenders, analyses.memory):
        if analysis is not None:
            recommendations.extend(analysis.recommendations)
    return recommendations


def calculate_summary(result: AnalysisResult) -> AnalysisSummary:
    """Recompute ``result.summary`` from the analyses present.

    The summary is always rebuilt from scratch, so calling this repeatedly
    yields the same counts.
    """
    recommendations = collect_recommendations(result)
    summary = AnalysisSummary(
        total_issues=len(recommendations),
        critical_issues=sum(1 for r in recommendations if r.severity == "critical"),
        warnings=sum(1 for r in recommendations if r.severity == "warning"),
        suggestions=[f"{r.category}: {r.title}" for r in recommendations],
    )
    result.summary = summary
    return summary
