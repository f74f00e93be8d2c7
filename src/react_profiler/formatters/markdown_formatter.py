"""Markdown report formatter."""

from ..models import AnalysisResult, Recommendation
from ..units import format_bytes
from .base import BaseFormatter

TABLE_ROWS = 10


def _cell(text: str) -> str:
    """Table cell text with pipes escaped so the row keeps its columns."""
    return text.replace("|", "\\|")


def _recommendation_lines(recommendations: list[Recommendation], section: str) -> list[str]:
    if not recommendations:
        return []

    lines = [f"### {section} Recommendations", ""]

    critical = [r for r in recommendations if r.severity == "critical"]
    warnings = [r for r in recommendations if r.severity == "warning"]

    if critical:
        lines += ["#### 🔴 Critical Issues", ""]
        for i, rec in enumerate(critical, 1):
            lines += _item(i, rec)
            if rec.code_example:
                lines.append("   ```javascript")
                lines += [f"   {line}" for line in rec.code_example.splitlines()]
                lines.append("   ```")
            lines.append("")

    # warnings are listed without code examples to keep the report short
    if warnings:
        lines += ["#### 🟡 Warnings", ""]
        for i, rec in enumerate(warnings, 1):
            lines += _item(i, rec)
            lines.append("")

    return lines


def _item(index: int, rec: Recommendation) -> list[str]:
    return [
        f"{index}. **{rec.title}**",
        f"   - {rec.description}",
        f"   - **Fix:** {rec.fix}",
        f"   - **Impact:** {rec.estimated_impact}",
    ]


class MarkdownFormatter(BaseFormatter):
    """Human-readable report for pull requests and wikis."""

    filename = "report.md"

    def render(self, result: AnalysisResult) -> None:
        print(self.format(result))

    def format(self, result: AnalysisResult) -> str:
        summary = result.summary
        lines = [
            "# React Performance Analysis Report",
            "",
            f"**Generated:** {result.timestamp:%Y-%m-%d %H:%M:%S}",
            f"**Project:** {result.project_path}",
            "",
            "## Summary",
            "",
            f"- **Total Issues:** {summary.total_issues}",
            f"- **Critical Issues:** {summary.critical_issues}",
            f"- **Warnings:** {summary.warnings}",
            "",
        ]

        if result.failures:
            lines += ["## Failed Analyzers", ""]
            lines += [f"- **{name}:** {message}" for name, message in result.failures.items()]
            lines.append("")

        lines += self._bundle(result)
        lines += self._rerenders(result)
        lines += self._memory(result)
        return "\n".join(lines)

    def _bundle(self, result: AnalysisResult) -> list[str]:
        bundle = result.analyses.bundle
        if bundle is None:
            return []

        lines = [
            "## Bundle Analysis",
            "",
            f"- **Total Size:** {format_bytes(bundle.total_size)}",
            f"- **Chunks:** {len(bundle.chunks)}",
            f"- **Large Modules:** {len(bundle.large_modules)}",
            f"- **Duplicate Modules:** {len(bundle.duplicates)}",
            "",
            "### Asset Breakdown",
            "",
            f"- JavaScript: {format_bytes(bundle.metrics.js_size)}",
            f"- CSS: {format_bytes(bundle.metrics.css_size)}",
            f"- Images: {format_bytes(bundle.metrics.image_size)}",
            f"- Other: {format_bytes(bundle.metrics.other_size)}",
            "",
        ]

        if bundle.chunks:
            lines += ["### Top Chunks", "", "| Chunk | Size | Modules |", "|-------|------|---------|"]
            for chunk in bundle.chunks[:TABLE_ROWS]:
                lines.append(
                    f"| {_cell(chunk.name)} | {format_bytes(chunk.size)} | {chunk.modules} |"
                )
            lines.append("")

        if bundle.large_modules:
            lines += ["### Large Modules", "", "| Module | Size |", "|--------|------|"]
            for module in bundle.large_modules[:TABLE_ROWS]:
                lines.append(f"| {_cell(module.name)} | {format_bytes(module.size)} |")
            lines.append("")

        return lines + _recommendation_lines(bundle.recommendations, "Bundle")

    def _rerenders(self, result: AnalysisResult) -> list[str]:
        rerenders = result.analyses.rerenders
        if rerenders is None:
            return []

        lines = [
            "## Re-render Analysis",
            "",
            f"- **Total Re-renders:** {rerenders.total_rerenders}",
            f"- **Unnecessary Re-renders:** {rerenders.unnecessary_rerenders}",
            f"- **Components Analyzed:** {len(rerenders.components)}",
            "",
        ]

        if rerenders.components:
            lines += [
                "### Top Re-rendering Components",
                "",
                "| Component | Renders | Avg Time | Unnecessary |",
                "|-----------|---------|----------|-------------|",
            ]
            for comp in rerenders.components[:TABLE_ROWS]:
                flag = "⚠️ Yes" if comp.is_unnecessary else "✅ No"
                lines.append(
                    f"| {_cell(comp.name)} | {comp.render_count} | {comp.avg_render_time:.2f}ms | {flag} |"
                )
            lines.append("")

        return lines + _recommendation_lines(rerenders.recommendations, "Re-render")

    def _memory(self, result: AnalysisResult) -> list[str]:
        memory = result.analyses.memory
        if memory is None:
            return []

        lines = [
            "## Memory Analysis",
            "",
            f"- **Heap Size:** {format_bytes(memory.heap_size)}",
            f"- **Retained Size:** {format_bytes(memory.retained_size)}",
            f"- **Memory Leaks Found:** {len(memory.leaks)}",
            "",
        ]

        if memory.leaks:
            lines += ["### Memory Issues", ""]
            for leak in memory.leaks:
                lines += [
                    f"#### {leak.type} ({leak.severity})",
                    "",
                    leak.description,
                    "",
                    f"**Retained Size:** {format_bytes(leak.retained_size)}",
                    "",
                ]

        return lines + _recommendation_lines(memory.recommendations, "Memory")
