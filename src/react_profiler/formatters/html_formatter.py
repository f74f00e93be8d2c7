"""Self-contained HTML report.

Everything (styles included) is inlined so the file opens from any local
path. All text taken from the analysis is escaped.
"""

from html import escape

from ..models import AnalysisResult, Recommendation
from ..units import format_bytes
from .base import BaseFormatter

TABLE_ROWS = 10

_STYLE = """\
* { margin: 0; padding: 0; box-sizing: border-box; }
body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; line-height: 1.6; color: #333; background: #f5f5f5; }
.container { max-width: 1200px; margin: 0 auto; padding: 20px; }
header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 40px 20px; border-radius: 10px; margin-bottom: 30px; }
h1 { font-size: 2.5em; margin-bottom: 10px; }
.meta { opacity: 0.9; font-size: 0.95em; }
.summary { display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 20px; margin-bottom: 30px; }
.summary-card { background: white; padding: 25px; border-radius: 10px; box-shadow: 0 2px 10px rgba(0,0,0,0.1); }
.summary-card h3 { color: #667eea; font-size: 0.9em; text-transform: uppercase; margin-bottom: 10px; }
.summary-card .value { font-size: 2.5em; font-weight: bold; }
.section { background: white; padding: 30px; border-radius: 10px; margin-bottom: 30px; box-shadow: 0 2px 10px rgba(0,0,0,0.1); }
h2 { color: #667eea; margin-bottom: 20px; padding-bottom: 10px; border-bottom: 2px solid #667eea; }
.stat-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(150px, 1fr)); gap: 15px; margin: 20px 0; }
.stat { padding: 15px; background: #f8f9fa; border-radius: 8px; border-left: 4px solid #667eea; }
.stat-label { font-size: 0.85em; color: #666; margin-bottom: 5px; }
.stat-value { font-size: 1.5em; font-weight: bold; }
table { width: 100%; border-collapse: collapse; margin: 20px 0; }
th, td { padding: 12px; text-align: left; border-bottom: 1px solid #e0e0e0; }
th { background: #f8f9fa; font-weight: 600; color: #667eea; }
.recommendation { margin: 20px 0; padding: 20px; border-radius: 8px; border-left: 4px solid #ffc107; }
.recommendation.critical { background: #ffebee; border-left-color: #f44336; }
.recommendation.warning { background: #fff3e0; border-left-color: #ff9800; }
.recommendation.info { background: #e3f2fd; border-left-color: #2196f3; }
.severity { display: inline-block; padding: 4px 12px; border-radius: 4px; font-size: 0.85em; font-weight: bold; color: white; margin-bottom: 10px; }
.severity.critical { background: #f44336; }
.severity.warning { background: #ff9800; }
.severity.info { background: #2196f3; }
pre { background: #2d2d2d; color: #f8f8f2; padding: 15px; border-radius: 5px; overflow-x: auto; margin: 10px 0; }
code { font-family: "Courier New", Courier, monospace; font-size: 0.9em; }
.badge { display: inline-block; padding: 4px 10px; border-radius: 4px; font-size: 0.85em; font-weight: bold; }
.badge.yes { background: #ffebee; color: #c62828; }
.badge.no { background: #e8f5e9; color: #2e7d32; }
.failure { color: #c62828; }
"""


def _stat(label: str, value: object) -> str:
    return (
        f'<div class="stat"><div class="stat-label">{escape(label)}</div>'
        f'<div class="stat-value">{escape(str(value))}</div></div>'
    )


def _table(headers: list[str], rows: list[list[str]]) -> str:
    """Cells are inserted as-is; callers escape text cells."""
    head = "".join(f"<th>{escape(h)}</th>" for h in headers)
    body = "".join("<tr>" + "".join(f"<td>{c}</td>" for c in row) + "</tr>" for row in rows)
    return f"<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"


def _recommendations(recommendations: list[Recommendation]) -> str:
    if not recommendations:
        return ""
    cards = []
    for rec in recommendations:
        severity = escape(rec.severity)
        code = (
            f"<pre><code>{escape(rec.code_example)}</code></pre>" if rec.code_example else ""
        )
        cards.append(
            f'<div class="recommendation {severity}">'
            f'<span class="severity {severity}">{severity.upper()}</span>'
            f"<h4>{escape(rec.title)}</h4>"
            f"<p>{escape(rec.description)}</p>"
            f"<p><strong>Fix:</strong> {escape(rec.fix)}</p>"
            f"<p><strong>Estimated Impact:</strong> {escape(rec.estimated_impact)}</p>"
            f"{code}</div>"
        )
    return "<h3>Recommendations</h3>" + "".join(cards)


class HtmlFormatter(BaseFormatter):
    """Standalone HTML page with summary cards and one section per analyzer."""

    filename = "report.html"

    def render(self, result: AnalysisResult) -> None:
        print(self.format(result))

    def format(self, result: AnalysisResult) -> str:
        summary = result.summary
        failures = ""
        if result.failures:
            items = "".join(
                f"<li><strong>{escape(name)}:</strong> {escape(message)}</li>"
                for name, message in result.failures.items()
            )
            failures = f'<div class="section failure"><h2>Failed Analyzers</h2><ul>{items}</ul></div>'

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>React Performance Report</title>
<style>
{_STYLE}</style>
</head>
<body>
<div class="container">
<header>
  <h1>⚡ React Performance Report</h1>
  <div class="meta">
    <p>Generated: {result.timestamp:%Y-%m-%d %H:%M:%S}</p>
    <p>Project: {escape(result.project_path)}</p>
  </div>
</header>
<div class="summary">
  <div class="summary-card"><h3>Total Issues</h3><div class="value">{summary.total_issues}</div></div>
  <div class="summary-card"><h3>Critical Issues</h3><div class="value" style="color: #f44336;">{summary.critical_issues}</div></div>
  <div class="summary-card"><h3>Warnings</h3><div class="value" style="color: #ff9800;">{summary.warnings}</div></div>
</div>
{failures}
{self._bundle(result)}
{self._rerenders(result)}
{self._memory(result)}
</div>
</body>
</html>
"""

    def _bundle(self, result: AnalysisResult) -> str:
        bundle = result.analyses.bundle
        if bundle is None:
            return ""

        chunks = ""
        if bundle.chunks:
            rows = [
                [
                    escape(c.name),
                    format_bytes(c.size),
                    str(c.modules),
                    "Initial" if c.is_initial else "Async",
                ]
                for c in bundle.chunks[:TABLE_ROWS]
            ]
            chunks = "<h3>Top Chunks</h3>" + _table(["Chunk", "Size", "Modules", "Type"], rows)

        m = bundle.metrics
        return (
            '<div class="section"><h2>📦 Bundle Analysis</h2>'
            '<div class="stat-grid">'
            + _stat("Total Size", format_bytes(bundle.total_size))
            + _stat("Chunks", len(bundle.chunks))
            + _stat("Large Modules", len(bundle.large_modules))
            + _stat("Duplicates", len(bundle.duplicates))
            + "</div><h3>Asset Breakdown</h3><div class=\"stat-grid\">"
            + _stat("JavaScript", format_bytes(m.js_size))
            + _stat("CSS", format_bytes(m.css_size))
            + _stat("Images", format_bytes(m.image_size))
            + _stat("Other", format_bytes(m.other_size))
            + "</div>"
            + chunks
            + _recommendations(bundle.recommendations)
            + "</div>"
        )

    def _rerenders(self, result: AnalysisResult) -> str:
        rerenders = result.analyses.rerenders
        if rerenders is None:
            return ""

        components = ""
        if rerenders.components:
            rows = [
                [
                    escape(c.name),
                    str(c.render_count),
                    f"{c.avg_render_time:.2f}ms",
                    '<span class="badge yes">⚠️ Yes</span>'
                    if c.is_unnecessary
                    else '<span class="badge no">✅ No</span>',
                ]
                for c in rerenders.components[:TABLE_ROWS]
            ]
            components = "<h3>Top Re-rendering Components</h3>" + _table(
                ["Component", "Renders", "Avg Time", "Unnecessary"], rows
            )

        return (
            '<div class="section"><h2>🔄 Re-render Analysis</h2>'
            '<div class="stat-grid">'
            + _stat("Total Re-renders", rerenders.total_rerenders)
            + _stat("Unnecessary", rerenders.unnecessary_rerenders)
            + _stat("Components", len(rerenders.components))
            + "</div>"
            + components
            + _recommendations(rerenders.recommendations)
            + "</div>"
        )

    def _memory(self, result: AnalysisResult) -> str:
        memory = result.analyses.memory
        if memory is None:
            return ""

        if memory.leaks:
            leaks = "<h3>Memory Issues</h3>" + "".join(
                f'<div class="recommendation {escape(leak.severity)}">'
                f'<span class="severity {escape(leak.severity)}">{escape(leak.severity.upper())}</span>'
                f"<h4>{escape(leak.type)}</h4>"
                f"<p>{escape(leak.description)}</p>"
                f"<p><strong>Retained Size:</strong> {format_bytes(leak.retained_size)}</p>"
                "</div>"
                for leak in memory.leaks
            )
        else:
            leaks = '<p style="color: #4caf50;">✅ No significant memory issues detected</p>'

        return (
            '<div class="section"><h2>💾 Memory Analysis</h2>'
            '<div class="stat-grid">'
            + _stat("Heap Size", format_bytes(memory.heap_size))
            + _stat("Retained Size", format_bytes(memory.retained_size))
            + _stat("Leaks Found", len(memory.leaks))
            + "</div>"
            + leaks
            + _recommendations(memory.recommendations)
            + "</div>"
        )
