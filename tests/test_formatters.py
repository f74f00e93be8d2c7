"""Tests for the report formatters."""

import json
from datetime import datetime

import pytest
from rich.console import Console

from react_profiler.analyzers import analyze_bundle, analyze_memory, analyze_rerenders
from react_profiler.formatters import (
    HtmlFormatter,
    JsonFormatter,
    MarkdownFormatter,
    RichFormatter,
    get_formatter,
    write_reports,
)
from react_profiler.models import (
    AnalysisResult,
    Analyses,
    BuildStatistics,
    Recommendation,
    RenderEvent,
)
from react_profiler.summary import calculate_summary


@pytest.fixture
def result(stats, render_events, memory_snapshots):
    result = AnalysisResult(
        project_path="/tmp/app",
        timestamp=datetime(2024, 5, 6, 7, 8, 9),
        analyses=Analyses(
            bundle=analyze_bundle(stats),
            rerenders=analyze_rerenders(render_events),
            memory=analyze_memory(memory_snapshots),
        ),
    )
    calculate_summary(result)
    return result


class TestGetFormatter:
    def test_known_formatters(self):
        for name in ("json", "html", "markdown", "rich"):
            assert get_formatter(name) is not None

    def test_unknown_formatter(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("pdf")


class TestJsonFormatter:
    def test_format_returns_valid_json(self, result):
        data = json.loads(JsonFormatter().format(result))
        assert data["timestamp"] == "2024-05-06T07:08:09"
        assert data["summary"]["totalIssues"] == 11
        assert set(data["analyses"]) == {"bundle", "rerenders", "memory"}


class TestMarkdownFormatter:
    def test_sections(self, result):
        text = MarkdownFormatter().format(result)
        assert text.startswith("# React Performance Analysis Report")
        assert "**Generated:** 2024-05-06 07:08:09" in text
        assert "- **Total Issues:** 11" in text
        assert "## Bundle Analysis" in text
        assert "| vendor | 488.28 KB | 3 |" in text
        assert "| ProductList | 15 | 3.20ms | ⚠️ Yes |" in text
        assert "#### consistent-growth (critical)" in text

    def test_code_only_for_critical(self, result):
        text = MarkdownFormatter().format(result)
        # critical bundle-size advice carries the React.lazy snippet
        assert "   // Use React.lazy for code splitting" in text
        # the dedupe snippet belongs to a warning and is left out
        assert "splitChunks" not in text

    def test_missing_analyses_omitted(self):
        result = AnalysisResult(project_path=".")
        calculate_summary(result)
        text = MarkdownFormatter().format(result)
        assert "## Bundle Analysis" not in text
        assert "## Memory Analysis" not in text

    def test_failures_listed(self):
        result = AnalysisResult(project_path=".", failures={"bundle": "webpack failed"})
        text = MarkdownFormatter().format(result)
        assert "- **bundle:** webpack failed" in text

    def test_pipes_in_names_are_escaped(self):
        stats = BuildStatistics.from_dict(
            {
                "chunks": [{"names": ["a|b"], "size": 10}],
                "modules": [{"name": "x|y.js", "size": 60000}],
            }
        )
        result = AnalysisResult(project_path=".")
        result.analyses.bundle = analyze_bundle(stats)
        result.analyses.rerenders = analyze_rerenders(
            [RenderEvent("List|Item", 1, 2.0, "props")]
        )
        text = MarkdownFormatter().format(result)
        assert "| a\\|b | 10 Bytes | 0 |" in text
        assert "| x\\|y.js | 58.59 KB |" in text
        assert "| List\\|Item | 1 | 2.00ms |" in text


class TestHtmlFormatter:
    def test_document(self, result):
        page = HtmlFormatter().format(result)
        assert page.startswith("<!DOCTYPE html>")
        assert "<title>React Performance Report</title>" in page
        assert "📦 Bundle Analysis" in page
        assert "🔄 Re-render Analysis" in page
        assert "💾 Memory Analysis" in page

    def test_text_is_escaped(self):
        rec = Recommendation(
            severity="critical",
            category="slow-renders",
            title='Component "<Evil>" renders slowly',
            description="d",
            fix="f",
            estimated_impact="i",
            code_example="<div>&</div>",
        )
        result = AnalysisResult(project_path="<script>")
        result.analyses.rerenders = analyze_rerenders([])
        result.analyses.rerenders.recommendations.append(rec)
        page = HtmlFormatter().format(result)
        assert "<Evil>" not in page
        assert "&lt;Evil&gt;" in page
        assert "&lt;div&gt;&amp;&lt;/div&gt;" in page
        assert "Project: &lt;script&gt;" in page

    def test_no_leaks_message(self):
        result = AnalysisResult(project_path=".")

        class NoFindings:
            name = "none"

            def inspect(self, heap_snapshot):
                return []

        result.analyses.memory = analyze_memory([], inspector=NoFindings())
        assert "No significant memory issues detected" in HtmlFormatter().format(result)


class TestRichFormatter:
    def test_summary_output(self, result):
        console = Console(record=True, width=120)
        RichFormatter(console=console).render(result)
        text = console.export_text()
        assert "Bundle Analysis" in text
        assert "791.02 KB" in text
        assert "ProductList" in text
        assert "+30.0% change during testing" in text
        assert "3 critical" in text

    def test_format_captures_output(self, result):
        text = RichFormatter(console=Console(width=120)).format(result)
        assert "Re-render Analysis" in text


class TestWriteReports:
    def test_writes_requested_formats(self, result, tmp_path):
        out = tmp_path / "reports"
        paths = write_reports(result, out, ["json", "markdown"])
        assert [p.name for p in paths] == ["report.json", "report.md"]
        assert all(p.exists() for p in paths)
        assert not (out / "report.html").exists()

    def test_summary_recomputed_before_writing(self, result, tmp_path):
        result.summary.total_issues = 0
        write_reports(result, tmp_path, ["json"])
        data = json.loads((tmp_path / "report.json").read_text(encoding="utf-8"))
        assert data["summary"]["totalIssues"] == 11

    def test_unknown_format_writes_nothing(self, result, tmp_path):
        with pytest.raises(ValueError):
            write_reports(result, tmp_path / "out", ["json", "pdf"])
        assert not (tmp_path / "out").exists()

    def test_console_formatter_cannot_write(self, result, tmp_path):
        with pytest.raises(ValueError, match="does not write"):
            RichFormatter().write(result, tmp_path)
