"""Rich terminal summary for React Profiler."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..analyzers.memory import increase_percentage
from ..models import AnalysisResult, Recommendation
from ..units import format_bytes
from .base import BaseFormatter

TOP_COMPONENTS = 5


def _issue_counts(recommendations: list[Recommendation]) -> str:
    critical = sum(1 for r in recommendations if r.severity == "critical")
    warnings = sum(1 for r in recommendations if r.severity == "warning")
    return f"[red]Critical: [bold]{critical}[/bold][/red]  [yellow]Warnings: [bold]{warnings}[/bold][/yellow]"


class RichFormatter(BaseFormatter):
    """Per-analyzer summary panels printed to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)

    def render(self, result: AnalysisResult) -> None:
        if result.analyses.bundle is not None:
            self._print_bundle(result)
        if result.analyses.rerenders is not None:
            self._print_rerenders(result)
        if result.analyses.memory is not None:
            self._print_memory(result)
        for name, message in result.failures.items():
            self.console.print(f"[red]✗ {name} analysis failed:[/red] {escape(message)}")
        self._print_summary(result)

    def format(self, result: AnalysisResult) -> str:
        with self.console.capture() as capture:
            self.render(result)
        return capture.get()

    # -- private helpers --

    def _print_bundle(self, result: AnalysisResult) -> None:
        bundle = result.analyses.bundle
        m = bundle.metrics
        text = (
            f"Total Size: [bold]{format_bytes(bundle.total_size)}[/bold]\n"
            f"Chunks: [bold]{len(bundle.chunks)}[/bold]  "
            f"Large Modules: [bold]{len(bundle.large_modules)}[/bold]  "
            f"Duplicate Modules: [bold]{len(bundle.duplicates)}[/bold]\n\n"
            f"[cyan]Asset Breakdown[/cyan]\n"
            f"  JavaScript: [bold]{format_bytes(m.js_size)}[/bold]\n"
            f"  CSS: [bold]{format_bytes(m.css_size)}[/bold]\n"
            f"  Images: [bold]{format_bytes(m.image_size)}[/bold]\n"
            f"  Other: [bold]{format_bytes(m.other_size)}[/bold]"
        )
        if bundle.recommendations:
            text += "\n\n" + _issue_counts(bundle.recommendations)
        self.console.print(
            Panel(text, title="[bold cyan]📊 Bundle Analysis[/bold cyan]", expand=False)
        )

    def _print_rerenders(self, result: AnalysisResult) -> None:
        rerenders = result.analyses.rerenders
        self.console.print(
            Panel(
                f"Total Re-renders: [bold]{rerenders.total_rerenders}[/bold]\n"
                f"Unnecessary Re-renders: [bold]{rerenders.unnecessary_rerenders}[/bold]\n"
                f"Components Analyzed: [bold]{len(rerenders.components)}[/bold]",
                title="[bold cyan]📊 Re-render Analysis[/bold cyan]",
                expand=False,
            )
        )

        if rerenders.components:
            table = Table(title=f"Top {TOP_COMPONENTS} Re-rendering Components")
            table.add_column("#", style="dim", width=4)
            table.add_column("Component", style="yellow")
            table.add_column("Renders", justify="right")
            table.add_column("Avg Time", justify="right")
            table.add_column("Unnecessary", justify="center")
            for i, comp in enumerate(rerenders.components[:TOP_COMPONENTS], 1):
                table.add_row(
                    str(i),
                    escape(comp.name),
                    str(comp.render_count),
                    f"{comp.avg_render_time:.2f}ms",
                    "[red]yes[/red]" if comp.is_unnecessary else "[green]no[/green]",
                )
            self.console.print(table)

        if rerenders.recommendations:
            self.console.print(
                f"[yellow]⚠ {len(rerenders.recommendations)} optimization opportunities found[/yellow]"
            )
        self.console.print()

    def _print_memory(self, result: AnalysisResult) -> None:
        memory = result.analyses.memory
        lines = [
            f"Current Heap Size: [bold]{format_bytes(memory.heap_size)}[/bold]",
            f"Memory Retained: [bold]{format_bytes(memory.retained_size)}[/bold]",
            f"Snapshots Taken: [bold]{len(memory.snapshots)}[/bold]",
        ]

        if memory.leaks:
            lines += ["", "[cyan]Memory Issues Found[/cyan]"]
            for leak in memory.leaks:
                color = "red" if leak.severity == "critical" else "yellow"
                lines.append(f"  [{color}]●[/{color}] {escape(leak.type)}: {escape(leak.description)}")
                lines.append(f"    [dim]Retained: {format_bytes(leak.retained_size)}[/dim]")
        else:
            lines += ["", "[green]✓ No significant memory issues detected[/green]"]

        if len(memory.snapshots) >= 2:
            change = increase_percentage(memory.snapshots)
            color = "red" if change > 20 else "yellow" if change > 0 else "green"
            sign = "+" if change >= 0 else ""
            lines += [
                "",
                "[cyan]Memory Trend[/cyan]",
                f"  [{color}]{sign}{change:.1f}% change during testing[/{color}]",
            ]

        self.console.print(
            Panel("\n".join(lines), title="[bold cyan]📊 Memory Analysis[/bold cyan]", expand=False)
        )

    def _print_summary(self, result: AnalysisResult) -> None:
        summary = result.summary
        self.console.print(
            Panel(
                f"[bold]{summary.total_issues}[/bold] issues  |  "
                f"[red]{summary.critical_issues}[/red] critical  |  "
                f"[yellow]{summary.warnings}[/yellow] warnings",
                title="[bold cyan]Summary[/bold cyan]",
                expand=False,
            )
        )
