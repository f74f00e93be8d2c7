"""Analyze command: run the selected analyzers and write reports."""

from pathlib import Path
from typing import Optional

import typer

from ..exceptions import ConfigurationError, ProfilerError
from ..formatters import RichFormatter, write_reports
from ..logging_config import setup_logging
from ..models import AnalysisResult
from ..pipeline import ProfilerPipeline
from . import app
from ._common import console, resolve_config


@app.command()
def analyze(
    path: Optional[Path] = typer.Option(
        None,
        "-p",
        "--path",
        help="Path to the React project (default: current directory)",
    ),
    stats: Optional[Path] = typer.Option(
        None,
        "--stats",
        help="Pre-built webpack stats file (webpack --json > stats.json)",
    ),
    webpack_config: Optional[Path] = typer.Option(
        None,
        "-w",
        "--webpack-config",
        help="Path to webpack config file (default: <project>/webpack.config.js)",
    ),
    render_events: Optional[Path] = typer.Option(
        None,
        "--render-events",
        help="Captured render events (JSON)",
    ),
    memory_snapshots: Optional[Path] = typer.Option(
        None,
        "--memory-snapshots",
        help="Captured heap samples (JSON)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "-o",
        "--output",
        help="Output directory for reports (default: ./profiler-reports)",
    ),
    formats: Optional[str] = typer.Option(
        None,
        "-f",
        "--format",
        help="Comma-separated report formats: json,html,markdown",
    ),
    bundle: Optional[bool] = typer.Option(
        None,
        "--bundle/--no-bundle",
        help="Analyze bundle size",
    ),
    rerenders: Optional[bool] = typer.Option(
        None,
        "--rerenders/--no-rerenders",
        help="Analyze unnecessary re-renders",
    ),
    memory: Optional[bool] = typer.Option(
        None,
        "--memory/--no-memory",
        help="Analyze memory growth",
    ),
    fail_on_critical: bool = typer.Option(
        False,
        "--fail-on-critical",
        help="Exit 1 if any critical issue is found",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only print errors and report paths",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Append a DEBUG-level log of the run to this file",
    ),
):
    """
    Analyze bundle composition, re-renders and memory growth.

    Bundle input comes from [cyan]--stats[/cyan] or, when absent, from running
    webpack with the project's config. Re-render and memory analysis read
    capture files recorded by a browser collector.

    [bold cyan]Examples:[/bold cyan]

      react-profiler analyze --stats stats.json

      react-profiler analyze -p ./my-app --render-events renders.json --no-memory

      react-profiler analyze --stats stats.json -f json --fail-on-critical
    """
    logger = setup_logging(
        verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None
    )

    try:
        settings = resolve_config(
            path=path,
            config=config,
            stats=stats,
            webpack_config=webpack_config,
            render_events=render_events,
            memory_snapshots=memory_snapshots,
            output=output,
            formats=formats,
            bundle=bundle,
            rerenders=rerenders,
            memory=memory,
            verbose=verbose,
            quiet=quiet,
        )
        settings.validate_paths()

        if not quiet:
            console.print("\n[bold blue]🔍 React Performance Profiler[/bold blue]\n")

        result = ProfilerPipeline(settings).run()

        if not quiet:
            RichFormatter(console=console).render(result)

        written = write_reports(result, settings.output_dir, settings.formats)
        console.print("[green]✅ Reports generated:[/green]")
        for report_path in written:
            console.print(f"  [cyan]- {report_path}[/cyan]", soft_wrap=True)

    except typer.Exit:
        raise

    except ConfigurationError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    except ProfilerError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except OSError as e:
        logger.error(f"Could not write reports: {e}")
        console.print(f"[red]Could not write reports:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)

    if _should_fail(result, fail_on_critical):
        raise typer.Exit(1)


def _should_fail(result: AnalysisResult, fail_on_critical: bool) -> bool:
    """Failed analyzers always fail the run; critical issues only on request."""
    if result.failures:
        console.print(
            f"[red]{len(result.failures)} analyzer(s) failed:[/red] "
            + ", ".join(sorted(result.failures))
        )
        return True
    if fail_on_critical and result.summary.critical_issues > 0:
        console.print(
            f"[red]--fail-on-critical:[/red] {result.summary.critical_issues} critical issue(s) found"
        )
        return True
    return False
