"""Init command: write a starter configuration file."""

from pathlib import Path

import typer

from ..config import write_default_config
from ..exceptions import ConfigurationError
from . import app
from ._common import console


@app.command()
def init(
    path: Path = typer.Argument(
        Path("."),
        help="Directory to create react-profiler.toml in",
        file_okay=False,
        dir_okay=True,
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing config file",
    ),
):
    """
    Create a react-profiler.toml with commented defaults.

    [bold cyan]Examples:[/bold cyan]

      react-profiler init

      react-profiler init ./my-app --force
    """
    try:
        target = write_default_config(path, force=force)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]✅ Created configuration file:[/green] {target}", soft_wrap=True)
