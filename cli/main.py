#!/usr/bin/env python3
"""
ronlog CLI - replicated object log tools

Main entrypoint for the ronlog command-line tool.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from cli.commands import batch
from ronlog.logging_config import setup_logging

# Initialize Typer app
app = typer.Typer(
    name="ronlog",
    help="Replicated object log tools",
    add_completion=False,
)

# Console for rich output
console = Console()

app.command("frames")(batch.frames_command)
app.command("index")(batch.index_command)
app.command("reduce")(batch.reduce_command)


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR"),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="json or text"),
):
    """Replicated object log tools."""
    setup_logging(level=log_level, fmt=log_format)


@app.command()
def version():
    """Show version information."""
    from cli import __version__
    from ronlog.reduce import default_registry

    table = Table(show_header=False, box=None)
    table.add_row("[bold]ronlog CLI[/bold]", f"v{__version__}")
    table.add_row("Reducers", ", ".join(str(ty) for ty in default_registry().types()))

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
