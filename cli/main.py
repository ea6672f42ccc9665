#!/usr/bin/env python3
"""
Statements CLI - dual-format learning statements

Main entrypoint for the statements command-line tool.
"""

import typer
from typing import Optional
from rich.console import Console
from rich.table import Table

from cli.commands import emit, log
from statements.logging_config import setup_logging

app = typer.Typer(
    name="statements",
    help="Render learning events as xAPI and Caliper statements",
    add_completion=False,
)

console = Console()

app.add_typer(log.app, name="log", help="Statement log operations")

app.command(name="emit")(emit.emit_command)
app.command(name="kinds")(emit.kinds_command)


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="json or text"),
):
    """Configure logging for every command."""
    setup_logging(level=log_level, log_format=log_format)


@app.command()
def version():
    """Show version information."""
    from cli import __version__
    from statements import __version__ as engine_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Statements CLI[/bold]", f"v{__version__}")
    table.add_row("Statements", f"v{engine_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
