"""
Statement log commands: tail, show
"""

import json
import os
import typer
from typing import Optional
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from statements.core import TransportError
from statements.transport import DEFAULT_LOG_PATH, FileStatementStore

app = typer.Typer()
console = Console()


def _fail(message: str, json_output: bool, **fields) -> None:
    if json_output:
        print(json.dumps({"error": message, **fields}))
    else:
        console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(2)


@app.command()
def tail(
    log_path: str = typer.Option(DEFAULT_LOG_PATH, "--log", "-l", help="Path to statement log file"),
    lines: Optional[int] = typer.Option(None, "--lines", "-n", help="Number of statements to show"),
    kind: Optional[str] = typer.Option(None, "--kind", "-k", help="Filter by event kind"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the most recent statements in a log.

    Examples:
        statements log tail
        statements log tail --lines 10
        statements log tail --kind assignment.grade --json
    """
    if not os.path.exists(log_path):
        _fail("Log file not found", json_output, path=log_path)

    try:
        records = [s.to_record() for s in FileStatementStore(log_path).read()]
    except TransportError as e:
        _fail(str(e), json_output, path=log_path)

    if kind:
        records = [rec for rec in records if rec["kind"] == kind]
    if lines:
        records = records[-lines:]

    if json_output:
        print(json.dumps({"statements": records, "count": len(records)}, indent=2))
        return

    if not records:
        console.print("[yellow]Statement log is empty[/yellow]")
        return

    table = Table(title=f"Statement Log: {log_path}")
    table.add_column("ID", style="yellow")
    table.add_column("Kind", style="green")
    table.add_column("Actor", style="cyan")
    table.add_column("Timestamp", style="dim")

    for rec in records:
        table.add_row(rec["id"], rec["kind"], rec["actor"], rec["timestamp"])

    console.print(table)
    console.print(f"\n[bold]Total statements:[/bold] {len(records)}")


@app.command()
def show(
    statement_id: str = typer.Argument(..., help="Statement id"),
    log_path: str = typer.Option(DEFAULT_LOG_PATH, "--log", "-l", help="Path to statement log file"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show both payloads of one stored statement.

    Examples:
        statements log show 5b0c0e8e-...
    """
    if not os.path.exists(log_path):
        _fail("Log file not found", json_output, path=log_path)

    try:
        statement = FileStatementStore(log_path).get(statement_id)
    except TransportError as e:
        _fail(str(e), json_output, path=log_path)

    if statement is None:
        _fail(f"Statement not found: {statement_id}", json_output, id=statement_id)

    if json_output:
        print(json.dumps(statement.to_record(), indent=2))
        return

    console.print(f"[bold cyan]Statement {statement.id}[/bold cyan]")
    console.print(f"  Kind: [green]{statement.kind}[/green]")
    console.print(f"  Actor: [yellow]{statement.actor}[/yellow]")
    console.print(f"  Timestamp: {statement.timestamp}")
    for title, payload in (("xAPI", statement.xapi), ("Caliper", statement.caliper)):
        console.print(f"\n[bold]{title}:[/bold]")
        console.print(Syntax(json.dumps(payload, indent=2), "json", theme="monokai", line_numbers=False))
