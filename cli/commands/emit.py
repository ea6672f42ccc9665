"""
Emit command: render one event into both statement formats and store it.
"""

import json
import sys
import typer
from typing import Optional
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

import statements.builders  # noqa: F401  (registers built-in builders)
from statements.core import PlatformConfig, StatementError, ValidationError
from statements.registry import REGISTRY
from statements.transport import FileStatementStore

console = Console()


def _load_event(event_path: str) -> dict:
    if event_path == "-":
        return json.load(sys.stdin)
    with open(event_path, "r") as f:
        return json.load(f)


def _fail(message: str, json_output: bool, code: int, **fields) -> None:
    if json_output:
        print(json.dumps({"ok": False, "error": message, **fields}))
    else:
        console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code)


def emit_command(
    kind: str = typer.Argument(..., help="Event kind, e.g. assignment.create"),
    event_path: str = typer.Argument(..., help="Path to event JSON ('-' for stdin)"),
    platform: Optional[str] = typer.Option(None, "--platform", "-p", help="Platform identity (default: STATEMENTS_PLATFORM)"),
    platform_url: Optional[str] = typer.Option(None, "--platform-url", help="Platform home page"),
    log_path: Optional[str] = typer.Option(None, "--log", "-l", help="JSONL statement log (default: STATEMENTS_TRANSPORT)"),
    show: bool = typer.Option(False, "--show", "-s", help="Show rendered payloads"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Render an event and hand it to the configured transport.

    Exit codes: 0 stored (or already stored), 1 invalid event, 2 transport or setup error.

    Examples:
        statements emit assignment.create event.json --platform acme --log /tmp/s.jsonl
        statements emit assignment.view - --json < view.json
    """
    try:
        event = _load_event(event_path)
    except (OSError, ValueError) as e:
        _fail(f"Cannot read event: {e}", json_output, 2, path=event_path)

    try:
        transport = FileStatementStore(log_path) if log_path else None
        if platform:
            if transport is None:
                from statements.transport import transport_from_env

                transport = transport_from_env()
            config = PlatformConfig(platform=platform, transport=transport, platform_url=platform_url)
        else:
            config = PlatformConfig.from_env(transport=transport)
        outcome = REGISTRY.emit(kind, config, event)
    except (StatementError, TypeError) as e:
        _fail(str(e), json_output, 2)

    if isinstance(outcome.error, ValidationError):
        _fail(
            str(outcome.error),
            json_output,
            1,
            field=outcome.error.field,
            reason=outcome.error.reason.value,
        )
    if outcome.error is not None:
        _fail(str(outcome.error), json_output, 2)

    result = outcome.result
    statement = outcome.statement
    if json_output:
        output = {
            "ok": True,
            "id": result.statement_id,
            "location": result.location,
            "committed": result.committed,
            "duplicate": result.duplicate,
        }
        if show:
            output["xapi"] = statement.xapi
            output["caliper"] = statement.caliper
        print(json.dumps(output, indent=2))
        return

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Statement[/bold]", f"[yellow]{result.statement_id}[/yellow]")
    table.add_row("Kind", kind)
    table.add_row("Location", result.location)
    table.add_row("Status", "[dim]already stored[/dim]" if result.duplicate else "[green]stored[/green]")
    console.print(table)

    if show:
        for title, payload in (("xAPI", statement.xapi), ("Caliper", statement.caliper)):
            console.print(f"\n[bold]{title}:[/bold]")
            console.print(Syntax(json.dumps(payload, indent=2), "json", theme="monokai"))


def kinds_command(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List registered event kinds and their metadata rules.
    """
    kinds = {}
    for kind in REGISTRY.kinds():
        builder = REGISTRY.get(kind)
        kinds[kind] = {
            name: {"type": rule.kind.value, "required": rule.required}
            for name, rule in builder.rules.items()
        }

    if json_output:
        print(json.dumps({"kinds": kinds, "count": len(kinds)}, indent=2))
        return

    table = Table(title="Event Kinds")
    table.add_column("Kind", style="green")
    table.add_column("Field", style="cyan")
    table.add_column("Type")
    table.add_column("Required", justify="center")

    for kind, fields in kinds.items():
        first = True
        for name, rule in fields.items():
            table.add_row(kind if first else "", name, rule["type"], "yes" if rule["required"] else "")
            first = False

    console.print(table)
