"""Local deployment history."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from sitedeploy.audit import recent_events
from sitedeploy.config import get_config

console = Console()


def history(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of entries to show"),
) -> None:
    """Show recent deployments recorded on this machine."""
    cfg = get_config()
    events = recent_events(cfg.audit_db_path, limit=limit)
    if not events:
        console.print("[yellow]No deployments recorded yet.[/yellow]")
        return

    table = Table(title="Deployment history")
    table.add_column("When", style="dim")
    table.add_column("Action")
    table.add_column("Domain", style="cyan")
    table.add_column("Host")
    table.add_column("Result")
    table.add_column("Duration", justify="right")

    for e in events:
        style = "green" if e["result"] == "success" else "red"
        duration = f"{e['duration_ms']} ms" if e["duration_ms"] is not None else ""
        table.add_row(
            e["timestamp"],
            e["action"],
            e["target"],
            e["host"],
            f"[{style}]{e['result']}[/{style}]",
            duration,
        )

    console.print(table)
