"""History command for viewing past sweeps.

This module provides the `reclaimctl history` command for reviewing what
earlier live sweeps reclaimed.
"""

import json
from datetime import datetime
from typing import Annotated

import typer
from rich.table import Table

from reclaimctl.core.state import StateManager
from reclaimctl.models.history import SweepRecord
from reclaimctl.utils.formatting import console, format_bytes, print_info

app = typer.Typer(
    help="View history of past sweeps.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            min=1,
            help="Maximum number of entries to show.",
        ),
    ] = 20,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show history of past sweeps, newest first.

    Examples:
        reclaimctl history              # Show last 20 sweeps
        reclaimctl history -n 50
        reclaimctl history --json       # JSON output for scripting
    """
    records = StateManager().get_history(limit=limit)

    if json_output:
        console.print_json(json.dumps([r.to_dict() for r in records]))
    elif not records:
        print_info("No history entries found.")
    else:
        _print_table(records)


def _print_table(records: list[SweepRecord]) -> None:
    """Print history as a Rich table."""
    table = Table(title="Sweep History")
    table.add_column("ID", style="dim")
    table.add_column("Timestamp", style="cyan")
    table.add_column("Mode", style="green")
    table.add_column("Roots", style="white")
    table.add_column("Deleted", justify="right")
    table.add_column("Reclaimed", justify="right")
    table.add_column("Errors", justify="right", style="yellow")

    for record in records:
        root_count = len(record.roots)
        roots = ", ".join(record.roots[:2])
        if root_count > 2:
            roots += f" (+{root_count - 2} more)"

        result = record.result
        table.add_row(
            record.id,
            _format_timestamp(record.timestamp),
            record.mode.value,
            roots or "-",
            f"{result.deleted_files} files, {result.deleted_dirs} dirs",
            format_bytes(result.deleted_bytes),
            str(result.errors),
        )

    console.print(table)


def _format_timestamp(timestamp: str) -> str:
    """Format an ISO timestamp for display, falling back to the raw value."""
    try:
        dt = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp
    return dt.strftime("%Y-%m-%d %H:%M")
