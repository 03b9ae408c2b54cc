"""Shared Rich display functions for sweep results.

Provides the summary table and JSON rendering used by every sweep
command (temp, cache, sweep).
"""

import json
from pathlib import Path

from rich.table import Table

from reclaimctl.engine.models import SweepMode, SweepResult
from reclaimctl.utils.formatting import console, format_bytes, print_success, print_warning


def create_summary_table(result: SweepResult, mode: SweepMode) -> Table:
    """Create a Rich table with candidate and deleted metrics.

    Args:
        result: Final sweep metrics.
        mode: Cleanup mode, shown in the title.

    Returns:
        Rich Table with one row per metric group.
    """
    label = f"{mode.value}, dry-run" if result.dry_run else mode.value

    table = Table(
        title=f"Sweep Summary ({label})",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("", no_wrap=True)
    table.add_column("Files", justify="right")
    table.add_column("Dirs", justify="right")
    table.add_column("Size", justify="right")

    table.add_row(
        "[candidate]Candidates[/]",
        str(result.candidate_files),
        str(result.candidate_dirs),
        format_bytes(result.candidate_bytes),
    )
    table.add_row(
        "[deleted]Deleted[/]",
        str(result.deleted_files),
        str(result.deleted_dirs),
        format_bytes(result.deleted_bytes),
    )
    return table


def print_sweep_summary(result: SweepResult, mode: SweepMode, roots: list[Path]) -> None:
    """Print the summary table followed by a one-line verdict."""
    if roots:
        console.print("[muted]Roots:[/] " + ", ".join(str(r) for r in roots))
    console.print(create_summary_table(result, mode))

    if result.dry_run:
        console.print(
            f"\n[info]Dry-run: {format_bytes(result.candidate_bytes)} would be reclaimed.[/]"
        )
    elif result.errors:
        print_warning(f"Completed with {result.errors} error(s).")
    elif result.failures:
        print_warning(
            f"Reclaimed {format_bytes(result.deleted_bytes)}; "
            f"{result.failures} entr{'y' if result.failures == 1 else 'ies'} could not be deleted."
        )
    else:
        print_success(f"Reclaimed {format_bytes(result.deleted_bytes)}.")


def print_sweep_json(result: SweepResult, mode: SweepMode, roots: list[Path]) -> None:
    """Print the sweep outcome as JSON."""
    data = {
        "mode": mode.value,
        "roots": [str(r) for r in roots],
        **result.to_dict(),
    }
    console.print_json(json.dumps(data))
