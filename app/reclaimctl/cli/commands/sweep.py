"""Ad-hoc sweep command.

Runs the reclamation engine over arbitrary directories with a days or
hours cutoff.
"""

from typing import Annotated

import typer

from reclaimctl.cli.execution import execute_sweep
from reclaimctl.engine.models import Cutoff
from reclaimctl.engine.policies import custom_policy
from reclaimctl.utils.formatting import print_error


def sweep_paths(
    paths: Annotated[
        list[str],
        typer.Argument(help="Directories to sweep; placeholders and wildcards allowed."),
    ],
    days: Annotated[
        int | None,
        typer.Option("--days", "-d", min=0, help="Minimum age in days."),
    ] = None,
    hours: Annotated[
        int | None,
        typer.Option("--hours", "-H", min=0, help="Minimum age in hours."),
    ] = None,
    remove_root: Annotated[
        bool,
        typer.Option("--remove-root", help="Also remove a root that ends up empty and aged."),
    ] = False,
    exclude: Annotated[
        list[str] | None,
        typer.Option("--exclude", "-x", help="File-name glob to keep (repeatable)."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output the summary as JSON."),
    ] = False,
) -> None:
    """Delete entries older than the cutoff under each PATH.

    Exactly one of --days or --hours is required.

    Examples:
        reclaimctl sweep D:\\Logs --days 30 -x "*.keep"
        reclaimctl sweep /var/tmp/build --hours 6 --remove-root
    """
    if (days is None) == (hours is None):
        print_error("Specify exactly one of --days or --hours.")
        raise typer.Exit(code=2)

    cutoff = Cutoff.from_days(days) if days is not None else Cutoff.from_hours(hours or 0)
    policy = custom_policy(paths, cutoff, remove_root=remove_root, exclusions=exclude or [])
    execute_sweep(policy, dry_run=dry_run, json_output=json_output, command="reclaimctl sweep")
