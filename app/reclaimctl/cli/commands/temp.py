"""Temp folder cleanup command.

Sweeps the OS temp, service-profile temps and per-user temps for
entries older than a number of hours. The working temp directory is
never touched.
"""

from typing import Annotated

import typer

from reclaimctl.cli.execution import execute_sweep, get_settings
from reclaimctl.engine.policies import temp_policy

app = typer.Typer(
    help="Clean OS, service-profile and per-user temp folders.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean_temp(
    ctx: typer.Context,
    hours: Annotated[
        int | None,
        typer.Option(
            "--hours",
            "-H",
            min=0,
            help="Minimum age in hours (0 deletes everything). Defaults to settings.",
        ),
    ] = None,
    paths: Annotated[
        list[str] | None,
        typer.Option("--path", "-p", help="Additional temp root to sweep (repeatable)."),
    ] = None,
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
    """Delete aged entries from the temp folders.

    Examples:
        reclaimctl temp                  # Delete everything in the temp folders
        reclaimctl temp --hours 24       # Only entries older than a day
        reclaimctl temp --dry-run --json
    """
    settings = get_settings(ctx)
    policy = temp_policy(
        settings.temp,
        hours=hours,
        extra_roots=paths or [],
        extra_exclusions=exclude or [],
    )
    execute_sweep(policy, dry_run=dry_run, json_output=json_output, command="reclaimctl temp")
