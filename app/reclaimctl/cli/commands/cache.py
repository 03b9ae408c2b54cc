"""ConfigMgr client cache cleanup command.

Removes aged content from the client cache, or wipes it completely with
``--wipe``. The cache root folder itself always survives.
"""

from typing import Annotated

import typer

from reclaimctl.cli.execution import execute_sweep, get_settings
from reclaimctl.engine.policies import cache_policy
from reclaimctl.utils.formatting import print_info

app = typer.Typer(
    help="Clean the ConfigMgr client cache.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean_cache(
    ctx: typer.Context,
    days: Annotated[
        int | None,
        typer.Option(
            "--days",
            "-d",
            min=0,
            help="Minimum age in days. Defaults to settings (32).",
        ),
    ] = None,
    wipe: Annotated[
        bool,
        typer.Option("--wipe", help="Remove all cache content regardless of age."),
    ] = False,
    cache_root: Annotated[
        str | None,
        typer.Option("--cache-root", help="Cache root to clean instead of the configured one."),
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
    """Delete aged (or, with --wipe, all) content from the client cache.

    Examples:
        reclaimctl cache                 # Entries older than 32 days
        reclaimctl cache --days 7
        reclaimctl cache --wipe --dry-run
    """
    if wipe and days is not None:
        print_info("--days is ignored with --wipe.")

    settings = get_settings(ctx)
    policy = cache_policy(
        settings.cache,
        days=days,
        root=cache_root,
        wipe=wipe,
        extra_exclusions=exclude or [],
    )
    command = "reclaimctl cache --wipe" if wipe else "reclaimctl cache"
    execute_sweep(policy, dry_run=dry_run, json_output=json_output, command=command)
