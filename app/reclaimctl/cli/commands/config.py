"""Settings management commands.

Shows the effective settings, prints the settings file location and
writes a default settings file.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from reclaimctl.cli.execution import get_settings
from reclaimctl.core.paths import get_settings_path
from reclaimctl.core.settings import Settings, SettingsError, save_settings, settings_to_dict
from reclaimctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialise settings.",
    no_args_is_help=True,
)


def _settings_path(ctx: typer.Context) -> Path:
    obj = ctx.find_root().obj or {}
    custom: Path | None = obj.get("settings_path")
    return custom or get_settings_path()


@app.command()
def path(ctx: typer.Context) -> None:
    """Print the settings file location."""
    typer.echo(str(_settings_path(ctx)))


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective settings as JSON."""
    console.print_json(json.dumps(settings_to_dict(get_settings(ctx))))


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with the default values."""
    target = _settings_path(ctx)

    if target.exists() and not force:
        print_info(f"Settings file already exists: {target}")
        print_info("Use --force to overwrite it with defaults.")
        raise typer.Exit(code=1)

    try:
        saved = save_settings(Settings(), target)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
