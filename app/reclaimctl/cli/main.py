"""reclaimctl command-line entry point.

The root callback loads settings and configures logging once; every
subcommand reads both from the Typer context object.
"""

from pathlib import Path
from typing import Annotated

import typer

from reclaimctl import __version__
from reclaimctl.cli.commands import cache, config, history, sweep, temp
from reclaimctl.core.log import setup_logging
from reclaimctl.core.settings import SettingsError, load_settings
from reclaimctl.utils.formatting import print_error, print_warning

app = typer.Typer(
    name="reclaimctl",
    help="Reclaim disk space from temp folders, client caches and aged trees.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"reclaimctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every deleted entry."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only log warnings and errors to the console."),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Append log records to this file."),
    ] = None,
    settings_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Settings file to use instead of the default."),
    ] = None,
) -> None:
    """reclaimctl - Age-based disk space reclamation.

    Sweeps directory trees for entries older than a cutoff, deletes them
    bottom-up and reports what was reclaimed. Exits 1 if any directory
    could not be enumerated or any expired entry could not be deleted.
    """
    ctx.ensure_object(dict)

    try:
        settings = load_settings(settings_path)
    except SettingsError as e:
        # Let `config init --force` repair a broken settings file
        if ctx.invoked_subcommand != "config":
            print_error(str(e))
            raise typer.Exit(code=2) from e
        print_warning(str(e))
        settings = None

    file_target = log_file
    file_level = "INFO"
    if settings is not None:
        file_level = settings.logging.level
        if file_target is None and settings.logging.file:
            file_target = Path(settings.logging.file)

    try:
        setup_logging(verbose=verbose, quiet=quiet, log_file=file_target, file_level=file_level)
    except OSError as e:
        print_error(f"Cannot open log file {file_target}: {e}")
        raise typer.Exit(code=2) from e

    ctx.obj["settings"] = settings
    ctx.obj["settings_path"] = settings_path
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.add_typer(temp.app, name="temp")
app.add_typer(cache.app, name="cache")
app.command(name="sweep", no_args_is_help=True)(sweep.sweep_paths)
app.add_typer(history.app, name="history")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
