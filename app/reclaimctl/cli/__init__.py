"""CLI package for reclaimctl.

This package contains the Typer application and all subcommands.
"""

from reclaimctl.cli.main import app

__all__ = ["app"]
