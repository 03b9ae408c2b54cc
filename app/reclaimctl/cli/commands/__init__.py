"""CLI commands for reclaimctl.

This package contains all subcommand implementations.
"""

from reclaimctl.cli.commands import cache, config, history, sweep, temp

__all__ = ["cache", "config", "history", "sweep", "temp"]
