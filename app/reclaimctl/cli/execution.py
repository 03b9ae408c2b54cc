"""Shared execution path for sweep commands.

Runs a policy, renders the outcome, records history for live sweeps and
converts the result into the process exit code.
"""

import logging

import typer

from reclaimctl.cli.display import print_sweep_json, print_sweep_summary
from reclaimctl.core.settings import Settings
from reclaimctl.core.state import StateManager
from reclaimctl.engine.policies import SweepPolicy, run_policy
from reclaimctl.models.history import create_sweep_record
from reclaimctl.utils.formatting import print_error, print_warning

logger = logging.getLogger(__name__)


def get_settings(ctx: typer.Context) -> Settings:
    """Return the settings loaded by the main callback, or defaults."""
    obj = ctx.find_root().obj or {}
    settings = obj.get("settings")
    return settings if settings is not None else Settings()


def execute_sweep(
    policy: SweepPolicy,
    *,
    dry_run: bool,
    json_output: bool,
    command: str,
) -> None:
    """Run a sweep policy end to end.

    Args:
        policy: Policy to run.
        dry_run: Identify candidates without deleting.
        json_output: Print the outcome as JSON instead of a table.
        command: Command line recorded in history metadata.

    Raises:
        typer.Exit: With code 1 if the sweep hit errors or failed fatally.
    """
    try:
        roots, result = run_policy(policy, dry_run=dry_run)
    except Exception as e:
        logger.exception("Sweep aborted by an unexpected error")
        print_error(f"Sweep aborted: {e}")
        raise typer.Exit(code=1) from e

    root_paths = [r.path for r in roots]

    if json_output:
        print_sweep_json(result, policy.mode, root_paths)
    else:
        print_sweep_summary(result, policy.mode, root_paths)

    if not dry_run and roots:
        record = create_sweep_record(
            mode=policy.mode,
            roots=[str(p) for p in root_paths],
            result=result,
            metadata={"command": command, "cutoff": policy.cutoff.describe()},
        )
        try:
            StateManager().record_sweep(record)
        except (OSError, RuntimeError) as e:
            print_warning(f"Could not record to history: {e}")

    if result.exit_code:
        raise typer.Exit(code=result.exit_code)
