"""Cleanup policies built on the reclamation engine.

Each cleanup mode is the same engine run with different parameters:
which roots, how the cutoff is derived, whether roots survive and which
names are excluded. A SweepPolicy captures those parameters; run_policy
resolves its roots and runs the sweep.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from reclaimctl.core.settings import CacheSettings, TempSettings
from reclaimctl.engine.exclusions import ExclusionSet
from reclaimctl.engine.models import Cutoff, Root, SweepMode, SweepResult
from reclaimctl.engine.resolver import resolve_paths
from reclaimctl.engine.sweeper import ReclamationEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SweepPolicy:
    """Parameters for one cleanup mode.

    Attributes:
        mode: Cleanup mode.
        raw_roots: Unresolved root paths (placeholders and wildcards allowed).
        cutoff: Age threshold for the sweep.
        preserve_root: Keep the root directories themselves.
        exclusions: File-name patterns that are never deleted.
        exclude_roots: Raw paths never swept, nor anything beneath them.
        measure_directories: Count remaining bytes under removed directories.
    """

    mode: SweepMode
    raw_roots: tuple[str, ...]
    cutoff: Cutoff
    preserve_root: bool = True
    exclusions: ExclusionSet = ExclusionSet()
    exclude_roots: tuple[str, ...] = ()
    measure_directories: bool = False


def temp_policy(
    settings: TempSettings,
    *,
    hours: int | None = None,
    extra_roots: Sequence[str] = (),
    extra_exclusions: Sequence[str] = (),
) -> SweepPolicy:
    """Policy for the temp folder cleanup.

    Sweeps the OS temp, service-profile temps and per-user temps, never
    the configured working temp directory. The temp roots themselves are
    never deletion targets.

    Args:
        settings: Temp section of the settings file.
        hours: Age override in hours; defaults to the configured value.
        extra_roots: Additional raw roots to sweep.
        extra_exclusions: Additional file-name patterns to keep.
    """
    age = settings.hours if hours is None else hours
    return SweepPolicy(
        mode=SweepMode.TEMP,
        raw_roots=(*settings.roots, *extra_roots),
        cutoff=Cutoff.from_hours(age),
        preserve_root=True,
        exclusions=ExclusionSet.from_patterns(settings.exclusions, extra_exclusions),
        exclude_roots=(settings.working_temp,) if settings.working_temp else (),
    )


def cache_policy(
    settings: CacheSettings,
    *,
    days: int | None = None,
    root: str | None = None,
    wipe: bool = False,
    extra_exclusions: Sequence[str] = (),
) -> SweepPolicy:
    """Policy for the ConfigMgr client cache.

    The age-based mode and the full wipe are distinct modes: the wipe
    ignores timestamps entirely, the age-based mode never does. In both
    the cache root folder survives.

    Args:
        settings: Cache section of the settings file.
        days: Age override in days (ignored by the wipe).
        root: Cache root override.
        wipe: Remove every child regardless of age.
        extra_exclusions: Additional file-name patterns to keep.
    """
    if wipe:
        mode = SweepMode.CACHE_WIPE
        cutoff = Cutoff.unconditional_wipe()
    else:
        mode = SweepMode.CACHE
        cutoff = Cutoff.from_days(settings.days if days is None else days)

    return SweepPolicy(
        mode=mode,
        raw_roots=(root or settings.root,),
        cutoff=cutoff,
        preserve_root=True,
        exclusions=ExclusionSet.from_patterns(settings.exclusions, extra_exclusions),
        measure_directories=True,
    )


def custom_policy(
    paths: Sequence[str],
    cutoff: Cutoff,
    *,
    remove_root: bool = False,
    exclusions: Sequence[str] = (),
) -> SweepPolicy:
    """Policy for an ad-hoc sweep of caller-supplied directories."""
    return SweepPolicy(
        mode=SweepMode.CUSTOM,
        raw_roots=tuple(paths),
        cutoff=cutoff,
        preserve_root=not remove_root,
        exclusions=ExclusionSet.from_patterns(exclusions),
    )


def resolve_roots(policy: SweepPolicy) -> list[Root]:
    """Resolve a policy's raw roots into validated Root values."""
    paths = resolve_paths(policy.raw_roots, exclude=policy.exclude_roots)
    return [Root(path=p, preserve_root=policy.preserve_root) for p in paths]


def run_policy(policy: SweepPolicy, *, dry_run: bool = False) -> tuple[list[Root], SweepResult]:
    """Resolve roots and run the sweep described by a policy.

    Args:
        policy: Cleanup policy to run.
        dry_run: Identify candidates without deleting.

    Returns:
        Tuple of (roots swept, sweep result).
    """
    roots = resolve_roots(policy)
    if not roots:
        logger.warning("No existing roots to sweep for mode %s", policy.mode.value)

    engine = ReclamationEngine(
        policy.cutoff,
        policy.exclusions,
        dry_run=dry_run,
        measure_directories=policy.measure_directories,
        mode=policy.mode,
    )
    return roots, engine.sweep(roots)
