"""Filesystem reclamation engine.

This module provides root resolution, exclusion matching, single-entry
deletion, the two-pass sweep engine and the cleanup-mode policies built
on it.
"""

from reclaimctl.engine.exclusions import ExclusionSet
from reclaimctl.engine.models import Cutoff, Entry, EntryType, Root, SweepMode, SweepResult
from reclaimctl.engine.operator import DeletionResult, EntryOperator
from reclaimctl.engine.policies import (
    SweepPolicy,
    cache_policy,
    custom_policy,
    run_policy,
    temp_policy,
)
from reclaimctl.engine.resolver import resolve_paths
from reclaimctl.engine.sweeper import ReclamationEngine

__all__ = [
    "Cutoff",
    "DeletionResult",
    "Entry",
    "EntryOperator",
    "EntryType",
    "ExclusionSet",
    "ReclamationEngine",
    "Root",
    "SweepMode",
    "SweepPolicy",
    "SweepResult",
    "cache_policy",
    "custom_policy",
    "resolve_paths",
    "run_policy",
    "temp_policy",
]
