"""Persisted record models."""

from reclaimctl.models.history import SweepRecord, create_sweep_record

__all__ = ["SweepRecord", "create_sweep_record"]
