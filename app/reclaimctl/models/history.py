"""Sweep history record model.

This module defines the record appended to the history file after every
live sweep, so past reclamation runs can be reviewed later.
"""

import json
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from reclaimctl.engine.models import SweepMode, SweepResult


@dataclass(frozen=True, slots=True)
class SweepRecord:
    """Record of a single completed sweep.

    Attributes:
        id: Short random hex identifier.
        timestamp: When the sweep finished (ISO 8601 format with timezone).
        mode: Cleanup mode the sweep ran under.
        roots: Resolved root paths that were swept.
        result: Final sweep metrics.
        metadata: Additional context (command, cutoff, etc.).
    """

    id: str
    timestamp: str
    mode: SweepMode
    roots: tuple[str, ...]
    result: SweepResult
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.id:
            msg = "Sweep record ID cannot be empty"
            raise ValueError(msg)
        if not self.timestamp:
            msg = "Timestamp cannot be empty"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "mode": self.mode.value,
            "roots": list(self.roots),
            "result": self.result.to_dict(),
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SweepRecord":
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If mode or result data is invalid.
        """
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            mode=SweepMode(data["mode"]),
            roots=tuple(data.get("roots", ())),
            result=SweepResult.from_dict(data["result"]),
            metadata=data.get("metadata", {}),
        )

    def to_json_line(self) -> str:
        """Serialize to a single JSON line (no trailing newline)."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json_line(cls, line: str) -> "SweepRecord":
        """Deserialize from a JSON line.

        Raises:
            json.JSONDecodeError: If line is not valid JSON.
            KeyError: If required fields are missing.
            ValueError: If data is invalid.
        """
        return cls.from_dict(json.loads(line))


def create_sweep_record(
    mode: SweepMode,
    roots: list[str],
    result: SweepResult,
    metadata: dict[str, Any] | None = None,
) -> SweepRecord:
    """Create a new SweepRecord with a generated ID and current timestamp."""
    return SweepRecord(
        id=uuid.uuid4().hex[:12],
        timestamp=datetime.now(UTC).isoformat(),
        mode=mode,
        roots=tuple(roots),
        result=result,
        metadata=metadata or {},
    )
