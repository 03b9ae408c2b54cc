"""Reclamation domain models.

This module defines the data structures shared by the resolver, the
engine and the CLI: sweep roots, the age cutoff, discovered entries,
sweep modes and the per-sweep result accumulator.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from pathlib import Path
from typing import Any


class EntryType(str, Enum):
    """Type of filesystem entry discovered during a sweep.

    Attributes:
        DIRECTORY: Regular directory.
        FILE: Regular file (or any other non-directory object).
        SYMLINK: Symbolic link; deleted as a leaf, never followed.
    """

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"


class SweepMode(str, Enum):
    """Cleanup mode a sweep runs under.

    Attributes:
        TEMP: Temp folder cleanup, hours-based cutoff.
        CACHE: ConfigMgr client cache cleanup, days-based cutoff.
        CACHE_WIPE: ConfigMgr client cache full wipe, age ignored.
        CUSTOM: Caller-supplied roots and cutoff.
    """

    TEMP = "temp"
    CACHE = "cache"
    CACHE_WIPE = "cache_wipe"
    CUSTOM = "custom"


@dataclass(frozen=True, slots=True)
class Root:
    """A directory that bounds a sweep.

    Attributes:
        path: Absolute directory path.
        preserve_root: If True, the root directory itself is never removed,
            only its descendants.
    """

    path: Path
    preserve_root: bool = True


@dataclass(frozen=True, slots=True)
class Cutoff:
    """Age threshold for one sweep.

    An entry whose last-modified time is older than ``now - max_age`` is
    expired. A zero ``max_age`` expires everything (immediate mode); an
    unconditional cutoff does the same but is reported as a full wipe.

    Attributes:
        max_age: Minimum age before an entry becomes a candidate.
        now: Reference time, fixed for the whole sweep.
        unconditional: Ignore timestamps entirely.
    """

    max_age: timedelta
    now: datetime = field(default_factory=lambda: datetime.now(UTC))
    unconditional: bool = False

    def __post_init__(self) -> None:
        """Validate cutoff data after initialization."""
        if self.max_age < timedelta(0):
            msg = f"Maximum age cannot be negative, got {self.max_age}"
            raise ValueError(msg)
        if self.now.tzinfo is None:
            msg = "Cutoff reference time must be timezone-aware"
            raise ValueError(msg)

    @classmethod
    def from_days(cls, days: float) -> "Cutoff":
        return cls(max_age=timedelta(days=days))

    @classmethod
    def from_hours(cls, hours: float) -> "Cutoff":
        return cls(max_age=timedelta(hours=hours))

    @classmethod
    def unconditional_wipe(cls) -> "Cutoff":
        return cls(max_age=timedelta(0), unconditional=True)

    @property
    def immediate(self) -> bool:
        """True when every entry is expired regardless of its timestamp."""
        return self.unconditional or self.max_age == timedelta(0)

    @property
    def at(self) -> datetime:
        """The point in time below which entries are expired."""
        return self.now - self.max_age

    def is_expired(self, mtime: float) -> bool:
        """Check whether a POSIX timestamp falls before the cutoff.

        Args:
            mtime: Last-modified time as seconds since the epoch.

        Returns:
            True if the entry is old enough to be deleted.
        """
        if self.immediate:
            return True
        return mtime < self.at.timestamp()

    def describe(self) -> str:
        """Human-readable description for log records."""
        if self.unconditional:
            return "unconditional (age ignored)"
        if self.max_age == timedelta(0):
            return "immediate (no age filter)"
        return f"older than {self.at.isoformat(timespec='seconds')} ({self.max_age})"


@dataclass(frozen=True, slots=True)
class Entry:
    """A filesystem object discovered during enumeration.

    Attributes are captured once, before any deletion in the sweep.

    Attributes:
        path: Absolute path.
        entry_type: File, directory or symlink.
        mtime: Last modification time (seconds since the epoch).
        size_bytes: Size in bytes; 0 for directories.
        depth: Number of path components below the sweep root.
    """

    path: Path
    entry_type: EntryType
    mtime: float
    size_bytes: int = 0
    depth: int = 0

    @property
    def is_dir(self) -> bool:
        return self.entry_type == EntryType.DIRECTORY


@dataclass(slots=True)
class SweepResult:
    """Accumulated metrics for one sweep.

    Created fresh for every sweep and returned to the caller. Candidates
    are counted whether or not their deletion succeeded, so the deleted
    counters never exceed the candidate counters.

    Attributes:
        candidate_files: Files that met the age and exclusion criteria.
        candidate_dirs: Empty, expired directories selected for removal.
        candidate_bytes: Bytes held by candidates, measured before deletion.
        deleted_files: Candidate files actually removed.
        deleted_dirs: Candidate directories actually removed.
        deleted_bytes: Bytes released by successful deletions.
        errors: Enumeration and root-level failures.
        failures: Per-entry deletion failures (locked, denied, vanished).
        skipped_roots: Roots that did not exist at sweep start.
        dry_run: Whether deletions were only simulated.
    """

    candidate_files: int = 0
    candidate_dirs: int = 0
    candidate_bytes: int = 0
    deleted_files: int = 0
    deleted_dirs: int = 0
    deleted_bytes: int = 0
    errors: int = 0
    failures: int = 0
    skipped_roots: int = 0
    dry_run: bool = False

    @property
    def exit_code(self) -> int:
        """0 when every candidate was handled without errors, 1 otherwise.

        Deletion failures count as well: a run that left expired entries
        behind is reported as partial.
        """
        return 1 if self.errors or self.failures else 0

    @property
    def reclaimed_bytes(self) -> int:
        """Bytes freed (or, in dry-run, that would be freed)."""
        return self.candidate_bytes if self.dry_run else self.deleted_bytes

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output and history storage."""
        return {
            "candidates": {
                "files": self.candidate_files,
                "dirs": self.candidate_dirs,
                "bytes": self.candidate_bytes,
            },
            "deleted": {
                "files": self.deleted_files,
                "dirs": self.deleted_dirs,
                "bytes": self.deleted_bytes,
            },
            "errors": self.errors,
            "failures": self.failures,
            "skipped_roots": self.skipped_roots,
            "dry_run": self.dry_run,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SweepResult":
        """Deserialize from dictionary.

        Raises:
            KeyError: If required sections are missing.
        """
        candidates = data["candidates"]
        deleted = data["deleted"]
        return cls(
            candidate_files=int(candidates["files"]),
            candidate_dirs=int(candidates["dirs"]),
            candidate_bytes=int(candidates["bytes"]),
            deleted_files=int(deleted["files"]),
            deleted_dirs=int(deleted["dirs"]),
            deleted_bytes=int(deleted["bytes"]),
            errors=int(data.get("errors", 0)),
            failures=int(data.get("failures", 0)),
            skipped_roots=int(data.get("skipped_roots", 0)),
            dry_run=bool(data.get("dry_run", False)),
        )
