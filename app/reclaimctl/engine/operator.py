"""Single-entry deletion operator.

Deletes one file or one empty directory at a time with dry-run support.
Per-entry failures are returned as results, never raised, so a locked
file cannot abort a sweep.
"""

import logging
import os
import stat
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from reclaimctl.engine.models import Entry, EntryType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Result of a single deletion attempt.

    Attributes:
        path: Path that was operated on.
        success: Whether the entry is gone (or would be, in dry-run).
        error: Error message if the deletion failed, None otherwise.
        dry_run: Whether this was a simulated deletion.
    """

    path: str
    success: bool
    error: str | None = None
    dry_run: bool = False


class EntryOperator:
    """Deletes files and empty directories.

    Directories are removed with :func:`os.rmdir`, which refuses to
    remove a non-empty directory; that refusal is reported like any
    other failure.

    Attributes:
        _dry_run: If True, report what would be deleted without deleting.
    """

    def __init__(self, dry_run: bool = False) -> None:
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def delete(self, entry: Entry) -> DeletionResult:
        """Delete a single entry.

        Args:
            entry: Entry discovered during enumeration.

        Returns:
            DeletionResult indicating success or failure.
        """
        path = str(entry.path)

        if self._dry_run:
            logger.debug("Dry-run: would delete %s", path)
            return DeletionResult(path=path, success=True, dry_run=True)

        try:
            if entry.entry_type == EntryType.DIRECTORY:
                self._remove(os.rmdir, path)
            else:
                self._remove(os.unlink, path)
        except FileNotFoundError:
            return DeletionResult(path=path, success=False, error=f"Already removed: {path}")
        except OSError as e:
            return DeletionResult(path=path, success=False, error=str(e))

        logger.debug("Deleted %s", path)
        return DeletionResult(path=path, success=True)

    @staticmethod
    def _remove(func: Callable[[str], None], path: str) -> None:
        """Call ``func(path)``, retrying once after clearing a read-only bit.

        Windows refuses to delete read-only files and directories with
        PermissionError; any other platform never takes the retry path
        unless the entry really is write-protected.
        """
        try:
            func(path)
        except PermissionError:
            mode = os.lstat(path).st_mode
            if mode & stat.S_IWRITE:
                raise
            os.chmod(path, mode | stat.S_IWRITE)
            func(path)


def directory_size(path: Path, skip: set[str] | None = None) -> int:
    """Sum the sizes of files currently under ``path``.

    Best-effort: entries that vanish or cannot be read while walking are
    ignored, so the figure may be low under concurrent modification.

    Args:
        path: Directory to measure.
        skip: File paths to leave out, e.g. files already deleted (or
            simulated as deleted) earlier in the sweep.

    Returns:
        Total size in bytes.
    """
    total = 0
    for dirpath, _dirnames, filenames in os.walk(path):
        for name in filenames:
            file_path = os.path.join(dirpath, name)
            if skip and str(Path(file_path)) in skip:
                continue
            try:
                total += os.lstat(file_path).st_size
            except OSError:
                continue
    return total
