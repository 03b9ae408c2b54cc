"""Reclamation engine.

Sweeps directory trees in two passes per root:

1. File pass: every file older than the cutoff whose name matches no
   exclusion pattern is a candidate and is deleted.
2. Directory pass: directories are visited deepest first. An expired
   directory that is empty by then is a candidate and is removed.

Timestamps are captured during a single enumeration before either pass
runs, so removing a file does not make its parent look freshly modified.
Per-entry failures are logged and counted but never stop the sweep.
"""

import logging
import os
import stat
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from reclaimctl.core.log import log_metric
from reclaimctl.engine.exclusions import ExclusionSet
from reclaimctl.engine.models import Cutoff, Entry, EntryType, Root, SweepMode, SweepResult
from reclaimctl.engine.operator import EntryOperator, directory_size
from reclaimctl.utils.formatting import format_bytes

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Tree:
    """Entries discovered under one root."""

    root: Entry
    files: list[Entry] = field(default_factory=list)
    dirs: list[Entry] = field(default_factory=list)


@dataclass(slots=True)
class _SweepState:
    """Bookkeeping shared by every root of one sweep.

    Roots may nest. Sharing this state keeps an inner root's entries from
    being counted twice and keeps a preserved inner root out of the outer
    root's directory pass.

    Attributes:
        preserved: Paths of every root with ``preserve_root`` set.
        visited: Paths already enumerated by an earlier root.
        removed: Paths deleted, or simulated as deleted, so far.
    """

    preserved: set[str]
    visited: set[str] = field(default_factory=set)
    removed: set[str] = field(default_factory=set)


def _is_link_like(child: os.DirEntry[str], st: os.stat_result) -> bool:
    """Symlinks and Windows reparse points (junctions) are never descended into."""
    if child.is_symlink():
        return True
    return bool(getattr(st, "st_file_attributes", 0) & stat.FILE_ATTRIBUTE_REPARSE_POINT)


class ReclamationEngine:
    """Age-based, exclusion-aware sweep over one or more roots.

    Args:
        cutoff: Age threshold, fixed for the whole sweep.
        exclusions: File-name patterns that are never deleted.
        dry_run: Identify candidates without deleting anything.
        measure_directories: Count the bytes still under a candidate
            directory at deletion time towards the size metrics.
        mode: Cleanup mode, used for log records only.
        operator: Deletion operator. Defaults to an EntryOperator
            matching ``dry_run``.
    """

    def __init__(
        self,
        cutoff: Cutoff,
        exclusions: ExclusionSet | None = None,
        *,
        dry_run: bool = False,
        measure_directories: bool = False,
        mode: SweepMode = SweepMode.CUSTOM,
        operator: EntryOperator | None = None,
    ) -> None:
        self._cutoff = cutoff
        self._exclusions = exclusions if exclusions is not None else ExclusionSet()
        self._dry_run = dry_run
        self._measure_directories = measure_directories
        self._mode = mode
        self._operator = operator if operator is not None else EntryOperator(dry_run=dry_run)

    def sweep(self, roots: Iterable[Root]) -> SweepResult:
        """Sweep every root in order and return the accumulated metrics.

        Args:
            roots: Roots to sweep. Each is processed completely before
                the next one starts.

        Returns:
            A new SweepResult owned by the caller.
        """
        roots = list(roots)
        result = SweepResult(dry_run=self._dry_run)
        state = _SweepState(preserved={str(r.path) for r in roots if r.preserve_root})

        logger.info(
            "Sweep started: mode=%s, cutoff=%s, roots=%d%s",
            self._mode.value,
            self._cutoff.describe(),
            len(roots),
            " (dry-run)" if self._dry_run else "",
        )

        for root in roots:
            self._sweep_root(root, result, state)

        log_metric(
            logger,
            "Candidates -> Files: %d, Dirs: %d, Size: %s",
            result.candidate_files,
            result.candidate_dirs,
            format_bytes(result.candidate_bytes),
        )
        log_metric(
            logger,
            "Deleted -> Files: %d, Dirs: %d, Size: %s",
            result.deleted_files,
            result.deleted_dirs,
            format_bytes(result.deleted_bytes),
        )
        if result.failures:
            logger.warning("%d candidate(s) could not be deleted", result.failures)
        if result.errors:
            logger.error("Sweep finished with %d error(s)", result.errors)

        return result

    def _sweep_root(self, root: Root, result: SweepResult, state: _SweepState) -> None:
        """Run both passes over a single root."""
        if not root.path.is_dir():
            logger.warning("Path not found, skipping: %s", root.path)
            result.skipped_roots += 1
            return

        logger.info("Scanning %s", root.path)

        try:
            tree = self._enumerate(root.path, result, state.visited)
            self._file_pass(tree.files, result, state.removed)

            dirs = tree.dirs if root.preserve_root else [*tree.dirs, tree.root]
            dirs = [d for d in dirs if str(d.path) not in state.preserved]
            self._directory_pass(dirs, result, state.removed)
        except OSError as e:
            logger.error("Sweep of %s aborted: %s", root.path, e)
            result.errors += 1

    def _enumerate(self, root: Path, result: SweepResult, visited: set[str]) -> _Tree:
        """Walk the tree under ``root`` without following links or junctions.

        A directory that cannot be listed is logged, counted as an error
        and its subtree skipped; its siblings are still walked. Entries in
        ``visited`` belong to an earlier, enclosing or enclosed root and
        are skipped together with their subtrees.

        Raises:
            OSError: If the root itself cannot be stat'ed.
        """
        root_stat = root.stat()
        tree = _Tree(
            root=Entry(
                path=root,
                entry_type=EntryType.DIRECTORY,
                mtime=root_stat.st_mtime,
                depth=0,
            )
        )

        visited.add(str(root))
        unreadable: set[Path] = set()
        stack: list[tuple[Path, int]] = [(root, 0)]

        while stack:
            current, depth = stack.pop()
            try:
                with os.scandir(current) as it:
                    children = list(it)
            except OSError as e:
                logger.error("Cannot enumerate %s, skipping subtree: %s", current, e)
                result.errors += 1
                unreadable.add(current)
                continue

            for child in children:
                key = str(Path(child.path))
                if key in visited:
                    continue
                try:
                    st = child.stat(follow_symlinks=False)
                    if _is_link_like(child, st):
                        entry_type = EntryType.SYMLINK
                    elif child.is_dir(follow_symlinks=False):
                        entry_type = EntryType.DIRECTORY
                    else:
                        entry_type = EntryType.FILE
                except OSError as e:
                    # Vanished between listing and stat
                    logger.debug("Cannot stat %s: %s", child.path, e)
                    continue

                visited.add(key)
                entry = Entry(
                    path=Path(child.path),
                    entry_type=entry_type,
                    mtime=st.st_mtime,
                    size_bytes=0 if entry_type == EntryType.DIRECTORY else st.st_size,
                    depth=depth + 1,
                )
                if entry.is_dir:
                    tree.dirs.append(entry)
                    stack.append((entry.path, entry.depth))
                else:
                    tree.files.append(entry)

        if unreadable:
            tree.dirs = [d for d in tree.dirs if d.path not in unreadable]
        return tree

    def _file_pass(self, files: list[Entry], result: SweepResult, removed: set[str]) -> None:
        for entry in files:
            if not self._is_candidate(entry):
                continue

            # Size captured at discovery, before the deletion attempt
            result.candidate_files += 1
            result.candidate_bytes += entry.size_bytes

            outcome = self._operator.delete(entry)
            if not outcome.success:
                logger.warning("Could not delete file %s: %s", entry.path, outcome.error)
                result.failures += 1
                continue

            removed.add(str(entry.path))
            if not outcome.dry_run:
                result.deleted_files += 1
                result.deleted_bytes += entry.size_bytes

    def _directory_pass(self, dirs: list[Entry], result: SweepResult, removed: set[str]) -> None:
        # Deepest first, so children are gone before their parent is checked
        ordered = sorted(dirs, key=lambda d: (d.depth, len(str(d.path))), reverse=True)

        for entry in ordered:
            if not self._is_candidate(entry):
                continue

            try:
                if not self._is_empty(entry.path, removed):
                    continue
            except OSError as e:
                logger.warning("Cannot inspect directory %s: %s", entry.path, e)
                continue

            # The directory is empty here, so this only picks up files created
            # since the emptiness check and is normally 0
            size = directory_size(entry.path, removed) if self._measure_directories else 0
            result.candidate_dirs += 1
            result.candidate_bytes += size

            outcome = self._operator.delete(entry)
            if not outcome.success:
                logger.warning("Could not delete directory %s: %s", entry.path, outcome.error)
                result.failures += 1
                continue

            removed.add(str(entry.path))
            if not outcome.dry_run:
                result.deleted_dirs += 1
                result.deleted_bytes += size

    def _is_candidate(self, entry: Entry) -> bool:
        return self._cutoff.is_expired(entry.mtime) and not self._exclusions.matches(entry.path)

    @staticmethod
    def _is_empty(path: Path, removed: set[str]) -> bool:
        """Check that a directory has no children left.

        Children deleted earlier in this sweep (or whose deletion was
        simulated in dry-run) count as absent.

        Raises:
            OSError: If the directory cannot be listed.
        """
        with os.scandir(path) as it:
            return all(str(Path(child.path)) in removed for child in it)
