"""Sweep history persistence.

Live sweeps are appended to ``history.jsonl`` in the state directory, one
SweepRecord per line. Appending keeps every write independent of earlier
ones, so an interrupted write damages at most its own line.
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

from reclaimctl.core.paths import ensure_state_dir, get_state_dir
from reclaimctl.models.history import SweepRecord

logger = logging.getLogger(__name__)


class StateManager:
    """Reads and appends sweep records.

    Args:
        state_dir: Directory for ``history.jsonl``. Defaults to the XDG
            state directory, created on first write.
    """

    HISTORY_FILENAME = "history.jsonl"

    def __init__(self, state_dir: Path | None = None) -> None:
        self._custom_dir = state_dir

    @property
    def history_path(self) -> Path:
        state_dir = self._custom_dir if self._custom_dir is not None else get_state_dir()
        return state_dir / self.HISTORY_FILENAME

    def record_sweep(self, record: SweepRecord) -> None:
        """Append one record.

        Raises:
            RuntimeError: If the default state directory cannot be created.
            OSError: If the history file cannot be written.
        """
        if self._custom_dir is None:
            ensure_state_dir()
        else:
            self._custom_dir.mkdir(parents=True, exist_ok=True)

        with self.history_path.open("a", encoding="utf-8") as f:
            f.write(f"{record.to_json_line()}\n")

    def get_history(self, limit: int | None = None) -> list[SweepRecord]:
        """Return stored records, newest first.

        Args:
            limit: Maximum number of records. None returns all of them.
        """
        records = list(self._iter_records())
        records.reverse()
        return records if limit is None else records[:limit]

    def _iter_records(self) -> Iterator[SweepRecord]:
        """Yield records oldest first, skipping blank and unreadable lines."""
        path = self.history_path
        if not path.exists():
            return

        with path.open(encoding="utf-8") as f:
            for number, raw in enumerate(f, start=1):
                if not raw.strip():
                    continue
                try:
                    yield SweepRecord.from_json_line(raw)
                except (json.JSONDecodeError, KeyError, ValueError, TypeError) as e:
                    logger.warning("Skipping corrupt history line %d: %s", number, e)
