"""Unit tests for StateManager.

Tests for the StateManager class that handles sweep history persistence.
"""

import json
import logging
from pathlib import Path

import pytest
from reclaimctl.core.state import StateManager
from reclaimctl.engine.models import SweepMode, SweepResult
from reclaimctl.models.history import SweepRecord, create_sweep_record


def _record(mode: SweepMode = SweepMode.TEMP, deleted_files: int = 1) -> SweepRecord:
    return create_sweep_record(
        mode,
        ["/tmp/root"],
        SweepResult(candidate_files=deleted_files, deleted_files=deleted_files),
    )


class TestStateManagerInit:
    """Tests for StateManager initialization."""

    def test_default_state_dir_follows_xdg(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path))

        manager = StateManager()

        assert manager.history_path == tmp_path / "reclaimctl" / "history.jsonl"

    def test_custom_state_dir(self, tmp_path: Path) -> None:
        manager = StateManager(state_dir=tmp_path)

        assert manager.history_path == tmp_path / "history.jsonl"


class TestRecordSweep:
    """Tests for StateManager.record_sweep."""

    @pytest.fixture
    def manager(self, tmp_path: Path) -> StateManager:
        """Create a StateManager with temporary directory."""
        return StateManager(state_dir=tmp_path / "state")

    def test_creates_file_and_directories(self, manager: StateManager) -> None:
        assert not manager.history_path.exists()

        manager.record_sweep(_record())

        assert manager.history_path.exists()

    def test_creates_default_state_dir(self) -> None:
        """The default XDG state directory is created on first write."""
        manager = StateManager()

        manager.record_sweep(_record())

        assert manager.history_path.exists()

    def test_writes_one_json_object_per_line(self, manager: StateManager) -> None:
        manager.record_sweep(_record(SweepMode.TEMP))
        manager.record_sweep(_record(SweepMode.CACHE))

        lines = manager.history_path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert [json.loads(line)["mode"] for line in lines] == ["temp", "cache"]


class TestGetHistory:
    """Tests for StateManager.get_history."""

    @pytest.fixture
    def manager(self, tmp_path: Path) -> StateManager:
        return StateManager(state_dir=tmp_path)

    def test_missing_file_is_empty(self, manager: StateManager) -> None:
        assert manager.get_history() == []

    def test_newest_first(self, manager: StateManager) -> None:
        for count in (1, 2, 3):
            manager.record_sweep(_record(deleted_files=count))

        history = manager.get_history()

        assert [r.result.deleted_files for r in history] == [3, 2, 1]

    def test_limit(self, manager: StateManager) -> None:
        for count in (1, 2, 3):
            manager.record_sweep(_record(deleted_files=count))

        history = manager.get_history(limit=2)

        assert [r.result.deleted_files for r in history] == [3, 2]

    def test_corrupt_lines_skipped(
        self, manager: StateManager, caplog: pytest.LogCaptureFixture
    ) -> None:
        manager.record_sweep(_record(deleted_files=1))
        with manager.history_path.open("a", encoding="utf-8") as f:
            f.write("{not json\n")
            f.write('{"id": "abc"}\n')
            f.write("\n")
        manager.record_sweep(_record(deleted_files=2))

        with caplog.at_level(logging.WARNING, logger="reclaimctl"):
            history = manager.get_history()

        assert [r.result.deleted_files for r in history] == [2, 1]
        assert "Skipping corrupt history line 2" in caplog.text
        assert "Skipping corrupt history line 3" in caplog.text
