"""Unit tests for log sink configuration."""

import io
import logging
from pathlib import Path

import pytest
from reclaimctl.core.log import LOGGER_NAME, METRIC, log_metric, setup_logging
from rich.console import Console
from rich.logging import RichHandler


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=200, color_system=None), buffer


class TestMetricLevel:
    """Tests for the METRIC level."""

    def test_level_registered(self) -> None:
        assert METRIC == 25
        assert logging.getLevelName(METRIC) == "METRIC"
        assert logging.INFO < METRIC < logging.WARNING

    def test_log_metric(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger(f"{LOGGER_NAME}.test")

        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            log_metric(logger, "Deleted -> Files: %d", 3)

        assert caplog.records[-1].levelno == METRIC
        assert caplog.records[-1].getMessage() == "Deleted -> Files: 3"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_default_console_shows_info(self) -> None:
        console, buffer = _console()
        logger = setup_logging(console=console)

        logging.getLogger(f"{LOGGER_NAME}.engine").info("Scanning /tmp/root")
        logging.getLogger(f"{LOGGER_NAME}.engine").debug("hidden detail")

        output = buffer.getvalue()
        assert "Scanning /tmp/root" in output
        assert "hidden detail" not in output
        assert logger.propagate is False

    def test_verbose_shows_debug(self) -> None:
        console, buffer = _console()
        setup_logging(verbose=True, console=console)

        logging.getLogger(LOGGER_NAME).debug("Deleted /tmp/x")

        assert "Deleted /tmp/x" in buffer.getvalue()

    def test_quiet_shows_warnings_only(self) -> None:
        console, buffer = _console()
        logger = setup_logging(quiet=True, console=console)

        logger.info("Scanning /tmp/root")
        log_metric(logger, "Candidates -> Files: 1")
        logger.warning("Path not found, skipping: /nowhere")

        output = buffer.getvalue()
        assert "Scanning" not in output
        assert "Candidates" not in output
        assert "Path not found" in output

    def test_repeated_setup_replaces_handlers(self) -> None:
        console, _ = _console()
        setup_logging(console=console)
        logger = setup_logging(console=console)

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)

    def test_file_handler(self, tmp_path: Path) -> None:
        """Records at or above the file level are appended with timestamps."""
        console, _ = _console()
        log_file = tmp_path / "logs" / "reclaimctl.log"
        logger = setup_logging(quiet=True, log_file=log_file, file_level="INFO", console=console)

        logger.debug("not written")
        log_metric(logger, "Deleted -> Files: %d, Dirs: %d, Size: %s", 2, 1, "12 B")

        content = log_file.read_text(encoding="utf-8")
        assert "not written" not in content
        assert "METRIC Deleted -> Files: 2, Dirs: 1, Size: 12 B" in content

    def test_file_handler_appends(self, tmp_path: Path) -> None:
        console, _ = _console()
        log_file = tmp_path / "reclaimctl.log"
        log_file.write_text("previous run\n", encoding="utf-8")

        logger = setup_logging(log_file=log_file, console=console)
        logger.warning("new run")

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "previous run"
        assert lines[-1].endswith("WARNING new run")
