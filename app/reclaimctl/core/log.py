"""Log sink configuration.

The engine only writes records to the ``reclaimctl`` logger tree. This
module adds the METRIC level used for the final sweep summary and wires
the console (Rich) and optional log-file handlers onto that tree.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

# Between INFO and WARNING: shown by default, hidden by --quiet
METRIC = 25
logging.addLevelName(METRIC, "METRIC")

LOGGER_NAME = "reclaimctl"

FILE_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def log_metric(logger: logging.Logger, msg: str, *args: object) -> None:
    """Emit a record at the METRIC level."""
    logger.log(METRIC, msg, *args)


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
    file_level: str = "INFO",
    console: Console | None = None,
) -> logging.Logger:
    """Attach console and file handlers to the reclaimctl logger.

    Existing handlers are replaced, so repeated calls (as in tests) do
    not duplicate output.

    Args:
        verbose: Show DEBUG records on the console.
        quiet: Only show WARNING and above on the console.
        log_file: Optional file to append records to.
        file_level: Minimum level for the file handler.
        console: Rich console to log to. Defaults to a stderr console.

    Returns:
        The configured package logger.

    Raises:
        OSError: If the log file cannot be opened.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    if quiet:
        console_level = logging.WARNING
    elif verbose:
        console_level = logging.DEBUG
    else:
        console_level = logging.INFO

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(console_level)
    logger.addHandler(rich_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        file_handler.setLevel(logging.getLevelName(file_level))
        logger.addHandler(file_handler)

    return logger
