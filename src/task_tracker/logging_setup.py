# src/task_tracker/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

LOG_FILE_NAME = "task-tracker.log"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Console gets our own records at the handler's level; Python warnings and
    third-party libraries (pymongo) only at ERROR+.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("task_tracker."):
            return True
        return record.levelno >= logging.ERROR


def _file_handler(log_dir: Path, level: int, fmt: logging.Formatter) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(str(log_dir / LOG_FILE_NAME), encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(fmt)
    return fh


def setup_logging(
    *,
    log_dir: str | Path | None = ".local/task-tracker",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> bool:
    """
    Replace root handlers with a filtered stderr handler and, when log_dir is
    given, a full DEBUG log file inside it.

    Returns False if the log file could not be opened; the console handler
    is still installed in that case.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    logging.captureWarnings(True)
    logging.getLogger("pymongo").setLevel(logging.WARNING)

    if log_dir is None:
        return True
    try:
        root.addHandler(_file_handler(Path(log_dir), file_level, fmt))
    except OSError as e:
        logger.warning("Cannot write log file in %s (%s); logging to console only.", log_dir, e)
        return False
    return True
