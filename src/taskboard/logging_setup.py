# src/taskboard/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from pathlib import Path

APP_LOGGER_PREFIX = "taskboard."

# Per-mutation debug chatter; the log file still gets all of it.
DEFAULT_QUIET_LOGGERS: tuple[str, ...] = ("taskboard.tasks.task_store",)

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class ConsoleLogFilter(logging.Filter):
    """
    Console-side filter.

    - quiet loggers (and their children): WARNING+
    - other taskboard loggers: whatever the handler level lets through
    - everything else, 'py.warnings' included: ERROR+
    """

    def __init__(self, quiet_loggers: Iterable[str] = DEFAULT_QUIET_LOGGERS) -> None:
        super().__init__()
        self.quiet_loggers = tuple(q.strip() for q in quiet_loggers if q.strip())

    def _is_quiet(self, name: str) -> bool:
        return any(name == q or name.startswith(q + ".") for q in self.quiet_loggers)

    def filter(self, record: logging.LogRecord) -> bool:
        if self._is_quiet(record.name):
            return record.levelno >= logging.WARNING
        if record.name.startswith(APP_LOGGER_PREFIX):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_file: str | Path = ".local/taskboard/taskboard.log",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
    quiet_loggers: Iterable[str] = DEFAULT_QUIET_LOGGERS,
) -> None:
    """
    Install a filtered stderr handler and a full file handler on the root logger.

    Replaces any handlers already on the root logger; call once at startup.
    """
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(ConsoleLogFilter(quiet_loggers))
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
