"""
Logging configuration — setup for the groot CLI.

The library itself never configures logging; host programs own that.
Every module does ``logger = logging.getLogger(__name__)`` and inherits
whatever the host (or ``groot.main``) sets up.

Only the ``groot`` logger gets a level; the root logger keeps its own,
so other libraries stay at their defaults.

Levels are resolved in precedence order:
    CLI flag  >  GROOT_LOG_LEVEL env var  >  WARNING (default)

Optional file output via GROOT_LOG_FILE / GROOT_LOG_FILE_LEVEL env vars.
"""

from __future__ import annotations

import logging
import sys

# Logger every groot module logs under
PACKAGE_LOGGER = "groot"

# WARNING and up — message only, like the CLI's own output
_FMT_PLAIN = "%(message)s"

# INFO — which step of the resolution said it
_FMT_STEPS = "%(asctime)s [%(name)s] %(message)s"
_DATEFMT_STEPS = "%H:%M:%S"

# DEBUG and log files — full location
_FMT_TRACE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def _console_handler(level: int) -> logging.Handler:
    if level <= logging.DEBUG:
        formatter = logging.Formatter(_FMT_TRACE, datefmt=_DATEFMT_STEPS)
    elif level <= logging.INFO:
        formatter = logging.Formatter(_FMT_STEPS, datefmt=_DATEFMT_STEPS)
    else:
        formatter = logging.Formatter(_FMT_PLAIN)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FMT_TRACE, datefmt=_DATEFMT_FILE))
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Route groot's log records to stderr (and optionally a file).

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.
    """
    console_level = _parse_level(level)
    handlers = [_console_handler(console_level)]
    package_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handlers.append(_file_handler(log_file, file_level))
        package_level = min(package_level, file_level)

    root = logging.getLogger()
    root.handlers[:] = handlers

    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level)
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
