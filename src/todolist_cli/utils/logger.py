"""Application-wide logger writing to platformdirs user_log_dir.

Every module logs through ``logging.getLogger(__name__)``; those loggers are
children of the ``todolist_cli`` logger configured here, so all records end
up in one rotating file. ``todolist --verbose`` additionally echoes them to
stderr.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "todolist_cli"
_LOG_FILE = "todolist.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_LEVEL_ENV = "TODOLIST_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_logger: logging.Logger | None = None


def _level_from_env() -> int:
    name = os.environ.get(_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.DEBUG
    return level if isinstance(level, int) else logging.DEBUG


def log_file_path() -> Path:
    """Where the rotating application log lives."""
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def get_logger() -> logging.Logger:
    """Return the singleton application logger, initialising it on first call.

    The file handler's level comes from ``TODOLIST_LOG_LEVEL`` (default
    DEBUG).
    """
    global _logger
    if _logger is not None:
        return _logger

    path = log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    if not logger.handlers:
        handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setLevel(_level_from_env())
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
        logger.addHandler(handler)

    _logger = logger
    return _logger


def enable_console_logging(level: int = logging.INFO) -> logging.Handler:
    """Echo application log records to stderr (used by ``--verbose``)."""
    logger = get_logger()
    for handler in logger.handlers:
        if getattr(handler, "_todolist_console", False):
            handler.setLevel(level)
            return handler

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    handler._todolist_console = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return handler
