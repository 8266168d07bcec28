"""File logging for todovault.

Everything goes to one rotating file under the platform log directory.
Components log through children of the ``todovault`` logger
(``todovault.store``, ``todovault.auth`` ...) so a line shows which layer
wrote it. Nothing is printed to the terminal; the CLI reports errors itself.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "todovault"
_LOG_FILE = "todovault.log"
_LEVEL_ENV = "TODOVAULT_LOG_LEVEL"
_MAX_BYTES = 1024 * 1024
_BACKUP_COUNT = 2

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    """Location of the current log file."""
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def _resolve_level() -> int:
    name = os.environ.get(_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _has_file_handler(logger: logging.Logger, path: Path) -> bool:
    """Whether our rotating handler already writes to *path*.

    Rotating handlers for another path are closed and removed. Handlers of
    other types (test capture, user additions) are left alone.
    """
    found = False
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.handlers.RotatingFileHandler):
            continue
        if handler.baseFilename == os.path.abspath(path):
            found = True
        else:
            logger.removeHandler(handler)
            handler.close()
    return found


def _root_logger() -> logging.Logger:
    global _logger
    if _logger is not None:
        return _logger

    path = log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(_resolve_level())
    if not _has_file_handler(logger, path):
        handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return _logger


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the application logger, or the child for *component*.

    The file handler is attached on first use.
    """
    root = _root_logger()
    if component is None:
        return root
    return root.getChild(component)
