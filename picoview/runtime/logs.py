"""File logging setup for interactive sessions.

The terminal belongs to the renderer while the viewer runs, so records go
to a rotating file under the user log directory instead of a stream.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_DIR = Path(user_log_dir(APP_NAME, appauthor=False))
LOG_FILENAME = f"{APP_NAME}.log"
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 4
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str) -> Path | None:
    """Attach a rotating file handler to the ``picoview`` logger.

    Repeated calls reuse the handler already writing to the same file and
    only update the level. Returns the log file path, or ``None`` when the
    log file cannot be opened; records are then discarded.
    """
    log_path = LOG_DIR / LOG_FILENAME

    logger = logging.getLogger(APP_NAME)
    logger.setLevel(level)
    logger.propagate = False
    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler) and Path(handler.baseFilename) == log_path.absolute():
            return log_path

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_path,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError:
        if not any(isinstance(existing, logging.NullHandler) for existing in logger.handlers):
            logger.addHandler(logging.NullHandler())
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return log_path
