"""File logger for td.

Records go to a rotating file under ``$TD_HOME/logs`` when TD_HOME is set,
otherwise under the platformdirs user log directory. Nothing is written to
the terminal.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "td_cli"
_LOG_FILE = "td.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def _log_dir() -> Path:
    home = os.environ.get("TD_HOME")
    if home:
        return Path(home) / "logs"
    return Path(user_log_dir(_APP_NAME))


def get_logger() -> logging.Logger:
    """Return the td logger, attaching the rotating file handler on first use."""
    global _logger
    if _logger is not None:
        return _logger

    log_dir = _log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(logging.DEBUG)
    if not logger.handlers:
        logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return _logger
