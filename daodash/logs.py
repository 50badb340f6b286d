"""Logging setup for interactive sessions.

The terminal belongs to the dashboard frame while it runs, so records go to a
file under the platform log directory instead of stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILENAME = "daodash.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_LOG_LEVEL = "WARNING"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def configure_logging(log_file: Path | None = None, level: str | None = None) -> Path | None:
    """Attach a file handler to the package logger.

    Returns the log path, or ``None`` when the file cannot be opened; logging
    is then left unconfigured rather than falling back to the terminal.
    """
    path = log_file if log_file is not None else default_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("daodash")
    for existing in list(package_logger.handlers):
        if isinstance(existing, logging.FileHandler):
            package_logger.removeHandler(existing)
            existing.close()
    package_logger.addHandler(handler)
    package_logger.setLevel((level or DEFAULT_LOG_LEVEL).upper())
    # Keep records away from the root logger's stderr handler.
    package_logger.propagate = False
    return path
