"""Logging setup for lazypick.

The picker owns the terminal while it runs, so log records never go to the
console: ``setup_logging`` attaches a rotating JSON-lines file handler to the
``lazypick`` logger and nothing else.

Usage:
    from lazypick.log import get_logger, setup_logging

    setup_logging("DEBUG")  # once, from the CLI
    logger = get_logger(__name__)
    logger.info("search committed", extra={"context": {"query": "ed"}})
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from platformdirs import user_log_dir

APP_NAME = "lazypick"
LOG_FILENAME = "lazypick.log"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3

_handler: logging.Handler | None = None


class JSONFormatter(logging.Formatter):
    """Format records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if context:
            data["context"] = context
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``lazypick`` namespace."""
    if name == APP_NAME or name.startswith(APP_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_NAME}.{name}")


def setup_logging(level: str | int = "WARNING", log_file: Path | None = None) -> Path:
    """Install the file handler on the package logger and return its path.

    Calling again replaces the previous handler, so tests and the CLI can
    redirect logs without stacking handlers.
    """
    global _handler

    path = Path(log_file) if log_file is not None else DEFAULT_LOG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger(APP_NAME)
    if _handler is not None:
        root.removeHandler(_handler)
        _handler.close()

    handler = RotatingFileHandler(path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8")
    handler.setFormatter(JSONFormatter())
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    root.propagate = False
    _handler = handler
    return path


def teardown_logging() -> None:
    """Detach and close the handler installed by ``setup_logging``."""
    global _handler
    if _handler is None:
        return
    root = logging.getLogger(APP_NAME)
    root.removeHandler(_handler)
    root.propagate = True
    root.setLevel(logging.NOTSET)
    _handler.close()
    _handler = None


logging.getLogger(APP_NAME).addHandler(logging.NullHandler())
