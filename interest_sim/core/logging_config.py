"""
Structured logging setup.

Log records are emitted as single-line JSON so they can be shipped as-is.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

LOGGER_NAME = "interest_sim"


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.module,
            "message": record.getMessage(),
            "game_id": getattr(record, "game_id", None),
            "action": getattr(record, "action", None),
        }
        entry = {key: value for key, value in entry.items() if value is not None}
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a JSON console handler to the package logger (idempotent)."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False
    return logger
