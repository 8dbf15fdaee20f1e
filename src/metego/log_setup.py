"""Logging setup for command-line execution.

Records go to stderr as one JSON object per line so stdout stays reserved for
the forecast itself.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from .redaction import sanitize_text

JSON_HANDLER_NAME = "metego-json-console"


class JsonConsoleFormatter(logging.Formatter):
    """Render a record as a single redacted JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": sanitize_text(record.getMessage()),
        }
        if record.exc_info:
            event["exception"] = sanitize_text(self.formatException(record.exc_info))
        return json.dumps(event, default=str, ensure_ascii=False)


def json_handlers(logger: logging.Logger) -> list[logging.Handler]:
    """Return the JSON console handlers installed on ``logger``."""
    return [handler for handler in logger.handlers if handler.get_name() == JSON_HANDLER_NAME]


def setup_logger(name: str = "metego", level: int = logging.INFO) -> logging.Logger:
    """Create and configure the process-wide metego logger.

    Handlers attached by other tooling are left alone; the JSON console
    handler is installed once and only its level changes on later calls.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    if json_handlers(logger):
        return logger

    handler = logging.StreamHandler()
    handler.set_name(JSON_HANDLER_NAME)
    handler.setFormatter(JsonConsoleFormatter())
    logger.addHandler(handler)
    return logger
