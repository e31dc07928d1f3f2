"""Structured JSON logging with correlation ID support.

Extra context goes in ``extra={"extra_fields": {...}}`` and is merged into
the JSON line. Only identifiers and counts belong there, never guest data.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

from .correlation import get_correlation_id

SERVICE_NAME = "innkeep"


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = get_correlation_id()
        if correlation_id:
            log_obj["correlationId"] = correlation_id

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            log_obj.update(extra_fields)

        return json.dumps(log_obj, default=str)


def _level_from_env() -> int:
    level = logging.getLevelName(os.environ.get("LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    """Attach the JSON handler to the package root logger.

    Domain modules log through plain ``logging.getLogger(__name__)`` and
    reach this handler by propagation.
    """
    root = logging.getLogger(SERVICE_NAME)
    if not any(isinstance(h.formatter, JsonFormatter) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter())
        root.addHandler(handler)
    root.setLevel(_level_from_env())
    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger whose output goes through the JSON handler."""
    configure_logging()
    return logging.getLogger(name)
