"""Structured Logging — JSON formatter and setup for record cache observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (object_name, record_id, field_name, error_code) surfaced when present
    - JSON format in production, human-readable in development

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once by the embedding host at startup, never at import time;
      level and format come from Settings unless passed explicitly
"""

import logging
import json
from datetime import datetime, timezone

from object_record.config import get_settings

EXTRA_KEYS = (
    "object_name", "record_id", "field_name", "type_name",
    "error_code", "unknown_fields",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str | None = None, fmt: str | None = None) -> logging.Handler:
    """Configure root logging. Returns the installed handler.

    Level and format default to OBJECT_RECORD_LOG_LEVEL / OBJECT_RECORD_LOG_FORMAT.
    """
    settings = get_settings()
    level = level or settings.log_level
    fmt = fmt or settings.log_format
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
