"""Structured Logging — JSON formatter and setup for the session client.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (operation, status_code, error_code, route...) surfaced when present
    - JSON format by default, human-readable when fmt != "json"
    - setup_logging is idempotent: it replaces the handler it installed before

Design Decisions:
    - JSONFormatter on stdlib logging: no extra dependency
    - setup_logging called once by open_session()
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "operation", "status_code", "error_code", "category",
    "route", "session_status", "slot",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class _AuthSessionHandler(logging.StreamHandler):
    """Marker subclass so setup_logging can find its own handler."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure root logging for the application."""
    for existing in list(logging.root.handlers):
        if isinstance(existing, _AuthSessionHandler):
            logging.root.removeHandler(existing)
    handler = _AuthSessionHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
