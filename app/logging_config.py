"""
Logging setup for the guestbook service.

Every line goes to stdout with Redis credentials scrubbed. ENV=production
(or LOG_FORMAT=json) switches to one JSON object per line.

Usage:
    from app.logging_config import setup_logging
    setup_logging()  # once, at startup
"""

import json
import logging
import os
import re
import sys
from datetime import datetime, timezone
from typing import Any

REDACTED = "[REDACTED]"

_URL_PASSWORD = re.compile(r"(redis://[^:/@\s]*:)[^@\s]+@", re.IGNORECASE)
_KEY_VALUE_SECRET = re.compile(
    r'((?:password|secret|token)\s*[=:]\s*)["\']?[^\s"\',]+["\']?', re.IGNORECASE
)

# Attributes every LogRecord has; anything else came in through ``extra``
_RECORD_FIELDS = set(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def mask_secret_url(url: str) -> str:
    """Replace the password in any redis:// URL inside ``url``.

    >>> mask_secret_url("redis://:hunter2@db:6379")
    'redis://:[REDACTED]@db:6379'
    """
    if not url:
        return url
    return _URL_PASSWORD.sub(rf"\1{REDACTED}@", url)


def redact_sensitive_data(message: Any) -> str:
    """Scrub Redis URL passwords and ``password=...`` style pairs."""
    if not isinstance(message, str):
        message = str(message)
    return _KEY_VALUE_SECRET.sub(rf"\1{REDACTED}", mask_secret_url(message))


class RedactingFormatter(logging.Formatter):
    """Plain text lines, scrubbed after formatting."""

    def format(self, record: logging.LogRecord) -> str:
        return redact_sensitive_data(super().format(record))


class JSONFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` fields are copied in."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_sensitive_data(record.getMessage()),
        }
        if record.exc_info:
            entry["exception"] = redact_sensitive_data(self.formatException(record.exc_info))

        for key, value in record.__dict__.items():
            if key in _RECORD_FIELDS:
                continue
            entry[key] = redact_sensitive_data(value) if isinstance(value, str) else value

        return json.dumps(entry, default=str)


def setup_logging() -> None:
    """Install a single stdout handler on the root logger.

    LOG_LEVEL picks the level (default INFO). LOG_FORMAT=json|text picks the
    format; without it, ENV=production means json.
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level = "INFO"

    log_format = os.getenv("LOG_FORMAT") or (
        "json" if os.getenv("ENV") == "production" else "text"
    )

    handler = logging.StreamHandler(sys.stdout)
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            RedactingFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)

    for name in ("uvicorn.access", "uvicorn.error", "redis"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(f"Logging configured: level={level}, format={log_format}")
