"""Structured Logging — JSON/text formatters with secret redaction.

Invariants:
    - All JSON logs include timestamp, level, logger name, and message
    - Extra fields (operation, user_id, error_code, path) surfaced when present
    - Extras named like a secret (password, password_hash, ...) are emitted as
      REDACTED, never with their value
    - bcrypt hashes are masked in messages and tracebacks in both formats

Design Decisions:
    - stdlib logging formatters, no third-party log library
    - Redaction lives in the formatter so a careless log call cannot bypass it
    - setup_logging called once on startup via lifespan
"""

import json
import logging
import re
from datetime import datetime, timezone

REDACTED = "[REDACTED]"

_EXTRA_FIELDS = ("operation", "user_id", "error_code", "path")
_SECRET_FIELDS = ("password", "password_hash", "new_password")
_BCRYPT_HASH = re.compile(r"\$2[abxy]?\$\d{2}\$[./A-Za-z0-9]{53}")


def redact_secrets(text: str) -> str:
    """Mask anything shaped like a bcrypt hash."""
    return _BCRYPT_HASH.sub(REDACTED, text)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_secrets(record.getMessage()),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        for key in _SECRET_FIELDS:
            if key in record.__dict__:
                log[key] = REDACTED
        if record.exc_info:
            log["exception"] = redact_secrets(self.formatException(record.exc_info))
        return json.dumps(log, ensure_ascii=False)


class RedactingTextFormatter(logging.Formatter):
    """Human-readable format for development, hashes masked."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        return redact_secrets(super().format(record))


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(RedactingTextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
