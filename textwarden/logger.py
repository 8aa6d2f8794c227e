"""
Name: Structured Logger Configuration

Responsibilities:
  - Configure JSON-structured logging
  - Automatically include request context (request_id, path, method)
  - Redact sensitive fields and trim oversized values
  - Include stack traces for exceptions

Collaborators:
  - context.py: Request-scoped context vars
  - config.py: log_level / log_json
  - Python logging module (stdlib)

Constraints:
  - Never log secrets (API keys, tokens)
  - Never log full user text at INFO level (lengths only)

Notes:
  - Import as: from textwarden.logger import logger
  - Levels: DEBUG, INFO, WARNING, ERROR, CRITICAL
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

# R: LogRecord attributes that are not copied as "extra" fields
_INTERNAL_LOGRECORD_KEYS: set[str] = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "taskName",
}


class _Redactor:
    """R: Redact sensitive keys and trim large values before serialization."""

    SENSITIVE_KEYS = {
        "password",
        "secret",
        "token",
        "authorization",
        "api_key",
        "apikey",
        "x-api-key",
        "google_api_key",
    }

    def __init__(self, max_str: int = 2_000, max_depth: int = 4):
        self._max_str = max_str
        self._max_depth = max_depth

    def sanitize(self, value: Any, *, depth: int = 0, key: str | None = None) -> Any:
        if key and key.lower() in self.SENSITIVE_KEYS:
            return "***REDACTED***"

        if depth > self._max_depth:
            return "***TRUNCATED***"

        if isinstance(value, str):
            if len(value) <= self._max_str:
                return value
            return value[: self._max_str] + "...(truncated)"

        if isinstance(value, dict):
            return {
                str(k): self.sanitize(v, depth=depth + 1, key=str(k))
                for k, v in value.items()
            }

        if isinstance(value, (list, tuple, set, frozenset)):
            return [self.sanitize(v, depth=depth + 1, key=key) for v in value]

        try:
            json.dumps(value)
            return value
        except (TypeError, ValueError):
            return str(value)


class JSONFormatter(logging.Formatter):
    """
    R: Format logs as JSON with automatic context enrichment.

    Includes:
      - timestamp (ISO 8601)
      - level, logger, message
      - module, function, line
      - request_id, method, path (from context)
      - exception stack trace (if present)
      - extra fields from log call
    """

    def __init__(self):
        super().__init__()
        self._redactor = _Redactor()

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # R: Request and chunk context (imported lazily to avoid circular imports)
        from .context import current_log_context

        payload.update(current_log_context())

        for key, value in record.__dict__.items():
            if key in _INTERNAL_LOGRECORD_KEYS:
                continue
            payload[key] = self._redactor.sanitize(value, key=key)

        if record.exc_info:
            payload["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger(name: str = "textwarden") -> logging.Logger:
    """
    R: Configure and return structured logger.

    Respects log_level / log_json from Settings when they can be loaded.
    """
    log = logging.getLogger(name)

    level = "INFO"
    use_json = True

    # R: Invalid env must not prevent logging; Settings errors surface at startup
    try:
        from .config import get_settings

        settings = get_settings()
        level = (settings.log_level or "INFO").upper()
        use_json = settings.log_json
    except ValueError:
        pass

    log.setLevel(getattr(logging, level, logging.INFO))

    # R: Avoid duplicate handlers on reimport
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if use_json
            else logging.Formatter("%(levelname)s %(name)s %(message)s")
        )
        log.addHandler(handler)

    return log


# R: Global logger instance
logger = setup_logger()
