"""JSON logging for the API process and the CLI.

One line per record on stdout. Request and ranking context (``league``,
``event_id``, ``team``, ``path``, ``result``) is lifted to the top level so
log queries can filter on it; any other ``extra=`` values are grouped under
``context``.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}

CONTEXT_FIELDS = ("league", "event_id", "team", "path", "result")

# Per-request chatter; StructuredLoggingMiddleware writes the access log.
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")

_DEFAULT_LEVELS = {"production": logging.INFO, "staging": logging.INFO}


class JSONFormatter(logging.Formatter):
    def __init__(self, service: str, environment: str) -> None:
        super().__init__()
        self.service = service
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "service": self.service,
            "environment": self.environment,
            "message": record.getMessage(),
        }
        context: dict[str, Any] = {}
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS:
                continue
            if key in CONTEXT_FIELDS:
                payload[key] = value
            else:
                context[key] = value
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def resolve_log_level(level: str | None, environment: str) -> int:
    """LOG_LEVEL wins; otherwise INFO for deployed environments, DEBUG locally."""
    if not level:
        return _DEFAULT_LEVELS.get(environment.lower(), logging.DEBUG)
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(service: str, environment: str, log_level: str | None = None) -> None:
    """Replace root handlers with a single JSON stdout handler."""
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JSONFormatter(service=service, environment=environment))
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(resolve_log_level(log_level, environment))
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
