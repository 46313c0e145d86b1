"""Structured JSON logging configuration for the lessonhub server."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from lessonhub.server.config import Settings

# Request context attached by RequestContextMiddleware
_EXTRA_FIELDS = ("request_id", "method", "path", "status", "latency_ms")

PRETTY_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JsonFormatter(logging.Formatter):
    """Format log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update(
            {key: getattr(record, key) for key in _EXTRA_FIELDS if getattr(record, key, None) is not None}
        )
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def setup_logging(config: Settings) -> None:
    """Install one stderr handler on the root logger for the app's settings.

    Calling again with the same format and level is a no-op; a different
    pair replaces the handler, so the CLI's settings win over import-time
    defaults.
    """
    root = logging.getLogger()
    wanted = (config.log_format, config.log_level)
    if getattr(root, "_lessonhub_logging", None) == wanted:
        return

    level = getattr(logging, config.log_level, logging.INFO)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if config.log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(PRETTY_FORMAT))

    previous = getattr(root, "_lessonhub_handler", None)
    if previous is not None:
        root.removeHandler(previous)
    else:
        root.handlers.clear()

    root.setLevel(level)
    root.addHandler(handler)
    root._lessonhub_handler = handler  # type: ignore[attr-defined]
    root._lessonhub_logging = wanted  # type: ignore[attr-defined]
