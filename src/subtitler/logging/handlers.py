"""JSON log formatting for --log-json and ``format = "json"``."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Record attributes copied into "context" when set. job_source comes from
# JobContextFilter; the rest are passed through ``extra=`` by the stage
# runner, the fetcher and request collection. Other extras are dropped.
CONTEXT_FIELDS: tuple[str, ...] = (
    "job_source",
    "stage",
    "command",
    "returncode",
    "elapsed_seconds",
    "env_overrides",
    "destination",
    "model",
    "language",
    "backend",
)


class JSONFormatter(logging.Formatter):
    """Format each record as a single-line JSON object.

    Keys: timestamp (UTC, milliseconds), level, logger, message, plus
    "context" and "exception" when there is something to put in them.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = {}
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                context[name] = value
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
