"""JSON logging for chat-widgets.

Every record becomes one JSON line on stderr. Modules attach structured
context through ``extra={"extra_fields": {...}}``; those keys are merged into
the top level of the line, next to ``timestamp``, ``level``, ``message`` and
``component`` (the logger name).
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Optional

_DEFAULT_LEVEL = "INFO"


def _builtin_record_attrs() -> frozenset[str]:
    record = logging.LogRecord("name", logging.INFO, "path", 1, "msg", None, None)
    return frozenset(record.__dict__) | {"message", "asctime", "stack_info"}


class JsonFormatter(logging.Formatter):
    """Renders a record as a single JSON object.

    Attributes set on the record through ``extra`` are copied as-is, except
    ``extra_fields``, whose items are flattened into the object.
    """

    _builtin_attrs = _builtin_record_attrs()

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "component": record.name,
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in self._builtin_attrs:
                continue
            if key == "extra_fields" and isinstance(value, dict):
                entry.update(value)
            else:
                entry[key] = value

        return json.dumps(entry, default=str)


def setup_logging(level: Optional[str] = None):
    """Routes all logging through a single stderr JSON handler.

    Args:
        level: Log level name. Falls back to ``LOG_LEVEL``, then INFO.
    """
    root = logging.getLogger()
    root.setLevel((level or os.environ.get("LOG_LEVEL", _DEFAULT_LEVEL)).upper())

    # stdout carries CLI output
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    root.handlers[:] = [handler]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
