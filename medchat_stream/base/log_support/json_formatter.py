"""JSON logging formatter for the ``medchat`` logger hierarchy.

Every line is one JSON object: timestamp, level, logger name, and either the
raw message or, when the message is itself a JSON object produced by
``log_event``, that object's keys hoisted to the top level.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_STANDARD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime", "taskName"}


def _hoist(message: str) -> Dict[str, Any] | None:
    if not message.startswith("{"):
        return None
    try:
        parsed = json.loads(message)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON, merging ``extra`` attributes."""

    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - trivial formatting
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        message = record.getMessage()
        structured = _hoist(message)
        if structured is None:
            payload["msg"] = message
        else:
            payload.update(structured)
        extras = {
            k: v for k, v in vars(record).items() if not k.startswith("_") and k not in _STANDARD_ATTRS
        }
        for key, value in extras.items():
            payload.setdefault(key, value)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
