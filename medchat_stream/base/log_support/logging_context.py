"""Structured logging context object for decode calls.

This module defines :class:`LogContext`, a dataclass used to carry common
fields for stream logging events (session and message ids, framing, request
id, extra metadata). Its ``to_dict`` helper merges ``extra`` and prunes
``None`` values for clean structured output.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for stream logging events."""

    session_id: Optional[str] = None
    message_id: Optional[str] = None
    request_id: Optional[str] = None
    framing: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None and v != ""}


__all__ = ["LogContext"]
