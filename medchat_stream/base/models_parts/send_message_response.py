"""
SendMessageResponse model returned by the non-streaming send call.

Normalizes the two response shapes the backend has shipped: the current one
(``answer``, ``messageId``) and the legacy one (``content``, ``id``).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping

from .chat_source import ChatSource, parse_sources


@dataclass
class SendMessageResponse:
    """Full answer of a non-streaming chat request."""

    answer: str
    session_id: str
    message_id: str
    sources: List[ChatSource] = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: Any, *, session_id: str) -> "SendMessageResponse":
        """Build a response, falling back to legacy fields and the request session id."""
        body: Mapping[str, Any] = data if isinstance(data, Mapping) else {}
        return cls(
            answer=str(body.get("answer") or body.get("content") or ""),
            session_id=str(body.get("sessionId") or session_id),
            message_id=str(body.get("messageId") or body.get("id") or ""),
            sources=parse_sources(body.get("sources")),
        )


__all__ = ["SendMessageResponse"]
