"""
ChatAnswer model: the accumulated outcome of one decoded stream.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .chat_source import ChatSource


@dataclass
class ChatAnswer:
    """Accumulated answer built from dispatched stream records.

    Attributes:
        text: Concatenation of every content delta, in dispatch order.
        sources: Latest citation list (a later list replaces an earlier one).
        message_id: Assistant message id reported on completion.
        session_id: Chat session id reported on completion.
        error: Terminal error message, when the stream failed.
        done: True once a terminal record was dispatched.
    """

    text: str = ""
    sources: List[ChatSource] = field(default_factory=list)
    message_id: str = ""
    session_id: str = ""
    error: Optional[str] = None
    done: bool = False

    @property
    def ok(self) -> bool:
        return self.done and self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "sources": [s.to_dict() for s in self.sources],
            "messageId": self.message_id,
            "sessionId": self.session_id,
            "error": self.error,
        }


__all__ = ["ChatAnswer"]
