"""Per-call mutable decode state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..models import ChatSource
from .records import Framing


@dataclass
class StreamState:
    """State owned by exactly one decode call and discarded when it returns.

    Attributes:
        framing: Chosen once from the declared content type; never changes.
        session_id: Seeded from the request; overwritten by records that
            supply a session id.
        message_id: Last identifier seen for the assistant message.
        buffer: Unterminated trailing text carried between reads.
        terminated: Set once a terminal record was dispatched.
        captured_text: Text found on a record whose primary variant is not
            ``Content`` (an NDJSON done-flag object carrying a final delta).
        captured_sources: Sources found on a record whose primary variant is
            not ``Sources`` (legacy content objects carrying citations).
    """

    framing: Framing = Framing.UNKNOWN
    session_id: str = ""
    message_id: str = ""
    buffer: str = ""
    terminated: bool = False
    captured_text: Optional[str] = None
    captured_sources: Optional[List[ChatSource]] = None

    def capture_ids(self, message_id: object, session_id: object) -> None:
        """Fold identifiers forward; empty or missing values keep the current ones."""
        if isinstance(message_id, str) and message_id:
            self.message_id = message_id
        if isinstance(session_id, str) and session_id:
            self.session_id = session_id

    def has_captures(self) -> bool:
        return self.captured_text is not None or self.captured_sources is not None


__all__ = ["StreamState"]
