"""Answer accumulation helpers.

``accumulate_records`` folds a record sequence (e.g. from ``iter_records``)
into a :class:`ChatAnswer` with the same rules the dispatcher applies.
``AnswerCollector`` is a ready-made callback set for callers that only want
the final answer but still pass through ``decode_stream``.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..errors import ChatStreamError
from ..models import ChatAnswer, ChatSource
from .dispatcher import StreamCallbacks
from .records import Content, Done, Error, Record, Sources


def accumulate_records(records: Iterable[Record]) -> ChatAnswer:
    """Build an answer from ``records``, stopping at the first terminal one."""
    answer = ChatAnswer()
    parts: List[str] = []
    for record in records:
        if isinstance(record, Content):
            parts.append(record.text)
        elif isinstance(record, Sources):
            answer.sources = list(record.sources)
        elif isinstance(record, Done):
            answer.message_id = record.message_id
            answer.session_id = record.session_id
            answer.done = True
            break
        elif isinstance(record, Error):
            answer.error = record.message
            answer.done = True
            break
    answer.text = "".join(parts)
    return answer


class AnswerCollector:
    """Collect dispatched events; usable as ``StreamCallbacks`` via :meth:`callbacks`."""

    def __init__(self) -> None:
        self.deltas: List[str] = []
        self.sources: List[ChatSource] = []
        self.message_id = ""
        self.session_id = ""
        self.error: Optional[ChatStreamError] = None
        self.done = False

    def on_content(self, delta: str) -> None:
        self.deltas.append(delta)

    def on_sources(self, sources: List[ChatSource]) -> None:
        self.sources = list(sources)

    def on_done(self, message_id: str, session_id: str) -> None:
        self.message_id = message_id
        self.session_id = session_id
        self.done = True

    def on_error(self, error: ChatStreamError) -> None:
        self.error = error
        self.done = True

    def callbacks(self) -> StreamCallbacks:
        return StreamCallbacks(
            on_content=self.on_content,
            on_sources=self.on_sources,
            on_done=self.on_done,
            on_error=self.on_error,
        )

    @property
    def text(self) -> str:
        return "".join(self.deltas)

    def answer(self) -> ChatAnswer:
        return ChatAnswer(
            text=self.text,
            sources=list(self.sources),
            message_id=self.message_id,
            session_id=self.session_id,
            error=self.error.message if self.error else None,
            done=self.done,
        )


__all__ = ["accumulate_records", "AnswerCollector"]
