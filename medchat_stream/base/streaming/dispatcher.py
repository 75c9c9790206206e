"""Dispatcher: the only component of the pipeline with side effects.

State machine::

    STREAMING --Content/Sources/Unrecognized--> STREAMING
    STREAMING --Done-----------------------------> SUCCEEDED
    STREAMING --Error / transport failure--------> FAILED

No callback fires once the dispatcher has left ``STREAMING``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from ..errors import ChatStreamError, ErrorCode
from ..models import ChatAnswer, ChatSource
from .records import Content, Done, Error, Record, Sources
from .state import StreamState


@dataclass
class StreamCallbacks:
    """Caller-supplied event sinks.

    ``on_content`` receives each delta (never the cumulative text). When
    ``on_error`` is omitted, decode errors are raised to the caller instead.
    """

    on_content: Callable[[str], None]
    on_sources: Optional[Callable[[List[ChatSource]], None]] = None
    on_done: Optional[Callable[[str, str], None]] = None
    on_error: Optional[Callable[[ChatStreamError], None]] = None


class DispatchState(str, Enum):
    STREAMING = "streaming"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Dispatcher:
    """Invoke callbacks for records in arrival order and track termination."""

    def __init__(self, callbacks: StreamCallbacks, state: StreamState) -> None:
        self._callbacks = callbacks
        self._state = state
        self._parts: List[str] = []
        self._sources: List[ChatSource] = []
        self._error: Optional[ChatStreamError] = None
        self._ids = ("", "")
        self.status = DispatchState.STREAMING
        self.emitted = 0

    @property
    def terminated(self) -> bool:
        return self.status is not DispatchState.STREAMING

    @property
    def error(self) -> Optional[ChatStreamError]:
        return self._error

    def dispatch(self, record: Record) -> bool:
        """Dispatch one record; return True once the stream is terminated."""
        if self.terminated:
            return True
        if isinstance(record, Content):
            self._parts.append(record.text)
            self.emitted += 1
            self._callbacks.on_content(record.text)
        elif isinstance(record, Sources):
            self._sources = list(record.sources)
            self.emitted += 1
            if self._callbacks.on_sources is not None:
                self._callbacks.on_sources(list(record.sources))
        elif isinstance(record, Done):
            self._terminate(DispatchState.SUCCEEDED)
            self._ids = (record.message_id, record.session_id)
            if self._callbacks.on_done is not None:
                self._callbacks.on_done(record.message_id, record.session_id)
        elif isinstance(record, Error):
            self.fail(ChatStreamError(code=ErrorCode.STREAM, message=record.message))
        return self.terminated

    def fail(self, error: ChatStreamError) -> None:
        """Terminate with ``error``; raise it when no error callback is set."""
        if self.terminated:
            return
        self._terminate(DispatchState.FAILED)
        self._error = error
        if self._callbacks.on_error is None:
            raise error
        self._callbacks.on_error(error)

    def answer(self) -> ChatAnswer:
        """Snapshot of everything dispatched so far."""
        message_id, session_id = self._ids
        return ChatAnswer(
            text="".join(self._parts),
            sources=list(self._sources),
            message_id=message_id or self._state.message_id,
            session_id=session_id or self._state.session_id,
            error=self._error.message if self._error else None,
            done=self.terminated,
        )

    def _terminate(self, status: DispatchState) -> None:
        self.status = status
        self._state.terminated = True


__all__ = ["StreamCallbacks", "DispatchState", "Dispatcher"]
