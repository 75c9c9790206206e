"""Incremental response decoder.

Wires the pipeline stages together::

    transport -> accumulator -> framer -> recognizer -> dispatcher

``StreamDecoder`` is the push-style core (bytes in, records out) and has no
I/O. ``iter_records`` / ``aiter_records`` pull chunks from a response and
yield records until a terminal one, synthesizing ``Done`` when the body ends
without one. ``decode_stream`` / ``adecode_stream`` drive the dispatcher and
are what callers normally use.

Each call owns its own ``StreamState``; nothing is shared between calls.
"""

from __future__ import annotations

import logging
import time
from typing import Any, AsyncIterator, Callable, Iterator, List, Optional

from ..cancellation import CancellationToken
from ..constants import DEFAULT_ENCODING
from ..errors import ChatStreamError
from ..errors_parts.classification import wrap_exception
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from ..models import ChatAnswer
from .accumulator import TextAccumulator
from .dispatcher import Dispatcher, StreamCallbacks
from .framer import flush, split_lines
from .recognizer import recognize
from .records import Content, Done, Framing, Record, Sources, Unrecognized, detect_framing, is_terminal
from .single_shot import looks_like_single_document, single_shot_records
from .state import StreamState
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics
from .transport import aiter_chunks, aread_all, iter_chunks, is_incremental, read_all

_logger = get_logger("medchat.stream")


class StreamDecoder:
    """Push-style decoder for one response body."""

    def __init__(
        self,
        framing: Framing = Framing.UNKNOWN,
        *,
        session_id: str = "",
        encoding: str = DEFAULT_ENCODING,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self.state = StreamState(framing=framing, session_id=session_id)
        self.metrics = StreamMetrics()
        self._accumulator = TextAccumulator(self.state, encoding)
        self._logger = logger or _logger
        self._ctx = ctx or LogContext(session_id=session_id or None, framing=framing.value)

    def feed(self, chunk: bytes) -> List[Record]:
        """Consume one chunk and return the records completed by it."""
        self.metrics.chunks += 1
        self.metrics.bytes_read += len(chunk)
        self._accumulator.feed(chunk)
        return self._recognize_lines(split_lines(self.state))

    def close(self) -> List[Record]:
        """Flush the decoder and the unterminated last line at end of stream."""
        self._accumulator.finish()
        return self._recognize_lines(split_lines(self.state) + flush(self.state))

    def _recognize_lines(self, lines: List[str]) -> List[Record]:
        out: List[Record] = []
        for line in lines:
            self.metrics.lines += 1
            record = recognize(line, self.state)
            if record is None:
                continue
            self.metrics.records += 1
            if isinstance(record, Unrecognized):
                self.metrics.unrecognized += 1
                log_event(self._logger, "stream.unrecognized", self._ctx, level=logging.DEBUG, line=line[:200])
            out.extend(self._with_captures(record))
        return out

    def _with_captures(self, record: Record) -> List[Record]:
        """Surface side data captured by the recognizer as explicit records.

        Captures follow a non-terminal record and precede a terminal one, so
        nothing is lost when a final line carries both text and completion.
        """
        if not self.state.has_captures():
            return [record]
        side: List[Record] = []
        if self.state.captured_text is not None:
            side.append(Content(self.state.captured_text))
        if self.state.captured_sources is not None:
            side.append(Sources(self.state.captured_sources))
        self.state.captured_text = self.state.captured_sources = None
        return side + [record] if is_terminal(record) else [record] + side

    def implicit_done(self) -> Done:
        return Done(message_id=self.state.message_id, session_id=self.state.session_id)


def _cancelled(token: Optional[CancellationToken]) -> bool:
    return token is not None and token.cancelled


def _single_document(decoder: StreamDecoder, payload: bytes) -> Optional[List[Record]]:
    """Records for a fully-read body, or ``None`` to decode it line by line."""
    if not looks_like_single_document(payload, decoder.state.framing):
        return None
    decoder.metrics.chunks = 1 if payload else 0
    decoder.metrics.bytes_read = len(payload)
    records = single_shot_records(payload, session_id=decoder.state.session_id)
    decoder.metrics.records = len(records)
    return records


def iter_records(
    source: Any,
    framing: Framing = Framing.UNKNOWN,
    *,
    session_id: str = "",
    cancellation_token: Optional[CancellationToken] = None,
    decoder: Optional[StreamDecoder] = None,
) -> Iterator[Record]:
    """Yield records from ``source`` until a terminal record or end of stream.

    Transport failures are raised as :class:`ChatStreamError`. Once the
    cancellation token fires the generator returns without yielding more.
    """
    decoder = decoder or StreamDecoder(framing, session_id=session_id)
    if not is_incremental(source):
        try:
            payload = read_all(source)
        except Exception as exc:
            raise wrap_exception(exc) from exc
        records = _single_document(decoder, payload)
        if records is not None:
            for record in records:
                if _cancelled(cancellation_token):
                    return
                yield record
            return
        source = [payload]

    chunks = iter_chunks(source)
    try:
        while not _cancelled(cancellation_token):
            try:
                chunk = next(chunks)
            except StopIteration:
                break
            except Exception as exc:
                if _cancelled(cancellation_token):
                    return
                raise wrap_exception(exc) from exc
            for record in decoder.feed(chunk):
                if _cancelled(cancellation_token):
                    return
                yield record
                if is_terminal(record):
                    return
        if _cancelled(cancellation_token):
            return
        for record in decoder.close() + [decoder.implicit_done()]:
            if _cancelled(cancellation_token):
                return
            yield record
            if is_terminal(record):
                return
    finally:
        chunks.close()


async def aiter_records(
    source: Any,
    framing: Framing = Framing.UNKNOWN,
    *,
    session_id: str = "",
    cancellation_token: Optional[CancellationToken] = None,
    decoder: Optional[StreamDecoder] = None,
) -> AsyncIterator[Record]:
    """Async twin of :func:`iter_records`; suspends only while awaiting a chunk."""
    decoder = decoder or StreamDecoder(framing, session_id=session_id)
    if not is_incremental(source):
        try:
            payload = await aread_all(source)
        except Exception as exc:
            raise wrap_exception(exc) from exc
        records = _single_document(decoder, payload)
        if records is not None:
            for record in records:
                if _cancelled(cancellation_token):
                    return
                yield record
            return
        source = [payload]

    chunks = aiter_chunks(source)
    try:
        while not _cancelled(cancellation_token):
            try:
                chunk = await chunks.__anext__()
            except StopAsyncIteration:
                break
            except Exception as exc:
                if _cancelled(cancellation_token):
                    return
                raise wrap_exception(exc) from exc
            for record in decoder.feed(chunk):
                if _cancelled(cancellation_token):
                    return
                yield record
                if is_terminal(record):
                    return
        if _cancelled(cancellation_token):
            return
        for record in decoder.close() + [decoder.implicit_done()]:
            if _cancelled(cancellation_token):
                return
            yield record
            if is_terminal(record):
                return
    finally:
        await chunks.aclose()


def _resolve_framing(source: Any, framing: Optional[Framing], content_type: Optional[str]) -> Framing:
    if framing is not None:
        return framing
    if content_type is None:
        headers = getattr(source, "headers", None)
        if headers is not None:
            content_type = headers.get("content-type")
    return detect_framing(content_type)


class _DecodeRun:
    """Bookkeeping shared by the sync and async drivers (timing and logs)."""

    def __init__(
        self,
        framing: Framing,
        callbacks: StreamCallbacks,
        *,
        session_id: str,
        cancellation_token: Optional[CancellationToken],
        logger: Optional[logging.Logger],
    ) -> None:
        self.logger = logger or _logger
        self.ctx = LogContext(session_id=session_id or None, framing=framing.value)
        self.decoder = StreamDecoder(framing, session_id=session_id, logger=self.logger, ctx=self.ctx)
        self.dispatcher = Dispatcher(callbacks, self.decoder.state)
        self.token = cancellation_token
        self._t0 = time.perf_counter()
        normalized_log_event(self.logger, "stream.start", self.ctx, phase="start", emitted=None)

    def observe(self, record: Record) -> None:
        metrics = self.decoder.metrics
        if isinstance(record, Content) and metrics.time_to_first_content_ms is None:
            metrics.time_to_first_content_ms = (time.perf_counter() - self._t0) * 1000.0

    def transport_error(self, error: ChatStreamError) -> None:
        normalized_log_event(
            self.logger,
            "stream.transport_error",
            self.ctx,
            phase="mid_stream",
            error_code=error.code.value,
            emitted=self.dispatcher.emitted > 0,
            level=logging.WARNING,
            error=error.message,
        )
        self.dispatcher.fail(error)

    def finish(self) -> ChatAnswer:
        metrics = self.decoder.metrics
        metrics.emitted = self.dispatcher.emitted
        metrics.total_duration_ms = (time.perf_counter() - self._t0) * 1000.0
        self.ctx.message_id = self.decoder.state.message_id or None
        finalize_stream(
            logger=self.logger,
            ctx=self.ctx,
            metrics=metrics,
            error=self.dispatcher.error,
            cancelled=_cancelled(self.token) and not self.dispatcher.terminated,
        )
        return self.dispatcher.answer()


def decode_stream(
    source: Any,
    callbacks: StreamCallbacks,
    *,
    session_id: str = "",
    framing: Optional[Framing] = None,
    content_type: Optional[str] = None,
    cancellation_token: Optional[CancellationToken] = None,
    logger: Optional[logging.Logger] = None,
) -> ChatAnswer:
    """Decode a response body and dispatch its records to ``callbacks``.

    Parameters:
        source: ``httpx.Response`` opened for streaming, an iterable of byte
            chunks, or a body readable only to completion.
        callbacks: Event sinks; see :class:`StreamCallbacks`.
        session_id: Session id of the request; seeds the completion ids.
        framing: Explicit framing. When omitted it is detected from
            ``content_type`` or the source's ``Content-Type`` header.
        cancellation_token: Polled between chunks. When cancelled, decoding
            stops silently and the response is closed.
        logger: Override for the ``medchat.stream`` logger.

    Returns:
        A :class:`ChatAnswer` snapshot of what was dispatched.

    Raises:
        ChatStreamError: Only when ``callbacks.on_error`` is not set.
    """
    run = _DecodeRun(
        _resolve_framing(source, framing, content_type),
        callbacks,
        session_id=session_id,
        cancellation_token=cancellation_token,
        logger=logger,
    )
    unregister: Optional[Callable[[], None]] = None
    close = getattr(source, "close", None)
    if cancellation_token is not None and callable(close):
        unregister = cancellation_token.on_cancel(close)
    records = iter_records(
        source,
        run.decoder.state.framing,
        cancellation_token=cancellation_token,
        decoder=run.decoder,
    )
    try:
        while True:
            try:
                record = next(records)
            except StopIteration:
                break
            except ChatStreamError as err:
                run.transport_error(err)
                break
            run.observe(record)
            if run.dispatcher.dispatch(record):
                break
    finally:
        records.close()
        if unregister is not None:
            unregister()
        answer = run.finish()
    return answer


async def adecode_stream(
    source: Any,
    callbacks: StreamCallbacks,
    *,
    session_id: str = "",
    framing: Optional[Framing] = None,
    content_type: Optional[str] = None,
    cancellation_token: Optional[CancellationToken] = None,
    logger: Optional[logging.Logger] = None,
) -> ChatAnswer:
    """Async twin of :func:`decode_stream`.

    Task cancellation (``asyncio.CancelledError``) propagates unchanged and
    no callback fires after it.
    """
    run = _DecodeRun(
        _resolve_framing(source, framing, content_type),
        callbacks,
        session_id=session_id,
        cancellation_token=cancellation_token,
        logger=logger,
    )
    records = aiter_records(
        source,
        run.decoder.state.framing,
        cancellation_token=cancellation_token,
        decoder=run.decoder,
    )
    try:
        while True:
            try:
                record = await records.__anext__()
            except StopAsyncIteration:
                break
            except ChatStreamError as err:
                run.transport_error(err)
                break
            run.observe(record)
            if run.dispatcher.dispatch(record):
                break
    finally:
        await records.aclose()
        answer = run.finish()
    return answer


def decode_single_shot(
    payload: bytes | str,
    callbacks: StreamCallbacks,
    *,
    session_id: str = "",
    logger: Optional[logging.Logger] = None,
) -> ChatAnswer:
    """Dispatch a complete, non-streamed response body.

    The body is one JSON document (or plain text): its answer text fires
    ``on_content`` once, its citations ``on_sources``, then ``on_done``.
    """
    return decode_stream(payload, callbacks, session_id=session_id, framing=Framing.UNKNOWN, logger=logger)


__all__ = [
    "StreamDecoder",
    "decode_single_shot",
    "iter_records",
    "aiter_records",
    "decode_stream",
    "adecode_stream",
]
