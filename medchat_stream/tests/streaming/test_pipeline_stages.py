"""Unit tests for the accumulator, framer and transport reader stages."""

from __future__ import annotations

import asyncio
import io

import pytest

from medchat_stream.base.streaming import Framing, StreamState, detect_framing
from medchat_stream.base.streaming.accumulator import TextAccumulator
from medchat_stream.base.streaming.framer import flush, split_lines
from medchat_stream.base.streaming.transport import (
    aiter_chunks,
    is_incremental,
    iter_chunks,
    read_all,
)


@pytest.mark.parametrize(
    "content_type, expected",
    [
        ("text/event-stream; charset=utf-8", Framing.SSE),
        ("Application/X-NDJSON", Framing.NDJSON),
        ("application/ndjson", Framing.NDJSON),
        ("application/json", Framing.UNKNOWN),
        (None, Framing.UNKNOWN),
    ],
)
def test_detect_framing_from_content_type(content_type, expected):
    assert detect_framing(content_type) is expected  # nosec B101


class TestAccumulator:
    def test_multibyte_split_across_chunks(self):
        state = StreamState(framing=Framing.NDJSON)
        acc = TextAccumulator(state)
        data = "olá ✓".encode("utf-8")
        for i in range(len(data)):
            acc.feed(data[i : i + 1])
        acc.finish()
        assert state.buffer == "olá ✓"  # nosec B101

    def test_incomplete_sequence_held_until_next_chunk(self):
        state = StreamState()
        acc = TextAccumulator(state)
        acc.feed("✓".encode("utf-8")[:2])
        assert state.buffer == ""  # nosec B101
        acc.feed("✓".encode("utf-8")[2:])
        assert state.buffer == "✓"  # nosec B101

    def test_invalid_bytes_are_replaced(self):
        state = StreamState()
        acc = TextAccumulator(state)
        acc.feed(b"a\xffb")
        assert state.buffer == "a�b"  # nosec B101

    def test_truncated_tail_replaced_on_finish(self):
        state = StreamState()
        acc = TextAccumulator(state)
        acc.feed("✓".encode("utf-8")[:1])
        acc.finish()
        assert state.buffer == "�"  # nosec B101


class TestFramer:
    def test_no_newline_returns_nothing_and_keeps_buffer(self):
        state = StreamState(buffer='{"content":"A"')
        assert split_lines(state) == []  # nosec B101
        assert state.buffer == '{"content":"A"'  # nosec B101

    def test_complete_lines_and_partial_tail(self):
        state = StreamState(buffer="one\ntwo\r\nthr")
        assert split_lines(state) == ["one", "two"]  # nosec B101
        assert state.buffer == "thr"  # nosec B101

    def test_empty_lines_preserved_for_recognizer(self):
        state = StreamState(buffer="a\n\nb\n")
        assert split_lines(state) == ["a", "", "b"]  # nosec B101
        assert state.buffer == ""  # nosec B101

    def test_flush_returns_unterminated_line_once(self):
        state = StreamState(buffer='{"content":"last"}')
        assert flush(state) == ['{"content":"last"}']  # nosec B101
        assert flush(state) == []  # nosec B101

    def test_flush_ignores_whitespace_tail(self):
        assert flush(StreamState(buffer="  \r")) == []  # nosec B101


class _ReadOnlyBody:
    def __init__(self, data: bytes) -> None:
        self._data = data

    def read(self) -> bytes:
        return self._data


class TestTransport:
    def test_iterable_source_skips_empty_chunks(self):
        assert list(iter_chunks([b"a", b"", "b"])) == [b"a", b"b"]  # nosec B101

    def test_non_incremental_sources_yield_one_chunk(self):
        assert is_incremental(b"x") is False  # nosec B101
        assert is_incremental(_ReadOnlyBody(b"x")) is False  # nosec B101
        assert list(iter_chunks(b"whole")) == [b"whole"]  # nosec B101
        assert list(iter_chunks(_ReadOnlyBody(b"whole"))) == [b"whole"]  # nosec B101
        assert list(iter_chunks(b"")) == []  # nosec B101

    def test_file_like_objects_are_iterable(self):
        assert is_incremental(io.BytesIO(b"a\nb\n")) is True  # nosec B101
        assert b"".join(iter_chunks(io.BytesIO(b"a\nb\n"))) == b"a\nb\n"  # nosec B101

    def test_read_all_accepts_text(self):
        assert read_all("é") == "é".encode("utf-8")  # nosec B101

    def test_aiter_chunks_over_async_iterable(self):
        async def source():
            yield b"a"
            yield b""
            yield b"b"

        async def collect():
            return [c async for c in aiter_chunks(source())]

        assert asyncio.run(collect()) == [b"a", b"b"]  # nosec B101
