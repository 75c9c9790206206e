"""Unit tests for the record recognizer cascade."""

from __future__ import annotations

import pytest

from medchat_stream.base.models import ChatSource
from medchat_stream.base.streaming import (
    MATCHERS,
    Content,
    Done,
    Error,
    Framing,
    Sources,
    StreamState,
    Unrecognized,
    recognize,
)


def _state(framing: Framing = Framing.NDJSON, session_id: str = "") -> StreamState:
    return StreamState(framing=framing, session_id=session_id)


def test_matcher_order_is_fixed():
    names = [m.name for m in MATCHERS]
    assert names == [  # nosec B101
        "typed_content",
        "typed_sources",
        "typed_done",
        "typed_error",
        "done_flag",
        "bare_content",
        "bare_sources",
        "delta_content",
        "bare_string",
    ]


@pytest.mark.parametrize("line", ["", "   ", "\t"])
def test_blank_lines_yield_nothing(line):
    assert recognize(line, _state()) is None  # nosec B101
    assert recognize(line, _state(Framing.SSE)) is None  # nosec B101


def test_typed_content():
    assert recognize('{"type":"content","content":"Hello"}', _state()) == Content("Hello")  # nosec B101


def test_typed_sources_parses_camel_case_entries():
    rec = recognize('{"type":"sources","sources":[{"documentId":"d1","chunkId":"c1","chunkIndex":2}]}', _state())
    assert rec == Sources([ChatSource(document_id="d1", chunk_id="c1", chunk_index=2)])  # nosec B101


def test_typed_done_captures_identifiers():
    state = _state(session_id="seed")
    rec = recognize('{"type":"done","messageId":"m1","sessionId":"s2"}', state)
    assert rec == Done(message_id="m1", session_id="s2")  # nosec B101
    assert state.message_id == "m1" and state.session_id == "s2"  # nosec B101


def test_typed_done_without_ids_keeps_seed():
    rec = recognize('{"type":"done"}', _state(session_id="seed"))
    assert rec == Done(message_id="", session_id="seed")  # nosec B101


def test_typed_error_message_and_default():
    assert recognize('{"type":"error","error":"quota"}', _state()) == Error("quota")  # nosec B101
    assert recognize('{"type":"error"}', _state()) == Error("stream error")  # nosec B101


def test_discriminant_wins_over_bare_content():
    rec = recognize('{"type":"sources","sources":[],"content":"ignored"}', _state())
    assert rec == Sources([])  # nosec B101


def test_bare_content_allows_empty_string_and_captures_side_data():
    state = _state()
    rec = recognize('{"content":"","messageId":"m9","sources":[{"documentId":"d2"}]}', state)
    assert rec == Content("")  # nosec B101
    assert state.message_id == "m9"  # nosec B101
    assert state.captured_sources == [ChatSource(document_id="d2", chunk_id="", chunk_index=0)]  # nosec B101


def test_bare_content_null_is_not_content():
    assert isinstance(recognize('{"content":null}', _state()), Unrecognized)  # nosec B101


def test_bare_sources_without_discriminant():
    rec = recognize('{"sources":[{"documentId":"d1","chunkId":"c1","chunkIndex":0}]}', _state())
    assert isinstance(rec, Sources) and rec.sources[0].document_id == "d1"  # nosec B101


def test_delta_shape():
    assert recognize('{"delta":{"content":"x"}}', _state()) == Content("x")  # nosec B101
    assert isinstance(recognize('{"delta":{"content":""}}', _state()), Unrecognized)  # nosec B101


def test_bare_json_string():
    assert recognize('"plain"', _state()) == Content("plain")  # nosec B101


@pytest.mark.parametrize("line", ["not json", "{\"type\":\"cont", "42", "[1, 2]", "{}"])
def test_unclassifiable_lines_are_unrecognized(line):
    assert isinstance(recognize(line, _state()), Unrecognized)  # nosec B101


def test_done_flag_only_for_line_framings():
    assert recognize('{"done":true}', _state(Framing.NDJSON)) == Done()  # nosec B101
    assert recognize('{"done":true}', _state(Framing.UNKNOWN)) == Done()  # nosec B101
    assert isinstance(recognize('data: {"done":true}', _state(Framing.SSE)), Unrecognized)  # nosec B101


def test_done_flag_captures_final_text():
    state = _state()
    rec = recognize('{"done":true,"content":"tail"}', state)
    assert isinstance(rec, Done)  # nosec B101
    assert state.captured_text == "tail"  # nosec B101


def test_error_discriminant_beats_done_flag():
    assert recognize('{"type":"error","error":"x","done":true}', _state()) == Error("x")  # nosec B101


class TestEventStreamFraming:
    def test_data_marker_stripped_with_one_space(self):
        rec = recognize('data: {"type":"content","content":"Hi"}', _state(Framing.SSE))
        assert rec == Content("Hi")  # nosec B101

    def test_data_marker_without_space(self):
        rec = recognize('data:{"content":"Hi"}', _state(Framing.SSE))
        assert rec == Content("Hi")  # nosec B101

    def test_sentinel_is_done_with_known_ids(self):
        state = _state(Framing.SSE, session_id="seed")
        state.message_id = "m1"
        assert recognize("data: [DONE]", state) == Done(message_id="m1", session_id="seed")  # nosec B101

    def test_sentinel_only_under_event_stream(self):
        assert isinstance(recognize("[DONE]", _state(Framing.NDJSON)), Unrecognized)  # nosec B101

    @pytest.mark.parametrize("line", ["event: message", ": heartbeat", "id: 3", '{"content":"x"}'])
    def test_lines_without_data_marker_are_unrecognized(self, line):
        assert isinstance(recognize(line, _state(Framing.SSE)), Unrecognized)  # nosec B101

    def test_empty_data_field_yields_nothing(self):
        assert recognize("data:", _state(Framing.SSE)) is None  # nosec B101
        assert recognize("data: ", _state(Framing.SSE)) is None  # nosec B101


def test_overflowing_chunk_index_still_yields_sources():
    rec = recognize('{"type":"sources","sources":[{"documentId":"d","chunkIndex":1e999}]}', _state())
    assert rec == Sources([ChatSource(document_id="d", chunk_id="", chunk_index=0)])  # nosec B101


def test_deeply_nested_line_is_unrecognized():
    assert isinstance(recognize("[" * 100000, _state()), Unrecognized)  # nosec B101


@pytest.mark.parametrize(
    "line, text",
    [
        ('{"content":true}', "true"),
        ('{"content":false}', "false"),
        ('{"content":1.0}', "1"),
        ('{"content":2.5}', "2.5"),
        ('{"content":7}', "7"),
        ('{"content":{"a":1}}', '{"a": 1}'),
    ],
)
def test_non_string_content_rendered_like_javascript(line, text):
    assert recognize(line, _state()) == Content(text)  # nosec B101
