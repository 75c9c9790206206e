"""Degenerate non-streaming path: bodies readable only to completion."""

from __future__ import annotations

import json

from medchat_stream.base.streaming import Framing, decode_single_shot, decode_stream
from medchat_stream.base.streaming.single_shot import looks_like_single_document, single_shot_records


class _ReadOnlyBody:
    def __init__(self, data: bytes) -> None:
        self._data = data

    def read(self) -> bytes:
        return self._data


def test_json_document_dispatches_content_sources_done(recorder):
    payload = json.dumps(
        {
            "content": "Full answer",
            "sources": [{"documentId": "d1", "chunkId": "c1", "chunkIndex": 3}],
            "messageId": "m2",
        }
    ).encode()
    answer = decode_single_shot(payload, recorder.callbacks(), session_id="seed")
    assert recorder.events == [  # nosec B101
        ("content", "Full answer"),
        ("sources", ["d1"]),
        ("done", ("m2", "seed")),
    ]
    assert answer.sources[0].chunk_index == 3  # nosec B101


def test_legacy_answer_field(recorder):
    decode_single_shot(b'{"answer":"from answer","sessionId":"s9"}', recorder.callbacks())
    assert recorder.events == [("content", "from answer"), ("done", ("", "s9"))]  # nosec B101


def test_plain_text_body_is_content(recorder):
    decode_single_shot("just text, no JSON", recorder.callbacks(), session_id="seed")
    assert recorder.events == [("content", "just text, no JSON"), ("done", ("", "seed"))]  # nosec B101


def test_json_string_body_is_content(recorder):
    decode_single_shot(b'"hi"', recorder.callbacks())
    assert recorder.events == [("content", "hi"), ("done", ("", ""))]  # nosec B101


def test_empty_body_only_completes(recorder):
    decode_single_shot(b"", recorder.callbacks(), session_id="seed")
    assert recorder.events == [("done", ("", "seed"))]  # nosec B101


def test_read_only_body_without_declared_framing(recorder):
    decode_stream(_ReadOnlyBody(b'{"content":"once"}'), recorder.callbacks())
    assert recorder.events == [("content", "once"), ("done", ("", ""))]  # nosec B101


def test_read_only_event_stream_body_decoded_line_by_line(recorder):
    body = _ReadOnlyBody(b'data: {"type":"content","content":"a"}\n\ndata: {"type":"content","content":"b"}\n\ndata: [DONE]\n\n')
    decode_stream(body, recorder.callbacks(), framing=Framing.SSE, session_id="s")
    assert recorder.events == [("content", "a"), ("content", "b"), ("done", ("", "s"))]  # nosec B101


def test_single_document_detection():
    assert looks_like_single_document(b"anything", Framing.UNKNOWN) is True  # nosec B101
    assert looks_like_single_document(b'{"content":"x"}', Framing.NDJSON) is True  # nosec B101
    assert looks_like_single_document(b'{"content":"x"}\n{"content":"y"}\n', Framing.NDJSON) is False  # nosec B101


def test_non_object_json_yields_only_done():
    records = single_shot_records(b"[1, 2, 3]", session_id="s")
    assert [type(r).__name__ for r in records] == ["Done"]  # nosec B101


def test_error_document_routes_to_on_error(recorder):
    decode_stream(b'{"type":"error","error":"boom"}', recorder.callbacks())
    assert recorder.events == [("error", "boom")]  # nosec B101


def test_error_document_without_message_uses_default(recorder):
    decode_single_shot(b'{"type":"error"}', recorder.callbacks(), session_id="s")
    assert [name for name, _ in recorder.events] == ["error"]  # nosec B101


def test_read_only_ndjson_error_document(recorder):
    decode_stream(_ReadOnlyBody(b'{"type":"error","message":"quota"}\n'), recorder.callbacks(), framing=Framing.NDJSON)
    assert recorder.events == [("error", "quota")]  # nosec B101


def test_deeply_nested_body_treated_as_text():
    payload = "[" * 100000
    assert looks_like_single_document(payload, Framing.NDJSON) is False  # nosec B101
    records = single_shot_records(payload, session_id="s")
    assert [type(r).__name__ for r in records] == ["Content", "Done"]  # nosec B101
