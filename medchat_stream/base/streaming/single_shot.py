"""Degenerate non-streaming path.

Used when the response body can only be read to completion. The whole
payload is parsed once as a JSON document (falling back to plain text) and
turned into at most one ``Content``, one ``Sources`` and a final ``Done``, so
calling code stays identical whether or not the server actually streamed.
A document typed ``error`` becomes a single ``Error`` instead.
"""

from __future__ import annotations

import json
from typing import Any, List

from ..constants import DEFAULT_ENCODING, DEFAULT_STREAM_ERROR_MESSAGE, RECORD_TYPE_ERROR
from ..models import parse_sources
from .records import Content, Done, Error, Framing, Record, Sources
from .recognizer import as_text

_NOT_JSON = object()


def _parse(text: str) -> Any:
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        return _NOT_JSON


def _as_str(payload: bytes | str) -> str:
    return payload.decode(DEFAULT_ENCODING, errors="replace") if isinstance(payload, bytes) else payload


def single_shot_records(payload: bytes | str, *, session_id: str = "") -> List[Record]:
    """Classify a complete response body into records ending with a terminal."""
    text = _as_str(payload)
    records: List[Record] = []
    doc = _parse(text)
    if doc is _NOT_JSON:
        if text:
            records.append(Content(text))
        records.append(Done(message_id="", session_id=session_id))
        return records

    if isinstance(doc, str):
        records.append(Content(doc))
        doc = {}
    elif not isinstance(doc, dict):
        doc = {}
    if doc.get("type") == RECORD_TYPE_ERROR:
        return [Error(as_text(doc.get("error") or doc.get("message") or DEFAULT_STREAM_ERROR_MESSAGE))]
    answer = doc.get("content") or doc.get("answer")
    if answer:
        records.append(Content(as_text(answer)))
    if isinstance(doc.get("sources"), list):
        records.append(Sources(parse_sources(doc["sources"])))
    records.append(
        Done(
            message_id=str(doc.get("messageId") or ""),
            session_id=str(doc.get("sessionId") or session_id),
        )
    )
    return records


def looks_like_single_document(payload: bytes | str, framing: Framing) -> bool:
    """Whether a fully-read body should take the single-document path.

    Bodies declared as event-stream or NDJSON that hold several records are
    decoded line by line instead; everything else is one document.
    """
    if framing is Framing.UNKNOWN:
        return True
    return _parse(_as_str(payload)) is not _NOT_JSON


__all__ = ["single_shot_records", "looks_like_single_document"]
