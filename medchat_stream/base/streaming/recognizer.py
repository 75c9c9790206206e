"""Record recognizer: classify one complete line into a stream record.

The origin server has shipped several incompatible payload shapes over time,
so classification is an ordered cascade of matchers evaluated first-match-wins.
Each line is classified independently; a line that matches nothing becomes
``Unrecognized`` and never fails the stream.

Precedence (see ``MATCHERS``):

1. ``{"type": "content", "content": <non-null>}``      -> Content
2. ``{"type": "sources", "sources": [...]}``           -> Sources
3. ``{"type": "done", ...}``                           -> Done
4. ``{"type": "error", "error": ...}``                 -> Error
5. ``{"done": true}`` (NDJSON / unknown framing only)  -> Done
6. ``{"content": <non-null>}``                         -> Content (legacy)
7. ``{"sources": [...]}`` without a discriminant       -> Sources
8. ``{"delta": {"content": "..."}}``                   -> Content
9. ``"plain string"``                                  -> Content

A discriminant always wins over legacy bare fields on the same object.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Optional, Tuple

from ..constants import (
    DEFAULT_STREAM_ERROR_MESSAGE,
    RECORD_TYPE_CONTENT,
    RECORD_TYPE_DONE,
    RECORD_TYPE_ERROR,
    RECORD_TYPE_SOURCES,
    SSE_DATA_PREFIX,
    SSE_DONE_SENTINEL,
)
from ..models import parse_sources
from .records import Content, Done, Error, Framing, Record, Sources, Unrecognized
from .state import StreamState

ALL_FRAMINGS: FrozenSet[Framing] = frozenset(Framing)
LINE_FRAMINGS: FrozenSet[Framing] = frozenset((Framing.NDJSON, Framing.UNKNOWN))


@dataclass(frozen=True)
class Matcher:
    """One step of the classification cascade.

    ``applies`` must be side-effect free; ``extract`` may fold identifiers or
    side data into the state and returns the record.
    """

    name: str
    applies: Callable[[Any], bool]
    extract: Callable[[Any, StreamState], Record]
    framings: FrozenSet[Framing] = ALL_FRAMINGS


def _obj(pred: Callable[[dict], bool]) -> Callable[[Any], bool]:
    return lambda payload: isinstance(payload, dict) and pred(payload)


def _type_is(value: str) -> Callable[[Any], bool]:
    return _obj(lambda o: o.get("type") == value)


def as_text(value: Any) -> str:
    """Render a payload value as text the way a JavaScript client would.

    Strings pass through, integral floats drop their fraction and everything
    else is JSON-encoded (``true``, ``null``, objects).
    """
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return json.dumps(value, ensure_ascii=False)


def _done(_: dict, state: StreamState) -> Done:
    return Done(message_id=state.message_id, session_id=state.session_id)


def _done_flag(obj: dict, state: StreamState) -> Done:
    # A final NDJSON line may carry the last delta alongside the flag
    text = obj.get("content")
    if text is not None and as_text(text):
        state.captured_text = as_text(text)
    if isinstance(obj.get("sources"), list):
        state.captured_sources = parse_sources(obj["sources"])
    return _done(obj, state)


def _bare_content(obj: dict, state: StreamState) -> Content:
    if isinstance(obj.get("sources"), list):
        state.captured_sources = parse_sources(obj["sources"])
    return Content(as_text(obj["content"]))


def _delta_text(obj: dict) -> Optional[str]:
    delta = obj.get("delta")
    if isinstance(delta, dict) and isinstance(delta.get("content"), str) and delta["content"]:
        return delta["content"]
    return None


MATCHERS: Tuple[Matcher, ...] = (
    Matcher(
        "typed_content",
        _obj(lambda o: o.get("type") == RECORD_TYPE_CONTENT and o.get("content") is not None),
        lambda o, s: Content(as_text(o["content"])),
    ),
    Matcher(
        "typed_sources",
        _obj(lambda o: o.get("type") == RECORD_TYPE_SOURCES and isinstance(o.get("sources"), list)),
        lambda o, s: Sources(parse_sources(o["sources"])),
    ),
    Matcher("typed_done", _type_is(RECORD_TYPE_DONE), _done),
    Matcher(
        "typed_error",
        _type_is(RECORD_TYPE_ERROR),
        lambda o, s: Error(as_text(o.get("error") or o.get("message") or DEFAULT_STREAM_ERROR_MESSAGE)),
    ),
    Matcher("done_flag", _obj(lambda o: o.get("done") is True), _done_flag, LINE_FRAMINGS),
    Matcher("bare_content", _obj(lambda o: o.get("content") is not None), _bare_content),
    Matcher(
        "bare_sources",
        _obj(lambda o: "type" not in o and isinstance(o.get("sources"), list)),
        lambda o, s: Sources(parse_sources(o["sources"])),
    ),
    Matcher("delta_content", _obj(lambda o: _delta_text(o) is not None), lambda o, s: Content(_delta_text(o) or "")),
    Matcher("bare_string", lambda p: isinstance(p, str), lambda p, s: Content(p)),
)


def _candidate_payload(line: str, framing: Framing) -> Optional[str]:
    """Strip framing markers; ``None`` means the line is not a candidate."""
    if framing is not Framing.SSE:
        return line
    if not line.startswith(SSE_DATA_PREFIX):
        return None
    payload = line[len(SSE_DATA_PREFIX):]
    if payload.startswith(" "):
        payload = payload[1:]
    return payload.strip()


def classify(payload: Any, state: StreamState) -> Record:
    """Run the matcher cascade over an already-parsed JSON value."""
    if isinstance(payload, dict):
        state.capture_ids(payload.get("messageId"), payload.get("sessionId"))
    for matcher in MATCHERS:
        if state.framing in matcher.framings and matcher.applies(payload):
            return matcher.extract(payload, state)
    return Unrecognized(as_text(payload))


def recognize(line: str, state: StreamState) -> Optional[Record]:
    """Classify one complete line under the state's framing.

    Returns ``None`` for lines that carry nothing (blank lines, empty
    ``data:`` fields); every other line yields exactly one record.
    """
    stripped = line.strip()
    if not stripped:
        return None
    payload = _candidate_payload(stripped, state.framing)
    if payload is None:
        return Unrecognized(stripped)
    if not payload:
        return None
    if state.framing is Framing.SSE and payload == SSE_DONE_SENTINEL:
        return Done(message_id=state.message_id, session_id=state.session_id)
    try:
        parsed = json.loads(payload)
    except (ValueError, RecursionError):
        return Unrecognized(stripped)
    return classify(parsed, state)


__all__ = ["Matcher", "MATCHERS", "as_text", "classify", "recognize"]
