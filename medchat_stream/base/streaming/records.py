"""Stream record types.

A record is one decoded, classified unit of the response body. The
recognizer produces records as pure values; only the dispatcher turns them
into callback invocations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

from ..constants import CONTENT_TYPE_EVENT_STREAM, CONTENT_TYPES_NDJSON
from ..models import ChatSource


class Framing(str, Enum):
    """Line-oriented wire convention of a response body."""

    SSE = "sse"
    NDJSON = "ndjson"
    UNKNOWN = "unknown"


def detect_framing(content_type: str | None) -> Framing:
    """Select the framing from a declared ``Content-Type`` header value."""
    ct = (content_type or "").lower()
    if CONTENT_TYPE_EVENT_STREAM in ct:
        return Framing.SSE
    if any(t in ct for t in CONTENT_TYPES_NDJSON):
        return Framing.NDJSON
    return Framing.UNKNOWN


@dataclass(frozen=True)
class Content:
    """A delta of answer text to append."""

    text: str


@dataclass(frozen=True)
class Sources:
    """Citation list; supersedes any earlier list."""

    sources: List[ChatSource] = field(default_factory=list)


@dataclass(frozen=True)
class Done:
    """Terminal, successful completion."""

    message_id: str = ""
    session_id: str = ""


@dataclass(frozen=True)
class Error:
    """Terminal failure signaled by the server."""

    message: str


@dataclass(frozen=True)
class Unrecognized:
    """A line that matches no known payload shape; dropped by the dispatcher."""

    line: str = ""


Record = Union[Content, Sources, Done, Error, Unrecognized]


def is_terminal(record: Record) -> bool:
    return isinstance(record, (Done, Error))


__all__ = [
    "Framing",
    "detect_framing",
    "Content",
    "Sources",
    "Done",
    "Error",
    "Unrecognized",
    "Record",
    "is_terminal",
]
