"""Fixtures for decoder tests: an event recorder and chunking helpers."""

from __future__ import annotations

from typing import Any, Iterator, List, Tuple

import pytest

from medchat_stream.base.errors import ChatStreamError
from medchat_stream.base.streaming import StreamCallbacks


class Recorder:
    """Record callback invocations as ``(name, payload)`` tuples in order."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Any]] = []

    def on_content(self, delta: str) -> None:
        self.events.append(("content", delta))

    def on_sources(self, sources) -> None:
        self.events.append(("sources", [s.document_id for s in sources]))

    def on_done(self, message_id: str, session_id: str) -> None:
        self.events.append(("done", (message_id, session_id)))

    def on_error(self, error: ChatStreamError) -> None:
        self.events.append(("error", error.message))

    def callbacks(self, *, with_error: bool = True) -> StreamCallbacks:
        return StreamCallbacks(
            on_content=self.on_content,
            on_sources=self.on_sources,
            on_done=self.on_done,
            on_error=self.on_error if with_error else None,
        )

    def names(self) -> List[str]:
        return [name for name, _ in self.events]

    def text(self) -> str:
        return "".join(p for n, p in self.events if n == "content")

    def terminals(self) -> List[Tuple[str, Any]]:
        return [e for e in self.events if e[0] in ("done", "error")]


@pytest.fixture()
def recorder() -> Recorder:
    return Recorder()


def split_at(payload: bytes, *offsets: int) -> List[bytes]:
    """Split ``payload`` at the given byte offsets."""
    cuts = [0, *sorted(offsets), len(payload)]
    return [payload[a:b] for a, b in zip(cuts, cuts[1:])]


def byte_chunks(payload: bytes) -> Iterator[bytes]:
    for i in range(len(payload)):
        yield payload[i : i + 1]


@pytest.fixture()
def chunking():
    """Expose the chunking helpers to tests without a shared helper module."""
    return type("Chunking", (), {"split_at": staticmethod(split_at), "byte_chunks": staticmethod(byte_chunks)})
