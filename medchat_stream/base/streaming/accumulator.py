"""Text accumulator: incremental bytes-to-text decoding."""

from __future__ import annotations

import codecs

from ..constants import DEFAULT_ENCODING
from .state import StreamState


class TextAccumulator:
    """Decode chunks into ``StreamState.buffer`` with a stateful decoder.

    A multi-byte character split across two chunks is held back by the
    decoder until its remaining bytes arrive. Invalid sequences are replaced
    with U+FFFD rather than raised.
    """

    def __init__(self, state: StreamState, encoding: str = DEFAULT_ENCODING) -> None:
        self._state = state
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")

    def feed(self, chunk: bytes) -> str:
        """Append the decoded text of ``chunk`` to the buffer and return it."""
        text = self._decoder.decode(chunk, final=False)
        self._state.buffer += text
        return text

    def finish(self) -> str:
        """Flush bytes still held by the decoder at end of stream."""
        text = self._decoder.decode(b"", final=True)
        self._state.buffer += text
        return text


__all__ = ["TextAccumulator"]
