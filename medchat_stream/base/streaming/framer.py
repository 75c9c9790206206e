"""Framer: split accumulated text into complete lines."""

from __future__ import annotations

from typing import List

from .state import StreamState


def split_lines(state: StreamState) -> List[str]:
    """Return complete lines and keep the trailing partial line buffered.

    Lines are split on ``\\n``; a trailing ``\\r`` is dropped so CRLF bodies
    frame identically. With no newline in the buffer nothing is returned and
    the buffer is left intact.
    """
    if "\n" not in state.buffer:
        return []
    *lines, state.buffer = state.buffer.split("\n")
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def flush(state: StreamState) -> List[str]:
    """Return the remaining buffer as a final synthetic line at end of stream."""
    rest, state.buffer = state.buffer, ""
    if rest.endswith("\r"):
        rest = rest[:-1]
    return [rest] if rest.strip() else []


__all__ = ["split_lines", "flush"]
