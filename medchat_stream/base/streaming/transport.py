"""Transport reader: pull raw byte chunks from a response body.

Accepted sources:
    - ``httpx.Response`` opened with ``stream=True`` (``iter_bytes`` /
      ``aiter_bytes``),
    - any iterable or async iterable of ``bytes``/``str`` chunks,
    - a body readable only to completion: ``bytes``, ``str``, or an object
      exposing ``read()`` but no chunked iteration. Such a body is yielded as
      a single chunk.

Readers interpret nothing; empty chunks are skipped.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Iterator

from ..constants import DEFAULT_ENCODING


def _as_bytes(chunk: Any) -> bytes:
    if isinstance(chunk, str):
        return chunk.encode(DEFAULT_ENCODING)
    return bytes(chunk)


def is_incremental(source: Any) -> bool:
    """Return True when ``source`` can be read chunk by chunk."""
    if isinstance(source, (bytes, bytearray, memoryview, str)):
        return False
    if hasattr(source, "iter_bytes") or hasattr(source, "aiter_bytes"):
        return True
    return hasattr(source, "__iter__") or hasattr(source, "__aiter__")


def read_all(source: Any) -> bytes:
    """Read a non-incremental body to completion."""
    if isinstance(source, (bytes, bytearray, memoryview, str)):
        return _as_bytes(source)
    read = getattr(source, "read", None)
    if callable(read):
        return _as_bytes(read())
    raise TypeError(f"unsupported response body: {type(source).__name__}")


async def aread_all(source: Any) -> bytes:
    """Async counterpart of :func:`read_all` (``aread`` preferred)."""
    aread = getattr(source, "aread", None)
    if callable(aread):
        return _as_bytes(await aread())
    return read_all(source)


def iter_chunks(source: Any) -> Iterator[bytes]:
    """Yield non-empty byte chunks until the source is exhausted."""
    if not is_incremental(source):
        payload = read_all(source)
        if payload:
            yield payload
        return
    iterator = source.iter_bytes() if hasattr(source, "iter_bytes") else iter(source)
    for chunk in iterator:
        if chunk:
            yield _as_bytes(chunk)


async def aiter_chunks(source: Any) -> AsyncIterator[bytes]:
    """Async twin of :func:`iter_chunks`; the only suspension point of a decode call."""
    if hasattr(source, "aiter_bytes"):
        async for chunk in source.aiter_bytes():
            if chunk:
                yield _as_bytes(chunk)
        return
    if hasattr(source, "__aiter__"):
        async for chunk in source:
            if chunk:
                yield _as_bytes(chunk)
        return
    for chunk in iter_chunks(source):
        yield chunk


__all__ = ["is_incremental", "read_all", "aread_all", "iter_chunks", "aiter_chunks"]
