"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Implements httpx exception mapping, HTTP status extraction, status-to-code
mapping, and message-based heuristics as a fallback for opaque failures
raised while reading a response body.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional

import httpx

from .error_code import ErrorCode
from .chat_stream_error import ChatStreamError


def _extract_status(exc: Exception) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    try:
        resp = getattr(exc, "response", None)
    except RuntimeError:  # httpx raises when the request/response is unset
        resp = None
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.UPSTREAM,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:
    """Substring heuristic mapping for non-HTTP exceptions."""
    PATTERN_GROUPS = (
        (ErrorCode.TIMEOUT, ("timeout", "timed out")),
        (ErrorCode.AUTH, ("not authenticated", "unauthorized")),
        (ErrorCode.FORBIDDEN, ("forbidden",)),
        (ErrorCode.TRANSIENT, ("connection reset", "connection aborted", "broken pipe")),
        (ErrorCode.UNAVAILABLE, ("unavailable",)),
        (ErrorCode.NOT_FOUND, ("not found",)),
    )
    for code, patterns in PATTERN_GROUPS:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ChatStreamError passthrough.
        2. Timeout exceptions (sync/async/httpx).
        3. httpx transport failures (connection dropped, protocol errors).
        4. HTTP status mapping.
        5. Substring heuristics.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ChatStreamError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSIENT
    status = _extract_status(exc)  # type: ignore[arg-type]
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


def wrap_exception(exc: BaseException) -> ChatStreamError:
    """Return ``exc`` as a :class:`ChatStreamError`, classifying when needed."""
    if isinstance(exc, ChatStreamError):
        return exc
    code = classify_exception(exc)
    return ChatStreamError(
        code=code,
        message=str(exc) or exc.__class__.__name__,
        status=_extract_status(exc),  # type: ignore[arg-type]
        retryable=code in (ErrorCode.TRANSIENT, ErrorCode.TIMEOUT, ErrorCode.RATE_LIMIT),
        raw=exc if isinstance(exc, Exception) else None,
    )


__all__ = [
    "classify_exception",
    "wrap_exception",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
