"""
Structured chat error exception type.

Wraps transport failures, HTTP error responses and server-signaled stream
errors with a normalized `ErrorCode` so callers handle all of them through a
single path.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ChatStreamError(Exception):
    """Represents a structured chat error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable message suitable for display.
        status: HTTP status code when the failure came from a response.
        server_code: Application error code supplied by the server
            (e.g. ``"SESSION_NOT_FOUND"``).
        retryable: Hint for upstream retry logic (not authoritative).
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    status: Optional[int] = None
    server_code: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message

    @property
    def is_not_found(self) -> bool:
        """Whether the error reports a missing session or resource."""
        return self.code is ErrorCode.NOT_FOUND


__all__ = ["ChatStreamError"]
