"""
Normalized chat error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the decoder, the HTTP client and
error handling utilities. Values are lowercase snake_case and are considered a
stable public contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    SERVER_ERROR = "server_error"
    UPSTREAM = "upstream"
    UNAVAILABLE = "unavailable"
    STREAM = "stream"
    CANCELLED = "cancelled"
    CONFIG = "config"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
