"""
HTTP error response mapping.

Converts a non-2xx chat API response into a :class:`ChatStreamError` carrying
a user-facing message. The backend returns ``{"error": str, "code": str}``
bodies; the application ``code`` refines the message for a handful of
well-known failures (session ownership, missing patient, AI upstream down).
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from .error_code import ErrorCode
from .chat_stream_error import ChatStreamError
from .classification import _HTTP_STATUS_MAP

SESSION_NOT_FOUND = "SESSION_NOT_FOUND"

_FORBIDDEN_MESSAGES = {
    "CLINIC_MISMATCH": "Authorization error: clinic does not match.",
    "SESSION_OWNERSHIP_MISMATCH": "You do not have permission to access this session.",
}
_SERVER_MESSAGES = {
    "EMBEDDING_ERROR": "Error while processing the query. Please try again.",
    "VECTOR_SEARCH_ERROR": "Error while processing the query. Please try again.",
}


def _unauthorized(message: str, server_code: str) -> tuple[str, bool]:
    """Return ``(message, session_expired)`` for a 401 response."""
    lowered = message.lower()
    if server_code == "AUTH_ERROR" or "token" in lowered or "auth" in lowered:
        return "Session expired. Please sign in again.", True
    return "Unauthorized. Please sign in again.", False


def _not_found(server_code: str, url: str) -> tuple[str, Optional[str]]:
    if server_code == "PATIENT_NOT_FOUND":
        return "Patient not found.", server_code
    if server_code == SESSION_NOT_FOUND or "/chat/sessions/" in url:
        return "Session not found.", SESSION_NOT_FOUND
    return "Resource not found.", server_code or None


def error_from_response(
    status: int,
    payload: Any = None,
    *,
    reason: str = "",
    url: str = "",
) -> ChatStreamError:
    """Build a :class:`ChatStreamError` from an HTTP error response.

    Parameters:
        status: HTTP status code of the response.
        payload: Decoded JSON body, if any. Non-mapping bodies are ignored.
        reason: HTTP reason phrase used when the body carries no message.
        url: Request URL, used to recognise session endpoints on bare 404s.

    Returns:
        A classified error; never raises.
    """
    body: Mapping[str, Any] = payload if isinstance(payload, Mapping) else {}
    message = str(body.get("error") or reason or "Unknown error")
    server_code = str(body.get("code") or "")
    code = _HTTP_STATUS_MAP.get(status, ErrorCode.SERVER_ERROR if status >= 500 else ErrorCode.UNKNOWN)

    if status == 401:
        text, expired = _unauthorized(message, server_code)
        return ChatStreamError(
            code=ErrorCode.AUTH,
            message=text,
            status=status,
            server_code=server_code or ("AUTH_ERROR" if expired else None),
        )
    if status == 403:
        text = _FORBIDDEN_MESSAGES.get(server_code, "You do not have permission to access this resource.")
    elif status == 404:
        text, resolved = _not_found(server_code, url)
        return ChatStreamError(code=code, message=text, status=status, server_code=resolved)
    elif status == 400:
        text = message if body.get("error") else "Invalid request. Check the data sent."
    elif status == 500:
        text = _SERVER_MESSAGES.get(server_code, "Internal server error. Please try again shortly.")
    elif status == 502:
        text = (
            "AI service unavailable. Please try again."
            if server_code == "CLAUDE_ERROR"
            else "Error while generating the answer. Please try again."
        )
    else:
        text = message
    return ChatStreamError(
        code=code,
        message=text,
        status=status,
        server_code=server_code or None,
        retryable=code in (ErrorCode.RATE_LIMIT, ErrorCode.UPSTREAM, ErrorCode.UNAVAILABLE, ErrorCode.TIMEOUT),
    )


__all__ = ["error_from_response", "SESSION_NOT_FOUND"]
