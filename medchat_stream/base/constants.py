"""Base shared constants for the chat stream decoder.

Central location to avoid scattering wire-format markers and default strings
across the streaming pipeline and the HTTP client.
"""
from __future__ import annotations

# Event-stream field marker; only ``data:`` lines carry payloads
SSE_DATA_PREFIX = "data:"
# Completion sentinel sent by event-stream servers instead of a JSON payload
SSE_DONE_SENTINEL = "[DONE]"

# Declared content types used to select the framing
CONTENT_TYPE_EVENT_STREAM = "text/event-stream"
CONTENT_TYPES_NDJSON = ("application/x-ndjson", "application/ndjson", "application/jsonl")

# Payload discriminant values
RECORD_TYPE_CONTENT = "content"
RECORD_TYPE_SOURCES = "sources"
RECORD_TYPE_DONE = "done"
RECORD_TYPE_ERROR = "error"

# Default message when the server signals an error without text
DEFAULT_STREAM_ERROR_MESSAGE = "stream error"

# Default reference scope sent with every message
DEFAULT_REFERENCE_SCOPE = "GLOBAL_DOCTOR"

# Default text encoding of response bodies
DEFAULT_ENCODING = "utf-8"

__all__ = [
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
    "CONTENT_TYPE_EVENT_STREAM",
    "CONTENT_TYPES_NDJSON",
    "RECORD_TYPE_CONTENT",
    "RECORD_TYPE_SOURCES",
    "RECORD_TYPE_DONE",
    "RECORD_TYPE_ERROR",
    "DEFAULT_STREAM_ERROR_MESSAGE",
    "DEFAULT_REFERENCE_SCOPE",
    "DEFAULT_ENCODING",
]
