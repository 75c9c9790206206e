"""
Base layer of the chat stream client.

Exports the streaming decoder, the error taxonomy, domain models and the
shared infrastructure (logging, cancellation, timeouts, HTTP client pool)
used by the client and CLI layers.
"""

from .cancellation import CancellationToken
from .errors import ChatStreamError, ErrorCode, classify_exception, error_from_response
from .models import ChatAnswer, ChatSource, SendMessageResponse, parse_sources
from .timeouts import TimeoutConfig, get_timeout_config
from .streaming import (
    AnswerCollector,
    Framing,
    StreamCallbacks,
    StreamMetrics,
    accumulate_records,
    adecode_stream,
    aiter_records,
    decode_single_shot,
    decode_stream,
    detect_framing,
    iter_records,
)

__all__ = [
    "CancellationToken",
    "ChatStreamError",
    "ErrorCode",
    "classify_exception",
    "error_from_response",
    "ChatAnswer",
    "ChatSource",
    "SendMessageResponse",
    "parse_sources",
    "TimeoutConfig",
    "get_timeout_config",
    "AnswerCollector",
    "Framing",
    "StreamCallbacks",
    "StreamMetrics",
    "accumulate_records",
    "adecode_stream",
    "aiter_records",
    "decode_single_shot",
    "decode_stream",
    "detect_framing",
    "iter_records",
]
