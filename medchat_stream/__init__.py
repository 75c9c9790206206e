"""medchat_stream package

Client for a clinical chat API whose answers arrive as a long-lived,
chunked HTTP response. The core is an incremental decoder that turns the
body into content deltas, citation lists, a completion and errors as bytes
arrive, over event-stream or newline-delimited JSON framing.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ChatStreamError`, :class:`ErrorCode`
    - Decoder: :func:`decode_stream`, :func:`adecode_stream`,
      :func:`iter_records`, :class:`StreamCallbacks`
    - Client: :class:`MedChatClient`
"""

from .base.cancellation import CancellationToken
from .base.errors import ChatStreamError, ErrorCode
from .base.models import ChatAnswer, ChatSource, SendMessageResponse
from .base.streaming import (
    AnswerCollector,
    Framing,
    StreamCallbacks,
    accumulate_records,
    adecode_stream,
    aiter_records,
    decode_single_shot,
    decode_stream,
    iter_records,
)
from .client import MedChatClient

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CancellationToken",
    "ChatStreamError",
    "ErrorCode",
    "ChatAnswer",
    "ChatSource",
    "SendMessageResponse",
    "AnswerCollector",
    "Framing",
    "StreamCallbacks",
    "accumulate_records",
    "adecode_stream",
    "aiter_records",
    "decode_single_shot",
    "decode_stream",
    "iter_records",
    "MedChatClient",
]
