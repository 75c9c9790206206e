"""Incremental streaming response decoder.

Pipeline: transport reader -> text accumulator -> framer -> record
recognizer -> dispatcher. Public entry points are :func:`decode_stream`,
:func:`adecode_stream` and :func:`iter_records`.
"""

from .answer import AnswerCollector, accumulate_records
from .decoder import (
    StreamDecoder,
    adecode_stream,
    aiter_records,
    decode_single_shot,
    decode_stream,
    iter_records,
)
from .dispatcher import Dispatcher, DispatchState, StreamCallbacks
from .recognizer import MATCHERS, Matcher, recognize
from .records import (
    Content,
    Done,
    Error,
    Framing,
    Record,
    Sources,
    Unrecognized,
    detect_framing,
    is_terminal,
)
from .state import StreamState
from .streaming_metrics import StreamMetrics

__all__ = [
    "AnswerCollector",
    "accumulate_records",
    "StreamDecoder",
    "decode_stream",
    "adecode_stream",
    "decode_single_shot",
    "iter_records",
    "aiter_records",
    "Dispatcher",
    "DispatchState",
    "StreamCallbacks",
    "MATCHERS",
    "Matcher",
    "recognize",
    "Content",
    "Done",
    "Error",
    "Framing",
    "Record",
    "Sources",
    "Unrecognized",
    "detect_framing",
    "is_terminal",
    "StreamState",
    "StreamMetrics",
]
