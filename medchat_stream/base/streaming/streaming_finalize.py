"""Finalize helper.

Emits the single consolidated end-of-call log line carrying the decode
metrics, for success, failure and cancellation alike.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..errors import ChatStreamError
from ..logging import LogContext, normalized_log_event
from .streaming_metrics import StreamMetrics


def finalize_stream(
    *,
    logger: logging.Logger,
    ctx: LogContext,
    metrics: StreamMetrics,
    error: Optional[ChatStreamError] = None,
    cancelled: bool = False,
) -> None:
    """Log ``stream.decode.end`` (or ``.error`` / ``.cancelled``) with metrics."""
    if cancelled:
        event = "stream.decode.cancelled"
    elif error is not None:
        event = "stream.decode.error"
    else:
        event = "stream.decode.end"
    normalized_log_event(
        logger,
        event,
        ctx,
        phase="finalize",
        error_code=error.code.value if error is not None else None,
        emitted=metrics.emitted > 0,
        level=logging.WARNING if error is not None else logging.INFO,
        error=error.message if error is not None else None,
        metrics=metrics.to_dict(),
    )


__all__ = ["finalize_stream"]
