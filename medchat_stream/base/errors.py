"""Unified chat stream error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``medchat_stream.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.chat_stream_error import ChatStreamError
from .errors_parts.classification import classify_exception
from .errors_parts.http_errors import error_from_response

__all__ = ["ErrorCode", "ChatStreamError", "classify_exception", "error_from_response"]
