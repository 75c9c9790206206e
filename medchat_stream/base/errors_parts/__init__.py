"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `medchat_stream.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .chat_stream_error import ChatStreamError
from .classification import classify_exception
from .http_errors import error_from_response

__all__ = ["ErrorCode", "ChatStreamError", "classify_exception", "error_from_response"]
