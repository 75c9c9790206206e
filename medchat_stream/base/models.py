"""
Chat domain models public surface.

This module re-exports the one-class-per-file implementations under
``medchat_stream.base.models_parts``.
"""

from .models_parts.chat_source import ChatSource, parse_sources
from .models_parts.chat_answer import ChatAnswer
from .models_parts.send_message_response import SendMessageResponse

__all__ = [
    "ChatSource",
    "parse_sources",
    "ChatAnswer",
    "SendMessageResponse",
]
