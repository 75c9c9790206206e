"""Model parts package (one class per file)."""

from .chat_source import ChatSource, parse_sources
from .chat_answer import ChatAnswer
from .send_message_response import SendMessageResponse

__all__ = ["ChatSource", "parse_sources", "ChatAnswer", "SendMessageResponse"]
