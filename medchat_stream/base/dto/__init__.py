"""DTO validation package for chat requests."""

from .chat import (
    ChatMode,
    MedChatContextPayload,
    MessageMetadata,
    SendMessageOptions,
    SendMessageBody,
)

__all__ = [
    "ChatMode",
    "MedChatContextPayload",
    "MessageMetadata",
    "SendMessageOptions",
    "SendMessageBody",
]
