"""Chat API client layer."""

from .medchat_client import MedChatClient, TokenProvider
from .request_build import build_body, build_headers, messages_url

__all__ = ["MedChatClient", "TokenProvider", "build_body", "build_headers", "messages_url"]
