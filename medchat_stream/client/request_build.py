"""Request assembly helpers for the chat endpoints (no I/O)."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from ..base.dto import MedChatContextPayload, MessageMetadata, SendMessageBody
from ..base.errors import ChatStreamError, ErrorCode
from ..config.defaults import MEDCHAT_MESSAGES_PATH

ContextLike = Union[MedChatContextPayload, Mapping[str, Any]]
MetadataLike = Union[MessageMetadata, Mapping[str, Any], None]


def messages_url(base_url: str, session_id: str) -> str:
    return base_url.rstrip("/") + MEDCHAT_MESSAGES_PATH.format(session_id=session_id)


def build_headers(token: str, user_agent: Optional[str] = None, *, stream: bool) -> Dict[str, str]:
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "Accept": "text/event-stream, application/x-ndjson, application/json" if stream else "application/json",
    }
    if user_agent:
        headers["User-Agent"] = user_agent
    return headers


def build_body(
    content: str,
    context: ContextLike,
    *,
    stream: bool,
    metadata: MetadataLike = None,
    default_reference_scope: str,
) -> Dict[str, Any]:
    """Validate the inputs and return the JSON request body.

    Raises:
        ChatStreamError: ``VALIDATION`` when the context or text is invalid.
    """
    try:
        ctx = context if isinstance(context, MedChatContextPayload) else MedChatContextPayload.model_validate(dict(context))
        meta = metadata
        if metadata is not None and not isinstance(metadata, MessageMetadata):
            meta = MessageMetadata.model_validate(dict(metadata))
        body = SendMessageBody.build(
            content,
            ctx,
            stream=stream,
            metadata=meta,
            default_reference_scope=default_reference_scope,
        )
    except ValidationError as exc:
        raise ChatStreamError(code=ErrorCode.VALIDATION, message=str(exc), raw=exc) from exc
    return body.to_wire()


__all__ = ["messages_url", "build_headers", "build_body", "ContextLike", "MetadataLike"]
