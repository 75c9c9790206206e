"""Chat API client wrapping the streaming decoder.

``MedChatClient`` owns the request side of a chat turn: preconditions,
body assembly, the POST, and HTTP error mapping. The response body is handed
to :func:`decode_stream` (or :func:`adecode_stream`), which owns everything
after the status line.

Failure contract:
    - Missing base URL or token, or an invalid context: ``ChatStreamError``
      raised before any network call.
    - Connection failures and non-2xx statuses: ``ChatStreamError`` routed to
      ``callbacks.on_error`` (raised when no error callback is set).
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

import httpx

from ..base.cancellation import CancellationToken
from ..base.errors import ChatStreamError, ErrorCode, error_from_response
from ..base.errors_parts.classification import wrap_exception
from ..base.http import get_httpx_client, new_async_client
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ChatAnswer, SendMessageResponse
from ..base.streaming import StreamCallbacks, adecode_stream, decode_stream
from ..config import get_client_config
from ..config.env import env_token_provider
from .request_build import ContextLike, MetadataLike, build_body, build_headers, messages_url

TokenProvider = Callable[[], Optional[str]]


def _json_or_none(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return None


class MedChatClient:
    """Client for ``POST /chat/sessions/{id}/messages``.

    Parameters:
        token_provider: Returns the current bearer token, or ``None`` when the
            user is signed out. Defaults to the environment lookup.
        base_url / reference_scope / user_agent: Override the merged config.
        http_client: Sync client to use instead of the shared pool.
        async_client: Async client to use; when omitted a fresh client is
            created and closed per call.
    """

    def __init__(
        self,
        token_provider: TokenProvider = env_token_provider,
        *,
        base_url: Optional[str] = None,
        reference_scope: Optional[str] = None,
        user_agent: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        async_client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        cfg = get_client_config(
            {"base_url": base_url, "reference_scope": reference_scope, "user_agent": user_agent}
        )
        self.base_url: str = cfg.get("base_url") or ""
        self.reference_scope: str = cfg["reference_scope"]
        self.user_agent: Optional[str] = cfg.get("user_agent")
        self._token_provider = token_provider
        self._http = http_client
        self._async_http = async_client
        self._logger = logger or get_logger("medchat.client")

    # ---- request preparation ----

    def _prepare(self, session_id: str, content: str, context: ContextLike, metadata: MetadataLike, *, stream: bool):
        if not self.base_url:
            raise ChatStreamError(code=ErrorCode.CONFIG, message="API base URL is not configured")
        token = self._token_provider()
        if not token:
            raise ChatStreamError(code=ErrorCode.AUTH, message="Not authenticated")
        body = build_body(
            content,
            context,
            stream=stream,
            metadata=metadata,
            default_reference_scope=self.reference_scope,
        )
        headers = build_headers(token, self.user_agent, stream=stream)
        return messages_url(self.base_url, session_id), headers, body

    def _client(self) -> httpx.Client:
        return self._http or get_httpx_client(self.base_url, "chat")

    def _fail(self, callbacks: StreamCallbacks, error: ChatStreamError, ctx: LogContext) -> ChatAnswer:
        log_event(
            self._logger,
            "chat.error",
            ctx,
            level=logging.WARNING,
            code=error.code.value,
            status=error.status,
            server_code=error.server_code,
            error=error.message,
        )
        if callbacks.on_error is None:
            raise error
        callbacks.on_error(error)
        return ChatAnswer(session_id=ctx.session_id or "", error=error.message, done=True)

    def _end(self, answer: ChatAnswer, ctx: LogContext) -> ChatAnswer:
        ctx.message_id = answer.message_id or None
        log_event(self._logger, "chat.end", ctx, ok=answer.ok, chars=len(answer.text), sources=len(answer.sources))
        return answer

    @staticmethod
    def _http_error(response: httpx.Response, url: str) -> ChatStreamError:
        return error_from_response(
            response.status_code,
            _json_or_none(response),
            reason=response.reason_phrase,
            url=url,
        )

    # ---- public API ----

    def send_message_stream(
        self,
        session_id: str,
        content: str,
        context: ContextLike,
        callbacks: StreamCallbacks,
        metadata: MetadataLike = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> ChatAnswer:
        """Send a message and stream the answer into ``callbacks``.

        Returns the accumulated :class:`ChatAnswer` once the stream ends.
        """
        url, headers, body = self._prepare(session_id, content, context, metadata, stream=True)
        ctx = LogContext(session_id=session_id)
        log_event(self._logger, "chat.start", ctx, mode=body["mode"], stream=True)
        try:
            with self._client().stream("POST", url, json=body, headers=headers) as response:
                if not response.is_success:
                    response.read()
                    return self._fail(callbacks, self._http_error(response, url), ctx)
                answer = decode_stream(
                    response,
                    callbacks,
                    session_id=session_id,
                    content_type=response.headers.get("content-type"),
                    cancellation_token=cancellation_token,
                )
        except httpx.HTTPError as exc:
            return self._fail(callbacks, wrap_exception(exc), ctx)
        return self._end(answer, ctx)

    async def asend_message_stream(
        self,
        session_id: str,
        content: str,
        context: ContextLike,
        callbacks: StreamCallbacks,
        metadata: MetadataLike = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> ChatAnswer:
        """Async twin of :meth:`send_message_stream`."""
        url, headers, body = self._prepare(session_id, content, context, metadata, stream=True)
        ctx = LogContext(session_id=session_id)
        log_event(self._logger, "chat.start", ctx, mode=body["mode"], stream=True)
        client = self._async_http or new_async_client(None)
        try:
            async with client.stream("POST", url, json=body, headers=headers) as response:
                if not response.is_success:
                    await response.aread()
                    return self._fail(callbacks, self._http_error(response, url), ctx)
                answer = await adecode_stream(
                    response,
                    callbacks,
                    session_id=session_id,
                    content_type=response.headers.get("content-type"),
                    cancellation_token=cancellation_token,
                )
        except httpx.HTTPError as exc:
            return self._fail(callbacks, wrap_exception(exc), ctx)
        finally:
            if self._async_http is None:
                await client.aclose()
        return self._end(answer, ctx)

    def send_message(
        self,
        session_id: str,
        content: str,
        context: ContextLike,
    ) -> SendMessageResponse:
        """Send a message and wait for the complete answer.

        Raises:
            ChatStreamError: On preconditions, transport failure or non-2xx.
        """
        url, headers, body = self._prepare(session_id, content, context, None, stream=False)
        ctx = LogContext(session_id=session_id)
        log_event(self._logger, "chat.start", ctx, mode=body["mode"], stream=False)
        try:
            response = self._client().post(url, json=body, headers=headers)
        except httpx.HTTPError as exc:
            error = wrap_exception(exc)
            log_event(self._logger, "chat.error", ctx, level=logging.WARNING, code=error.code.value, error=error.message)
            raise error from exc
        if not response.is_success:
            error = self._http_error(response, url)
            log_event(
                self._logger,
                "chat.error",
                ctx,
                level=logging.WARNING,
                code=error.code.value,
                status=error.status,
                error=error.message,
            )
            raise error
        result = SendMessageResponse.from_payload(_json_or_none(response), session_id=session_id)
        ctx.message_id = result.message_id or None
        log_event(self._logger, "chat.end", ctx, ok=True, chars=len(result.answer), sources=len(result.sources))
        return result


__all__ = ["MedChatClient", "TokenProvider"]
