"""Fixtures for client tests: MockTransport-backed clients and a request log."""

from __future__ import annotations

from typing import Callable, List

import httpx
import pytest

from medchat_stream.client import MedChatClient

BASE_URL = "https://chat.test/api"


class RequestLog:
    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []

    def wrap(self, handler: Callable[[httpx.Request], httpx.Response]) -> Callable[[httpx.Request], httpx.Response]:
        def _handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        return _handler


@pytest.fixture()
def request_log() -> RequestLog:
    return RequestLog()


@pytest.fixture()
def make_client(request_log):
    """Build a ``MedChatClient`` whose sync and async clients use ``handler``."""

    def _make(handler, *, token: str | None = "id-token", base_url: str | None = BASE_URL, **kw) -> MedChatClient:
        transport = httpx.MockTransport(request_log.wrap(handler))
        return MedChatClient(
            lambda: token,
            base_url=base_url,
            http_client=httpx.Client(transport=transport),
            async_client=httpx.AsyncClient(transport=transport),
            **kw,
        )

    return _make
