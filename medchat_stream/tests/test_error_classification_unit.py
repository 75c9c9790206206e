from __future__ import annotations

import types

import httpx

from medchat_stream.base.errors import ChatStreamError, ErrorCode, classify_exception
from medchat_stream.base.errors_parts.classification import wrap_exception


def test_classify_chat_stream_error_passthrough():
    e = ChatStreamError(code=ErrorCode.AUTH, message="nope")
    assert classify_exception(e) is ErrorCode.AUTH  # nosec B101 - assert is appropriate in unit tests


def test_classify_http_status_mapping():
    e1 = types.SimpleNamespace(status_code=404)
    assert classify_exception(e1) is ErrorCode.NOT_FOUND  # nosec B101 - assert is appropriate in unit tests
    e2 = types.SimpleNamespace(response=types.SimpleNamespace(status_code=503))
    assert classify_exception(e2) is ErrorCode.UNAVAILABLE  # nosec B101 - assert is appropriate in unit tests


def test_classify_httpx_exceptions():
    assert classify_exception(httpx.ReadTimeout("slow")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.TRANSIENT  # nosec B101
    assert classify_exception(httpx.RemoteProtocolError("peer closed")) is ErrorCode.TRANSIENT  # nosec B101
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101


def test_classify_heuristics():
    assert classify_exception(Exception("timed out waiting")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(Exception("Not authenticated")) is ErrorCode.AUTH  # nosec B101
    assert classify_exception(Exception("connection reset by peer")) is ErrorCode.TRANSIENT  # nosec B101
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN  # nosec B101


def test_wrap_exception_keeps_original_and_retry_hint():
    exc = httpx.ReadError("dropped")
    err = wrap_exception(exc)
    assert err.code is ErrorCode.TRANSIENT and err.retryable is True  # nosec B101
    assert err.raw is exc and str(err) == "dropped"  # nosec B101
    assert wrap_exception(err) is err  # nosec B101


def test_wrap_exception_uses_class_name_for_empty_message():
    assert wrap_exception(RuntimeError()).message == "RuntimeError"  # nosec B101
