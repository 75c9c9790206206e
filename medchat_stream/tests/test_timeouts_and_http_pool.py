"""Timeout configuration and the shared httpx client pool."""

from __future__ import annotations

import httpx

from medchat_stream.base.http import close_all_clients, get_httpx_client, new_async_client
from medchat_stream.base.timeouts import TimeoutConfig, get_timeout_config


def setup_function(_):
    close_all_clients()


def teardown_function(_):
    close_all_clients()


def test_timeout_defaults_and_httpx_conversion():
    cfg = get_timeout_config()
    assert cfg == TimeoutConfig()  # nosec B101
    t = cfg.to_httpx()
    assert t.connect == 10.0 and t.read == 120.0  # nosec B101


def test_timeout_env_overrides_refresh_cache(monkeypatch):
    monkeypatch.setenv("MEDCHAT_TIMEOUT_READ_SECONDS", "5")
    monkeypatch.setenv("MEDCHAT_TIMEOUT_CONNECT_SECONDS", "not-a-number")
    cfg = get_timeout_config()
    assert cfg.read_seconds == 5.0 and cfg.connect_seconds == 10.0  # nosec B101
    monkeypatch.setenv("MEDCHAT_TIMEOUT_READ_SECONDS", "-1")
    assert get_timeout_config().read_seconds == 120.0  # nosec B101


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.example.com", purpose="chat")
    assert c1 is c2, "Expected pooled client instances to be identical for same key"  # nosec B101


def test_different_purpose_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.example.com", purpose="stream")
    assert c1 is not c2  # nosec B101


def test_closed_client_is_replaced():
    c1 = get_httpx_client(None, purpose="chat")
    c1.close()
    assert get_httpx_client(None, purpose="chat") is not c1  # nosec B101


def test_pooled_clients_use_configured_timeouts():
    client = get_httpx_client(None, purpose="chat", headers={"User-Agent": "t"})
    assert client.timeout.read == get_timeout_config().read_seconds  # nosec B101
    assert client.headers["user-agent"] == "t"  # nosec B101


def test_new_async_client_is_not_pooled():
    a = new_async_client(None)
    b = new_async_client(None)
    assert isinstance(a, httpx.AsyncClient) and a is not b  # nosec B101
