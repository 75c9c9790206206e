"""Shared HTTP client pool for the chat API.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances to avoid per-call allocations and reduce connection overhead.
    Timeouts derive exclusively from :func:`get_timeout_config`.

Lifecycle & cleanup:
    - Clients are cached by a composite key of ``base_url`` and ``purpose``
      (e.g. "chat" vs "stream").
    - All clients are closed at interpreter exit via ``atexit``. Tests may
      also call :func:`close_all_clients` explicitly.
    - Async clients are bound to an event loop and therefore are not pooled;
      :func:`new_async_client` returns a fresh client the caller must close.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def _client_kwargs(base_url: Optional[str], headers: Optional[Dict[str, str]]) -> dict:
    kwargs: dict = {"timeout": get_timeout_config().to_httpx()}
    if base_url:
        kwargs["base_url"] = base_url
    if headers:
        kwargs["headers"] = headers
    return kwargs


def get_httpx_client(
    base_url: Optional[str],
    purpose: str,
    *,
    headers: Optional[Dict[str, str]] = None,
) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    The first request for a key creates the client; later calls reuse it and
    ignore ``headers``. Safe for concurrent use.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        client = httpx.Client(**_client_kwargs(base_url, headers))
        _CLIENTS[key] = client
        return client


def new_async_client(
    base_url: Optional[str],
    *,
    headers: Optional[Dict[str, str]] = None,
) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` configured like the pooled sync clients."""
    return httpx.AsyncClient(**_client_kwargs(base_url, headers))


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            try:
                c.close()
            except Exception:  # nosec B110 - best-effort shutdown
                pass
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "new_async_client", "close_all_clients"]
