"""Unified timeout configuration for the chat HTTP client.

The decoder itself has no notion of wall-clock time; every timeout lives on
the HTTP transport and is derived from this module so that no ad-hoc numeric
literals appear at call sites.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values (seconds).

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and again only when the overrides change. Supported
    environment variables (all optional):
        MEDCHAT_TIMEOUT_CONNECT_SECONDS
        MEDCHAT_TIMEOUT_READ_SECONDS   (idle gap allowed between two chunks)
        MEDCHAT_TIMEOUT_WRITE_SECONDS
        MEDCHAT_TIMEOUT_POOL_SECONDS
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx

_ENV_NAMES = (
    "MEDCHAT_TIMEOUT_CONNECT_SECONDS",
    "MEDCHAT_TIMEOUT_READ_SECONDS",
    "MEDCHAT_TIMEOUT_WRITE_SECONDS",
    "MEDCHAT_TIMEOUT_POOL_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_seconds: Time allowed to establish the connection.
        read_seconds: Maximum idle gap while waiting for the next chunk of a
            streamed answer. ``None`` disables the read timeout.
        write_seconds: Time allowed to send the request body.
        pool_seconds: Time allowed to acquire a pooled connection.
    """

    connect_seconds: float = 10.0
    read_seconds: float | None = 120.0
    write_seconds: float = 30.0
    pool_seconds: float = 10.0

    def to_httpx(self) -> httpx.Timeout:
        """Return the equivalent :class:`httpx.Timeout`."""
        return httpx.Timeout(
            connect=self.connect_seconds,
            read=self.read_seconds,
            write=self.write_seconds,
            pool=self.pool_seconds,
        )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float | None) -> float | None:
    """Parse an environment variable as a positive float with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig`, refreshed when env overrides change."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_seconds=float(_parse_env_float(_ENV_NAMES[0], defaults.connect_seconds)),
        read_seconds=_parse_env_float(_ENV_NAMES[1], defaults.read_seconds),
        write_seconds=float(_parse_env_float(_ENV_NAMES[2], defaults.write_seconds)),
        pool_seconds=float(_parse_env_float(_ENV_NAMES[3], defaults.pool_seconds)),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
