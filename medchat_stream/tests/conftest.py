"""Pytest configuration for the medchat_stream test suite.

Isolates every test from the developer's environment (tokens, base URL,
config file) and resets the module-level caches that read it.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

import pytest

_ENV_VARS = (
    "MEDCHAT_API_BASE_URL",
    "MEDCHAT_REFERENCE_SCOPE",
    "MEDCHAT_USER_AGENT",
    "MEDCHAT_CONFIG_FILE",
    "MEDCHAT_ID_TOKEN",
    "MEDCHAT_API_TOKEN",
    "MEDCHAT_LOG_LEVEL",
    "MEDCHAT_TIMEOUT_CONNECT_SECONDS",
    "MEDCHAT_TIMEOUT_READ_SECONDS",
    "MEDCHAT_TIMEOUT_WRITE_SECONDS",
    "MEDCHAT_TIMEOUT_POOL_SECONDS",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear MEDCHAT_* variables and the config file cache around each test."""
    from medchat_stream.config import reset_config_cache

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def log_capture() -> Iterator[List[logging.LogRecord]]:
    """Collect every record emitted under the ``medchat`` logger at DEBUG and up."""
    records: List[logging.LogRecord] = []
    handler = logging.Handler(level=logging.DEBUG)
    handler.emit = lambda record: records.append(record)  # type: ignore
    logger = logging.getLogger("medchat")
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield records
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)
