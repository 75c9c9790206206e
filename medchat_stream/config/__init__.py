"""Configuration layer for the chat client.

Merge order (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Optional external config file (JSON or YAML) named by
       ``MEDCHAT_CONFIG_FILE``
    3. Environment variables (``MEDCHAT_API_BASE_URL``,
       ``MEDCHAT_REFERENCE_SCOPE``, ``MEDCHAT_USER_AGENT``)
    4. In-code overrides passed to ``get_client_config``

External config file example::

    base_url: https://chat.example.org/api
    reference_scope: GLOBAL_DOCTOR
    user_agent: ward-tablet/2.3

Public API
----------
* get_client_config(overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    MEDCHAT_DEFAULT_BASE_URL,
    MEDCHAT_DEFAULT_REFERENCE_SCOPE,
    MEDCHAT_DEFAULT_USER_AGENT,
)
from .env import CONFIG_FILE_ENV, ENV_FIELD_MAP, env_token_provider, is_placeholder, resolve_token

DEFAULTS: Dict[str, Any] = {
    "base_url": MEDCHAT_DEFAULT_BASE_URL,
    "reference_scope": MEDCHAT_DEFAULT_REFERENCE_SCOPE,
    "user_agent": MEDCHAT_DEFAULT_USER_AGENT,
}

_FILE_CACHE: Optional[Dict[str, Any]] = None


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path or not Path(path).exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    # JSON first; YAML is a superset but gives worse errors on bad JSON
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = data
    return data


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, name in ENV_FIELD_MAP.items():
        val = os.getenv(name)
        if val is not None and val.strip():
            out[field] = val.strip()
    return out


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged client configuration.

    Merge order (later wins): defaults -> external config -> env vars -> overrides
    """
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= {k: v for k, v in _load_external_config().items() if k in DEFAULTS and v is not None}
    cfg |= _env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    if isinstance(cfg.get("base_url"), str):
        cfg["base_url"] = cfg["base_url"].rstrip("/")
    return cfg


def reset_config_cache() -> None:
    """Forget the cached external config file (tests, config reloads)."""
    global _FILE_CACHE
    _FILE_CACHE = None


__all__ = [
    "get_client_config",
    "reset_config_cache",
    "resolve_token",
    "env_token_provider",
    "is_placeholder",
    "DEFAULTS",
]
