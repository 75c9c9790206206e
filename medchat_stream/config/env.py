"""medchat_stream.config.env
=========================

Environment variable names and the bearer token lookup.

The token is normally supplied by an injected provider (the identity layer
of the host application). For the CLI and local runs it can come from the
environment instead; ``MEDCHAT_ID_TOKEN`` wins over ``MEDCHAT_API_TOKEN``.

Helpers never raise on unset variables; callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

TOKEN_ENV_VARS: Tuple[str, ...] = ("MEDCHAT_ID_TOKEN", "MEDCHAT_API_TOKEN")
CONFIG_FILE_ENV = "MEDCHAT_CONFIG_FILE"

# Config field -> env var
ENV_FIELD_MAP: Dict[str, str] = {
    "base_url": "MEDCHAT_API_BASE_URL",
    "reference_scope": "MEDCHAT_REFERENCE_SCOPE",
    "user_agent": "MEDCHAT_USER_AGENT",
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def resolve_token() -> Tuple[Optional[str], Optional[str]]:
    """Resolve a bearer token from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        (value, env_var_used) for the first non-empty, non-placeholder
        variable; (None, None) when nothing usable is set.
    """
    for name in TOKEN_ENV_VARS:
        val = (os.environ.get(name) or "").strip()
        if val and not is_placeholder(val):
            return val, name
    return None, None


def env_token_provider() -> Optional[str]:
    """Token provider backed by :func:`resolve_token` (CLI default)."""
    return resolve_token()[0]


__all__ = [
    "TOKEN_ENV_VARS",
    "CONFIG_FILE_ENV",
    "ENV_FIELD_MAP",
    "is_placeholder",
    "resolve_token",
    "env_token_provider",
]
