"""medchat_stream.config.defaults
==============================

Central place for small, stable default values used by the client and CLI.
They can be overridden through environment variables or an external config
file, but provide sensible fallbacks for local development and tests.

Only plain constants live here (no I/O).
"""

from __future__ import annotations

from ..base.constants import DEFAULT_REFERENCE_SCOPE

# ---- HTTP layer ----

# Base URL of the chat API (no trailing slash). Empty means unconfigured:
# requests then fail before any network call.
MEDCHAT_DEFAULT_BASE_URL = ""
# Sent with every request so server logs can tell client builds apart.
MEDCHAT_DEFAULT_USER_AGENT = "medchat-stream/0.1"
# Path template of the message endpoint, relative to the base URL.
MEDCHAT_MESSAGES_PATH = "/chat/sessions/{session_id}/messages"

# ---- Chat request ----

# Reference scope used when the context does not name one.
MEDCHAT_DEFAULT_REFERENCE_SCOPE = DEFAULT_REFERENCE_SCOPE
MEDCHAT_DEFAULT_MODE = "PATIENT_AND_REFERENCES"

# ---- CLI defaults ----

# Chunk size used when replaying a captured body through the decoder.
MEDCHAT_CLI_DEFAULT_CHUNK_SIZE = 64
