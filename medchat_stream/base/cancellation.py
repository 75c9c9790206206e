"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` lets a caller abandon an in-flight decode call between
chunks. The concrete implementation lives under ``cancellation_parts``.
"""

from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken"]
