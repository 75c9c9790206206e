"""Cooperative cancellation token implementation.

The decoder polls the token between chunks. Callers on another thread may
additionally register close callbacks (typically ``response.close``) so a
read blocked on the network returns promptly once cancellation is requested.
"""

from __future__ import annotations

from contextlib import suppress
from threading import Lock
from typing import Callable, List, Optional


class CancellationToken:
    """A thread-safe, idempotent cooperative cancellation flag."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._cancelled = False
        self._reason: Optional[str] = None
        self._callbacks: List[Callable[[], object]] = []

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation and run registered callbacks once."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            self._reason = reason
            callbacks, self._callbacks = self._callbacks, []
        for cb in callbacks:
            # Closing an already-closed response must not mask the cancel
            with suppress(Exception):
                cb()

    def on_cancel(self, callback: Callable[[], object]) -> Callable[[], None]:
        """Register ``callback`` to run on cancellation.

        Runs immediately when the token is already cancelled. Returns a
        function that unregisters the callback.
        """
        with self._lock:
            if not self._cancelled:
                self._callbacks.append(callback)
                return lambda: self._discard(callback)
        with suppress(Exception):
            callback()
        return lambda: None

    def _discard(self, callback: Callable[[], object]) -> None:
        with self._lock, suppress(ValueError):
            self._callbacks.remove(callback)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
