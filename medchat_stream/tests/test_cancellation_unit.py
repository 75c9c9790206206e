"""Unit tests for cooperative cancellation primitives.

Covers idempotent cancel, close callbacks (run once, run immediately when
registered late, unregister).
"""
from __future__ import annotations

from medchat_stream.base.cancellation import CancellationToken


def test_cancel_is_idempotent_and_keeps_first_reason():
    token = CancellationToken()
    token.cancel(reason="stop")
    token.cancel(reason="ignored")
    assert token.cancelled is True and token.reason == "stop"  # nosec B101 - pytest assert in tests


def test_callbacks_run_once():
    token = CancellationToken()
    calls = []
    token.on_cancel(lambda: calls.append("a"))
    token.cancel()
    token.cancel()
    assert calls == ["a"]  # nosec B101 - pytest assert in tests


def test_late_registration_runs_immediately():
    token = CancellationToken()
    token.cancel("done")
    calls = []
    token.on_cancel(lambda: calls.append("late"))
    assert calls == ["late"]  # nosec B101 - pytest assert in tests


def test_unregister_and_failing_callback():
    token = CancellationToken()
    calls = []
    unregister = token.on_cancel(lambda: calls.append("removed"))
    unregister()

    def boom():
        raise RuntimeError("already closed")

    token.on_cancel(boom)
    token.on_cancel(lambda: calls.append("kept"))
    token.cancel()
    assert calls == ["kept"]  # nosec B101 - pytest assert in tests
