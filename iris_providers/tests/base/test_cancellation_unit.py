"""Unit tests for cooperative cancellation tokens."""

from __future__ import annotations

import threading
import time

import pytest

from iris_providers.base.cancellation import DEADLINE_REASON, CancellationToken, CancelledError


def test_cancel_sets_state_and_reason() -> None:
    token = CancellationToken()
    assert not token.cancelled
    token.cancel("user requested")
    assert token.cancelled
    assert token.reason == "user requested"
    token.cancel("second call ignored")
    assert token.reason == "user requested"


def test_parent_cancellation_cascades_to_children() -> None:
    parent = CancellationToken()
    child = parent.child()
    grandchild = child.child()
    parent.cancel("stop")
    assert child.cancelled and grandchild.cancelled
    assert grandchild.reason == "stop"


def test_child_cancellation_does_not_cancel_parent() -> None:
    parent = CancellationToken()
    child = parent.child()
    child.cancel()
    assert child.cancelled
    assert not parent.cancelled


def test_child_of_cancelled_parent_starts_cancelled() -> None:
    parent = CancellationToken()
    parent.cancel("gone")
    assert parent.child().cancelled


def test_raise_if_cancelled_flags_deadline() -> None:
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel()
    with pytest.raises(CancelledError) as info:
        token.raise_if_cancelled()
    assert info.value.deadline is False

    expired = CancellationToken(timeout=0.0)
    with pytest.raises(CancelledError) as info:
        expired.raise_if_cancelled()
    assert info.value.deadline is True
    assert expired.deadline_exceeded
    assert expired.reason == DEADLINE_REASON


def test_with_timeout_child_never_outlives_parent_deadline() -> None:
    parent = CancellationToken(timeout=0.2)
    child = parent.with_timeout(10.0)
    assert child.deadline == parent.deadline
    shorter = parent.with_timeout(0.01)
    assert shorter.deadline < parent.deadline
    assert CancellationToken().remaining() is None


def test_wait_is_interrupted_by_cancel() -> None:
    token = CancellationToken()
    timer = threading.Timer(0.05, token.cancel)
    timer.start()
    t0 = time.monotonic()
    assert token.wait(5.0) is True
    assert time.monotonic() - t0 < 2.0
    timer.join()


def test_wait_is_cut_short_by_deadline() -> None:
    token = CancellationToken(timeout=0.05)
    t0 = time.monotonic()
    assert token.wait(5.0) is True
    assert time.monotonic() - t0 < 2.0
    assert token.deadline_exceeded


def test_wait_times_out_without_cancel() -> None:
    assert CancellationToken().wait(0.01) is False


def test_on_cancel_runs_once_and_can_be_released() -> None:
    token = CancellationToken()
    fired = []
    token.on_cancel(lambda: fired.append("a"))
    release = token.on_cancel(lambda: fired.append("b"))
    release()
    token.cancel()
    token.cancel()
    assert fired == ["a"]
    token.on_cancel(lambda: fired.append("late"))
    assert fired == ["a", "late"]


def test_on_cancel_fires_for_parent_cascade_and_deadline() -> None:
    parent = CancellationToken()
    child = parent.child()
    fired = threading.Event()
    child.on_cancel(fired.set)
    parent.cancel()
    assert fired.is_set()

    expiring = CancellationToken(timeout=0.05)
    expired = threading.Event()
    expiring.on_cancel(expired.set)
    assert expired.wait(2.0)
    assert expiring.deadline_exceeded
