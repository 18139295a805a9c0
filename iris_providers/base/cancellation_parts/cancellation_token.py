"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class passed to every provider call. It is
the Python counterpart of a per-call context: explicit cancellation, parent to
child cascade and an optional monotonic deadline.
"""

from __future__ import annotations

import threading
import time
from threading import Lock
from typing import Callable, List, Optional

from .state import State
from .cancelled_error import CancelledError

DEADLINE_REASON = "deadline exceeded"


class CancellationToken:
    """A cooperative cancellation token with cascading and deadline semantics.

    Thread-safe for ``cancel`` / ``cancelled`` / ``wait`` / ``on_cancel`` usage. Child tokens
    inherit cancellation when the parent is cancelled, and never outlive the
    parent's deadline.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None, timeout: float | None = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        self._callbacks: List[Callable[[], None]] = []
        self._timer: Optional[threading.Timer] = None
        deadline = time.monotonic() + timeout if timeout is not None else None
        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self._state.deadline = deadline
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested or the deadline has passed."""
        if self._state.cancelled:
            return True
        deadline = self._state.deadline
        if deadline is not None and time.monotonic() >= deadline:
            self.cancel(DEADLINE_REASON)
            return True
        return False

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    @property
    def deadline(self) -> Optional[float]:  # noqa: D401 - short form
        """Monotonic deadline, or ``None`` when the token never expires."""
        return self._state.deadline

    @property
    def deadline_exceeded(self) -> bool:
        """True when the token was cancelled by its deadline."""
        return self.cancelled and self._state.reason == DEADLINE_REASON

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline (``None`` without a deadline)."""
        if self._state.deadline is None:
            return None
        return max(0.0, self._state.deadline - time.monotonic())

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            self._state.event.set()
            children = list(self._children)
            callbacks = list(self._callbacks)
            self._callbacks.clear()
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
        for cb in callbacks:
            cb()
        for child in children:
            child.cancel(reason)

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Run ``callback`` once when the token is cancelled; return an unregister function.

        Runs immediately when the token is already cancelled. Callbacks run on
        the cancelling thread (a timer thread for deadlines) and must not raise.
        """
        with self._lock:
            if not self._state.cancelled:
                self._callbacks.append(callback)
                self._arm_deadline_timer()
                return lambda: self._remove_callback(callback)
        callback()
        return lambda: None

    def _remove_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)
            if not self._callbacks and self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _arm_deadline_timer(self) -> None:
        # caller holds self._lock
        if self._timer is not None or self._state.deadline is None:
            return
        delay = max(0.0, self._state.deadline - time.monotonic())
        self._timer = threading.Timer(delay, self._expire)
        self._timer.daemon = True
        self._timer.start()

    def _expire(self) -> None:
        with self._lock:
            self._timer = None
            if self._state.cancelled or self._state.deadline is None:
                return
            if time.monotonic() < self._state.deadline:
                if self._callbacks:
                    self._arm_deadline_timer()
                return
        self.cancel(DEADLINE_REASON)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if the token is cancelled or expired."""
        if self.cancelled:
            raise CancelledError(
                self._state.reason or "operation cancelled",
                deadline=self._state.reason == DEADLINE_REASON,
            )

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; return ``cancelled``.

        The wait is cut short by the deadline, so a sleeping producer notices an
        expiring token without polling.
        """
        remaining = self.remaining()
        if remaining is not None:
            timeout = remaining if timeout is None else min(timeout, remaining)
        self._state.event.wait(timeout)
        return self.cancelled

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def with_timeout(self, seconds: float) -> "CancellationToken":
        """Create a linked child token that expires after ``seconds``."""
        return CancellationToken(parent=self, timeout=seconds)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken", "DEADLINE_REASON"]
