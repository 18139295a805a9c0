"""Closable, optionally bounded, thread-safe FIFO used by ``ChatStream``.

A single producer sends items and eventually closes the channel; consumers
receive until the channel is closed and empty. ``send`` blocks while the
channel is full and gives up when the supplied cancellation token fires.
"""
from __future__ import annotations

import threading
import time
from collections import deque
from typing import Deque, Generic, Iterator, Optional, TypeVar

from ..cancellation import CancellationToken, CancelledError

T = TypeVar("T")

_DEFAULT_POLL_INTERVAL = 0.05


class ChannelClosed(Exception):
    """Raised by ``receive`` on a closed, drained channel and by ``send`` after close."""


class StreamChannel(Generic[T]):
    """FIFO with Go-channel semantics.

    Args:
        maxsize: Capacity; ``0`` or less means unbounded.
        poll_interval: Wait slice while blocked so cancellation is observed.
        name: Label used in ``repr`` and error messages.
    """

    def __init__(self, maxsize: int = 0, *, poll_interval: float = _DEFAULT_POLL_INTERVAL, name: str = "") -> None:
        self._items: Deque[T] = deque()
        self._maxsize = maxsize
        self._poll = poll_interval
        self._cond = threading.Condition()
        self._closed = False
        self.name = name

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def send(self, item: T, token: Optional[CancellationToken] = None) -> None:
        """Append ``item``, blocking while the channel is full.

        Raises:
            CancelledError: ``token`` fired while waiting for room.
            ChannelClosed: the channel was closed.
        """
        with self._cond:
            while True:
                if self._closed:
                    raise ChannelClosed(f"send on closed channel {self.name!r}")
                if self._maxsize <= 0 or len(self._items) < self._maxsize:
                    self._items.append(item)
                    self._cond.notify_all()
                    return
                if token is not None:
                    token.raise_if_cancelled()
                self._cond.wait(self._poll)

    def close(self) -> None:
        """Close the channel. Idempotent; buffered items stay receivable."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def receive(self, timeout: Optional[float] = None) -> T:
        """Return the next item, blocking up to ``timeout`` seconds.

        Raises:
            ChannelClosed: the channel is closed and empty.
            TimeoutError: nothing arrived within ``timeout``.
        """
        end = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while not self._items:
                if self._closed:
                    raise ChannelClosed(f"channel {self.name!r} closed")
                if end is None:
                    self._cond.wait()
                    continue
                left = end - time.monotonic()
                if left <= 0:
                    raise TimeoutError(f"no item on channel {self.name!r} within {timeout}s")
                self._cond.wait(left)
            item = self._items.popleft()
            self._cond.notify_all()
            return item

    def poll(self) -> Optional[T]:
        """Return the next item without blocking, or ``None``."""
        with self._cond:
            if not self._items:
                return None
            item = self._items.popleft()
            self._cond.notify_all()
            return item

    def wait_closed(self, timeout: Optional[float] = None) -> bool:
        """Block until the channel is closed; return whether it is."""
        with self._cond:
            return self._cond.wait_for(lambda: self._closed, timeout)

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.receive()
            except ChannelClosed:
                return

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"StreamChannel(name={self.name!r}, size={len(self)}, closed={self.closed})"


__all__ = ["ChannelClosed", "StreamChannel"]
