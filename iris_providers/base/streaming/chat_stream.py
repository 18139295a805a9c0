"""Caller-facing handle for a streaming chat response.

A ``ChatStream`` exposes three channels written by exactly one producer:

* ``deltas``: zero or more ``ChatChunk`` values in production order;
* ``err``: at most one terminal exception;
* ``final``: at most one ``ChatResponse`` summary.

On success the producer closes ``deltas``, writes the summary and closes the
terminal channels. On failure or cancellation it writes one error and closes
all three channels without a summary. Iterating the stream iterates
``deltas``.
"""
from __future__ import annotations

import threading
from typing import Callable, Iterator, List, Optional

from ..cancellation import CancellationToken
from ..models import ChatChunk, ChatResponse
from .stream_channel import ChannelClosed, StreamChannel

DoneCallback = Callable[[Optional[ChatResponse], Optional[BaseException]], None]


class ChatStream:
    """Three-channel streaming result.

    Args:
        deltas: Text chunk channel.
        err: Terminal error channel.
        final: Final summary channel.
        token: Token the producer observes; ``cancel()`` fires it.
        poll_interval: Wait slice used by ``drain`` to observe its token.
    """

    def __init__(
        self,
        deltas: StreamChannel[ChatChunk],
        err: StreamChannel[BaseException],
        final: StreamChannel[ChatResponse],
        token: Optional[CancellationToken] = None,
        *,
        poll_interval: float = 0.05,
    ) -> None:
        self.deltas = deltas
        self.err = err
        self.final = final
        self._token = token or CancellationToken()
        self._poll = poll_interval
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._finished = False
        self._callbacks: List[DoneCallback] = []
        self._error: Optional[BaseException] = None
        self._result: Optional[ChatResponse] = None

    # Producer side ---------------------------------------------------------
    def _complete(self, result: Optional[ChatResponse], error: Optional[BaseException]) -> None:
        """Run done callbacks, then mark the stream done.

        Called once every channel is closed. ``wait`` returns only after the
        callbacks have run.
        """
        with self._lock:
            if self._finished:
                return
            self._finished = True
            callbacks = list(self._callbacks)
            self._callbacks.clear()
        try:
            for cb in callbacks:
                cb(result, error)
        finally:
            self._done.set()

    # Caller side -----------------------------------------------------------
    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def done(self) -> bool:
        """True once the producer has closed all three channels."""
        return self._done.is_set()

    def add_done_callback(self, fn: DoneCallback) -> None:
        """Call ``fn(result, error)`` when the stream completes.

        Runs on the producer thread, or immediately when already complete.
        """
        with self._lock:
            if not self._finished:
                self._callbacks.append(fn)
                return
        fn(self.result(), self.error())

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the stream completes; return ``done``."""
        return self._done.wait(timeout)

    def cancel(self, reason: Optional[str] = None) -> None:
        """Ask the producer to stop. Safe to call repeatedly or after completion."""
        self._token.cancel(reason or "stream cancelled by caller")

    def error(self) -> Optional[BaseException]:
        """Return the terminal error without blocking (``None`` if none yet)."""
        with self._lock:
            if self._error is None:
                self._error = self.err.poll()
            return self._error

    def result(self) -> Optional[ChatResponse]:
        """Return the final summary without blocking (``None`` if none yet)."""
        with self._lock:
            if self._result is None:
                self._result = self.final.poll()
            return self._result

    def __iter__(self) -> Iterator[ChatChunk]:
        return iter(self.deltas)

    def iter_text(self) -> Iterator[str]:
        """Yield non-empty delta text in delivery order."""
        for chunk in self.deltas:
            if chunk.delta:
                yield chunk.delta

    def drain(self, token: Optional[CancellationToken] = None) -> ChatResponse:
        """Consume the whole stream and return the final summary.

        When ``token`` fires the stream is cancelled and the resulting
        terminal error is raised. If the summary carries no output, the
        accumulated delta text is used instead; a stream that closes with
        neither summary nor error yields a response built from that text.

        Raises:
            IrisError: the stream's terminal error.
        """
        parts: List[str] = []
        while True:
            if token is not None and token.cancelled:
                self.cancel(token.reason)
            try:
                chunk = self.deltas.receive(timeout=self._poll)
            except TimeoutError:
                continue
            except ChannelClosed:
                break
            parts.append(chunk.delta)
        while not self._done.wait(self._poll):
            if token is not None and token.cancelled:
                self.cancel(token.reason)
        err = self.error()
        if err is not None:
            raise err
        final = self.result()
        if final is None:
            return ChatResponse(output="".join(parts))
        if not final.output and parts:
            final.output = "".join(parts)
        return final

    def __enter__(self) -> "ChatStream":
        return self

    def __exit__(self, *exc_info) -> None:
        if not self.done:
            self.cancel("stream closed")


__all__ = ["ChatStream", "DoneCallback"]
