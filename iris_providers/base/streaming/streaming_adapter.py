"""Base streaming adapter: runs a binding's native stream on a producer thread.

A provider binding supplies two callables:

* ``starter()`` opens the native stream (an iterable of frames, optionally
  with a ``close()`` method) and may return metadata such as a request id;
* ``translator(frame)`` maps one frame to a ``ChatStreamEvent`` or ``None``.

``start()`` runs the starter synchronously, so setup failures raise to the
caller and no stream exists. It then returns a ``ChatStream`` whose channels
are fed by a daemon thread that owns all writes until the channels close.
Cancelling the stream token closes the native stream at once, which unblocks
a producer waiting on the next frame.
"""
from __future__ import annotations

import logging
import threading
import time
from contextlib import ExitStack
from typing import Any, Callable, Iterable, Optional

from ..cancellation import CancellationToken, CancelledError
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import ChatChunk, ChatResponse
from ..normalize import cancelled_error
from ..tools import ToolCallAssembler
from .chat_stream import ChatStream
from .stream_channel import StreamChannel
from .stream_event import ChatStreamEvent
from .streaming_adapter_helpers import (
    StreamAccumulator,
    build_final_response,
    close_native,
    emit_final,
    handle_cancellation,
    handle_midstream_error,
    process_event,
    register_stream_cleanup,
    start_stream,
)
from .streaming_metrics import StreamMetrics
from ...config import StreamConfig, get_stream_config

Translator = Callable[[Any], Optional[ChatStreamEvent]]


class BaseStreamingAdapter:
    """Encapsulates the producer side of a ``ChatStream``.

    Args:
        provider_name: Provider id used in errors and logs.
        model: Requested model id (the summary prefers the model the provider
            reports).
        starter: Opens the native stream.
        translator: Maps native frames to ``ChatStreamEvent`` values.
        token: Caller's token. The stream gets a child of it, so cancelling
            the stream never cancels the caller's token.
        ctx: Logging context; created from provider/model when omitted.
        logger: Logger for stream events.
        config: Stream settings; the process config when omitted.
    """

    def __init__(
        self,
        *,
        provider_name: str,
        model: str,
        starter: Callable[[], Any],
        translator: Translator,
        token: Optional[CancellationToken] = None,
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
        config: Optional[StreamConfig] = None,
    ) -> None:
        self.provider_name = provider_name
        self.model = model
        self._starter = starter
        self._translator = translator
        self._logger = logger or get_logger(__name__)
        self.ctx = ctx or LogContext(provider=provider_name, model=model)
        self.config = config or get_stream_config()
        self.token = token.child() if token is not None else CancellationToken()
        self.assembler = ToolCallAssembler(self.config.empty_arguments_json)
        self.metrics = StreamMetrics()
        self.stream: Optional[ChatStream] = None
        self._release_close: Callable[[], None] = lambda: None

    def _new_stream(self) -> ChatStream:
        poll = self.config.poll_interval_seconds
        return ChatStream(
            StreamChannel[ChatChunk](self.config.buffer_size, poll_interval=poll, name="deltas"),
            StreamChannel[BaseException](1, poll_interval=poll, name="err"),
            StreamChannel[ChatResponse](1, poll_interval=poll, name="final"),
            self.token,
            poll_interval=poll,
        )

    def start(self) -> ChatStream:
        """Open the native stream and launch the producer thread.

        Raises:
            IrisError: the starter failed or the token was already cancelled.
        """
        if self.token.cancelled:
            raise cancelled_error(self.provider_name, self.token)
        t0 = time.perf_counter()
        native, meta = start_stream(self)
        req_id = meta.get("request_id")
        if req_id and not self.ctx.request_id:
            self.ctx.request_id = str(req_id)
        self.stream = self._new_stream()
        # A producer blocked on a native read only wakes when the native stream closes.
        self._release_close = self.token.on_cancel(lambda: close_native(native))
        normalized_log_event(
            self._logger,
            "stream.start",
            self.ctx,
            phase="start",
            attempt=None,
            emitted=False,
            tokens=None,
            buffer_size=self.config.buffer_size,
        )
        thread = threading.Thread(
            target=self.run,
            args=(native, t0),
            name=f"iris-stream-{self.provider_name}",
            daemon=True,
        )
        thread.start()
        return self.stream

    def run(self, native: Iterable[Any], t0: float) -> None:
        """Producer loop. Runs on the stream thread; never raises."""
        acc = StreamAccumulator()
        with ExitStack() as stack:
            register_stream_cleanup(native, stack)
            stack.callback(self._release_close)
            try:
                for frame in native:
                    self.token.raise_if_cancelled()
                    evt = self._translator(frame)
                    if evt is not None and process_event(self, evt, acc, t0):
                        break
                self.token.raise_if_cancelled()
                response = build_final_response(self, acc)
            except CancelledError:
                stack.close()
                handle_cancellation(self, t0)
                return
            except Exception as exc:  # noqa: BLE001 - every failure becomes the stream's terminal error
                if self.token.cancelled:
                    stack.close()
                    handle_cancellation(self, t0)
                    return
                stack.close()
                handle_midstream_error(self, exc, t0)
                return
            stack.close()
            emit_final(self, response, t0)


__all__ = ["BaseStreamingAdapter", "Translator"]
