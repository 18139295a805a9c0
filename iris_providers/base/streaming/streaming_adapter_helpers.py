"""Streaming producer helper functions.

Split out of ``streaming_adapter`` so the orchestration loop stays short.
Each helper takes the adapter as its first argument and touches the stream
channels only through the terminal ``emit_*`` functions.
"""
from __future__ import annotations

import logging
import time
from contextlib import ExitStack, suppress
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from ..errors import IrisError
from ..logging import normalized_log_event
from ..models import ChatChunk, ChatResponse, ReasoningOutput, TokenUsage
from ..normalize import cancelled_error, wrap_exception
from .chat_stream import ChatStream
from .stream_event import ChatStreamEvent
from .streaming_finalize import finalize_stream
from .streaming_metrics import apply_token_usage


@dataclass
class StreamAccumulator:
    """Everything a stream has produced so far, used to build the summary."""

    text: List[str] = field(default_factory=list)
    usage: Optional[TokenUsage] = None
    reasoning: List[str] = field(default_factory=list)
    reasoning_id: str = ""
    response_id: str = ""
    model: str = ""
    status: str = ""


def start_stream(adapter) -> Tuple[Iterable[Any], Mapping[str, Any]]:
    """Run the binding's starter and normalize its result.

    Setup failures are raised as SDK errors; no stream is created.
    """
    try:
        result = adapter._starter()
    except Exception as exc:
        raise wrap_exception(adapter.provider_name, exc) from exc
    return coerce_stream_start_result(result)


def coerce_stream_start_result(result: Any) -> Tuple[Iterable[Any], Mapping[str, Any]]:
    """Normalize the starter's return value into ``(native_stream, meta)``.

    Accepted forms:
    - native_stream
    - ``{"stream": native_stream, **meta}``
    - ``(native_stream, meta)`` where ``meta`` is a mapping
    """
    if isinstance(result, Mapping):
        if "stream" not in result:
            raise ValueError("starter() mapping missing 'stream' key")
        return result["stream"], {k: v for k, v in result.items() if k != "stream"}
    if isinstance(result, tuple) and len(result) == 2 and isinstance(result[1], Mapping):
        return result[0], dict(result[1])
    return result, {}


def close_native(native: Any) -> None:
    """Close the native stream if it can be closed, ignoring close failures."""
    close_fn = getattr(native, "close", None)
    if callable(close_fn):
        with suppress(Exception):
            close_fn()


def register_stream_cleanup(native: Any, stack: ExitStack) -> None:
    """Close the native stream when ``stack`` unwinds."""
    stack.callback(close_native, native)


def process_event(adapter, evt: ChatStreamEvent, acc: StreamAccumulator, t0: float) -> bool:
    """Apply one translated frame. Returns True when the provider finished.

    Raises the frame's in-band error, and ``CancelledError`` when the token
    fires while the deltas channel is full.
    """
    if evt.response_id:
        acc.response_id = evt.response_id
        adapter.ctx.response_id = evt.response_id
    if evt.model:
        acc.model = evt.model
    if evt.status:
        acc.status = evt.status
    if evt.usage is not None:
        acc.usage = evt.usage
        apply_token_usage(adapter.metrics, evt.usage)
    if evt.reasoning_id:
        acc.reasoning_id = evt.reasoning_id
    acc.reasoning.extend(r for r in evt.reasoning if r)
    for frag in evt.tool_calls:
        adapter.assembler.add_fragment(frag)
    if evt.error is not None:
        raise evt.error
    if evt.delta:
        if adapter.metrics.emitted == 0:
            adapter.metrics.time_to_first_token_ms = (time.perf_counter() - t0) * 1000.0
        adapter.stream.deltas.send(ChatChunk(delta=evt.delta), adapter.token)
        acc.text.append(evt.delta)
        adapter.metrics.emitted += 1
        _log_delta_debug(adapter, evt.delta)
    return evt.finish


def build_final_response(adapter, acc: StreamAccumulator) -> ChatResponse:
    """Finalize the assembler and build the summary (may raise on bad tool args)."""
    calls = adapter.assembler.finalize()
    reasoning = None
    if acc.reasoning or acc.reasoning_id:
        reasoning = ReasoningOutput(id=acc.reasoning_id, summary=list(acc.reasoning))
    return ChatResponse(
        id=acc.response_id,
        model=acc.model or adapter.model,
        output="".join(acc.text),
        tool_calls=calls,
        usage=acc.usage or TokenUsage(),
        reasoning=reasoning,
        status=acc.status or "completed",
    )


def emit_final(adapter, response: ChatResponse, t0: float) -> None:
    """Success path: close deltas, publish the summary, close terminals."""
    adapter.metrics.total_duration_ms = (time.perf_counter() - t0) * 1000.0
    stream: ChatStream = adapter.stream
    stream.deltas.close()
    stream.final.send(response)
    stream.final.close()
    stream.err.close()
    finalize_stream(logger=adapter._logger, ctx=adapter.ctx, metrics=adapter.metrics)
    stream._complete(response, None)


def emit_error(adapter, error: BaseException, t0: float, *, cancelled: bool = False) -> None:
    """Failure path: publish exactly one error and close every channel."""
    adapter.metrics.total_duration_ms = (time.perf_counter() - t0) * 1000.0
    stream: ChatStream = adapter.stream
    stream.deltas.close()
    stream.err.send(error)
    stream.err.close()
    stream.final.close()
    finalize_stream(
        logger=adapter._logger,
        ctx=adapter.ctx,
        metrics=adapter.metrics,
        error=error,
        cancelled=cancelled,
    )
    stream._complete(None, error)


def handle_midstream_error(adapter, exc: BaseException, t0: float) -> None:
    """Normalize a failure raised while streaming and publish it.

    SDK errors (including ``ToolArgsInvalidJSONError``) are published as-is.
    """
    err = exc if isinstance(exc, IrisError) else wrap_exception(adapter.provider_name, exc)
    emit_error(adapter, err, t0)


def handle_cancellation(adapter, t0: float) -> None:
    """Publish a ``network`` error for a cancelled or expired stream."""
    emit_error(adapter, cancelled_error(adapter.provider_name, adapter.token), t0, cancelled=True)


def _log_delta_debug(adapter, delta: str) -> None:
    if adapter._logger.isEnabledFor(logging.DEBUG):
        normalized_log_event(
            adapter._logger,
            "stream.delta",
            adapter.ctx,
            phase="mid_stream",
            emitted=True,
            level=logging.DEBUG,
            delta_len=len(delta),
            index=adapter.metrics.emitted,
        )


__all__ = [
    "StreamAccumulator",
    "build_final_response",
    "close_native",
    "coerce_stream_start_result",
    "emit_error",
    "emit_final",
    "handle_cancellation",
    "handle_midstream_error",
    "process_event",
    "register_stream_cleanup",
    "start_stream",
]
