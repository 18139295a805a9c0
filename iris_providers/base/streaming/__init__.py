"""Streaming package.

Exposes the three-channel ``ChatStream``, its ``StreamChannel`` primitive, the
producer-side ``BaseStreamingAdapter`` and the SSE framing helpers under one
namespace.
"""

from .chat_stream import ChatStream, DoneCallback
from .sse import DONE_SENTINEL, SSEEvent, iter_sse_events, parse_data
from .stream_channel import ChannelClosed, StreamChannel
from .stream_event import ChatStreamEvent
from .streaming_adapter import BaseStreamingAdapter, Translator
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics, apply_token_usage, build_token_usage

__all__ = [
    "BaseStreamingAdapter",
    "ChannelClosed",
    "ChatStream",
    "ChatStreamEvent",
    "DONE_SENTINEL",
    "DoneCallback",
    "SSEEvent",
    "StreamChannel",
    "StreamMetrics",
    "Translator",
    "apply_token_usage",
    "build_token_usage",
    "finalize_stream",
    "iter_sse_events",
    "parse_data",
]
