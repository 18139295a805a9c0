"""Streaming metrics collected per stream and reported on the end/error event."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..models import TokenUsage


@dataclass
class StreamMetrics:
    """Collected metrics for a single stream.

    Attributes:
        emitted: Number of text deltas delivered.
        time_to_first_token_ms: Milliseconds from start to the first delta.
        total_duration_ms: Milliseconds from start to completion.
        prompt_tokens, completion_tokens, total_tokens: Usage as reported.
        tokens: Canonical ``{"prompt", "completion", "total"}`` mapping.
    """

    emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    tokens: Optional[Dict[str, Any]] = None


def build_token_usage(prompt: Optional[int], completion: Optional[int], total: Optional[int] = None) -> Dict[str, Optional[int]]:
    """Return a canonical token usage mapping; ``total`` is derived when absent."""
    if total is None and prompt is not None and completion is not None:
        total = prompt + completion
    return {"prompt": prompt, "completion": completion, "total": total}


def apply_token_usage(metrics: StreamMetrics, usage: TokenUsage) -> None:
    """Copy ``usage`` onto ``metrics``; a zero total is treated as unreported."""
    metrics.prompt_tokens = usage.prompt_tokens
    metrics.completion_tokens = usage.completion_tokens
    metrics.total_tokens = usage.total_tokens or None
    metrics.tokens = build_token_usage(metrics.prompt_tokens, metrics.completion_tokens, metrics.total_tokens)
    metrics.total_tokens = metrics.tokens["total"]


__all__ = ["StreamMetrics", "apply_token_usage", "build_token_usage"]
