"""Terminal logging for streams.

Emits the consolidated ``stream.end`` or ``stream.error`` normalized event
carrying the collected :class:`StreamMetrics`.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..errors import IrisError, ProviderError
from ..logging import LogContext, normalized_log_event
from .streaming_metrics import StreamMetrics


def finalize_stream(
    *,
    logger: logging.Logger,
    ctx: LogContext,
    metrics: StreamMetrics,
    error: Optional[BaseException] = None,
    cancelled: bool = False,
) -> None:
    """Log the end of a stream (success, failure or cancellation)."""
    error_code = None
    extra = {}
    if isinstance(error, IrisError):
        error_code = error.kind.value
    elif error is not None:
        error_code = type(error).__name__
    if isinstance(error, ProviderError):
        extra = {"status": error.status or None, "provider_code": error.code or None}
    normalized_log_event(
        logger,
        "stream.end" if error is None else "stream.error",
        ctx,
        phase="finalize",
        attempt=None,
        emitted=metrics.emitted > 0,
        tokens=metrics.tokens,
        error_code=error_code,
        level=logging.INFO if error is None or cancelled else logging.WARNING,
        emitted_count=metrics.emitted,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        cancelled=cancelled or None,
        error=str(error)[:260] if error is not None else None,
        **extra,
    )


__all__ = ["finalize_stream"]
