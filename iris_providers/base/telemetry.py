"""Request lifecycle telemetry hooks.

A ``TelemetryHook`` is told when a provider request starts and ends. Events
carry operational metadata only (provider, model, timing, token usage and the
error kind): never credentials, prompts or model output, so they can be
logged or exported safely.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Protocol, runtime_checkable

from .errors import IrisError
from .logging import LogContext, get_logger, normalized_log_event
from .models import TokenUsage


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RequestStartEvent:
    provider: str
    model: str
    start: datetime = field(default_factory=_now)
    streaming: bool = False


@dataclass(frozen=True)
class RequestEndEvent:
    """Completion of a request. ``error`` is ``None`` on success."""

    provider: str
    model: str
    start: datetime
    end: datetime = field(default_factory=_now)
    usage: TokenUsage = field(default_factory=TokenUsage)
    error: Optional[BaseException] = None
    streaming: bool = False

    @property
    def duration_seconds(self) -> float:
        return (self.end - self.start).total_seconds()

    @property
    def error_kind(self) -> Optional[str]:
        if self.error is None:
            return None
        if isinstance(self.error, IrisError):
            return self.error.kind.value
        return type(self.error).__name__


@runtime_checkable
class TelemetryHook(Protocol):
    def on_request_start(self, event: RequestStartEvent) -> None:
        ...

    def on_request_end(self, event: RequestEndEvent) -> None:
        ...


class NoopTelemetryHook:
    """Default hook; ignores every event."""

    def on_request_start(self, event: RequestStartEvent) -> None:
        return None

    def on_request_end(self, event: RequestEndEvent) -> None:
        return None


class LoggingTelemetryHook:
    """Emits ``request.start`` / ``request.end`` normalized log events."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or get_logger("iris.telemetry")

    def on_request_start(self, event: RequestStartEvent) -> None:
        normalized_log_event(
            self._logger,
            "request.start",
            LogContext(provider=event.provider, model=event.model),
            phase="start",
            streaming=event.streaming,
        )

    def on_request_end(self, event: RequestEndEvent) -> None:
        normalized_log_event(
            self._logger,
            "request.end",
            LogContext(provider=event.provider, model=event.model),
            phase="finalize",
            error_code=event.error_kind,
            tokens=event.usage,
            level=logging.INFO if event.error is None else logging.WARNING,
            duration_ms=round(event.duration_seconds * 1000.0, 3),
            streaming=event.streaming,
        )


__all__ = [
    "LoggingTelemetryHook",
    "NoopTelemetryHook",
    "RequestEndEvent",
    "RequestStartEvent",
    "TelemetryHook",
]
