"""Client entry point.

``Client`` wraps one ``Provider`` and hands out ``ChatBuilder`` instances. It
is immutable after construction and safe to share between threads; all
concurrency guarantees come from the provider.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from ..base.interfaces import Provider
from ..base.logging import get_logger, log_event
from ..base.telemetry import NoopTelemetryHook, TelemetryHook
from .chat_builder import ChatBuilder

WarningHandler = Callable[[str], None]

_logger = get_logger(__name__)


def _log_warning(message: str) -> None:
    log_event(_logger, "client.warning", level=logging.WARNING, message=message)


class Client:
    """Provider-agnostic client.

    Args:
        provider: The provider binding that executes requests.
        telemetry: Hook notified around every request; no-op by default.
        warning_handler: Receives non-fatal SDK warnings (e.g. unmatched tool
            results); they are logged by default.
    """

    __slots__ = ("_provider", "_telemetry", "_warning_handler")

    def __init__(
        self,
        provider: Provider,
        *,
        telemetry: Optional[TelemetryHook] = None,
        warning_handler: Optional[WarningHandler] = None,
    ) -> None:
        if provider is None:
            raise ValueError("Client requires a provider")
        object.__setattr__(self, "_provider", provider)
        object.__setattr__(self, "_telemetry", telemetry or NoopTelemetryHook())
        object.__setattr__(self, "_warning_handler", warning_handler or _log_warning)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Client is immutable")

    @property
    def provider(self) -> Provider:
        return self._provider

    @property
    def telemetry(self) -> TelemetryHook:
        return self._telemetry

    def chat(self, model: str) -> ChatBuilder:
        """Return a new builder for ``model``."""
        return ChatBuilder(self, model)

    def _warn(self, message: str) -> None:
        self._warning_handler(message)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"Client(provider={self._provider.id()!r})"


def new_client(
    provider: Provider,
    *,
    telemetry: Optional[TelemetryHook] = None,
    warning_handler: Optional[WarningHandler] = None,
) -> Client:
    return Client(provider, telemetry=telemetry, warning_handler=warning_handler)


__all__ = ["Client", "WarningHandler", "new_client"]
