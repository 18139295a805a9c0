"""
Base exception type and validation sentinels.

Every exception raised by the SDK derives from :class:`IrisError` and carries
exactly one :class:`ErrorKind`. The three validation sentinels are raised
directly (they are not wrapped in a ``ProviderError``) so callers can match
them without inspecting provider metadata.
"""
from __future__ import annotations

from typing import Optional

from .error_kind import ErrorKind


class IrisError(Exception):
    """Root of the SDK exception hierarchy.

    Subclasses pin ``kind`` at class level; instances may override it when a
    single class covers several kinds (see ``ProviderError``).
    """

    kind: ErrorKind = ErrorKind.SERVER
    default_message: str = ""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message or self.kind.value)


class ModelRequiredError(IrisError):
    """Raised when a chat request is dispatched without a model id."""

    kind = ErrorKind.MODEL_REQUIRED
    default_message = 'model required: pass a model ID to Client.chat(), e.g. client.chat("gpt-4o")'


class NoMessagesError(IrisError):
    """Raised when a chat request has no (non-empty) messages."""

    kind = ErrorKind.NO_MESSAGES
    default_message = "no messages: add at least one message using .system(), .user(), or .assistant()"


class ToolArgsInvalidJSONError(IrisError):
    """Raised when assembled tool-call arguments are not valid JSON."""

    kind = ErrorKind.TOOL_ARGS_INVALID_JSON
    default_message = "tool args invalid json"


class NotSupportedError(IrisError):
    """Raised when a provider does not implement a requested capability."""

    kind = ErrorKind.NOT_SUPPORTED
    default_message = "operation not supported"


__all__ = [
    "IrisError",
    "ModelRequiredError",
    "NoMessagesError",
    "ToolArgsInvalidJSONError",
    "NotSupportedError",
]
