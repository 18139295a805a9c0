"""Provider Protocol (single-class module).

Defines the contract every provider binding implements.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Protocol, runtime_checkable

from ..cancellation import CancellationToken
from ..models import ChatRequest, ChatResponse, ModelInfo

if TYPE_CHECKING:  # pragma: no cover
    from ..streaming.chat_stream import ChatStream


@runtime_checkable
class Provider(Protocol):
    """Minimal interface for LLM provider bindings.

    Implementations map ``ChatRequest`` to their wire format, normalize
    responses to ``ChatResponse`` and never leak SDK objects upstream.
    Providers must be safe for concurrent use.
    """

    def id(self) -> str:
        """Canonical provider identifier, e.g. ``"openai"``."""
        ...

    def models(self) -> List[ModelInfo]:
        """Return the model catalog. Callers get a fresh list on every call."""
        ...

    def supports(self, feature: Any) -> bool:
        """Report whether the provider supports ``feature``; unknown is False."""
        ...

    def chat(self, request: ChatRequest, token: Optional[CancellationToken] = None) -> ChatResponse:
        """Execute a non-streaming chat request.

        Raises ``IrisError``. Cancellation surfaces as a ``ProviderError`` of
        kind ``network``.
        """
        ...

    def stream_chat(self, request: ChatRequest, token: Optional[CancellationToken] = None) -> "ChatStream":
        """Start a streaming chat request.

        Setup failures raise and no stream is returned.
        """
        ...


__all__ = ["Provider"]
