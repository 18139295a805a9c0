"""Shared catalog and feature bookkeeping for provider bindings.

``BaseProvider`` implements ``id``, ``models`` and ``supports``; bindings
subclass it and implement ``chat`` / ``stream_chat``.
"""

from __future__ import annotations

from typing import Any, FrozenSet, Iterable, List, Optional

from ..cancellation import CancellationToken
from ..errors import NotSupportedError
from ..models import ChatRequest, ChatResponse, Feature, ModelInfo


class BaseProvider:
    """Catalog holder satisfying the read-only half of ``Provider``.

    Attributes:
        provider_id: Canonical provider identifier.
    """

    def __init__(self, provider_id: str, models: Iterable[ModelInfo] = (), features: Iterable[Any] = ()) -> None:
        self.provider_id = provider_id
        self._models = tuple(models)
        self._features: FrozenSet[Feature] = frozenset(
            f for f in (Feature.parse(x) for x in features) if f is not None
        )

    def id(self) -> str:
        return self.provider_id

    def models(self) -> List[ModelInfo]:
        """Return a fresh list each call; entries are immutable."""
        return list(self._models)

    def supports(self, feature: Any) -> bool:
        parsed = Feature.parse(feature)
        return parsed is not None and parsed in self._features

    def chat(self, request: ChatRequest, token: Optional[CancellationToken] = None) -> ChatResponse:
        raise NotSupportedError(f"{self.provider_id} does not implement chat")

    def stream_chat(self, request: ChatRequest, token: Optional[CancellationToken] = None):
        raise NotSupportedError(f"{self.provider_id} does not implement streaming chat")


__all__ = ["BaseProvider"]
