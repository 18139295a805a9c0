"""
Capability enumerations.

`Feature` is the closed set of switches a provider or model can advertise.
`APIEndpoint` records which chat surface a model is served from.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class Feature(str, Enum):
    """Capabilities a provider or model may support."""

    CHAT = "chat"
    CHAT_STREAMING = "chat_streaming"
    TOOL_CALLING = "tool_calling"
    REASONING = "reasoning"
    IMAGE_GENERATION = "image_generation"
    EMBEDDINGS = "embeddings"
    CONTEXTUALIZED_EMBEDDINGS = "contextualized_embeddings"
    RERANKING = "reranking"
    BUILTIN_TOOLS = "builtin_tools"
    RESPONSE_CHAIN = "response_chain"

    @classmethod
    def parse(cls, value: Any) -> Optional["Feature"]:
        """Return the matching member, or ``None`` for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class APIEndpoint(str, Enum):
    """Chat API surface a model is served from."""

    COMPLETIONS = "completions"
    RESPONSES = "responses"


__all__ = ["Feature", "APIEndpoint"]
