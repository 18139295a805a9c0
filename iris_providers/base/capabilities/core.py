"""Capability enumeration & detection utilities.

Chat features are advertised by the provider itself through ``supports``.
Extension capabilities (image generation, embeddings, reranking, files) are
inferred by probing the runtime-checkable Protocols in
``iris_providers.base.interfaces``; nothing is assumed present.
"""

from __future__ import annotations

from typing import Any, FrozenSet, Set

from ..interfaces import (
    ContextualizedEmbedder,
    Embedder,
    FileManager,
    ImageGenerator,
    Provider,
    Reranker,
)
from ..models import Feature

# String constants for extension capabilities (simple set operations)
CAP_IMAGE_GENERATION = Feature.IMAGE_GENERATION.value
CAP_EMBEDDINGS = Feature.EMBEDDINGS.value
CAP_CONTEXTUALIZED_EMBEDDINGS = Feature.CONTEXTUALIZED_EMBEDDINGS.value
CAP_RERANKING = Feature.RERANKING.value
CAP_FILES = "files"

_EXTENSION_FEATURES = frozenset(
    {
        Feature.IMAGE_GENERATION,
        Feature.EMBEDDINGS,
        Feature.CONTEXTUALIZED_EMBEDDINGS,
        Feature.RERANKING,
    }
)


def detect_capabilities(provider: Any) -> FrozenSet[str]:
    """Return the capability names a provider actually offers.

    Advertised chat features come from ``provider.supports``; extension
    capabilities are reported only when the matching methods exist on the
    object, even if ``supports`` claims them.

    Args:
        provider: The provider instance to inspect.

    Returns:
        FrozenSet[str]: Feature values plus extension capability names.
    """
    caps: Set[str] = set()
    if isinstance(provider, Provider):
        caps.update(
            f.value for f in Feature if f not in _EXTENSION_FEATURES and provider.supports(f)
        )
    if isinstance(provider, ImageGenerator):
        caps.add(CAP_IMAGE_GENERATION)
    if isinstance(provider, Embedder):
        caps.add(CAP_EMBEDDINGS)
    if isinstance(provider, ContextualizedEmbedder):
        caps.add(CAP_CONTEXTUALIZED_EMBEDDINGS)
    if isinstance(provider, Reranker):
        caps.add(CAP_RERANKING)
    if isinstance(provider, FileManager):
        caps.add(CAP_FILES)
    return frozenset(caps)


__all__ = [
    "CAP_CONTEXTUALIZED_EMBEDDINGS",
    "CAP_EMBEDDINGS",
    "CAP_FILES",
    "CAP_IMAGE_GENERATION",
    "CAP_RERANKING",
    "detect_capabilities",
]
