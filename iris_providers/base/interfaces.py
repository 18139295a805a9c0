"""
Provider-agnostic interfaces (Protocols) for the providers layer.

Re-exports the Protocols under ``iris_providers.base.interfaces_parts`` so
bindings and callers import from a single stable location.
"""

from __future__ import annotations

from .interfaces_parts import (
    ContextualizedEmbedder,
    Embedder,
    FileManager,
    ImageGenerator,
    Provider,
    Reranker,
)

__all__ = [
    "Provider",
    "ImageGenerator",
    "Embedder",
    "ContextualizedEmbedder",
    "Reranker",
    "FileManager",
]
