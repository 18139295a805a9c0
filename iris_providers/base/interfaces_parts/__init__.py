"""Single-class Protocol modules backing ``iris_providers.base.interfaces``."""

from .extensions import ContextualizedEmbedder, Embedder, FileManager, ImageGenerator, Reranker
from .provider import Provider

__all__ = [
    "ContextualizedEmbedder",
    "Embedder",
    "FileManager",
    "ImageGenerator",
    "Provider",
    "Reranker",
]
