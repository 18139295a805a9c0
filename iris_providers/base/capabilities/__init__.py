"""Capabilities package.

Exports capability detection and the shared ``BaseProvider`` catalog holder.
"""

from .base_provider import BaseProvider
from .core import (
    CAP_CONTEXTUALIZED_EMBEDDINGS,
    CAP_EMBEDDINGS,
    CAP_FILES,
    CAP_IMAGE_GENERATION,
    CAP_RERANKING,
    detect_capabilities,
)

__all__ = [
    "BaseProvider",
    "CAP_CONTEXTUALIZED_EMBEDDINGS",
    "CAP_EMBEDDINGS",
    "CAP_FILES",
    "CAP_IMAGE_GENERATION",
    "CAP_RERANKING",
    "detect_capabilities",
]
