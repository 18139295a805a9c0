"""Optional extension capabilities.

A provider advertises an extension by implementing the matching method(s).
Callers probe with ``isinstance`` (or :func:`detect_capabilities`) and never
assume presence. Request/response payloads for these operations are owned by
the bindings that implement them.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from ..cancellation import CancellationToken


@runtime_checkable
class ImageGenerator(Protocol):
    def generate_image(self, request: Any, token: Optional[CancellationToken] = None) -> Any:
        ...

    def edit_image(self, request: Any, token: Optional[CancellationToken] = None) -> Any:
        ...


@runtime_checkable
class Embedder(Protocol):
    def create_embeddings(self, request: Any, token: Optional[CancellationToken] = None) -> Any:
        ...


@runtime_checkable
class ContextualizedEmbedder(Protocol):
    """Context-aware embeddings where each input is a list of chunks from one document."""

    def create_contextualized_embeddings(self, request: Any, token: Optional[CancellationToken] = None) -> Any:
        ...


@runtime_checkable
class Reranker(Protocol):
    """Scores documents by relevance to a query, highest first."""

    def rerank(self, request: Any, token: Optional[CancellationToken] = None) -> Any:
        ...


@runtime_checkable
class FileManager(Protocol):
    def upload_file(self, request: Any, token: Optional[CancellationToken] = None) -> Any:
        ...

    def get_file(self, file_id: str, token: Optional[CancellationToken] = None) -> Any:
        ...

    def delete_file(self, file_id: str, token: Optional[CancellationToken] = None) -> None:
        ...


__all__ = ["ContextualizedEmbedder", "Embedder", "FileManager", "ImageGenerator", "Reranker"]
