"""Tests for the provider contract, ``BaseProvider`` and capability detection."""

from __future__ import annotations

from typing import Any

import pytest

from iris_providers.base.capabilities import (
    CAP_EMBEDDINGS,
    CAP_FILES,
    CAP_IMAGE_GENERATION,
    CAP_RERANKING,
    BaseProvider,
    detect_capabilities,
)
from iris_providers.base.errors import NotSupportedError
from iris_providers.base.interfaces import Embedder, Provider
from iris_providers.base.models import ChatRequest, Feature, Message, ModelInfo, Role


class _ChatOnly(BaseProvider):
    def __init__(self) -> None:
        super().__init__(
            "chat-only",
            models=[ModelInfo(id="m1", capabilities=frozenset({Feature.CHAT}))],
            # Claims embeddings without implementing them.
            features=[Feature.CHAT, "chat_streaming", "embeddings", "unknown-flag"],
        )


class _Everything(BaseProvider):
    def __init__(self) -> None:
        super().__init__("everything", features=[Feature.CHAT, Feature.TOOL_CALLING])

    def generate_image(self, request: Any, token: Any = None) -> Any:
        return b""

    def edit_image(self, request: Any, token: Any = None) -> Any:
        return b""

    def create_embeddings(self, request: Any, token: Any = None) -> Any:
        return []

    def rerank(self, request: Any, token: Any = None) -> Any:
        return []

    def upload_file(self, request: Any, token: Any = None) -> Any:
        return None

    def get_file(self, file_id: str, token: Any = None) -> Any:
        return None

    def delete_file(self, file_id: str, token: Any = None) -> Any:
        return None


def test_base_provider_satisfies_protocol() -> None:
    assert isinstance(_ChatOnly(), Provider)


def test_models_returns_a_defensive_copy() -> None:
    provider = _ChatOnly()
    first = provider.models()
    first.clear()
    first.append(ModelInfo(id="injected"))
    assert [m.id for m in provider.models()] == ["m1"]
    assert provider.models() is not provider.models()


def test_supports_unknown_features_is_false() -> None:
    provider = _ChatOnly()
    assert provider.supports(Feature.CHAT)
    assert provider.supports("chat_streaming")
    assert not provider.supports("unknown-flag")
    assert not provider.supports(Feature.REASONING)
    assert not provider.supports(None)


def test_base_provider_chat_is_not_supported() -> None:
    request = ChatRequest(model="m1", messages=[Message(role=Role.USER, content="hi")])
    with pytest.raises(NotSupportedError):
        _ChatOnly().chat(request)
    with pytest.raises(NotSupportedError):
        _ChatOnly().stream_chat(request)


def test_detect_capabilities_never_assumes_extensions() -> None:
    caps = detect_capabilities(_ChatOnly())
    assert caps == frozenset({"chat", "chat_streaming"})
    assert CAP_EMBEDDINGS not in caps
    assert not isinstance(_ChatOnly(), Embedder)


def test_detect_capabilities_checks_extension_protocols() -> None:
    caps = detect_capabilities(_Everything())
    assert {CAP_IMAGE_GENERATION, CAP_EMBEDDINGS, CAP_RERANKING, CAP_FILES} <= caps
    assert "tool_calling" in caps
    assert "contextualized_embeddings" not in caps


def test_detect_capabilities_on_arbitrary_object() -> None:
    assert detect_capabilities(object()) == frozenset()
