"""Fluent composer for one multimodal user message."""
from __future__ import annotations

from typing import TYPE_CHECKING, List

from ..base.models import ContentPart, ImageDetail, InputFile, InputImage, InputText, Message, Role

if TYPE_CHECKING:  # pragma: no cover
    from .chat_builder import ChatBuilder


class MessageBuilder:
    """Collects content parts and appends them to the parent builder on ``done()``."""

    def __init__(self, parent: "ChatBuilder", role: Role = Role.USER) -> None:
        self._parent = parent
        self._role = role
        self._parts: List[ContentPart] = []

    def text(self, text: str) -> "MessageBuilder":
        self._parts.append(InputText(text=text))
        return self

    def image_url(self, url: str, detail: ImageDetail = ImageDetail.AUTO) -> "MessageBuilder":
        """Add an image by HTTPS or ``data:`` URL."""
        self._parts.append(InputImage(image_url=url, detail=ImageDetail(detail)))
        return self

    def image_file_id(self, file_id: str, detail: ImageDetail = ImageDetail.AUTO) -> "MessageBuilder":
        self._parts.append(InputImage(file_id=file_id, detail=ImageDetail(detail)))
        return self

    def image_bytes(self, data: bytes, mime_type: str = "", detail: ImageDetail = ImageDetail.AUTO) -> "MessageBuilder":
        self._parts.append(InputImage.from_bytes(data, mime_type, ImageDetail(detail)))
        return self

    def file_url(self, url: str) -> "MessageBuilder":
        self._parts.append(InputFile(file_url=url))
        return self

    def file_id(self, file_id: str) -> "MessageBuilder":
        self._parts.append(InputFile(file_id=file_id))
        return self

    def file_base64(self, filename: str, data: str) -> "MessageBuilder":
        """Add inline file content; ``data`` is already base64-encoded."""
        self._parts.append(InputFile(file_data=data, filename=filename))
        return self

    def done(self) -> "ChatBuilder":
        """Append the message to the parent builder and return it."""
        self._parent._append(Message(role=self._role, parts=list(self._parts)))
        return self._parent


__all__ = ["MessageBuilder"]
