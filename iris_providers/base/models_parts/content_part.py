"""
Multimodal content parts for user messages.

Three part types are supported: :class:`InputText`, :class:`InputImage` and
:class:`InputFile`. Image and file parts accept several mutually exclusive
sources; ``resolve()`` applies the documented precedence so every provider
binding picks the same source for the same part.
"""
from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Literal, Union

from ..utils.mime import guess_mime_type, is_data_url, parse_data_url

SourceKind = Literal["file_id", "url", "data_url", "base64"]


class ImageDetail(str, Enum):
    """Level of detail requested for image understanding."""

    AUTO = "auto"
    LOW = "low"
    HIGH = "high"


@dataclass(frozen=True)
class ResolvedSource:
    """The single source a provider should send for an image or file part.

    Attributes:
        kind: Which source won the precedence check.
        value: File id, URL, data URL or base64 payload.
        mime_type: Best-effort MIME type (empty when unknown, e.g. remote URLs).
        filename: Filename hint for inline data.
    """

    kind: SourceKind
    value: str
    mime_type: str = ""
    filename: str = ""


@dataclass(frozen=True)
class InputText:
    """Text content in a multimodal message."""

    text: str

    @property
    def content_type(self) -> str:
        return "input_text"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.content_type, "text": self.text}


@dataclass(frozen=True)
class InputImage:
    """Image content in a multimodal message.

    Attributes:
        image_url: HTTPS URL or ``data:image/...;base64,...`` URL.
        file_id: Opaque file reference from a provider's files API.
        detail: Requested detail level.

    Precedence: file reference > external URL > data URL. At least one source
    must be provided.
    """

    image_url: str = ""
    file_id: str = ""
    detail: ImageDetail = ImageDetail.AUTO

    def __post_init__(self) -> None:
        if not self.image_url and not self.file_id:
            raise ValueError("InputImage requires image_url or file_id")

    @property
    def content_type(self) -> str:
        return "input_image"

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str = "", detail: ImageDetail = ImageDetail.AUTO) -> "InputImage":
        """Build an image part carrying ``data`` inline as a data URL."""
        mime = mime_type or guess_mime_type("", data)
        encoded = base64.b64encode(data).decode("ascii")
        return cls(image_url=f"data:{mime};base64,{encoded}", detail=detail)

    def resolve(self) -> ResolvedSource:
        """Return the source to send, applying the precedence rules."""
        if self.file_id:
            return ResolvedSource(kind="file_id", value=self.file_id)
        if not is_data_url(self.image_url):
            return ResolvedSource(kind="url", value=self.image_url)
        mime, _ = parse_data_url(self.image_url)
        return ResolvedSource(kind="data_url", value=self.image_url, mime_type=mime)

    def to_dict(self) -> Dict[str, Any]:
        src = self.resolve()
        return {"type": self.content_type, "source": src.kind, "value": src.value, "detail": self.detail.value}


@dataclass(frozen=True)
class InputFile:
    """File content in a multimodal message.

    Attributes:
        file_data: Base64-encoded file bytes.
        filename: Filename for ``file_data``; drives MIME guessing.
        file_id: Opaque file reference from a provider's files API.
        file_url: HTTPS URL to the file.

    Precedence: inline base64 data > file reference > external URL.
    """

    file_data: str = ""
    filename: str = ""
    file_id: str = ""
    file_url: str = ""

    def __post_init__(self) -> None:
        if not (self.file_data or self.file_id or self.file_url):
            raise ValueError("InputFile requires file_data, file_id or file_url")

    @property
    def content_type(self) -> str:
        return "input_file"

    def _head_bytes(self) -> bytes:
        # 16 base64 chars decode to 12 bytes, enough for every signature we sniff.
        try:
            return base64.b64decode(self.file_data[:16], validate=False)
        except (binascii.Error, ValueError):
            return b""

    def mime_type(self) -> str:
        """Guess the MIME type of the inline data (filename first, then bytes)."""
        return guess_mime_type(self.filename, self._head_bytes())

    def resolve(self) -> ResolvedSource:
        """Return the source to send, applying the precedence rules."""
        if self.file_data:
            return ResolvedSource(
                kind="base64",
                value=self.file_data,
                mime_type=self.mime_type(),
                filename=self.filename,
            )
        if self.file_id:
            return ResolvedSource(kind="file_id", value=self.file_id)
        return ResolvedSource(kind="url", value=self.file_url, mime_type=guess_mime_type(self.file_url) if self.file_url else "")

    def to_dict(self) -> Dict[str, Any]:
        src = self.resolve()
        # Inline payloads are summarised, never serialised verbatim.
        value = f"<{len(src.value)} base64 chars>" if src.kind == "base64" else src.value
        return {"type": self.content_type, "source": src.kind, "value": value, "mime_type": src.mime_type or None}


ContentPart = Union[InputText, InputImage, InputFile]


__all__ = [
    "ContentPart",
    "ImageDetail",
    "InputFile",
    "InputImage",
    "InputText",
    "ResolvedSource",
]
