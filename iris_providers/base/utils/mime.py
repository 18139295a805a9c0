"""MIME type helpers for multimodal content parts.

Pure functions used when a provider binding needs a MIME type for inline file
or image data: extension lookup, magic-byte sniffing and ``data:`` URL
parsing. No I/O.
"""
from __future__ import annotations

from typing import Optional, Tuple

OCTET_STREAM = "application/octet-stream"

_EXTENSION_MAP = {
    "pdf": "application/pdf",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "txt": "text/plain",
    "json": "application/json",
}

_PNG_MAGIC = b"\x89PNG"
_JPEG_MAGIC = b"\xff\xd8\xff"


def _extension(filename: str) -> str:
    name = filename.rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()


def sniff_mime_type(data: Optional[bytes]) -> Optional[str]:
    """Return a MIME type from leading magic bytes, or ``None``."""
    if not data:
        return None
    if data.startswith(_PNG_MAGIC):
        return "image/png"
    if data.startswith(_JPEG_MAGIC):
        return "image/jpeg"
    return None


def guess_mime_type(filename: str = "", data: Optional[bytes] = None) -> str:
    """Guess a canonical MIME type for ``filename`` and/or raw ``data``.

    The extension wins when it is known. When the filename is absent or its
    extension is unknown, PNG and JPEG signatures in ``data`` are sniffed.
    Everything else is ``application/octet-stream``.
    """
    mime = _EXTENSION_MAP.get(_extension(filename or ""))
    if mime is not None:
        return mime
    return sniff_mime_type(data) or OCTET_STREAM


def parse_data_url(url: str) -> Tuple[str, str]:
    """Split ``data:<mime>;base64,<payload>`` into ``(mime, payload)``.

    Returns ``("", "")`` when ``url`` has no comma separator.
    """
    rest = url[len("data:"):] if url.startswith("data:") else url
    meta, sep, payload = rest.partition(",")
    if not sep:
        return "", ""
    return meta.split(";", 1)[0], payload


def is_data_url(url: str) -> bool:
    return url.startswith("data:")


__all__ = [
    "OCTET_STREAM",
    "guess_mime_type",
    "sniff_mime_type",
    "parse_data_url",
    "is_data_url",
]
