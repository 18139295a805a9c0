"""
Error classification helpers mapping statuses and exceptions to `ErrorKind`.

Implements the shared HTTP status table, status extraction from arbitrary SDK
or transport exceptions, and identity matching over exception chains.
"""
from __future__ import annotations

import json
from typing import Dict, Mapping, Optional

import httpx

from .error_kind import ErrorKind
from .iris_error import IrisError


_HTTP_STATUS_MAP: Dict[int, ErrorKind] = {
    400: ErrorKind.BAD_REQUEST,
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.UNAUTHORIZED,
    404: ErrorKind.NOT_FOUND,
    429: ErrorKind.RATE_LIMITED,
}


def kind_for_status(status: int, overrides: Optional[Mapping[int, ErrorKind]] = None) -> ErrorKind:
    """Map an HTTP status code to an :class:`ErrorKind`.

    ``overrides`` take precedence for exact status matches. Statuses outside
    the table (including every 5xx) map to ``SERVER``.
    """
    if overrides and status in overrides:
        return overrides[status]
    return _HTTP_STATUS_MAP.get(status, ErrorKind.SERVER)


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from a provider exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def classify_exception(exc: BaseException) -> ErrorKind:
    """Classify an exception into a normalized :class:`ErrorKind`.

    Precedence:
        1. SDK errors pass through their own kind.
        2. JSON / text decoding failures map to ``DECODE``.
        3. HTTP status mapping.
        4. Transport failures, cancellation and anything else map to
           ``NETWORK``.
    """
    if isinstance(exc, IrisError):
        return exc.kind
    if isinstance(exc, (json.JSONDecodeError, UnicodeDecodeError, httpx.DecodingError)):
        return ErrorKind.DECODE
    status = _extract_status(exc)
    if status is not None:
        return kind_for_status(status)
    # httpx.TransportError, OSError, CancelledError and anything unrecognised
    # raised while talking to a provider.
    return ErrorKind.NETWORK


def is_kind(exc: Optional[BaseException], kind: ErrorKind) -> bool:
    """Return True when ``exc`` or any exception in its chain carries ``kind``.

    Walks ``__cause__`` first, then ``__context__``, guarding against cycles.
    """
    seen = set()
    current = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, IrisError) and current.kind == kind:
            return True
        current = current.__cause__ or current.__context__
    return False


__all__ = [
    "kind_for_status",
    "classify_exception",
    "is_kind",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
