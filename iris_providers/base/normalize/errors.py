"""Helpers that turn provider failures into ``ProviderError`` values.

Provider bindings call these instead of building ``ProviderError`` by hand so
that every binding derives kinds from the same status table, falls back to
the same messages and records request ids the same way.
"""
from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any, Callable, Mapping, Optional, Union

import httpx

from ..cancellation import CancellationToken, CancelledError
from ..errors import ErrorKind, IrisError, ProviderError, classify_exception, kind_for_status
from ..errors_parts.classification import _extract_status

Body = Union[bytes, str, Mapping[str, Any], None]
ErrorParser = Callable[[str, int, Body, str], ProviderError]

REQUEST_ID_HEADERS = ("x-request-id", "request-id")


def _reason_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return f"HTTP {status}" if status else "provider error"


def _as_mapping(body: Body) -> Optional[Mapping[str, Any]]:
    if body is None:
        return None
    if isinstance(body, Mapping):
        return body
    try:
        parsed = json.loads(body)
    except (ValueError, TypeError):
        return None
    return parsed if isinstance(parsed, Mapping) else None


def provider_error(
    provider: str,
    status: int,
    request_id: str = "",
    code: str = "",
    message: str = "",
    kind: Optional[ErrorKind] = None,
    raw: Optional[BaseException] = None,
) -> ProviderError:
    """Build a ``ProviderError``; message defaults to the HTTP reason phrase."""
    return ProviderError(
        provider=provider,
        status=status,
        request_id=request_id,
        code=code,
        message=message or _reason_phrase(status),
        kind=kind if kind is not None else kind_for_status(status),
        raw=raw,
    )


def openai_style_error(provider: str, status: int, body: Body, request_id: str = "") -> ProviderError:
    """Parse ``{"error": {"message", "type", "code"}}`` bodies.

    ``code`` falls back to ``type``; unparseable bodies keep the status and
    the reason phrase.
    """
    data = _as_mapping(body) or {}
    err = data.get("error")
    if not isinstance(err, Mapping):
        return provider_error(provider, status, request_id)
    code = err.get("code") or err.get("type") or ""
    return provider_error(
        provider,
        status,
        request_id,
        code=str(code),
        message=str(err.get("message") or ""),
    )


def anthropic_style_error(provider: str, status: int, body: Body, request_id: str = "") -> ProviderError:
    """Parse ``{"type": "error", "error": {"type", "message"}}`` bodies."""
    data = _as_mapping(body) or {}
    err = data.get("error")
    if not isinstance(err, Mapping):
        return provider_error(provider, status, request_id)
    return provider_error(
        provider,
        status,
        request_id,
        code=str(err.get("type") or ""),
        message=str(err.get("message") or ""),
    )


def request_id_from_headers(headers: Mapping[str, str]) -> str:
    for name in REQUEST_ID_HEADERS:
        value = headers.get(name)
        if value:
            return value
    return ""


def error_from_response(
    provider: str,
    response: httpx.Response,
    parser: ErrorParser = openai_style_error,
) -> ProviderError:
    """Build a ``ProviderError`` from a non-2xx ``httpx.Response``.

    The body must already be read (``response.read()`` for streamed
    responses).
    """
    return parser(
        provider,
        response.status_code,
        response.content,
        request_id_from_headers(response.headers),
    )


def network_error(provider: str, exc: BaseException) -> ProviderError:
    return ProviderError(provider=provider, message=str(exc) or type(exc).__name__, kind=ErrorKind.NETWORK, raw=exc)


def decode_error(provider: str, exc: BaseException) -> ProviderError:
    return ProviderError(
        provider=provider,
        message=f"decode response: {exc}",
        kind=ErrorKind.DECODE,
        raw=exc,
    )


def cancelled_error(provider: str, token: Optional[CancellationToken] = None) -> ProviderError:
    """Report a cancelled or timed-out call as a ``network`` error."""
    exc = CancelledError("operation cancelled")
    if token is not None:
        try:
            token.raise_if_cancelled()
        except CancelledError as ce:
            exc = ce
    code = "deadline_exceeded" if exc.deadline else "cancelled"
    return ProviderError(provider=provider, message=str(exc), kind=ErrorKind.NETWORK, code=code, raw=exc)


def wrap_exception(provider: str, exc: BaseException) -> IrisError:
    """Normalize an arbitrary exception raised inside a provider call.

    SDK errors pass through unchanged; everything else becomes a
    ``ProviderError`` whose kind comes from ``classify_exception``.
    """
    if isinstance(exc, IrisError):
        return exc
    if isinstance(exc, CancelledError):
        return ProviderError(
            provider=provider,
            message=str(exc),
            kind=ErrorKind.NETWORK,
            code="deadline_exceeded" if exc.deadline else "cancelled",
            raw=exc,
        )
    kind = classify_exception(exc)
    if kind is ErrorKind.DECODE:
        return decode_error(provider, exc)
    status = _extract_status(exc) or 0
    if status:
        response = getattr(exc, "response", None)
        if isinstance(response, httpx.Response):
            try:
                err = error_from_response(provider, response)
            except httpx.ResponseNotRead:
                err = provider_error(provider, status, request_id_from_headers(response.headers))
            err.raw = exc
            err.__cause__ = exc
            return err
        return provider_error(provider, status, message=str(exc), raw=exc)
    return network_error(provider, exc)


__all__ = [
    "REQUEST_ID_HEADERS",
    "anthropic_style_error",
    "cancelled_error",
    "decode_error",
    "error_from_response",
    "network_error",
    "openai_style_error",
    "provider_error",
    "request_id_from_headers",
    "wrap_exception",
]
