"""Tests for the provider error normalization helpers (httpx responses built in memory)."""

from __future__ import annotations

import json

import httpx
import pytest

from iris_providers.base.cancellation import CancellationToken, CancelledError
from iris_providers.base.errors import ErrorKind, NoMessagesError, ProviderError, is_kind
from iris_providers.base.normalize import (
    anthropic_style_error,
    cancelled_error,
    decode_error,
    error_from_response,
    network_error,
    openai_style_error,
    provider_error,
    request_id_from_headers,
    wrap_exception,
)

_REQ = httpx.Request("POST", "https://api.example.test/v1/chat/completions")


def _response(status: int, body: object, headers: dict = None) -> httpx.Response:
    content = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    return httpx.Response(status, content=content, headers=headers or {}, request=_REQ)


def test_provider_error_defaults_to_reason_phrase_and_status_kind() -> None:
    err = provider_error("openai", 404)
    assert err.message == "Not Found"
    assert err.kind is ErrorKind.NOT_FOUND
    assert provider_error("openai", 599).message == "HTTP 599"
    assert provider_error("x", 0).message == "provider error"
    assert provider_error("x", 500, kind=ErrorKind.RATE_LIMITED).kind is ErrorKind.RATE_LIMITED


def test_openai_style_error_parses_body() -> None:
    body = {"error": {"message": "Rate limit reached", "type": "requests", "code": "rate_limit_exceeded"}}
    err = openai_style_error("openai", 429, body, "req_9")
    assert err.kind is ErrorKind.RATE_LIMITED
    assert err.code == "rate_limit_exceeded"
    assert err.message == "Rate limit reached"
    assert err.request_id == "req_9"


def test_openai_style_error_code_falls_back_to_type() -> None:
    err = openai_style_error("openai", 401, json.dumps({"error": {"message": "bad key", "type": "invalid_request_error"}}))
    assert err.code == "invalid_request_error"


def test_openai_style_error_unparseable_body() -> None:
    err = openai_style_error("openai", 502, b"<html>bad gateway</html>")
    assert err.kind is ErrorKind.SERVER
    assert err.message == "Bad Gateway"
    assert err.code == ""


def test_anthropic_style_error() -> None:
    body = {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}}
    err = anthropic_style_error("anthropic", 529, body)
    assert err.code == "overloaded_error"
    assert err.message == "Overloaded"
    assert err.kind is ErrorKind.SERVER


def test_error_from_response_reads_request_id_header() -> None:
    resp = _response(401, {"error": {"message": "Invalid API key"}}, {"x-request-id": "req_abc"})
    err = error_from_response("openai", resp)
    assert err.status == 401
    assert err.request_id == "req_abc"
    assert err.kind is ErrorKind.UNAUTHORIZED
    alt = _response(400, {}, {"request-id": "req_def"})
    assert error_from_response("anthropic", alt, anthropic_style_error).request_id == "req_def"


def test_request_id_from_headers_prefers_x_request_id() -> None:
    headers = httpx.Headers({"request-id": "b", "x-request-id": "a"})
    assert request_id_from_headers(headers) == "a"
    assert request_id_from_headers({}) == ""


def test_network_and_decode_errors() -> None:
    exc = httpx.ReadTimeout("timed out")
    err = network_error("p", exc)
    assert err.kind is ErrorKind.NETWORK
    assert err.__cause__ is exc
    dec = decode_error("p", ValueError("Expecting value"))
    assert dec.kind is ErrorKind.DECODE
    assert dec.message.startswith("decode response:")


def test_cancelled_error_codes() -> None:
    token = CancellationToken()
    token.cancel("user abort")
    err = cancelled_error("p", token)
    assert err.kind is ErrorKind.NETWORK
    assert err.code == "cancelled"
    assert isinstance(err.raw, CancelledError)

    expired = CancellationToken(timeout=0.0)
    assert cancelled_error("p", expired).code == "deadline_exceeded"
    assert cancelled_error("p").code == "cancelled"


def test_wrap_exception_passthrough_and_kinds() -> None:
    sentinel = NoMessagesError()
    assert wrap_exception("p", sentinel) is sentinel

    with pytest.raises(json.JSONDecodeError) as info:
        json.loads("{")
    assert wrap_exception("p", info.value).kind is ErrorKind.DECODE

    assert wrap_exception("p", httpx.ConnectError("refused")).kind is ErrorKind.NETWORK
    assert wrap_exception("p", CancelledError("late", deadline=True)).code == "deadline_exceeded"


def test_wrap_exception_http_status_error() -> None:
    resp = _response(429, {"error": {"message": "slow down", "type": "rate_limit"}}, {"x-request-id": "req_r"})
    exc = httpx.HTTPStatusError("429", request=_REQ, response=resp)
    err = wrap_exception("openai", exc)
    assert isinstance(err, ProviderError)
    assert err.status == 429
    assert err.request_id == "req_r"
    assert err.message == "slow down"
    assert err.__cause__ is exc
    assert is_kind(err, ErrorKind.RATE_LIMITED)
