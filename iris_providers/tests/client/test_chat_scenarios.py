"""End-to-end chat scenarios through ``Client`` and the fixture-backed provider."""

from __future__ import annotations

import pytest

from iris_providers.base.cancellation import CancellationToken
from iris_providers.base.dto import Tool
from iris_providers.base.errors import ErrorKind, ProviderError, ToolArgsInvalidJSONError, is_kind
from iris_providers.base.models import ToolCall
from iris_providers.client import Client
from iris_providers.mock import MockProvider

WEATHER = Tool(
    name="get_weather",
    description="Current weather for a location",
    parameters={"type": "object", "properties": {"location": {"type": "string"}}},
)


def test_non_streaming_success(client: Client) -> None:
    resp = client.chat("mock-gpt").user("hi").get_response()
    assert resp.output == "hello"
    assert resp.id == "chatcmpl-hi"
    assert (resp.usage.prompt_tokens, resp.usage.completion_tokens, resp.usage.total_tokens) == (5, 1, 6)
    assert not resp.has_tool_calls()


def test_streaming_accumulation(client: Client) -> None:
    stream = client.chat("mock-gpt").user("stream hello").stream()
    deltas = [chunk.delta for chunk in stream]
    assert deltas == ["Hel", "lo ", "wor", "ld!"]
    assert stream.wait(2.0)
    assert stream.error() is None
    final = stream.result()
    assert final.output == "Hello world!"
    assert final.usage.total_tokens == 8


def test_tool_only_stream(client: Client) -> None:
    stream = client.chat("mock-gpt").tools(WEATHER).user("stream weather").stream()
    assert list(stream.iter_text()) == []
    final = stream.drain()
    assert final.output == ""
    assert final.tool_calls == [ToolCall("t1", "get_weather", '{"location":"NYC"}')]
    assert final.first_tool_call().decode() == {"location": "NYC"}


def test_invalid_tool_arguments(client: Client) -> None:
    stream = client.chat("mock-gpt").user("stream bad tool").stream()
    assert list(stream) == []
    assert stream.wait(2.0)
    assert isinstance(stream.error(), ToolArgsInvalidJSONError)
    assert is_kind(stream.error(), ErrorKind.TOOL_ARGS_INVALID_JSON)
    assert stream.result() is None


def test_http_401(client: Client) -> None:
    with pytest.raises(ProviderError) as info:
        client.chat("mock-gpt").user("unauthorized").get_response()
    err = info.value
    assert err.kind is ErrorKind.UNAUTHORIZED
    assert err.status == 401
    assert err.provider == "mock"
    assert err.request_id == "req_401"
    assert err.message == "Invalid API key"
    assert err.code == "authentication_error"
    assert is_kind(err, ErrorKind.UNAUTHORIZED)


def test_http_401_on_stream_setup_returns_no_stream(client: Client) -> None:
    with pytest.raises(ProviderError) as info:
        client.chat("mock-gpt").user("stream unauthorized").stream()
    assert info.value.kind is ErrorKind.UNAUTHORIZED


def test_mid_stream_cancellation() -> None:
    client = Client(MockProvider(delay=0.05))
    caller = CancellationToken()
    stream = client.chat("mock-gpt").user("stream hello").stream(caller)
    first = stream.deltas.receive(timeout=2.0)
    assert first.delta == "Hel"
    stream.cancel()
    assert stream.wait(2.0)
    assert stream.deltas.closed
    err = stream.error()
    assert isinstance(err, ProviderError)
    assert err.kind is ErrorKind.NETWORK
    assert stream.result() is None
    assert not caller.cancelled


def test_caller_token_cancellation_reaches_stream() -> None:
    client = Client(MockProvider(delay=0.05))
    caller = CancellationToken()
    stream = client.chat("mock-gpt").user("stream hello").stream(caller)
    caller.cancel("shutting down")
    with pytest.raises(ProviderError) as info:
        stream.drain()
    assert info.value.kind is ErrorKind.NETWORK
