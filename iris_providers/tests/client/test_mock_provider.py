"""Unit tests covering the deterministic mock provider fixtures and routing."""

from __future__ import annotations

import copy

import pytest

from iris_providers.base.cancellation import CancellationToken
from iris_providers.base.errors import ErrorKind, ProviderError, ToolArgsInvalidJSONError
from iris_providers.base.interfaces import Provider
from iris_providers.base.models import APIEndpoint, ChatRequest, Feature, Message, Role
from iris_providers.config import StreamConfig
from iris_providers.mock import MockProvider, load_fixture_catalog


def _request(prompt: str, model: str = "mock-gpt") -> ChatRequest:
    """Helper to construct a minimal ChatRequest for tests."""
    return ChatRequest(model=model, messages=[Message(role=Role.USER, content=prompt)])


class TestMockProvider:
    """Verify catalog, chat and streaming behaviour for the mock provider."""

    def test_catalog_and_features(self, mock_provider: MockProvider) -> None:
        assert isinstance(mock_provider, Provider)
        assert mock_provider.id() == "mock"
        models = {m.id: m for m in mock_provider.models()}
        assert set(models) == {"mock-gpt", "mock-reasoner"}
        assert models["mock-reasoner"].has_capability(Feature.REASONING)
        assert models["mock-reasoner"].get_api_endpoint() is APIEndpoint.RESPONSES
        assert mock_provider.supports("tool_calling")
        assert not mock_provider.supports(Feature.EMBEDDINGS)

    def test_fallback_response(self, mock_provider: MockProvider) -> None:
        resp = mock_provider.chat(_request("something unexpected"))
        assert resp.output == "This is a deterministic mock response."
        assert resp.status == "completed"

    def test_prompt_lookup_is_case_insensitive(self, mock_provider: MockProvider) -> None:
        assert mock_provider.chat(_request("  HI ")).output == "hello"

    def test_missing_total_tokens_is_derived(self, mock_provider: MockProvider) -> None:
        usage = mock_provider.chat(_request("no total")).usage
        assert (usage.prompt_tokens, usage.completion_tokens, usage.total_tokens) == (3, 2, 5)

    def test_chat_tool_calls(self, mock_provider: MockProvider) -> None:
        resp = mock_provider.chat(_request("weather?"))
        assert resp.has_tool_calls()
        assert resp.first_tool_call().as_function_call().arguments == {"location": "NYC"}

    def test_chat_invalid_tool_arguments(self) -> None:
        catalog = copy.deepcopy(load_fixture_catalog())
        body = catalog["responses"]["weather?"]["body"]
        body["choices"][0]["message"]["tool_calls"][0]["function"]["arguments"] = '{"location":'
        with pytest.raises(ToolArgsInvalidJSONError):
            MockProvider(catalog=catalog).chat(_request("weather?"))

    def test_rate_limited_and_decode_errors(self, mock_provider: MockProvider) -> None:
        with pytest.raises(ProviderError) as info:
            mock_provider.chat(_request("slow down"))
        assert info.value.kind is ErrorKind.RATE_LIMITED
        assert info.value.code == "rate_limit_exceeded"
        with pytest.raises(ProviderError) as info:
            mock_provider.chat(_request("garbled"))
        assert info.value.kind is ErrorKind.DECODE

    def test_cancelled_token_fails_chat(self, mock_provider: MockProvider) -> None:
        token = CancellationToken()
        token.cancel()
        with pytest.raises(ProviderError) as info:
            mock_provider.chat(_request("hi"), token)
        assert info.value.kind is ErrorKind.NETWORK
        assert info.value.code == "cancelled"

    def test_stream_replays_plain_bodies_in_chunks(self, mock_provider: MockProvider) -> None:
        stream = mock_provider.stream_chat(_request("anything"))
        deltas = list(stream.iter_text())
        assert len(deltas) > 1
        assert all(len(d) <= 16 for d in deltas)
        final = stream.drain()
        assert final.output == "This is a deterministic mock response."
        assert final.id == "chatcmpl-default"
        assert final.usage.total_tokens == 14

    def test_stream_reasoning_summary(self, mock_provider: MockProvider) -> None:
        final = mock_provider.stream_chat(_request("stream reasoning", "mock-reasoner")).drain()
        assert final.output == "42"
        assert final.has_reasoning()
        assert final.reasoning.summary == ["Consider the question."]
        assert final.model == "mock-reasoner"

    def test_stream_in_band_error(self, mock_provider: MockProvider) -> None:
        stream = mock_provider.stream_chat(_request("stream broken"))
        assert [c.delta for c in stream] == ["partial"]
        assert stream.wait(2.0)
        err = stream.error()
        assert isinstance(err, ProviderError)
        assert err.kind is ErrorKind.SERVER
        assert err.message == "upstream overloaded"
        assert stream.result() is None

    def test_stream_honours_injected_config(self) -> None:
        provider = MockProvider(config=StreamConfig(buffer_size=1, poll_interval_seconds=0.01))
        final = provider.stream_chat(_request("stream hello")).drain()
        assert final.output == "Hello world!"

    def test_requests_are_recorded(self, mock_provider: MockProvider) -> None:
        mock_provider.chat(_request("hi"))
        mock_provider.stream_chat(_request("stream hello")).drain()
        assert [r.messages[-1].content for r in mock_provider.requests] == ["hi", "stream hello"]

    def test_request_history_is_bounded(self) -> None:
        provider = MockProvider(max_recorded=2)
        for prompt in ("hi", "no total", "weather?"):
            provider.chat(_request(prompt))
        assert [r.messages[-1].content for r in provider.requests] == ["no total", "weather?"]

    def test_chat_logs_do_not_contain_content(self, mock_provider: MockProvider, log_records) -> None:
        mock_provider.chat(_request("hi"))
        end = log_records.events("chat.end")[0]
        assert end["request_id"] == "req_hi"
        assert end["response_id"] == "chatcmpl-hi"
        assert end["tokens"]["total_tokens"] == 6
        assert "hello" not in log_records.text()
