"""Tests for ``ChatBuilder`` composition, validation and tool-result helpers."""

from __future__ import annotations

import base64

import pytest

from iris_providers.base.cancellation import CancellationToken
from iris_providers.base.dto import Tool
from iris_providers.base.errors import ErrorKind, ModelRequiredError, NoMessagesError, ProviderError
from iris_providers.base.models import (
    ChatResponse,
    ImageDetail,
    InputFile,
    InputImage,
    InputText,
    Message,
    ReasoningEffort,
    Role,
    ToolCall,
    ToolResult,
)
from iris_providers.client import Client, new_client
from iris_providers.mock import MockProvider


def _tool_response() -> ChatResponse:
    return ChatResponse(
        id="resp_1",
        tool_calls=[
            ToolCall("call_a", "get_weather", '{"location":"NYC"}'),
            ToolCall("call_b", "get_time", "{}"),
        ],
    )


def test_validation_sentinels_raise_before_dispatch(mock_provider: MockProvider) -> None:
    client = Client(mock_provider)
    with pytest.raises(ModelRequiredError):
        client.chat("").user("hi").get_response()
    with pytest.raises(NoMessagesError):
        client.chat("mock-gpt").get_response()
    with pytest.raises(NoMessagesError):
        client.chat("mock-gpt").user("").stream()
    assert len(mock_provider.requests) == 0


def test_validation_error_kinds() -> None:
    with pytest.raises(ModelRequiredError) as info:
        Client(MockProvider()).chat("").validate()
    assert info.value.kind is ErrorKind.MODEL_REQUIRED


def test_knobs_flow_into_the_request(client: Client) -> None:
    tool = Tool(name="get_weather")
    builder = (
        client.chat("mock-reasoner")
        .system("Be terse.")
        .user("hi")
        .assistant("hello")
        .user("again")
        .tools(tool)
        .temperature(0.2)
        .max_tokens(64)
        .reasoning_effort("high")
        .instructions("Answer in English.")
        .web_search()
        .code_interpreter()
        .file_search("vs_1", "vs_2")
        .continue_from("resp_prev")
        .truncation("auto")
    )
    req = builder.request
    assert [m.role for m in req.messages] == [Role.SYSTEM, Role.USER, Role.ASSISTANT, Role.USER]
    assert req.tools == [tool]
    assert req.temperature == 0.2
    assert req.max_tokens == 64
    assert req.reasoning_effort is ReasoningEffort.HIGH
    assert req.instructions == "Answer in English."
    assert [b.type for b in req.builtin_tools] == ["web_search", "code_interpreter", "file_search"]
    assert req.tool_resources.file_search.vector_store_ids == ["vs_1", "vs_2"]
    assert req.previous_response_id == "resp_prev"
    assert req.truncation == "auto"
    data = req.to_dict()
    assert data["reasoning_effort"] == "high"
    assert data["tools"][0]["name"] == "get_weather"


def test_unknown_reasoning_effort_is_rejected(client: Client) -> None:
    with pytest.raises(ValueError):
        client.chat("m").reasoning_effort("extreme")


def test_empty_reasoning_effort_means_unspecified(client: Client) -> None:
    builder = client.chat("mock-gpt").user("hi").reasoning_effort("high")
    assert builder.reasoning_effort("").request.reasoning_effort is None
    assert builder.reasoning_effort(None).request.reasoning_effort is None
    assert builder.get_response().output == "hello"


def test_provider_receives_an_independent_snapshot(client: Client, mock_provider: MockProvider) -> None:
    builder = client.chat("mock-gpt").user("hi")
    builder.get_response()
    builder.user("follow-up")
    (sent,) = mock_provider.requests
    assert len(sent.messages) == 1
    sent.messages.append(Message(role=Role.USER, content="tampered"))
    assert [m.content for m in builder.request.messages] == ["hi", "follow-up"]


def test_clone_is_independent(client: Client) -> None:
    base = client.chat("mock-gpt").user("hi").temperature(0.5)
    twin = base.clone().user("more").temperature(0.9)
    assert len(base.request.messages) == 1
    assert base.request.temperature == 0.5
    assert twin.request.temperature == 0.9


def test_user_multimodal_builder(client: Client) -> None:
    pdf = base64.b64encode(b"%PDF-1.7").decode()
    req = (
        client.chat("mock-gpt")
        .user_multimodal()
        .text("What is in these?")
        .image_url("https://example.test/cat.png", ImageDetail.LOW)
        .image_file_id("file-img")
        .image_bytes(b"\x89PNG\r\n\x1a\n")
        .file_url("https://example.test/doc.pdf")
        .file_id("file-doc")
        .file_base64("report.pdf", pdf)
        .done()
        .request
    )
    (msg,) = req.messages
    assert msg.role is Role.USER
    kinds = [type(p) for p in msg.parts]
    assert kinds == [InputText, InputImage, InputImage, InputImage, InputFile, InputFile, InputFile]
    assert msg.parts[1].detail is ImageDetail.LOW
    assert msg.parts[3].resolve().mime_type == "image/png"
    assert msg.parts[6].resolve().kind == "base64"


def test_user_with_helpers(client: Client) -> None:
    req = (
        client.chat("mock-gpt")
        .user_with_image_url("look", "https://example.test/a.png")
        .user_with_image_file_id("look", "file-1")
        .user_with_file_url("read", "https://example.test/a.pdf")
        .user_with_file_id("read", "file-2")
        .request
    )
    assert [m.parts[1].resolve().kind for m in req.messages] == ["url", "file_id", "url", "file_id"]
    assert all(isinstance(m.parts[0], InputText) for m in req.messages)


def test_tool_results_return_new_builder_and_append_turns() -> None:
    warnings = []
    client = Client(MockProvider(), warning_handler=warnings.append)
    original = client.chat("mock-gpt").user("weather and time?")
    follow = original.tool_results(
        _tool_response(),
        [ToolResult("call_a", {"temp": 20}), ToolResult("call_b", "12:00")],
    )
    assert follow is not original
    assert len(original.request.messages) == 1
    assistant, tool = follow.request.messages[1:]
    assert assistant.role is Role.ASSISTANT
    assert [tc.id for tc in assistant.tool_calls] == ["call_a", "call_b"]
    assert tool.role is Role.TOOL
    assert [r.call_id for r in tool.tool_results] == ["call_a", "call_b"]
    assert warnings == []
    follow.validate()


def test_tool_result_mismatches_emit_warnings() -> None:
    warnings = []
    client = Client(MockProvider(), warning_handler=warnings.append)
    builder = client.chat("mock-gpt").user("q")
    builder.tool_result(_tool_response(), "call_zzz", "orphan")
    assert any("call_zzz" in w for w in warnings)
    assert any("call_a" in w and "get_weather" in w for w in warnings)
    assert any("call_b" in w for w in warnings)


def test_tool_error_marks_result_as_error() -> None:
    client = Client(MockProvider(), warning_handler=lambda _msg: None)
    follow = client.chat("mock-gpt").user("q").tool_error(_tool_response(), "call_a", TimeoutError("took too long"))
    result = follow.request.messages[-1].tool_results[0]
    assert result.is_error
    assert result.content == "took too long"


def test_tool_results_without_tool_calls_is_a_plain_clone(client: Client) -> None:
    builder = client.chat("mock-gpt").user("q")
    twin = builder.tool_results(ChatResponse(output="no tools"), [ToolResult("x", "y")])
    assert len(twin.request.messages) == 1


def test_default_warning_handler_logs(log_records) -> None:
    client = Client(MockProvider())
    client.chat("mock-gpt").user("q").tool_result(_tool_response(), "call_a", "ok")
    (event,) = log_records.events("client.warning")
    assert "call_b" in event["message"]


def test_timeout_applies_deadline_to_get_response() -> None:
    client = Client(MockProvider(delay=1.0))
    with pytest.raises(ProviderError) as info:
        client.chat("mock-gpt").user("hi").timeout(0.05).get_response()
    assert info.value.kind is ErrorKind.NETWORK
    assert info.value.code == "deadline_exceeded"


def test_timeout_does_not_replace_an_existing_deadline() -> None:
    provider = MockProvider(delay=0.2)
    client = Client(provider)
    token = CancellationToken(timeout=5.0)
    resp = client.chat("mock-gpt").user("hi").timeout(0.01).get_response(token)
    assert resp.output == "hello"


def test_client_is_immutable_and_requires_provider(mock_provider: MockProvider) -> None:
    client = new_client(mock_provider)
    assert client.provider is mock_provider
    with pytest.raises(AttributeError):
        client.provider = MockProvider()  # type: ignore[misc]
    with pytest.raises(ValueError):
        Client(None)  # type: ignore[arg-type]
