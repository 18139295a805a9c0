"""Fluent chat request builder.

A ``ChatBuilder`` is bound to one ``(Client, model)`` pair and used by one
caller for one request; it is not safe for concurrent use. Chainable setters
mutate the builder and return it. The tool-result helpers return a new
builder and leave the original untouched. ``get_response`` and ``stream``
validate the request, then hand the provider an independent snapshot.
"""
from __future__ import annotations

import copy
import logging
import time
from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from ..base.cancellation import CancellationToken
from ..base.dto import Tool
from ..base.errors import ModelRequiredError, NoMessagesError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import (
    BuiltInTool,
    ChatRequest,
    ChatResponse,
    ContentPart,
    FileSearchResources,
    InputFile,
    InputImage,
    InputText,
    Message,
    ReasoningEffort,
    Role,
    TokenUsage,
    ToolResources,
    ToolResult,
)
from ..base.streaming import ChatStream
from ..base.telemetry import RequestEndEvent, RequestStartEvent
from .message_builder import MessageBuilder

if TYPE_CHECKING:  # pragma: no cover
    from .client import Client

_logger = get_logger(__name__)


class ChatBuilder:
    """Composes a ``ChatRequest`` and dispatches it through the client's provider."""

    def __init__(self, client: "Client", model: str) -> None:
        self._client = client
        self._req = ChatRequest(model=model)
        self._timeout: Optional[float] = None

    @property
    def request(self) -> ChatRequest:
        """Snapshot of the request built so far."""
        return self._req.snapshot()

    def _append(self, message: Message) -> "ChatBuilder":
        self._req.messages.append(message)
        return self

    # Messages -----------------------------------------------------------------
    def system(self, text: str) -> "ChatBuilder":
        return self._append(Message(role=Role.SYSTEM, content=text))

    def user(self, text: str) -> "ChatBuilder":
        return self._append(Message(role=Role.USER, content=text))

    def assistant(self, text: str) -> "ChatBuilder":
        return self._append(Message(role=Role.ASSISTANT, content=text))

    def user_parts(self, *parts: ContentPart) -> "ChatBuilder":
        """Append a user message carrying structured content parts."""
        return self._append(Message(role=Role.USER, parts=list(parts)))

    def user_multimodal(self) -> MessageBuilder:
        """Start a multimodal user message; finish it with ``done()``."""
        return MessageBuilder(self, Role.USER)

    def user_with_image_url(self, text: str, image_url: str) -> "ChatBuilder":
        return self.user_parts(InputText(text), InputImage(image_url=image_url))

    def user_with_image_file_id(self, text: str, file_id: str) -> "ChatBuilder":
        return self.user_parts(InputText(text), InputImage(file_id=file_id))

    def user_with_file_url(self, text: str, file_url: str) -> "ChatBuilder":
        return self.user_parts(InputText(text), InputFile(file_url=file_url))

    def user_with_file_id(self, text: str, file_id: str) -> "ChatBuilder":
        return self.user_parts(InputText(text), InputFile(file_id=file_id))

    # Knobs --------------------------------------------------------------------
    def tools(self, *tools: Tool) -> "ChatBuilder":
        """Replace the tool catalog."""
        self._req.tools = list(tools)
        return self

    def temperature(self, value: float) -> "ChatBuilder":
        self._req.temperature = value
        return self

    def max_tokens(self, n: int) -> "ChatBuilder":
        self._req.max_tokens = n
        return self

    def reasoning_effort(self, effort: Union[ReasoningEffort, str, None]) -> "ChatBuilder":
        """Set the reasoning effort; ``""`` or ``None`` leaves it unspecified."""
        self._req.reasoning_effort = ReasoningEffort(effort) if effort else None
        return self

    def instructions(self, text: str) -> "ChatBuilder":
        self._req.instructions = text
        return self

    def builtin_tool(self, tool_type: str) -> "ChatBuilder":
        self._req.builtin_tools.append(BuiltInTool(type=tool_type))
        return self

    def web_search(self) -> "ChatBuilder":
        return self.builtin_tool("web_search")

    def code_interpreter(self) -> "ChatBuilder":
        return self.builtin_tool("code_interpreter")

    def file_search(self, *vector_store_ids: str) -> "ChatBuilder":
        """Add the ``file_search`` tool, optionally scoped to vector stores."""
        self.builtin_tool("file_search")
        if vector_store_ids:
            if self._req.tool_resources is None:
                self._req.tool_resources = ToolResources()
            self._req.tool_resources.file_search = FileSearchResources(list(vector_store_ids))
        return self

    def continue_from(self, response_id: str) -> "ChatBuilder":
        self._req.previous_response_id = response_id
        return self

    def truncation(self, mode: str) -> "ChatBuilder":
        self._req.truncation = mode
        return self

    def timeout(self, seconds: float) -> "ChatBuilder":
        """Deadline applied by ``get_response`` when the caller's token has none.

        Not applied to ``stream``: a stream outlives the call that opens it,
        so pass a token with a deadline instead.
        """
        self._timeout = seconds
        return self

    def clone(self) -> "ChatBuilder":
        """Deep copy; the original builder is unaffected by later changes."""
        twin = ChatBuilder(self._client, self._req.model)
        twin._req = copy.deepcopy(self._req)
        twin._timeout = self._timeout
        return twin

    # Tool results (return new builders) ---------------------------------------
    def tool_results(self, response: Optional[ChatResponse], results: Iterable[ToolResult]) -> "ChatBuilder":
        """Return a new builder with the assistant's tool calls and their results.

        Results whose ids match no call, and calls left without a result, are
        reported through the client's warning handler.
        """
        twin = self.clone()
        if response is None or not response.has_tool_calls():
            return twin
        results = list(results)
        call_names = {tc.id: tc.name for tc in response.tool_calls}
        provided = {r.call_id for r in results}
        for r in results:
            if r.call_id not in call_names:
                self._client._warn(f"tool result ID {r.call_id!r} does not match any tool call")
        for call_id, name in call_names.items():
            if call_id not in provided:
                self._client._warn(f"no result provided for tool call {call_id!r} (tool: {name})")
        twin._append(Message(role=Role.ASSISTANT, tool_calls=list(response.tool_calls)))
        twin._append(Message(role=Role.TOOL, tool_results=results))
        return twin

    def tool_result(self, response: Optional[ChatResponse], call_id: str, content: Any) -> "ChatBuilder":
        return self.tool_results(response, [ToolResult(call_id=call_id, content=content)])

    def tool_error(self, response: Optional[ChatResponse], call_id: str, exc: BaseException) -> "ChatBuilder":
        return self.tool_results(response, [ToolResult(call_id=call_id, content=str(exc), is_error=True)])

    # Terminals ----------------------------------------------------------------
    def validate(self) -> None:
        """Raise the validation sentinel for an undispatchable request."""
        if not self._req.model:
            raise ModelRequiredError()
        if not self._req.messages:
            raise NoMessagesError()
        if any(not m.has_payload() for m in self._req.messages):
            raise NoMessagesError()

    def _effective_token(self, token: Optional[CancellationToken]) -> Optional[CancellationToken]:
        if self._timeout is None or self._timeout <= 0:
            return token
        if token is None:
            return CancellationToken(timeout=self._timeout)
        if token.deadline is None:
            return token.with_timeout(self._timeout)
        return token

    def _log_dispatch(self, provider_id: str, streaming: bool) -> None:
        normalized_log_event(
            _logger,
            "chat.dispatch",
            LogContext(provider=provider_id, model=self._req.model),
            phase="dispatch",
            level=logging.DEBUG,
            message_count=len(self._req.messages),
            tool_count=len(self._req.tools),
            streaming=streaming,
        )

    def get_response(self, token: Optional[CancellationToken] = None) -> ChatResponse:
        """Validate and execute the request.

        Raises:
            ModelRequiredError, NoMessagesError: invalid request (nothing sent).
            IrisError: the provider call failed.
        """
        self.validate()
        token = self._effective_token(token)
        client = self._client
        provider_id = client.provider.id()
        model = self._req.model
        self._log_dispatch(provider_id, streaming=False)
        start = RequestStartEvent(provider=provider_id, model=model)
        client.telemetry.on_request_start(start)
        t0 = time.perf_counter()
        try:
            resp = client.provider.chat(self._req.snapshot(), token)
        except Exception as exc:
            client.telemetry.on_request_end(
                RequestEndEvent(provider=provider_id, model=model, start=start.start, error=exc)
            )
            raise
        client.telemetry.on_request_end(
            RequestEndEvent(provider=provider_id, model=model, start=start.start, usage=resp.usage)
        )
        normalized_log_event(
            _logger,
            "chat.complete",
            LogContext(provider=provider_id, model=model, response_id=resp.id or None),
            phase="finalize",
            level=logging.DEBUG,
            tokens=resp.usage,
            total_duration_ms=round((time.perf_counter() - t0) * 1000.0, 3),
        )
        return resp

    def stream(self, token: Optional[CancellationToken] = None) -> ChatStream:
        """Validate and start a streaming request.

        The telemetry end event fires when the stream's terminal channels
        resolve. ``timeout()`` is not applied here.
        """
        self.validate()
        client = self._client
        provider_id = client.provider.id()
        model = self._req.model
        self._log_dispatch(provider_id, streaming=True)
        start = RequestStartEvent(provider=provider_id, model=model, streaming=True)
        client.telemetry.on_request_start(start)
        try:
            stream = client.provider.stream_chat(self._req.snapshot(), token)
        except Exception as exc:
            client.telemetry.on_request_end(
                RequestEndEvent(provider=provider_id, model=model, start=start.start, error=exc, streaming=True)
            )
            raise

        def _on_done(resp: Optional[ChatResponse], err: Optional[BaseException]) -> None:
            client.telemetry.on_request_end(
                RequestEndEvent(
                    provider=provider_id,
                    model=model,
                    start=start.start,
                    usage=resp.usage if resp is not None else TokenUsage(),
                    error=err,
                    streaming=True,
                )
            )

        stream.add_done_callback(_on_done)
        return stream


__all__ = ["ChatBuilder"]
