"""Deterministic mock provider backed by JSON fixtures for offline testing.

Purpose
-------
Provide a provider binding that satisfies the ``Provider`` contract without
network traffic. Fixture entries are written in the OpenAI chat-completions
wire format (plain bodies for ``chat``, chunk objects for ``stream_chat``) and
are pushed through the same normalization path a live HTTP binding uses:
``httpx.Response`` objects for status and error handling, SSE framing for
streams, and the shared ``BaseStreamingAdapter`` for channel delivery.

Fixture catalog
---------------
``{"provider", "default_model", "features", "models", "responses"}`` where
``responses`` maps the last user prompt (lower-cased) to an entry, with
``"*"`` as fallback. An entry carries one of:

* ``body``: a chat-completion object (``status`` defaults to 200);
* ``raw_body``: undecodable response text;
* ``stream``: a list of chunk objects and the ``"[DONE]"`` sentinel.

Optional keys: ``status``, ``request_id`` and ``delay`` (seconds per frame).
"""

from __future__ import annotations

import json
import logging
from collections import deque
from importlib import resources
from typing import Any, Deque, Dict, Iterable, Iterator, List, Mapping, Optional

import httpx

from ..base.cancellation import CancellationToken
from ..base.capabilities import BaseProvider
from ..base.errors import IrisError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import (
    APIEndpoint,
    ChatRequest,
    ChatResponse,
    ModelInfo,
    ReasoningOutput,
    Role,
    TokenUsage,
)
from ..base.normalize import (
    cancelled_error,
    decode_error,
    error_from_response,
    openai_style_error,
    request_id_from_headers,
)
from ..base.streaming import (
    DONE_SENTINEL,
    BaseStreamingAdapter,
    ChatStream,
    ChatStreamEvent,
    SSEEvent,
    iter_sse_events,
)
from ..base.tools import ToolCallAssembler, ToolCallDelta
from ..config import StreamConfig, get_stream_config

_FIXTURE_RESOURCE = "chat_completions.json"
_FIXTURE_URL = "https://mock.invalid/v1/chat/completions"


def load_fixture_catalog(resource: str = _FIXTURE_RESOURCE) -> Dict[str, Any]:
    """Load the JSON fixture catalog bundled with the mock provider.

    Parameters
    ----------
    resource: str, default ``chat_completions.json``
        Name of the resource file located under ``iris_providers.mock.fixtures``.
    """
    data = resources.files("iris_providers.mock.fixtures").joinpath(resource).read_text(encoding="utf-8")
    return json.loads(data)


class MockProvider(BaseProvider):
    """Provider that answers from fixtures instead of live APIs.

    Args:
        catalog: Pre-parsed catalog; the bundled fixtures when omitted.
        provider_id: Overrides the catalog's provider id.
        delay: Default pause before a response and between stream frames.
        config: Stream settings handed to the streaming adapter.
        max_recorded: How many recent requests ``requests`` keeps.

    ``requests`` is a test aid: it holds the most recent ``max_recorded``
    requests received so tests can inspect exactly what the client
    dispatched, and drops older ones.
    """

    def __init__(
        self,
        *,
        catalog: Optional[Dict[str, Any]] = None,
        provider_id: Optional[str] = None,
        delay: float = 0.0,
        config: Optional[StreamConfig] = None,
        max_recorded: int = 100,
    ) -> None:
        self._catalog = catalog if catalog is not None else load_fixture_catalog()
        super().__init__(
            provider_id or str(self._catalog.get("provider", "mock")),
            models=[_model_info(m) for m in self._catalog.get("models", [])],
            features=self._catalog.get("features", ["chat", "chat_streaming"]),
        )
        self._default_model = str(self._catalog.get("default_model", "mock-gpt"))
        self._responses: Mapping[str, Any] = self._catalog.get("responses", {})
        self._delay = delay
        self._config = config
        self._logger = get_logger(f"providers.{self.provider_id}")
        self.requests: Deque[ChatRequest] = deque(maxlen=max_recorded)

    # ------------------------------------------------------------------
    # Provider API

    def chat(self, request: ChatRequest, token: Optional[CancellationToken] = None) -> ChatResponse:
        """Return the fixture response for the request's last user prompt.

        Raises:
            ProviderError: fixture status is an error, the body does not
                decode, or ``token`` fires during the simulated latency.
            ToolArgsInvalidJSONError: a tool call carries malformed arguments.
        """
        self.requests.append(request)
        model = request.model or self._default_model
        entry = self._select(request)
        ctx = LogContext(provider=self.provider_id, model=model)
        normalized_log_event(self._logger, "chat.start", ctx, phase="start", attempt=1, emitted=False)
        try:
            self._pause(token, entry)
            response = _http_response(entry)
            ctx.request_id = request_id_from_headers(response.headers) or None
            if response.is_error:
                raise error_from_response(self.provider_id, response, openai_style_error)
            try:
                body = response.json()
            except ValueError as exc:
                raise decode_error(self.provider_id, exc) from exc
            result = self._response_from_body(body, model)
        except IrisError as exc:
            normalized_log_event(
                self._logger,
                "chat.error",
                ctx,
                phase="finalize",
                attempt=1,
                error_code=exc.kind.value,
                emitted=False,
                level=logging.WARNING,
                error=str(exc)[:260],
            )
            raise
        ctx.response_id = result.id or None
        normalized_log_event(self._logger, "chat.end", ctx, phase="finalize", attempt=1, emitted=True, tokens=result.usage)
        return result

    def stream_chat(self, request: ChatRequest, token: Optional[CancellationToken] = None) -> ChatStream:
        """Stream the fixture through ``BaseStreamingAdapter``.

        Entries without a ``stream`` list are replayed by chunking their body.
        Error statuses raise here, before any stream exists.
        """
        self.requests.append(request)
        model = request.model or self._default_model
        entry = self._select(request)
        delay = float(entry.get("delay", self._delay))

        def _starter() -> Dict[str, Any]:
            if int(entry.get("status", 200)) >= 400:
                raise error_from_response(self.provider_id, _http_response(entry), openai_style_error)
            frames = entry.get("stream")
            if frames is None:
                frames = _frames_from_body(entry.get("body") or {})
            return {
                "stream": _FixtureStream(frames, adapter.token, delay),
                "request_id": entry.get("request_id"),
            }

        adapter = BaseStreamingAdapter(
            provider_name=self.provider_id,
            model=model,
            starter=_starter,
            translator=self._translate,
            token=token,
            logger=self._logger,
            config=self._config or get_stream_config(),
        )
        return adapter.start()

    # ------------------------------------------------------------------
    # Helpers

    def _select(self, request: ChatRequest) -> Mapping[str, Any]:
        prompt = _extract_prompt(request)
        return (
            self._responses.get(prompt)
            or self._responses.get(prompt.lower())
            or self._responses.get("*")
            or {"body": {"choices": [{"message": {"content": ""}}]}}
        )

    def _pause(self, token: Optional[CancellationToken], entry: Mapping[str, Any]) -> None:
        if token is None:
            return
        delay = float(entry.get("delay", self._delay))
        if token.cancelled or (delay > 0 and token.wait(delay)):
            raise cancelled_error(self.provider_id, token)

    def _empty_args(self) -> str:
        return (self._config or get_stream_config()).empty_arguments_json

    def _response_from_body(self, body: Mapping[str, Any], model: str) -> ChatResponse:
        choices = body.get("choices") or []
        choice = choices[0] if choices else {}
        message = choice.get("message") or {}
        assembler = ToolCallAssembler(self._empty_args())
        for index, tc in enumerate(message.get("tool_calls") or []):
            for frag in _tool_fragments(index, tc):
                assembler.add_fragment(frag)
        reasoning = None
        if message.get("reasoning"):
            reasoning = ReasoningOutput(summary=[str(message["reasoning"])])
        return ChatResponse(
            id=str(body.get("id") or ""),
            model=str(body.get("model") or model),
            output=str(message.get("content") or ""),
            tool_calls=assembler.finalize(),
            usage=_usage(body.get("usage")),
            reasoning=reasoning,
            status="incomplete" if choice.get("finish_reason") == "length" else "completed",
        )

    def _translate(self, frame: SSEEvent) -> Optional[ChatStreamEvent]:
        """Map one SSE frame carrying a chat-completion chunk to a stream event."""
        if frame.is_done:
            return ChatStreamEvent(finish=True)
        try:
            data = frame.json()
        except ValueError as exc:
            return ChatStreamEvent(error=decode_error(self.provider_id, exc))
        if not isinstance(data, Mapping):
            return None
        if "error" in data:
            return ChatStreamEvent(error=openai_style_error(self.provider_id, 0, data))
        evt = ChatStreamEvent(
            response_id=str(data.get("id") or ""),
            model=str(data.get("model") or ""),
        )
        if data.get("usage"):
            evt.usage = _usage(data["usage"])
        for choice in data.get("choices") or []:
            delta = choice.get("delta") or {}
            evt.delta += str(delta.get("content") or "")
            if delta.get("reasoning"):
                evt.reasoning.append(str(delta["reasoning"]))
            for tc in delta.get("tool_calls") or []:
                evt.tool_calls.extend(_tool_fragments(int(tc.get("index", 0)), tc))
            if choice.get("finish_reason") == "length":
                evt.status = "incomplete"
        return evt


class _FixtureStream:
    """Native stream replaying fixture frames as SSE lines.

    ``delay`` is spent in ``token.wait`` so a cancelled stream stops between
    frames instead of sleeping through them.
    """

    def __init__(self, frames: Iterable[Any], token: CancellationToken, delay: float) -> None:
        self._frames = list(frames)
        self._token = token
        self._delay = delay
        self.closed = False

    def _lines(self) -> Iterator[str]:
        for frame in self._frames:
            if self.closed:
                return
            if self._delay > 0 and self._token.wait(self._delay):
                return
            payload = frame if isinstance(frame, str) else json.dumps(frame)
            yield f"data: {payload}"
            yield ""

    def __iter__(self) -> Iterator[SSEEvent]:
        return iter_sse_events(self._lines())

    def close(self) -> None:
        self.closed = True


# ---------------------------------------------------------------------------
# Module-level helpers


def _model_info(raw: Mapping[str, Any]) -> ModelInfo:
    endpoint = raw.get("api_endpoint")
    return ModelInfo(
        id=str(raw["id"]),
        display_name=str(raw.get("display_name", "")),
        capabilities=frozenset(raw.get("capabilities", [])),
        api_endpoint=APIEndpoint(endpoint) if endpoint else None,
    )


def _http_response(entry: Mapping[str, Any]) -> httpx.Response:
    """Render a fixture entry as the ``httpx.Response`` a live call would get."""
    headers = {"content-type": "application/json"}
    if entry.get("request_id"):
        headers["x-request-id"] = str(entry["request_id"])
    if "raw_body" in entry:
        content = str(entry["raw_body"]).encode("utf-8")
    else:
        content = json.dumps(entry.get("body") or {}).encode("utf-8")
    return httpx.Response(
        int(entry.get("status", 200)),
        headers=headers,
        content=content,
        request=httpx.Request("POST", _FIXTURE_URL),
    )


def _usage(raw: Any) -> TokenUsage:
    """Build ``TokenUsage``; a missing total is the sum of its parts."""
    if not isinstance(raw, Mapping):
        return TokenUsage()
    prompt = int(raw.get("prompt_tokens") or 0)
    completion = int(raw.get("completion_tokens") or 0)
    total = raw.get("total_tokens")
    return TokenUsage(
        prompt_tokens=prompt,
        completion_tokens=completion,
        total_tokens=int(total) if total is not None else prompt + completion,
    )


def _tool_fragments(index: int, raw: Mapping[str, Any]) -> List[ToolCallDelta]:
    fn = raw.get("function") or {}
    return [
        ToolCallDelta(
            index=index,
            id=str(raw.get("id") or ""),
            name=str(fn.get("name") or ""),
            arguments=str(fn.get("arguments") or ""),
        )
    ]


def _frames_from_body(body: Mapping[str, Any]) -> List[Any]:
    """Replay a chat-completion body as chunk frames ending in ``[DONE]``."""
    choices = body.get("choices") or [{}]
    message = choices[0].get("message") or {}
    base = {"id": body.get("id", ""), "model": body.get("model", "")}
    frames: List[Any] = []
    for piece in _chunk_text(str(message.get("content") or "")):
        frames.append({**base, "choices": [{"index": 0, "delta": {"content": piece}}]})
    for index, tc in enumerate(message.get("tool_calls") or []):
        frames.append({**base, "choices": [{"index": 0, "delta": {"tool_calls": [{**tc, "index": index}]}}]})
    if body.get("usage"):
        frames.append({**base, "choices": [], "usage": body["usage"]})
    frames.append(DONE_SENTINEL)
    return frames


def _chunk_text(text: str, chunk_size: int = 16) -> List[str]:
    """Split text into fixed-size chunks for deterministic streaming."""
    if not text:
        return []
    return [text[i : i + chunk_size] for i in range(0, len(text), chunk_size)]


def _extract_prompt(request: ChatRequest) -> str:
    """Return the last user message text for fixture lookup (``"*"`` if none)."""
    for message in reversed(request.messages):
        if message.role == Role.USER:
            return message.text_or_joined().strip().lower() or "*"
    return "*"


__all__ = ["MockProvider", "load_fixture_catalog"]
