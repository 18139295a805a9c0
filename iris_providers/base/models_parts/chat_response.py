"""
ChatResponse, TokenUsage, ReasoningOutput and ChatChunk DTOs.

``ChatResponse`` is both the non-streaming result and the final summary of a
stream. ``id`` may be empty for providers that do not return one.
``TokenUsage.total_tokens`` is informational and may exceed the sum of its
parts.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .tool_call import ToolCall


@dataclass
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass
class ReasoningOutput:
    """Reasoning summary returned by reasoning-capable models."""

    id: str = ""
    summary: List[str] = field(default_factory=list)


@dataclass
class ChatResponse:
    """Provider-agnostic response from a chat invocation.

    Attributes:
        id: Provider response id (may be empty).
        model: Model that produced the response.
        output: Aggregated text output.
        tool_calls: Tool calls with valid JSON arguments.
        usage: Token accounting.
        reasoning: Optional reasoning summary.
        status: Provider status string (e.g. ``"completed"``), when reported.
    """

    id: str = ""
    model: str = ""
    output: str = ""
    tool_calls: List[ToolCall] = field(default_factory=list)
    usage: TokenUsage = field(default_factory=TokenUsage)
    reasoning: Optional[ReasoningOutput] = None
    status: str = ""

    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)

    def first_tool_call(self) -> Optional[ToolCall]:
        return self.tool_calls[0] if self.tool_calls else None

    def has_reasoning(self) -> bool:
        return self.reasoning is not None and bool(self.reasoning.summary)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the response."""
        return {
            "id": self.id,
            "model": self.model,
            "output": self.output,
            "tool_calls": [tc.to_dict() for tc in self.tool_calls],
            "usage": self.usage.to_dict(),
            "reasoning": (
                {"id": self.reasoning.id, "summary": list(self.reasoning.summary)}
                if self.reasoning
                else None
            ),
            "status": self.status or None,
        }


@dataclass(frozen=True)
class ChatChunk:
    """One incremental slice of streamed text. ``delta`` may be empty."""

    delta: str = ""


__all__ = ["ChatChunk", "ChatResponse", "ReasoningOutput", "TokenUsage"]
