"""Provider-neutral stream frame produced by a binding's translator.

A translator maps one native frame (SSE event, SDK chunk) to at most one
``ChatStreamEvent``. All fields are optional; the producer applies whatever is
set, in this order: metadata, usage, reasoning, tool-call fragments, error,
text delta, finish.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..models import TokenUsage
from ..tools import ToolCallDelta


@dataclass
class ChatStreamEvent:
    """One translated stream frame.

    Fields:
      delta: text to deliver to the caller (may be empty)
      tool_calls: tool-call fragments for the assembler
      usage: token usage, usually on the last frame
      reasoning: reasoning-summary fragments
      reasoning_id: id of the reasoning item, when reported
      response_id: provider response id
      model: model name reported by the provider
      status: provider status string for the final summary
      finish: True when the provider signalled the end of the response
      error: failure reported in-band by the provider
    """

    delta: str = ""
    tool_calls: List[ToolCallDelta] = field(default_factory=list)
    usage: Optional[TokenUsage] = None
    reasoning: List[str] = field(default_factory=list)
    reasoning_id: str = ""
    response_id: str = ""
    model: str = ""
    status: str = ""
    finish: bool = False
    error: Optional[Exception] = None

    def is_error(self) -> bool:
        return self.error is not None


__all__ = ["ChatStreamEvent"]
