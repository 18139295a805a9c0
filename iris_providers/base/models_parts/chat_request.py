"""
ChatRequest DTO for provider-agnostic chat invocations.

Provider bindings map this normalized request shape to their wire format. The
request carries model selection, messages, sampling knobs, the tool catalog and
the Responses-API extras (instructions, built-in tools, response chaining,
truncation, tool resources).
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .message import Message

if TYPE_CHECKING:  # pragma: no cover
    from ..dto.tool_spec import Tool


class ReasoningEffort(str, Enum):
    """How much internal computation the model should spend before answering.

    An unspecified effort is represented by ``None`` on the request.
    """

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    XHIGH = "xhigh"


@dataclass(frozen=True)
class BuiltInTool:
    """A provider-hosted tool such as web search or code interpreter."""

    type: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type}


@dataclass
class FileSearchResources:
    vector_store_ids: List[str] = field(default_factory=list)


@dataclass
class ToolResources:
    """Resources made available to built-in tools."""

    file_search: Optional[FileSearchResources] = None

    def to_dict(self) -> Dict[str, Any]:
        if self.file_search is None:
            return {}
        return {"file_search": {"vector_store_ids": list(self.file_search.vector_store_ids)}}


@dataclass
class ChatRequest:
    """Normalized chat request sent to providers.

    Attributes:
        model: Target model identifier.
        messages: Ordered list of chat `Message` instances.
        temperature: Sampling temperature when supported.
        max_tokens: Maximum completion tokens.
        tools: Tool catalog offered to the model.
        reasoning_effort: Optional reasoning hint; ``None`` is unspecified.
        instructions: System-level instructions (Responses API).
        builtin_tools: Provider-hosted tools.
        previous_response_id: Chains this request onto an earlier response.
        truncation: Truncation mode, e.g. ``"auto"``.
        tool_resources: Resources for built-in tools.

    Methods:
        snapshot: Independent copy handed to a provider.
        to_dict: Return a JSON-serializable dictionary of the request.
    """

    model: str
    messages: List[Message] = field(default_factory=list)
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    tools: List["Tool"] = field(default_factory=list)
    reasoning_effort: Optional[ReasoningEffort] = None
    instructions: str = ""
    builtin_tools: List[BuiltInTool] = field(default_factory=list)
    previous_response_id: str = ""
    truncation: str = ""
    tool_resources: Optional[ToolResources] = None

    def snapshot(self) -> "ChatRequest":
        """Return a deep copy so later builder mutation cannot leak in."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the request."""
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "tools": [t.model_dump() for t in self.tools],
            "reasoning_effort": self.reasoning_effort.value if self.reasoning_effort else None,
            "instructions": self.instructions or None,
            "builtin_tools": [b.to_dict() for b in self.builtin_tools],
            "previous_response_id": self.previous_response_id or None,
            "truncation": self.truncation or None,
            "tool_resources": self.tool_resources.to_dict() if self.tool_resources else None,
        }


__all__ = [
    "BuiltInTool",
    "ChatRequest",
    "FileSearchResources",
    "ReasoningEffort",
    "ToolResources",
]
