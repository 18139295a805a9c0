"""
Message DTO used across providers.

Defines the `Message` dataclass and the `Role` enum. A message carries plain
``content``, structured ``parts`` (which take precedence when both are set),
assistant ``tool_calls`` being replayed into a conversation, or
``tool_results`` answering them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from .content_part import ContentPart, InputText
from .tool_call import ToolCall, ToolResult


class Role(str, Enum):
    """Sender role of a chat message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass
class Message:
    """A chat message used by provider-agnostic DTOs.

    Attributes:
        role: The role of the message author.
        content: Plain text content.
        parts: Structured content parts; when non-empty they win over
            ``content``.
        tool_calls: Tool calls made by an assistant message.
        tool_results: Results for previously issued tool calls.

    Methods:
        is_structured: True when ``parts`` is non-empty.
        has_payload: True when the message carries anything a provider can send.
        text_or_joined: Flattened text view for logging.
    """

    role: Role
    content: str = ""
    parts: List[ContentPart] = field(default_factory=list)
    tool_calls: List[ToolCall] = field(default_factory=list)
    tool_results: List[ToolResult] = field(default_factory=list)

    def is_structured(self) -> bool:
        """Return True if the message carries structured parts."""
        return bool(self.parts)

    def has_payload(self) -> bool:
        return bool(self.content or self.parts or self.tool_calls or self.tool_results)

    def text_or_joined(self) -> str:
        """Return a flattened string representation of the message content.

        Text parts are joined with newlines; non-text parts are rendered as
        bracketed type tokens for compact logging.
        """
        if not self.parts:
            return self.content
        out: List[str] = []
        for p in self.parts:
            if isinstance(p, InputText):
                out.append(p.text)
            else:
                out.append(f"[{p.content_type}]")
        return "\n".join(out)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"role": self.role.value}
        if self.parts:
            data["parts"] = [p.to_dict() for p in self.parts]
        else:
            data["content"] = self.content
        if self.tool_calls:
            data["tool_calls"] = [tc.to_dict() for tc in self.tool_calls]
        if self.tool_results:
            data["tool_results"] = [tr.to_dict() for tr in self.tool_results]
        return data


__all__ = ["Message", "Role"]
