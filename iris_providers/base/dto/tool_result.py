"""Tool execution result DTO.

Callers that run tools outside the SDK can describe the outcome with
``ToolResultDTO`` and convert it into the request-level ``ToolResult`` sent
back to the model.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field

from ..models_parts.tool_call import ToolResult


class ToolResultDTO(BaseModel):
    """Result envelope for a tool invocation.

    Attributes:
        call_id: The tool call being answered.
        ok: True when the tool executed successfully.
        content: Result payload (text or JSON-like dict).
        error: Human-readable error string when ``ok`` is False.
        metadata: Free-form metadata; never sent to the model.
    """

    call_id: str
    ok: bool = True
    content: Optional[Union[str, Dict[str, Any]]] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def to_tool_result(self) -> ToolResult:
        if self.ok:
            return ToolResult(call_id=self.call_id, content=self.content)
        return ToolResult(call_id=self.call_id, content=self.error or "tool failed", is_error=True)


__all__ = ["ToolResultDTO"]
