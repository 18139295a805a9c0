"""
Tool call and tool result DTOs.

A `ToolCall` is a model-initiated function invocation. ``arguments`` is kept as
the raw JSON text the model produced; every call observed by a caller carries
arguments that parse. A `ToolResult` is the caller's answer to one call,
matched back by ``call_id``.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:  # pragma: no cover
    from ..dto.function_call import FunctionCallDTO


@dataclass(frozen=True)
class ToolCall:
    """A function invocation requested by the model.

    Attributes:
        id: Provider-assigned call identifier.
        name: Function name.
        arguments: Raw JSON text of the arguments.
    """

    id: str
    name: str
    arguments: str = "{}"

    def decode(self) -> Any:
        """Return the parsed argument value."""
        return json.loads(self.arguments)

    def as_function_call(self) -> "FunctionCallDTO":
        """Convert to the validated ``FunctionCallDTO`` used by tool runners."""
        from ..dto.function_call import FunctionCallDTO

        return FunctionCallDTO(id=self.id, name=self.name, arguments=self.decode())

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "arguments": self.arguments}


@dataclass(frozen=True)
class ToolResult:
    """The result of executing a tool call, sent back to the model."""

    call_id: str
    content: Any
    is_error: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"call_id": self.call_id, "content": self.content, "is_error": self.is_error}


__all__ = ["ToolCall", "ToolResult"]
