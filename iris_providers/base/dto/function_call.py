"""DTO describing a decoded function call.

Produced by :meth:`ToolCall.as_function_call` once the raw argument text has
been parsed, so tool runners receive a validated, provider-agnostic shape.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class FunctionCallDTO(BaseModel):
    """A function call the model wants executed.

    Parameters
    ----------
    id:
        Provider call identifier, echoed back in the tool result.
    name:
        The function/tool name suggested by the model.
    arguments:
        Parsed JSON arguments. Usually an object, but any JSON value is kept.
    """

    id: str = ""
    name: str
    arguments: Any = Field(default_factory=dict)


__all__ = ["FunctionCallDTO"]
