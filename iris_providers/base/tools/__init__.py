"""Tool-call helpers shared by streaming provider bindings."""

from .assembler import ToolCallAssembler, ToolCallDelta

__all__ = ["ToolCallAssembler", "ToolCallDelta"]
