"""Pydantic DTOs used at the SDK boundary (tools, tool results, construction params)."""

from .function_call import FunctionCallDTO
from .provider_params import ProviderParams
from .tool_result import ToolResultDTO
from .tool_spec import Tool

__all__ = ["FunctionCallDTO", "ProviderParams", "Tool", "ToolResultDTO"]
