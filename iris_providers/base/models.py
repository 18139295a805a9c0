"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``iris_providers.base.models_parts`` so callers import from a single place.
"""

from .models_parts.chat_request import (
    BuiltInTool,
    ChatRequest,
    FileSearchResources,
    ReasoningEffort,
    ToolResources,
)
from .models_parts.chat_response import ChatChunk, ChatResponse, ReasoningOutput, TokenUsage
from .models_parts.content_part import (
    ContentPart,
    ImageDetail,
    InputFile,
    InputImage,
    InputText,
    ResolvedSource,
)
from .models_parts.feature import APIEndpoint, Feature
from .models_parts.message import Message, Role
from .models_parts.model_info import ModelInfo
from .models_parts.tool_call import ToolCall, ToolResult

ModelID = str

__all__ = [
    "APIEndpoint",
    "BuiltInTool",
    "ChatChunk",
    "ChatRequest",
    "ChatResponse",
    "ContentPart",
    "Feature",
    "FileSearchResources",
    "ImageDetail",
    "InputFile",
    "InputImage",
    "InputText",
    "Message",
    "ModelID",
    "ModelInfo",
    "ReasoningEffort",
    "ReasoningOutput",
    "ResolvedSource",
    "Role",
    "TokenUsage",
    "ToolCall",
    "ToolResources",
    "ToolResult",
]
