"""One-class-per-file implementations backing ``iris_providers.base.models``."""

from .chat_request import BuiltInTool, ChatRequest, FileSearchResources, ReasoningEffort, ToolResources
from .chat_response import ChatChunk, ChatResponse, ReasoningOutput, TokenUsage
from .content_part import ContentPart, ImageDetail, InputFile, InputImage, InputText, ResolvedSource
from .feature import APIEndpoint, Feature
from .message import Message, Role
from .model_info import ModelInfo
from .tool_call import ToolCall, ToolResult

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
