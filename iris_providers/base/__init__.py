"""
Providers Base Package

Exports the provider-agnostic contracts used by the client layer and by
provider bindings:

- Models: request/response data model and capability enums
- Interfaces: the ``Provider`` protocol and optional extension protocols
- Errors: the closed error taxonomy
- Streaming: the three-channel ``ChatStream`` and its producer adapter
- Cancellation: cooperative cancellation tokens
"""

from .cancellation import CancellationToken, CancelledError
from .capabilities import BaseProvider, detect_capabilities
from .dto import ProviderParams, Tool
from .errors import (
    ErrorKind,
    IrisError,
    ModelRequiredError,
    NoMessagesError,
    NotSupportedError,
    ProviderError,
    ToolArgsInvalidJSONError,
    is_kind,
)
from .interfaces import (
    ContextualizedEmbedder,
    Embedder,
    FileManager,
    ImageGenerator,
    Provider,
    Reranker,
)
from .models import (
    ChatChunk,
    ChatRequest,
    ChatResponse,
    Feature,
    InputFile,
    InputImage,
    InputText,
    Message,
    ModelInfo,
    ReasoningEffort,
    Role,
    TokenUsage,
    ToolCall,
    ToolResult,
)
from .secret import Secret
from .streaming import BaseStreamingAdapter, ChatStream, ChatStreamEvent, StreamChannel
from .tools import ToolCallAssembler, ToolCallDelta

__all__ = [
    # Models
    "ChatChunk",
    "ChatRequest",
    "ChatResponse",
    "Feature",
    "InputFile",
    "InputImage",
    "InputText",
    "Message",
    "ModelInfo",
    "ReasoningEffort",
    "Role",
    "TokenUsage",
    "ToolCall",
    "ToolResult",
    "Tool",
    "ProviderParams",
    "Secret",
    # Interfaces
    "Provider",
    "ImageGenerator",
    "Embedder",
    "ContextualizedEmbedder",
    "Reranker",
    "FileManager",
    "BaseProvider",
    "detect_capabilities",
    # Errors
    "ErrorKind",
    "IrisError",
    "ProviderError",
    "ModelRequiredError",
    "NoMessagesError",
    "NotSupportedError",
    "ToolArgsInvalidJSONError",
    "is_kind",
    # Streaming
    "BaseStreamingAdapter",
    "ChatStream",
    "ChatStreamEvent",
    "StreamChannel",
    "ToolCallAssembler",
    "ToolCallDelta",
    # Cancellation
    "CancellationToken",
    "CancelledError",
]
