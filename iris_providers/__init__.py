"""iris_providers package

Provider-agnostic core of a multi-provider LLM client SDK.

Public API (re-exported):
    - Version: ``__version__``
    - Client: :class:`Client`, :func:`new_client`, :class:`ChatBuilder`
    - Data model: :class:`ChatRequest`, :class:`ChatResponse`,
      :class:`Message`, :class:`Tool`, :class:`ToolCall`, ...
    - Errors: :class:`IrisError`, :class:`ProviderError`, :class:`ErrorKind`,
      :func:`is_kind`
    - Streaming: :class:`ChatStream`
    - Cancellation: :class:`CancellationToken`

Concrete vendor bindings live outside this package and implement
:class:`Provider`. :class:`iris_providers.mock.MockProvider` is a
fixture-driven binding for offline use.
"""

from .base import (
    BaseProvider,
    CancellationToken,
    ChatChunk,
    ChatRequest,
    ChatResponse,
    ChatStream,
    ErrorKind,
    Feature,
    InputFile,
    InputImage,
    InputText,
    IrisError,
    Message,
    ModelInfo,
    ModelRequiredError,
    NoMessagesError,
    NotSupportedError,
    Provider,
    ProviderError,
    ProviderParams,
    ReasoningEffort,
    Role,
    Secret,
    TokenUsage,
    Tool,
    ToolArgsInvalidJSONError,
    ToolCall,
    ToolResult,
    detect_capabilities,
    is_kind,
)
from .base.logging import configure_logger, get_logger
from .base.telemetry import LoggingTelemetryHook, NoopTelemetryHook, TelemetryHook
from .client import ChatBuilder, Client, MessageBuilder, new_client

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "BaseProvider",
    "CancellationToken",
    "ChatBuilder",
    "ChatChunk",
    "ChatRequest",
    "ChatResponse",
    "ChatStream",
    "Client",
    "ErrorKind",
    "Feature",
    "InputFile",
    "InputImage",
    "InputText",
    "IrisError",
    "LoggingTelemetryHook",
    "Message",
    "MessageBuilder",
    "ModelInfo",
    "ModelRequiredError",
    "NoMessagesError",
    "NoopTelemetryHook",
    "NotSupportedError",
    "Provider",
    "ProviderError",
    "ProviderParams",
    "ReasoningEffort",
    "Role",
    "Secret",
    "TelemetryHook",
    "TokenUsage",
    "Tool",
    "ToolArgsInvalidJSONError",
    "ToolCall",
    "ToolResult",
    "configure_logger",
    "detect_capabilities",
    "get_logger",
    "is_kind",
    "new_client",
]
