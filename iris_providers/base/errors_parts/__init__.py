"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `iris_providers.base.errors` for the stable surface.
"""

from .error_kind import ErrorKind
from .iris_error import (
    IrisError,
    ModelRequiredError,
    NoMessagesError,
    NotSupportedError,
    ToolArgsInvalidJSONError,
)
from .provider_error import ProviderError
from .classification import classify_exception, is_kind, kind_for_status

__all__ = [
    "ErrorKind",
    "IrisError",
    "ModelRequiredError",
    "NoMessagesError",
    "NotSupportedError",
    "ToolArgsInvalidJSONError",
    "ProviderError",
    "classify_exception",
    "is_kind",
    "kind_for_status",
]
