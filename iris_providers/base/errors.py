"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``iris_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_kind import ErrorKind
from .errors_parts.iris_error import (
    IrisError,
    ModelRequiredError,
    NoMessagesError,
    NotSupportedError,
    ToolArgsInvalidJSONError,
)
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_exception, is_kind, kind_for_status

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
