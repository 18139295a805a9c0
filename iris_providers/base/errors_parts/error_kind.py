"""
Normalized error kinds (closed taxonomy).

Defines the `ErrorKind` enumeration every failure surfaced by the SDK maps to.
Values are lowercase snake_case and are considered a stable public contract for
logging, analytics and identity matching via :func:`is_kind`.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Enumerated error kinds representing failure categories."""

    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    SERVER = "server"
    NETWORK = "network"
    DECODE = "decode"
    NOT_SUPPORTED = "not_supported"
    MODEL_REQUIRED = "model_required"
    NO_MESSAGES = "no_messages"
    TOOL_ARGS_INVALID_JSON = "tool_args_invalid_json"


__all__ = ["ErrorKind"]
