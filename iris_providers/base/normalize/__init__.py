"""Error normalization helpers for provider bindings."""

from .errors import (
    REQUEST_ID_HEADERS,
    anthropic_style_error,
    cancelled_error,
    decode_error,
    error_from_response,
    network_error,
    openai_style_error,
    provider_error,
    request_id_from_headers,
    wrap_exception,
)

__all__ = [
    "REQUEST_ID_HEADERS",
    "anthropic_style_error",
    "cancelled_error",
    "decode_error",
    "error_from_response",
    "network_error",
    "openai_style_error",
    "provider_error",
    "request_id_from_headers",
    "wrap_exception",
]
