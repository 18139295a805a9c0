"""
Structured provider error exception type.

Wraps provider-specific failures with a normalized `ErrorKind` while keeping
the vendor's own diagnostics (HTTP status, request id, error code string) for
support tickets and structured logging.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from .error_kind import ErrorKind
from .iris_error import IrisError


class ProviderError(IrisError):
    """Represents a failure reported by (or while talking to) a provider.

    Attributes:
        provider: Provider id where the error originated (e.g., ``"openai"``).
        message: Human-readable error message.
        kind: Normalized :class:`ErrorKind` classification.
        status: HTTP status code, ``0`` when the failure has none.
        request_id: Provider request identifier, empty when unknown.
        code: Provider-specific error code or type string.
        raw: Optional original exception for diagnostics.
    """

    def __init__(
        self,
        *,
        provider: str,
        message: str,
        kind: ErrorKind,
        status: int = 0,
        request_id: str = "",
        code: str = "",
        raw: Optional[BaseException] = None,
    ) -> None:
        self.provider = provider
        self.message = message
        self.kind = kind
        self.status = status
        self.request_id = request_id
        self.code = code
        self.raw = raw
        super().__init__(message)
        if raw is not None and self.__cause__ is None:
            self.__cause__ = raw

    def __str__(self) -> str:
        base = f"{self.provider}: {self.message} (status={self.status}, code={self.code}"
        if self.request_id:
            return f"{base}, request_id={self.request_id})"
        return base + ")"

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"ProviderError(provider={self.provider!r}, kind={self.kind.value!r}, "
            f"status={self.status}, code={self.code!r}, request_id={self.request_id!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable view suitable for structured logs."""
        return {
            "provider": self.provider,
            "kind": self.kind.value,
            "status": self.status,
            "request_id": self.request_id or None,
            "code": self.code or None,
            "message": self.message,
        }


__all__ = ["ProviderError"]
