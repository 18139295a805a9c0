"""Typed parameter object for provider construction.

Purpose
-------
Capture the common construction parameters a provider binding needs so that
bindings share one validated contract. The API key is held as a
:class:`~iris_providers.base.secret.Secret`; plain strings are wrapped on
validation and the key serializes as ``[REDACTED]``.

Failure modes & side effects
----------------------------
- Pure data container: no I/O. Pydantic raises ``ValidationError`` for
  malformed inputs (e.g. a negative timeout).
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ..secret import REDACTED, Secret


class ProviderParams(BaseModel):
    """Common provider initialization parameters.

    Attributes
    ----------
    provider:
        Canonical provider id (e.g. ``"openai"``).
    api_key:
        Credential, stored as a ``Secret``.
    base_url:
        Optional override for the API base URL (proxies, gateways).
    timeout_seconds:
        Optional per-request timeout hint; must be positive when set.
    headers:
        Static HTTP headers added to every request.
    extra:
        Free-form provider-specific configuration.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    provider: str
    api_key: Secret = Field(default_factory=Secret)
    base_url: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    headers: Mapping[str, str] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("api_key", mode="before")
    @classmethod
    def _wrap_api_key(cls, v: Any) -> Secret:
        if v is None:
            return Secret()
        if isinstance(v, Secret):
            return v
        return Secret(str(v))

    @field_serializer("api_key")
    def _redact_api_key(self, v: Secret) -> str:
        return REDACTED


__all__ = ["ProviderParams"]
