"""
Opaque holder for credentials.

Every stringification path (``str``, ``repr``, ``format``, JSON via the shared
log formatter or pydantic) yields ``[REDACTED]``. The raw value is only
reachable through :meth:`Secret.expose`.
"""
from __future__ import annotations

import hmac
from typing import Any

REDACTED = "[REDACTED]"


class Secret:
    __slots__ = ("_value",)

    def __init__(self, value: str = "") -> None:
        object.__setattr__(self, "_value", value or "")

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Secret is immutable")

    def expose(self) -> str:
        """Return the raw secret value. Never log the result."""
        return self._value

    def is_empty(self) -> bool:
        return not self._value

    def __str__(self) -> str:
        return REDACTED

    def __repr__(self) -> str:
        return f"Secret({REDACTED})"

    def __format__(self, format_spec: str) -> str:
        return format(REDACTED, format_spec)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Secret):
            return NotImplemented
        return hmac.compare_digest(self._value.encode(), other._value.encode())

    def __hash__(self) -> int:
        return hash(Secret)

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __reduce__(self):
        raise TypeError("Secret values cannot be pickled")

    def __deepcopy__(self, memo: Any) -> "Secret":
        return self


__all__ = ["REDACTED", "Secret"]
