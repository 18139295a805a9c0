"""Cancellation error type.

Defines the public ``CancelledError`` raised when an operation observes a
cancellation request. Providers translate it into a ``network`` kind
``ProviderError`` before it reaches callers.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    ``deadline`` is True when the cancellation was caused by an expired
    deadline rather than an explicit ``cancel()`` call.
    """

    def __init__(self, message: str = "operation cancelled", *, deadline: bool = False) -> None:
        super().__init__(message)
        self.deadline = deadline


__all__ = ["CancelledError"]
