"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose stable, provider-agnostic cancellation constructs via the canonical
``iris_providers.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is the per-call cancellation handle accepted by every
  provider entry point; deadlines are cancellation with a clock attached.
- ``CancelledError`` is raised by operations that observe a cancellation
  request. Providers surface it to callers as a ``network`` kind
  ``ProviderError``.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken, DEADLINE_REASON

__all__ = ["CancellationToken", "CancelledError", "DEADLINE_REASON"]
