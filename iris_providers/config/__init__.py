"""Configuration layer for stream plumbing.

Resolution order:
    1. Built-in defaults (``config/defaults.py``)
    2. Environment overrides, read on first use and cached per process:
        IRIS_STREAM_BUFFER_SIZE      positive int; ``0`` means unbounded
        IRIS_STREAM_POLL_INTERVAL    positive float seconds

Invalid values fall back to the default. ``reset_stream_config()`` drops the
cache so tests can change the environment.

Public API
----------
* StreamConfig
* get_stream_config() -> StreamConfig
* reset_stream_config() -> None
"""
from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from typing import Optional

from .defaults import EMPTY_ARGUMENTS_JSON, STREAM_BUFFER_SIZE, STREAM_POLL_INTERVAL_SECONDS


@dataclass(frozen=True)
class StreamConfig:
    """Normalized stream settings.

    Attributes:
        buffer_size: Deltas channel capacity (``0`` = unbounded).
        poll_interval_seconds: Wait slice for cancellation checks.
        empty_arguments_json: Substitute for empty tool-call argument buffers.
    """

    buffer_size: int = STREAM_BUFFER_SIZE
    poll_interval_seconds: float = STREAM_POLL_INTERVAL_SECONDS
    empty_arguments_json: str = EMPTY_ARGUMENTS_JSON


_CACHED: Optional[StreamConfig] = None
_LOCK = threading.Lock()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    return val if val >= 0 else default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_stream_config() -> StreamConfig:
    """Return the process-cached ``StreamConfig``."""
    global _CACHED  # noqa: PLW0603 - module cache
    with _LOCK:
        if _CACHED is None:
            _CACHED = StreamConfig(
                buffer_size=_env_int("IRIS_STREAM_BUFFER_SIZE", STREAM_BUFFER_SIZE),
                poll_interval_seconds=_env_float("IRIS_STREAM_POLL_INTERVAL", STREAM_POLL_INTERVAL_SECONDS),
            )
        return _CACHED


def reset_stream_config() -> None:
    global _CACHED  # noqa: PLW0603 - module cache
    with _LOCK:
        _CACHED = None


__all__ = ["StreamConfig", "get_stream_config", "reset_stream_config"]
