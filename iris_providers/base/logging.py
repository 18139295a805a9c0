"""Structured logging utilities for the SDK.

One shared ``iris`` logger is configured here; modules obtain children with
``get_logger(__name__)`` which propagate to it. Events are emitted as single
JSON payloads through ``log_event``; ``normalized_log_event`` guarantees the
canonical keys ``structured``, ``phase``, ``attempt``, ``error_code``,
``emitted`` and ``tokens`` so request and stream events aggregate uniformly.

Environment:
    IRIS_LOG_LEVEL: level name for the shared logger (default ``WARNING``).
    IRIS_LOG_JSON: ``0``/``false`` switches the console handler to plain text.

Message content and credentials are never passed to these helpers.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional, Union

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "iris"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_CONSOLE_ATTR = "_iris_console_handler"
_FILE_ATTR = "_iris_file_handler"
_INIT_ATTR = "_iris_initialized"


def _parse_level(value: Optional[str], default: int = logging.WARNING) -> int:
    """Parse a level name (``DEBUG`` .. ``CRITICAL``, ``WARN``) case-insensitively."""
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _env_json_mode() -> bool:
    return os.getenv("IRIS_LOG_JSON", "1").strip().lower() not in {"0", "false", "no", "off"}


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger() -> logging.Logger:
    """Initialize the shared ``iris`` logger once per process."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    if getattr(logger, _INIT_ATTR, False):
        return logger
    level = _parse_level(os.getenv("IRIS_LOG_LEVEL"))
    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter(_env_json_mode()))
    setattr(handler, _CONSOLE_ATTR, True)
    logger.handlers[:] = [h for h in logger.handlers if not getattr(h, _CONSOLE_ATTR, False)]
    logger.addHandler(handler)
    logger.propagate = False
    setattr(logger, _INIT_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME) -> logging.Logger:
    """Return the shared logger or a child of it.

    Names outside the ``iris`` hierarchy (e.g. ``iris_providers.client``) are
    mapped beneath it so every SDK logger shares one handler set.
    """
    base = _ensure_base_logger()
    if name == BASE_LOGGER_NAME:
        return base
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logger(
    *,
    level: Union[int, str, None] = None,
    file_path: Optional[str] = None,
    json_mode: Optional[bool] = None,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level:
        Numeric level or name. ``None`` keeps the current level.
    file_path:
        Attach (or retarget) a rotating file handler. ``None`` removes any
        file handler previously attached by this function.
    json_mode:
        Formatter for managed handlers. ``None`` keeps ``IRIS_LOG_JSON``.

    Handlers not attached by this module are left untouched.
    """
    logger = _ensure_base_logger()
    if level is not None:
        logger.setLevel(_parse_level(level, logger.level) if isinstance(level, str) else level)
    use_json = _env_json_mode() if json_mode is None else json_mode
    for h in logger.handlers:
        if getattr(h, _CONSOLE_ATTR, False) and json_mode is not None:
            h.setFormatter(_formatter(use_json))

    managed = [h for h in logger.handlers if getattr(h, _FILE_ATTR, False)]
    abs_path = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for h in managed:
        if abs_path is not None and getattr(h, "baseFilename", None) == abs_path:
            h.setFormatter(_formatter(use_json))
            continue
        logger.removeHandler(h)
        with contextlib.suppress(OSError):
            h.close()
    if abs_path is None or any(getattr(h, "baseFilename", None) == abs_path for h in logger.handlers):
        return logger

    os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    # 10MB x 5 backups
    fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    setattr(fh, _FILE_ATTR, True)
    fh.setFormatter(_formatter(use_json))
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: Optional[LogContext] = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit one structured event as a JSON message.

    Keys whose value is ``None`` are dropped unless ``keep_none`` is set.
    Nothing is serialized when ``level`` is disabled.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload.update(ctx.to_dict())
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _coerce_tokens(tokens: Any) -> Any:
    """Return token usage as a plain mapping (or ``None``)."""
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens)
    to_dict = getattr(tokens, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return {"value": repr(tokens)}


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: Optional[LogContext] = None,
    *,
    phase: str,
    attempt: Optional[int] = None,
    error_code: Optional[str] = None,
    emitted: Optional[bool] = None,
    tokens: Any = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit an event whose payload always carries the normalized key set.

    Required keys are present even when ``None``. ``extra_fields`` never
    overwrite a required key that already has a value; ``None`` extras are
    dropped.
    """
    base_fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "error_code": error_code,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    for k, v in extra_fields.items():
        if v is None:
            continue
        if k in base_fields and base_fields[k] is not None:
            continue
        base_fields[k] = v
    log_event(logger, event, ctx, level=level, keep_none=True, **base_fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "REQUIRED_NORMALIZED_KEYS",
    "configure_logger",
    "get_logger",
    "log_event",
    "normalized_log_event",
]
