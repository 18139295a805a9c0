"""Pytest configuration for the iris_providers test suite.

Shared fixtures:

- ``isolate_stream_config`` (autouse): clears the cached ``StreamConfig`` and
  the ``IRIS_STREAM_*`` overrides around every test.
- ``mock_provider`` / ``client``: a fixture-backed provider and a client bound
  to it.
- ``log_records``: captures events emitted on the shared ``iris`` logger,
  which does not propagate to the root logger (so ``caplog`` cannot see it).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List

import pytest

from iris_providers.base.logging import BASE_LOGGER_NAME, get_logger
from iris_providers.client import Client
from iris_providers.config import reset_stream_config
from iris_providers.mock import MockProvider


class ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def events(self, name: str = "") -> List[Dict[str, Any]]:
        """Decode JSON payloads, optionally filtered by ``event`` name."""
        out = []
        for record in self.records:
            msg = record.getMessage()
            if not msg.startswith("{"):
                continue
            payload = json.loads(msg)
            if not name or payload.get("event") == name:
                out.append(payload)
        return out

    def text(self) -> str:
        return "\n".join(r.getMessage() for r in self.records)


@pytest.fixture(autouse=True)
def isolate_stream_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("IRIS_STREAM_BUFFER_SIZE", raising=False)
    monkeypatch.delenv("IRIS_STREAM_POLL_INTERVAL", raising=False)
    reset_stream_config()
    yield
    reset_stream_config()


@pytest.fixture()
def log_records() -> Iterator[ListHandler]:
    """Attach a capturing handler to the ``iris`` logger at DEBUG level."""
    logger = get_logger(BASE_LOGGER_NAME)
    handler = ListHandler()
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    yield handler
    logger.removeHandler(handler)
    logger.setLevel(previous)


@pytest.fixture()
def mock_provider() -> MockProvider:
    """Yield a ``MockProvider`` configured with the bundled fixtures."""
    return MockProvider()


@pytest.fixture()
def client(mock_provider: MockProvider) -> Client:
    return Client(mock_provider)
