"""Tests for stream configuration resolution from defaults and environment."""

from __future__ import annotations

import dataclasses

import pytest

from iris_providers.config import StreamConfig, get_stream_config, reset_stream_config
from iris_providers.config.defaults import EMPTY_ARGUMENTS_JSON, STREAM_BUFFER_SIZE, STREAM_POLL_INTERVAL_SECONDS


def test_defaults() -> None:
    cfg = get_stream_config()
    assert cfg.buffer_size == STREAM_BUFFER_SIZE
    assert cfg.poll_interval_seconds == STREAM_POLL_INTERVAL_SECONDS
    assert cfg.empty_arguments_json == EMPTY_ARGUMENTS_JSON


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IRIS_STREAM_BUFFER_SIZE", "0")
    monkeypatch.setenv("IRIS_STREAM_POLL_INTERVAL", "0.01")
    reset_stream_config()
    cfg = get_stream_config()
    assert cfg.buffer_size == 0
    assert cfg.poll_interval_seconds == 0.01


@pytest.mark.parametrize("size, interval", [("-3", "0"), ("many", "-1"), ("  ", "soon")])
def test_invalid_values_fall_back(monkeypatch: pytest.MonkeyPatch, size: str, interval: str) -> None:
    monkeypatch.setenv("IRIS_STREAM_BUFFER_SIZE", size)
    monkeypatch.setenv("IRIS_STREAM_POLL_INTERVAL", interval)
    reset_stream_config()
    cfg = get_stream_config()
    assert cfg.buffer_size == STREAM_BUFFER_SIZE
    assert cfg.poll_interval_seconds == STREAM_POLL_INTERVAL_SECONDS


def test_config_is_cached_until_reset(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_stream_config()
    monkeypatch.setenv("IRIS_STREAM_BUFFER_SIZE", "7")
    assert get_stream_config() is first
    reset_stream_config()
    assert get_stream_config().buffer_size == 7


def test_stream_config_is_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        StreamConfig().buffer_size = 1  # type: ignore[misc]
