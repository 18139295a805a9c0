"""Tests for the server-sent events framing helpers."""

from __future__ import annotations

import json

import pytest

from iris_providers.base.streaming import DONE_SENTINEL, SSEEvent, iter_sse_events, parse_data


def test_events_split_on_blank_lines() -> None:
    lines = [
        ": keep-alive",
        "event: response.output_text.delta",
        "id: 7",
        'data: {"delta": "Hel"}',
        "",
        'data: {"delta": "lo"}',
        "",
        "data: [DONE]",
    ]
    events = list(iter_sse_events(lines))
    assert len(events) == 3
    assert events[0].event == "response.output_text.delta"
    assert events[0].id == "7"
    assert events[0].json() == {"delta": "Hel"}
    assert events[1].event == "message"
    assert events[2].is_done


def test_multiline_data_is_joined() -> None:
    (evt,) = iter_sse_events([b"data: {\"a\":", b"data: 1}", b""])
    assert evt.data == '{"a":\n1}'
    assert evt.json() == {"a": 1}


def test_parse_data() -> None:
    assert parse_data('data: {"x": 1}') == {"x": 1}
    assert parse_data("") is None
    assert parse_data(": ping") is None
    assert parse_data(f"data: {DONE_SENTINEL}") is None
    with pytest.raises(json.JSONDecodeError):
        parse_data("data: {broken")


def test_sse_event_defaults() -> None:
    assert SSEEvent().event == "message"
    assert not SSEEvent(data="{}").is_done
