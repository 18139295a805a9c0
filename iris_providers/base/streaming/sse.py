"""Server-sent events framing.

Pure helpers used by translators that consume ``httpx.Response.iter_lines()``
output: ``iter_sse_events`` groups raw lines into events, ``parse_data``
decodes a ``data:`` payload. No I/O.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Optional, Union

DONE_SENTINEL = "[DONE]"


@dataclass(frozen=True)
class SSEEvent:
    event: str = "message"
    data: str = ""
    id: str = ""

    @property
    def is_done(self) -> bool:
        return self.data.strip() == DONE_SENTINEL

    def json(self) -> Any:
        """Decode ``data`` as JSON (raises ``json.JSONDecodeError``)."""
        return json.loads(self.data)


def _text(line: Union[str, bytes]) -> str:
    return line.decode("utf-8") if isinstance(line, bytes) else line


def iter_sse_events(lines: Iterable[Union[str, bytes]]) -> Iterator[SSEEvent]:
    """Group raw SSE lines into events.

    Events are dispatched on a blank line (and at end of input). Multiple
    ``data:`` lines are joined with ``\\n``; comment lines (``:``) and
    unknown fields are ignored.
    """
    event = ""
    event_id = ""
    data: List[str] = []
    for raw in lines:
        line = _text(raw).rstrip("\r\n")
        if not line:
            if data:
                yield SSEEvent(event=event or "message", data="\n".join(data), id=event_id)
            event, data = "", []
            continue
        if line.startswith(":"):
            continue
        name, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]
        if name == "data":
            data.append(value)
        elif name == "event":
            event = value
        elif name == "id":
            event_id = value
    if data:
        yield SSEEvent(event=event or "message", data="\n".join(data), id=event_id)


def parse_data(line: Union[str, bytes]) -> Optional[Any]:
    """Decode a single ``data:`` line; ``None`` for blanks, comments and ``[DONE]``."""
    text = _text(line).strip()
    if not text or text.startswith(":"):
        return None
    if text.startswith("data:"):
        text = text[5:].strip()
    if text == DONE_SENTINEL:
        return None
    return json.loads(text)


__all__ = ["DONE_SENTINEL", "SSEEvent", "iter_sse_events", "parse_data"]
