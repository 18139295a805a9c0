"""Incremental tool-call assembly for streaming providers.

Vendors stream function-call arguments as JSON text fragments keyed by an
index (OpenAI-style) or by a content block (Anthropic-style). The
``ToolCallAssembler`` buffers those fragments per index and turns them into
``ToolCall`` values once the stream ends.

Per index the state machine is ``absent -> open -> finalized``:

* ``start_call`` opens a slot. Re-opening an index always restarts its
  buffer, so fragments concatenate from the latest open (last writer wins).
* ``add_fragment`` applies OpenAI-style deltas. A delta repeating the open
  call's id (or carrying no id) only fills in the name and extends the
  buffer; a different id re-opens the slot.
* ``add_arguments`` appends to an open slot. Fragments for an absent index
  and empty fragments are ignored.
* ``finalize`` validates every buffer and returns the calls in ascending
  index order, or raises ``ToolArgsInvalidJSONError`` and returns nothing.

One assembler belongs to exactly one streaming session and is not shared
between threads.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..errors import ToolArgsInvalidJSONError
from ..models import ToolCall


@dataclass(frozen=True)
class ToolCallDelta:
    """One streamed tool-call fragment.

    ``id`` and ``name`` are set on the fragment that opens the call; later
    fragments usually carry only ``arguments``.
    """

    index: int
    id: str = ""
    name: str = ""
    arguments: str = ""


@dataclass
class _Slot:
    id: str
    name: str
    buf: List[str] = field(default_factory=list)


class ToolCallAssembler:
    """Buffers streamed tool-call fragments and validates them on finalize."""

    def __init__(self, empty_arguments_json: str = "{}") -> None:
        self._empty = empty_arguments_json
        self._slots: Dict[int, _Slot] = {}
        self._finalized = False

    def _check_open(self) -> None:
        if self._finalized:
            raise RuntimeError("tool call assembler already finalized; call reset() first")

    def start_call(self, index: int, id: str = "", name: str = "") -> None:
        self._check_open()
        self._slots[index] = _Slot(id=id, name=name)

    def add_arguments(self, index: int, fragment: str) -> None:
        self._check_open()
        if not fragment:
            return
        slot = self._slots.get(index)
        if slot is None:
            return
        slot.buf.append(fragment)

    def add_fragment(self, delta: ToolCallDelta) -> None:
        """Apply an OpenAI-style fragment that may open and extend a call."""
        self._check_open()
        slot = self._slots.get(delta.index)
        if slot is not None and (not delta.id or not slot.id or delta.id == slot.id):
            if delta.id and not slot.id:
                slot.id = delta.id
            if delta.name:
                slot.name = delta.name
        elif delta.id or delta.name:
            self.start_call(delta.index, delta.id, delta.name)
        self.add_arguments(delta.index, delta.arguments)

    def finalize(self) -> List[ToolCall]:
        """Return assembled calls in ascending index order.

        Raises:
            ToolArgsInvalidJSONError: a non-empty buffer is not valid JSON. No
                calls are returned in that case.
        """
        self._finalized = True
        calls: List[ToolCall] = []
        for index in sorted(self._slots):
            slot = self._slots[index]
            args = "".join(slot.buf)
            if not args:
                args = self._empty
            else:
                try:
                    json.loads(args)
                except ValueError as exc:
                    raise ToolArgsInvalidJSONError(
                        f"tool args invalid json: call {slot.id or index} ({slot.name}): {exc}"
                    ) from exc
            calls.append(ToolCall(id=slot.id, name=slot.name, arguments=args))
        return calls

    def reset(self) -> None:
        self._slots.clear()
        self._finalized = False

    def open_indexes(self) -> List[int]:
        return sorted(self._slots)

    def arguments_for(self, index: int) -> Optional[str]:
        """Return the raw buffered text for ``index`` (``None`` when absent)."""
        slot = self._slots.get(index)
        return "".join(slot.buf) if slot is not None else None

    @property
    def finalized(self) -> bool:
        return self._finalized

    def __len__(self) -> int:
        return len(self._slots)


__all__ = ["ToolCallAssembler", "ToolCallDelta"]
