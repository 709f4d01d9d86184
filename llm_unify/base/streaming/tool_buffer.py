"""Accumulator for tool calls whose arguments arrive in fragments.

Streaming services split a tool invocation across several wire events: the
name (and usually the call id) arrives first, then the JSON arguments in
pieces. Entries are keyed by the in-flight identifier the service uses
(content block index, output item id, or ``tool_calls[].index``) and a
completed :class:`ToolCall` is released only once the accumulated arguments
parse as one complete JSON value.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Set

from ..dto.tool_call import ToolCall, new_tool_call_id


@dataclass
class _PendingCall:
    call_id: Optional[str] = None
    name: Optional[str] = None
    fragments: List[str] = field(default_factory=list)

    @property
    def arguments(self) -> str:
        return "".join(self.fragments)


class ToolCallBuffer:
    """Per-stream side buffer of partially received tool calls."""

    def __init__(self) -> None:
        self._pending: Dict[Hashable, _PendingCall] = {}
        self._done: Set[Hashable] = set()

    def start(self, key: Hashable, *, call_id: Optional[str] = None, name: Optional[str] = None) -> None:
        """Open (or update) the entry for ``key`` with its id and name."""
        if key in self._done:
            return
        entry = self._pending.setdefault(key, _PendingCall())
        entry.call_id = call_id or entry.call_id
        entry.name = name or entry.name

    def append(
        self,
        key: Hashable,
        fragment: Optional[str],
        *,
        call_id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> List[ToolCall]:
        """Add an argument fragment; return the completed call if it now parses."""
        if key in self._done:
            return []
        self.start(key, call_id=call_id, name=name)
        if fragment:
            self._pending[key].fragments.append(fragment)
        return self._release(key)

    def replace(self, key: Hashable, arguments: Optional[str]) -> List[ToolCall]:
        """Set the full argument text for ``key`` (``*.done`` style events)."""
        entry = self._pending.get(key)
        if entry is None or key in self._done:
            return []
        entry.fragments = [arguments] if arguments else []
        return self._release(key)

    def close(self, key: Hashable) -> List[ToolCall]:
        """Finish ``key``; a call with no argument text completes with ``{}``."""
        entry = self._pending.get(key)
        if entry is None or key in self._done:
            return []
        if not entry.arguments.strip():
            entry.fragments = ["{}"]
        return self._release(key)

    def close_all(self) -> List[ToolCall]:
        """Finish every pending entry, in arrival order."""
        done: List[ToolCall] = []
        for key in list(self._pending):
            done.extend(self.close(key))
        return done

    def pending(self) -> int:
        return len(self._pending)

    def reset(self) -> None:
        self._pending.clear()
        self._done.clear()

    def _release(self, key: Hashable) -> List[ToolCall]:
        entry = self._pending[key]
        if not entry.name or not entry.arguments.strip():
            return []
        parsed = _try_parse(entry.arguments)
        if parsed is _INCOMPLETE:
            return []
        del self._pending[key]
        self._done.add(key)
        return [ToolCall(id=entry.call_id or new_tool_call_id(), name=entry.name, input=parsed)]


_INCOMPLETE = object()


def _try_parse(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return _INCOMPLETE


__all__ = ["ToolCallBuffer"]
