"""Canonical stream events.

Every wire event a service sends is reduced to zero or more
:class:`StreamEvent` values. ``payload`` is a text fragment for ``content``
and ``thinking``, a completed :class:`ToolCall` for ``tool_calls`` and a
:class:`TokenUsage` report for ``usage``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

StreamEventType = Literal["content", "thinking", "tool_calls", "usage"]


@dataclass(frozen=True)
class StreamEvent:
    type: StreamEventType
    payload: Any

    def is_text(self) -> bool:
        return self.type in ("content", "thinking")


__all__ = ["StreamEvent", "StreamEventType"]
