"""Per-stream buffers fed by adapter chunk parsers.

The accumulator runs every capability parser over each decoded wire event,
appends the results to append-only buffers (content, thinking, tool calls,
usage) and records the order in which the categories first appeared so the
finalized conversation messages mirror decode order.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from ..dto.tool_call import ToolCall
from ..models import TokenUsage
from .events import StreamEvent

if TYPE_CHECKING:  # pragma: no cover
    from ..adapter import ProviderAdapter

# decode-order markers
THINKING = "thinking"
CONTENT = "content"
TOOL_CALL = "tool_call"


class StreamAccumulator:
    def __init__(self, adapter: "ProviderAdapter") -> None:
        self._adapter = adapter
        self._content: List[str] = []
        self._thinking: List[str] = []
        self.tool_calls: List[ToolCall] = []
        self.usage: Optional[TokenUsage] = None
        self.order: List[Tuple[str, Any]] = []
        self.emitted = 0

    @property
    def content(self) -> str:
        return "".join(self._content)

    @property
    def thinking(self) -> str:
        return "".join(self._thinking)

    def ingest(self, wire_event: Any) -> List[StreamEvent]:
        """Parse one wire event into canonical events, updating the buffers."""
        out: List[StreamEvent] = []
        thinking = self._adapter.parse_thinking_chunk(wire_event)
        if thinking:
            if not self._thinking:
                self.order.append((THINKING, None))
            self._thinking.append(thinking)
            out.append(StreamEvent("thinking", thinking))

        content = self._adapter.parse_content_chunk(wire_event)
        if content:
            if not self._content:
                self.order.append((CONTENT, None))
            self._content.append(content)
            out.append(StreamEvent("content", content))

        for call in self._adapter.parse_tool_calls_chunk(wire_event):
            self.tool_calls.append(call)
            self.order.append((TOOL_CALL, call))
            out.append(StreamEvent("tool_calls", call))

        usage = self._adapter.parse_usage(wire_event)
        if usage is not None:
            self.usage = usage if self.usage is None else self.usage.merge(usage)
            out.append(StreamEvent("usage", usage))

        self.emitted += len(out)
        return out


__all__ = ["StreamAccumulator", "THINKING", "CONTENT", "TOOL_CALL"]
