"""
ChatResponse DTO for extended results.

Bundles the final content with thinking, tool calls, usage/cost, and a
snapshot of the conversation taken right after finalization.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..dto.tool_call import ToolCall
from .message import Message
from .usage import Usage


@dataclass
class ChatResponse:
    """Structured result of an extended ``send()``.

    Attributes:
        service: Service key that produced the response.
        model: Model used for the request.
        content: Raw final assistant text.
        thinking: Reasoning trace text (empty when none).
        tool_calls: Tool calls in decode order.
        usage: Expanded usage, or ``None`` when the service reported none.
        messages: Conversation snapshot after the finalized messages were
            appended.
        options: The wire options the request was built from.
        parsed: Post-processed content when ``json``/``parser`` was set,
            otherwise the raw content.
    """

    service: str
    model: str
    content: str
    thinking: str = ""
    tool_calls: List[ToolCall] = field(default_factory=list)
    usage: Optional[Usage] = None
    messages: List[Message] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)
    parsed: Any = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dictionary representation."""
        return {
            "service": self.service,
            "model": self.model,
            "content": self.content,
            "thinking": self.thinking,
            "tool_calls": [t.model_dump() for t in self.tool_calls],
            "usage": self.usage.to_dict() if self.usage else None,
            "messages": [m.to_dict() for m in self.messages],
        }


__all__ = ["ChatResponse"]
