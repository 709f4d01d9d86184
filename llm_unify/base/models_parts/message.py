"""
Message DTO for conversation history.

Defines the immutable `Message` dataclass, the `Role` literal, and
`MessageContent` for text with ordered attachments. ``thinking`` and
``tool_call`` messages are provider-transparent: adapters that do not
distinguish them serialize both as ``assistant`` messages.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Tuple, Union

from ..dto.tool_call import ToolCall
from ..dto.tool_result import ToolResult
from .attachment import Attachment

Role = Literal["user", "system", "assistant", "thinking", "tool_call", "tool_result"]

ROLES: Tuple[str, ...] = ("user", "system", "assistant", "thinking", "tool_call", "tool_result")


@dataclass(frozen=True)
class MessageContent:
    """Text plus ordered attachments."""

    text: str
    attachments: Tuple[Attachment, ...] = field(default_factory=tuple)


Content = Union[str, MessageContent, ToolCall, ToolResult]


@dataclass(frozen=True)
class Message:
    """A single conversation entry.

    Attributes:
        role: One of :data:`ROLES`.
        content: Plain text, :class:`MessageContent`, a :class:`ToolCall`
            (``tool_call`` role), or a :class:`ToolResult` (``tool_result``
            role).
    """

    role: Role
    content: Content

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise ValueError(f"unknown message role {self.role!r}")
        if self.role == "tool_call" and not isinstance(self.content, ToolCall):
            raise ValueError("tool_call messages require ToolCall content")
        if self.role == "tool_result" and not isinstance(self.content, ToolResult):
            raise ValueError("tool_result messages require ToolResult content")

    @property
    def text(self) -> str:
        """Best-effort plain text view of the content."""
        c = self.content
        if isinstance(c, str):
            return c
        if isinstance(c, MessageContent):
            return c.text
        if isinstance(c, ToolResult):
            return c.content_text()
        return f"[tool_call {c.name}]"

    @property
    def attachments(self) -> Tuple[Attachment, ...]:
        return self.content.attachments if isinstance(self.content, MessageContent) else ()

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        c = self.content
        if isinstance(c, (ToolCall, ToolResult)):
            payload: Any = c.model_dump()
        elif isinstance(c, MessageContent):
            payload = {"text": c.text, "attachments": [a.to_dict() for a in c.attachments]}
        else:
            payload = c
        return {"role": self.role, "content": payload}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        """Build a message from ``{"role", "content"}`` (inverse of :meth:`to_dict`)."""
        role = data.get("role")
        content = data.get("content", "")
        if role == "tool_call" and isinstance(content, dict):
            content = ToolCall.model_validate(content)
        elif role == "tool_result" and isinstance(content, dict):
            content = ToolResult.model_validate(content)
        elif isinstance(content, dict):
            content = MessageContent(
                text=content.get("text", ""),
                attachments=tuple(Attachment(**a) for a in content.get("attachments", [])),
            )
        return cls(role=role, content=content)  # type: ignore[arg-type]


__all__ = ["Message", "MessageContent", "Role", "ROLES", "Content"]
