"""
Append-only conversation history.

A `Conversation` exclusively owns its message list. It is mutated only by the
explicit append helpers below and by the completion engine's finalization
step; messages are immutable once appended. One in-flight request per
conversation is the supported contract.
"""
from __future__ import annotations

from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Union, overload

from ..dto.tool_call import ToolCall
from ..dto.tool_result import ToolResult
from .attachment import Attachment
from .message import Message, MessageContent

ConversationInput = Union[None, str, "Conversation", Sequence[Union[Message, Mapping[str, Any]]]]


class Conversation:
    """Ordered, append-only message history for one logical exchange."""

    def __init__(self, messages: Optional[Iterable[Message]] = None) -> None:
        self._messages: List[Message] = list(messages or ())

    @classmethod
    def from_input(cls, value: ConversationInput) -> "Conversation":
        """Create a conversation from a prompt, a message sequence, or nothing.

        A string is sugar for a single user message. Mappings are converted
        with :meth:`Message.from_dict`. An existing conversation is copied.
        """
        if value is None:
            return cls()
        if isinstance(value, str):
            convo = cls()
            convo.user(value)
            return convo
        if isinstance(value, Conversation):
            return cls(value.messages)
        return cls(m if isinstance(m, Message) else Message.from_dict(dict(m)) for m in value)

    # ----- Append helpers -----
    def append(self, message: Message) -> Message:
        self._messages.append(message)
        return message

    def user(self, text: str, attachments: Optional[Sequence[Attachment]] = None) -> Message:
        content: Union[str, MessageContent] = (
            MessageContent(text=text, attachments=tuple(attachments)) if attachments else text
        )
        return self.append(Message(role="user", content=content))

    def system(self, text: str) -> Message:
        return self.append(Message(role="system", content=text))

    def assistant(self, text: str) -> Message:
        return self.append(Message(role="assistant", content=text))

    def thinking(self, text: str) -> Message:
        return self.append(Message(role="thinking", content=text))

    def tool_call(self, call: ToolCall) -> Message:
        return self.append(Message(role="tool_call", content=call))

    def tool_result(self, result: ToolResult) -> Message:
        return self.append(Message(role="tool_result", content=result))

    # ----- Read access -----
    @property
    def messages(self) -> List[Message]:
        """Snapshot copy of the history; mutating it does not affect the conversation."""
        return list(self._messages)

    def snapshot(self) -> List[Message]:
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    @overload
    def __getitem__(self, index: int) -> Message: ...

    @overload
    def __getitem__(self, index: slice) -> List[Message]: ...

    def __getitem__(self, index):
        return self._messages[index]

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"Conversation(messages={len(self._messages)})"


__all__ = ["Conversation", "ConversationInput"]
