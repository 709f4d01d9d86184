"""Consumer-facing wrappers around a :class:`StreamSession`.

``StreamHandle`` is returned for extended streaming requests: ``events``
yields typed :class:`StreamEvent` values and ``complete()`` returns the
finalized :class:`ChatResponse`. ``TextStream`` is returned for plain
streaming requests and yields only content fragments.

Both share one underlying generator, so iterating ``events`` and then calling
``complete()`` never re-reads the network; ``complete()`` drains whatever is
left and returns the same finalized value on every call.
"""
from __future__ import annotations

from typing import Any, Iterator, List

from ..dto.tool_call import ToolCall
from .events import StreamEvent
from .session import StreamSession
from .state import StreamState


class _SessionView:
    def __init__(self, session: StreamSession) -> None:
        self._session = session

    @property
    def state(self) -> StreamState:
        return self._session.state

    @property
    def content(self) -> str:
        """Content buffered so far (survives abort)."""
        return self._session.accumulator.content

    @property
    def thinking(self) -> str:
        return self._session.accumulator.thinking

    @property
    def tool_calls(self) -> List[ToolCall]:
        return list(self._session.accumulator.tool_calls)

    def complete(self) -> Any:
        """Drain the stream if needed and return the finalized result."""
        if self._session.state is StreamState.FINALIZED:
            return self._session.result
        return self._session.drain()


class StreamHandle(_SessionView):
    """Extended streaming result: typed events plus a completion handle."""

    @property
    def events(self) -> Iterator[StreamEvent]:
        return self._session.events

    def __iter__(self) -> Iterator[StreamEvent]:
        return self._session.events


class TextStream(_SessionView):
    """Plain streaming result: an iterator of content fragments."""

    def __iter__(self) -> Iterator[str]:
        for event in self._session.events:
            if event.type == "content":
                yield event.payload


__all__ = ["StreamHandle", "TextStream"]
