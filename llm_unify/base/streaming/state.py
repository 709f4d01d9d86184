"""Lifecycle states of one streamed request."""
from __future__ import annotations

from enum import Enum


class StreamState(str, Enum):
    """``IDLE -> STREAMING -> FINALIZED | ABORTED | FAILED``.

    The last three are terminal. Only ``FINALIZED`` commits messages to the
    conversation.
    """

    IDLE = "idle"
    STREAMING = "streaming"
    FINALIZED = "finalized"
    ABORTED = "aborted"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (StreamState.FINALIZED, StreamState.ABORTED, StreamState.FAILED)


__all__ = ["StreamState"]
