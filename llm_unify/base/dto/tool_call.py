"""DTO describing a canonical tool invocation.

Adapters translate each service's wire shape (a wrapped ``function``
envelope, a ``tool_use`` content block, an output item) into this record and
synthesize an ``id`` when the wire format omits one.
"""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def new_tool_call_id() -> str:
    """Return a fresh identifier for tool calls that arrive without one."""
    return f"call_{uuid.uuid4().hex}"


class ToolCall(BaseModel):
    """A tool invocation requested by the model.

    Parameters
    ----------
    id:
        Call identifier used to correlate a later tool result.
    name:
        Tool name chosen by the model.
    input:
        Decoded JSON arguments. Defaults to an empty mapping.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_tool_call_id)
    name: str
    input: Any = Field(default_factory=dict)


__all__ = ["ToolCall", "new_tool_call_id"]
