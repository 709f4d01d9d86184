"""DTO describing the outcome of a tool execution.

Appended to a conversation with the ``tool_result`` role and sent back to the
model on the next turn. Adapters translate it into the service's native
result shape (a ``tool`` role message, a ``tool_result`` content block, or a
``function_call_output`` item).
"""

from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ToolResult(BaseModel):
    """Result returned to the model for a previous :class:`ToolCall`.

    Attributes
    ----------
    tool_call_id:
        Identifier of the call being answered.
    content:
        Result payload; non-string values are JSON encoded on the wire.
    name:
        Optional tool name, used by services that key results by name.
    is_error:
        Marks the result as a failed execution.
    """

    model_config = ConfigDict(frozen=True)

    tool_call_id: str
    content: Any = ""
    name: Optional[str] = None
    is_error: bool = False

    def content_text(self) -> str:
        """Return ``content`` as wire text (JSON for non-strings)."""
        if isinstance(self.content, str):
            return self.content
        return json.dumps(self.content, ensure_ascii=False, default=str)


__all__ = ["ToolResult"]
