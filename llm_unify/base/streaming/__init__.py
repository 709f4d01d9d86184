"""Streaming package: byte decoding, canonical events and stream lifecycle.

Modules are imported directly (``from .streaming.session import ...``) by
the engine; this namespace only re-exports the leaf primitives so importing
``tool_buffer`` from the adapter base stays free of engine dependencies.
"""

from .events import StreamEvent
from .sse_decoder import DONE_SENTINEL, StreamDecoder, decode_stream
from .state import StreamState
from .tool_buffer import ToolCallBuffer

__all__ = [
    "StreamEvent",
    "StreamState",
    "StreamDecoder",
    "decode_stream",
    "DONE_SENTINEL",
    "ToolCallBuffer",
]
