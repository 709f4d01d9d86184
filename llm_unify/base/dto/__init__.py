"""Pydantic DTOs shared by adapters and the completion engine."""

from .adapter_params import AdapterParams
from .quality_filter import QualityFilter
from .request_options import ENGINE_ONLY_FIELDS, RequestOptions
from .tool_call import ToolCall, new_tool_call_id
from .tool_result import ToolResult
from .tool_spec import ToolSpec

__all__ = [
    "AdapterParams",
    "QualityFilter",
    "RequestOptions",
    "ENGINE_ONLY_FIELDS",
    "ToolCall",
    "new_tool_call_id",
    "ToolResult",
    "ToolSpec",
]
