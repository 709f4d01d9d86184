"""Typed request options record.

Purpose
-------
Validate the merged instance-level and call-level options before a request
is built. Recognized fields are typed; anything else is kept as a
service-specific passthrough (``extra="allow"``) and lands in the wire body
untouched, e.g. ``reasoning_effort`` for Groq or ``top_p``.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``model_dump``.

Failure modes
-------------
- ``pydantic.ValidationError`` for wrong types; the engine re-raises it as
  ``ConfigurationError``.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .quality_filter import QualityFilter
from .tool_spec import ToolSpec

# Options consumed by the engine itself; never forwarded to an adapter body.
ENGINE_ONLY_FIELDS = frozenset(
    {
        "service",
        "base_url",
        "api_key",
        "extended",
        "json_output",
        "parser",
        "quality_filter",
        "headers",
    }
)


class RequestOptions(BaseModel):
    """Options for one ``send()`` call.

    Attributes
    ----------
    service / model / base_url / api_key:
        Target selection and credentials.
    stream:
        Deliver the response incrementally.
    extended:
        Return the structured response (thinking, tool calls, usage, cost)
        instead of plain text.
    max_tokens / max_thinking_tokens / temperature:
        Generation limits.
    think:
        Ask the service for a reasoning trace.
    tools:
        Canonical tool descriptors.
    json_output:
        Parse the final text as JSON (accepted as ``json``).
    parser:
        Callable applied to the final text; wins over ``json_output``.
    quality_filter:
        Price lookup tolerance for usage costs and catalogs.
    headers:
        Additional HTTP headers.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, arbitrary_types_allowed=True)

    service: Optional[str] = None
    model: Optional[str] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    stream: bool = False
    extended: bool = False
    max_tokens: Optional[int] = Field(default=None, gt=0)
    max_thinking_tokens: Optional[int] = Field(default=None, ge=0)
    temperature: Optional[float] = None
    think: bool = False
    tools: Optional[List[ToolSpec]] = None
    json_output: bool = Field(default=False, alias="json")
    parser: Optional[Callable[[str], Any]] = None
    quality_filter: Optional[QualityFilter] = None
    headers: Dict[str, str] = Field(default_factory=dict)

    def wire_options(self) -> Dict[str, Any]:
        """Return the subset forwarded to ``ProviderAdapter.build_request``."""
        data = self.model_dump(exclude=set(ENGINE_ONLY_FIELDS), exclude_none=True)
        if not data.get("tools"):
            data.pop("tools", None)
        return data


__all__ = ["RequestOptions", "ENGINE_ONLY_FIELDS"]
