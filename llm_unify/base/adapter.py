"""Provider adapter contract.

Purpose
-------
Define the fixed capability set every service implements: translate
canonical request options into a provider request (``build_request``) and
translate provider payloads back into canonical fields (the ``parse_*``
family). The completion engine only talks to services through this
interface; adding a service means registering a new subclass.

Contract
--------
- ``build_request`` never mutates its input and is idempotent for the same
  input.
- Every ``parse_*`` function is safe to call on every wire event, including
  events irrelevant to it. Missing fields mean "nothing in this event":
  ``""`` for text, ``[]`` for tool calls, ``None`` for usage. They never raise.
- ``parse_tool_calls_chunk`` accumulates fragmented arguments in a
  per-stream :class:`ToolCallBuffer`; ``reset_stream_state`` clears it.

External dependencies
---------------------
None beyond the package DTOs. Network I/O belongs to the engine.
"""
from __future__ import annotations

import copy
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Tuple

from ..config.defaults import PRICE_SERVICE_ALIASES, PRICE_TABLE_CHAT_MODES, QUALITY_DENYLIST
from .dto.adapter_params import AdapterParams
from .dto.tool_call import ToolCall, new_tool_call_id
from .models import Message, ModelInfo, TokenUsage
from .streaming.tool_buffer import ToolCallBuffer
from .utils.wire import dig, dig_list, join_url, to_datetime


@dataclass(frozen=True)
class WireRequest:
    """A fully built HTTP request for one service call."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None


def keyword_filter(name: str, keywords: Sequence[str]) -> bool:
    """Return True when ``name`` contains none of ``keywords`` (case-insensitive)."""
    lowered = (name or "").lower()
    return not any(k in lowered for k in keywords)


def loads_arguments(raw: Any) -> Any:
    """Decode tool arguments that may arrive as a JSON string or as an object."""
    if isinstance(raw, str):
        try:
            return json.loads(raw) if raw.strip() else {}
        except ValueError:
            return {}
    return raw if raw is not None else {}


class ProviderAdapter(ABC):
    """Base class for service adapters.

    Class attributes describe the service; instances carry credentials and
    the per-stream tool buffer. Subclasses must implement ``chat_url``,
    ``parse_content`` and ``parse_content_chunk``; every other capability
    has a neutral default.
    """

    service: ClassVar[str] = ""
    DEFAULT_BASE_URL: ClassVar[str] = ""
    DEFAULT_MODEL: ClassVar[str] = ""
    is_local: ClassVar[bool] = False
    is_bearer_auth: ClassVar[bool] = True
    quality_denylist: ClassVar[Tuple[str, ...]] = QUALITY_DENYLIST

    def __init__(self, params: Optional[AdapterParams] = None) -> None:
        params = params or AdapterParams()
        self.service_name: str = params.service or self.service
        self.base_url: str = params.base_url or self.DEFAULT_BASE_URL
        self.api_key: Optional[str] = params.api_key
        self.default_model: str = params.model or self.DEFAULT_MODEL
        self.static_headers: Dict[str, str] = dict(params.headers)
        self.extra: Dict[str, Any] = dict(params.extra)
        self.tool_buffer = ToolCallBuffer()

    # ----- Endpoints & headers -----
    @property
    @abstractmethod
    def chat_url(self) -> str:
        """URL receiving completion requests."""

    @property
    def models_url(self) -> str:
        return join_url(self.base_url, "models")

    @property
    def price_service(self) -> str:
        """Service key used for price table lookups."""
        return PRICE_SERVICE_ALIASES.get(self.service_name, self.service_name)

    def auth_headers(self) -> Dict[str, str]:
        if self.api_key and self.is_bearer_auth:
            return {"Authorization": f"Bearer {self.api_key}"}
        return {}

    def headers(self) -> Dict[str, str]:
        out = {"Content-Type": "application/json", "Accept": "application/json"}
        out.update(self.auth_headers())
        out.update(self.static_headers)
        return out

    # ----- Request building -----
    def build_request(self, options: Mapping[str, Any]) -> WireRequest:
        """Translate canonical options (including ``messages``) into a request.

        ``options`` is deep-copied first so the caller's mapping is never
        modified.
        """
        opts = copy.deepcopy(dict(options))
        if not opts.get("model"):
            opts["model"] = self.default_model
        opts["messages"] = self.translate_messages(opts.get("messages") or [])
        body = self.parse_options(opts)
        return WireRequest(method="POST", url=self.chat_url, headers=self.headers(), body=body)

    def parse_options(self, options: Dict[str, Any]) -> Dict[str, Any]:
        """Rename or drop canonical fields the service does not accept."""
        options.pop("think", None)
        options.pop("max_thinking_tokens", None)
        return options

    def translate_messages(self, messages: Sequence[Message]) -> List[Dict[str, Any]]:
        out: List[Dict[str, Any]] = []
        for m in messages:
            out.extend(self.translate_message(m))
        return out

    def translate_message(self, message: Message) -> List[Dict[str, Any]]:
        """Serialize one message; ``thinking``/``tool_call`` become ``assistant``."""
        role = message.role
        if role in ("thinking", "tool_call"):
            role = "assistant"
        elif role == "tool_result":
            role = "user"
        return [{"role": role, "content": message.text}]

    def models_request(self) -> WireRequest:
        return WireRequest(method="GET", url=self.models_url, headers=self.headers())

    def verify_request(self) -> WireRequest:
        """Cheap authenticated request used by ``verify_connection``."""
        return self.models_request()

    def verify_response(self, status_code: int, text: str) -> bool:
        return 200 <= status_code < 300

    # ----- Full body parsers -----
    @abstractmethod
    def parse_content(self, body: Any) -> str:
        """Final assistant text of a non-streaming response."""

    def parse_thinking(self, body: Any) -> str:
        return ""

    def parse_tool_calls(self, body: Any) -> List[ToolCall]:
        return []

    def parse_usage(self, payload: Any) -> Optional[TokenUsage]:
        """Token counts in ``payload`` (full body or stream event), else ``None``."""
        return None

    # ----- Stream event parsers -----
    @abstractmethod
    def parse_content_chunk(self, event: Any) -> str:
        """Assistant text fragment carried by one stream event."""

    def parse_thinking_chunk(self, event: Any) -> str:
        return ""

    def parse_tool_calls_chunk(self, event: Any) -> List[ToolCall]:
        return []

    def parse_stream_error(self, event: Any) -> Optional[str]:
        """Error message carried by an in-band error event, else ``None``."""
        return None

    def is_stream_done(self, event: Any) -> bool:
        """Wire-specific "completed" marker ending the event sequence."""
        return False

    def reset_stream_state(self) -> None:
        self.tool_buffer.reset()

    # ----- Catalog -----
    def static_models(self) -> Optional[List[ModelInfo]]:
        """Catalog for services without a models endpoint; ``None`` to fetch."""
        return None

    def parse_models_response(self, body: Any) -> List[Any]:
        return dig_list(body, "data") or dig_list(body, "models") or (body if isinstance(body, list) else [])

    def parse_model(self, raw: Any) -> ModelInfo:
        model_id = str(dig(raw, "id", default="") or dig(raw, "name", default=""))
        return ModelInfo(
            service=self.service_name,
            model=model_id,
            name=dig(raw, "display_name") or dig(raw, "name") or model_id,
            created=to_datetime(dig(raw, "created")),
            raw=raw if isinstance(raw, dict) else {},
        )

    def filter_quality_model(self, model: ModelInfo) -> bool:
        """Keep chat-capable models whose id avoids the keyword denylist."""
        if model.mode and model.mode not in PRICE_TABLE_CHAT_MODES:
            return False
        return keyword_filter(model.model, self.quality_denylist)

    # ----- Helpers for subclasses -----
    @staticmethod
    def make_tool_call(call_id: Any, name: Any, arguments: Any) -> Optional[ToolCall]:
        if not isinstance(name, str) or not name:
            return None
        cid = call_id if isinstance(call_id, str) and call_id else new_tool_call_id()
        return ToolCall(id=cid, name=name, input=loads_arguments(arguments))

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"{type(self).__name__}(service={self.service_name!r}, base_url={self.base_url!r})"


__all__ = ["ProviderAdapter", "WireRequest", "keyword_filter", "loads_arguments"]
