"""Ollama adapter (local daemon, ``/api/chat``).

Purpose
-------
Drive a local Ollama server. The service is local, so it needs no API key
and its usage always costs zero.

Wire notes
----------
- Streaming responses are NDJSON (one JSON object per line); the final
  object has ``"done": true`` and carries ``prompt_eval_count`` and
  ``eval_count``.
- ``max_tokens`` and ``temperature`` move under ``options`` (``num_predict``).
- Tool calls arrive whole inside ``message.tool_calls`` without ids, so ids
  are synthesized.
- The models catalog lives at ``/api/tags``.
"""
from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Optional

from ..base.adapter import ProviderAdapter, WireRequest
from ..base.dto.tool_call import ToolCall
from ..base.models import Message, MessageContent, ModelInfo, TokenUsage
from ..base.openai_style import wrap_function_tool
from ..base.tokens.extraction import usage_from_mapping
from ..base.utils.wire import dicts, dig, dig_list, dig_str, join_url, to_datetime
from ..config.defaults import OLLAMA_DEFAULT_BASE_URL, OLLAMA_DEFAULT_MODEL

_RUNNING_BANNER = "Ollama is running"


class OllamaAdapter(ProviderAdapter):
    """Adapter for a local Ollama daemon."""

    service: ClassVar[str] = "ollama"
    DEFAULT_BASE_URL: ClassVar[str] = OLLAMA_DEFAULT_BASE_URL
    DEFAULT_MODEL: ClassVar[str] = OLLAMA_DEFAULT_MODEL
    is_local: ClassVar[bool] = True

    @property
    def chat_url(self) -> str:
        return join_url(self.base_url, "api/chat")

    @property
    def models_url(self) -> str:
        return join_url(self.base_url, "api/tags")

    # ----- Request -----
    def parse_options(self, options: Dict[str, Any]) -> Dict[str, Any]:
        runtime: Dict[str, Any] = dict(options.get("options") or {})
        if "max_tokens" in options:
            runtime["num_predict"] = options.pop("max_tokens")
        if "temperature" in options:
            runtime["temperature"] = options.pop("temperature")
        if runtime:
            options["options"] = runtime
        if options.get("tools"):
            options["tools"] = [wrap_function_tool(t) for t in options["tools"]]
        if not options.get("think"):
            options.pop("think", None)
        options.pop("max_thinking_tokens", None)
        return options

    def translate_message(self, message: Message) -> List[Dict[str, Any]]:
        c = message.content
        if message.role == "tool_call":
            return [
                {
                    "role": "assistant",
                    "content": "",
                    "tool_calls": [{"function": {"name": c.name, "arguments": c.input}}],
                }
            ]
        if message.role == "tool_result":
            entry: Dict[str, Any] = {"role": "tool", "content": c.content_text()}
            if c.name:
                entry["tool_name"] = c.name
            return [entry]
        role = "assistant" if message.role == "thinking" else message.role
        entry = {"role": role, "content": message.text}
        if isinstance(c, MessageContent):
            images = [a.data for a in c.attachments if a.is_image and not a.is_url]
            if images:
                entry["images"] = images
        return [entry]

    # ----- Full body / stream events share one shape -----
    def parse_content(self, body: Any) -> str:
        return dig_str(body, "message", "content")

    def parse_thinking(self, body: Any) -> str:
        return dig_str(body, "message", "thinking")

    def parse_tool_calls(self, body: Any) -> List[ToolCall]:
        calls: List[ToolCall] = []
        for tc in dicts(dig_list(body, "message", "tool_calls")):
            call = self.make_tool_call(
                dig(tc, "id") or dig(tc, "function", "id"),
                dig(tc, "function", "name"),
                dig(tc, "function", "arguments"),
            )
            if call is not None:
                calls.append(call)
        return calls

    def parse_usage(self, payload: Any) -> Optional[TokenUsage]:
        return usage_from_mapping(payload, "prompt_eval_count", "eval_count")

    def parse_content_chunk(self, event: Any) -> str:
        if dig(event, "message", "role", default="assistant") != "assistant":
            return ""
        return self.parse_content(event)

    def parse_thinking_chunk(self, event: Any) -> str:
        return self.parse_thinking(event)

    def parse_tool_calls_chunk(self, event: Any) -> List[ToolCall]:
        return self.parse_tool_calls(event)

    def parse_stream_error(self, event: Any) -> Optional[str]:
        err = dig(event, "error")
        return str(err) if err else None

    def is_stream_done(self, event: Any) -> bool:
        return dig(event, "done") is True

    # ----- Catalog & connectivity -----
    def parse_model(self, raw: Any) -> ModelInfo:
        model_id = str(dig(raw, "model", default="") or dig(raw, "name", default=""))
        return ModelInfo(
            service=self.service_name,
            model=model_id,
            name=dig(raw, "name") or model_id,
            created=to_datetime(dig(raw, "modified_at")),
            raw=raw if isinstance(raw, dict) else {},
        )

    def verify_request(self) -> WireRequest:
        return WireRequest(method="GET", url=self.base_url, headers=self.headers())

    def verify_response(self, status_code: int, text: str) -> bool:
        return 200 <= status_code < 300 and text.strip() == _RUNNING_BANNER


__all__ = ["OllamaAdapter"]
