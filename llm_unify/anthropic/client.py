"""Anthropic adapter (Messages API).

Purpose
-------
Translate canonical options into ``POST /v1/messages`` requests and decode
Anthropic's content-block payloads.

Wire notes
----------
- Auth uses ``x-api-key`` plus a pinned ``anthropic-version`` header.
- System messages move to the top-level ``system`` field.
- ``think`` enables extended thinking with half of ``max_tokens`` as the
  budget; ``max_thinking_tokens`` overrides the budget.
- Stream events: ``message_start`` (input usage), ``content_block_start``
  (tool name and id), ``content_block_delta`` (``text_delta``,
  ``thinking_delta``, ``input_json_delta``), ``content_block_stop``,
  ``message_delta`` (output usage), ``message_stop``.
"""
from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Optional

from ..base.adapter import ProviderAdapter
from ..base.dto.tool_call import ToolCall
from ..base.models import Message, MessageContent, ModelInfo, TokenUsage
from ..base.tokens.extraction import usage_from_mapping
from ..base.utils.wire import dicts, dig, dig_list, dig_str, join_url, to_datetime
from ..config.defaults import ANTHROPIC_API_VERSION, ANTHROPIC_DEFAULT_BASE_URL, ANTHROPIC_DEFAULT_MODEL


def _attachment_block(attachment) -> Dict[str, Any]:
    kind = "document" if attachment.is_document else "image"
    if attachment.is_url:
        return {"type": kind, "source": {"type": "url", "url": attachment.data}}
    return {
        "type": kind,
        "source": {"type": "base64", "media_type": attachment.content_type, "data": attachment.data},
    }


class AnthropicAdapter(ProviderAdapter):
    """Adapter for ``https://api.anthropic.com/v1/messages``."""

    service: ClassVar[str] = "anthropic"
    DEFAULT_BASE_URL: ClassVar[str] = ANTHROPIC_DEFAULT_BASE_URL
    DEFAULT_MODEL: ClassVar[str] = ANTHROPIC_DEFAULT_MODEL
    API_VERSION: ClassVar[str] = ANTHROPIC_API_VERSION
    is_bearer_auth: ClassVar[bool] = False

    @property
    def chat_url(self) -> str:
        return join_url(self.base_url, "messages")

    def auth_headers(self) -> Dict[str, str]:
        headers = {"anthropic-version": self.API_VERSION}
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    # ----- Request -----
    def parse_options(self, options: Dict[str, Any]) -> Dict[str, Any]:
        messages = options.get("messages") or []
        system = [m["content"] for m in messages if m.get("role") == "system"]
        options["messages"] = [m for m in messages if m.get("role") != "system"]
        if system and "system" not in options:
            options["system"] = "\n\n".join(system)

        if options.pop("think", False):
            budget = int(options.get("max_tokens") or 0) // 2
            options["thinking"] = {"type": "enabled", "budget_tokens": budget}
        max_thinking = options.pop("max_thinking_tokens", None)
        if isinstance(max_thinking, int) and isinstance(options.get("thinking"), dict):
            options["thinking"]["budget_tokens"] = max_thinking
        return options

    def translate_message(self, message: Message) -> List[Dict[str, Any]]:
        c = message.content
        if message.role == "tool_call":
            return [{"role": "assistant", "content": [{"type": "tool_use", "id": c.id, "name": c.name, "input": c.input}]}]
        if message.role == "tool_result":
            block: Dict[str, Any] = {"type": "tool_result", "tool_use_id": c.tool_call_id, "content": c.content_text()}
            if c.is_error:
                block["is_error"] = True
            return [{"role": "user", "content": [block]}]
        if message.role == "system":
            return [{"role": "system", "content": message.text}]
        role = "assistant" if message.role == "thinking" else message.role
        if isinstance(c, MessageContent) and c.attachments:
            blocks = [_attachment_block(a) for a in c.attachments]
            blocks.append({"type": "text", "text": c.text})
            return [{"role": role, "content": blocks}]
        return [{"role": role, "content": message.text}]

    # ----- Full body -----
    def _blocks(self, body: Any, block_type: str) -> List[Dict[str, Any]]:
        return [b for b in dicts(dig_list(body, "content")) if b.get("type") == block_type]

    def parse_content(self, body: Any) -> str:
        return "".join(b["text"] for b in self._blocks(body, "text") if isinstance(b.get("text"), str))

    def parse_thinking(self, body: Any) -> str:
        return "".join(b["thinking"] for b in self._blocks(body, "thinking") if isinstance(b.get("thinking"), str))

    def parse_tool_calls(self, body: Any) -> List[ToolCall]:
        calls: List[ToolCall] = []
        for b in self._blocks(body, "tool_use"):
            call = self.make_tool_call(b.get("id"), b.get("name"), b.get("input"))
            if call is not None:
                calls.append(call)
        return calls

    def parse_usage(self, payload: Any) -> Optional[TokenUsage]:
        return usage_from_mapping(dig(payload, "message", "usage")) or usage_from_mapping(dig(payload, "usage"))

    # ----- Stream events -----
    def _delta(self, event: Any, delta_type: str, field: str) -> str:
        if dig(event, "type") != "content_block_delta" or dig(event, "delta", "type") != delta_type:
            return ""
        return dig_str(event, "delta", field)

    def parse_content_chunk(self, event: Any) -> str:
        return self._delta(event, "text_delta", "text")

    def parse_thinking_chunk(self, event: Any) -> str:
        return self._delta(event, "thinking_delta", "thinking")

    def parse_tool_calls_chunk(self, event: Any) -> List[ToolCall]:
        etype = dig(event, "type")
        key = dig(event, "index")
        if etype == "content_block_start" and dig(event, "content_block", "type") == "tool_use":
            block = event["content_block"]
            self.tool_buffer.start(key, call_id=block.get("id"), name=block.get("name"))
            return []
        if etype == "content_block_delta" and dig(event, "delta", "type") == "input_json_delta":
            return self.tool_buffer.append(key, dig_str(event, "delta", "partial_json"))
        if etype == "content_block_stop":
            return self.tool_buffer.close(key)
        return []

    def parse_stream_error(self, event: Any) -> Optional[str]:
        if dig(event, "type") != "error":
            return None
        return dig_str(event, "error", "message") or "stream error"

    def is_stream_done(self, event: Any) -> bool:
        return dig(event, "type") == "message_stop"

    # ----- Catalog -----
    def parse_model(self, raw: Any) -> ModelInfo:
        model_id = str(dig(raw, "id", default=""))
        return ModelInfo(
            service=self.service_name,
            model=model_id,
            name=dig(raw, "display_name") or model_id,
            created=to_datetime(dig(raw, "created_at")),
            raw=raw if isinstance(raw, dict) else {},
        )

    def filter_quality_model(self, model: ModelInfo) -> bool:
        if model.model.startswith("claude-2"):
            return False
        return super().filter_quality_model(model)


__all__ = ["AnthropicAdapter"]
