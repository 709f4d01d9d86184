"""OpenAI adapter (Responses API).

Purpose
-------
Reference adapter for the OpenAI ``/responses`` endpoint. It shows every
capability of the adapter contract: option renaming, tool wrapping, reasoning
requests, content/thinking/tool-call/usage extraction for both full bodies
and SSE events, and catalog parsing.

Wire notes
----------
- Request: ``input`` replaces ``messages``; ``max_output_tokens`` replaces
  ``max_tokens``; tools are flat ``{"type": "function", "name", ...}``
  records with ``strict`` schemas; ``think`` becomes
  ``reasoning={"effort": "medium", "summary": "detailed"}``.
- Stream: typed events (``response.output_text.delta``,
  ``response.reasoning_summary_text.delta``,
  ``response.output_item.added``/``response.function_call_arguments.*``,
  ``response.completed``).
"""
from __future__ import annotations

import json
from typing import Any, ClassVar, Dict, List, Optional

from ..base.adapter import ProviderAdapter
from ..base.dto.tool_call import ToolCall
from ..base.models import Message, MessageContent, ModelInfo, TokenUsage
from ..base.tokens.extraction import usage_from_mapping
from ..base.utils.wire import dicts, dig, dig_list, dig_str, join_url, to_datetime
from ..config.defaults import OPENAI_DEFAULT_BASE_URL, OPENAI_DEFAULT_MODEL

_TERMINAL_EVENTS = frozenset({"response.completed", "response.incomplete", "response.failed"})


def wrap_tool(tool: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap a canonical tool as a strict Responses API function tool."""
    schema = dict(tool.get("input_schema") or {"type": "object", "properties": {}})
    schema["additionalProperties"] = False
    return {
        "type": "function",
        "name": tool.get("name"),
        "description": tool.get("description", ""),
        "parameters": schema,
        "strict": True,
    }


class OpenAIAdapter(ProviderAdapter):
    """Adapter for ``https://api.openai.com/v1/responses``."""

    service: ClassVar[str] = "openai"
    DEFAULT_BASE_URL: ClassVar[str] = OPENAI_DEFAULT_BASE_URL
    DEFAULT_MODEL: ClassVar[str] = OPENAI_DEFAULT_MODEL

    @property
    def chat_url(self) -> str:
        return join_url(self.base_url, "responses")

    # ----- Request -----
    def parse_options(self, options: Dict[str, Any]) -> Dict[str, Any]:
        options["input"] = options.pop("messages", [])
        if "max_tokens" in options:
            options["max_output_tokens"] = options.pop("max_tokens")
        if options.get("tools"):
            options["tools"] = [wrap_tool(t) for t in options["tools"]]
        if options.get("think") and "reasoning" not in options:
            options["reasoning"] = {"effort": "medium", "summary": "detailed"}
        options.pop("think", None)
        options.pop("max_thinking_tokens", None)
        return options

    def translate_message(self, message: Message) -> List[Dict[str, Any]]:
        c = message.content
        if message.role == "tool_call":
            return [
                {
                    "type": "function_call",
                    "call_id": c.id,
                    "name": c.name,
                    "arguments": json.dumps(c.input, ensure_ascii=False),
                }
            ]
        if message.role == "tool_result":
            return [{"type": "function_call_output", "call_id": c.tool_call_id, "output": c.content_text()}]
        role = "assistant" if message.role == "thinking" else message.role
        if isinstance(c, MessageContent) and c.attachments:
            parts: List[Dict[str, Any]] = [{"type": "input_text", "text": c.text}]
            for a in c.attachments:
                if a.is_document:
                    parts.append({"type": "input_file", "filename": "attachment.pdf", "file_data": a.data_url()})
                else:
                    parts.append({"type": "input_image", "image_url": a.data_url()})
            return [{"role": role, "content": parts}]
        return [{"role": role, "content": message.text}]

    # ----- Full body -----
    def _output_items(self, body: Any, item_type: str) -> List[Dict[str, Any]]:
        return [o for o in dicts(dig_list(body, "output")) if o.get("type") == item_type]

    def parse_content(self, body: Any) -> str:
        texts: List[str] = []
        for item in self._output_items(body, "message"):
            if item.get("role", "assistant") != "assistant":
                continue
            for part in dicts(dig_list(item, "content")):
                if part.get("type") == "output_text" and isinstance(part.get("text"), str):
                    texts.append(part["text"])
        return "".join(texts)

    def parse_thinking(self, body: Any) -> str:
        texts: List[str] = []
        for item in self._output_items(body, "reasoning"):
            for part in dicts(dig_list(item, "summary")):
                if isinstance(part.get("text"), str):
                    texts.append(part["text"])
        return "\n\n".join(texts)

    def parse_tool_calls(self, body: Any) -> List[ToolCall]:
        calls: List[ToolCall] = []
        for item in self._output_items(body, "function_call"):
            call = self.make_tool_call(item.get("call_id") or item.get("id"), item.get("name"), item.get("arguments"))
            if call is not None:
                calls.append(call)
        return calls

    def parse_usage(self, payload: Any) -> Optional[TokenUsage]:
        if dig(payload, "type") == "response.completed":
            payload = dig(payload, "response")
        return usage_from_mapping(dig(payload, "usage"))

    # ----- Stream events -----
    def parse_content_chunk(self, event: Any) -> str:
        if dig(event, "type") != "response.output_text.delta":
            return ""
        return dig_str(event, "delta")

    def parse_thinking_chunk(self, event: Any) -> str:
        if dig(event, "type") != "response.reasoning_summary_text.delta":
            return ""
        return dig_str(event, "delta")

    def parse_tool_calls_chunk(self, event: Any) -> List[ToolCall]:
        etype = dig(event, "type")
        if etype == "response.output_item.added" and dig(event, "item", "type") == "function_call":
            item = event["item"]
            key = item.get("id") or item.get("call_id")
            self.tool_buffer.start(key, call_id=item.get("call_id") or item.get("id"), name=item.get("name"))
            if item.get("arguments"):
                return self.tool_buffer.append(key, item["arguments"])
            return []
        if etype == "response.function_call_arguments.delta":
            return self.tool_buffer.append(dig(event, "item_id"), dig_str(event, "delta"))
        if etype == "response.function_call_arguments.done":
            return self.tool_buffer.replace(dig(event, "item_id"), dig_str(event, "arguments"))
        return []

    def parse_stream_error(self, event: Any) -> Optional[str]:
        etype = dig(event, "type")
        if etype == "error":
            return dig_str(event, "message") or dig_str(event, "error", "message") or "stream error"
        if etype == "response.failed":
            return dig_str(event, "response", "error", "message") or "response failed"
        return None

    def is_stream_done(self, event: Any) -> bool:
        return dig(event, "type") in _TERMINAL_EVENTS

    # ----- Catalog -----
    def parse_model(self, raw: Any) -> ModelInfo:
        model_id = str(dig(raw, "id", default=""))
        return ModelInfo(
            service=self.service_name,
            model=model_id,
            name=model_id,
            created=to_datetime(dig(raw, "created")),
            raw=raw if isinstance(raw, dict) else {},
        )


__all__ = ["OpenAIAdapter", "wrap_tool"]
