"""Adapter for OpenAI-compatible ``chat/completions`` services.

Purpose:
- Shared implementation for every service that speaks the OpenAI Chat
  Completions wire format (DeepSeek, xAI, OpenRouter, Groq, Google's
  OpenAI endpoint, Llamafile) and the fallback for custom services that are
  configured with only a ``base_url``.

Wire format:
- Request: ``messages`` with ``system/user/assistant/tool`` roles, tools
  wrapped as ``{"type": "function", "function": {...}}``.
- Streaming: SSE ``data:`` lines carrying ``choices[0].delta`` objects,
  terminated by ``data: [DONE]``. ``stream_options.include_usage`` asks for a
  final usage chunk.
- Reasoning text is read from ``reasoning_content`` unless a subclass names a
  different key (``reasoning`` for Groq and OpenRouter).
"""

from __future__ import annotations

import json
from typing import Any, ClassVar, Dict, List, Optional

from .adapter import ProviderAdapter
from .dto.tool_call import ToolCall
from .models import Message, MessageContent, TokenUsage
from .tokens.extraction import usage_from_mapping
from .utils.wire import dicts, dig, dig_list, dig_str, join_url


def wrap_function_tool(tool: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap a canonical tool descriptor in the ``function`` envelope."""
    return {
        "type": "function",
        "function": {
            "name": tool.get("name"),
            "description": tool.get("description", ""),
            "parameters": tool.get("input_schema") or {"type": "object", "properties": {}},
        },
    }


def _function_call(call: ToolCall) -> Dict[str, Any]:
    return {
        "id": call.id,
        "type": "function",
        "function": {"name": call.name, "arguments": json.dumps(call.input, ensure_ascii=False)},
    }


class OpenAIStyleAdapter(ProviderAdapter):
    """Adapter for the OpenAI Chat Completions wire format."""

    service: ClassVar[str] = "openai-compatible"
    KEY_REASONING_CONTENT: ClassVar[str] = "reasoning_content"

    @property
    def chat_url(self) -> str:
        return join_url(self.base_url, "chat/completions")

    # ----- Request -----
    def parse_options(self, options: Dict[str, Any]) -> Dict[str, Any]:
        options = super().parse_options(options)
        if options.get("tools"):
            options["tools"] = [wrap_function_tool(t) for t in options["tools"]]
        if options.get("stream"):
            options.setdefault("stream_options", {"include_usage": True})
        return options

    def translate_messages(self, messages) -> List[Dict[str, Any]]:
        out: List[Dict[str, Any]] = []
        for m in messages:
            if m.role == "tool_call" and out and out[-1].get("tool_calls") and out[-1].get("_merge"):
                # consecutive tool calls share one assistant turn
                out[-1]["tool_calls"].append(_function_call(m.content))
                continue
            out.extend(self.translate_message(m))
        for entry in out:
            entry.pop("_merge", None)
        return out

    def translate_message(self, message: Message) -> List[Dict[str, Any]]:
        c = message.content
        if message.role == "tool_call":
            return [{"role": "assistant", "content": None, "tool_calls": [_function_call(c)], "_merge": True}]
        if message.role == "tool_result":
            return [{"role": "tool", "tool_call_id": c.tool_call_id, "content": c.content_text()}]
        role = "assistant" if message.role == "thinking" else message.role
        if isinstance(c, MessageContent) and c.attachments:
            parts: List[Dict[str, Any]] = [{"type": "text", "text": c.text}]
            for a in c.attachments:
                if a.is_document:
                    parts.append({"type": "file", "file": {"filename": "attachment.pdf", "file_data": a.data_url()}})
                else:
                    parts.append({"type": "image_url", "image_url": {"url": a.data_url()}})
            return [{"role": role, "content": parts}]
        return [{"role": role, "content": message.text}]

    # ----- Full body -----
    def parse_content(self, body: Any) -> str:
        return dig_str(body, "choices", 0, "message", "content")

    def parse_thinking(self, body: Any) -> str:
        return dig_str(body, "choices", 0, "message", self.KEY_REASONING_CONTENT)

    def parse_tool_calls(self, body: Any) -> List[ToolCall]:
        calls: List[ToolCall] = []
        for tc in dicts(dig_list(body, "choices", 0, "message", "tool_calls")):
            call = self.make_tool_call(tc.get("id"), dig(tc, "function", "name"), dig(tc, "function", "arguments"))
            if call is not None:
                calls.append(call)
        return calls

    def parse_usage(self, payload: Any) -> Optional[TokenUsage]:
        return usage_from_mapping(dig(payload, "usage"), "prompt_tokens", "completion_tokens")

    # ----- Stream events -----
    def parse_content_chunk(self, event: Any) -> str:
        return dig_str(event, "choices", 0, "delta", "content")

    def parse_thinking_chunk(self, event: Any) -> str:
        return dig_str(event, "choices", 0, "delta", self.KEY_REASONING_CONTENT)

    def parse_tool_calls_chunk(self, event: Any) -> List[ToolCall]:
        done: List[ToolCall] = []
        for tc in dicts(dig_list(event, "choices", 0, "delta", "tool_calls")):
            key = tc.get("index", tc.get("id"))
            args = dig(tc, "function", "arguments")
            done.extend(
                self.tool_buffer.append(
                    key,
                    args if isinstance(args, str) else (json.dumps(args) if args else None),
                    call_id=tc.get("id"),
                    name=dig(tc, "function", "name"),
                )
            )
        if dig(event, "choices", 0, "finish_reason"):
            # calls whose arguments never arrived complete with an empty object
            done.extend(self.tool_buffer.close_all())
        return done

    def parse_stream_error(self, event: Any) -> Optional[str]:
        err = dig(event, "error")
        if err is None:
            return None
        if isinstance(err, dict):
            return str(err.get("message") or err)
        return str(err)


__all__ = ["OpenAIStyleAdapter", "wrap_function_tool"]
