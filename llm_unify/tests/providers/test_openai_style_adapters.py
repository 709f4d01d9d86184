"""OpenAI-compatible adapters and their per-service deviations."""
from __future__ import annotations

import pytest

from llm_unify.base.dto.adapter_params import AdapterParams
from llm_unify.base.dto.tool_call import ToolCall
from llm_unify.base.models import Attachment, Message, MessageContent
from llm_unify.base.openai_style import OpenAIStyleAdapter
from llm_unify.deepseek import DeepSeekAdapter
from llm_unify.google import GoogleAdapter
from llm_unify.groq import GroqAdapter
from llm_unify.llamafile import LlamafileAdapter
from llm_unify.openrouter import OpenRouterAdapter
from llm_unify.xai import XAIAdapter

USER = [Message(role="user", content="hi")]


@pytest.mark.parametrize(
    "cls,url",
    [
        (DeepSeekAdapter, "https://api.deepseek.com/v1/chat/completions"),
        (XAIAdapter, "https://api.x.ai/v1/chat/completions"),
        (GroqAdapter, "https://api.groq.com/openai/v1/chat/completions"),
        (OpenRouterAdapter, "https://openrouter.ai/api/v1/chat/completions"),
        (GoogleAdapter, "https://generativelanguage.googleapis.com/v1beta/openai/chat/completions"),
        (LlamafileAdapter, "http://localhost:8080/v1/chat/completions"),
    ],
)
def test_chat_urls(cls, url):
    assert cls(AdapterParams(api_key="k")).chat_url == url  # nosec B101 - pytest assert in tests


def test_generic_adapter_serves_a_custom_service():
    adapter = OpenAIStyleAdapter(AdapterParams(service="vllm", base_url="http://gpu:8000/v1", model="qwen"))
    req = adapter.build_request({"messages": USER, "stream": True})
    assert adapter.service_name == "vllm"  # nosec B101 - pytest assert in tests
    assert req.url == "http://gpu:8000/v1/chat/completions"  # nosec B101 - pytest assert in tests
    assert req.body["model"] == "qwen"  # nosec B101 - pytest assert in tests
    assert req.body["stream_options"] == {"include_usage": True}  # nosec B101 - pytest assert in tests


def test_consecutive_tool_calls_share_one_assistant_turn():
    messages = [
        Message(role="user", content="weather?"),
        Message(role="tool_call", content=ToolCall(id="a", name="w", input={"city": "Oslo"})),
        Message(role="tool_call", content=ToolCall(id="b", name="w", input={"city": "Rome"})),
    ]
    body = DeepSeekAdapter().build_request({"messages": messages}).body
    assert len(body["messages"]) == 2  # nosec B101 - pytest assert in tests
    turn = body["messages"][1]
    assert [c["id"] for c in turn["tool_calls"]] == ["a", "b"]  # nosec B101 - pytest assert in tests
    assert "_merge" not in turn  # nosec B101 - pytest assert in tests


def test_attachments_become_content_parts():
    content = MessageContent(text="what is this", attachments=(Attachment.from_url("https://x/y.png"),))
    body = XAIAdapter().build_request({"messages": [Message(role="user", content=content)]}).body
    parts = body["messages"][0]["content"]
    assert parts[0] == {"type": "text", "text": "what is this"}  # nosec B101 - pytest assert in tests
    assert parts[1] == {"type": "image_url", "image_url": {"url": "https://x/y.png"}}  # nosec B101


def test_stream_tool_call_fragments_by_index():
    adapter = DeepSeekAdapter()
    first = {"choices": [{"delta": {"tool_calls": [{"index": 0, "id": "call_7", "function": {"name": "f", "arguments": ""}}]}}]}
    mid = {"choices": [{"delta": {"tool_calls": [{"index": 0, "function": {"arguments": '{"n":'}}]}}]}
    last = {"choices": [{"delta": {"tool_calls": [{"index": 0, "function": {"arguments": " 3}"}}]}}]}
    assert adapter.parse_tool_calls_chunk(first) == []  # nosec B101 - pytest assert in tests
    assert adapter.parse_tool_calls_chunk(mid) == []  # nosec B101 - pytest assert in tests
    assert adapter.parse_tool_calls_chunk(last) == [ToolCall(id="call_7", name="f", input={"n": 3})]  # nosec B101


def test_stream_tool_call_without_arguments_completes_on_finish_reason():
    adapter = DeepSeekAdapter()
    nonstream = {
        "choices": [
            {"message": {"tool_calls": [{"id": "call_1", "type": "function", "function": {"name": "now", "arguments": ""}}]}}
        ]
    }
    start = {"choices": [{"delta": {"tool_calls": [{"index": 0, "id": "call_1", "function": {"name": "now", "arguments": ""}}]}}]}
    finish = {"choices": [{"delta": {}, "finish_reason": "tool_calls"}]}
    assert adapter.parse_tool_calls(nonstream) == [ToolCall(id="call_1", name="now", input={})]  # nosec B101
    assert adapter.parse_tool_calls_chunk(start) == []  # nosec B101 - pytest assert in tests
    assert adapter.parse_tool_calls_chunk(finish) == [ToolCall(id="call_1", name="now", input={})]  # nosec B101
    assert adapter.tool_buffer.pending() == 0  # nosec B101 - pytest assert in tests


def test_deepseek_reasoning_content():
    adapter = DeepSeekAdapter()
    body = {"choices": [{"message": {"content": "4", "reasoning_content": "2+2"}}], "usage": {"prompt_tokens": 5, "completion_tokens": 7}}
    assert adapter.parse_thinking(body) == "2+2"  # nosec B101 - pytest assert in tests
    assert adapter.parse_usage(body).output_tokens == 7  # nosec B101 - pytest assert in tests
    assert adapter.parse_thinking_chunk({"choices": [{"delta": {"reasoning_content": "2"}}]}) == "2"  # nosec B101


def test_openrouter_reasoning_request_and_key():
    adapter = OpenRouterAdapter()
    budget = adapter.build_request({"messages": USER, "think": True, "max_thinking_tokens": 500}).body
    effort = adapter.build_request({"messages": USER, "think": True}).body
    assert budget["reasoning"] == {"max_tokens": 500}  # nosec B101 - pytest assert in tests
    assert effort["reasoning"] == {"effort": "medium"}  # nosec B101 - pytest assert in tests
    assert "think" not in effort and "max_thinking_tokens" not in budget  # nosec B101
    assert adapter.parse_thinking_chunk({"choices": [{"delta": {"reasoning": "r"}}]}) == "r"  # nosec B101


def test_groq_options_usage_and_denylist():
    adapter = GroqAdapter()
    body = adapter.build_request({"messages": USER, "stream": True, "reasoning_effort": "high"}).body
    assert "reasoning_effort" not in body and body["reasoning_format"] == "parsed"  # nosec B101
    assert "stream_options" not in body  # nosec B101 - pytest assert in tests
    usage = adapter.parse_usage({"x_groq": {"usage": {"prompt_tokens": 4, "completion_tokens": 6}}})
    assert (usage.input_tokens, usage.output_tokens) == (4, 6)  # nosec B101 - pytest assert in tests
    assert not adapter.filter_quality_model(adapter.parse_model({"id": "playai-tts"}))  # nosec B101
    assert adapter.filter_quality_model(adapter.parse_model({"id": "llama-3.3-70b-versatile"}))  # nosec B101


def test_google_strips_model_prefix_and_prices_as_gemini():
    adapter = GoogleAdapter()
    info = adapter.parse_model({"id": "models/gemini-2.0-flash", "object": "model"})
    assert info.model == "gemini-2.0-flash" and info.name == "gemini-2.0-flash"  # nosec B101
    assert adapter.price_service == "gemini"  # nosec B101 - pytest assert in tests


def test_llamafile_drops_tools_and_lists_one_model():
    adapter = LlamafileAdapter()
    tools = [{"name": "f", "description": "", "input_schema": {"type": "object", "properties": {}}}]
    body = adapter.build_request({"messages": USER, "tools": tools, "max_tokens": 50}).body
    assert "tools" not in body and body["n_predict"] == 50  # nosec B101 - pytest assert in tests
    models = adapter.static_models()
    assert [m.model for m in models] == ["llamafile"] and adapter.is_local  # nosec B101
