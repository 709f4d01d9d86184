"""OpenAI Responses adapter: request shape, body parsing and stream events."""
from __future__ import annotations

from llm_unify.base.dto.adapter_params import AdapterParams
from llm_unify.base.dto.tool_call import ToolCall
from llm_unify.base.dto.tool_result import ToolResult
from llm_unify.base.models import Message
from llm_unify.openai import OpenAIAdapter


def _adapter() -> OpenAIAdapter:
    return OpenAIAdapter(AdapterParams(api_key="sk-live-123"))


def test_build_request_renames_fields_and_wraps_tools():
    options = {
        "model": "gpt-4o-mini",
        "max_tokens": 64,
        "think": True,
        "tools": [{"name": "lookup", "description": "find", "input_schema": {"type": "object", "properties": {}}}],
        "messages": [Message(role="user", content="hi")],
    }
    req = _adapter().build_request(options)
    assert req.url == "https://api.openai.com/v1/responses"  # nosec B101
    assert req.headers["Authorization"] == "Bearer sk-live-123"  # nosec B101 - pytest assert in tests
    body = req.body
    assert "messages" not in body and body["input"] == [{"role": "user", "content": "hi"}]  # nosec B101
    assert body["max_output_tokens"] == 64 and "max_tokens" not in body  # nosec B101
    assert body["reasoning"] == {"effort": "medium", "summary": "detailed"}  # nosec B101
    tool = body["tools"][0]
    assert tool["type"] == "function" and tool["strict"] is True  # nosec B101 - pytest assert in tests
    assert tool["parameters"]["additionalProperties"] is False  # nosec B101 - pytest assert in tests
    assert "think" not in body  # nosec B101 - pytest assert in tests


def test_build_request_does_not_mutate_input():
    messages = [Message(role="user", content="hi")]
    options = {"model": "gpt-4o", "messages": messages, "max_tokens": 10}
    adapter = _adapter()
    first = adapter.build_request(options)
    second = adapter.build_request(options)
    assert options == {"model": "gpt-4o", "messages": messages, "max_tokens": 10}  # nosec B101
    assert first == second  # nosec B101 - pytest assert in tests


def test_tool_history_is_serialized_as_function_items():
    call = ToolCall(id="call_1", name="lookup", input={"q": "x"})
    messages = [
        Message(role="user", content="go"),
        Message(role="tool_call", content=call),
        Message(role="tool_result", content=ToolResult(tool_call_id="call_1", content={"ok": True})),
    ]
    body = _adapter().build_request({"messages": messages}).body
    assert body["input"][1] == {"type": "function_call", "call_id": "call_1", "name": "lookup", "arguments": '{"q": "x"}'}  # nosec B101
    assert body["input"][2] == {"type": "function_call_output", "call_id": "call_1", "output": '{"ok": true}'}  # nosec B101


def test_parse_full_body():
    body = {
        "output": [
            {"type": "reasoning", "summary": [{"type": "summary_text", "text": "considering"}]},
            {"type": "message", "role": "assistant", "content": [{"type": "output_text", "text": "blue"}]},
            {"type": "function_call", "call_id": "call_9", "name": "paint", "arguments": '{"color": "blue"}'},
        ],
        "usage": {"input_tokens": 12, "output_tokens": 3},
    }
    adapter = _adapter()
    assert adapter.parse_content(body) == "blue"  # nosec B101 - pytest assert in tests
    assert adapter.parse_thinking(body) == "considering"  # nosec B101 - pytest assert in tests
    assert adapter.parse_tool_calls(body) == [ToolCall(id="call_9", name="paint", input={"color": "blue"})]  # nosec B101
    usage = adapter.parse_usage(body)
    assert (usage.input_tokens, usage.output_tokens) == (12, 3)  # nosec B101 - pytest assert in tests


def test_parsers_tolerate_irrelevant_payloads():
    adapter = _adapter()
    for payload in ({}, {"type": "response.created"}, [], None, "text"):
        assert adapter.parse_content(payload) == ""  # nosec B101 - pytest assert in tests
        assert adapter.parse_content_chunk(payload) == ""  # nosec B101 - pytest assert in tests
        assert adapter.parse_tool_calls_chunk(payload) == []  # nosec B101 - pytest assert in tests
        assert adapter.parse_usage(payload) is None  # nosec B101 - pytest assert in tests


def test_stream_events_accumulate_function_arguments():
    adapter = _adapter()
    adapter.reset_stream_state()
    added = {
        "type": "response.output_item.added",
        "item": {"type": "function_call", "id": "fc_1", "call_id": "call_1", "name": "lookup", "arguments": ""},
    }
    assert adapter.parse_tool_calls_chunk(added) == []  # nosec B101 - pytest assert in tests
    part = {"type": "response.function_call_arguments.delta", "item_id": "fc_1", "delta": '{"q": '}
    assert adapter.parse_tool_calls_chunk(part) == []  # nosec B101 - pytest assert in tests
    rest = {"type": "response.function_call_arguments.delta", "item_id": "fc_1", "delta": '"sky"}'}
    assert adapter.parse_tool_calls_chunk(rest) == [ToolCall(id="call_1", name="lookup", input={"q": "sky"})]  # nosec B101
    done = {"type": "response.function_call_arguments.done", "item_id": "fc_1", "arguments": '{"q": "sky"}'}
    assert adapter.parse_tool_calls_chunk(done) == []  # nosec B101 - pytest assert in tests


def test_stream_text_reasoning_usage_and_terminal():
    adapter = _adapter()
    assert adapter.parse_content_chunk({"type": "response.output_text.delta", "delta": "bl"}) == "bl"  # nosec B101
    assert adapter.parse_thinking_chunk({"type": "response.reasoning_summary_text.delta", "delta": "hm"}) == "hm"  # nosec B101
    completed = {"type": "response.completed", "response": {"usage": {"input_tokens": 5, "output_tokens": 2}}}
    assert adapter.parse_usage(completed).output_tokens == 2  # nosec B101 - pytest assert in tests
    assert adapter.is_stream_done(completed)  # nosec B101 - pytest assert in tests
    assert adapter.parse_stream_error({"type": "error", "message": "bad"}) == "bad"  # nosec B101


def test_catalog_record():
    info = _adapter().parse_model({"id": "gpt-4o", "created": 1715367049, "object": "model"})
    assert info.model == "gpt-4o" and info.service == "openai"  # nosec B101 - pytest assert in tests
    assert info.created is not None and info.created.year == 2024  # nosec B101 - pytest assert in tests
