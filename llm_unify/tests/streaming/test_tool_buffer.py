"""Tool-call fragment accumulation across stream events."""
from __future__ import annotations

from llm_unify.base.streaming.tool_buffer import ToolCallBuffer
from llm_unify.openai.client import OpenAIAdapter
from llm_unify.base.openai_style import OpenAIStyleAdapter


def test_split_arguments_complete_on_third_chunk():
    adapter = OpenAIStyleAdapter()
    chunks = [
        {"choices": [{"delta": {"tool_calls": [{"index": 0, "id": "call_9", "function": {"name": "get_weather", "arguments": ""}}]}}]},
        {"choices": [{"delta": {"tool_calls": [{"index": 0, "function": {"arguments": '{"city": "Pa'}}]}}]},
        {"choices": [{"delta": {"tool_calls": [{"index": 0, "function": {"arguments": 'ris"}'}}]}}]},
    ]
    assert adapter.parse_tool_calls_chunk(chunks[0]) == []  # nosec B101 - pytest assert in tests
    assert adapter.parse_tool_calls_chunk(chunks[1]) == []  # nosec B101 - pytest assert in tests
    done = adapter.parse_tool_calls_chunk(chunks[2])
    assert len(done) == 1  # nosec B101 - pytest assert in tests
    assert done[0].id == "call_9" and done[0].name == "get_weather"  # nosec B101
    assert done[0].input == {"city": "Paris"}  # nosec B101 - pytest assert in tests


def test_late_fragments_after_completion_are_ignored():
    buf = ToolCallBuffer()
    buf.start(0, call_id="c", name="f")
    assert len(buf.append(0, "{}")) == 1  # nosec B101 - pytest assert in tests
    assert buf.append(0, "{}") == [] and buf.close(0) == []  # nosec B101
    assert buf.pending() == 0  # nosec B101 - pytest assert in tests


def test_close_completes_calls_without_arguments():
    buf = ToolCallBuffer()
    buf.start("block-1", call_id="toolu_1", name="now")
    done = buf.close("block-1")
    assert done[0].input == {}  # nosec B101 - pytest assert in tests


def test_close_all_flushes_pending_in_arrival_order():
    buf = ToolCallBuffer()
    buf.start(1, call_id="b", name="second")
    buf.start(0, call_id="a", name="first")
    buf.append(2, '{"half": ', call_id="c", name="broken")
    done = buf.close_all()
    assert [c.id for c in done] == ["b", "a"]  # nosec B101 - pytest assert in tests
    assert buf.pending() == 1  # nosec B101 - pytest assert in tests


def test_missing_name_keeps_call_pending_and_id_is_synthesized():
    buf = ToolCallBuffer()
    assert buf.append(1, '{"x": 1}') == []  # nosec B101 - pytest assert in tests
    done = buf.append(1, None, name="late_name")
    assert done[0].name == "late_name" and done[0].id.startswith("call_")  # nosec B101


def test_replace_overrides_accumulated_fragments():
    adapter = OpenAIAdapter()
    adapter.parse_tool_calls_chunk(
        {"type": "response.output_item.added", "item": {"type": "function_call", "id": "fc_1", "call_id": "call_1", "name": "lookup"}}
    )
    adapter.parse_tool_calls_chunk({"type": "response.function_call_arguments.delta", "item_id": "fc_1", "delta": '{"q": '})
    done = adapter.parse_tool_calls_chunk(
        {"type": "response.function_call_arguments.done", "item_id": "fc_1", "arguments": '{"q": "sky"}'}
    )
    assert [c.input for c in done] == [{"q": "sky"}]  # nosec B101 - pytest assert in tests
    assert done[0].id == "call_1"  # nosec B101 - pytest assert in tests


def test_reset_clears_state():
    buf = ToolCallBuffer()
    buf.start(0, name="f")
    buf.reset()
    assert buf.pending() == 0  # nosec B101 - pytest assert in tests
