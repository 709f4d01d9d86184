"""Incremental decoding of SSE and NDJSON byte streams."""
from __future__ import annotations

import pytest

from llm_unify.base.errors import DecodeError
from llm_unify.base.streaming.sse_decoder import StreamDecoder, decode_stream


def test_sse_lines_split_across_chunks():
    chunks = [b'data: {"a"', b': 1}\n\nda', b'ta: {"b": 2}\n\n', b"data: [DONE]\n\n"]
    assert list(decode_stream(chunks)) == [{"a": 1}, {"b": 2}]  # nosec B101 - pytest assert in tests


def test_sse_fields_and_comments_are_ignored():
    body = b": keep-alive\nevent: message_start\nid: 7\nretry: 1000\ndata: {\"type\": \"ping\"}\r\n\r\n"
    assert list(decode_stream([body])) == [{"type": "ping"}]  # nosec B101 - pytest assert in tests


def test_ndjson_without_prefix():
    body = b'{"message": {"content": "bl"}}\n{"message": {"content": "ue"}, "done": true}\n'
    values = list(decode_stream([body]))
    assert [v["message"]["content"] for v in values] == ["bl", "ue"]  # nosec B101


def test_multibyte_character_split_across_chunks():
    raw = 'data: {"text": "café ☕"}\n\n'.encode("utf-8")
    split = raw.index("☕".encode("utf-8")) + 1
    assert list(decode_stream([raw[:split], raw[split:]])) == [{"text": "café ☕"}]  # nosec B101


def test_done_sentinel_stops_decoding():
    body = b'data: {"n": 1}\n\ndata: [DONE]\n\ndata: {"n": 2}\n\n'
    assert list(decode_stream([body])) == [{"n": 1}]  # nosec B101 - pytest assert in tests


def test_terminal_predicate_stops_decoding():
    body = b'{"n": 1}\n{"n": 2, "done": true}\n{"n": 3}\n'
    values = list(decode_stream([body], is_terminal=lambda v: v.get("done") is True))
    assert [v["n"] for v in values] == [1, 2]  # nosec B101 - pytest assert in tests


def test_value_spanning_several_data_lines():
    body = b'data: {"a":\ndata: 1}\n\n'
    assert list(decode_stream([body])) == [{"a": 1}]  # nosec B101 - pytest assert in tests


def test_trailing_line_without_newline_is_flushed_on_close():
    decoder = StreamDecoder()
    assert decoder.feed(b'data: {"last": true}') == []  # nosec B101 - pytest assert in tests
    assert decoder.close() == [{"last": True}]  # nosec B101 - pytest assert in tests


def test_unparseable_remainder_raises_decode_error():
    with pytest.raises(DecodeError) as info:
        list(decode_stream([b'data: {"ok": 1}\n\ndata: {"broken": \n']))
    assert '{"broken":' in info.value.remainder  # nosec B101 - pytest assert in tests


def test_complete_non_json_line_is_dropped_and_decoding_continues():
    body = b'data: {"a": 1}\n\ndata: keep-alive\n\ndata: {"b": 2}\n\n{"c": 3}\n'
    assert list(decode_stream([body])) == [{"a": 1}, {"b": 2}, {"c": 3}]  # nosec B101


def test_pretty_printed_value_is_not_dropped_line_by_line():
    body = b'{\n  "a": 1,\n  "b": [2]\n}\n'
    assert list(decode_stream([body])) == [{"a": 1, "b": [2]}]  # nosec B101 - pytest assert in tests


def test_unterminated_garbage_tail_still_raises_decode_error():
    with pytest.raises(DecodeError):
        list(decode_stream([b'data: {"ok": 1}\n\ndata: not json']))


def test_feed_after_done_is_noop():
    decoder = StreamDecoder()
    decoder.feed(b"data: [DONE]\n")
    assert decoder.done and decoder.feed(b'data: {"x": 1}\n') == []  # nosec B101
    assert decoder.close() == []  # nosec B101 - pytest assert in tests
