"""Structured logging helpers and the engine's lifecycle events."""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from typing import List

from llm_unify.base.logging import LogContext, configure_logger, get_logger, log_event, normalized_log_event
from llm_unify.base.log_support import JsonFormatter
from llm_unify.base.models import TokenUsage
from llm_unify.engine import CompletionEngine

from .helpers import Recorder, json_body


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def events(self) -> List[dict]:
        return [json.loads(r.getMessage()) for r in self.records]


def _capture(name: str, level: int = logging.DEBUG) -> _ListHandler:
    handler = _ListHandler()
    logger = logging.getLogger(name)
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


def test_get_logger_nests_under_package_logger():
    assert get_logger("engine").name == "llm_unify.engine"  # nosec B101 - pytest assert in tests
    assert get_logger("llm_unify.x").name == "llm_unify.x"  # nosec B101 - pytest assert in tests
    assert get_logger().propagate is False  # nosec B101 - pytest assert in tests


def test_log_event_drops_none_and_merges_context():
    handler = _capture("tests.log_event")
    logger = logging.getLogger("tests.log_event")
    ctx = LogContext(service="deepseek", model="deepseek-chat", extra={"tenant": "t1", "skip": None})
    log_event(logger, "send.start", ctx, attempt=1, missing=None)
    (event,) = handler.events()
    assert event == {  # nosec B101 - pytest assert in tests
        "event": "send.start",
        "service": "deepseek",
        "model": "deepseek-chat",
        "tenant": "t1",
        "attempt": 1,
    }
    logger.removeHandler(handler)


def test_log_event_respects_level():
    handler = _capture("tests.level", logging.WARNING)
    log_event(logging.getLogger("tests.level"), "quiet", None, level=logging.DEBUG)
    assert handler.records == []  # nosec B101 - pytest assert in tests
    logging.getLogger("tests.level").removeHandler(handler)


def test_normalized_event_keeps_canonical_keys():
    handler = _capture("tests.normalized")
    logger = logging.getLogger("tests.normalized")
    normalized_log_event(logger, "stream.end", None, phase="finalize", emitted=3, tokens=TokenUsage(4, 2), chunk=None)
    (event,) = handler.events()
    assert event["phase"] == "finalize" and event["emitted"] == 3  # nosec B101 - pytest assert in tests
    assert event["tokens"] == {"input_tokens": 4, "output_tokens": 2}  # nosec B101
    assert "error_code" not in event and "chunk" not in event  # nosec B101 - pytest assert in tests
    logger.removeHandler(handler)


def test_json_formatter_inlines_structured_message():
    record = logging.LogRecord("llm_unify.t", logging.INFO, __file__, 1, json.dumps({"event": "x", "n": 1}), None, None)
    record.request_id = "abc"
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "x" and out["n"] == 1 and "msg" not in out  # nosec B101
    assert out["level"] == "INFO" and out["request_id"] == "abc"  # nosec B101 - pytest assert in tests


def test_engine_emits_send_lifecycle_events():
    handler = _capture("llm_unify.engine", logging.INFO)
    try:
        body = {"message": {"role": "assistant", "content": "blue"}, "done": True, "prompt_eval_count": 3, "eval_count": 1}
        engine = CompletionEngine("sky?", service="ollama", client=Recorder(json_body(body)).client())
        engine.send()
        events = handler.events()
        assert [e["event"] for e in events] == ["send.start", "send.end"]  # nosec B101
        assert events[0]["service"] == "ollama" and events[0]["request_id"]  # nosec B101
        assert events[1]["tokens"] == {"input_tokens": 3, "output_tokens": 1}  # nosec B101
    finally:
        logging.getLogger("llm_unify.engine").removeHandler(handler)
        logging.getLogger("llm_unify.engine").setLevel(logging.NOTSET)


def _file_handlers(logger: logging.Logger) -> List[RotatingFileHandler]:
    return [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]


def test_configure_logger_attaches_and_replaces_file_handler(tmp_path):
    logger = get_logger()
    previous = logger.level
    first = tmp_path / "logs" / "first.log"
    second = tmp_path / "second.log"
    try:
        assert configure_logger(level="INFO", file_path=str(first)) is logger  # nosec B101
        assert logger.level == logging.INFO  # nosec B101 - pytest assert in tests
        get_logger("engine").info(json.dumps({"event": "send.start", "service": "ollama"}))
        line = first.read_text(encoding="utf-8").strip()
        assert json.loads(line)["event"] == "send.start"  # nosec B101 - pytest assert in tests

        configure_logger(file_path=str(second))
        (handler,) = _file_handlers(logger)
        assert handler.baseFilename == str(second)  # nosec B101 - pytest assert in tests

        configure_logger(file_path=str(second), json_mode=False)
        (same,) = _file_handlers(logger)
        assert same is handler and not isinstance(same.formatter, JsonFormatter)  # nosec B101

        configure_logger(level=logging.ERROR, file_path=None)
        assert _file_handlers(logger) == [] and logger.level == logging.ERROR  # nosec B101
    finally:
        configure_logger(file_path=None)
        logger.setLevel(previous)
