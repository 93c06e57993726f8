"""Unit coverage for structured logging utilities and helpers."""

from __future__ import annotations

import json
import logging

from chat_runtime.base.log_support import JsonFormatter
from chat_runtime.base.logging import LogContext, configure_logger, get_logger, log_event


def test_log_event_drops_none_and_merges_context(log_events) -> None:
    logger = get_logger("chat_runtime.test.events")
    ctx = LogContext(provider="openai", model="gpt-4o", extra={"task": "t", "skip": None})
    log_event(logger, "demo.event", ctx, count=2, missing=None)
    [payload] = log_events.named("demo.event")
    assert payload["provider"] == "openai"
    assert payload["task"] == "t"
    assert payload["count"] == 2
    assert "missing" not in payload
    assert "skip" not in payload
    assert "public_name" not in payload


def test_log_event_respects_level(log_events) -> None:
    logger = get_logger("chat_runtime.test.levels")
    base = logging.getLogger("chat_runtime")
    base.setLevel(logging.WARNING)
    log_event(logger, "quiet.event")
    log_event(logger, "loud.event", level=logging.ERROR)
    assert log_events.names() == ["loud.event"]


def test_json_formatter_hoists_json_message() -> None:
    formatter = JsonFormatter()
    record = logging.LogRecord(
        name="chat_runtime.test.json",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=json.dumps({"event": "chat.start", "model": "m"}),
        args=(),
        exc_info=None,
    )
    payload = json.loads(formatter.format(record))
    assert payload["event"] == "chat.start"
    assert payload["model"] == "m"
    assert payload["level"] == "INFO"
    assert "msg" not in payload


def test_json_formatter_keeps_plain_messages() -> None:
    record = logging.LogRecord("x", logging.WARNING, __file__, 0, "plain %s", ("text",), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "plain text"


def test_configure_logger_attaches_and_removes_file_handler(tmp_path) -> None:
    log_file = tmp_path / "logs" / "runtime.log"
    base = configure_logger(file_path=str(log_file))
    try:
        log_event(get_logger("chat_runtime.test.file"), "file.event", value=1)
        for handler in base.handlers:
            handler.flush()
        lines = log_file.read_text(encoding="utf-8").strip().splitlines()
        assert json.loads(lines[-1])["event"] == "file.event"
    finally:
        configure_logger(file_path=None)
    assert not any(getattr(h, "baseFilename", None) == str(log_file) for h in base.handlers)


def test_child_loggers_share_the_base_handler() -> None:
    base = get_logger()
    child = get_logger("chat_runtime.test.child")
    assert child.propagate is True
    assert child.handlers == []
    assert base.propagate is False
    assert len([h for h in base.handlers if isinstance(h, logging.StreamHandler)]) >= 1
