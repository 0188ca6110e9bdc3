from __future__ import annotations

import json
import logging

import pytest

from conclave_providers.base.logging import BASE_LOGGER_NAME, LogContext, configure_logger, get_logger, log_event
from conclave_providers.base.log_support import JsonFormatter


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture()
def captured():
    logger = get_logger("tests.events")
    base = logging.getLogger(BASE_LOGGER_NAME)
    handler = _ListHandler()
    previous = base.level
    base.addHandler(handler)
    base.setLevel(logging.DEBUG)
    try:
        yield logger, handler
    finally:
        base.removeHandler(handler)
        base.setLevel(previous)


def test_child_loggers_share_base_hierarchy():
    assert get_logger("process").name == "conclave.process"
    assert get_logger("conclave.registry").name == "conclave.registry"
    assert get_logger().name == BASE_LOGGER_NAME


def test_log_event_payload(captured):
    logger, handler = captured
    log_event(logger, "cli.exec.start", LogContext(provider="claude", model="m"), args=["a"], skipped=None)
    payload = json.loads(handler.records[-1].getMessage())
    assert payload == {"event": "cli.exec.start", "provider": "claude", "model": "m", "args": ["a"]}


def test_log_event_keep_none(captured):
    logger, handler = captured
    log_event(logger, "x", keep_none=True, value=None)
    assert json.loads(handler.records[-1].getMessage()) == {"event": "x", "value": None}


def test_log_event_respects_level(captured):
    logger, handler = captured
    logging.getLogger(BASE_LOGGER_NAME).setLevel(logging.ERROR)
    log_event(logger, "quiet")
    assert handler.records == []


def test_json_formatter_hoists_event_keys():
    record = logging.LogRecord("conclave.t", logging.INFO, __file__, 1, json.dumps({"event": "e", "n": 1}), None, None)
    line = json.loads(JsonFormatter().format(record))
    assert line["event"] == "e"
    assert line["n"] == 1
    assert line["level"] == "INFO"
    assert "msg" not in line


def test_json_formatter_plain_message():
    record = logging.LogRecord("conclave.t", logging.WARNING, __file__, 1, "hello %s", ("there",), None)
    line = json.loads(JsonFormatter().format(record))
    assert line["msg"] == "hello there"


def test_log_context_flattens_extra():
    ctx = LogContext(provider="p", extra={"request_id": "r1", "skip": None})
    assert ctx.to_dict() == {"provider": "p", "request_id": "r1"}


def test_configure_logger_file_handler(tmp_path):
    path = tmp_path / "logs" / "conclave.log"
    base = logging.getLogger(BASE_LOGGER_NAME)
    previous = base.level
    try:
        configure_logger(level="INFO", file_path=str(path))
        log_event(get_logger("tests.file"), "to.file", n=2)
        for handler in base.handlers:
            handler.flush()
        lines = path.read_text(encoding="utf-8").strip().splitlines()
        assert json.loads(lines[-1])["event"] == "to.file"
    finally:
        configure_logger(level=previous, file_path=None)


def test_log_context_with_extra_is_a_copy():
    base = LogContext(provider="codex")
    derived = base.with_extra(command="codex")
    assert base.to_dict() == {"provider": "codex"}
    assert derived.to_dict() == {"provider": "codex", "command": "codex"}
