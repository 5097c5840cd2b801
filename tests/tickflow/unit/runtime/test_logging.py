from __future__ import annotations

import json
import logging
from pathlib import Path

from tickflow.api.logging import LoggingConfig, configure_logging, stop_logging
from tickflow.runtime import logging as runtime_logging
from tickflow.runtime.logging import JsonFormatter, get_logger, setup_logging


def test_setup_logging_adds_handler_when_missing(monkeypatch) -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        root.handlers.clear()
        root.setLevel(logging.NOTSET)
        monkeypatch.setenv("TICKFLOW_LOG_LEVEL", "DEBUG")
        setup_logging()
        assert root.handlers
        assert root.level == logging.DEBUG
    finally:
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_setup_logging_does_not_override_existing_handlers() -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    sentinel = logging.NullHandler()
    try:
        root.handlers.clear()
        root.addHandler(sentinel)
        root.setLevel(logging.WARNING)
        setup_logging()
        assert root.handlers == [sentinel]
        assert root.level == logging.WARNING
    finally:
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_configure_logging_streams_json_to_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    log_path = tmp_path / "logs" / "tickflow.jsonl"
    try:
        configure_logging(LoggingConfig(level_name="info", file_path=str(log_path)))
        get_logger("loop").info("tick_done", extra={"tick_index": 4})
        stop_logging()

        lines = log_path.read_text(encoding="utf-8").splitlines()
        payload = json.loads(lines[-1])
        assert payload["logger"] == "tickflow.loop"
        assert payload["msg"] == "tick_done"
        assert payload["fields"] == {"tick_index": 4}
        assert root.level == logging.INFO
    finally:
        stop_logging()
        for handler in root.handlers:
            handler.close()
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_json_formatter_serializes_unknown_extras_with_repr() -> None:
    record = logging.LogRecord(
        name="tickflow.coroutine",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="frame %s",
        args=("main",),
        exc_info=None,
    )
    record.node = object()

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["msg"] == "frame main"
    assert payload["fields"]["node"].startswith("<object object")


def test_get_logger_namespaces_under_tickflow() -> None:
    assert get_logger("loop").name == "tickflow.loop"
    assert get_logger("tickflow.loop").name == "tickflow.loop"
    assert get_logger("tickflow").name == "tickflow"


def test_setup_logging_enables_coroutine_trace_logger(monkeypatch) -> None:
    root = logging.getLogger()
    trace_logger = logging.getLogger("tickflow.coroutine")
    original_handlers = list(root.handlers)
    original_level = root.level
    original_trace_level = trace_logger.level
    try:
        root.handlers.clear()
        monkeypatch.setenv("TICKFLOW_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("TICKFLOW_TRACE", "1")
        setup_logging()
        assert root.level == logging.WARNING
        assert trace_logger.level == logging.DEBUG
    finally:
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)
        trace_logger.setLevel(original_trace_level)


def test_queued_file_logging_registers_exit_flush_once(monkeypatch, tmp_path: Path) -> None:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    registered: list[object] = []
    monkeypatch.setattr(runtime_logging, "_STOP_REGISTERED", False)
    monkeypatch.setattr(runtime_logging.atexit, "register", registered.append)
    config = LoggingConfig(file_path=str(tmp_path / "tickflow.log"), file_format="text")
    try:
        configure_logging(config)
        configure_logging(config)
        assert registered == [runtime_logging.stop_logging]
    finally:
        stop_logging()
        for handler in root.handlers:
            handler.close()
        root.handlers.clear()
        root.handlers.extend(original_handlers)
        root.setLevel(original_level)


def test_json_formatter_keeps_only_caller_extras() -> None:
    record = logging.LogRecord(
        name="tickflow.loop",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="tick_done",
        args=None,
        exc_info=None,
    )
    record.tick_index = 7

    payload = json.loads(JsonFormatter().format(record))

    assert payload["fields"] == {"tick_index": 7}
