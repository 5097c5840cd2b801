"""Tickflow logging implementation."""

from __future__ import annotations

import atexit
import json
import logging
import queue
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from tickflow.api.logging import LoggingConfig
from tickflow.runtime.config import load_config

_QUEUE_LISTENER: QueueListener | None = None
_STOP_REGISTERED = False
TRACE_LOGGERS: tuple[str, ...] = ("tickflow.coroutine",)

_STANDARD_RECORD_FIELDS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", None, None).__dict__
) | {"message"}


class JsonFormatter(logging.Formatter):
    """JSON formatter with extra-field preservation."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_FIELDS}
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=repr)


def configure_logging(config: LoggingConfig) -> None:
    """Configure root logging with optional queued file streaming."""
    global _QUEUE_LISTENER, _STOP_REGISTERED

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None

    level = getattr(logging, config.level_name.upper(), logging.INFO)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_resolve_formatter(config.console_format))
    handlers: list[logging.Handler] = [console_handler]

    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(_resolve_formatter(config.file_format))
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    for name in config.trace_loggers:
        get_logger(name).setLevel(logging.DEBUG)

    if len(handlers) == 1:
        root.addHandler(handlers[0])
        return

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(log_queue))
    _QUEUE_LISTENER = QueueListener(log_queue, *handlers, respect_handler_level=True)
    _QUEUE_LISTENER.start()
    if not _STOP_REGISTERED:
        atexit.register(stop_logging)
        _STOP_REGISTERED = True


def stop_logging() -> None:
    """Flush and stop the queued file listener if one is running."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is None:
        return
    _QUEUE_LISTENER.stop()
    _QUEUE_LISTENER = None


def setup_logging() -> None:
    """Configure minimal logging if no handlers are present.

    With `TICKFLOW_TRACE` set, coroutine instruction traces are shown even when
    the root level is above DEBUG.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    config = load_config()
    configure_logging(
        LoggingConfig(
            level_name=config.log_level,
            console_format="text",
            file_path=None,
            file_format="json",
            trace_loggers=TRACE_LOGGERS if config.trace_enabled else (),
        )
    )


def get_logger(name: str) -> logging.Logger:
    """Return logger namespaced under `tickflow`."""
    if name == "tickflow" or name.startswith("tickflow."):
        return logging.getLogger(name)
    return logging.getLogger(f"tickflow.{name}")


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
