"""Public tickflow logging API."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging pipeline configuration."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json
    # Loggers forced to DEBUG regardless of `level_name`.
    trace_loggers: tuple[str, ...] = ()


def configure_logging(config: LoggingConfig) -> None:
    """Configure root logging for an embedding application."""
    from tickflow.runtime.logging import configure_logging as _configure_logging

    _configure_logging(config)


def stop_logging() -> None:
    """Flush queued file logging before the embedding application exits."""
    from tickflow.runtime.logging import stop_logging as _stop_logging

    _stop_logging()
