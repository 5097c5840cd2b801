"""Tickflow runtime configuration sourced from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_TICK_SECONDS = 1.0 / 60.0
DEFAULT_MAX_CALL_DEPTH = 256
DEFAULT_MAX_STEPS_PER_TICK = 10_000


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class TickflowConfig:
    """Immutable scheduler configuration."""

    tick_seconds: float = DEFAULT_TICK_SECONDS
    max_call_depth: int = DEFAULT_MAX_CALL_DEPTH
    max_steps_per_tick: int = DEFAULT_MAX_STEPS_PER_TICK
    trace_enabled: bool = False
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.tick_seconds <= 0.0:
            raise ValueError("tick_seconds must be > 0")
        if self.max_call_depth <= 0:
            raise ValueError("max_call_depth must be > 0")
        if self.max_steps_per_tick <= 0:
            raise ValueError("max_steps_per_tick must be > 0")


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve log level with tickflow-prefixed override."""
    value = os.getenv("TICKFLOW_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def load_config() -> TickflowConfig:
    """Load immutable configuration from env vars."""
    tick_seconds = _float("TICKFLOW_TICK_SECONDS", DEFAULT_TICK_SECONDS)
    max_call_depth = _int("TICKFLOW_MAX_CALL_DEPTH", DEFAULT_MAX_CALL_DEPTH)
    max_steps = _int("TICKFLOW_MAX_STEPS_PER_TICK", DEFAULT_MAX_STEPS_PER_TICK)
    return TickflowConfig(
        tick_seconds=tick_seconds if tick_seconds > 0.0 else DEFAULT_TICK_SECONDS,
        max_call_depth=max_call_depth if max_call_depth > 0 else DEFAULT_MAX_CALL_DEPTH,
        max_steps_per_tick=max_steps if max_steps > 0 else DEFAULT_MAX_STEPS_PER_TICK,
        trace_enabled=_flag("TICKFLOW_TRACE", False),
        log_level=resolve_log_level_name(),
    )