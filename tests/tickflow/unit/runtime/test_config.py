from __future__ import annotations

import pytest

from tickflow.runtime.config import (
    DEFAULT_MAX_CALL_DEPTH,
    DEFAULT_MAX_STEPS_PER_TICK,
    DEFAULT_TICK_SECONDS,
    TickflowConfig,
    load_config,
    resolve_log_level_name,
)

_ENV_VARS = (
    "TICKFLOW_TICK_SECONDS",
    "TICKFLOW_MAX_CALL_DEPTH",
    "TICKFLOW_MAX_STEPS_PER_TICK",
    "TICKFLOW_TRACE",
    "TICKFLOW_LOG_LEVEL",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_load_config_defaults() -> None:
    cfg = load_config()
    assert cfg.tick_seconds == DEFAULT_TICK_SECONDS
    assert cfg.max_call_depth == DEFAULT_MAX_CALL_DEPTH
    assert cfg.max_steps_per_tick == DEFAULT_MAX_STEPS_PER_TICK
    assert cfg.trace_enabled is False
    assert cfg.log_level == "INFO"


def test_load_config_parses_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TICKFLOW_TICK_SECONDS", "0.02")
    monkeypatch.setenv("TICKFLOW_MAX_CALL_DEPTH", "32")
    monkeypatch.setenv("TICKFLOW_MAX_STEPS_PER_TICK", "500")
    monkeypatch.setenv("TICKFLOW_TRACE", "yes")
    monkeypatch.setenv("TICKFLOW_LOG_LEVEL", "debug")

    cfg = load_config()
    assert cfg.tick_seconds == 0.02
    assert cfg.max_call_depth == 32
    assert cfg.max_steps_per_tick == 500
    assert cfg.trace_enabled is True
    assert cfg.log_level == "DEBUG"


def test_load_config_falls_back_on_malformed_or_non_positive_values(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("TICKFLOW_TICK_SECONDS", "fast")
    monkeypatch.setenv("TICKFLOW_MAX_CALL_DEPTH", "0")
    monkeypatch.setenv("TICKFLOW_MAX_STEPS_PER_TICK", "-4")

    cfg = load_config()
    assert cfg.tick_seconds == DEFAULT_TICK_SECONDS
    assert cfg.max_call_depth == DEFAULT_MAX_CALL_DEPTH
    assert cfg.max_steps_per_tick == DEFAULT_MAX_STEPS_PER_TICK


def test_resolve_log_level_prefers_tickflow_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    assert resolve_log_level_name() == "WARNING"
    monkeypatch.setenv("TICKFLOW_LOG_LEVEL", "error")
    assert resolve_log_level_name() == "ERROR"


def test_config_rejects_non_positive_limits() -> None:
    with pytest.raises(ValueError):
        TickflowConfig(tick_seconds=0.0)
    with pytest.raises(ValueError):
        TickflowConfig(max_call_depth=0)
    with pytest.raises(ValueError):
        TickflowConfig(max_steps_per_tick=0)
