"""Tickflow runtime modules."""

from tickflow.runtime.concurrent import Concurrent
from tickflow.runtime.config import TickflowConfig, load_config
from tickflow.runtime.control_flow import Adapted
from tickflow.runtime.coroutine import Coroutine
from tickflow.runtime.logging import setup_logging
from tickflow.runtime.loop import RuntimeTickLoop
from tickflow.runtime.waits import RunningState, Sampled

__all__ = [
    "Adapted",
    "Concurrent",
    "Coroutine",
    "RunningState",
    "RuntimeTickLoop",
    "Sampled",
    "TickflowConfig",
    "load_config",
    "setup_logging",
]
