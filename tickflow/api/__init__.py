"""Public tickflow API contracts."""

from tickflow.api.behaviours import (
    Behaviour,
    BehaviourResolution,
    BehaviourValue,
    all_active,
    any_active,
    create_behaviour_coroutine,
    create_concurrent_node,
    create_fixed_priority_node,
    first_value,
)
from tickflow.api.coroutines import (
    Completion,
    adapt,
    call,
    concurrent_call,
    create_concurrent,
    create_coroutine,
    execute_while,
    execute_while_running,
    execute_while_true,
    true_while_running,
    wait_for_seconds,
    wait_for_ticks,
)
from tickflow.api.errors import (
    CallDepthError,
    DisposedStateError,
    NotRestartableError,
    NoValueError,
    ReentrantUpdateError,
    RunawaySequenceError,
    StateError,
)
from tickflow.api.instructions import (
    SUSPEND,
    Call,
    Emit,
    Instruction,
    Sequence,
    Suspend,
    as_instruction,
    sequence,
)
from tickflow.api.logging import LoggingConfig, configure_logging, stop_logging
from tickflow.api.loop import RootSpec, TickLoop, create_tick_loop
from tickflow.api.state import State, value_or

__all__ = [
    "Behaviour",
    "BehaviourResolution",
    "BehaviourValue",
    "Call",
    "CallDepthError",
    "Completion",
    "DisposedStateError",
    "Emit",
    "Instruction",
    "LoggingConfig",
    "NoValueError",
    "NotRestartableError",
    "ReentrantUpdateError",
    "RootSpec",
    "RunawaySequenceError",
    "SUSPEND",
    "Sequence",
    "State",
    "StateError",
    "Suspend",
    "TickLoop",
    "adapt",
    "all_active",
    "any_active",
    "as_instruction",
    "call",
    "concurrent_call",
    "configure_logging",
    "create_behaviour_coroutine",
    "create_concurrent",
    "create_concurrent_node",
    "create_coroutine",
    "create_fixed_priority_node",
    "create_tick_loop",
    "execute_while",
    "execute_while_running",
    "execute_while_true",
    "first_value",
    "sequence",
    "stop_logging",
    "true_while_running",
    "value_or",
    "wait_for_seconds",
    "wait_for_ticks",
]
