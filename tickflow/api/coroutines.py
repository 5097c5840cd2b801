"""Public coroutine and control-flow API."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from typing import Any, overload

from tickflow.api.instructions import Call
from tickflow.api.state import State

SequenceSource = Iterable[Any] | Callable[[], Iterable[Any]]
NodeSource = State[Any] | SequenceSource


class Completion(Enum):
    """When a concurrent call returns control to its caller."""

    ALL = "all"
    ANY = "any"


def create_coroutine(source: SequenceSource, *, name: str | None = None) -> State[Any]:
    """Create tick-driven driver for an author-written sequence."""
    from tickflow.runtime.coroutine import Coroutine

    return Coroutine(source, name=name)


def create_concurrent[T, R](
    resolve: Callable[[Sequence[T]], R],
    children: Iterable[State[T]],
) -> State[R]:
    """Create group ticking every child and folding their values."""
    from tickflow.runtime.concurrent import Concurrent

    return Concurrent(resolve, children)


def call(sequence: Iterable[Any]) -> Call:
    """Run `sequence` as a nested frame of the current driver."""
    from tickflow.runtime.control_flow import call as _call

    return _call(sequence)


def concurrent_call(
    *sequences: SequenceSource,
    resolve: Callable[[Sequence[Any]], Any] | None = None,
    completion: Completion = Completion.ALL,
) -> Call:
    """Run several sequences side by side until `completion` is reached."""
    from tickflow.runtime.control_flow import concurrent_call as _concurrent_call

    return _concurrent_call(*sequences, resolve=resolve, completion=completion)


def execute_while(
    master: NodeSource,
    predicate: Callable[[Any], bool],
    *slaves: NodeSource,
) -> Call:
    """Tick `slaves` while `predicate` holds for the master's latest value."""
    from tickflow.runtime.control_flow import execute_while as _execute_while

    return _execute_while(master, predicate, *slaves)


def execute_while_running(master: SequenceSource, *slaves: NodeSource) -> Call:
    """Tick `slaves` for as long as `master` runs."""
    from tickflow.runtime.control_flow import execute_while_running as _execute_while_running

    return _execute_while_running(master, *slaves)


def execute_while_true(condition: Callable[[], bool], *slaves: NodeSource) -> Call:
    """Tick `slaves` while `condition()` holds."""
    from tickflow.runtime.control_flow import execute_while_true as _execute_while_true

    return _execute_while_true(condition, *slaves)


@overload
def adapt[A, B](source: Call, transform: Callable[[A], B]) -> Call: ...


@overload
def adapt[A, B](source: State[A] | SequenceSource, transform: Callable[[A], B]) -> State[B]: ...


def adapt[A, B](
    source: State[A] | SequenceSource | Call, transform: Callable[[A], B]
) -> State[B] | Call:
    """Expose `source` through a pure value transform.

    A `Call` source yields a `Call` emitting transformed values of the nested
    sequence; any other source yields a transformed state.
    """
    from tickflow.runtime.control_flow import adapt as _adapt

    return _adapt(source, transform)


def wait_for_ticks(count: int) -> Call:
    """Suspend the caller for `count` ticks."""
    from tickflow.runtime.waits import wait_for_ticks as _wait_for_ticks

    return _wait_for_ticks(count)


def wait_for_seconds(
    seconds: float,
    *,
    delta_seconds: float | Callable[[], float] | None = None,
) -> Call:
    """Suspend the caller for `seconds` measured in tick durations."""
    from tickflow.runtime.waits import wait_for_seconds as _wait_for_seconds

    return _wait_for_seconds(seconds, delta_seconds=delta_seconds)


def true_while_running(source: SequenceSource) -> State[bool]:
    """Boolean state that is true while `source` runs."""
    from tickflow.runtime.waits import true_while_running as _true_while_running

    return _true_while_running(source)
