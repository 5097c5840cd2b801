"""Public behaviour-layer API contracts."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from typing import Any, Protocol


class BehaviourValue(Enum):
    """What a behaviour node is doing this tick."""

    # Doing something observable.
    ACTIVE = "active"
    # Idle, only polled so it can check its trigger conditions.
    WAITING = "waiting"


BehaviourResolution = Callable[[Sequence[BehaviourValue]], BehaviourValue]


class Behaviour(Protocol):
    """Behaviour node contract: a polling state that always has a value."""

    @property
    def has_value(self) -> bool:
        """Always true."""

    @property
    def value(self) -> BehaviourValue:
        """Return current behaviour state."""

    @property
    def state(self) -> BehaviourValue:
        """Return current behaviour state."""

    def update(self) -> None:
        """Advance by one tick."""

    def reset(self) -> None:
        """Abort in-flight work and restart."""

    def dispose(self) -> None:
        """Release permanently."""


def create_behaviour_coroutine(
    source: Iterable[Any] | Callable[[], Iterable[Any]],
    *,
    restart_on_completion: bool = False,
) -> Behaviour:
    """Create behaviour node driven by an author-written sequence."""
    from tickflow.behaviours.nodes import BehaviourCoroutine

    return BehaviourCoroutine(source, restart_on_completion=restart_on_completion)


def create_fixed_priority_node(children: Iterable[Behaviour]) -> Behaviour:
    """Create priority arbitration node; first child has highest priority."""
    from tickflow.behaviours.nodes import FixedPriorityNode

    return FixedPriorityNode(children)


def create_concurrent_node(
    resolve: BehaviourResolution,
    children: Iterable[Behaviour],
) -> Behaviour:
    """Create node ticking every child and resolving their states."""
    from tickflow.behaviours.nodes import ConcurrentNode

    return ConcurrentNode(resolve, children)


def any_active(values: Sequence[BehaviourValue]) -> BehaviourValue:
    """Resolve to ACTIVE when any value is active, else WAITING."""
    from tickflow.behaviours.resolution import any_active as _any_active

    return _any_active(values)


def all_active(values: Sequence[BehaviourValue]) -> BehaviourValue:
    """Resolve to ACTIVE only when every value is active."""
    from tickflow.behaviours.resolution import all_active as _all_active

    return _all_active(values)


def first_value(values: Sequence[BehaviourValue]) -> BehaviourValue:
    """Resolve to the first child's value."""
    from tickflow.behaviours.resolution import first_value as _first_value

    return _first_value(values)
