"""Public polling-state contract shared by every node."""

from __future__ import annotations

from typing import Protocol, TypeVar

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class State(Protocol[T_co]):
    """Tick-driven node contract.

    `value` is only defined while `has_value` is true. `update` advances the
    node by exactly one tick and must not be called from inside the node's own
    tick. `reset` aborts in-flight work and restarts from the beginning,
    `dispose` releases the node for good. Both run pending cleanup before
    returning.
    """

    @property
    def has_value(self) -> bool:
        """Return whether `value` may be read."""

    @property
    def value(self) -> T_co:
        """Return latest value or raise `NoValueError`."""

    def update(self) -> None:
        """Advance by one tick."""

    def reset(self) -> None:
        """Abort in-flight work and restart."""

    def dispose(self) -> None:
        """Release permanently, running pending cleanup."""


def value_or(state: State[T], default: T) -> T:
    """Return state value, or `default` when the state has none."""
    if state.has_value:
        return state.value
    return default


def is_state(candidate: object) -> bool:
    """Return whether object satisfies the polling-state surface."""
    kind = type(candidate)
    return all(
        hasattr(kind, attribute)
        for attribute in ("has_value", "value", "update", "reset", "dispose")
    )
