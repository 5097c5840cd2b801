"""Tick-driven coroutines and behaviour composition."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tickflow.api.state import State


def run_until_done(root: "State[Any]", *, max_ticks: int) -> int:
    """Tick `root` until it stops producing work or `max_ticks` pass; return ticks run."""
    from tickflow.runtime.coroutine import Coroutine

    if max_ticks < 0:
        raise ValueError("max_ticks must be >= 0")
    for tick in range(max_ticks):
        if isinstance(root, Coroutine) and not root.running:
            return tick
        root.update()
    return max_ticks


__all__ = ["run_until_done"]
