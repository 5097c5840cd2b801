"""Public tick-loop API contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from tickflow.api.state import State


@dataclass(frozen=True, slots=True)
class RootSpec:
    """Root node registration entry for tick ordering."""

    root_id: str
    node: State[Any]
    order: int = 0


class TickLoop(Protocol):
    """Embedder-facing loop owning root nodes and their tick cadence."""

    @property
    def tick_index(self) -> int:
        """Return number of completed ticks."""

    def add_root(self, spec: RootSpec) -> None:
        """Register root node."""

    def remove_root(self, root_id: str) -> None:
        """Dispose and unregister root node."""

    def step(self) -> int:
        """Tick every root once and return the new tick index."""

    def shutdown(self) -> None:
        """Dispose every root in reverse order."""


def create_tick_loop() -> TickLoop:
    """Create default tick loop implementation."""
    from tickflow.runtime.loop import RuntimeTickLoop

    return RuntimeTickLoop()
