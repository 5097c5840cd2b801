"""Tick loop driving registered root nodes once per external frame."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import Any

from tickflow.api.loop import RootSpec
from tickflow.api.state import State
from tickflow.runtime.errors import CleanupErrors

_LOG = logging.getLogger("tickflow.loop")


class RuntimeTickLoop:
    """Ordered root-node tick loop."""

    def __init__(self) -> None:
        self._roots: list[RootSpec] = []
        self._cached_order: tuple[RootSpec, ...] | None = None
        self._tick_index = 0
        self._fault_count = 0
        self._shut_down = False

    @property
    def tick_index(self) -> int:
        return self._tick_index

    @property
    def fault_count(self) -> int:
        return self._fault_count

    @property
    def roots(self) -> tuple[RootSpec, ...]:
        return self._ordered_roots()

    def get(self, root_id: str) -> State[Any]:
        """Return registered root node or raise KeyError."""
        for spec in self._roots:
            if spec.root_id == root_id:
                return spec.node
        raise KeyError(f"unknown root_id: {root_id}")

    def add_root(self, spec: RootSpec) -> None:
        """Register root spec."""
        if self._shut_down:
            raise RuntimeError("tick loop is shut down")
        normalized_id = spec.root_id.strip()
        if not normalized_id:
            raise ValueError("root_id must not be empty")
        if any(existing.root_id == normalized_id for existing in self._roots):
            raise ValueError(f"duplicate root_id: {normalized_id}")
        self._roots.append(RootSpec(root_id=normalized_id, node=spec.node, order=spec.order))
        self._cached_order = None

    def remove_root(self, root_id: str) -> None:
        """Dispose and unregister root."""
        for spec in self._roots:
            if spec.root_id == root_id:
                self._roots.remove(spec)
                self._cached_order = None
                spec.node.dispose()
                return
        raise KeyError(f"unknown root_id: {root_id}")

    def step(self) -> int:
        """Tick every root once in `(order, root_id)` order."""
        if self._shut_down:
            raise RuntimeError("tick loop is shut down")
        started_at = perf_counter()
        for spec in self._ordered_roots():
            try:
                spec.node.update()
            except Exception:
                self._fault_count += 1
                _LOG.debug("root_fault root_id=%s tick=%d", spec.root_id, self._tick_index)
                raise
        self._tick_index += 1
        if _LOG.isEnabledFor(logging.DEBUG):
            elapsed_ms = (perf_counter() - started_at) * 1000.0
            _LOG.debug(
                "tick tick_index=%d roots=%d elapsed=%.3fms",
                self._tick_index,
                len(self._roots),
                elapsed_ms,
            )
        return self._tick_index

    def shutdown(self) -> None:
        """Dispose every root in reverse order. Safe to call more than once."""
        if self._shut_down:
            return
        self._shut_down = True
        ordered = self._ordered_roots()
        self._roots.clear()
        self._cached_order = None
        with CleanupErrors("cleanup failed while shutting down tick loop", logger=_LOG) as cleanup:
            for spec in reversed(ordered):
                cleanup.run(spec.node.dispose)

    def _ordered_roots(self) -> tuple[RootSpec, ...]:
        if self._cached_order is not None:
            return self._cached_order
        self._cached_order = tuple(
            sorted(
                self._roots,
                key=lambda item: (item.order, item.root_id),
            )
        )
        return self._cached_order
