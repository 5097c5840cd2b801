"""Concurrent combinator: ticks every member and folds their values."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from tickflow.api.errors import NoValueError
from tickflow.api.state import State
from tickflow.runtime.errors import CleanupErrors

_LOG = logging.getLogger("tickflow.concurrent")


class Concurrent[T, R]:
    """Advance several nodes per tick, in list order, without short-circuiting.

    `value` is `resolve` applied to the values of the members that currently
    have one. Members without a value are left out of the fold.
    """

    def __init__(
        self,
        resolve: Callable[[Sequence[T]], R],
        children: Iterable[State[T]],
    ) -> None:
        self._resolve = resolve
        self._children: tuple[State[T], ...] = tuple(children)
        self._disposed = False

    @property
    def children(self) -> tuple[State[T], ...]:
        return self._children

    @property
    def has_value(self) -> bool:
        return any(child.has_value for child in self._children)

    @property
    def value(self) -> R:
        values = self.values()
        if not values:
            raise NoValueError("no concurrent member has a value")
        return self._resolve(values)

    def values(self) -> list[T]:
        """Return latest values of members that have one, in list order."""
        return [child.value for child in self._children if child.has_value]

    def update(self) -> None:
        for child in self._children:
            child.update()

    def reset(self) -> None:
        message = "cleanup failed while resetting concurrent group"
        with CleanupErrors(message, logger=_LOG) as cleanup:
            for child in self._children:
                cleanup.run(child.reset)

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        message = "cleanup failed while disposing concurrent group"
        with CleanupErrors(message, logger=_LOG) as cleanup:
            for child in self._children:
                cleanup.run(child.dispose)
