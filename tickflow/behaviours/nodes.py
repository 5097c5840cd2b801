"""Behaviour nodes built on coroutines and the concurrent combinator."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any

from tickflow.api.behaviours import Behaviour, BehaviourResolution, BehaviourValue
from tickflow.api.errors import NotRestartableError
from tickflow.runtime.concurrent import Concurrent
from tickflow.runtime.coroutine import Coroutine
from tickflow.runtime.errors import CleanupErrors

_LOG = logging.getLogger("tickflow.behaviours")

NO_WINNER = -1


class BehaviourNode(ABC):
    """Base behaviour node. It always has a value; idle or finished means WAITING."""

    @property
    def has_value(self) -> bool:
        return True

    @property
    def value(self) -> BehaviourValue:
        return self.state

    @property
    @abstractmethod
    def state(self) -> BehaviourValue:
        """Return current behaviour state."""

    @abstractmethod
    def update(self) -> None:
        """Advance by one tick."""

    @abstractmethod
    def reset(self) -> None:
        """Abort in-flight work and restart."""

    @abstractmethod
    def dispose(self) -> None:
        """Release permanently."""


class BehaviourCoroutine(BehaviourNode):
    """Behaviour node driven by a sequence emitting `BehaviourValue`s.

    Only `BehaviourValue` emits change the node's state. Values of any other
    type, such as scores emitted by a nested `call`, are ignored and the last
    behaviour value stands. Once the sequence finishes it stays WAITING for
    good and further ticks do nothing. With `restart_on_completion` the next
    tick starts it over instead.
    """

    def __init__(
        self,
        source: Iterable[Any] | Callable[[], Iterable[Any]],
        *,
        restart_on_completion: bool = False,
        name: str | None = None,
    ) -> None:
        self._coroutine: Coroutine[Any] = Coroutine(source, name=name)
        if not self._coroutine.restartable:
            raise NotRestartableError(
                "behaviour sequences are reset on preemption; pass a re-iterable "
                "source or a factory instead of a generator object"
            )
        self._restart_on_completion = restart_on_completion
        self._state = BehaviourValue.WAITING

    @property
    def name(self) -> str:
        return self._coroutine.name

    @property
    def terminated(self) -> bool:
        """Return whether the sequence has finished and sits in its terminal state."""
        return self._coroutine.done

    @property
    def state(self) -> BehaviourValue:
        return self._state

    def update(self) -> None:
        if self._coroutine.done and self._restart_on_completion:
            _LOG.debug("behaviour_restart name=%s", self._coroutine.name)
            self._coroutine.reset()
            self._state = BehaviourValue.WAITING
        self._coroutine.update()
        if not self._coroutine.has_value:
            self._state = BehaviourValue.WAITING
            return
        latest = self._coroutine.value
        if isinstance(latest, BehaviourValue):
            self._state = latest

    def reset(self) -> None:
        self._state = BehaviourValue.WAITING
        self._coroutine.reset()

    def dispose(self) -> None:
        self._state = BehaviourValue.WAITING
        self._coroutine.dispose()


class FixedPriorityNode(BehaviourNode):
    """Runs the first active child in list order, preempting lower priorities.

    Children after the winner are not ticked. When a higher-priority child
    takes over from a lower-priority winner, the old winner is reset.
    """

    def __init__(self, children: Iterable[Behaviour]) -> None:
        self._children: tuple[Behaviour, ...] = tuple(children)
        self._active_index = NO_WINNER
        self._disposed = False

    @property
    def children(self) -> tuple[Behaviour, ...]:
        return self._children

    @property
    def active_index(self) -> int:
        """Return index of the current winner, or -1 when none is active."""
        return self._active_index

    @property
    def state(self) -> BehaviourValue:
        if self._active_index == NO_WINNER:
            return BehaviourValue.WAITING
        return BehaviourValue.ACTIVE

    def update(self) -> None:
        if self._disposed:
            return
        new_index = NO_WINNER
        for index, child in enumerate(self._children):
            child.update()
            if child.value is BehaviourValue.ACTIVE:
                new_index = index
                break

        previous = self._active_index
        # Winners at or below the previous index already had their tick to go idle.
        if new_index != NO_WINNER and new_index < previous:
            _LOG.debug("behaviour_preempt winner=%d previous=%d", new_index, previous)
            self._children[previous].reset()
        self._active_index = new_index

    def reset(self) -> None:
        self._active_index = NO_WINNER
        with CleanupErrors("cleanup failed while resetting priority node", logger=_LOG) as cleanup:
            for child in self._children:
                cleanup.run(child.reset)

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._active_index = NO_WINNER
        with CleanupErrors("cleanup failed while disposing priority node", logger=_LOG) as cleanup:
            for child in self._children:
                cleanup.run(child.dispose)


class ConcurrentNode(BehaviourNode):
    """Ticks every child each tick and resolves their states into one.

    Unlike `FixedPriorityNode` nothing is preempted: every child keeps running.
    `resolve` always decides, including for a node without children, where it
    receives an empty list.
    """

    def __init__(
        self,
        resolve: BehaviourResolution,
        children: Iterable[Behaviour],
    ) -> None:
        self._resolve = resolve
        self._group: Concurrent[BehaviourValue, BehaviourValue] = Concurrent(resolve, children)

    @property
    def children(self) -> tuple[Behaviour, ...]:
        return self._group.children  # type: ignore[return-value]

    @property
    def state(self) -> BehaviourValue:
        return self._resolve(self._group.values())

    def update(self) -> None:
        self._group.update()

    def reset(self) -> None:
        self._group.reset()

    def dispose(self) -> None:
        self._group.dispose()
