"""Composition combinators authors yield from their sequences."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator, Iterable, Sequence
from typing import Any, overload

from tickflow.api.coroutines import Completion, NodeSource, SequenceSource
from tickflow.api.instructions import SUSPEND, Call, Emit
from tickflow.api.state import State, is_state
from tickflow.runtime.concurrent import Concurrent
from tickflow.runtime.coroutine import Coroutine
from tickflow.runtime.errors import CleanupErrors
from tickflow.runtime.waits import Sampled, true_while_running

_LOG = logging.getLogger("tickflow.control_flow")


def as_state(source: NodeSource) -> State[Any]:
    """Return `source` when it is already a node, else drive it in a coroutine."""
    if is_state(source):
        return source  # type: ignore[return-value]
    return Coroutine(source)  # type: ignore[arg-type]


def call(sequence: Iterable[Any]) -> Call:
    """Return an instruction running `sequence` as a nested frame."""
    return Call(sequence)


def concurrent_call(
    *sequences: SequenceSource,
    resolve: Callable[[Sequence[Any]], Any] | None = None,
    completion: Completion = Completion.ALL,
) -> Call:
    """Return an instruction running several sequences side by side.

    Every sequence is ticked once per tick. With `resolve`, the frame emits
    `resolve(values)` every tick and returns the last resolved value.
    """
    return Call(_run_concurrent(sequences, resolve, completion))


def execute_while(
    master: NodeSource,
    predicate: Callable[[Any], bool],
    *slaves: NodeSource,
) -> Call:
    """Return an instruction ticking `slaves` while `predicate(master.value)` holds."""
    return Call(_run_gated(master, predicate, slaves))


def execute_while_running(master: SequenceSource, *slaves: NodeSource) -> Call:
    """Return an instruction ticking `slaves` for as long as `master` runs."""
    return Call(_run_gated(true_while_running(master), bool, slaves))


def execute_while_true(condition: Callable[[], bool], *slaves: NodeSource) -> Call:
    """Return an instruction ticking `slaves` while `condition()` holds."""
    return Call(_run_gated(Sampled(condition), bool, slaves))


def _run_concurrent(
    sequences: tuple[SequenceSource, ...],
    resolve: Callable[[Sequence[Any]], Any] | None,
    completion: Completion,
) -> Generator[Any, Any, Any]:
    drivers: list[Coroutine[Any]] = [Coroutine(source) for source in sequences]
    group: Concurrent[Any, Any] = Concurrent(resolve or tuple, drivers)
    result: Any = None
    try:
        while drivers:
            group.update()
            if resolve is not None and group.has_value:
                result = group.value
            finished = [driver.done for driver in drivers]
            if all(finished) or (completion is Completion.ANY and any(finished)):
                return result
            if resolve is not None and group.has_value:
                yield Emit(result)
            else:
                yield SUSPEND
        return result
    finally:
        group.dispose()


def _run_gated(
    master: NodeSource,
    predicate: Callable[[Any], bool],
    slaves: tuple[NodeSource, ...],
) -> Generator[Any, Any, None]:
    gate = as_state(master)
    group: Concurrent[Any, Any] = Concurrent(tuple, [as_state(slave) for slave in slaves])
    seen_value = False
    opened = False
    try:
        while True:
            gate.update()
            if gate.has_value:
                seen_value = True
                if not predicate(gate.value):
                    return
                if not opened:
                    opened = True
                    _LOG.debug("gate_opened slaves=%d", len(group.children))
                group.update()
            elif seen_value or getattr(gate, "done", False):
                return
            yield SUSPEND
    finally:
        if opened:
            _LOG.debug("gate_closed slaves=%d", len(group.children))
        with CleanupErrors("cleanup failed while closing gate", logger=_LOG) as cleanup:
            cleanup.run(group.dispose)
            cleanup.run(gate.dispose)


class Adapted[A, B]:
    """Node re-expressing a source node's value through a pure transform."""

    def __init__(self, source: State[A], transform: Callable[[A], B]) -> None:
        self._source = source
        self._transform = transform

    @property
    def source(self) -> State[A]:
        return self._source

    @property
    def has_value(self) -> bool:
        return self._source.has_value

    @property
    def value(self) -> B:
        return self._transform(self._source.value)

    @property
    def done(self) -> bool:
        return bool(getattr(self._source, "done", False))

    def update(self) -> None:
        self._source.update()

    def reset(self) -> None:
        self._source.reset()

    def dispose(self) -> None:
        self._source.dispose()


@overload
def adapt[A, B](source: Call, transform: Callable[[A], B]) -> Call: ...


@overload
def adapt[A, B](
    source: State[A] | SequenceSource, transform: Callable[[A], B]
) -> Adapted[A, B]: ...


def adapt[A, B](
    source: State[A] | SequenceSource | Call, transform: Callable[[A], B]
) -> Adapted[A, B] | Call:
    """Wrap `source` so its value is seen through `transform`.

    Given a `Call` the result is another `Call` whose frame emits the
    transformed values of the nested sequence, so a caller can re-express a
    nested call in its own terms: `fire = yield adapt(concurrent_call(...), f)`.
    """
    if isinstance(source, Call):
        return Call(_run_adapted(source.sequence, transform))
    return Adapted(as_state(source), transform)


def _run_adapted[A, B](
    sequence: Iterable[Any],
    transform: Callable[[A], B],
) -> Generator[Any, Any, None]:
    inner: Coroutine[A] = Coroutine(sequence)
    try:
        while True:
            inner.update()
            if inner.done:
                return
            if inner.has_value:
                yield Emit(transform(inner.value))
            else:
                yield SUSPEND
    finally:
        inner.dispose()
