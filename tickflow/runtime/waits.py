"""Leaf sequences and states for waiting and sampling."""

from __future__ import annotations

import math
from collections.abc import Callable, Generator, Iterable
from typing import Any

from tickflow.api.coroutines import SequenceSource
from tickflow.api.errors import NoValueError
from tickflow.api.instructions import SUSPEND, Call
from tickflow.runtime.config import load_config
from tickflow.runtime.coroutine import Coroutine

DeltaSource = float | Callable[[], float]

# Absorbs float error when a duration is an exact multiple of the tick length.
_TICK_EPSILON = 1e-9


def wait_for_ticks(count: int) -> Call:
    """Return an instruction that suspends the caller for `count` ticks."""
    if count < 0:
        raise ValueError("count must be >= 0")
    return Call(_count_ticks(count))


def wait_for_seconds(seconds: float, *, delta_seconds: DeltaSource | None = None) -> Call:
    """Return an instruction that suspends the caller for `seconds` of tick time.

    `delta_seconds` is a fixed per-tick duration or a callable sampled once per
    tick. It defaults to the configured tick duration.
    """
    if seconds < 0.0:
        raise ValueError("seconds must be >= 0")
    if delta_seconds is None:
        delta_seconds = load_config().tick_seconds
    if callable(delta_seconds):
        return Call(_accumulate_seconds(seconds, delta_seconds))
    if delta_seconds <= 0.0:
        raise ValueError("delta_seconds must be > 0")
    return Call(_count_ticks(ticks_for_seconds(seconds, delta_seconds)))


def ticks_for_seconds(seconds: float, tick_seconds: float) -> int:
    """Return number of ticks needed to cover `seconds`."""
    if tick_seconds <= 0.0:
        raise ValueError("tick_seconds must be > 0")
    return max(0, math.ceil(seconds / tick_seconds - _TICK_EPSILON))


def _count_ticks(count: int) -> Generator[Any, Any, None]:
    for _ in range(count):
        yield SUSPEND


def _accumulate_seconds(
    seconds: float,
    delta_source: Callable[[], float],
) -> Generator[Any, Any, None]:
    elapsed = 0.0
    while elapsed + _TICK_EPSILON < seconds:
        yield SUSPEND
        elapsed += max(0.0, delta_source())


def first_or_default[T](values: Iterable[T], default: T | None = None) -> T | None:
    """Return first value, or `default` when there is none."""
    for value in values:
        return value
    return default


class RunningState:
    """Drives a sequence and reports whether it is still running.

    Has no value before its first tick; afterwards `True` until the sequence
    finishes, then `False` for good.
    """

    def __init__(self, source: SequenceSource) -> None:
        self._coroutine: Coroutine[Any] = Coroutine(source)
        self._ticked = False

    @property
    def has_value(self) -> bool:
        return self._ticked

    @property
    def value(self) -> bool:
        if not self._ticked:
            raise NoValueError("running state has not been ticked yet")
        return self._coroutine.running

    @property
    def done(self) -> bool:
        return self._coroutine.done

    def update(self) -> None:
        self._ticked = True
        self._coroutine.update()

    def reset(self) -> None:
        self._ticked = False
        self._coroutine.reset()

    def dispose(self) -> None:
        self._coroutine.dispose()


def true_while_running(source: SequenceSource) -> RunningState:
    """Return a boolean state that is true while `source` runs."""
    return RunningState(source)


class Sampled[T]:
    """State whose value is a callable re-evaluated once per tick."""

    def __init__(self, sample: Callable[[], T]) -> None:
        self._sample = sample
        self._value: T | None = None
        self._ticked = False
        self._disposed = False

    @property
    def has_value(self) -> bool:
        return self._ticked

    @property
    def value(self) -> T:
        if not self._ticked:
            raise NoValueError("sampled state has not been ticked yet")
        return self._value  # type: ignore[return-value]

    def update(self) -> None:
        if self._disposed:
            return
        self._value = self._sample()
        self._ticked = True

    def reset(self) -> None:
        self._value = None
        self._ticked = False

    def dispose(self) -> None:
        self._disposed = True
        self.reset()
