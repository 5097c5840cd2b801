"""Instruction vocabulary yielded by author-written sequences."""

from __future__ import annotations

import functools
from collections.abc import Callable, Generator, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

SequenceItem = Any
SequenceIterable = Iterable[SequenceItem]


class Instruction:
    """Marker base for values a sequence yields to its driver."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class Suspend(Instruction):
    """Pause the sequence until the next tick without producing a value."""


SUSPEND = Suspend()


@dataclass(frozen=True, slots=True)
class Call(Instruction):
    """Run a nested sequence to completion before resuming the caller.

    The nested sequence's result is sent back into the caller:
    `result = yield Call(child())`.
    """

    sequence: SequenceIterable

    def __post_init__(self) -> None:
        if not isinstance(self.sequence, Iterable):
            raise TypeError(
                f"Call target must be iterable, got {type(self.sequence).__name__}"
            )


@dataclass(frozen=True, slots=True)
class Emit[TValue](Instruction):
    """Publish a value for whoever polls the driver, then end the tick."""

    value: TValue


def as_instruction(item: SequenceItem) -> Instruction:
    """Normalize one yielded item.

    `None` is a suspend, instructions pass through and any other object is an
    implicit emit.
    """
    if item is None:
        return SUSPEND
    if isinstance(item, Instruction):
        return item
    return Emit(item)


class Sequence:
    """Re-iterable sequence bound to a generator function and its arguments."""

    __slots__ = ("_factory", "_args", "_kwargs")

    def __init__(
        self,
        factory: Callable[..., Iterable[SequenceItem]],
        *args: object,
        **kwargs: object,
    ) -> None:
        self._factory = factory
        self._args = args
        self._kwargs = kwargs

    def __iter__(self) -> Iterator[SequenceItem]:
        return iter(self._factory(*self._args, **self._kwargs))

    @property
    def name(self) -> str:
        return getattr(self._factory, "__qualname__", repr(self._factory))

    def __repr__(self) -> str:
        return f"Sequence({self.name})"


def sequence(
    factory: Callable[..., Generator[SequenceItem, Any, Any]],
) -> Callable[..., Sequence]:
    """Decorate a generator function so calls return restartable sequences."""

    @functools.wraps(factory)
    def bind(*args: object, **kwargs: object) -> Sequence:
        return Sequence(factory, *args, **kwargs)

    return bind


def is_restartable(source: object) -> bool:
    """Return whether iterating `source` again yields a fresh run."""
    if callable(source) and not isinstance(source, Iterable):
        return True
    if isinstance(source, Iterator):
        return False
    return isinstance(source, Iterable)


def describe(source: object) -> str:
    """Return a short human-readable name for a sequence source."""
    name = getattr(source, "name", None)
    if isinstance(name, str):
        return name
    code = getattr(source, "gi_code", None)
    if code is not None:
        return code.co_qualname
    qualname = getattr(source, "__qualname__", None)
    if isinstance(qualname, str):
        return qualname
    return type(source).__name__
