from __future__ import annotations

import pytest

from tickflow.api.errors import (
    CallDepthError,
    DisposedStateError,
    NotRestartableError,
    NoValueError,
    ReentrantUpdateError,
    RunawaySequenceError,
    StateError,
)
from tickflow.api.state import is_state, value_or


class _Empty:
    @property
    def has_value(self) -> bool:
        return False

    @property
    def value(self) -> int:
        raise NoValueError("empty")

    def update(self) -> None:
        return None

    def reset(self) -> None:
        return None

    def dispose(self) -> None:
        return None


class _Holding(_Empty):
    @property
    def has_value(self) -> bool:
        return True

    @property
    def value(self) -> int:
        return 7


def test_value_or_returns_default_without_value() -> None:
    assert value_or(_Empty(), 3) == 3
    assert value_or(_Holding(), 3) == 7


def test_is_state_checks_surface_without_reading_value() -> None:
    assert is_state(_Empty())
    assert not is_state([1, 2])
    assert not is_state(lambda: None)


@pytest.mark.parametrize(
    ("error", "builtin"),
    [
        (NoValueError, LookupError),
        (ReentrantUpdateError, RuntimeError),
        (DisposedStateError, RuntimeError),
        (NotRestartableError, TypeError),
        (CallDepthError, RecursionError),
        (RunawaySequenceError, RuntimeError),
    ],
)
def test_errors_share_base_and_builtin_category(
    error: type[Exception], builtin: type[Exception]
) -> None:
    assert issubclass(error, StateError)
    assert issubclass(error, builtin)
