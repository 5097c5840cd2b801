"""Coroutine driver: advances one sequence over an explicit call stack."""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from tickflow.api.coroutines import SequenceSource
from tickflow.api.errors import (
    CallDepthError,
    DisposedStateError,
    NotRestartableError,
    NoValueError,
    ReentrantUpdateError,
    RunawaySequenceError,
)
from tickflow.api.instructions import (
    Call,
    Emit,
    Instruction,
    Suspend,
    as_instruction,
    describe,
    is_restartable,
)
from tickflow.runtime.config import TickflowConfig, load_config
from tickflow.runtime.errors import CleanupErrors

_LOG = logging.getLogger("tickflow.coroutine")
_NO_VALUE: Any = object()


@dataclass(slots=True)
class _Frame:
    """One nested sequence and its resume position."""

    iterator: Iterator[Any]
    name: str
    last_emitted: Any = _NO_VALUE

    def resume(self, sent: Any) -> Any:
        if isinstance(self.iterator, Generator):
            return self.iterator.send(sent)
        return next(self.iterator)

    def throw(self, exc: BaseException) -> Any:
        if isinstance(self.iterator, Generator):
            return self.iterator.throw(exc)
        raise exc

    def close(self) -> None:
        close = getattr(self.iterator, "close", None)
        if close is not None:
            close()

    def result(self, returned: Any) -> Any:
        if returned is not None:
            return returned
        if self.last_emitted is _NO_VALUE:
            return None
        return self.last_emitted


class Coroutine[T]:
    """Tick-driven driver for one instruction-producing sequence.

    `source` is a re-iterable (a list, a `Sequence` from the `sequence`
    decorator), a zero-argument callable returning an iterable, or a one-shot
    generator. Only the first two can restart on `reset()`.
    """

    def __init__(
        self,
        source: SequenceSource,
        *,
        name: str | None = None,
        config: TickflowConfig | None = None,
    ) -> None:
        if not isinstance(source, Iterable) and not callable(source):
            raise TypeError(f"sequence source must be iterable, got {type(source).__name__}")
        self._source = source
        self._restartable = is_restartable(source)
        self._name = name or describe(source)
        self._config = config or load_config()
        self._frames: list[_Frame] = []
        self._value: Any = _NO_VALUE
        self._consumed = False
        self._started = False
        self._done = False
        self._disposed = False
        self._updating = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def has_value(self) -> bool:
        return self._value is not _NO_VALUE

    @property
    def value(self) -> T:
        if self._value is _NO_VALUE:
            raise NoValueError(f"coroutine {self._name!r} has no value")
        return self._value

    @property
    def running(self) -> bool:
        """Return whether the sequence has not terminated yet."""
        return not self._done and not self._disposed

    @property
    def done(self) -> bool:
        return self._done

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def restartable(self) -> bool:
        return self._restartable

    @property
    def depth(self) -> int:
        """Return number of live call-stack frames."""
        return len(self._frames)

    def update(self) -> None:
        """Resume the top frame until it suspends, emits or the stack empties."""
        if self._updating:
            raise ReentrantUpdateError(f"coroutine {self._name!r} ticked from its own tick")
        if self._done or self._disposed:
            return
        self._updating = True
        try:
            if not self._started:
                self._started = True
                self._frames.append(_Frame(iterator=self._open(), name=self._name))
            self._drive()
        except BaseException as exc:
            self._terminate(exc)
            raise
        finally:
            self._updating = False

    def reset(self) -> None:
        """Unwind every frame, then restart from the original sequence on next tick."""
        if self._disposed:
            raise DisposedStateError(f"coroutine {self._name!r} is disposed")
        if self._updating:
            raise ReentrantUpdateError(f"coroutine {self._name!r} reset from its own tick")
        _LOG.debug("coroutine_reset name=%s depth=%d", self._name, len(self._frames))
        try:
            message = f"cleanup failed while resetting {self._name!r}"
            with CleanupErrors(message, logger=_LOG) as cleanup:
                self._unwind(cleanup)
        finally:
            self._value = _NO_VALUE
            self._started = False
            self._done = False
            if self._consumed and not self._restartable:
                self._done = True
        if self._done:
            raise NotRestartableError(
                f"coroutine {self._name!r} wraps a one-shot iterator and cannot restart"
            )

    def dispose(self) -> None:
        """Unwind every frame, innermost first. Safe to call more than once."""
        if self._disposed:
            return
        if self._updating:
            raise ReentrantUpdateError(f"coroutine {self._name!r} disposed from its own tick")
        self._disposed = True
        self._value = _NO_VALUE
        _LOG.debug("coroutine_dispose name=%s depth=%d", self._name, len(self._frames))
        message = f"cleanup failed while disposing {self._name!r}"
        with CleanupErrors(message, logger=_LOG) as cleanup:
            self._unwind(cleanup)

    def _open(self) -> Iterator[Any]:
        source = self._source
        if callable(source) and not isinstance(source, Iterable):
            return iter(source())
        if not self._restartable:
            if self._consumed:
                raise NotRestartableError(f"coroutine {self._name!r} was already consumed")
            self._consumed = True
        return iter(source)

    def _drive(self) -> None:
        max_depth = self._config.max_call_depth
        max_steps = self._config.max_steps_per_tick
        trace = self._config.trace_enabled
        sent: Any = None
        error: Exception | None = None
        steps = 0
        while self._frames:
            frame = self._frames[-1]
            steps += 1
            if steps > max_steps:
                raise RunawaySequenceError(
                    f"coroutine {self._name!r} ran {max_steps} instructions without suspending"
                )
            try:
                if error is not None:
                    pending, error = error, None
                    item = frame.throw(pending)
                else:
                    item = frame.resume(sent)
            except StopIteration as stop:
                self._frames.pop()
                sent = frame.result(stop.value)
                continue
            except Exception as exc:
                self._frames.pop()
                _LOG.debug("frame_fault name=%s frame=%s error=%r", self._name, frame.name, exc)
                error = exc
                sent = None
                continue
            sent = None
            instruction = as_instruction(item)
            if trace:
                _LOG.debug(
                    "instruction name=%s depth=%d frame=%s instruction=%r",
                    self._name,
                    len(self._frames),
                    frame.name,
                    instruction,
                )
            if isinstance(instruction, Suspend):
                return
            if isinstance(instruction, Emit):
                self._value = instruction.value
                frame.last_emitted = instruction.value
                return
            if isinstance(instruction, Call):
                if len(self._frames) >= max_depth:
                    error = CallDepthError(
                        f"coroutine {self._name!r} exceeded call depth {max_depth}"
                    )
                    continue
                try:
                    child = iter(instruction.sequence)
                except Exception as exc:
                    error = exc
                    continue
                self._frames.append(_Frame(iterator=child, name=describe(instruction.sequence)))
                continue
            error = _unknown_instruction(instruction)
        self._finish()
        if error is not None:
            raise error

    def _finish(self) -> None:
        self._done = True
        self._value = _NO_VALUE
        _LOG.debug("coroutine_finished name=%s", self._name)

    def _terminate(self, exc: BaseException) -> None:
        self._done = True
        self._value = _NO_VALUE
        cleanup = CleanupErrors(f"cleanup failed while terminating {self._name!r}", logger=_LOG)
        self._unwind(cleanup)
        cleanup.attach_to(exc)

    def _unwind(self, cleanup: CleanupErrors) -> None:
        while self._frames:
            frame = self._frames.pop()
            cleanup.run(frame.close)

    def __repr__(self) -> str:
        return f"Coroutine({self._name!r}, depth={len(self._frames)}, done={self._done})"


def _unknown_instruction(instruction: Instruction) -> TypeError:
    return TypeError(f"unsupported instruction: {type(instruction).__name__}")
