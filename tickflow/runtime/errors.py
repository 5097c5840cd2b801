"""Shared cleanup-phase exception policy helpers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType


class CleanupErrors:
    """Collect exceptions raised while unwinding, re-raise once unwinding ends.

    Used as a context manager around a whole unwind; `run` shields each
    individual cleanup step so the remaining steps still execute.
    """

    def __init__(self, message: str, *, logger: logging.Logger | None = None) -> None:
        self._message = message
        self._logger = logger
        self._errors: list[Exception] = []

    @property
    def errors(self) -> tuple[Exception, ...]:
        return tuple(self._errors)

    def run(self, step: Callable[[], object]) -> None:
        """Run one cleanup step, recording instead of raising its failure."""
        try:
            step()
        except Exception as exc:
            if self._logger is not None:
                self._logger.debug("%s: %r", self._message, exc)
            self._errors.append(exc)

    def raise_if_any(self) -> None:
        """Re-raise recorded failures: one as-is, several as an exception group."""
        if not self._errors:
            return
        errors = self._errors
        self._errors = []
        if len(errors) == 1:
            raise errors[0]
        raise ExceptionGroup(self._message, errors)

    def attach_to(self, exc: BaseException) -> None:
        """Record failures as notes on an exception that is already propagating."""
        for error in self._errors:
            exc.add_note(f"{self._message}: {error!r}")
        self._errors = []

    def __enter__(self) -> CleanupErrors:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if exc is None:
            self.raise_if_any()
            return
        self.attach_to(exc)
