"""Public tickflow exception types."""

from __future__ import annotations


class StateError(Exception):
    """Base class for polling-state misuse and driver faults."""


class NoValueError(StateError, LookupError):
    """Raised when `value` is read while `has_value` is false."""


class ReentrantUpdateError(StateError, RuntimeError):
    """Raised when a node is ticked, reset or disposed from inside its own tick."""


class DisposedStateError(StateError, RuntimeError):
    """Raised when a disposed node is asked to restart."""


class NotRestartableError(StateError, TypeError):
    """Raised when a one-shot sequence source is asked to restart."""


class CallDepthError(StateError, RecursionError):
    """Raised when nested calls exceed the configured call depth."""


class RunawaySequenceError(StateError, RuntimeError):
    """Raised when a sequence processes too many instructions without suspending."""
