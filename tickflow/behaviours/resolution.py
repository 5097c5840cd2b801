"""Arbitration functions folding child behaviour values into one."""

from __future__ import annotations

from collections.abc import Sequence

from tickflow.api.behaviours import BehaviourValue


def any_active(values: Sequence[BehaviourValue]) -> BehaviourValue:
    """Return ACTIVE when at least one value is active."""
    if any(value is BehaviourValue.ACTIVE for value in values):
        return BehaviourValue.ACTIVE
    return BehaviourValue.WAITING


def all_active(values: Sequence[BehaviourValue]) -> BehaviourValue:
    """Return ACTIVE when there are values and all of them are active."""
    if values and all(value is BehaviourValue.ACTIVE for value in values):
        return BehaviourValue.ACTIVE
    return BehaviourValue.WAITING


def first_value(values: Sequence[BehaviourValue]) -> BehaviourValue:
    """Return the first value; an empty group counts as ACTIVE."""
    if not values:
        return BehaviourValue.ACTIVE
    return values[0]
