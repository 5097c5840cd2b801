"""Behaviour node implementations."""

from tickflow.behaviours.nodes import (
    BehaviourCoroutine,
    BehaviourNode,
    ConcurrentNode,
    FixedPriorityNode,
)
from tickflow.behaviours.resolution import all_active, any_active, first_value

__all__ = [
    "BehaviourCoroutine",
    "BehaviourNode",
    "ConcurrentNode",
    "FixedPriorityNode",
    "all_active",
    "any_active",
    "first_value",
]
