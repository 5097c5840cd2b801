from __future__ import annotations

from tickflow.api import behaviours as api
from tickflow.api.behaviours import BehaviourValue
from tickflow.behaviours.resolution import all_active, any_active, first_value

ACTIVE = BehaviourValue.ACTIVE
WAITING = BehaviourValue.WAITING


def test_any_active() -> None:
    assert any_active([WAITING, ACTIVE]) is ACTIVE
    assert any_active([WAITING, WAITING]) is WAITING
    assert any_active([]) is WAITING


def test_all_active() -> None:
    assert all_active([ACTIVE, ACTIVE]) is ACTIVE
    assert all_active([ACTIVE, WAITING]) is WAITING
    assert all_active([]) is WAITING


def test_first_value() -> None:
    assert first_value([WAITING, ACTIVE]) is WAITING
    assert first_value([ACTIVE]) is ACTIVE
    assert first_value([]) is ACTIVE


def test_api_resolution_wrappers_delegate() -> None:
    assert api.any_active([WAITING, ACTIVE]) is ACTIVE
    assert api.all_active([ACTIVE, WAITING]) is WAITING
    assert api.first_value([WAITING]) is WAITING
