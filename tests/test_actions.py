import dataclasses

import pytest

from islandmerge.actions import Action, ActionType


def test_click_value():
    action = Action(ActionType(0), 3, 4)
    assert action.type is ActionType.CLICK
    assert list(ActionType) == [ActionType.CLICK]


def test_action_fields_and_equality():
    action = Action(ActionType.CLICK, 170, 130)
    assert (action.type, action.x, action.y) == (ActionType.CLICK, 170, 130)
    assert action == Action(ActionType.CLICK, 170, 130)
    assert action != Action(ActionType.CLICK, 171, 130)


def test_action_is_immutable():
    action = Action(ActionType.CLICK, 1, 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        action.x = 5
    assert (action.x, action.y) == (1, 2)