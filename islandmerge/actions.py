"""Player input actions."""

from dataclasses import dataclass
from enum import IntEnum


class ActionType(IntEnum):
    CLICK = 0


@dataclass(frozen=True)
class Action:
    """A single input event at screen position (x, y)."""

    type: ActionType
    x: int
    y: int