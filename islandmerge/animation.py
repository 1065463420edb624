"""Timed visual effects and easing curves."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import timedelta
from enum import IntEnum
from typing import Any


class AnimationType(IntEnum):
    BRIDGE_BUILD = 0
    TILE_HOVER = 1
    VICTORY = 2


@dataclass
class Animation:
    type: AnimationType
    x: int
    y: int
    duration: timedelta
    start_time: float = field(default_factory=time.monotonic)
    progress: float = 0.0
    data: Any = None


class AnimationSystem:
    """Holds running animations and drops those that have finished."""

    def __init__(self) -> None:
        self.animations: list[Animation] = []

    def add_animation(self, anim_type: AnimationType, x: int, y: int, duration: timedelta) -> Animation:
        animation = Animation(AnimationType(anim_type), x, y, duration)
        self.animations.append(animation)
        return animation

    def update(self) -> None:
        """Advance every animation's progress and remove completed ones."""
        now = time.monotonic()
        for animation in self.animations:
            total = animation.duration.total_seconds()
            elapsed = now - animation.start_time
            animation.progress = elapsed / total if total > 0 else 1.0
        self.animations = [a for a in self.animations if a.progress < 1.0]


def ease_out_cubic(t: float) -> float:
    t -= 1
    return t * t * t + 1


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    t = 2 * t - 2
    return 1 + t * t * t / 2