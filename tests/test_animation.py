from datetime import timedelta

import pytest

from islandmerge.animation import (
    Animation,
    AnimationSystem,
    AnimationType,
    ease_in_out_cubic,
    ease_out_cubic,
)


def test_add_animation_starts_at_zero():
    system = AnimationSystem()
    anim = system.add_animation(AnimationType.BRIDGE_BUILD, 2, 3, timedelta(milliseconds=500))
    assert system.animations == [anim]
    assert (anim.x, anim.y, anim.progress) == (2, 3, 0.0)
    assert anim.type is AnimationType.BRIDGE_BUILD


def test_running_animation_is_kept():
    system = AnimationSystem()
    anim = system.add_animation(AnimationType.VICTORY, 320, 240, timedelta(hours=1))
    system.update()
    assert system.animations == [anim]
    assert 0.0 <= anim.progress < 1.0


def test_finished_animation_is_removed():
    system = AnimationSystem()
    old = system.add_animation(AnimationType.VICTORY, 0, 0, timedelta(seconds=2))
    old.start_time -= 10
    keep = system.add_animation(AnimationType.TILE_HOVER, 1, 1, timedelta(hours=1))
    system.update()
    assert system.animations == [keep]
    assert old.progress >= 1.0


def test_zero_duration_finishes_immediately():
    system = AnimationSystem()
    system.add_animation(AnimationType.BRIDGE_BUILD, 0, 0, timedelta(0))
    system.update()
    assert system.animations == []


def test_animation_record_defaults():
    anim = Animation(AnimationType.TILE_HOVER, 1, 2, timedelta(seconds=1))
    assert anim.data is None
    assert anim.progress == 0.0


@pytest.mark.parametrize("ease", [ease_out_cubic, ease_in_out_cubic])
def test_easing_endpoints(ease):
    assert ease(0.0) == pytest.approx(0.0)
    assert ease(1.0) == pytest.approx(1.0)


@pytest.mark.parametrize("ease", [ease_out_cubic, ease_in_out_cubic])
def test_easing_is_monotonic(ease):
    values = [ease(i / 100) for i in range(101)]
    assert values == sorted(values)


def test_ease_in_out_is_symmetric():
    for i in range(11):
        t = i / 10
        assert ease_in_out_cubic(t) + ease_in_out_cubic(1 - t) == pytest.approx(1.0)


def test_ease_out_is_ahead_of_linear():
    for i in range(1, 10):
        t = i / 10
        assert ease_out_cubic(t) > t