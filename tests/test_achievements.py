import json
from datetime import datetime, timedelta

import pytest

from islandmerge.achievements import Achievement, AchievementSystem, AchievementType


def _aware_now():
    return datetime.now().astimezone()


def test_new_system_has_every_achievement_locked():
    system = AchievementSystem()
    assert system.total_count() == len(AchievementType)
    assert system.unlocked_count() == 0
    assert system.statistics.fewest_moves == 999


def test_master_is_hidden_until_unlocked():
    system = AchievementSystem()
    ids = [a.id for a in system.visible_achievements()]
    assert AchievementType.MASTER not in ids
    assert len(ids) == system.total_count() - 1


def test_first_win_notifies_listener():
    system = AchievementSystem()
    unlocked: list[Achievement] = []
    system.on_achievement_unlocked(unlocked.append)
    system.on_game_win(5, timedelta(minutes=2), False, False)
    assert [a.id for a in unlocked] == [AchievementType.FIRST_WIN]
    first = system.achievements[AchievementType.FIRST_WIN]
    assert first.unlocked and first.unlocked_at is not None
    assert first.name == "First Victory"


def test_speedrun_requires_under_thirty_seconds():
    system = AchievementSystem()
    system.on_game_win(3, timedelta(seconds=30), False, False)
    assert not system.achievements[AchievementType.SPEEDRUN].unlocked
    system.on_game_win(3, timedelta(seconds=29), False, False)
    assert system.achievements[AchievementType.SPEEDRUN].unlocked


def test_time_attack_wins_reach_target():
    system = AchievementSystem()
    target = system.achievements[AchievementType.TIME_ATTACK_WIN].target
    for _ in range(target - 1):
        system.on_game_win(4, timedelta(minutes=1), True, False)
    assert not system.achievements[AchievementType.TIME_ATTACK_WIN].unlocked
    system.on_game_win(4, timedelta(minutes=1), True, False)
    assert system.achievements[AchievementType.TIME_ATTACK_WIN].unlocked
    assert system.statistics.time_attack_wins == target


def test_bridges_and_levels_progress():
    system = AchievementSystem()
    bridge_target = system.achievements[AchievementType.BRIDGE_BUILDER].target
    for _ in range(bridge_target):
        system.on_bridge_built()
    level_target = system.achievements[AchievementType.LEVEL_CREATOR].target
    for _ in range(level_target):
        system.on_level_created()
    assert system.statistics.bridges_built == bridge_target
    assert system.achievements[AchievementType.BRIDGE_BUILDER].unlocked
    assert system.achievements[AchievementType.LEVEL_CREATOR].unlocked


def test_best_records_track_minimums():
    system = AchievementSystem()
    system.on_game_win(8, timedelta(seconds=90), False, False)
    system.on_game_win(3, timedelta(seconds=120), False, False)
    system.on_game_win(6, timedelta(seconds=45), False, False)
    stats = system.statistics
    assert stats.best_time == timedelta(seconds=45)
    assert stats.fewest_moves == 3
    assert stats.total_moves == 8 + 3 + 6
    assert stats.total_time == timedelta(seconds=90 + 120 + 45)


def test_first_game_starts_streak():
    system = AchievementSystem()
    system.on_game_start()
    assert system.statistics.play_streak == 1
    assert system.statistics.games_played == 1
    assert system.statistics.last_play_date is not None


def test_consecutive_day_extends_streak_and_unlocks_dedicated():
    system = AchievementSystem()
    target = system.achievements[AchievementType.DEDICATED].target
    system.statistics.play_streak = target - 1
    system.statistics.last_play_date = _aware_now() - timedelta(days=1, hours=1)
    system.on_game_start()
    assert system.statistics.play_streak == target
    assert system.achievements[AchievementType.DEDICATED].unlocked


def test_gap_resets_streak_and_same_day_keeps_it():
    system = AchievementSystem()
    system.statistics.play_streak = 4
    system.statistics.last_play_date = _aware_now() - timedelta(hours=3)
    system.on_game_start()
    assert system.statistics.play_streak == 4
    system.statistics.last_play_date = _aware_now() - timedelta(days=3)
    system.on_game_start()
    assert system.statistics.play_streak == 1


def test_master_unlocks_after_all_others():
    system = AchievementSystem()
    unlocked: list[Achievement] = []
    system.on_achievement_unlocked(unlocked.append)
    system.achievements[AchievementType.EFFICIENT].progress = 1
    for _ in range(25):
        system.on_game_win(1, timedelta(seconds=5), True, True)
    for _ in range(100):
        system.on_bridge_built()
    for _ in range(5):
        system.on_level_created()
    assert not system.achievements[AchievementType.MASTER].unlocked
    system.statistics.play_streak = 6
    system.statistics.last_play_date = _aware_now() - timedelta(days=1, hours=2)
    system.on_game_start()
    assert system.achievements[AchievementType.MASTER].unlocked
    assert unlocked[-1].id == AchievementType.MASTER
    assert system.unlocked_count() == system.total_count()
    assert AchievementType.MASTER in [a.id for a in system.visible_achievements()]


def test_master_progress_counts_other_unlocks():
    system = AchievementSystem()
    system.on_game_win(2, timedelta(seconds=10), False, False)
    master = system.achievements[AchievementType.MASTER]
    assert master.progress == system.unlocked_count()
    assert not master.unlocked


def test_json_round_trip():
    system = AchievementSystem()
    system.on_game_start()
    system.on_game_win(4, timedelta(seconds=12), True, False)
    system.on_bridge_built()
    restored = AchievementSystem()
    restored.load_json(system.to_json())
    assert restored.statistics == system.statistics
    assert restored.achievements == system.achievements
    assert restored.progress_summary() == system.progress_summary()


def test_json_layout_uses_string_keys_and_nanoseconds():
    system = AchievementSystem()
    system.on_game_win(4, timedelta(seconds=12), False, False)
    data = json.loads(system.to_json())
    assert sorted(data["achievements"]) == sorted(str(int(t)) for t in AchievementType)
    assert data["statistics"]["total_time"] == 12 * 10**9
    assert "unlocked_at" not in data["achievements"][str(int(AchievementType.MASTER))]
    assert "unlocked_at" in data["achievements"][str(int(AchievementType.FIRST_WIN))]


def test_load_empty_object_keeps_state():
    system = AchievementSystem()
    system.on_bridge_built()
    system.load_json("{}")
    assert system.statistics.bridges_built == 1
    assert system.total_count() == len(AchievementType)


def test_load_invalid_json_raises():
    system = AchievementSystem()
    with pytest.raises(ValueError):
        system.load_json("not json")


def test_progress_summary_format():
    system = AchievementSystem()
    assert system.progress_summary() == f"Achievements: 0/{system.total_count()} unlocked"