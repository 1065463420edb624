"""Achievements, play statistics and their JSON persistence."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Any, Callable

_FRACTION = re.compile(r"(\.\d{6})\d+")
_SPEEDRUN_LIMIT = timedelta(seconds=30)


class AchievementType(IntEnum):
    FIRST_WIN = 0
    SPEEDRUN = 1
    EFFICIENT = 2
    TIME_ATTACK_WIN = 3
    PERFECT_GAME = 4
    BRIDGE_BUILDER = 5
    ISLAND_HOPPER = 6
    LEVEL_CREATOR = 7
    DEDICATED = 8
    MASTER = 9


@dataclass
class Achievement:
    id: AchievementType
    name: str = ""
    description: str = ""
    icon: str = ""
    target: int = 0
    unlocked: bool = False
    unlocked_at: datetime | None = None
    progress: int = 0
    hidden: bool = False


@dataclass
class GameStatistics:
    games_played: int = 0
    games_won: int = 0
    total_moves: int = 0
    total_time: timedelta = field(default_factory=timedelta)
    best_time: timedelta = field(default_factory=timedelta)
    fewest_moves: int = 0
    bridges_built: int = 0
    time_attack_wins: int = 0
    perfect_games: int = 0
    levels_created: int = 0
    play_streak: int = 0
    last_play_date: datetime | None = None


def _now() -> datetime:
    return datetime.now().astimezone()


def _format_time(moment: datetime) -> str:
    return moment.isoformat()


def _parse_time(text: str) -> datetime:
    text = _FRACTION.sub(r"\1", text.replace("Z", "+00:00"))
    return datetime.fromisoformat(text)


def _to_nanos(duration: timedelta) -> int:
    return duration // timedelta(microseconds=1) * 1000


def _from_nanos(nanos: int) -> timedelta:
    return timedelta(microseconds=int(nanos) // 1000)


def _default_achievements() -> list[Achievement]:
    t = AchievementType
    return [
        Achievement(t.FIRST_WIN, "First Victory", "Win your first game", "🏆", 1),
        Achievement(t.SPEEDRUN, "Speed Demon", "Complete a level in under 30 seconds", "⚡", 1),
        Achievement(t.EFFICIENT, "Efficiency Expert", "Complete a level with minimum moves", "🎯", 1),
        Achievement(t.TIME_ATTACK_WIN, "Time Master", "Win 5 Time Attack games", "⏰", 5),
        Achievement(t.PERFECT_GAME, "Perfectionist", "Achieve 10 perfect games", "💎", 10),
        Achievement(t.BRIDGE_BUILDER, "Bridge Builder", "Build 100 bridges", "🌉", 100),
        Achievement(t.ISLAND_HOPPER, "Island Hopper", "Win 25 games", "🏝️", 25),
        Achievement(t.LEVEL_CREATOR, "Level Designer", "Create 5 levels in the editor", "🎨", 5),
        Achievement(t.DEDICATED, "Dedicated Player", "Play for 7 consecutive days", "🔥", 7),
        Achievement(t.MASTER, "Island Master", "Unlock all other achievements", "👑", 9, hidden=True),
    ]


def _achievement_to_dict(achievement: Achievement) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": int(achievement.id),
        "name": achievement.name,
        "description": achievement.description,
        "icon": achievement.icon,
        "unlocked": achievement.unlocked,
    }
    if achievement.unlocked_at is not None:
        data["unlocked_at"] = _format_time(achievement.unlocked_at)
    data["progress"] = achievement.progress
    data["target"] = achievement.target
    data["hidden"] = achievement.hidden
    return data


def _achievement_from_dict(key: str, data: dict[str, Any]) -> Achievement:
    unlocked_at = data.get("unlocked_at")
    return Achievement(
        id=AchievementType(data.get("id", int(key))),
        name=data.get("name", ""),
        description=data.get("description", ""),
        icon=data.get("icon", ""),
        target=data.get("target", 0),
        unlocked=data.get("unlocked", False),
        unlocked_at=_parse_time(unlocked_at) if unlocked_at else None,
        progress=data.get("progress", 0),
        hidden=data.get("hidden", False),
    )


def _statistics_to_dict(stats: GameStatistics) -> dict[str, Any]:
    data: dict[str, Any] = {
        "games_played": stats.games_played,
        "games_won": stats.games_won,
        "total_moves": stats.total_moves,
        "total_time": _to_nanos(stats.total_time),
        "best_time": _to_nanos(stats.best_time),
        "fewest_moves": stats.fewest_moves,
        "bridges_built": stats.bridges_built,
        "time_attack_wins": stats.time_attack_wins,
        "perfect_games": stats.perfect_games,
        "levels_created": stats.levels_created,
        "play_streak": stats.play_streak,
    }
    if stats.last_play_date is not None:
        data["last_play_date"] = _format_time(stats.last_play_date)
    return data


def _statistics_from_dict(data: dict[str, Any]) -> GameStatistics:
    last = data.get("last_play_date")
    return GameStatistics(
        games_played=data.get("games_played", 0),
        games_won=data.get("games_won", 0),
        total_moves=data.get("total_moves", 0),
        total_time=_from_nanos(data.get("total_time", 0)),
        best_time=_from_nanos(data.get("best_time", 0)),
        fewest_moves=data.get("fewest_moves", 0),
        bridges_built=data.get("bridges_built", 0),
        time_attack_wins=data.get("time_attack_wins", 0),
        perfect_games=data.get("perfect_games", 0),
        levels_created=data.get("levels_created", 0),
        play_streak=data.get("play_streak", 0),
        last_play_date=_parse_time(last) if last else None,
    )


class AchievementSystem:
    """Tracks statistics from game events and unlocks achievements."""

    def __init__(self) -> None:
        self.achievements: dict[AchievementType, Achievement] = {
            a.id: a for a in _default_achievements()
        }
        self.statistics = GameStatistics(fewest_moves=999)
        self._listeners: list[Callable[[Achievement], None]] = []

    def on_achievement_unlocked(self, callback: Callable[[Achievement], None]) -> None:
        """Register a callback run with each newly unlocked achievement."""
        self._listeners.append(callback)

    def _check(self, achievement_id: AchievementType) -> None:
        achievement = self.achievements.get(achievement_id)
        if achievement is None or achievement.unlocked:
            return
        if achievement.progress >= achievement.target:
            achievement.unlocked = True
            achievement.unlocked_at = _now()
            for callback in self._listeners:
                callback(achievement)
            self._check_master()

    def _check_master(self) -> None:
        unlocked = sum(
            1
            for key, achievement in self.achievements.items()
            if key != AchievementType.MASTER and achievement.unlocked
        )
        master = self.achievements.get(AchievementType.MASTER)
        if master is not None and not master.unlocked:
            master.progress = unlocked
            self._check(AchievementType.MASTER)

    def _set_progress(self, achievement_id: AchievementType, progress: int) -> None:
        self.achievements[achievement_id].progress = progress
        self._check(achievement_id)

    def on_game_start(self) -> None:
        """Count a new game and update the daily play streak."""
        stats = self.statistics
        stats.games_played += 1
        now = _now()
        if stats.last_play_date is not None:
            elapsed = now - stats.last_play_date
            days = int(elapsed.total_seconds() / 3600 / 24)
            if days == 1:
                stats.play_streak += 1
            elif days > 1:
                stats.play_streak = 1
        else:
            stats.play_streak = 1
        stats.last_play_date = now
        self._set_progress(AchievementType.DEDICATED, stats.play_streak)

    def on_game_win(
        self, moves: int, game_time: timedelta, is_time_attack: bool, is_perfect: bool
    ) -> None:
        """Record a won game and check the achievements it affects."""
        stats = self.statistics
        stats.games_won += 1
        stats.total_moves += moves
        stats.total_time += game_time

        if not stats.best_time or game_time < stats.best_time:
            stats.best_time = game_time
        if moves < stats.fewest_moves:
            stats.fewest_moves = moves

        if is_time_attack:
            stats.time_attack_wins += 1
            self._set_progress(AchievementType.TIME_ATTACK_WIN, stats.time_attack_wins)

        if is_perfect:
            stats.perfect_games += 1
            self._set_progress(AchievementType.PERFECT_GAME, stats.perfect_games)
            self._check(AchievementType.EFFICIENT)

        self._set_progress(AchievementType.FIRST_WIN, min(1, stats.games_won))
        self._set_progress(AchievementType.ISLAND_HOPPER, stats.games_won)

        if game_time < _SPEEDRUN_LIMIT:
            self._set_progress(AchievementType.SPEEDRUN, 1)

    def on_bridge_built(self) -> None:
        self.statistics.bridges_built += 1
        self._set_progress(AchievementType.BRIDGE_BUILDER, self.statistics.bridges_built)

    def on_level_created(self) -> None:
        self.statistics.levels_created += 1
        self._set_progress(AchievementType.LEVEL_CREATOR, self.statistics.levels_created)

    def visible_achievements(self) -> list[Achievement]:
        """Achievements that are not hidden, or hidden but already unlocked."""
        return [
            self.achievements[key]
            for key in sorted(self.achievements)
            if not self.achievements[key].hidden or self.achievements[key].unlocked
        ]

    def unlocked_count(self) -> int:
        return sum(1 for a in self.achievements.values() if a.unlocked)

    def total_count(self) -> int:
        return len(self.achievements)

    def to_json(self) -> str:
        """Serialise achievements and statistics as indented JSON."""
        data = {
            "achievements": {
                str(int(key)): _achievement_to_dict(self.achievements[key])
                for key in sorted(self.achievements)
            },
            "statistics": _statistics_to_dict(self.statistics),
        }
        return json.dumps(data, indent=2, ensure_ascii=False)

    def load_json(self, text: str) -> None:
        """Replace state with what ``text`` holds; raises ValueError on bad JSON."""
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("achievement data must be a JSON object")
        achievements = data.get("achievements")
        if achievements is not None:
            loaded = {}
            for key, value in achievements.items():
                achievement = _achievement_from_dict(key, value or {})
                loaded[AchievementType(int(key))] = achievement
            self.achievements = loaded
        statistics = data.get("statistics")
        if statistics is not None:
            self.statistics = _statistics_from_dict(statistics)

    def progress_summary(self) -> str:
        return f"Achievements: {self.unlocked_count()}/{self.total_count()} unlocked"