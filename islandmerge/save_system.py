"""Persistent game saves, settings, progress and custom levels."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from islandmerge.storage import LocalStorage, StorageError

SAVE_KEY_GAME_STATE = "island_merge_game_state"
SAVE_KEY_ACHIEVEMENTS = "island_merge_achievements"
SAVE_KEY_SETTINGS = "island_merge_settings"
SAVE_KEY_CUSTOM_LEVELS = "island_merge_custom_levels"
SAVE_KEY_PROGRESS = "island_merge_progress"

SAVE_VERSION = "1.0"

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
_FRACTION = re.compile(r"\.(\d+)")
_LOAD_ERRORS = (StorageError, ValueError, TypeError, AttributeError, KeyError)
_WRITE_ERRORS = (OSError, TypeError, ValueError)


def _now() -> datetime:
    return datetime.now().astimezone()


def _format_time(moment: datetime) -> str:
    return moment.isoformat()


def _parse_time(text: str | None) -> datetime:
    if not text:
        return _ZERO_TIME
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    return datetime.fromisoformat(text)


def _to_nanos(duration: timedelta) -> int:
    return duration // timedelta(microseconds=1) * 1000


def _from_nanos(nanos: Any) -> timedelta:
    return timedelta(microseconds=int(nanos or 0) // 1000)


@dataclass
class BoardData:
    width: int = 0
    height: int = 0
    tiles: list[list[int]] = field(default_factory=list)
    islands: list[int] = field(default_factory=list)

    def _to_json(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "tiles": [list(row) for row in self.tiles],
            "islands": list(self.islands),
        }

    @classmethod
    def _from_json(cls, data: dict[str, Any]) -> BoardData:
        return cls(
            width=int(data.get("width", 0)),
            height=int(data.get("height", 0)),
            tiles=[[int(v) for v in row] for row in data.get("tiles") or []],
            islands=[int(v) for v in data.get("islands") or []],
        )


@dataclass
class ScoreData:
    moves: int = 0
    time: timedelta = field(default_factory=timedelta)
    best_time: timedelta = field(default_factory=timedelta)

    def _to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"moves": self.moves, "time": _to_nanos(self.time)}
        if self.best_time:
            data["best_time"] = _to_nanos(self.best_time)
        return data

    @classmethod
    def _from_json(cls, data: dict[str, Any]) -> ScoreData:
        return cls(
            moves=int(data.get("moves", 0)),
            time=_from_nanos(data.get("time", 0)),
            best_time=_from_nanos(data.get("best_time", 0)),
        )


@dataclass
class CurrentGameState:
    """The state of a game in progress."""

    mode: int = 0
    board: BoardData = field(default_factory=BoardData)
    score: ScoreData = field(default_factory=ScoreData)
    start_time: datetime = field(default_factory=_now)
    time_limit: timedelta = field(default_factory=timedelta)
    game_won: bool = False

    def _to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "mode": self.mode,
            "board": self.board._to_json(),
            "score": self.score._to_json(),
            "start_time": _format_time(self.start_time),
        }
        if self.time_limit:
            data["time_limit"] = _to_nanos(self.time_limit)
        data["game_won"] = self.game_won
        return data

    @classmethod
    def _from_json(cls, data: dict[str, Any]) -> CurrentGameState:
        return cls(
            mode=int(data.get("mode", 0)),
            board=BoardData._from_json(data.get("board") or {}),
            score=ScoreData._from_json(data.get("score") or {}),
            start_time=_parse_time(data.get("start_time")),
            time_limit=_from_nanos(data.get("time_limit", 0)),
            game_won=bool(data.get("game_won", False)),
        )


@dataclass
class GameSettings:
    """User preferences; unset fields take their zero values."""

    sound_enabled: bool = False
    music_enabled: bool = False
    animation_speed: float = 0.0
    show_tutorial: bool = False
    auto_save: bool = False
    preferred_mode: int = 0

    def _to_json(self) -> dict[str, Any]:
        return {
            "sound_enabled": self.sound_enabled,
            "music_enabled": self.music_enabled,
            "animation_speed": self.animation_speed,
            "show_tutorial": self.show_tutorial,
            "auto_save": self.auto_save,
            "preferred_mode": self.preferred_mode,
        }

    @classmethod
    def _from_json(cls, data: dict[str, Any]) -> GameSettings:
        return cls(
            sound_enabled=bool(data.get("sound_enabled", False)),
            music_enabled=bool(data.get("music_enabled", False)),
            animation_speed=float(data.get("animation_speed", 0.0)),
            show_tutorial=bool(data.get("show_tutorial", False)),
            auto_save=bool(data.get("auto_save", False)),
            preferred_mode=int(data.get("preferred_mode", 0)),
        )


@dataclass
class HighScore:
    level: str = ""
    mode: int = 0
    moves: int = 0
    time: timedelta = field(default_factory=timedelta)
    date: datetime = field(default_factory=_now)
    player_id: str = ""

    def _to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "level": self.level,
            "mode": self.mode,
            "moves": self.moves,
            "time": _to_nanos(self.time),
            "date": _format_time(self.date),
        }
        if self.player_id:
            data["player_id"] = self.player_id
        return data

    @classmethod
    def _from_json(cls, data: dict[str, Any]) -> HighScore:
        return cls(
            level=data.get("level", ""),
            mode=int(data.get("mode", 0)),
            moves=int(data.get("moves", 0)),
            time=_from_nanos(data.get("time", 0)),
            date=_parse_time(data.get("date")),
            player_id=data.get("player_id", ""),
        )


@dataclass
class GameProgress:
    completed_levels: list[str] = field(default_factory=list)
    high_scores: list[HighScore] = field(default_factory=list)
    total_play_time: timedelta = field(default_factory=timedelta)
    last_played: datetime = field(default_factory=_now)
    unlocked_modes: list[int] = field(default_factory=list)

    def _to_json(self) -> dict[str, Any]:
        return {
            "completed_levels": list(self.completed_levels),
            "high_scores": [score._to_json() for score in self.high_scores],
            "total_play_time": _to_nanos(self.total_play_time),
            "last_played": _format_time(self.last_played),
            "unlocked_modes": list(self.unlocked_modes),
        }

    @classmethod
    def _from_json(cls, data: dict[str, Any]) -> GameProgress:
        return cls(
            completed_levels=list(data.get("completed_levels") or []),
            high_scores=[HighScore._from_json(s) for s in data.get("high_scores") or []],
            total_play_time=_from_nanos(data.get("total_play_time", 0)),
            last_played=_parse_time(data.get("last_played")),
            unlocked_modes=[int(m) for m in data.get("unlocked_modes") or []],
        )


@dataclass
class CustomLevel:
    """A level made in the editor."""

    id: str
    name: str = ""
    description: str = ""
    created_at: datetime = field(default_factory=_now)
    author: str = ""
    width: int = 0
    height: int = 0
    tiles: list[list[int]] = field(default_factory=list)
    difficulty: str = ""
    tags: list[str] = field(default_factory=list)

    def _to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.description:
            data["description"] = self.description
        data["created_at"] = _format_time(self.created_at)
        if self.author:
            data["author"] = self.author
        data["width"] = self.width
        data["height"] = self.height
        data["tiles"] = [list(row) for row in self.tiles]
        if self.difficulty:
            data["difficulty"] = self.difficulty
        if self.tags:
            data["tags"] = list(self.tags)
        return data

    @classmethod
    def _from_json(cls, data: dict[str, Any]) -> CustomLevel:
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            description=data.get("description", ""),
            created_at=_parse_time(data.get("created_at")),
            author=data.get("author", ""),
            width=int(data.get("width", 0)),
            height=int(data.get("height", 0)),
            tiles=[[int(v) for v in row] for row in data.get("tiles") or []],
            difficulty=data.get("difficulty", ""),
            tags=list(data.get("tags") or []),
        )


@dataclass
class GameSaveData:
    """Everything that is saved, gathered in one record."""

    version: str = SAVE_VERSION
    saved_at: datetime = field(default_factory=_now)
    current_game: CurrentGameState | None = None
    achievements: Any = None
    settings: GameSettings | None = None
    progress: GameProgress | None = None
    custom_levels: list[CustomLevel] | None = None


class SaveSystem:
    """Reads and writes all saved data through a key/value storage."""

    def __init__(self, storage: LocalStorage | None = None) -> None:
        self.storage = storage if storage is not None else LocalStorage()

    def save_game_state(self, game_state: CurrentGameState) -> None:
        self.storage.set(SAVE_KEY_GAME_STATE, game_state._to_json())

    def load_game_state(self) -> CurrentGameState:
        """The saved game; raises KeyNotFoundError when there is none."""
        data = self.storage.get(SAVE_KEY_GAME_STATE)
        try:
            return CurrentGameState._from_json(data)
        except (AttributeError, TypeError, ValueError) as exc:
            raise StorageError("invalid saved game state") from exc

    def has_saved_game(self) -> bool:
        return self.storage.exists(SAVE_KEY_GAME_STATE)

    def delete_saved_game(self) -> None:
        self.storage.remove(SAVE_KEY_GAME_STATE)

    def save_achievements(self, achievements: Any) -> None:
        self.storage.set(SAVE_KEY_ACHIEVEMENTS, achievements)

    def load_achievements(self) -> Any:
        """The stored achievement data; raises KeyNotFoundError when absent."""
        return self.storage.get(SAVE_KEY_ACHIEVEMENTS)

    def save_settings(self, settings: GameSettings) -> None:
        self.storage.set(SAVE_KEY_SETTINGS, settings._to_json())

    def load_settings(self) -> GameSettings:
        """Saved settings, or the defaults when none can be read."""
        try:
            return GameSettings._from_json(self.storage.get(SAVE_KEY_SETTINGS))
        except _LOAD_ERRORS:
            return self.default_settings()

    def default_settings(self) -> GameSettings:
        return GameSettings(
            sound_enabled=True,
            music_enabled=True,
            animation_speed=1.0,
            show_tutorial=True,
            auto_save=True,
            preferred_mode=0,
        )

    def save_progress(self, progress: GameProgress) -> None:
        self.storage.set(SAVE_KEY_PROGRESS, progress._to_json())

    def load_progress(self) -> GameProgress:
        """Saved progress, or a fresh record with Classic mode unlocked."""
        try:
            return GameProgress._from_json(self.storage.get(SAVE_KEY_PROGRESS))
        except _LOAD_ERRORS:
            return GameProgress(unlocked_modes=[0], last_played=_now())

    def save_custom_level(self, level: CustomLevel) -> None:
        """Store a level, replacing any with the same id."""
        levels = self.load_custom_levels()
        for index, existing in enumerate(levels):
            if existing.id == level.id:
                levels[index] = level
                break
        else:
            levels.append(level)
        self.storage.set(SAVE_KEY_CUSTOM_LEVELS, [item._to_json() for item in levels])

    def load_custom_levels(self) -> list[CustomLevel]:
        """All stored custom levels; empty when none can be read."""
        try:
            data = self.storage.get(SAVE_KEY_CUSTOM_LEVELS)
            return [CustomLevel._from_json(item) for item in data or []]
        except _LOAD_ERRORS:
            return []

    def delete_custom_level(self, level_id: str) -> None:
        levels = [level for level in self.load_custom_levels() if level.id != level_id]
        self.storage.set(SAVE_KEY_CUSTOM_LEVELS, [item._to_json() for item in levels])

    def export_save_data(self) -> GameSaveData:
        """Gather every piece of saved data into one record."""
        save_data = GameSaveData(version=SAVE_VERSION, saved_at=_now())
        try:
            save_data.current_game = self.load_game_state()
        except _LOAD_ERRORS:
            pass
        try:
            save_data.achievements = self.load_achievements()
        except _LOAD_ERRORS:
            pass
        save_data.settings = self.load_settings()
        save_data.progress = self.load_progress()
        save_data.custom_levels = self.load_custom_levels()
        return save_data

    def import_save_data(self, save_data: GameSaveData) -> None:
        """Write back every piece present in ``save_data``."""
        steps = [
            (save_data.current_game, self.save_game_state, "failed to import game state"),
            (save_data.achievements, self.save_achievements, "failed to import achievements"),
            (save_data.settings, self.save_settings, "failed to import settings"),
            (save_data.progress, self.save_progress, "failed to import progress"),
        ]
        for value, save, message in steps:
            if value is None:
                continue
            try:
                save(value)
            except _WRITE_ERRORS as exc:
                raise StorageError(f"{message}: {exc}") from exc

        for level in save_data.custom_levels or []:
            try:
                self.save_custom_level(level)
            except _WRITE_ERRORS as exc:
                raise StorageError(f"failed to import custom level {level.id}: {exc}") from exc

    def clear_all_data(self) -> None:
        for key in (
            SAVE_KEY_GAME_STATE,
            SAVE_KEY_ACHIEVEMENTS,
            SAVE_KEY_SETTINGS,
            SAVE_KEY_CUSTOM_LEVELS,
            SAVE_KEY_PROGRESS,
        ):
            self.storage.remove(key)

    def storage_usage(self) -> dict[str, bool]:
        """Which kinds of data are currently stored."""
        return {
            "game_state": self.storage.exists(SAVE_KEY_GAME_STATE),
            "achievements": self.storage.exists(SAVE_KEY_ACHIEVEMENTS),
            "settings": self.storage.exists(SAVE_KEY_SETTINGS),
            "custom_levels": self.storage.exists(SAVE_KEY_CUSTOM_LEVELS),
            "progress": self.storage.exists(SAVE_KEY_PROGRESS),
        }