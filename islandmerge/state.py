"""Game state, mode, score and world records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import IntEnum

from islandmerge.board import Board


class GameState(IntEnum):
    MENU = 0
    PLAYING = 1
    PAUSED = 2
    GAME_OVER = 3
    LEVEL_SELECT = 4
    LEVEL_EDITOR = 5


class GameMode(IntEnum):
    CLASSIC = 0
    TIME_ATTACK = 1
    PUZZLE = 2


@dataclass
class Score:
    moves: int = 0
    time: timedelta = timedelta(0)
    islands_left: int = 0
    best_time: timedelta = timedelta(0)
    best_moves: int = 0


@dataclass
class World:
    """Everything about the game currently in progress."""

    state: GameState = GameState.MENU
    mode: GameMode = GameMode.CLASSIC
    board: Board | None = None
    score: Score = field(default_factory=Score)
    game_won: bool = False
    start_time: datetime | None = None
    time_limit: timedelta = timedelta(0)