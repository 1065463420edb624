from datetime import timedelta

from islandmerge.board import Board
from islandmerge.state import GameMode, GameState, Score, World


def test_game_state_order_and_world_start():
    assert list(GameState) == [
        GameState.MENU,
        GameState.PLAYING,
        GameState.PAUSED,
        GameState.GAME_OVER,
        GameState.LEVEL_SELECT,
        GameState.LEVEL_EDITOR,
    ]
    world = World()
    assert world.state == 0
    world.state = GameState(3)
    assert world.state is GameState.GAME_OVER


def test_game_mode_from_int():
    assert GameMode(1) is GameMode.TIME_ATTACK
    assert GameMode(2) is GameMode.PUZZLE
    assert GameMode(0) is GameMode.CLASSIC


def test_score_defaults():
    score = Score()
    assert score.moves == 0
    assert score.time == timedelta(0)
    assert score.best_time == timedelta(0)


def test_world_defaults():
    world = World()
    assert world.state is GameState.MENU
    assert world.mode is GameMode.CLASSIC
    assert world.board is None
    assert world.game_won is False
    assert world.time_limit == timedelta(0)


def test_worlds_do_not_share_scores():
    first, second = World(), World()
    first.score.moves += 3
    assert second.score.moves == 0


def test_world_holds_board():
    board = Board(5, 5)
    world = World(state=GameState.PLAYING, board=board, time_limit=timedelta(minutes=2))
    assert world.board is board
    assert world.time_limit.total_seconds() == 120