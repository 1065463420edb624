"""Top-level game controller tying the board, menus and panels together."""

from __future__ import annotations

from datetime import datetime, timedelta

from islandmerge.achievements import AchievementSystem
from islandmerge.achievements_ui import AchievementsUI
from islandmerge.actions import Action, ActionType
from islandmerge.animation import AnimationSystem, AnimationType
from islandmerge.board import Board, TileType
from islandmerge.editor import LevelEditor
from islandmerge.level_select_ui import LevelSelectUI
from islandmerge.levels import LevelData, LevelManager, LevelScore
from islandmerge.menu import Menu, new_main_menu
from islandmerge.save_load_ui import SaveLoadUI
from islandmerge.save_system import BoardData, CurrentGameState, SaveSystem, ScoreData
from islandmerge.state import GameMode, GameState, Score, World
from islandmerge.storage import StorageError

SCREEN_WIDTH = 640
SCREEN_HEIGHT = 480
GRID_OFFSET_X = 160
GRID_OFFSET_Y = 120
TILE_SIZE = 64
TIME_ATTACK_LIMIT = timedelta(minutes=2)
LEGACY_PERFECT_MOVES = 2

_MENU_LEVEL_SELECT = 0
_MENU_TIME_ATTACK = 1
_MENU_PUZZLE = 2
_MENU_LEVEL_EDITOR = 3


def _now() -> datetime:
    return datetime.now().astimezone()


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // b
    return -quotient if a < 0 else quotient


def _mode(value: int) -> GameMode | int:
    """The game mode for ``value``; values outside the known modes stay plain ints."""
    try:
        return GameMode(value)
    except ValueError:
        return value


class Game:
    """Runs the game: routes input to the active screen and tracks progress."""

    def __init__(self, save_system: SaveSystem | None = None) -> None:
        self.achievement_sys = AchievementSystem()
        self.save_system = save_system if save_system is not None else SaveSystem()
        self.level_editor = LevelEditor()
        self.level_manager = LevelManager()
        self.animation = AnimationSystem()
        self.achievement_ui = AchievementsUI(self.achievement_sys)
        self.save_load_ui = SaveLoadUI(self.save_system)
        self.level_select_ui = LevelSelectUI(self.level_manager)
        self.current_level: LevelData | None = None

        self.level_editor.on_level_created = self.achievement_sys.on_level_created
        self.save_load_ui.on_save_game = self.save_game
        self.save_load_ui.on_load_game = self.load_game
        self.level_select_ui.on_level_selected = self.start_level
        self.level_select_ui.on_back = self._back_to_menu

        self._load_achievements()

        self.main_menu: Menu = new_main_menu(self.handle_menu_action)
        self.world = World(state=GameState.MENU, mode=GameMode.CLASSIC)

    def _back_to_menu(self) -> None:
        self.world.state = GameState.MENU

    def handle_menu_action(self, action: int) -> None:
        """React to the main menu item with index ``action``."""
        if action == _MENU_LEVEL_SELECT:
            self.world.state = GameState.LEVEL_SELECT
            self.level_select_ui.show()
        elif action in (_MENU_TIME_ATTACK, _MENU_PUZZLE):
            self.start_game_mode(action)
        elif action == _MENU_LEVEL_EDITOR:
            self.world.state = GameState.LEVEL_EDITOR

    def start_game_mode(self, mode: int) -> None:
        """Start the built-in starter level in the given mode."""
        board = Board(5, 5)
        board.setup_level1()
        self.world = World(
            state=GameState.PLAYING,
            mode=_mode(mode),
            board=board,
            score=Score(),
            start_time=_now(),
        )
        if mode == GameMode.TIME_ATTACK:
            self.world.time_limit = TIME_ATTACK_LIMIT
        self.achievement_sys.on_game_start()

    def start_level(self, level_data: LevelData) -> None:
        """Start playing ``level_data``."""
        board = Board(level_data.width, level_data.height)
        for y, row in enumerate(level_data.grid[: level_data.height]):
            for x, tile_type in enumerate(row[: level_data.width]):
                board.set_tile(x, y, tile_type)

        self.current_level = level_data
        self.world = World(
            state=GameState.PLAYING,
            mode=_mode(int(level_data.difficulty)),
            board=board,
            score=Score(),
            start_time=_now(),
            time_limit=level_data.time_limit,
        )
        self.achievement_sys.on_game_start()

    def _handle_level_completion(self, completion_time: timedelta, moves: int) -> None:
        level = self.current_level
        if level is None:
            return
        stars = self.level_manager.calculate_stars(level, moves, completion_time)
        score = LevelScore(moves=moves, time=completion_time, stars=stars, date=_now())

        best = level.best_score
        if best is None or stars > best.stars or (stars == best.stars and moves < best.moves):
            level.best_score = score

        self.level_manager.unlock_next_level(level.id)
        self.level_manager.progress[level.id] = score

    def update(self, action: Action | None = None) -> None:
        """Advance one frame, handling ``action`` if the player did something."""
        self.animation.update()
        self.achievement_ui.update()

        if action is not None:
            self._dispatch(action)

        world = self.world
        if world.state != GameState.PLAYING or world.board is None:
            return

        world.score.time = _now() - world.start_time

        if world.mode == GameMode.TIME_ATTACK and world.time_limit > timedelta(0):
            if world.score.time >= world.time_limit:
                world.state = GameState.GAME_OVER

        if world.board.is_all_connected() and not world.game_won:
            world.game_won = True
            self.animation.add_animation(
                AnimationType.VICTORY, SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2, timedelta(seconds=2)
            )
            game_time = world.score.time
            moves = world.score.moves
            is_time_attack = world.mode == GameMode.TIME_ATTACK

            if self.current_level is not None:
                is_perfect = moves <= self.current_level.optimal_moves
                self._handle_level_completion(game_time, moves)
            else:
                is_perfect = moves <= LEGACY_PERFECT_MOVES

            self.achievement_sys.on_game_win(moves, game_time, is_time_attack, is_perfect)

    def _dispatch(self, action: Action) -> None:
        is_click = action.type == ActionType.CLICK
        if is_click and self.save_load_ui.is_settings_button_clicked(action.x, action.y):
            self.save_load_ui.toggle_panel()
        elif is_click and self.achievement_ui.is_achievement_button_clicked(action.x, action.y):
            self.achievement_ui.toggle_panel()
        elif self.save_load_ui.handle_click(action.x, action.y):
            pass
        elif self.achievement_ui.handle_click(action.x, action.y):
            pass
        elif self.level_select_ui.handle_click(action.x, action.y):
            pass
        elif self.world.state == GameState.MENU:
            self.main_menu.update(action.x, action.y, is_click)
        elif self.world.state == GameState.PLAYING:
            self.handle_game_action(action)
        elif self.world.state == GameState.LEVEL_EDITOR:
            if self.level_editor.update(action.x, action.y, is_click):
                self.world.state = GameState.MENU

    def handle_game_action(self, action: Action) -> None:
        """Try to build a bridge on the tile under a click."""
        if action.type != ActionType.CLICK or self.world.board is None:
            return
        grid_x = _trunc_div(action.x - GRID_OFFSET_X, TILE_SIZE)
        grid_y = _trunc_div(action.y - GRID_OFFSET_Y, TILE_SIZE)
        board = self.world.board
        if board.can_build_bridge(grid_x, grid_y):
            board.build_bridge(grid_x, grid_y)
            self.world.score.moves += 1
            self.animation.add_animation(
                AnimationType.BRIDGE_BUILD, grid_x, grid_y, timedelta(milliseconds=500)
            )
            self.achievement_sys.on_bridge_built()

    def _load_achievements(self) -> None:
        try:
            stored = self.save_system.load_achievements()
        except (StorageError, OSError, ValueError):
            return
        if isinstance(stored, str):
            try:
                self.achievement_sys.load_json(stored)
            except (ValueError, TypeError, KeyError, AttributeError):
                pass

    def save_game(self) -> None:
        """Store the game in progress and the achievements."""
        world = self.world
        if world.state != GameState.PLAYING or world.board is None:
            return
        game_state = CurrentGameState(
            mode=int(world.mode),
            board=self._board_to_save_data(world.board),
            score=ScoreData(
                moves=world.score.moves,
                time=world.score.time,
                best_time=world.score.best_time,
            ),
            start_time=world.start_time,
            time_limit=world.time_limit,
            game_won=world.game_won,
        )
        try:
            self.save_system.save_game_state(game_state)
        except (StorageError, OSError, TypeError, ValueError):
            pass
        try:
            self.save_system.save_achievements(self.achievement_sys.to_json())
        except (StorageError, OSError, TypeError, ValueError):
            pass

    def load_game(self) -> None:
        """Resume the stored game, if there is one."""
        try:
            game_state = self.save_system.load_game_state()
        except (StorageError, OSError, ValueError):
            return
        self.world = World(
            state=GameState.PLAYING,
            mode=_mode(game_state.mode),
            board=self._save_data_to_board(game_state.board),
            score=Score(
                moves=game_state.score.moves,
                time=game_state.score.time,
                best_time=game_state.score.best_time,
                best_moves=game_state.score.moves,
            ),
            start_time=game_state.start_time,
            time_limit=game_state.time_limit,
            game_won=game_state.game_won,
        )

    @staticmethod
    def _board_to_save_data(board: Board) -> BoardData:
        tiles = []
        for y in range(board.height):
            row = []
            for x in range(board.width):
                tile = board.get_tile(x, y)
                row.append(int(tile.type) if tile is not None else 0)
            tiles.append(row)
        return BoardData(
            width=board.width, height=board.height, tiles=tiles, islands=list(board.islands)
        )

    @staticmethod
    def _save_data_to_board(data: BoardData) -> Board:
        board = Board(data.width, data.height)
        for y, row in enumerate(data.tiles[: data.height]):
            for x, value in enumerate(row[: data.width]):
                board.set_tile(x, y, TileType(value))
        board.islands = list(data.islands)
        return board