# islandmerge

This package holds the rules and state of a small puzzle game. Islands sit in a
sea of tiles. You build bridges on sea tiles until every island belongs to one
connected landmass.

It needs Python 3.10 or later and has no third-party runtime dependencies.

## What is in it

- `islandmerge.board`: `Board`, `Tile` and `TileType`. This is the tile grid,
  with bridge building and the check that every island is connected.
- `islandmerge.union_find`: `UnionFind`, the disjoint-set structure the board
  uses to track connectivity.
- `islandmerge.levels`: `LevelManager` with four built-in level sets (Beginner,
  Intermediate, Expert, Master). It handles level unlocking and
  `calculate_stars`. The module also has the pattern helpers `create_grid`,
  `create_spiral_pattern`, `create_continental_pattern` and
  `create_symmetric_pattern`.
- `islandmerge.achievements`: `AchievementSystem`. It collects play
  statistics, unlocks ten achievements and converts to and from JSON
  (`to_json` and `load_json`).
- `islandmerge.editor`: `LevelEditor`. It paints tiles with a chosen `Tool`,
  toggles a test board and exports the level as JSON.
- `islandmerge.storage`: `LocalStorage`, which keeps one JSON file per key.
  When no directory is given it uses `~/.island-merge`. A missing key raises
  `KeyNotFoundError`, which is a subclass of `StorageError`.
- `islandmerge.save_system`: `SaveSystem`. It saves and loads the game state,
  achievements, settings (`GameSettings`), progress (`GameProgress`) and custom
  levels (`CustomLevel`). It can also export and import all of these at once
  as a `GameSaveData` record.
- `islandmerge.menu`, `islandmerge.level_select_ui`,
  `islandmerge.save_load_ui` and `islandmerge.achievements_ui` handle clicks
  and hover state for the main menu, the level select panel, the settings
  panel and the achievements panel, on a 640×480 screen layout.
- `islandmerge.animation`: `AnimationSystem`, which tracks timed effects and
  their progress, plus the easing functions `ease_out_cubic` and
  `ease_in_out_cubic`.
- `islandmerge.game`: `Game`, which ties all of these together. Each call to
  `Game.update(action)` advances one frame. `action` is an optional click
  (`islandmerge.actions.Action`).

## Playing on a board

```python
from islandmerge.board import Board

board = Board(5, 5)
board.setup_level1()          # three single-tile islands

board.is_all_connected()      # False
board.build_bridge(2, 1)      # joins the two top islands
board.build_bridge(2, 2)      # reaches down to the bottom island
board.is_all_connected()      # True
```

A bridge can only go on a sea tile that touches land or another bridge.
`Board.can_build_bridge` tells you whether a move is allowed.

## Driving a whole game

```python
from islandmerge.actions import Action, ActionType
from islandmerge.game import Game
from islandmerge.save_system import SaveSystem
from islandmerge.storage import LocalStorage

game = Game(SaveSystem(LocalStorage("./island-merge-data")))
game.handle_menu_action(1)    # Time Attack on the starter level, 2-minute limit

# The board is drawn at (160, 120) with 64-pixel tiles.
game.update(Action(ActionType.CLICK, 160 + 2 * 64 + 10, 120 + 1 * 64 + 10))
game.update(Action(ActionType.CLICK, 160 + 2 * 64 + 10, 120 + 2 * 64 + 10))

game.world.score.moves        # 2
game.world.game_won           # True
```

Main menu action `0` opens level select, `1` starts Time Attack, `2` starts
Puzzle mode and `3` opens the editor. When you finish a level chosen from
level select, it is rated with stars and the next level is unlocked.

## Levels and stars

```python
from islandmerge.levels import LevelManager

manager = LevelManager()
level = manager.get_level_by_id("beginner_01")
manager.unlock_next_level(level.id)   # marks it completed, unlocks the next one
```

`calculate_stars` gives one to three stars. The rating depends on the moves
used compared with the level's optimal count and, where the level has one, on
its time limit.

## Achievements

```python
from islandmerge.achievements import AchievementSystem

achievements = AchievementSystem()
achievements.on_achievement_unlocked(lambda a: print("Unlocked:", a.name))
achievements.on_game_start()
achievements.on_bridge_built()
print(achievements.progress_summary())

saved = achievements.to_json()
restored = AchievementSystem()
restored.load_json(saved)
```

## Saving

```python
from islandmerge.storage import LocalStorage
from islandmerge.save_system import SaveSystem

saves = SaveSystem(LocalStorage("./island-merge-data"))
settings = saves.load_settings()      # defaults when nothing is saved yet
saves.save_settings(settings)
print(saves.storage_usage())
```

If you create `SaveSystem()` or `Game()` without arguments, they store data
under `~/.island-merge`.

## What it does not do

The package has no window, no drawing and no input polling. It has no command
to run either. To play, you need your own front end. That front end draws
`game.world` and the panels, and passes each click to `Game.update` as an
`Action`.

## Running the tests

The tests use pytest, which is listed under the `test` extra:

```
pip install -e .[test]
pytest
```