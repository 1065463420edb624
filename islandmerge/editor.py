"""Level editor: paint tiles, test-play and export a level."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable

from islandmerge.board import Board, TileType

TILE_SIZE = 32
GRID_X = 50
GRID_Y = 100
GRID_WIDTH = 16
GRID_HEIGHT = 12

Color = tuple[int, int, int, int]


class EditorMode(IntEnum):
    PAINT = 0
    ERASE = 1
    TEST = 2


class Tool(IntEnum):
    LAND = 0
    SEA = 1
    EMPTY = 2


_TOOL_TILES = {Tool.LAND: TileType.LAND, Tool.SEA: TileType.SEA, Tool.EMPTY: TileType.EMPTY}
_TOOL_NAMES = {Tool.LAND: "Land", Tool.SEA: "Sea", Tool.EMPTY: "Empty"}


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // b
    return -quotient if a < 0 else quotient


@dataclass
class UIButton:
    text: str
    x: float
    y: float
    width: float
    height: float
    action: Callable[[], None] | None
    color: Color
    hovered: bool = False

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.x + self.width and self.y <= y <= self.y + self.height


class LevelEditor:
    """Editable board with a toolbar; the last button returns to the menu."""

    def __init__(self) -> None:
        self.board = Board(GRID_WIDTH, GRID_HEIGHT)
        self.mode = EditorMode.PAINT
        self.tool = Tool.LAND
        self.is_playing = False
        self.test_board: Board | None = None
        self.on_level_created: Callable[[], None] | None = None
        self.buttons: list[UIButton] = []
        self._setup_ui()

    def _select(self, tool: Tool) -> Callable[[], None]:
        def action() -> None:
            self.tool = tool

        return action

    def _setup_ui(self) -> None:
        width, height, spacing = 80.0, 30.0, 10.0
        specs = [
            ("Land", (139, 195, 74, 255), self._select(Tool.LAND)),
            ("Sea", (64, 164, 223, 255), self._select(Tool.SEA)),
            ("Empty", (200, 200, 200, 255), self._select(Tool.EMPTY)),
            ("Clear", (255, 100, 100, 255), self.clear_board),
            ("Test", (100, 255, 100, 255), self.test_level),
            ("Export", (255, 255, 100, 255), self.export_level),
            ("Back", (150, 150, 150, 255), None),
        ]
        self.buttons = [
            UIButton(text, 50 + i * (width + spacing), 20.0, width, height, action, color)
            for i, (text, color, action) in enumerate(specs)
        ]

    def update(self, mouse_x: int, mouse_y: int, clicked: bool) -> bool:
        """Handle the pointer; returns True when Back was clicked."""
        back_clicked = False
        last = len(self.buttons) - 1
        for index, button in enumerate(self.buttons):
            button.hovered = button.contains(mouse_x, mouse_y)
            if button.hovered and clicked:
                if button.action is not None:
                    button.action()
                elif index == last:
                    back_clicked = True

        if back_clicked:
            return True

        if clicked:
            grid_x = _trunc_div(mouse_x - GRID_X, TILE_SIZE)
            grid_y = _trunc_div(mouse_y - GRID_Y, TILE_SIZE)
            if 0 <= grid_x < GRID_WIDTH and 0 <= grid_y < GRID_HEIGHT:
                if self.is_playing:
                    self._handle_test_click(grid_x, grid_y)
                else:
                    self.paint_tile(grid_x, grid_y)
        return False

    def _handle_test_click(self, x: int, y: int) -> None:
        if self.test_board is not None and self.test_board.can_build_bridge(x, y):
            self.test_board.build_bridge(x, y)

    def paint_tile(self, x: int, y: int) -> None:
        """Paint the tile at (x, y) with the current tool."""
        self.board.set_tile(x, y, _TOOL_TILES[self.tool])

    def clear_board(self) -> None:
        for y in range(self.board.height):
            for x in range(self.board.width):
                self.board.set_tile(x, y, TileType.EMPTY)

    def test_level(self) -> None:
        """Toggle test mode, playing on a copy of the edited board."""
        if self.is_playing:
            self.is_playing = False
            self.test_board = None
            return
        test_board = Board(self.board.width, self.board.height)
        for y in range(self.board.height):
            for x in range(self.board.width):
                tile = self.board.get_tile(x, y)
                if tile is not None:
                    test_board.set_tile(x, y, tile.type)
        self.test_board = test_board
        self.is_playing = True

    def export_level(self) -> str:
        """Print the level as JSON, notify the listener and return the JSON."""
        text = json.dumps(self.create_level_data(), indent=2, sort_keys=True)
        print("Level exported:")
        print(text)
        if self.on_level_created is not None:
            self.on_level_created()
        return text

    def create_level_data(self) -> dict[str, Any]:
        tiles = [
            [int(self.board.tiles[y * self.board.width + x].type) for x in range(self.board.width)]
            for y in range(self.board.height)
        ]
        return {
            "name": "Custom Level",
            "width": self.board.width,
            "height": self.board.height,
            "tiles": tiles,
        }

    def tool_name(self) -> str:
        return _TOOL_NAMES.get(self.tool, "Unknown")