"""The island board: tiles, bridges and connectivity."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from islandmerge.union_find import UnionFind

_DIRECTIONS = ((0, 1), (1, 0), (0, -1), (-1, 0))


class TileType(IntEnum):
    EMPTY = 0
    LAND = 1
    SEA = 2
    BRIDGE = 3


@dataclass
class Tile:
    type: TileType = TileType.EMPTY


class Board:
    """A rectangular grid of tiles on which bridges join islands."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.tiles = [Tile(TileType.SEA) for _ in range(width * height)]
        self.union_find = UnionFind(width * height)
        self.islands: list[int] = []

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> Tile | None:
        """The tile at (x, y), or None when outside the board."""
        if not self._in_bounds(x, y):
            return None
        return self.tiles[y * self.width + x]

    def set_tile(self, x: int, y: int, tile_type: TileType) -> None:
        """Set a tile's type; land tiles are recorded as islands."""
        if not self._in_bounds(x, y):
            return
        idx = y * self.width + x
        self.tiles[idx].type = TileType(tile_type)
        if tile_type == TileType.LAND:
            self.islands.append(idx)

    def _linked_neighbours(self, x: int, y: int):
        for dx, dy in _DIRECTIONS:
            nx, ny = x + dx, y + dy
            neighbour = self.get_tile(nx, ny)
            if neighbour is not None and neighbour.type in (TileType.LAND, TileType.BRIDGE):
                yield nx, ny

    def can_build_bridge(self, x: int, y: int) -> bool:
        """A bridge goes on sea next to land or another bridge."""
        tile = self.get_tile(x, y)
        if tile is None or tile.type != TileType.SEA:
            return False
        return any(True for _ in self._linked_neighbours(x, y))

    def build_bridge(self, x: int, y: int) -> None:
        """Place a bridge and join it with adjacent land and bridges."""
        if not self.can_build_bridge(x, y):
            return
        self.set_tile(x, y, TileType.BRIDGE)
        idx = y * self.width + x
        for nx, ny in self._linked_neighbours(x, y):
            self.union_find.union(idx, ny * self.width + nx)

    def is_all_connected(self) -> bool:
        """Whether every island lies in one component."""
        if len(self.islands) <= 1:
            return True
        first, *rest = self.islands
        return all(self.union_find.connected(first, other) for other in rest)

    def setup_level1(self) -> None:
        """Reset to the simple three-island starter level."""
        for tile in self.tiles:
            tile.type = TileType.SEA
        self.islands = []
        self.set_tile(1, 1, TileType.LAND)
        self.set_tile(3, 1, TileType.LAND)
        self.set_tile(2, 3, TileType.LAND)
        self.union_find = UnionFind(self.width * self.height)