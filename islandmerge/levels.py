"""Built-in level sets, level progression and star ratings."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import IntEnum

from islandmerge.board import TileType

_DEGREE = 0.017453292519943295

Pattern = list[list[int]]
Grid = list[list[TileType]]


class Difficulty(IntEnum):
    BEGINNER = 0
    INTERMEDIATE = 1
    EXPERT = 2
    MASTER = 3


@dataclass
class Objective:
    type: str
    target: int
    description: str


@dataclass
class LevelScore:
    """A finished attempt at a level; ``stars`` runs from 1 to 3."""

    moves: int
    time: timedelta
    stars: int
    date: datetime = field(default_factory=datetime.now)


@dataclass
class LevelData:
    id: str
    name: str
    description: str
    difficulty: Difficulty
    width: int
    height: int
    optimal_moves: int
    grid: Grid = field(default_factory=list)
    time_limit: timedelta = field(default_factory=timedelta)
    objectives: list[Objective] = field(default_factory=list)
    unlocked: bool = False
    completed: bool = False
    best_score: LevelScore | None = None


@dataclass
class LevelSet:
    name: str
    difficulty: Difficulty
    description: str
    unlock_level: int
    levels: list[LevelData] = field(default_factory=list)


def _blank(width: int, height: int) -> Pattern:
    return [[0] * width for _ in range(height)]


def create_grid(width: int, height: int, pattern: Pattern) -> Grid:
    """Turn a 0/1 pattern into tiles: 1 is land, anything else (or missing) is sea."""

    def tile(x: int, y: int) -> TileType:
        if y < len(pattern) and x < len(pattern[y]) and pattern[y][x] == 1:
            return TileType.LAND
        return TileType.SEA

    return [[tile(x, y) for x in range(width)] for y in range(height)]


def create_spiral_pattern(width: int, height: int) -> Pattern:
    """Points stepping outward from the centre over two rotations."""
    pattern = _blank(width, height)
    center_x, center_y = width // 2, height // 2
    radius = 2
    for angle in range(0, 720, 30):
        offset = int(float(radius) * 0.1 * float(angle) * _DEGREE)
        x = center_x + offset
        y = center_y + offset
        if 0 <= x < width and 0 <= y < height:
            pattern[y][x] = 1
    return pattern


def create_continental_pattern(width: int, height: int) -> Pattern:
    """Several round land masses of different sizes."""
    pattern = _blank(width, height)
    continents = [(6, 6, 3), (18, 6, 4), (6, 18, 3), (18, 18, 4), (12, 12, 2)]
    for center_x, center_y, size in continents:
        for dy in range(-size, size + 1):
            for dx in range(-size, size + 1):
                x, y = center_x + dx, center_y + dy
                if 0 <= x < width and 0 <= y < height and dx * dx + dy * dy <= size * size:
                    pattern[y][x] = 1
    return pattern


def create_symmetric_pattern(width: int, height: int) -> Pattern:
    """A handful of points mirrored across both axes."""
    pattern = _blank(width, height)
    points = [(3, 3), (5, 2), (8, 4), (10, 7), (12, 3)]
    for px, py in points:
        if px < width and py < height:
            pattern[py][px] = 1
        mirrors = [
            (width - 1 - px, height - 1 - py),
            (px, height - 1 - py),
            (width - 1 - px, py),
        ]
        for x, y in mirrors:
            if 0 <= x < width and 0 <= y < height:
                pattern[y][x] = 1
    return pattern


def _connect_all(description: str = "Connect all islands") -> Objective:
    return Objective("connect_all", 1, description)


def _beginner_levels() -> list[LevelData]:
    level1 = LevelData(
        "beginner_01", "First Steps", "Connect three islands in a simple triangle",
        Difficulty.BEGINNER, 5, 5, 2,
        objectives=[_connect_all()],
    )
    level1.grid = create_grid(5, 5, [
        [0, 0, 0, 0, 0],
        [0, 1, 0, 1, 0],
        [0, 0, 0, 0, 0],
        [0, 0, 1, 0, 0],
        [0, 0, 0, 0, 0],
    ])

    level2 = LevelData(
        "beginner_02", "Four Corners", "Islands at each corner need connecting",
        Difficulty.BEGINNER, 6, 6, 5,
        objectives=[_connect_all("Connect all corner islands")],
    )
    level2.grid = create_grid(6, 6, [
        [1, 0, 0, 0, 0, 1],
        [0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0],
        [1, 0, 0, 0, 0, 1],
    ])

    level3 = LevelData(
        "beginner_03", "Island Cross", "Connect islands arranged in a cross pattern",
        Difficulty.BEGINNER, 7, 7, 4,
        objectives=[_connect_all(), Objective("min_bridges", 4, "Use minimum bridges")],
    )
    level3.grid = create_grid(7, 7, [
        [0, 0, 0, 1, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0],
        [1, 0, 0, 1, 0, 0, 1],
        [0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 1, 0, 0, 0],
    ])

    level4 = LevelData(
        "beginner_04", "Island Circle", "Islands forming a circle - find the optimal path",
        Difficulty.BEGINNER, 8, 8, 6,
        objectives=[_connect_all()],
    )
    level4.grid = create_grid(8, 8, [
        [0, 0, 0, 1, 1, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0, 0],
        [0, 1, 0, 0, 0, 0, 1, 0],
        [0, 0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0, 0],
        [0, 1, 0, 0, 0, 0, 1, 0],
        [0, 0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 1, 1, 0, 0, 0],
    ])
    return [level1, level2, level3, level4]


def _intermediate_levels() -> list[LevelData]:
    level5 = LevelData(
        "intermediate_01", "Scattered Isles", "Many small islands scattered across the sea",
        Difficulty.INTERMEDIATE, 10, 10, 8,
        time_limit=timedelta(minutes=3),
        objectives=[_connect_all(), Objective("time_limit", 180, "Complete within 3 minutes")],
    )
    level5.grid = create_grid(10, 10, [
        [1, 0, 0, 0, 0, 0, 0, 0, 0, 1],
        [0, 0, 0, 1, 0, 0, 1, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
        [0, 1, 0, 0, 0, 0, 0, 0, 1, 0],
        [0, 0, 0, 0, 1, 1, 0, 0, 0, 0],
        [0, 0, 0, 0, 1, 1, 0, 0, 0, 0],
        [0, 1, 0, 0, 0, 0, 0, 0, 1, 0],
        [0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 1, 0, 0, 1, 0, 0, 0],
        [1, 0, 0, 0, 0, 0, 0, 0, 0, 1],
    ])

    level6 = LevelData(
        "intermediate_02", "Island Maze", "Navigate through a maze of islands",
        Difficulty.INTERMEDIATE, 12, 12, 12,
        objectives=[_connect_all(), Objective("min_bridges", 12, "Find the optimal path")],
    )
    maze = _blank(12, 12)
    for row in (1, 5, 10):
        for col in (1, 5, 10):
            maze[row][col] = 1
    level6.grid = create_grid(12, 12, maze)

    level7 = LevelData(
        "intermediate_03", "Dense Archipelago", "Many islands clustered together",
        Difficulty.INTERMEDIATE, 15, 15, 15,
        objectives=[_connect_all()],
    )
    cluster = _blank(15, 15)
    positions = [
        (2, 2), (3, 2), (2, 3),
        (12, 2), (13, 2), (12, 3),
        (7, 7), (8, 7), (7, 8), (8, 8),
        (2, 12), (3, 12), (2, 13),
        (12, 12), (13, 12), (12, 13),
    ]
    for x, y in positions:
        if x < 15 and y < 15:
            cluster[y][x] = 1
    level7.grid = create_grid(15, 15, cluster)
    return [level5, level6, level7]


def _expert_levels() -> list[LevelData]:
    level8 = LevelData(
        "expert_01", "Spiral Galaxy", "Islands arranged in a vast spiral pattern",
        Difficulty.EXPERT, 20, 20, 25,
        time_limit=timedelta(minutes=5),
        objectives=[_connect_all(), Objective("time_limit", 300, "Complete within 5 minutes")],
    )
    level8.grid = create_grid(20, 20, create_spiral_pattern(20, 20))

    level9 = LevelData(
        "expert_02", "Continental Drift", "The ultimate island connecting challenge",
        Difficulty.EXPERT, 25, 25, 35,
        time_limit=timedelta(minutes=8),
        objectives=[
            _connect_all("Connect all continents"),
            Objective("time_limit", 480, "Complete within 8 minutes"),
            Objective("min_bridges", 35, "Achieve optimal efficiency"),
        ],
    )
    level9.grid = create_grid(25, 25, create_continental_pattern(25, 25))
    return [level8, level9]


def _master_levels() -> list[LevelData]:
    master1 = LevelData(
        "master_01", "Perfect Symmetry", "A perfectly symmetric island arrangement",
        Difficulty.MASTER, 20, 20, 18,
        time_limit=timedelta(minutes=4),
        objectives=[_connect_all(), Objective("min_bridges", 18, "Perfect efficiency required")],
    )
    master1.grid = create_grid(20, 20, create_symmetric_pattern(20, 20))
    return [master1]


class LevelManager:
    """All level sets plus the player's progress through them."""

    def __init__(self) -> None:
        self.level_sets: list[LevelSet] = [
            LevelSet("Island Basics", Difficulty.BEGINNER,
                     "Learn the fundamentals of island connecting", 0, _beginner_levels()),
            LevelSet("Island Chains", Difficulty.INTERMEDIATE,
                     "More complex island arrangements", 3, _intermediate_levels()),
            LevelSet("Island Archipelago", Difficulty.EXPERT,
                     "Master the art of large-scale connecting", 8, _expert_levels()),
            LevelSet("Island Master", Difficulty.MASTER,
                     "Ultimate challenges for true masters", 15, _master_levels()),
        ]
        self.current_level: LevelData | None = None
        self.progress: dict[str, LevelScore] = {}
        first_set = self.level_sets[0]
        if first_set.levels:
            first_set.levels[0].unlocked = True

    def _all_levels(self):
        for level_set in self.level_sets:
            yield from level_set.levels

    def get_level_by_id(self, level_id: str) -> LevelData | None:
        """The level with ``level_id``, or None."""
        return next((level for level in self._all_levels() if level.id == level_id), None)

    def unlock_next_level(self, completed_level_id: str) -> None:
        """Mark a level completed and unlock what follows it."""
        for level_set in self.level_sets:
            for index, level in enumerate(level_set.levels):
                if level.id == completed_level_id:
                    level.completed = True
                    if index + 1 < len(level_set.levels):
                        level_set.levels[index + 1].unlocked = True
                    self._check_unlock_next_difficulty()
                    return

    def _check_unlock_next_difficulty(self) -> None:
        completed_count = 0
        for level_set in self.level_sets:
            completed_count += sum(1 for level in level_set.levels if level.completed)
            for next_set in self.level_sets:
                if next_set.unlock_level <= completed_count:
                    for level in next_set.levels:
                        if not level.unlocked:
                            level.unlocked = True
                            return

    def calculate_stars(self, level: LevelData, moves: int, completion_time: timedelta) -> int:
        """Rate a completion from 1 to 3 stars by moves and, if limited, time."""
        stars = 1
        if moves <= level.optimal_moves:
            stars = 3
        elif moves <= level.optimal_moves + 2:
            stars = 2

        if level.time_limit > timedelta(0):
            if completion_time <= level.time_limit // 2:
                stars = 3
            elif completion_time <= (level.time_limit * 3) // 4:
                stars = max(stars, 2)
        return stars