"""Level selection panel: difficulty tabs, level grid and navigation."""

from __future__ import annotations

from typing import Callable

from islandmerge.levels import Difficulty, LevelData, LevelManager, LevelSet

PANEL_X = 50
PANEL_Y = 30
PANEL_WIDTH = 540
PANEL_HEIGHT = 420

_TAB_WIDTH = 120
_TAB_HEIGHT = 30
_LEVEL_WIDTH = 100
_LEVEL_HEIGHT = 80
_LEVELS_PER_ROW = 5
_LEVEL_SPACING = 10
_CHAR_WIDTH = 6


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // b
    return -quotient if a < 0 else quotient


class LevelSelectUI:
    """Lets the player pick an unlocked level from a difficulty tab."""

    def __init__(self, level_manager: LevelManager) -> None:
        self.level_manager = level_manager
        self.selected_difficulty = Difficulty.BEGINNER
        self.scroll_offset = 0.0
        self.show_panel = False
        self.on_level_selected: Callable[[LevelData], None] | None = None
        self.on_back: Callable[[], None] | None = None

    @property
    def is_shown(self) -> bool:
        return self.show_panel

    def show(self) -> None:
        self.show_panel = True
        self.scroll_offset = 0.0

    def hide(self) -> None:
        self.show_panel = False

    def _go_back(self) -> None:
        self.hide()
        if self.on_back is not None:
            self.on_back()

    def handle_click(self, x: int, y: int) -> bool:
        """Whether the click was consumed by the panel."""
        if not self.show_panel:
            return False

        if (
            x < PANEL_X
            or x > PANEL_X + PANEL_WIDTH
            or y < PANEL_Y
            or y > PANEL_Y + PANEL_HEIGHT
        ):
            self._go_back()
            return True

        right = PANEL_X + PANEL_WIDTH
        if right - 40 <= x <= right - 10 and PANEL_Y + 10 <= y <= PANEL_Y + 40:
            self._go_back()
            return True

        tab_y = PANEL_Y + 50
        for difficulty in Difficulty:
            tab_x = PANEL_X + 20 + int(difficulty) * _TAB_WIDTH
            if tab_x <= x <= tab_x + _TAB_WIDTH - 10 and tab_y <= y <= tab_y + _TAB_HEIGHT:
                self.selected_difficulty = difficulty
                self.scroll_offset = 0.0
                return True

        self._handle_level_click(x, y)
        return True

    def _level_positions(self, level_set: LevelSet):
        """Yield each visible level with its top-left corner."""
        levels_start_y = PANEL_Y + 120
        for index, level in enumerate(level_set.levels):
            row, col = divmod(index, _LEVELS_PER_ROW)
            level_x = PANEL_X + 20 + col * (_LEVEL_WIDTH + _LEVEL_SPACING)
            level_y = int(
                float(levels_start_y + row * (_LEVEL_HEIGHT + _LEVEL_SPACING)) - self.scroll_offset
            )
            if level_y < levels_start_y - _LEVEL_HEIGHT or level_y > PANEL_Y + 400:
                continue
            yield level, level_x, level_y

    def _handle_level_click(self, x: int, y: int) -> None:
        level_set = self.current_level_set()
        if level_set is None:
            return
        for level, level_x, level_y in self._level_positions(level_set):
            if (
                level_x <= x <= level_x + _LEVEL_WIDTH
                and level_y <= y <= level_y + _LEVEL_HEIGHT
            ):
                if level.unlocked and self.on_level_selected is not None:
                    self.on_level_selected(level)
                    self.hide()
                return

    def handle_scroll(self, delta_y: float) -> None:
        if not self.show_panel:
            return
        self.scroll_offset = max(0.0, self.scroll_offset + delta_y * 20)

    def _level_set_by_difficulty(self, difficulty: Difficulty) -> LevelSet | None:
        return next(
            (s for s in self.level_manager.level_sets if s.difficulty == difficulty), None
        )

    def current_level_set(self) -> LevelSet | None:
        """The level set of the selected difficulty tab."""
        return self._level_set_by_difficulty(self.selected_difficulty)

    def split_level_name(self, name: str, max_width: int) -> list[str]:
        """Wrap a level name into lines that roughly fit ``max_width`` pixels."""
        max_chars = _trunc_div(max_width, _CHAR_WIDTH)
        if len(name.encode("utf-8")) <= max_chars:
            return [name]

        half = _trunc_div(max_chars, 2)
        words: list[str] = []
        current = ""
        for char in name:
            if char == " " and len(current.encode("utf-8")) > half:
                words.append(current)
                current = ""
            else:
                current += char
        if current:
            words.append(current)

        if not words:
            return [name.encode("utf-8")[:max_chars].decode("utf-8", errors="ignore")]
        return words

    def is_difficulty_unlocked(self, level_set: LevelSet | None) -> bool:
        """Whether enough levels are completed to open ``level_set``."""
        if level_set is None:
            return False
        completed = sum(
            1
            for each_set in self.level_manager.level_sets
            for level in each_set.levels
            if level.completed
        )
        return completed >= level_set.unlock_level