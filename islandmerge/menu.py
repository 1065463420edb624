"""Clickable menus."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

Color = tuple[int, int, int, int]


@dataclass
class MenuItem:
    text: str
    action: Callable[[], None] | None
    x: float
    y: float
    width: float
    height: float
    hovered: bool = False
    selected: bool = False

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.x + self.width and self.y <= y <= self.y + self.height


@dataclass
class Menu:
    title: str
    items: list[MenuItem] = field(default_factory=list)
    background: Color = (240, 240, 240, 255)

    def update(self, mouse_x: int, mouse_y: int, clicked: bool) -> None:
        """Refresh hover states and run the action of a clicked item."""
        for item in self.items:
            item.hovered = item.contains(mouse_x, mouse_y)
            if item.hovered and clicked and item.action is not None:
                item.action()


def new_main_menu(on_mode_select: Callable[[int], None]) -> Menu:
    """The title menu; each item reports its index to ``on_mode_select``."""
    texts = ["Select Level", "Time Attack", "Puzzle Mode", "Level Editor"]

    def choose(index: int) -> Callable[[], None]:
        return lambda: on_mode_select(index)

    items = [
        MenuItem(text, choose(i), 320 - 100, 200.0 + i * 60, 200, 40)
        for i, text in enumerate(texts)
    ]
    return Menu(title="Island Merge", items=items)