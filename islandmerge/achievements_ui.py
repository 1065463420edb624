"""Achievement notifications and the achievements panel's input handling."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import timedelta

from islandmerge.achievements import Achievement, AchievementSystem

NOTIFICATION_DURATION = timedelta(seconds=4)
_HIDDEN_Y = -100.0
_SHOWN_Y = 20.0
_SLIDE_DISTANCE = _SHOWN_Y - _HIDDEN_Y


@dataclass
class AchievementNotification:
    """A toast that slides in, stays, then slides out again."""

    achievement: Achievement
    start_time: float = field(default_factory=time.monotonic)
    duration: timedelta = NOTIFICATION_DURATION
    y: float = _HIDDEN_Y


class AchievementsUI:
    """Shows unlock notifications and an achievements panel."""

    def __init__(self, system: AchievementSystem) -> None:
        self.achievement_system = system
        self.notifications: list[AchievementNotification] = []
        self.show_panel = False
        self.panel_scroll = 0.0
        system.on_achievement_unlocked(self._on_achievement_unlocked)

    def _on_achievement_unlocked(self, achievement: Achievement) -> None:
        self.notifications.append(AchievementNotification(achievement))

    def update(self) -> None:
        """Move notifications along their slide and drop expired ones."""
        now = time.monotonic()
        active = []
        for notification in self.notifications:
            total = notification.duration.total_seconds()
            elapsed = now - notification.start_time
            if elapsed >= total:
                continue
            progress = elapsed / total
            if progress < 0.2:
                notification.y = _HIDDEN_Y + progress / 0.2 * _SLIDE_DISTANCE
            elif progress < 0.8:
                notification.y = _SHOWN_Y
            else:
                notification.y = _SHOWN_Y - (progress - 0.8) / 0.2 * _SLIDE_DISTANCE
            active.append(notification)
        self.notifications = active

    def toggle_panel(self) -> None:
        self.show_panel = not self.show_panel
        self.panel_scroll = 0.0

    def handle_scroll(self, delta_y: float) -> None:
        if self.show_panel:
            self.panel_scroll = max(0.0, self.panel_scroll + delta_y * 20)

    def handle_click(self, x: int, y: int) -> bool:
        """Whether the click was consumed; the close button shuts the panel."""
        if not self.show_panel:
            return False
        if 580 <= x <= 620 and 20 <= y <= 60:
            self.show_panel = False
        return True

    def is_achievement_button_clicked(self, x: int, y: int) -> bool:
        return 500 <= x <= 620 and 10 <= y <= 40