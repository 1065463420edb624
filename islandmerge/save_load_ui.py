"""Settings panel with save/load, preferences and data management tabs."""

from __future__ import annotations

import time
from typing import Callable

from islandmerge.save_system import GameSettings, SaveSystem

PANEL_X = 120
PANEL_Y = 60
PANEL_WIDTH = 400
PANEL_HEIGHT = 360

STATUS_LIFETIME = 3.0

TAB_SAVE_LOAD = 0
TAB_SETTINGS = 1
TAB_DATA = 2

_TAB_WIDTH = 120
_BUTTON_WIDTH = 160
_BUTTON_HEIGHT = 40
_SPACING = 20


def _inside(x: int, y: int, left: int, top: int, width: int, height: int) -> bool:
    return left <= x <= left + width and top <= y <= top + height


class SaveLoadUI:
    """Handles clicks on the settings panel and reports a status message."""

    def __init__(self, save_system: SaveSystem) -> None:
        self.save_system = save_system
        self.show_panel = False
        self.selected_tab = TAB_SAVE_LOAD
        self.settings: GameSettings = save_system.load_settings()
        self.status_message = ""
        self.status_time: float | None = None
        self.on_save_game: Callable[[], None] | None = None
        self.on_load_game: Callable[[], None] | None = None

    @property
    def is_open(self) -> bool:
        return self.show_panel

    def toggle_panel(self) -> None:
        """Open or close the panel; opening reloads the stored settings."""
        self.show_panel = not self.show_panel
        if self.show_panel:
            self.settings = self.save_system.load_settings()

    def update(self) -> None:
        """Clear the status message once it has been shown long enough."""
        if self.status_time is not None and time.monotonic() - self.status_time > STATUS_LIFETIME:
            self.status_message = ""
            self.status_time = None

    def handle_click(self, x: int, y: int) -> bool:
        """Whether the click was consumed by the panel."""
        if not self.show_panel:
            return False

        if not _inside(x, y, PANEL_X, PANEL_Y, PANEL_WIDTH, PANEL_HEIGHT):
            self.show_panel = False
            return True

        if _inside(x, y, PANEL_X + PANEL_WIDTH - 30, PANEL_Y + 10, 20, 20):
            self.show_panel = False
            return True

        tab_y = PANEL_Y + 40
        for tab in (TAB_SAVE_LOAD, TAB_SETTINGS, TAB_DATA):
            tab_x = PANEL_X + 20 + tab * _TAB_WIDTH
            if _inside(x, y, tab_x, tab_y, _TAB_WIDTH - 10, 30):
                self.selected_tab = tab
                return True

        handlers = {
            TAB_SAVE_LOAD: self._handle_save_load_click,
            TAB_SETTINGS: self._handle_settings_click,
            TAB_DATA: self._handle_data_click,
        }
        handler = handlers.get(self.selected_tab)
        if handler is not None:
            handler(x, y)
        return True

    def _handle_save_load_click(self, x: int, y: int) -> None:
        button_y = PANEL_Y + 120
        save_x = PANEL_X + 30
        load_x = save_x + _BUTTON_WIDTH + _SPACING
        delete_y = button_y + _BUTTON_HEIGHT + 20
        auto_save_y = delete_y + _BUTTON_HEIGHT + 20

        if _inside(x, y, save_x, button_y, _BUTTON_WIDTH, _BUTTON_HEIGHT):
            self._save_game()
        elif _inside(x, y, load_x, button_y, _BUTTON_WIDTH, _BUTTON_HEIGHT):
            self._load_game()
        elif _inside(x, y, save_x, delete_y, _BUTTON_WIDTH, _BUTTON_HEIGHT):
            self._delete_save()
        elif _inside(x, y, save_x, auto_save_y, 20, 20):
            self.settings.auto_save = not self.settings.auto_save
            self.save_system.save_settings(self.settings)

    def _handle_settings_click(self, x: int, y: int) -> None:
        start_y = PANEL_Y + 100
        spacing = 30
        checkbox_x = PANEL_X + 30
        toggles = ["sound_enabled", "music_enabled", "show_tutorial", "auto_save"]

        for index, name in enumerate(toggles):
            if _inside(x, y, checkbox_x, start_y + spacing * index, 20, 20):
                setattr(self.settings, name, not getattr(self.settings, name))
                self.save_system.save_settings(self.settings)
                self._show_status("Settings saved!")
                return

        slider_y = start_y + spacing * 4
        if slider_y <= y <= slider_y + 20:
            if checkbox_x <= x <= checkbox_x + 40:
                self._set_animation_speed(0.5, "Slow")
            elif checkbox_x + 100 <= x <= checkbox_x + 140:
                self._set_animation_speed(2.0, "Fast")

    def _set_animation_speed(self, speed: float, label: str) -> None:
        self.settings.animation_speed = speed
        self.save_system.save_settings(self.settings)
        self._show_status(f"Animation speed: {label}")

    def _handle_data_click(self, x: int, y: int) -> None:
        button_y = PANEL_Y + 120
        export_x = PANEL_X + 30
        clear_y = button_y + _BUTTON_HEIGHT + _SPACING
        if _inside(x, y, export_x, button_y, _BUTTON_WIDTH, _BUTTON_HEIGHT):
            self._export_data()
        elif _inside(x, y, export_x, clear_y, _BUTTON_WIDTH, _BUTTON_HEIGHT):
            self._clear_all_data()

    def _save_game(self) -> None:
        if self.on_save_game is not None:
            self.on_save_game()
        self._show_status("Game saved!")

    def _load_game(self) -> None:
        if self.save_system.has_saved_game():
            if self.on_load_game is not None:
                self.on_load_game()
            self._show_status("Game loaded!")
        else:
            self._show_status("No saved game found!")

    def _delete_save(self) -> None:
        self.save_system.delete_saved_game()
        self._show_status("Save deleted!")

    def _export_data(self) -> None:
        self._show_status("Data exported to console!")
        print("Exporting save data...")

    def _clear_all_data(self) -> None:
        self.save_system.clear_all_data()
        self._show_status("All data cleared!")

    def _show_status(self, message: str) -> None:
        self.status_message = message
        self.status_time = time.monotonic()

    def is_settings_button_clicked(self, x: int, y: int) -> bool:
        return 10 <= x <= 110 and 10 <= y <= 40