import time

import pytest

from islandmerge.save_load_ui import TAB_DATA, TAB_SETTINGS, SaveLoadUI
from islandmerge.save_system import CurrentGameState, SaveSystem
from islandmerge.storage import LocalStorage


@pytest.fixture
def system(tmp_path):
    return SaveSystem(LocalStorage(tmp_path))


@pytest.fixture
def ui(system):
    panel = SaveLoadUI(system)
    panel.toggle_panel()
    return panel


def test_initial_settings_are_defaults(system):
    panel = SaveLoadUI(system)
    assert panel.settings == system.default_settings()
    assert panel.is_open is False


def test_click_ignored_when_closed(system):
    panel = SaveLoadUI(system)
    assert panel.handle_click(200, 200) is False


def test_click_outside_closes(ui):
    assert ui.handle_click(10, 10) is True
    assert ui.is_open is False


def test_close_button_closes(ui):
    assert ui.handle_click(500, 80) is True
    assert ui.is_open is False


def test_tab_selection(ui):
    assert ui.handle_click(280, 110) is True
    assert ui.selected_tab == TAB_SETTINGS


def test_save_button_calls_callback(ui):
    calls = []
    ui.on_save_game = lambda: calls.append("save")
    assert ui.handle_click(200, 200) is True
    assert calls == ["save"]
    assert ui.status_message == "Game saved!"


def test_load_without_save(ui):
    calls = []
    ui.on_load_game = lambda: calls.append("load")
    ui.handle_click(400, 200)
    assert calls == []
    assert ui.status_message == "No saved game found!"


def test_load_with_save(ui, system):
    system.save_game_state(CurrentGameState())
    calls = []
    ui.on_load_game = lambda: calls.append("load")
    ui.handle_click(400, 200)
    assert calls == ["load"]
    assert ui.status_message == "Game loaded!"


def test_delete_save(ui, system):
    system.save_game_state(CurrentGameState())
    ui.handle_click(200, 260)
    assert system.has_saved_game() is False
    assert ui.status_message == "Save deleted!"


def test_auto_save_toggle_persists(ui, system):
    assert ui.settings.auto_save is True
    ui.handle_click(160, 310)
    assert ui.settings.auto_save is False
    assert system.load_settings().auto_save is False


def test_settings_checkbox_toggles_sound(ui, system):
    ui.selected_tab = TAB_SETTINGS
    ui.handle_click(160, 170)
    assert ui.settings.sound_enabled is False
    assert system.load_settings().sound_enabled is False
    assert ui.status_message == "Settings saved!"


def test_animation_speed_buttons(ui, system):
    ui.selected_tab = TAB_SETTINGS
    ui.handle_click(160, 290)
    assert system.load_settings().animation_speed == 0.5
    assert ui.status_message == "Animation speed: Slow"
    ui.handle_click(260, 290)
    assert system.load_settings().animation_speed == 2.0
    assert ui.status_message == "Animation speed: Fast"


def test_clear_all_data(ui, system):
    system.save_settings(system.default_settings())
    system.save_game_state(CurrentGameState())
    ui.selected_tab = TAB_DATA
    ui.handle_click(200, 260)
    assert not any(system.storage_usage().values())
    assert ui.status_message == "All data cleared!"


def test_export_prints(ui, capsys):
    ui.selected_tab = TAB_DATA
    ui.handle_click(200, 200)
    assert ui.status_message == "Data exported to console!"
    assert "Exporting save data..." in capsys.readouterr().out


def test_status_expires(ui):
    ui.handle_click(200, 200)
    ui.update()
    assert ui.status_message == "Game saved!"
    ui.status_time = time.monotonic() - 4
    ui.update()
    assert ui.status_message == ""
    assert ui.status_time is None


def test_toggle_reloads_settings(ui, system):
    ui.toggle_panel()
    changed = system.default_settings()
    changed.music_enabled = False
    system.save_settings(changed)
    ui.toggle_panel()
    assert ui.settings.music_enabled is False


def test_settings_button_hit_area(ui):
    assert ui.is_settings_button_clicked(50, 20) is True
    assert ui.is_settings_button_clicked(120, 20) is False