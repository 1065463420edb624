import json

from islandmerge.board import TileType
from islandmerge.editor import (
    GRID_HEIGHT,
    GRID_WIDTH,
    GRID_X,
    GRID_Y,
    TILE_SIZE,
    LevelEditor,
    Tool,
)


def _cell(gx, gy):
    return GRID_X + gx * TILE_SIZE + 1, GRID_Y + gy * TILE_SIZE + 1


def _click_button(editor, text):
    button = next(b for b in editor.buttons if b.text == text)
    return editor.update(int(button.x) + 1, int(button.y) + 1, True)


def test_new_editor_board_and_toolbar():
    editor = LevelEditor()
    assert (editor.board.width, editor.board.height) == (GRID_WIDTH, GRID_HEIGHT)
    assert all(tile.type == TileType.SEA for tile in editor.board.tiles)
    assert editor.tool == Tool.LAND
    assert [b.text for b in editor.buttons] == [
        "Land", "Sea", "Empty", "Clear", "Test", "Export", "Back",
    ]


def test_tool_buttons_select_tool():
    editor = LevelEditor()
    assert _click_button(editor, "Sea") is False
    assert editor.tool == Tool.SEA
    assert editor.tool_name() == "Sea"
    _click_button(editor, "Empty")
    assert editor.tool_name() == "Empty"


def test_back_button_returns_true():
    editor = LevelEditor()
    assert _click_button(editor, "Back") is True


def test_hover_without_click():
    editor = LevelEditor()
    button = editor.buttons[0]
    assert editor.update(int(button.x) + 1, int(button.y) + 1, False) is False
    assert button.hovered
    assert not any(b.hovered for b in editor.buttons[1:])


def test_grid_click_paints_with_tool():
    editor = LevelEditor()
    editor.update(*_cell(3, 4), True)
    assert editor.board.get_tile(3, 4).type == TileType.LAND
    editor.tool = Tool.EMPTY
    editor.update(*_cell(3, 4), True)
    assert editor.board.get_tile(3, 4).type == TileType.EMPTY


def test_click_just_left_of_grid_truncates_to_first_column():
    editor = LevelEditor()
    editor.update(GRID_X - 10, GRID_Y + 1, True)
    assert editor.board.get_tile(0, 0).type == TileType.LAND


def test_click_outside_grid_changes_nothing():
    editor = LevelEditor()
    editor.update(*_cell(GRID_WIDTH, 0), True)
    assert all(tile.type == TileType.SEA for tile in editor.board.tiles)


def test_clear_board_empties_everything():
    editor = LevelEditor()
    editor.paint_tile(1, 1)
    _click_button(editor, "Clear")
    assert all(tile.type == TileType.EMPTY for tile in editor.board.tiles)


def test_test_mode_builds_bridges_on_copy():
    editor = LevelEditor()
    editor.paint_tile(0, 0)
    editor.test_level()
    assert editor.is_playing
    editor.update(*_cell(1, 0), True)
    assert editor.test_board.get_tile(1, 0).type == TileType.BRIDGE
    assert editor.board.get_tile(1, 0).type == TileType.SEA
    editor.test_level()
    assert not editor.is_playing
    assert editor.test_board is None


def test_export_calls_listener_and_returns_json(capsys):
    editor = LevelEditor()
    calls = []
    editor.on_level_created = lambda: calls.append(True)
    editor.paint_tile(2, 1)
    text = editor.export_level()
    data = json.loads(text)
    assert calls == [True]
    assert data["name"] == "Custom Level"
    assert (data["width"], data["height"]) == (GRID_WIDTH, GRID_HEIGHT)
    assert data["tiles"][1][2] == int(TileType.LAND)
    assert "Level exported:" in capsys.readouterr().out


def test_create_level_data_shape():
    editor = LevelEditor()
    data = editor.create_level_data()
    assert len(data["tiles"]) == GRID_HEIGHT
    assert all(len(row) == GRID_WIDTH for row in data["tiles"])