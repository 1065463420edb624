import json

import pytest

from islandmerge.storage import KeyNotFoundError, LocalStorage, StorageError


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "data")


def test_constructor_creates_directory(tmp_path):
    target = tmp_path / "nested" / "dir"
    LocalStorage(target)
    assert target.is_dir()


def test_set_get_round_trip(storage):
    value = {"moves": 4, "tiles": [[1, 2], [2, 1]], "won": True, "name": None}
    storage.set("game", value)
    assert storage.get("game") == value


def test_value_written_as_json_file(storage):
    storage.set("settings", {"a": 1})
    path = storage.data_dir / "settings.json"
    assert json.loads(path.read_text()) == {"a": 1}


def test_missing_key_raises(storage):
    with pytest.raises(KeyNotFoundError) as info:
        storage.get("absent")
    assert str(info.value) == "key not found"
    assert isinstance(info.value, StorageError)


def test_corrupt_file_raises_decode_error(storage):
    (storage.data_dir / "broken.json").write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        storage.get("broken")


def test_unserialisable_value_raises(storage):
    with pytest.raises(TypeError):
        storage.set("bad", object())


def test_exists_and_remove(storage):
    storage.set("k", 1)
    assert storage.exists("k")
    storage.remove("k")
    assert not storage.exists("k")
    storage.remove("k")
    assert not storage.exists("k")


def test_clear_removes_everything(storage):
    storage.set("a", 1)
    storage.set("b", 2)
    storage.clear()
    assert storage.keys() == []
    assert storage.data_dir.is_dir()


def test_keys_with_prefix_sorted(storage):
    for key in ["island_merge_b", "island_merge_a", "other"]:
        storage.set(key, key)
    assert storage.keys("island_merge_") == ["island_merge_a", "island_merge_b"]
    assert storage.keys() == ["island_merge_a", "island_merge_b", "other"]


def test_keys_prefix_is_literal(storage):
    storage.set("a*b", 1)
    storage.set("axb", 2)
    assert storage.keys("a*") == ["a*b"]