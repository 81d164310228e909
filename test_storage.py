import json

from dwoms.database.storage import LocalStorage


def test_missing_key_returns_default():
    db = LocalStorage()
    assert db.get("nope", []) == []
    assert db.get("nope") is None


def test_values_are_stored_as_json_text():
    db = LocalStorage()
    db.set("dwoms_tasks", [{"id": "task-1"}])

    assert db.get_item("dwoms_tasks") == '[{"id": "task-1"}]'
    assert db.get("dwoms_tasks") == [{"id": "task-1"}]


def test_get_returns_a_fresh_copy():
    db = LocalStorage()
    db.set("items", [1, 2])

    value = db.get("items")
    value.append(3)

    assert db.get("items") == [1, 2]


def test_corrupt_value_falls_back_to_default():
    db = LocalStorage()
    db.set_item("dwoms_users", "{not json")

    assert db.get("dwoms_users", []) == []


def test_remove_and_clear():
    db = LocalStorage()
    db.set("a", 1)
    db.set("b", 2)

    db.remove("a")
    assert db.keys() == ["b"]

    db.clear()
    assert db.keys() == []


def test_file_backed_store_survives_reopen(tmp_path):
    path = tmp_path / "store.json"
    db = LocalStorage(str(path))
    db.set("dwoms_inventory", [{"id": "inv-1"}])

    reopened = LocalStorage(str(path))
    assert reopened.get("dwoms_inventory") == [{"id": "inv-1"}]
    assert json.loads(path.read_text()) == {"dwoms_inventory": '[{"id": "inv-1"}]'}


def test_unreadable_file_starts_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("garbage")

    db = LocalStorage(str(path))
    assert db.keys() == []
    assert db.get("dwoms_users", []) == []


def test_deeply_nested_value_falls_back_to_default():
    db = LocalStorage()
    db.set_item("dwoms_users", "[" * 100000)

    assert db.get("dwoms_users", []) == []


def test_deeply_nested_file_starts_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("[" * 100000)

    db = LocalStorage(str(path))
    assert db.keys() == []
