import json
import pytest
from turtle_engine.resources.database import Database, CATEGORIES
from turtle_hero.data import BUNDLED_DATA_PATH

ITEM_SCHEMA = {
    "type": "object",
    "required": ["id", "type"],
    "properties": {
        "id": {"type": "string"},
        "type": {"enum": ["Consumable", "Weapon", "Armor", "Quest"]},
    },
}

ENEMY_SCHEMA = {
    "type": "object",
    "required": ["id", "maxHealth"],
    "properties": {
        "id": {"type": "string"},
        "maxHealth": {"type": "integer", "minimum": 1},
    },
}


def write_json(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(content), encoding="utf-8")


@pytest.fixture
def data_root(tmp_path):
    write_json(tmp_path / "schemas" / "item.schema.json", ITEM_SCHEMA)
    write_json(tmp_path / "schemas" / "enemy.schema.json", ENEMY_SCHEMA)
    for folder in CATEGORIES:
        (tmp_path / "database" / folder).mkdir(parents=True)
    return tmp_path


def load(path):
    db = Database(path)
    db.load_all()
    return db


def test_list_file(data_root):
    write_json(data_root / "database" / "items" / "weapons.json", [
        {"id": "stick", "type": "Weapon"},
        {"id": "rock", "type": "Weapon"},
    ])

    db = load(data_root)

    assert set(db.items) == {"stick", "rock"}
    assert db.get_item("stick")["type"] == "Weapon"
    assert db.get_item("feather") is None


def test_single_record_file(data_root):
    write_json(data_root / "database" / "enemies" / "crab.json", {"id": "crab", "maxHealth": 12})

    db = load(data_root)

    assert db.get_enemy("crab")["maxHealth"] == 12


def test_invalid_record_skipped_others_kept(data_root, caplog):
    write_json(data_root / "database" / "enemies" / "mixed.json", [
        {"id": "ghost", "maxHealth": 0},
        {"id": "crab", "maxHealth": 12},
    ])

    db = load(data_root)

    assert list(db.enemies) == ["crab"]
    assert "Invalid record" in caplog.text


def test_unreadable_file_skipped(data_root):
    (data_root / "database" / "items" / "a_broken.json").write_text("[{", encoding="utf-8")
    write_json(data_root / "database" / "items" / "b_fine.json", [{"id": "pearl", "type": "Quest"}])

    db = load(data_root)

    assert list(db.items) == ["pearl"]


def test_duplicate_id_last_file_wins(data_root, caplog):
    write_json(data_root / "database" / "items" / "a.json", [{"id": "kelp", "type": "Consumable"}])
    write_json(data_root / "database" / "items" / "b.json", [{"id": "kelp", "type": "Quest"}])

    db = load(data_root)

    assert db.get_item("kelp")["type"] == "Quest"
    assert "Duplicate items id 'kelp'" in caplog.text


def test_category_without_schema_is_skipped(data_root):
    write_json(data_root / "database" / "enemies" / "crab.json", {"id": "crab", "maxHealth": 12})
    (data_root / "schemas" / "enemy.schema.json").unlink()

    db = load(data_root)

    assert db.enemies == {}


def test_empty_data_path(tmp_path):
    db = load(tmp_path)

    assert db.items == {}
    assert db.enemies == {}
    assert db.get_schema("item.schema.json") is None


def test_get_schema_reads_lazily(data_root):
    db = Database(data_root)

    assert db.get_schema("item.schema.json") == ITEM_SCHEMA


def test_bundled_data(caplog):
    db = load(BUNDLED_DATA_PATH)

    assert len(db.items) == 7
    assert len(db.enemies) == 5
    assert db.get_schema("scenario.schema.json") is not None
    assert "Invalid record" not in caplog.text
