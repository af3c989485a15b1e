import json

from anatomy.database.db_manager import DBManager
from anatomy.services.anatomy_assignment import set_anatomy
from anatomy.services.template_seeding import seed_builtin_templates
from anatomy.templates.registry import AnatomyRegistry
from anatomy.models.creature import Creature


def test_seed_builtin_templates(tmp_path):
    db_path = str(tmp_path / "anatomy.db")
    assert seed_builtin_templates(db_path) == 3

    with DBManager(db_path) as db:
        templates = db.anatomy_templates.get_all()
        assert [t["id"] for t in templates] == ["_training_dummy", "humanoid", "quadruped"]
        assert all(t["is_builtin"] for t in templates)
        assert db.anatomy_templates.get_document("humanoid")["name"] == "Humanoid"


def test_seeding_twice_replaces_rows(tmp_path):
    db_path = str(tmp_path / "anatomy.db")
    seed_builtin_templates(db_path)
    assert seed_builtin_templates(db_path) == 3
    with DBManager(db_path) as db:
        assert len(db.anatomy_templates.get_all()) == 3


def test_registry_over_seeded_database(tmp_path):
    db_path = str(tmp_path / "anatomy.db")
    seed_builtin_templates(db_path)

    with DBManager(db_path) as db:
        registry = AnatomyRegistry(db.anatomy_templates)
        assert [anatomy_id for anatomy_id, _ in registry.list_available()] == ["humanoid", "quadruped"]
        assert registry.load("humanoid").get_root_part() == "torso"

        db.creatures.create(Creature(id="wolf", name="Wolf"))
        assert set_anatomy(db, registry, "wolf", "quadruped")
        assert db.creatures.get_model("wolf").anatomy_type == "quadruped"


def test_invalid_templates_are_skipped(tmp_path):
    template_dir = tmp_path / "templates"
    template_dir.mkdir()
    index = {
        "anatomies": {
            "blob": {"name": "Blob", "file": "blob.json"},
            "broken": {"name": "Broken", "file": "broken.json"},
            "missing": {"name": "Missing", "file": "missing.json"},
        }
    }
    blob = {
        "id": "blob",
        "name": "Blob",
        "bodyParts": {"core": {"id": "core", "name": "Core", "coverage": 10000, "maxHp": 10}},
    }
    (template_dir / "registry.json").write_text(json.dumps(index), encoding="utf-8")
    (template_dir / "blob.json").write_text(json.dumps(blob), encoding="utf-8")
    (template_dir / "broken.json").write_text("{not json", encoding="utf-8")

    db_path = str(tmp_path / "anatomy.db")
    assert seed_builtin_templates(db_path, template_dir) == 1
    with DBManager(db_path) as db:
        assert [t["id"] for t in db.anatomy_templates.get_all()] == ["blob"]


def test_missing_registry_seeds_nothing(tmp_path):
    assert seed_builtin_templates(str(tmp_path / "anatomy.db"), tmp_path / "empty") == 0
