import json

import pytest

from anatomy.errors import NotFoundError, ValidationError
from anatomy.templates.registry import AnatomyRegistry
from anatomy.templates.sources import DirectoryTemplateSource


class CountingSource(DirectoryTemplateSource):
    def __init__(self, directory=None):
        super().__init__(directory)
        self.fetches = []

    def fetch(self, anatomy_id, info=None):
        self.fetches.append(anatomy_id)
        return super().fetch(anatomy_id, info)


@pytest.fixture
def counting_source():
    return CountingSource()


@pytest.fixture
def broken_dir(tmp_path):
    index = {
        "anatomies": {
            "rootless": {"name": "Rootless", "file": "rootless.json"},
            "ghost": {"name": "Ghost", "file": "ghost.json", "disabled": True},
        }
    }
    rootless = {
        "id": "rootless",
        "name": "Rootless",
        "bodyParts": {
            "a": {"id": "a", "name": "A", "coverage": 100, "maxHp": 5, "parent": "b"},
            "b": {"id": "b", "name": "B", "coverage": 100, "maxHp": 5, "parent": "a"},
        },
    }
    (tmp_path / "registry.json").write_text(json.dumps(index), encoding="utf-8")
    (tmp_path / "rootless.json").write_text(json.dumps(rootless), encoding="utf-8")
    return tmp_path


def test_load_returns_validated_template(registry):
    template = registry.load("humanoid")
    assert template.name == "Humanoid"
    assert template.get_root_part() == "torso"
    assert len(template.body_parts) == 18


def test_load_is_cached(counting_source):
    registry = AnatomyRegistry(counting_source)
    first = registry.load("humanoid")
    second = registry.load("humanoid")
    assert first is second
    assert counting_source.fetches == ["humanoid"]


def test_clear_cache_forces_refetch(counting_source):
    registry = AnatomyRegistry(counting_source)
    registry.load("humanoid")
    registry.clear_cache()
    registry.load("humanoid")
    assert counting_source.fetches == ["humanoid", "humanoid"]


def test_reload_rereads_index(counting_source):
    registry = AnatomyRegistry(counting_source)
    registry.load("quadruped")
    registry.reload()
    assert registry.initialized
    assert registry.get_stats()["cached_anatomies"] == 0


def test_unknown_anatomy_raises_not_found(registry):
    with pytest.raises(NotFoundError, match="'dragon' not found in registry"):
        registry.load("dragon")


def test_invalid_template_raises_validation_error(broken_dir):
    registry = AnatomyRegistry(DirectoryTemplateSource(broken_dir))
    with pytest.raises(ValidationError, match="No root body part found"):
        registry.load("rootless")
    assert registry.get_stats()["cached_anatomies"] == 0


def test_indexed_but_missing_file_raises_not_found(broken_dir):
    registry = AnatomyRegistry(DirectoryTemplateSource(broken_dir))
    with pytest.raises(NotFoundError):
        registry.load("ghost")


def test_list_available_skips_internal_and_disabled(registry, broken_dir):
    ids = [anatomy_id for anatomy_id, _ in registry.list_available()]
    assert ids == ["humanoid", "quadruped"]

    other = AnatomyRegistry(DirectoryTemplateSource(broken_dir))
    assert [anatomy_id for anatomy_id, _ in other.list_available()] == ["rootless"]


def test_internal_anatomy_still_loadable(registry):
    assert registry.load("_training_dummy").get_root_part() == "core"


def test_instantiate_copies_parts(registry):
    anatomy = registry.instantiate("humanoid")
    anatomy.body_parts["torso"].max_hp = 1
    anatomy.body_parts["torso"].tags.append("scarred")

    template = registry.load("humanoid")
    assert template.body_parts["torso"].max_hp == 40
    assert "scarred" not in template.body_parts["torso"].tags


def test_instantiate_health_multiplier_rounds_up(registry):
    anatomy = registry.instantiate("humanoid", health_multiplier=1.5)
    assert anatomy.body_parts["torso"].max_hp == 60
    # 5 * 1.5 = 7.5 -> 8
    assert anatomy.body_parts["left_eye"].max_hp == 8
    assert registry.load("humanoid").body_parts["left_eye"].max_hp == 5


def test_instantiate_applies_overrides(registry):
    anatomy = registry.instantiate(
        "humanoid",
        overrides={
            "head": {"maxHp": 99},
            "left_hand": {"status": "severed"},
            "tentacle": {"maxHp": 1},
        },
    )
    assert anatomy.anatomy_id == "humanoid"
    assert anatomy.body_parts["head"].max_hp == 99
    assert anatomy.body_parts["left_hand"].status_override == "severed"
    assert "tentacle" not in anatomy.body_parts


def test_instantiate_rejects_invalid_override(registry):
    with pytest.raises(ValidationError):
        registry.instantiate("humanoid", overrides={"head": {"coverage": -5}})


def test_display_name_and_stats(registry):
    assert registry.get_display_name("quadruped") == "Quadruped"
    assert registry.get_display_name("dragon") == "dragon"

    registry.load("humanoid")
    stats = registry.get_stats()
    assert stats["initialized"] is True
    assert stats["registered_anatomies"] == 3
    assert stats["cached_anatomies"] == 1
    assert stats["available_categories"] == ["biological", "construct"]


def test_healthy_status_override_clears_sticky_status(tmp_path):
    index = {"anatomies": {"veteran": {"name": "Veteran", "file": "veteran.json"}}}
    veteran = {
        "id": "veteran",
        "name": "Veteran",
        "bodyParts": {
            "torso": {"id": "torso", "name": "Torso", "coverage": 10000, "maxHp": 30},
            "hook": {"id": "hook", "name": "Hook", "coverage": 1000, "maxHp": 5,
                     "parent": "torso", "status": "prosthetic"},
        },
    }
    (tmp_path / "registry.json").write_text(json.dumps(index), encoding="utf-8")
    (tmp_path / "veteran.json").write_text(json.dumps(veteran), encoding="utf-8")
    registry = AnatomyRegistry(DirectoryTemplateSource(tmp_path))

    assert registry.instantiate("veteran").body_parts["hook"].status_override == "prosthetic"

    healed = registry.instantiate("veteran", overrides={"hook": {"status": "healthy"}})
    assert healed.body_parts["hook"].status_override is None

    replaced = registry.instantiate("veteran", overrides={"hook": {"status": "rusted"}})
    assert replaced.body_parts["hook"].status_override == "rusted"


def test_overrides_cannot_rename_parts(registry):
    anatomy = registry.instantiate("humanoid", overrides={"head": {"id": "skull", "maxHp": 30}})
    assert anatomy.body_parts["head"].id == "head"
    assert anatomy.body_parts["head"].max_hp == 30
