import pytest

from anatomy.database.db_manager import DBManager
from anatomy.models.creature import Creature
from anatomy.services.anatomy_assignment import set_anatomy
from anatomy.templates.registry import AnatomyRegistry
from anatomy.templates.sources import DirectoryTemplateSource


class ScriptedRolls:
    """Random source that hands out a fixed sequence of rolls."""

    def __init__(self, *rolls):
        self.rolls = list(rolls)
        self.calls = 0

    def randrange(self, stop):
        assert stop == 10000
        self.calls += 1
        return self.rolls.pop(0)


@pytest.fixture
def db():
    with DBManager(":memory:") as manager:
        manager.create_tables()
        yield manager


@pytest.fixture
def registry():
    return AnatomyRegistry(DirectoryTemplateSource())


@pytest.fixture
def creature_id(db):
    db.creatures.create(Creature(id="hero", name="Hero"))
    return "hero"


@pytest.fixture
def scripted_rolls():
    return ScriptedRolls


@pytest.fixture
def humanoid(db, registry, creature_id):
    """A creature with a freshly installed humanoid anatomy."""
    assert set_anatomy(db, registry, creature_id, "humanoid")
    return creature_id
