import os
import sys
import pytest

# Ensure engine modules can be imported
sys.path.append(os.getcwd())


class ScriptedRandom:
    """
    RandomSource that returns queued values in order.

    Runs out loudly unless a default is given, so a test notices any
    roll it did not expect.
    """

    def __init__(self, values=(), default=None):
        self.values = list(values)
        self.default = default
        self.calls = []

    def next_int(self, low, high):
        self.calls.append((low, high))
        if self.values:
            value = self.values.pop(0)
        elif self.default is not None:
            value = min(max(self.default, low), high)
        else:
            raise AssertionError(f"Unexpected roll next_int({low}, {high})")
        assert low <= value <= high, f"Scripted {value} outside [{low}, {high}]"
        return value


@pytest.fixture
def scripted():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from turtle_engine.core.events import EventBus
    return EventBus()


@pytest.fixture(scope="session")
def item_db():
    """Item catalog loaded from the bundled data."""
    from turtle_hero.inventory.items import ItemDatabase
    return ItemDatabase.load_defaults()


@pytest.fixture(scope="session")
def enemy_db():
    """Enemy catalog loaded from the bundled data."""
    from turtle_hero.battle.enemies import EnemyDatabase
    return EnemyDatabase.load_defaults()


@pytest.fixture
def player():
    """Fresh level 1 character."""
    from turtle_hero.components import Character
    return Character()


@pytest.fixture
def inventory():
    """Empty inventory."""
    from turtle_hero.components import Inventory
    return Inventory()


@pytest.fixture
def save_dir(tmp_path):
    """Empty directory for save files."""
    path = tmp_path / "saves"
    path.mkdir()
    return path
