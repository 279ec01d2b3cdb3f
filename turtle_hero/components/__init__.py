"""
Turtle Hero components - data models.

All components are pydantic models. They serialize to the save-file
format (camelCase keys, enums as text) through the Component base.
"""

from turtle_hero.components.inventory import (
    Inventory,
    Item,
    ItemStack,
    ItemType,
)
from turtle_hero.components.character import Character
from turtle_hero.components.dialog import (
    DialogCondition,
    DialogNode,
    DialogOption,
    DialogReward,
    DialogScenario,
)
from turtle_hero.components.game_state import GameState

__all__ = [
    # Inventory
    "Inventory",
    "Item",
    "ItemStack",
    "ItemType",
    # Character
    "Character",
    # Dialog
    "DialogCondition",
    "DialogNode",
    "DialogOption",
    "DialogReward",
    "DialogScenario",
    # State
    "GameState",
]
