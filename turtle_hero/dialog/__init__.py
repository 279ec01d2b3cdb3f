"""
Dialog module - branching conversations for NPCs and events.

Provides:
- Scenario loading from JSON with validation
- Conditional options (stats, items, flags)
- Option rewards and actions
"""

from turtle_hero.dialog.system import DialogManager, DialogOutcome
from turtle_hero.dialog.loader import (
    ScenarioLoader,
    ScenarioError,
    ScenarioNotFoundError,
    ScenarioParseError,
    ScenarioValidationError,
)

__all__ = [
    "DialogManager",
    "DialogOutcome",
    "ScenarioLoader",
    "ScenarioError",
    "ScenarioNotFoundError",
    "ScenarioParseError",
    "ScenarioValidationError",
]
