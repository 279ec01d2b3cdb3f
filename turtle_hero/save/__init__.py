"""
Save module - game state persistence.

Provides:
- Save/load of the game state to a single JSON file
- Repair of drifted values on load
- Save/load events
"""

from turtle_hero.save.manager import SaveManager, SaveEvent

__all__ = [
    "SaveManager",
    "SaveEvent",
]
