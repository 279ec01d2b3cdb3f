"""
Game state - everything that goes into a save file.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from turtle_engine.core.component import Component
from turtle_engine.core.config import GameConfig
from turtle_hero.components.character import Character
from turtle_hero.components.inventory import Inventory

DEFAULT_LOCATION = "forest"
SAVE_VERSION = "1.0.0"


class GameState(Component):
    """
    The session aggregate and the unit of persistence.

    Attributes:
        player: The player character
        inventory: The player's items
        current_location: Location id the player is in
        flags: Named story decisions
        save_time: When the state was last saved
        version: Save-format version
    """
    player: Character = Field(default_factory=Character)
    inventory: Inventory = Field(default_factory=Inventory)

    current_location: str = DEFAULT_LOCATION
    flags: dict[str, bool] = Field(default_factory=dict)

    save_time: datetime = Field(default_factory=datetime.now)
    version: str = SAVE_VERSION

    @classmethod
    def new_game(cls, config: Optional[GameConfig] = None) -> GameState:
        """Fresh state for a new game."""
        if config is None:
            return cls()
        return cls(current_location=config.default_location, version=config.version)

    def has_flag(self, flag: str) -> bool:
        """Check a story flag. Unset flags read as False."""
        return self.flags.get(flag, False)

    def set_flag(self, flag: str, value: bool = True) -> None:
        """Set a story flag."""
        self.flags[flag] = value

    def reset(self, default_location: str = DEFAULT_LOCATION) -> None:
        """Back to the state of a new game."""
        self.player = Character()
        self.inventory = Inventory()
        self.current_location = default_location
        self.flags.clear()
        self.save_time = datetime.now()
