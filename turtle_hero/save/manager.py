"""
Save/Load system - game state persistence.

Provides:
- Save/load of the whole game state to one JSON file
- Atomic writes (temp file, then rename)
- Repair of out-of-range values on load
- Event publishing for save/load operations
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime
from enum import Enum, auto
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from pydantic import ValidationError

from turtle_engine.core.config import GameConfig
from turtle_engine.core.events import EventBus
from turtle_engine.core.component import Component
from turtle_hero.components import Character, GameState, Inventory, Item, ItemStack

if TYPE_CHECKING:
    from turtle_hero.inventory.items import ItemDatabase

logger = logging.getLogger(__name__)

DEFAULT_MAX_HEALTH = 50


class SaveEvent(Enum):
    """Save system events."""
    SAVE_STARTED = auto()
    SAVE_COMPLETED = auto()
    SAVE_FAILED = auto()
    LOAD_STARTED = auto()
    LOAD_COMPLETED = auto()
    LOAD_FAILED = auto()


class SaveManager:
    """
    Manages saving and loading game state.

    There is exactly one save file. Saving never raises: failures are
    logged and reported as False. A missing or unreadable save loads
    as None.

    Usage:
        save_mgr = SaveManager(event_bus=event_bus)
        save_mgr.save_game(state)
        state = save_mgr.load_game()
    """

    def __init__(
        self,
        save_dir: str | Path | None = None,
        config: Optional[GameConfig] = None,
        event_bus: Optional[EventBus] = None,
        item_database: Optional[ItemDatabase] = None,
    ):
        self.config = config or GameConfig()
        self.save_dir = Path(save_dir) if save_dir else self.config.save_dir
        self.save_dir.mkdir(parents=True, exist_ok=True)
        self.event_bus = event_bus
        # Loaded items are swapped for the catalog's own instances when given
        self.item_database = item_database

    @property
    def save_file_path(self) -> Path:
        """Full path of the save file."""
        return self.save_dir / self.config.save_filename

    def save_exists(self) -> bool:
        """Check if a save file exists."""
        return self.save_file_path.exists()

    def save_game(self, state: GameState) -> bool:
        """
        Save the game state.

        The save time is stamped before writing. The old save stays
        intact if anything goes wrong.

        Returns:
            True if save was successful
        """
        self._publish(SaveEvent.SAVE_STARTED, path=self.save_file_path)

        tmp_path: Optional[Path] = None
        try:
            state.save_time = datetime.now()
            document = state.to_document()

            fd, tmp_name = tempfile.mkstemp(
                dir=self.save_dir, prefix=".savegame-", suffix=".tmp"
            )
            tmp_path = Path(tmp_name)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.save_file_path)
            tmp_path = None

        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Save failed: {e}")
            self._publish(SaveEvent.SAVE_FAILED, path=self.save_file_path, error=str(e))
            return False

        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

        logger.info(f"Game saved to {self.save_file_path}")
        self._publish(SaveEvent.SAVE_COMPLETED, path=self.save_file_path)
        return True

    def load_game(self) -> Optional[GameState]:
        """
        Load the saved game.

        Returns:
            The repaired game state, or None if there is no usable save
        """
        if not self.save_exists():
            return None

        self._publish(SaveEvent.LOAD_STARTED, path=self.save_file_path)

        try:
            with open(self.save_file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)

            if not isinstance(data, dict):
                raise ValueError("save document is not a JSON object")

            self._repair(data)
            state = GameState.model_validate(data)

        except (OSError, ValueError, ValidationError) as e:
            # JSONDecodeError and UnicodeDecodeError are ValueErrors
            logger.error(f"Load failed: {e}")
            self._publish(SaveEvent.LOAD_FAILED, path=self.save_file_path, error=str(e))
            return None

        if self.item_database is not None:
            self._relink_items(state)

        logger.info(f"Game loaded from {self.save_file_path}")
        self._publish(SaveEvent.LOAD_COMPLETED, path=self.save_file_path, state=state)
        return state

    def delete_save(self) -> bool:
        """
        Delete the save file.

        Returns:
            True if a save was deleted
        """
        try:
            if self.save_file_path.exists():
                self.save_file_path.unlink()
                return True
            return False
        except OSError as e:
            logger.error(f"Failed to delete save: {e}")
            return False

    def _repair(self, data: dict[str, Any]) -> None:
        """Fix values a hand-edited, older or newer save may have wrong."""
        _drop_unknown(GameState, data, "save")

        player = data.get('player')
        if not isinstance(player, dict):
            player = data['player'] = {}
        _drop_unknown(Character, player, "player")
        for slot in ('equippedWeapon', 'equippedArmor', 'equipped_weapon', 'equipped_armor'):
            if isinstance(player.get(slot), dict):
                _drop_unknown(Item, player[slot], slot)

        level = _as_int(player.get('level'))
        if level is not None and level < 1:
            player['level'] = 1

        max_health = _as_int(player.get('maxHealth'))
        if max_health is not None and max_health <= 0:
            player['maxHealth'] = max_health = DEFAULT_MAX_HEALTH

        current_health = _as_int(player.get('currentHealth'))
        if current_health is not None:
            if max_health is None:
                max_health = DEFAULT_MAX_HEALTH
            player['currentHealth'] = min(max(current_health, 0), max_health)

        inventory = data.get('inventory')
        if not isinstance(inventory, dict):
            inventory = data['inventory'] = {}
        _drop_unknown(Inventory, inventory, "inventory")
        stacks = inventory.get('items')
        if isinstance(stacks, dict):
            for key in [k for k, s in stacks.items() if _stack_is_empty(s)]:
                logger.warning(f"Dropping empty stack '{key}' from save")
                del stacks[key]
            for key, stack in stacks.items():
                if isinstance(stack, dict):
                    _drop_unknown(ItemStack, stack, f"stack '{key}'")
                    if isinstance(stack.get('item'), dict):
                        _drop_unknown(Item, stack['item'], f"item in stack '{key}'")
        else:
            inventory['items'] = {}

        if not isinstance(data.get('flags'), dict):
            data['flags'] = {}

        if not data.get('currentLocation'):
            data['currentLocation'] = self.config.default_location

    def _relink_items(self, state: GameState) -> None:
        """Point loaded items at the catalog's instances."""
        for _, stack in state.inventory.iter_stacks():
            item = self.item_database.get_item(stack.item.id)
            if item is not None:
                stack.item = item

        player = state.player
        if player.equipped_weapon is not None:
            player.equipped_weapon = (
                self.item_database.get_item(player.equipped_weapon.id) or player.equipped_weapon
            )
        if player.equipped_armor is not None:
            player.equipped_armor = (
                self.item_database.get_item(player.equipped_armor.id) or player.equipped_armor
            )

    def _publish(self, event_type: SaveEvent, **data) -> None:
        if self.event_bus:
            self.event_bus.publish(event_type, **data)


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _stack_is_empty(stack: Any) -> bool:
    if not isinstance(stack, dict):
        return False
    quantity = _as_int(stack.get('quantity'))
    return quantity is not None and quantity <= 0


def _drop_unknown(model: type[Component], document: dict[str, Any], where: str) -> None:
    for key in model.drop_unknown_keys(document):
        logger.warning(f"Ignoring unknown field '{key}' in {where}")
