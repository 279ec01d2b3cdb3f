"""
Item catalog - item definitions and database.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Iterator, Optional

from pydantic import ValidationError

from turtle_engine.resources.database import Database
from turtle_hero.components.inventory import Item, ItemType
from turtle_hero.data import BUNDLED_DATA_PATH

if TYPE_CHECKING:
    from turtle_hero.battle.actor import ItemReward

logger = logging.getLogger(__name__)


class ItemDatabase:
    """
    Database of all item definitions.

    Items are registered once and never change afterwards; inventories
    and equipment slots hold references to the registered instances.
    """

    def __init__(self):
        self._items: dict[str, Item] = {}

    @classmethod
    def from_database(cls, database: Database) -> ItemDatabase:
        """Build the catalog from validated raw records."""
        catalog = cls()
        for item_id, record in database.items.items():
            try:
                catalog.register_item(Item.model_validate(record))
            except ValidationError as e:
                logger.error(f"Invalid item '{item_id}': {e}")
        return catalog

    @classmethod
    def load_defaults(cls, data_path: Optional[str | Path] = None) -> ItemDatabase:
        """Load the catalog shipped with the game (or one at ``data_path``)."""
        database = Database(data_path or BUNDLED_DATA_PATH)
        database.load_all()
        return cls.from_database(database)

    def register_item(self, item: Item) -> bool:
        """Register an item definition. Items without an id are rejected."""
        if item is None or not item.id:
            return False
        self._items[item.id] = item
        return True

    def get_item(self, item_id: str) -> Optional[Item]:
        """Get an item definition."""
        return self._items.get(item_id)

    def get_all_items(self) -> list[Item]:
        """All registered items."""
        return list(self._items.values())

    def get_items_by_type(self, item_type: ItemType) -> list[Item]:
        """Get all items of a type."""
        return [i for i in self._items.values() if i.type == item_type]

    def resolve_rewards(self, rewards: Iterable[ItemReward]) -> list[tuple[Item, int]]:
        """
        Turn reward descriptors into inventory-ready items.

        Unknown item ids are skipped with a warning.

        Returns:
            (item, quantity) pairs
        """
        resolved = []
        for reward in rewards:
            item = self.get_item(reward.item_id)
            if item is None:
                logger.warning(f"Reward references unknown item '{reward.item_id}'")
                continue
            resolved.append((item, reward.quantity))
        return resolved

    def __contains__(self, item_id: str) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)
