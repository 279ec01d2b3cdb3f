"""
Inventory components - items, stacks, container.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, Iterator, Optional

from pydantic import ConfigDict, Field

from turtle_engine.core.component import Component


class ItemType(Enum):
    """Item categories. Values are the names written to save files."""
    CONSUMABLE = "Consumable"  # Mushrooms, herbs
    WEAPON = "Weapon"
    ARMOR = "Armor"
    QUEST = "Quest"            # Key story items


class Item(Component):
    """
    Catalog item definition.

    Frozen: once registered in the catalog an item never changes, and
    inventories and equipment slots hold references to it.

    Attributes:
        id: Unique catalog key
        name: Display name
        emoji: Display icon
        description: Flavor text
        type: Item category
        strength_bonus: Added to effective strength when equipped
        defense_bonus: Added to effective defense when equipped
        agility_bonus: Added to effective agility when equipped
        health_restore: HP restored when consumed
        agility_boost: Agility added for the rest of a battle when consumed
        max_stack: Maximum quantity per inventory stack
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    emoji: str = "📦"
    description: str = ""
    type: ItemType = ItemType.CONSUMABLE

    # Combat bonuses
    strength_bonus: int = 0
    defense_bonus: int = 0
    agility_bonus: int = 0

    # Consumable effects
    health_restore: int = 0
    agility_boost: int = 0

    max_stack: int = Field(default=99, ge=1)

    @property
    def is_equipment(self) -> bool:
        return self.type in (ItemType.WEAPON, ItemType.ARMOR)


class ItemStack(Component):
    """
    A stack of identical items in one inventory slot.

    Attributes:
        item: Item definition (shared reference)
        quantity: Number of items in stack
    """
    item: Item
    quantity: int = 1

    @property
    def is_full(self) -> bool:
        """Check if stack is at max."""
        return self.quantity >= self.item.max_stack

    @property
    def is_empty(self) -> bool:
        """Check if stack is empty."""
        return self.quantity <= 0

    def can_add(self, amount: int) -> bool:
        """Check if ``amount`` fits without exceeding the max stack."""
        return self.quantity + amount <= self.item.max_stack

    def add(self, amount: int) -> bool:
        """Add to stack. All or nothing."""
        if not self.can_add(amount):
            return False
        self.quantity += amount
        return True

    def remove(self, amount: int) -> bool:
        """Remove from stack. All or nothing."""
        if self.quantity < amount:
            return False
        self.quantity -= amount
        return True


class Inventory(Component):
    """
    Item container keyed by stack key.

    The first stack of an item is keyed by the item id. Overflow stacks
    of the same item get a suffixed key (``mushroom_heal_1``).

    Attributes:
        items: Map of stack key to item stack
    """
    MAX_SLOTS: ClassVar[int] = 12

    items: dict[str, ItemStack] = Field(default_factory=dict)

    @property
    def used_slots(self) -> int:
        """Number of occupied slots."""
        return len(self.items)

    @property
    def has_free_slots(self) -> bool:
        """Check if another stack fits."""
        return self.used_slots < self.MAX_SLOTS

    def add_item(self, item: Optional[Item], quantity: int = 1) -> bool:
        """
        Add items to the inventory.

        Grows an existing stack of the item if it has room, otherwise
        opens a new stack in a free slot. Never adds partially.

        Args:
            item: Item definition
            quantity: Amount to add

        Returns:
            True if everything was added
        """
        if item is None or quantity <= 0:
            return False

        existing = self.get_stacks_of(item.id)
        for stack in existing:
            if stack.add(quantity):
                return True

        if not self.has_free_slots or quantity > item.max_stack:
            return False

        # Another item's overflow stack may already hold the plain id
        key = item.id if item.id not in self.items else self._next_stack_key(item.id)
        self.items[key] = ItemStack(item=item, quantity=quantity)
        return True

    def remove_item(self, item_id: str, quantity: int = 1) -> bool:
        """
        Remove items from the inventory.

        Overflow stacks are drained before the first stack. Stacks that
        reach zero are removed.

        Returns:
            True if the full quantity was removed
        """
        if not item_id or quantity <= 0:
            return False

        if self.get_item_count(item_id) < quantity:
            return False

        remaining = quantity
        for key in reversed(self._keys_of(item_id)):
            stack = self.items[key]
            taken = min(stack.quantity, remaining)
            stack.remove(taken)
            remaining -= taken

            if stack.is_empty:
                del self.items[key]

            if remaining <= 0:
                break

        return True

    def get_item_count(self, item_id: str) -> int:
        """Total quantity of an item across its stacks."""
        return sum(stack.quantity for stack in self.get_stacks_of(item_id))

    def has_item(self, item_id: str, quantity: int = 1) -> bool:
        """Check if inventory contains enough of an item."""
        return self.get_item_count(item_id) >= quantity

    def get_item_stack(self, key: str) -> Optional[ItemStack]:
        """Get a stack by its key."""
        return self.items.get(key)

    def get_stacks_of(self, item_id: str) -> list[ItemStack]:
        """All stacks holding a specific item, first stack first."""
        return [self.items[key] for key in self._keys_of(item_id)]

    def iter_stacks(self) -> Iterator[tuple[str, ItemStack]]:
        """
        Iterate over stacks with their keys.

        Yields:
            (stack_key, ItemStack) tuples
        """
        yield from self.items.items()

    def clear(self) -> None:
        """Remove every stack."""
        self.items.clear()

    def _keys_of(self, item_id: str) -> list[str]:
        return [key for key, stack in self.items.items() if stack.item.id == item_id]

    def _next_stack_key(self, item_id: str) -> str:
        index = 1
        while f"{item_id}_{index}" in self.items:
            index += 1
        return f"{item_id}_{index}"
