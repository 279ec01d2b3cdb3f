"""
Inventory module - item catalog.

Provides:
- Item database with bundled defaults
- Reward resolution (item ids to catalog items)
"""

from turtle_hero.inventory.items import ItemDatabase

__all__ = [
    "ItemDatabase",
]
