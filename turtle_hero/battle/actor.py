"""
Battle actors - enemy templates, enemy instances and their drops.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ItemReward:
    """
    A possible item drop.

    Attributes:
        item_id: Catalog id of the dropped item
        quantity: How many drop
        drop_chance: Percent chance (0-100) the drop happens
    """
    item_id: str
    quantity: int = 1
    drop_chance: int = 100

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ItemReward:
        return cls(
            item_id=data.get('itemId', ''),
            quantity=data.get('quantity', 1),
            drop_chance=data.get('dropChance', 100),
        )


@dataclass(frozen=True)
class EnemyTemplate:
    """Static data for an enemy type. Never changes once loaded."""
    id: str
    name: str
    emoji: str = "🐍"

    # Base stats
    max_health: int = 30
    strength: int = 4
    agility: int = 2
    defense: int = 2

    # Rewards
    experience_reward: int = 50
    item_rewards: tuple[ItemReward, ...] = ()

    # Special attacks
    has_poison_attack: bool = False  # Poisons the player for a flat 3 per turn
    has_web_attack: bool = False     # Slows the player

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EnemyTemplate:
        """Create from a camelCase catalog record."""
        return cls(
            id=data['id'],
            name=data.get('name', data['id']),
            emoji=data.get('emoji', "🐍"),
            max_health=data.get('maxHealth', 30),
            strength=data.get('strength', 4),
            agility=data.get('agility', 2),
            defense=data.get('defense', 2),
            experience_reward=data.get('experienceReward', 50),
            item_rewards=tuple(
                ItemReward.from_dict(r) for r in data.get('itemRewards', [])
            ),
            has_poison_attack=data.get('hasPoisonAttack', False),
            has_web_attack=data.get('hasWebAttack', False),
        )


@dataclass
class Enemy:
    """
    An enemy in a battle.

    Owned by the battle that created it; changing it never touches
    the template it came from.
    """
    id: str
    name: str
    emoji: str = "🐍"

    max_health: int = 30
    current_health: Optional[int] = None

    strength: int = 4
    agility: int = 2
    defense: int = 2

    experience_reward: int = 50
    item_rewards: list[ItemReward] = field(default_factory=list)

    has_poison_attack: bool = False
    has_web_attack: bool = False

    # Battle-scoped effects
    poison_damage: int = 0
    agility_debuff: int = 0

    def __post_init__(self):
        if self.current_health is None:
            self.current_health = self.max_health
        self.current_health = min(max(self.current_health, 0), self.max_health)

    @property
    def is_alive(self) -> bool:
        return self.current_health > 0

    @property
    def health_percentage(self) -> float:
        """Current health as a percentage (0-100)."""
        if self.max_health <= 0:
            return 0.0
        return self.current_health / self.max_health * 100

    def take_damage(self, amount: int) -> int:
        """
        Take damage, reduced by defense (at least 1 gets through).

        Returns:
            Health actually lost
        """
        if amount <= 0:
            return 0
        actual = max(1, amount - self.defense)
        before = self.current_health
        self.current_health = max(0, before - actual)
        return before - self.current_health

    def full_restore(self) -> None:
        """Full health and no battle effects."""
        self.current_health = self.max_health
        self.poison_damage = 0
        self.agility_debuff = 0


def create_enemy_from_template(template: EnemyTemplate) -> Enemy:
    """Create a fresh, full-health enemy from its template."""
    return Enemy(
        id=template.id,
        name=template.name,
        emoji=template.emoji,
        max_health=template.max_health,
        strength=template.strength,
        agility=template.agility,
        defense=template.defense,
        experience_reward=template.experience_reward,
        item_rewards=[copy.copy(r) for r in template.item_rewards],
        has_poison_attack=template.has_poison_attack,
        has_web_attack=template.has_web_attack,
    )
