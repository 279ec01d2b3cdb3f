"""
Character components - the player's stats, health and progression.
"""

from __future__ import annotations

from typing import Optional

from pydantic import model_validator

from turtle_engine.core.component import Component
from turtle_engine.core.rng import RandomSource, SeededRandom
from turtle_hero.components.inventory import Item, ItemType

# Used when a caller does not pass its own source
_default_rng = SeededRandom()


class Character(Component):
    """
    The player character.

    Attributes:
        name: Display name
        emoji: Display icon
        level: Current level, never below 1
        experience: XP collected towards the next level
        max_health: Maximum HP
        current_health: Current HP, kept within [0, max_health]
        strength: Physical power, drives attack damage
        agility: Speed, decides who acts first
        defense: Reduces damage taken
        equipped_weapon: Weapon in hand (catalog reference)
        equipped_armor: Armor worn (catalog reference)
        temporary_defense_bonus: Defend-stance bonus for the current battle
        temporary_agility_bonus: Consumable boost for the current battle
    """
    name: str = "Tortilla"
    emoji: str = "🐢"

    level: int = 1
    experience: int = 0

    max_health: int = 50
    current_health: int = 50

    strength: int = 5
    agility: int = 3
    defense: int = 4

    equipped_weapon: Optional[Item] = None
    equipped_armor: Optional[Item] = None

    temporary_defense_bonus: int = 0
    temporary_agility_bonus: int = 0

    @model_validator(mode='after')
    def _clamp_health(self) -> Character:
        """Keep health within [0, max_health] on creation and assignment."""
        clamped = min(max(self.current_health, 0), max(self.max_health, 0))
        if clamped != self.current_health:
            # Writing through the attribute would re-run assignment validation
            self.__dict__['current_health'] = clamped
        return self

    def model_post_init(self, __context) -> None:
        """Start at full health unless told otherwise."""
        if 'current_health' not in self.model_fields_set:
            self.current_health = self.max_health

    # Derived stats

    @property
    def experience_to_next_level(self) -> int:
        """XP threshold for the current level."""
        return self.level * 100

    @property
    def effective_strength(self) -> int:
        """Strength including the weapon bonus."""
        bonus = self.equipped_weapon.strength_bonus if self.equipped_weapon else 0
        return self.strength + bonus

    @property
    def effective_defense(self) -> int:
        """Defense including the armor bonus and the defend stance."""
        bonus = self.equipped_armor.defense_bonus if self.equipped_armor else 0
        return self.defense + bonus + self.temporary_defense_bonus

    @property
    def effective_agility(self) -> int:
        """Agility including equipment and consumable boosts."""
        bonus = sum(
            item.agility_bonus
            for item in (self.equipped_weapon, self.equipped_armor)
            if item is not None
        )
        return self.agility + bonus + self.temporary_agility_bonus

    @property
    def health_percentage(self) -> float:
        """Current health as a percentage (0-100)."""
        if self.max_health <= 0:
            return 0.0
        return self.current_health / self.max_health * 100

    @property
    def is_alive(self) -> bool:
        return self.current_health > 0

    # Progression

    def add_experience(self, xp: int, rng: Optional[RandomSource] = None) -> bool:
        """
        Add experience points and level up as many times as it allows.

        Args:
            xp: XP to add
            rng: Random source for the stat gained on level up

        Returns:
            True if at least one level was gained
        """
        if xp <= 0:
            return False

        self.experience += xp
        leveled_up = False

        while self.level >= 1 and self.experience >= self.experience_to_next_level:
            self.level_up(rng)
            leveled_up = True

        return leveled_up

    def level_up(self, rng: Optional[RandomSource] = None) -> None:
        """
        Gain one level.

        Leftover XP carries over. Max HP grows by 5 with a full heal, and
        one of strength, agility or defense grows by 1.
        """
        rng = rng or _default_rng

        if self.level < 1:
            self.level = 1

        # Threshold of the level being left
        required = self.experience_to_next_level
        self.level += 1
        self.experience -= required

        self.max_health += 5
        self.current_health = self.max_health

        stat = rng.next_int(0, 2)
        if stat == 0:
            self.strength += 1
        elif stat == 1:
            self.agility += 1
        else:
            self.defense += 1

    # Health

    def take_damage(self, amount: int, allow_death: bool = False) -> int:
        """
        Take damage, reduced by effective defense.

        At least 1 damage always gets through. Without ``allow_death``
        the shell holds and health stops at 1.

        Args:
            amount: Incoming damage
            allow_death: Whether this hit may bring health to 0

        Returns:
            Health actually lost
        """
        if amount <= 0:
            return 0

        actual = max(1, amount - self.effective_defense)
        floor = 0 if allow_death else 1
        before = self.current_health
        self.current_health = max(min(before, floor), before - actual)
        return before - self.current_health

    def heal(self, amount: int) -> int:
        """
        Heal health, up to max.

        Returns:
            Actual amount healed
        """
        if amount <= 0:
            return 0
        before = self.current_health
        self.current_health = min(before + amount, self.max_health)
        return self.current_health - before

    def full_restore(self) -> None:
        """Full health and no battle modifiers."""
        self.current_health = self.max_health
        self.reset_combat_modifiers()

    def reset_combat_modifiers(self) -> None:
        """Drop bonuses that only last for one battle."""
        self.temporary_defense_bonus = 0
        self.temporary_agility_bonus = 0

    # Equipment

    def equip(self, item: Optional[Item]) -> bool:
        """
        Equip a weapon or armor, replacing whatever was in that slot.

        Returns:
            False if the item is not equipment
        """
        if item is None:
            return False
        if item.type == ItemType.WEAPON:
            self.equipped_weapon = item
            return True
        if item.type == ItemType.ARMOR:
            self.equipped_armor = item
            return True
        return False

    def unequip_weapon(self) -> Optional[Item]:
        """Remove the weapon. Returns what was equipped."""
        previous = self.equipped_weapon
        self.equipped_weapon = None
        return previous

    def unequip_armor(self) -> Optional[Item]:
        """Remove the armor. Returns what was equipped."""
        previous = self.equipped_armor
        self.equipped_armor = None
        return previous
