"""
Battle actions - action types, results and damage formulas.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from turtle_engine.core.rng import RandomSource, roll_percent

# Damage tuning
PLAYER_DAMAGE_VARIATION = 2
ENEMY_DAMAGE_VARIATION = 1
PLAYER_CRITICAL_CHANCE = 10
ENEMY_CRITICAL_CHANCE = 5
CRITICAL_MULTIPLIER = 2

# Special attacks
WEB_CHANCE = 30
WEB_AGILITY_DEBUFF = 2
POISON_CHANCE = 25
POISON_DAMAGE = 3

DEFEND_RATIO = 0.5


class BattleActionType(Enum):
    """Types of battle actions."""
    ATTACK = auto()
    DEFEND = auto()
    USE_ITEM = auto()


@dataclass
class BattleActionResult:
    """
    Result of one battle action.

    Attributes:
        action_type: What was done
        message: Text for the battle log
        damage: Damage the attack rolled
        damage_applied: Health the target actually lost
        is_critical: Whether the damage was doubled
        is_finished: The battle is over after this action
        player_won: Winner, meaningful when finished
        success: False when the action could not be carried out
    """
    action_type: BattleActionType
    message: str = ""
    damage: int = 0
    damage_applied: int = 0
    is_critical: bool = False
    is_finished: bool = False
    player_won: bool = False
    success: bool = True


def calculate_damage(
    rng: RandomSource,
    attack: int,
    defense: int,
    variation: int,
    critical_chance: int,
) -> tuple[int, bool]:
    """
    Roll damage for one hit.

    Damage is attack plus a random variation minus defense, never
    below 1. A critical doubles the final figure.

    Returns:
        (damage, is_critical)
    """
    roll = rng.next_int(-variation, variation)
    damage = max(1, attack + roll - defense)

    is_critical = roll_percent(rng, critical_chance)
    if is_critical:
        damage *= CRITICAL_MULTIPLIER

    return damage, is_critical


def calculate_defend_bonus(effective_defense: int) -> int:
    """Extra defense granted by the defend stance."""
    return int(effective_defense * DEFEND_RATIO)
