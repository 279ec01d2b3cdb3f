"""
Battle module - turn-based combat system.

Provides:
- Enemy templates and per-battle enemy instances
- Enemy catalog
- Attack, defend and item actions
- Turn order and battle state
- Reward calculation and granting
"""

from turtle_hero.battle.actor import (
    Enemy,
    EnemyTemplate,
    ItemReward,
    create_enemy_from_template,
)
from turtle_hero.battle.actions import (
    BattleActionType,
    BattleActionResult,
    calculate_damage,
)
from turtle_hero.battle.enemies import EnemyDatabase
from turtle_hero.battle.system import (
    BattleSystem,
    BattleState,
    BattleEvent,
    BattleRewards,
    grant_rewards,
)

__all__ = [
    # Actor
    "Enemy",
    "EnemyTemplate",
    "ItemReward",
    "create_enemy_from_template",
    # Actions
    "BattleActionType",
    "BattleActionResult",
    "calculate_damage",
    # Catalog
    "EnemyDatabase",
    # System
    "BattleSystem",
    "BattleState",
    "BattleEvent",
    "BattleRewards",
    "grant_rewards",
]
