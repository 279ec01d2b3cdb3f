"""
Battle system - turn-based combat between the player and one enemy.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from turtle_engine.core.events import EventBus
from turtle_engine.core.rng import RandomSource, SeededRandom, roll_percent
from turtle_hero.battle.actions import (
    BattleActionResult,
    BattleActionType,
    ENEMY_CRITICAL_CHANCE,
    ENEMY_DAMAGE_VARIATION,
    PLAYER_CRITICAL_CHANCE,
    PLAYER_DAMAGE_VARIATION,
    POISON_CHANCE,
    POISON_DAMAGE,
    WEB_AGILITY_DEBUFF,
    WEB_CHANCE,
    calculate_damage,
    calculate_defend_bonus,
)
from turtle_hero.battle.actor import Enemy, ItemReward
from turtle_hero.components import Character, Inventory, Item, ItemType

if TYPE_CHECKING:
    from turtle_hero.inventory.items import ItemDatabase

logger = logging.getLogger(__name__)


class BattleState(Enum):
    """State of the battle."""
    IDLE = auto()
    PLAYER_TURN = auto()
    ENEMY_TURN = auto()
    FINISHED = auto()


class BattleEvent(Enum):
    """Events published by the battle system."""
    STARTED = auto()  # player, enemy, player_first
    ACTION = auto()   # result, state
    ENDED = auto()    # player, enemy


@dataclass
class BattleRewards:
    """
    Rewards from winning a battle.

    Items are descriptors; ``grant_rewards`` resolves them through
    the item catalog.
    """
    experience: int = 0
    items: list[ItemReward] = field(default_factory=list)


class BattleSystem:
    """
    Turn-based battle controller.

    Every action also works on its own, outside a started battle. Inside
    one (``start_battle`` to ``end_battle``) the system tracks whose turn
    it is and moves to FINISHED when an action ends the fight.
    """

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.rng = rng or SeededRandom()
        self.events = event_bus

        self.state = BattleState.IDLE
        self._player: Optional[Character] = None
        self._enemy: Optional[Enemy] = None

    @property
    def is_active(self) -> bool:
        """Check if a battle is in progress."""
        return self.state in (BattleState.PLAYER_TURN, BattleState.ENEMY_TURN)

    @property
    def player(self) -> Optional[Character]:
        return self._player

    @property
    def enemy(self) -> Optional[Enemy]:
        return self._enemy

    # Battle lifecycle

    def start_battle(self, player: Character, enemy: Enemy) -> bool:
        """
        Start a battle and decide who acts first.

        Returns:
            True if the player has the first turn
        """
        self._player = player
        self._enemy = enemy

        player_first = self.player_goes_first(player, enemy)
        self.state = BattleState.PLAYER_TURN if player_first else BattleState.ENEMY_TURN

        logger.info(f"Battle started: {player.name} vs {enemy.name} ({self.state.name})")
        self._publish(BattleEvent.STARTED, player=player, enemy=enemy, player_first=player_first)
        return player_first

    def end_battle(self, player: Optional[Character] = None) -> None:
        """Clean up after a battle. The player loses battle-only bonuses."""
        player = player or self._player
        if player is not None:
            player.reset_combat_modifiers()

        self._publish(BattleEvent.ENDED, player=player, enemy=self._enemy)

        self._player = None
        self._enemy = None
        self.state = BattleState.IDLE

    def player_goes_first(self, player: Character, enemy: Enemy) -> bool:
        """
        Decide turn order by base agility. An exact tie is a coin flip.

        Equipment and battle boosts do not count here.
        """
        if player.agility > enemy.agility:
            return True
        if player.agility < enemy.agility:
            return False
        return self.rng.next_int(0, 1) == 1

    # Player actions

    def player_attack(self, player: Character, enemy: Enemy) -> BattleActionResult:
        """Attack the enemy."""
        if not player.is_alive or not enemy.is_alive:
            return self._finished_result(BattleActionType.ATTACK)

        damage, is_critical = calculate_damage(
            self.rng,
            player.effective_strength,
            enemy.defense,
            PLAYER_DAMAGE_VARIATION,
            PLAYER_CRITICAL_CHANCE,
        )
        # The enemy's defense softens the blow once more here
        applied = enemy.take_damage(damage)

        if is_critical:
            message = f"💥 Critical hit! {player.emoji} deals {damage} damage to {enemy.emoji}!"
        else:
            message = f"⚔️ {player.emoji} attacks {enemy.emoji} for {damage} damage!"

        result = BattleActionResult(
            action_type=BattleActionType.ATTACK,
            message=message,
            damage=damage,
            damage_applied=applied,
            is_critical=is_critical,
        )

        if not enemy.is_alive:
            result.is_finished = True
            result.player_won = True
            result.message += f"\n🎉 Victory! {enemy.emoji} is defeated!"

        return self._advance(result, BattleState.ENEMY_TURN)

    def player_defend(self, player: Character) -> BattleActionResult:
        """Take a defensive stance for the rest of the battle."""
        if not player.is_alive:
            return self._finished_result(
                BattleActionType.DEFEND, f"{player.emoji} cannot defend!"
            )

        player.temporary_defense_bonus = calculate_defend_bonus(player.effective_defense)

        result = BattleActionResult(
            action_type=BattleActionType.DEFEND,
            message=f"🛡️ {player.emoji} takes a defensive stance! Defense raised!",
        )
        return self._advance(result, BattleState.ENEMY_TURN)

    def player_use_item(
        self,
        player: Character,
        inventory: Inventory,
        item_id: str,
    ) -> BattleActionResult:
        """
        Use a consumable from the inventory.

        Nothing is consumed when the item is missing, is not a
        consumable, or the player is down.
        """
        if not player.is_alive:
            return self._finished_result(
                BattleActionType.USE_ITEM, f"{player.emoji} cannot use items!"
            )

        stacks = inventory.get_stacks_of(item_id)
        if not stacks:
            return BattleActionResult(
                action_type=BattleActionType.USE_ITEM,
                message="No such item in the inventory!",
                success=False,
            )

        item: Item = stacks[0].item
        if item.type != ItemType.CONSUMABLE:
            return BattleActionResult(
                action_type=BattleActionType.USE_ITEM,
                message=f"{item.emoji} {item.name} cannot be used in battle!",
                success=False,
            )

        inventory.remove_item(item_id, 1)

        effects = []
        if item.health_restore > 0:
            healed = player.heal(item.health_restore)
            effects.append(f"restores {healed} HP")
        if item.agility_boost > 0:
            player.temporary_agility_bonus += item.agility_boost
            effects.append(f"raises agility by {item.agility_boost}")

        message = f"{item.emoji} {player.emoji} uses {item.name}"
        if effects:
            message += " and " + " and ".join(effects)

        result = BattleActionResult(
            action_type=BattleActionType.USE_ITEM,
            message=message + "!",
        )
        return self._advance(result, BattleState.ENEMY_TURN)

    # Enemy actions

    def enemy_turn(self, player: Character, enemy: Enemy) -> BattleActionResult:
        """
        Let the enemy act.

        A poisoned player suffers the poison instead of a normal attack.
        """
        if not player.is_alive or not enemy.is_alive:
            return self._finished_result(BattleActionType.ATTACK)

        if enemy.has_poison_attack and enemy.poison_damage > 0:
            applied = player.take_damage(enemy.poison_damage, allow_death=True)
            result = BattleActionResult(
                action_type=BattleActionType.ATTACK,
                message=f"☠️ Poison deals {enemy.poison_damage} damage to {player.emoji}!",
                damage=enemy.poison_damage,
                damage_applied=applied,
            )
            self._check_player_defeat(player, result)
            return self._advance(result, BattleState.PLAYER_TURN)

        damage, is_critical = calculate_damage(
            self.rng,
            enemy.strength,
            player.effective_defense,
            ENEMY_DAMAGE_VARIATION,
            ENEMY_CRITICAL_CHANCE,
        )
        applied = player.take_damage(damage, allow_death=True)

        if is_critical:
            message = f"💥 Critical hit! {enemy.emoji} deals {damage} damage to {player.emoji}!"
        else:
            message = f"⚔️ {enemy.emoji} attacks {player.emoji} for {damage} damage!"

        result = BattleActionResult(
            action_type=BattleActionType.ATTACK,
            message=message,
            damage=damage,
            damage_applied=applied,
            is_critical=is_critical,
        )

        if player.is_alive:
            if enemy.has_web_attack and roll_percent(self.rng, WEB_CHANCE):
                enemy.agility_debuff = WEB_AGILITY_DEBUFF
                result.message += f"\n🕸️ A web slows {player.emoji}! Agility lowered!"

            if enemy.has_poison_attack and roll_percent(self.rng, POISON_CHANCE):
                enemy.poison_damage = POISON_DAMAGE
                result.message += f"\n☠️ {player.emoji} is poisoned!"

        self._check_player_defeat(player, result)
        return self._advance(result, BattleState.PLAYER_TURN)

    # Rewards

    def calculate_reward(self, enemy: Enemy) -> BattleRewards:
        """
        Roll the rewards for defeating an enemy.

        Each item drop is rolled independently against its drop chance.
        """
        rewards = BattleRewards(experience=enemy.experience_reward)

        for item_reward in enemy.item_rewards:
            if roll_percent(self.rng, item_reward.drop_chance):
                rewards.items.append(copy.copy(item_reward))

        return rewards

    # Internal

    def _check_player_defeat(self, player: Character, result: BattleActionResult) -> None:
        if not player.is_alive:
            result.is_finished = True
            result.player_won = False
            result.message += f"\n💀 {player.emoji} has fallen..."

    def _finished_result(
        self,
        action_type: BattleActionType,
        message: str = "The battle is already over!",
    ) -> BattleActionResult:
        result = BattleActionResult(
            action_type=action_type,
            message=message,
            is_finished=True,
            success=False,
        )
        if self.state != BattleState.IDLE:
            self.state = BattleState.FINISHED
        return result

    def _advance(self, result: BattleActionResult, next_state: BattleState) -> BattleActionResult:
        """Move the turn along after an action inside a started battle."""
        if self.state != BattleState.IDLE:
            if result.is_finished:
                self.state = BattleState.FINISHED
                logger.info(f"Battle finished, player won: {result.player_won}")
            elif result.success:
                self.state = next_state

        self._publish(BattleEvent.ACTION, result=result, state=self.state)
        return result

    def _publish(self, event_type: BattleEvent, **data) -> None:
        if self.events is not None:
            self.events.publish(event_type, **data)


def grant_rewards(
    rewards: BattleRewards,
    player: Character,
    inventory: Inventory,
    item_database: ItemDatabase,
    rng: Optional[RandomSource] = None,
) -> list[tuple[Item, int]]:
    """
    Give battle rewards to the player.

    Experience is added first, then each drop is looked up in the item
    catalog and put in the inventory. Unknown items are skipped and
    drops that do not fit are lost.

    Returns:
        (item, quantity) pairs actually added
    """
    player.add_experience(rewards.experience, rng)

    granted = []
    for item, quantity in item_database.resolve_rewards(rewards.items):
        if inventory.add_item(item, quantity):
            granted.append((item, quantity))
        else:
            logger.warning(f"No room for {quantity}x {item.id}, reward dropped")

    return granted
