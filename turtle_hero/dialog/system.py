"""
Dialog system - branching conversations with conditional options.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, MutableMapping, Optional

from turtle_engine.core.rng import RandomSource
from turtle_hero.components import (
    Character,
    DialogCondition,
    DialogNode,
    DialogOption,
    DialogReward,
    DialogScenario,
    GameState,
    Inventory,
)

if TYPE_CHECKING:
    from turtle_hero.inventory.items import ItemDatabase

logger = logging.getLogger(__name__)


@dataclass
class DialogOutcome:
    """
    What happens after an option is picked.

    Attributes:
        next_node: Node to show next, None when the conversation ends
        action: Action for the game to perform ("battle", "shop", "end")
        action_parameter: Action argument, e.g. the enemy id for "battle"
    """
    next_node: Optional[DialogNode] = None
    action: Optional[str] = None
    action_parameter: Optional[str] = None

    @property
    def is_end(self) -> bool:
        return self.next_node is None


class DialogManager:
    """
    Holds loaded scenarios and resolves conversations.

    Stateless between calls: the caller keeps track of the current
    node and passes the player's state in.
    """

    def __init__(self):
        self._scenarios: dict[str, DialogScenario] = {}

    def load_scenario(self, scenario: DialogScenario) -> None:
        """Register a scenario, replacing one with the same id."""
        if scenario.id in self._scenarios:
            logger.debug(f"Replacing dialog scenario: {scenario.id}")
        self._scenarios[scenario.id] = scenario

    def get_scenario(self, scenario_id: str) -> Optional[DialogScenario]:
        return self._scenarios.get(scenario_id)

    def get_start_node(self, scenario_id: str) -> Optional[DialogNode]:
        """Get the first node of a scenario."""
        scenario = self._scenarios.get(scenario_id)
        if scenario is None:
            return None
        return scenario.get_node(scenario.start_node_id)

    def get_node(self, scenario_id: str, node_id: str) -> Optional[DialogNode]:
        """Get a node of a scenario by ID."""
        scenario = self._scenarios.get(scenario_id)
        if scenario is None:
            return None
        return scenario.get_node(node_id)

    # Conditions

    def is_option_available(
        self,
        option: DialogOption,
        player: Character,
        inventory: Inventory,
        flags: Mapping[str, bool],
    ) -> bool:
        """
        Check if the player may pick an option.

        Stat checks use the character's base stats. Unknown condition
        types and unreadable numbers never hide an option.
        """
        condition = option.condition
        if condition is None:
            return True

        condition_type = condition.type.lower()

        if condition_type == "strength":
            return _check_numeric(player.strength, condition)
        if condition_type == "agility":
            return _check_numeric(player.agility, condition)
        if condition_type == "defense":
            return _check_numeric(player.defense, condition)
        if condition_type == "level":
            return _check_numeric(player.level, condition)

        if condition_type == "has_item":
            if not isinstance(condition.value, str):
                return False
            has_item = inventory.has_item(condition.value)
            return has_item if condition.operator == "==" else not has_item

        if condition_type == "flag":
            if not isinstance(condition.value, str):
                return False
            has_flag = flags.get(condition.value, False)
            return has_flag if condition.operator == "==" else not has_flag

        return True

    def get_available_options(
        self,
        node: DialogNode,
        player: Character,
        inventory: Inventory,
        flags: Mapping[str, bool],
    ) -> list[DialogOption]:
        """Options of a node the player may pick, in order."""
        return [
            option for option in node.options
            if self.is_option_available(option, player, inventory, flags)
        ]

    # Rewards

    def apply_reward(
        self,
        reward: Optional[DialogReward],
        player: Character,
        inventory: Inventory,
        flags: MutableMapping[str, bool],
        item_database: ItemDatabase,
        rng: Optional[RandomSource] = None,
    ) -> None:
        """
        Grant an option's reward.

        Each part is applied on its own. An item is only given when it
        has a quantity and exists in the catalog.
        """
        if reward is None:
            return

        if reward.experience is not None:
            player.add_experience(reward.experience, rng)

        if reward.item_id and reward.item_quantity is not None:
            item = item_database.get_item(reward.item_id)
            if item is None:
                logger.warning(f"Dialog reward references unknown item '{reward.item_id}'")
            elif not inventory.add_item(item, reward.item_quantity):
                logger.warning(f"No room for {reward.item_quantity}x {reward.item_id}")

        if reward.flag:
            flags[reward.flag] = True

    def select_option(
        self,
        scenario_id: str,
        option: DialogOption,
        state: GameState,
        item_database: ItemDatabase,
        rng: Optional[RandomSource] = None,
    ) -> Optional[DialogOutcome]:
        """
        Pick an option: grant its reward and find where it leads.

        Returns:
            The outcome, or None if the option is not available
        """
        if not self.is_option_available(option, state.player, state.inventory, state.flags):
            logger.warning(f"Option not available: {option.text!r}")
            return None

        self.apply_reward(
            option.reward, state.player, state.inventory, state.flags, item_database, rng
        )

        next_node = None
        if option.next_node_id:
            next_node = self.get_node(scenario_id, option.next_node_id)

        return DialogOutcome(
            next_node=next_node,
            action=option.action,
            action_parameter=option.action_parameter,
        )


def _parse_int(value: Any) -> Optional[int]:
    """Read a whole number from a condition value, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _check_numeric(actual: int, condition: DialogCondition) -> bool:
    required = _parse_int(condition.value)
    if required is None:
        return True

    op = condition.operator
    if op == ">=":
        return actual >= required
    if op == "<=":
        return actual <= required
    if op == ">":
        return actual > required
    if op == "<":
        return actual < required
    if op == "==":
        return actual == required
    if op == "!=":
        return actual != required
    return True
