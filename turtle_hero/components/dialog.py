"""
Dialog components - scenarios, nodes, options, conditions, rewards.

These are loaded from scenario files, so field names follow the
file format (``nextNodeId``, ``startNodeId``) through camelCase aliases.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field

from turtle_engine.core.component import Component


class DialogCondition(Component):
    """
    Requirement for an option to be shown.

    Attributes:
        type: strength, agility, defense, level, has_item or flag
        operator: >=, <=, >, <, == or !=
        value: Number for stat checks, item id or flag name otherwise
    """
    type: str = ""
    operator: str = ">="
    value: Any = None


class DialogReward(Component):
    """
    What picking an option grants. Every part is optional.

    Attributes:
        experience: XP to add
        item_id: Catalog id of an item to give
        item_quantity: How many of the item
        flag: Story flag to set
    """
    experience: Optional[int] = None
    item_id: Optional[str] = None
    item_quantity: Optional[int] = None
    flag: Optional[str] = None


class DialogOption(Component):
    """A single answer the player can pick."""
    text: str = ""
    next_node_id: str = ""
    condition: Optional[DialogCondition] = None
    reward: Optional[DialogReward] = None
    action: Optional[str] = None            # "battle", "shop", "end"
    action_parameter: Optional[str] = None  # Enemy id for "battle"


class DialogNode(Component):
    """A single line of dialog and the answers to it."""
    id: str = ""
    speaker: str = ""
    text: str = ""
    emoji: str = "💬"
    options: list[DialogOption] = Field(default_factory=list)

    @property
    def has_options(self) -> bool:
        return len(self.options) > 0


class DialogScenario(Component):
    """A whole conversation graph."""
    id: str = ""
    name: str = ""
    start_node_id: str = ""
    nodes: dict[str, DialogNode] = Field(default_factory=dict)

    def get_node(self, node_id: str) -> Optional[DialogNode]:
        """Get a dialog node by ID."""
        return self.nodes.get(node_id)
