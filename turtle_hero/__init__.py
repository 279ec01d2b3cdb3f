"""
Turtle Hero game core.

Provides the game-specific systems built on top of the engine:
- Components (character, inventory, dialog, game state as pydantic models)
- Inventory (item catalog)
- Battle (turn-based combat, enemy catalog, rewards)
- Dialog (scenarios, conditions, rewards)
- Save (persistence)
"""
