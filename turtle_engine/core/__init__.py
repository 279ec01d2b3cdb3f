"""
Core engine module.

Exports:
- Component: Component base
- EventBus, Event: Event system
- GameConfig: Paths and defaults
- RandomSource, SeededRandom: Injectable randomness
"""

from turtle_engine.core.component import Component
from turtle_engine.core.events import EventBus, Event
from turtle_engine.core.config import GameConfig
from turtle_engine.core.rng import RandomSource, SeededRandom, roll_percent

__all__ = [
    # Components
    "Component",
    # Events
    "EventBus",
    "Event",
    # Config
    "GameConfig",
    # Randomness
    "RandomSource",
    "SeededRandom",
    "roll_percent",
]
