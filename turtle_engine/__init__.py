"""
Turtle Engine

Infrastructure shared by the game core: data components, events,
configuration, randomness and static data loading.
"""

__version__ = "1.0.0"

from turtle_engine.core import (
    Component,
    EventBus,
    Event,
    GameConfig,
    RandomSource,
    SeededRandom,
)
from turtle_engine.resources import Database

__all__ = [
    "Component",
    "EventBus",
    "Event",
    "GameConfig",
    "RandomSource",
    "SeededRandom",
    "Database",
]
