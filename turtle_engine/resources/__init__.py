"""
Resources module - static data loading.
"""

from turtle_engine.resources.database import Database

__all__ = [
    "Database",
]
