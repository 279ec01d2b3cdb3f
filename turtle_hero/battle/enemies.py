"""
Enemy catalog - enemy templates loaded from data files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Optional

from turtle_engine.resources.database import Database
from turtle_hero.battle.actor import Enemy, EnemyTemplate, create_enemy_from_template
from turtle_hero.data import BUNDLED_DATA_PATH

logger = logging.getLogger(__name__)


class EnemyDatabase:
    """
    Database of enemy templates.

    Battles never get a template directly; ``create_enemy`` hands out
    a fresh instance each time.
    """

    def __init__(self):
        self._templates: dict[str, EnemyTemplate] = {}

    @classmethod
    def from_database(cls, database: Database) -> EnemyDatabase:
        """Build the catalog from validated raw records."""
        catalog = cls()
        for enemy_id, record in database.enemies.items():
            try:
                catalog.register_enemy(EnemyTemplate.from_dict(record))
            except (KeyError, TypeError) as e:
                logger.error(f"Invalid enemy '{enemy_id}': {e}")
        return catalog

    @classmethod
    def load_defaults(cls, data_path: Optional[str | Path] = None) -> EnemyDatabase:
        """Load the enemies shipped with the game (or the ones at ``data_path``)."""
        database = Database(data_path or BUNDLED_DATA_PATH)
        database.load_all()
        return cls.from_database(database)

    def register_enemy(self, template: EnemyTemplate) -> bool:
        """Register an enemy template. Templates without an id are rejected."""
        if template is None or not template.id:
            return False
        self._templates[template.id] = template
        return True

    def get_template(self, enemy_id: str) -> Optional[EnemyTemplate]:
        """Get an enemy template."""
        return self._templates.get(enemy_id)

    def create_enemy(self, enemy_id: str) -> Optional[Enemy]:
        """
        Create a battle-ready enemy.

        Returns:
            A new instance, or None for an unknown id
        """
        template = self.get_template(enemy_id)
        if template is None:
            logger.warning(f"Unknown enemy: {enemy_id}")
            return None
        return create_enemy_from_template(template)

    def get_all_templates(self) -> list[EnemyTemplate]:
        return list(self._templates.values())

    def __contains__(self, enemy_id: str) -> bool:
        return enemy_id in self._templates

    def __iter__(self) -> Iterator[EnemyTemplate]:
        return iter(self._templates.values())

    def __len__(self) -> int:
        return len(self._templates)
