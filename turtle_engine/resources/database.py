"""
Static game data.

Reads the raw item and enemy records shipped with the game and checks
each one against its JSON schema. Turning the records into typed
catalog entries is left to the catalogs.

Layout under the data path:
    schemas/<name>.schema.json
    database/items/*.json
    database/enemies/*.json

A category file holds either a single record or a list of them.
"""

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema

logger = logging.getLogger(__name__)

# Record folder -> schema checked against every record in it
CATEGORIES: dict[str, str] = {
    "items": "item.schema.json",
    "enemies": "enemy.schema.json",
}


def _read_json(path: Path) -> Any:
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


class Database:
    """Raw records by category, keyed by record id."""

    def __init__(self, data_path: Path | str):
        self.data_path = Path(data_path)
        self._schemas: dict[str, Any] = {}
        self._records: dict[str, dict[str, Any]] = {folder: {} for folder in CATEGORIES}

    @property
    def items(self) -> dict[str, Any]:
        return self._records["items"]

    @property
    def enemies(self) -> dict[str, Any]:
        return self._records["enemies"]

    def load_all(self) -> None:
        """(Re)read schemas and every category from disk."""
        self._schemas = self._read_schemas()
        for folder, schema_name in CATEGORIES.items():
            self._records[folder] = self._read_category(folder, schema_name)

        logger.info(", ".join(f"{len(records)} {folder}" for folder, records in self._records.items()) + " loaded")

    def get_schema(self, schema_name: str) -> dict[str, Any] | None:
        if not self._schemas:
            self._schemas = self._read_schemas()
        return self._schemas.get(schema_name)

    def get_item(self, item_id: str) -> dict[str, Any] | None:
        return self.items.get(item_id)

    def get_enemy(self, enemy_id: str) -> dict[str, Any] | None:
        return self.enemies.get(enemy_id)

    def _read_schemas(self) -> dict[str, Any]:
        schema_dir = self.data_path / "schemas"
        schemas: dict[str, Any] = {}
        if not schema_dir.is_dir():
            logger.warning(f"Schema directory not found: {schema_dir}")
            return schemas

        for path in schema_dir.glob("*.schema.json"):
            try:
                schemas[path.name] = _read_json(path)
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Could not read schema {path}: {e}")
        return schemas

    def _read_category(self, folder: str, schema_name: str) -> dict[str, Any]:
        records: dict[str, Any] = {}
        folder_path = self.data_path / "database" / folder
        if not folder_path.is_dir():
            logger.warning(f"Data directory not found: {folder_path}")
            return records

        schema = self._schemas.get(schema_name)
        if not schema:
            logger.warning(f"Skipping {folder}: schema {schema_name} not found")
            return records

        for path in sorted(folder_path.glob("*.json")):
            try:
                content = _read_json(path)
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Could not read {path}: {e}")
                continue

            for record in content if isinstance(content, list) else [content]:
                try:
                    jsonschema.validate(instance=record, schema=schema)
                except jsonschema.ValidationError as e:
                    logger.error(f"Invalid record in {path}: {e.message}")
                    continue
                if record['id'] in records:
                    logger.warning(f"Duplicate {folder} id '{record['id']}' in {path}")
                records[record['id']] = record

        return records
