"""
Scenario loader - reads dialog scenarios from JSON files.

Field names are matched case-insensitively (``startNodeId``,
``StartNodeId`` and ``start_node_id`` all work). Loaded scenarios are
checked against the scenario schema and for broken node links.

Usage:
    loader = ScenarioLoader()
    scenario = loader.load_from_file("data/dialog/forest_elder.json")
    manager.load_scenario(scenario)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import jsonschema
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from turtle_engine.core.component import Component
from turtle_engine.resources.database import Database
from turtle_hero.components import (
    DialogCondition,
    DialogNode,
    DialogOption,
    DialogReward,
    DialogScenario,
)
from turtle_hero.data import BUNDLED_DATA_PATH

logger = logging.getLogger(__name__)

SCENARIO_SCHEMA = "scenario.schema.json"


class ScenarioError(Exception):
    """Base class for scenario loading errors."""


class ScenarioNotFoundError(ScenarioError, FileNotFoundError):
    """The scenario file or directory does not exist."""


class ScenarioParseError(ScenarioError):
    """The scenario is not valid JSON."""


class ScenarioValidationError(ScenarioError):
    """The scenario has the wrong structure or broken node links."""


# Nested fields: field -> (container kind, model)
_NESTED: dict[type[Component], dict[str, tuple[str, type[Component]]]] = {
    DialogScenario: {'nodes': ('map', DialogNode)},
    DialogNode: {'options': ('list', DialogOption)},
    DialogOption: {
        'condition': ('one', DialogCondition),
        'reward': ('one', DialogReward),
    },
}


def _fold(key: str) -> str:
    return key.replace('_', '').lower()


def _normalize_keys(data: dict[str, Any], model: type[Component]) -> dict[str, Any]:
    """Rename keys to the file-format spelling and drop unknown ones."""
    known = {_fold(name): to_camel(name) for name in model.model_fields}
    nested = _NESTED.get(model, {})

    result: dict[str, Any] = {}
    for key, value in data.items():
        canonical = known.get(_fold(str(key)))
        if canonical is None:
            logger.warning(f"Ignoring unknown {model.__name__} field '{key}'")
            continue

        kind, child = nested.get(canonical, (None, None))
        if kind == 'one' and isinstance(value, dict):
            value = _normalize_keys(value, child)
        elif kind == 'list' and isinstance(value, list):
            value = [_normalize_keys(v, child) if isinstance(v, dict) else v for v in value]
        elif kind == 'map' and isinstance(value, dict):
            value = {
                k: _normalize_keys(v, child) if isinstance(v, dict) else v
                for k, v in value.items()
            }

        result[canonical] = value
    return result


class ScenarioLoader:
    """
    Loads and validates dialog scenarios.

    Raises typed errors: ScenarioNotFoundError, ScenarioParseError and
    ScenarioValidationError, all ScenarioError subclasses.
    """

    def __init__(self, schema: Optional[dict[str, Any]] = None):
        if schema is None:
            schema = Database(BUNDLED_DATA_PATH).get_schema(SCENARIO_SCHEMA)
            if schema is None:
                logger.warning("Scenario schema not found, skipping structure checks")
        self._schema = schema

    def load_from_file(self, path: str | Path) -> DialogScenario:
        """Load one scenario file."""
        path = Path(path)
        if not path.is_file():
            raise ScenarioNotFoundError(f"Scenario file not found: {path}")

        try:
            text = path.read_text(encoding='utf-8')
        except OSError as e:
            raise ScenarioError(f"Failed to read scenario {path}: {e}") from e

        return self.load_from_json(text, source=str(path))

    def load_from_json(self, text: str, source: str = "<json>") -> DialogScenario:
        """Load a scenario from JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ScenarioParseError(f"Invalid JSON in {source}: {e}") from e

        if not isinstance(data, dict):
            raise ScenarioValidationError(f"Scenario in {source} must be a JSON object")

        data = _normalize_keys(data, DialogScenario)

        if self._schema is not None:
            try:
                jsonschema.validate(instance=data, schema=self._schema)
            except jsonschema.ValidationError as e:
                raise ScenarioValidationError(f"Invalid scenario {source}: {e.message}") from e

        try:
            scenario = DialogScenario.model_validate(data)
        except ValidationError as e:
            raise ScenarioValidationError(f"Invalid scenario {source}: {e}") from e

        # A node without an id is known by its key
        for node_id, node in scenario.nodes.items():
            if not node.id:
                node.id = node_id

        self.validate(scenario)
        return scenario

    def load_directory(self, path: str | Path) -> dict[str, DialogScenario]:
        """
        Load every ``*.json`` scenario in a directory.

        Files that fail to load are logged and skipped.

        Returns:
            Map of scenario id to scenario
        """
        path = Path(path)
        if not path.is_dir():
            raise ScenarioNotFoundError(f"Scenario directory not found: {path}")

        scenarios: dict[str, DialogScenario] = {}
        for file_path in sorted(path.glob("*.json")):
            try:
                scenario = self.load_from_file(file_path)
            except ScenarioError as e:
                logger.error(f"Skipping scenario {file_path.name}: {e}")
                continue
            scenarios[scenario.id] = scenario

        logger.info(f"Loaded {len(scenarios)} scenarios from {path}")
        return scenarios

    @staticmethod
    def validate(scenario: DialogScenario) -> None:
        """Check ids and that every node link points at a real node."""
        if not scenario.id:
            raise ScenarioValidationError("Scenario must have an id")

        if not scenario.start_node_id:
            raise ScenarioValidationError(f"Scenario '{scenario.id}' must have a startNodeId")

        if scenario.start_node_id not in scenario.nodes:
            raise ScenarioValidationError(
                f"Start node '{scenario.start_node_id}' not found in scenario '{scenario.id}'"
            )

        for node in scenario.nodes.values():
            for option in node.options:
                if option.next_node_id and option.next_node_id not in scenario.nodes:
                    raise ScenarioValidationError(
                        f"Node '{option.next_node_id}' not found in scenario "
                        f"'{scenario.id}' (linked from node '{node.id}')"
                    )
