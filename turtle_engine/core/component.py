"""
Data component base.

A component is a pydantic model of game state. On disk its fields use
lowerCamelCase names and enums are written as their text values; in
Python the snake_case names work as well.

Usage:
    class Stamina(Component):
        current_stamina: int = 10
        max_stamina: int = 10

    Stamina(current_stamina=3).to_document()
    # {"currentStamina": 3, "maxStamina": 10}
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Component(BaseModel):
    """
    Validated, serializable game data.

    Assignments are validated, and a document carrying a field the
    model does not declare is rejected. Loaders that must tolerate
    older or newer documents strip such fields first with
    ``drop_unknown_keys``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra='forbid',
    )

    @classmethod
    def document_keys(cls) -> set[str]:
        """Every key a document may use for one of this model's fields."""
        keys = set()
        for name, field_info in cls.model_fields.items():
            keys.add(name)
            if field_info.alias:
                keys.add(field_info.alias)
        return keys

    @classmethod
    def drop_unknown_keys(cls, document: dict[str, Any]) -> list[str]:
        """
        Remove keys this model does not declare, in place.

        Returns:
            The removed keys
        """
        known = cls.document_keys()
        unknown = [key for key in document if key not in known]
        for key in unknown:
            del document[key]
        return unknown

    def to_document(self) -> dict:
        """JSON-ready dict with on-disk field names."""
        return self.model_dump(mode="json", by_alias=True)

    def clone(self) -> Component:
        return self.model_copy(deep=True)
