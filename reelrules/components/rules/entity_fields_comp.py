"""Field value resolution on candidate entities.

Candidates come from the caller's data store either as mappings (JSON rows)
or as objects (ORM rows, dataclasses). A field is looked up under its
registry name first, then under each alias.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from reelrules.helpers.dto.rules_dto import FieldDescriptor


def read_key(entity: Any, key: str) -> tuple[bool, Any]:
    """Return (found, value) for one key on a mapping or object."""
    if isinstance(entity, Mapping):
        if key in entity:
            return True, entity[key]
        return False, None
    if hasattr(entity, key):
        return True, getattr(entity, key)
    return False, None


def resolve_field_value(entity: Any, descriptor: FieldDescriptor) -> Any:
    """Raw value of a registry field on an entity, or None when absent."""
    for key in (descriptor.name, *descriptor.aliases):
        found, value = read_key(entity, key)
        if found:
            return value
    return None


def entity_id(entity: Any, id_key: str = "id") -> Any:
    """Identifier of an entity, or None if it has none."""
    _, value = read_key(entity, id_key)
    return value
