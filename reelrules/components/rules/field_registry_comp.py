"""Field registry: which fields exist per entity kind, and what they accept.

Operator legality is stored per field, not derived from the value type,
so two string fields may offer different operators. Tables are plain data;
adding a field or operator is a table change.

The registry is validated once on construction and is read-only afterwards,
so one instance is shared by every request for every entity kind.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from reelrules.components.rules.operator_eval_comp import OPERATORS_BY_TYPE
from reelrules.helpers.dto.rules_dto import VALUE_TYPES, FieldDescriptor, ValueType
from reelrules.helpers.exceptions import RegistryConfigError, UnknownEntityKindError

logger = logging.getLogger(__name__)

CHANNEL = "channel"
MEDIA = "media"
VIRTUAL_STATION = "virtual_station"
SECTION_ITEM = "section_item"

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def make_field(
    name: str,
    value_type: ValueType,
    operators: Iterable[str],
    *,
    label: str = "",
    enum_values: Iterable[str] | None = None,
    temporal: bool = False,
    multi_valued: bool = False,
    aliases: Iterable[str] = (),
) -> FieldDescriptor:
    """Build a descriptor; camelCase names get their snake_case spelling as an alias."""
    all_aliases = list(aliases)
    snake = _snake_case(name)
    if snake != name and snake not in all_aliases:
        all_aliases.append(snake)
    return FieldDescriptor(
        name=name,
        value_type=value_type,
        legal_operators=tuple(operators),
        label=label or name,
        enum_values=tuple(enum_values) if enum_values is not None else None,
        temporal=temporal,
        multi_valued=multi_valued,
        aliases=tuple(all_aliases),
    )


_MEDIA_TEXT_OPS = ("is", "is_not", "contains", "starts_with", "ends_with")
_MEDIA_NUMERIC_OPS = ("is", "is_not", "gt", "lt")
_MEDIA_ATTRIBUTE_OPS = ("is", "is_not", "contains", "starts_with")

CHANNEL_FIELDS: tuple[FieldDescriptor, ...] = (
    make_field("group", "string", ("eq", "neq", "contains", "starts_with"), label="Group"),
    make_field(
        "name",
        "string",
        ("eq", "neq", "contains", "not_contains", "starts_with", "ends_with"),
        label="Name",
    ),
    make_field("number", "numeric", ("eq", "gt", "lt", "gte", "lte"), label="Channel Number"),
    make_field("sourceName", "string", ("eq", "neq", "contains"), label="Source Name"),
    make_field("sourceType", "enum", ("eq", "neq"), label="Source Type", enum_values=("m3u", "xtream")),
    make_field("hd", "boolean", ("eq",), label="HD"),
    make_field("favorite", "boolean", ("eq",), label="Favorite"),
)

MEDIA_FIELDS: tuple[FieldDescriptor, ...] = (
    make_field("title", "string", _MEDIA_TEXT_OPS, label="Title"),
    make_field("genre", "string", _MEDIA_TEXT_OPS, label="Genre", multi_valued=True, aliases=("genres",)),
    make_field("year", "numeric", _MEDIA_NUMERIC_OPS, label="Year"),
    make_field("rating", "numeric", _MEDIA_NUMERIC_OPS, label="Rating"),
    make_field("duration", "numeric", _MEDIA_NUMERIC_OPS, label="Duration"),
    make_field("type", "enum", ("is", "is_not"), label="Type"),
    make_field("studio", "string", _MEDIA_ATTRIBUTE_OPS, label="Studio"),
    make_field("resolution", "string", _MEDIA_ATTRIBUTE_OPS, label="Resolution"),
    make_field("addedAt", "numeric", _MEDIA_NUMERIC_OPS, label="Date Added", temporal=True),
)

# Virtual channels use the collection field set; kept as its own table so the two can diverge
VIRTUAL_STATION_FIELDS: tuple[FieldDescriptor, ...] = MEDIA_FIELDS

SECTION_ITEM_FIELDS: tuple[FieldDescriptor, ...] = (
    make_field(
        "type",
        "enum",
        ("is", "is_not", "in"),
        label="Content Type",
        enum_values=("movie", "show", "episode"),
    ),
    make_field("genre", "string", ("is", "contains"), label="Genre", multi_valued=True, aliases=("genres",)),
    make_field("year", "numeric", ("gte", "lte"), label="Year"),
    make_field("rating", "numeric", ("gte", "lte"), label="Rating"),
    make_field("title", "string", ("is", "contains", "starts_with"), label="Title"),
    make_field("addedAt", "numeric", ("gte", "lte"), label="Date Added", temporal=True),
)

DEFAULT_TABLES: Mapping[str, tuple[FieldDescriptor, ...]] = MappingProxyType(
    {
        CHANNEL: CHANNEL_FIELDS,
        MEDIA: MEDIA_FIELDS,
        VIRTUAL_STATION: VIRTUAL_STATION_FIELDS,
        SECTION_ITEM: SECTION_ITEM_FIELDS,
    }
)


def validate_field_table(kind: str, descriptors: Iterable[FieldDescriptor]) -> tuple[FieldDescriptor, ...]:
    """Check one entity kind's table.

    Raises:
        RegistryConfigError: On duplicate names, unknown value types, operators
            the value type does not define, or an empty closed enum
    """
    seen: set[str] = set()
    table = tuple(descriptors)
    if not kind:
        raise RegistryConfigError("Entity kind name cannot be empty")
    if not table:
        raise RegistryConfigError(f"[{kind}] table has no fields")

    for desc in table:
        if not desc.name:
            raise RegistryConfigError(f"[{kind}] field with empty name")
        if desc.name.lower() in seen:
            raise RegistryConfigError(f"[{kind}] duplicate field {desc.name!r}")
        seen.add(desc.name.lower())

        if desc.value_type not in VALUE_TYPES:
            raise RegistryConfigError(f"[{kind}.{desc.name}] unknown value type {desc.value_type!r}")
        if not desc.legal_operators:
            raise RegistryConfigError(f"[{kind}.{desc.name}] no legal operators")

        supported = OPERATORS_BY_TYPE[desc.value_type]
        for op in desc.legal_operators:
            if op not in supported:
                raise RegistryConfigError(
                    f"[{kind}.{desc.name}] operator {op!r} is not defined for {desc.value_type} fields"
                )
        if len(set(desc.legal_operators)) != len(desc.legal_operators):
            raise RegistryConfigError(f"[{kind}.{desc.name}] operators listed twice")

        if desc.enum_values is not None and desc.value_type == "enum" and not desc.enum_values:
            raise RegistryConfigError(f"[{kind}.{desc.name}] closed enum with no values")
        if desc.temporal and desc.value_type != "numeric":
            raise RegistryConfigError(f"[{kind}.{desc.name}] temporal fields must be numeric")
    return table


class FieldRegistry:
    """Immutable lookup of field descriptors per entity kind."""

    def __init__(self, tables: Mapping[str, Iterable[FieldDescriptor]]) -> None:
        by_kind: dict[str, Mapping[str, FieldDescriptor]] = {}
        folded: dict[str, Mapping[str, FieldDescriptor]] = {}
        ordered: dict[str, tuple[FieldDescriptor, ...]] = {}
        for kind, descriptors in tables.items():
            table = validate_field_table(kind, descriptors)
            ordered[kind] = table
            by_kind[kind] = MappingProxyType({d.name: d for d in table})
            folded[kind] = MappingProxyType({d.name.lower(): d for d in table})

        self._ordered = MappingProxyType(ordered)
        self._by_kind = MappingProxyType(by_kind)
        self._folded = MappingProxyType(folded)

    def entity_kinds(self) -> tuple[str, ...]:
        return tuple(self._ordered)

    def has_kind(self, kind: str) -> bool:
        return kind in self._ordered

    def require_kind(self, kind: str) -> None:
        """
        Raises:
            UnknownEntityKindError: If kind is not registered
        """
        if kind not in self._ordered:
            raise UnknownEntityKindError(kind)

    def fields(self, kind: str) -> tuple[FieldDescriptor, ...]:
        """All descriptors of a kind in table order."""
        self.require_kind(kind)
        return self._ordered[kind]

    def describe(self, kind: str, field_name: str) -> FieldDescriptor | None:
        """Descriptor for a field, or None if the kind or field is unknown.

        Exact names win; otherwise the lookup is case-insensitive.
        """
        table = self._by_kind.get(kind)
        if table is None:
            return None
        desc = table.get(field_name)
        if desc is None:
            desc = self._folded[kind].get(field_name.lower())
        return desc

    def legal_operators(self, kind: str, field_name: str) -> tuple[str, ...]:
        """Operators legal for a field, empty if it is not registered."""
        desc = self.describe(kind, field_name)
        return desc.legal_operators if desc else ()


def descriptor_from_config(kind: str, entry: Mapping[str, Any]) -> FieldDescriptor:
    """Build a descriptor from a registry.extra_fields config entry.

    Expected keys: name, type, operators; optional label, values, temporal,
    multi_valued, aliases.

    Raises:
        RegistryConfigError: If required keys are missing or malformed
    """
    try:
        name = str(entry["name"])
        value_type = str(entry["type"])
        operators = entry["operators"]
    except (KeyError, TypeError) as e:
        raise RegistryConfigError(f"[{kind}] extra field entry missing {e}") from None
    if isinstance(operators, str) or not isinstance(operators, Iterable):
        raise RegistryConfigError(f"[{kind}.{name}] operators must be a list")

    values = entry.get("values")
    return make_field(
        name,
        value_type,  # type: ignore[arg-type]  # checked by validate_field_table
        [str(op) for op in operators],
        label=str(entry.get("label", "")),
        enum_values=[str(v) for v in values] if values is not None else None,
        temporal=bool(entry.get("temporal", False)),
        multi_valued=bool(entry.get("multi_valued", False)),
        aliases=[str(a) for a in entry.get("aliases", ())],
    )


def build_registry(extra_fields: Mapping[str, Iterable[Mapping[str, Any]]] | None = None) -> FieldRegistry:
    """Build the default registry, extended with configured fields.

    Args:
        extra_fields: kind -> list of field entries (see descriptor_from_config).
            A kind not in the defaults becomes a new entity kind.

    Raises:
        RegistryConfigError: If any table fails validation
    """
    tables: dict[str, list[FieldDescriptor]] = {kind: list(fields) for kind, fields in DEFAULT_TABLES.items()}
    for kind, entries in (extra_fields or {}).items():
        added = [descriptor_from_config(kind, e) for e in entries]
        tables.setdefault(kind, []).extend(added)
        logger.info(f"[field_registry] {len(added)} configured field(s) added to {kind}")
    return FieldRegistry(tables)
