"""Stored rule parser and serializer.

Parses persisted rule strings into RuleSet objects. This module is PURE -
no I/O beyond the json codec, no registry access.

Accepted shapes:
    Wrapped object (channel lineups):
        {"conditions": [{"field": "group", "op": "eq", "value": "Sports"}],
         "match": "any" | "all", "enabled": true}
    Bare array (collections, virtual channels), implicit ALL:
        [{"field": "title", "operator": "contains", "value": "news"}]
    Criteria object (personal sections), converted to an ALL rule:
        {"contentType": "movie", "genre": "Drama", "yearFrom": 1990, ...}

Parsing never raises. Anything malformed, oversized or of the wrong shape
yields an empty RuleSet, which matches nothing.

The length limit counts rule text (field, operator and value characters),
not JSON bytes, so re-serializing an accepted rule in either shape never
pushes it over the limit. The raw string gets a looser guard that leaves
room for framing and escapes.

Note: the bare-array shape carries no match mode. Treating it as ALL follows
what those features evaluate today; it is a compatibility shim, not a
statement that ANY was never intended there.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Literal

from reelrules.helpers.dto.rules_dto import Condition, ParsedRule, RuleSet, SortSpec

logger = logging.getLogger(__name__)

# Limits against oversized or adversarial stored rules
MAX_RULE_LENGTH = 65536
MAX_CONDITIONS = 200

# A \uXXXX escape is the widest encoding of one character
_ESCAPE_WIDTH = 6
# Keys, quotes and separators of one condition, and of the wrapping object
_FRAMING_PER_CONDITION = 64

SECTION_CRITERIA_KEYS = frozenset(
    {"contentType", "genre", "yearFrom", "yearTo", "minRating", "maxRating", "watchedState", "sortBy", "sortDir"}
)
SECTION_SORT_FIELDS = frozenset({"title", "year", "rating", "addedAt"})
DEFAULT_SECTION_CONTENT_TYPES = "movie,show"

_MATCH_ALIASES = {"any": "any", "or": "any", "all": "all", "and": "all"}


class _MalformedRule(Exception):
    """Internal: the decoded JSON does not have a usable shape."""


def _empty(shape: Literal["empty", "invalid"]) -> ParsedRule:
    return ParsedRule(rule_set=RuleSet(conditions=[], match="any"), shape=shape)


def rule_text_length(rule_set: RuleSet) -> int:
    """Characters of field, operator and value text across all conditions."""
    return sum(len(c.field) + len(c.operator) + len(c.value) for c in rule_set.conditions)


def raw_length_limit(max_length: int, max_conditions: int) -> int:
    """Longest stored string worth decoding for the given rule limits."""
    return _ESCAPE_WIDTH * max_length + _FRAMING_PER_CONDITION * (max_conditions + 1)


def _read_value(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, int):
        return str(raw)
    if isinstance(raw, float):
        return str(int(raw)) if raw.is_integer() else repr(raw)
    if isinstance(raw, str):
        return raw
    raise _MalformedRule(f"unsupported value type {type(raw).__name__}")


def _read_condition(item: Any) -> Condition:
    if not isinstance(item, Mapping):
        raise _MalformedRule("condition is not an object")
    field_name = item.get("field")
    operator = item.get("op", item.get("operator"))
    if not isinstance(field_name, str) or not isinstance(operator, str):
        raise _MalformedRule("condition needs string 'field' and 'op'/'operator'")
    return Condition(field=field_name, operator=operator, value=_read_value(item.get("value")))


def _read_conditions(items: Any, max_conditions: int) -> list[Condition]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise _MalformedRule("conditions is not a list")
    if len(items) > max_conditions:
        raise _MalformedRule(f"{len(items)} conditions exceeds maximum of {max_conditions}")
    return [_read_condition(item) for item in items]


def _read_match(raw: Any) -> Literal["any", "all"]:
    if isinstance(raw, str) and raw.strip().lower() in _MATCH_ALIASES:
        return _MATCH_ALIASES[raw.strip().lower()]  # type: ignore[return-value]
    logger.debug(f"[parse_rule] Missing or unknown match mode {raw!r}, using 'all'")
    return "all"


def _criteria_number(data: Mapping[str, Any], key: str) -> str | None:
    raw = data.get(key)
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise _MalformedRule(f"{key} must be a number")
    if raw <= 0:
        return None
    return _read_value(raw)


def _criteria_text(data: Mapping[str, Any], key: str) -> str:
    raw = data.get(key)
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise _MalformedRule(f"{key} must be a string")
    return raw.strip()


def rule_from_section_criteria(data: Mapping[str, Any]) -> ParsedRule:
    """Convert a personal-section criteria object into an ALL rule.

    Zero or empty criteria are omitted. contentType defaults to movies and
    shows. watchedState is accepted but not evaluated.

    Raises:
        _MalformedRule: If a criterion has the wrong JSON type
    """
    conditions = [Condition("type", "in", _criteria_text(data, "contentType") or DEFAULT_SECTION_CONTENT_TYPES)]

    genre = _criteria_text(data, "genre")
    if genre:
        conditions.append(Condition("genre", "is", genre))

    for key, field_name, operator in (
        ("yearFrom", "year", "gte"),
        ("yearTo", "year", "lte"),
        ("minRating", "rating", "gte"),
        ("maxRating", "rating", "lte"),
    ):
        value = _criteria_number(data, key)
        if value is not None:
            conditions.append(Condition(field_name, operator, value))

    _criteria_text(data, "watchedState")
    sort_by = _criteria_text(data, "sortBy")
    sort_dir = _criteria_text(data, "sortDir").lower()
    sort = SortSpec(
        field=sort_by if sort_by in SECTION_SORT_FIELDS else "title",
        order="desc" if sort_dir == "desc" else "asc",
    )
    return ParsedRule(rule_set=RuleSet(conditions=conditions, match="all"), shape="criteria", sort=sort)


def parse_rule(
    raw: str | None,
    *,
    max_length: int = MAX_RULE_LENGTH,
    max_conditions: int = MAX_CONDITIONS,
) -> ParsedRule:
    """Parse a stored rule string, detecting its persisted shape.

    Args:
        raw: Stored rule string (may be None or empty)
        max_length: Most characters of rule text (fields, operators, values)
        max_conditions: Most conditions accepted in one rule

    Returns:
        ParsedRule. Malformed input gives shape="invalid" with an empty rule.
    """
    if raw is None:
        return _empty("empty")
    if not isinstance(raw, str):
        logger.warning(f"[parse_rule] Rule is {type(raw).__name__}, not a string; treating as empty")
        return _empty("invalid")

    text = raw.strip()
    if not text:
        return _empty("empty")
    raw_limit = raw_length_limit(max_length, max_conditions)
    if len(text) > raw_limit:
        logger.warning(f"[parse_rule] Rule string too long ({len(text)} > {raw_limit} characters); treating as empty")
        return _empty("invalid")

    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        logger.debug(f"[parse_rule] Unparsable rule JSON: {e}")
        return _empty("invalid")

    try:
        parsed = _parse_decoded(data, max_conditions)
    except _MalformedRule as e:
        logger.warning(f"[parse_rule] Malformed rule ({e}); treating as empty")
        return _empty("invalid")

    size = rule_text_length(parsed.rule_set)
    if size > max_length:
        logger.warning(f"[parse_rule] Rule too long ({size} > {max_length} characters); treating as empty")
        return _empty("invalid")
    return parsed


def _parse_decoded(data: Any, max_conditions: int) -> ParsedRule:
    if data is None:
        return _empty("empty")
    if isinstance(data, list):
        conditions = _read_conditions(data, max_conditions)
        return ParsedRule(rule_set=RuleSet(conditions=conditions, match="all"), shape="array")
    if isinstance(data, dict):
        if "conditions" in data:
            conditions = _read_conditions(data["conditions"], max_conditions)
            enabled = data.get("enabled", True)
            return ParsedRule(
                rule_set=RuleSet(conditions=conditions, match=_read_match(data.get("match"))),
                enabled=enabled if isinstance(enabled, bool) else True,
                shape="object",
            )
        if data.keys() & SECTION_CRITERIA_KEYS:
            return rule_from_section_criteria(data)
    raise _MalformedRule(f"unexpected top-level {type(data).__name__}")


def parse_rule_set(raw: str | None, **limits: int) -> RuleSet:
    """Parse a stored rule string into a RuleSet (never raises)."""
    return parse_rule(raw, **limits).rule_set


def _dumps(payload: Any) -> str:
    # Compact, unescaped text keeps stored rules within the raw guard
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def serialize_rule_set(
    rule_set: RuleSet,
    *,
    shape: Literal["object", "array"] = "object",
    enabled: bool | None = None,
) -> str:
    """Serialize a RuleSet for storage, dropping blank-value conditions.

    Args:
        rule_set: Rule to store
        shape: "object" for the wrapped form, "array" for the bare form
        enabled: Written into the wrapped form when not None

    Returns:
        JSON string. A bare array cannot carry ANY, so an ANY rule is always
        written as the wrapped object.
    """
    active = rule_set.active_conditions()

    if shape == "array":
        if rule_set.match == "all" and enabled is None:
            rows = [{"field": c.field, "operator": c.operator, "value": c.value} for c in active]
            return _dumps(rows)
        logger.warning("[parse_rule] Bare array cannot hold match mode or enabled flag; writing wrapped object")

    payload: dict[str, Any] = {
        "conditions": [{"field": c.field, "op": c.operator, "value": c.value} for c in active],
        "match": rule_set.match,
    }
    if enabled is not None:
        payload["enabled"] = enabled
    return _dumps(payload)


def normalize_rule(raw: str | None, *, shape: Literal["object", "array"] = "object") -> str:
    """Parse then re-serialize a stored rule (the editing normalization)."""
    parsed = parse_rule(raw)
    return serialize_rule_set(parsed.rule_set, shape=shape, enabled=None if parsed.enabled else False)
