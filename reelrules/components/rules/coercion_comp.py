"""Coercion of stored rule values and candidate field values.

Conditions are stored as untyped strings whatever the field's real type.
Before comparing, both sides are brought to the field's value type:

    string  -> lower-cased str
    enum    -> lower-cased, stripped str (checked against a closed value set if any)
    numeric -> float (temporal fields: epoch milliseconds, ISO-8601 accepted)
    boolean -> bool ("true"/"false", "1"/"0", "yes"/"no")

The `in` operator takes a comma-separated list and yields a frozenset.

Condition-side failures raise CoercionError, which the operator evaluator
turns into a non-matching predicate. Candidate-side failures simply yield
no comparable values.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Any

from reelrules.helpers.dto.rules_dto import FieldDescriptor

_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})


class CoercionError(ValueError):
    """A stored condition value cannot be read as the field's value type."""


def parse_bool(raw: str) -> bool:
    text = raw.strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise CoercionError(f"not a boolean: {raw!r}")


def parse_number(raw: str) -> float:
    try:
        number = float(raw.strip())
    except ValueError:
        raise CoercionError(f"not a number: {raw!r}") from None
    if not math.isfinite(number):
        raise CoercionError(f"not a finite number: {raw!r}")
    return number


def to_epoch_ms(moment: datetime | date) -> float:
    """Convert a date or datetime to epoch milliseconds (naive values are UTC)."""
    if not isinstance(moment, datetime):
        moment = datetime(moment.year, moment.month, moment.day)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp() * 1000


def parse_temporal(raw: str) -> float:
    """Read epoch milliseconds or an ISO-8601 date/datetime."""
    text = raw.strip()
    try:
        return parse_number(text)
    except CoercionError:
        pass
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return to_epoch_ms(datetime.fromisoformat(text))
    except ValueError:
        raise CoercionError(f"not a date or epoch value: {raw!r}") from None


def _coerce_enum_member(text: str, descriptor: FieldDescriptor) -> str:
    member = text.strip().lower()
    if not member:
        raise CoercionError("empty enum value")
    if descriptor.enum_values is not None and member not in {v.lower() for v in descriptor.enum_values}:
        raise CoercionError(f"{text!r} is not one of {list(descriptor.enum_values)}")
    return member


def coerce_condition_value(raw: str, descriptor: FieldDescriptor, operator: str) -> Any:
    """Coerce a stored condition value for a canonical operator.

    Raises:
        CoercionError: If the value cannot be read as the field's type
    """
    if operator in ("in", "ni"):
        parts = [p for p in (s.strip() for s in raw.split(",")) if p]
        if not parts:
            raise CoercionError("empty value list")
        if descriptor.value_type == "enum":
            return frozenset(_coerce_enum_member(p, descriptor) for p in parts)
        return frozenset(p.lower() for p in parts)

    value_type = descriptor.value_type
    if value_type == "numeric":
        return parse_temporal(raw) if descriptor.temporal else parse_number(raw)
    if value_type == "boolean":
        return parse_bool(raw)
    if value_type == "enum":
        return _coerce_enum_member(raw, descriptor)
    return raw.lower()


def _candidate_numeric(value: Any, descriptor: FieldDescriptor) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    if isinstance(value, (datetime, date)):
        return to_epoch_ms(value) if descriptor.temporal else None
    if isinstance(value, str):
        try:
            return parse_temporal(value) if descriptor.temporal else parse_number(value)
        except CoercionError:
            return None
    return None


def _candidate_boolean(value: Any) -> bool | None:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        try:
            return parse_bool(value)
        except CoercionError:
            return None
    return None


def _candidate_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).lower()


def _elements(value: Any, descriptor: FieldDescriptor) -> list[Any]:
    if descriptor.multi_valued:
        if isinstance(value, (list, tuple, set, frozenset)):
            return list(value)
        if isinstance(value, str):
            return [p for p in (s.strip() for s in value.split(",")) if p]
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def candidate_values(value: Any, descriptor: FieldDescriptor) -> list[Any]:
    """Comparable values of one candidate field.

    Single-valued fields yield at most one value; multi-valued fields yield
    one value per element. Uncoercible numeric/boolean elements are dropped.
    A missing string field compares as the empty string.
    """
    value_type = descriptor.value_type
    elements = _elements(value, descriptor)

    if value_type == "numeric":
        numbers = (_candidate_numeric(v, descriptor) for v in elements)
        return [n for n in numbers if n is not None]
    if value_type == "boolean":
        flags = (_candidate_boolean(v) for v in elements)
        return [f for f in flags if f is not None]
    if value_type == "enum":
        return [_candidate_text(v).strip() for v in elements]
    return [_candidate_text(v) for v in elements]
