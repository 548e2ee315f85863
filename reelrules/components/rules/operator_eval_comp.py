"""Operator evaluation for smart rule conditions.

One comparison family per value type:
- string:  eq/is, neq/is_not/ne, contains, not_contains, starts_with, ends_with, in, ni, like
- numeric: eq/is, neq/is_not/ne, gt, lt, gte, lte
- boolean: eq/is
- enum:    eq/is, neq/is_not/ne, in, ni

Server-stored rules spell operators in upper case (EQ, NE, LIKE, IN, NI, GT,
LT). ni is the negation of in. like takes a pattern with optional %
wildcards at either end: %x% and x mean contains, %x means ends_with, x%
means starts_with. A field allows like where it allows contains, in where
it allows eq, and ni where it allows in or neq.

All string and enum comparisons are case-insensitive. The condition value
is coerced once when the operator is compiled; a coercion failure compiles
to a predicate that never matches. Candidates with a missing or uncoercible
value never match numeric or boolean-typed comparisons.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from reelrules.components.rules.coercion_comp import (
    CoercionError,
    candidate_values,
    coerce_condition_value,
)
from reelrules.helpers.dto.rules_dto import FieldDescriptor, ValueType

logger = logging.getLogger(__name__)

CandidatePredicate = Callable[[Any], bool]

OPERATOR_ALIASES: dict[str, str] = {
    "is": "eq",
    "is_not": "neq",
    "ne": "neq",
}

OPERATORS_BY_TYPE: dict[ValueType, frozenset[str]] = {
    "string": frozenset(
        {
            "eq",
            "is",
            "neq",
            "is_not",
            "ne",
            "contains",
            "not_contains",
            "starts_with",
            "ends_with",
            "in",
            "ni",
            "like",
        }
    ),
    "numeric": frozenset({"eq", "is", "neq", "is_not", "ne", "gt", "lt", "gte", "lte"}),
    "boolean": frozenset({"eq", "is"}),
    "enum": frozenset({"eq", "is", "neq", "is_not", "ne", "in", "ni"}),
}

# Operators that hold when NO candidate element satisfies the positive form
_NEGATED: dict[str, str] = {
    "neq": "eq",
    "not_contains": "contains",
    "ni": "in",
}

# Canonical operator -> listed operators that also permit it on a field
_PERMITTED_BY: dict[str, tuple[str, ...]] = {
    "like": ("contains",),
    "in": ("eq",),
    "ni": ("in", "neq"),
}


def canonical_operator(operator: str) -> str:
    """Map aliases (is, is_not, NE) onto the canonical lower-case operator name."""
    op = operator.strip().lower()
    return OPERATOR_ALIASES.get(op, op)


def is_operator_supported(operator: str, value_type: ValueType) -> bool:
    """True if the operator is defined for the value type at all."""
    return operator.strip().lower() in OPERATORS_BY_TYPE.get(value_type, frozenset())


def is_operator_allowed(operator: str, legal_operators: Iterable[str]) -> bool:
    """True if a field listing legal_operators accepts operator in any spelling."""
    op = canonical_operator(operator)
    listed = {canonical_operator(legal) for legal in legal_operators}
    return op in listed or any(base in listed for base in _PERMITTED_BY.get(op, ()))


def like_pattern(pattern: str) -> tuple[str, str]:
    """Split a like pattern into the operator and value it stands for."""
    if len(pattern) > 1 and pattern.startswith("%") and pattern.endswith("%"):
        return "contains", pattern[1:-1]
    if pattern.startswith("%"):
        return "ends_with", pattern[1:]
    if pattern.endswith("%"):
        return "starts_with", pattern[:-1]
    return "contains", pattern


def never_matches(_candidate: Any) -> bool:
    return False


def _text_test(op: str, expected: Any) -> Callable[[str], bool]:
    if op == "eq":
        return lambda v: v == expected
    if op == "contains":
        return lambda v: expected in v
    if op == "starts_with":
        return lambda v: v.startswith(expected)
    if op == "ends_with":
        return lambda v: v.endswith(expected)
    if op == "in":
        return lambda v: v in expected
    raise ValueError(op)


def _numeric_test(op: str, expected: float) -> Callable[[float], bool]:
    if op == "eq":
        return lambda v: v == expected
    if op == "neq":
        return lambda v: v != expected
    if op == "gt":
        return lambda v: v > expected
    if op == "lt":
        return lambda v: v < expected
    if op == "gte":
        return lambda v: v >= expected
    if op == "lte":
        return lambda v: v <= expected
    raise ValueError(op)


def compile_operator(operator: str, descriptor: FieldDescriptor, condition_value: str) -> CandidatePredicate:
    """Build a predicate over raw candidate field values.

    Args:
        operator: Operator identifier as stored (aliases allowed)
        descriptor: Field being compared (drives coercion)
        condition_value: Untyped stored condition value

    Returns:
        Callable taking the candidate's raw field value and returning bool.
        Returns never_matches if the operator is not defined for the type
        or the condition value cannot be coerced.
    """
    if not is_operator_supported(operator, descriptor.value_type):
        logger.debug(f"[operator_eval] {operator!r} not defined for {descriptor.value_type} field {descriptor.name}")
        return never_matches

    op = canonical_operator(operator)
    if op == "like":
        op, condition_value = like_pattern(condition_value)
    try:
        expected = coerce_condition_value(condition_value, descriptor, op)
    except CoercionError as e:
        logger.debug(f"[operator_eval] {descriptor.name} {op}: {e}")
        return never_matches

    if descriptor.value_type == "numeric":
        num_test = _numeric_test(op, expected)

        def numeric_predicate(raw: Any) -> bool:
            return any(num_test(v) for v in candidate_values(raw, descriptor))

        return numeric_predicate

    if descriptor.value_type == "boolean":

        def boolean_predicate(raw: Any) -> bool:
            return any(v == expected for v in candidate_values(raw, descriptor))

        return boolean_predicate

    # string and enum
    negated = op in _NEGATED
    text_test = _text_test(_NEGATED.get(op, op), expected)

    if negated:

        def negated_text_predicate(raw: Any) -> bool:
            return not any(text_test(v) for v in candidate_values(raw, descriptor))

        return negated_text_predicate

    def text_predicate(raw: Any) -> bool:
        return any(text_test(v) for v in candidate_values(raw, descriptor))

    return text_predicate


def evaluate_operator(
    operator: str,
    field: FieldDescriptor | ValueType,
    candidate_value: Any,
    condition_value: str,
) -> bool:
    """Evaluate one comparison.

    Accepts either a full FieldDescriptor or a bare value type. Never raises
    for odd input: unsupported operators and coercion failures return False.
    """
    descriptor = field if isinstance(field, FieldDescriptor) else FieldDescriptor("value", field, ())
    return compile_operator(operator, descriptor, condition_value)(candidate_value)
