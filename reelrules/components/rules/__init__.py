"""Rule engine components: field registry, coercion, operators, candidate pools."""

from .candidate_source_comp import InMemoryCandidateSource
from .coercion_comp import CoercionError, candidate_values, coerce_condition_value
from .entity_fields_comp import entity_id, resolve_field_value
from .field_registry_comp import (
    CHANNEL,
    DEFAULT_TABLES,
    MEDIA,
    SECTION_ITEM,
    VIRTUAL_STATION,
    FieldRegistry,
    build_registry,
    make_field,
    validate_field_table,
)
from .operator_eval_comp import (
    OPERATOR_ALIASES,
    OPERATORS_BY_TYPE,
    canonical_operator,
    compile_operator,
    evaluate_operator,
    is_operator_allowed,
    like_pattern,
)

__all__ = [
    "CHANNEL",
    "DEFAULT_TABLES",
    "MEDIA",
    "OPERATORS_BY_TYPE",
    "OPERATOR_ALIASES",
    "SECTION_ITEM",
    "VIRTUAL_STATION",
    "CoercionError",
    "FieldRegistry",
    "InMemoryCandidateSource",
    "build_registry",
    "candidate_values",
    "canonical_operator",
    "coerce_condition_value",
    "compile_operator",
    "entity_id",
    "evaluate_operator",
    "is_operator_allowed",
    "like_pattern",
    "make_field",
    "resolve_field_value",
    "validate_field_table",
]
