"""
Domain-specific DTOs (Data Transfer Objects) used across multiple layers.

Domain-specific DTOs live in helpers/dto/<domain>_dto.py and form cross-layer contracts
within that domain (interfaces → services → workflows → components).

Rules for DTO modules:
- Import only stdlib and typing (no reelrules.* imports)
- Contain ONLY dataclass/type definitions and simple type aliases
- No I/O, no business logic
"""

from __future__ import annotations

from reelrules.helpers.dto.rules_dto import (
    MATCH_MODES,
    VALUE_TYPES,
    Condition,
    FieldDescriptor,
    MatchMode,
    MaterializeResult,
    ParsedRule,
    PreviewResult,
    RuleIssue,
    RuleSet,
    RuleShape,
    SelectionResult,
    SortOrder,
    SortSpec,
    ValueType,
)

__all__ = [
    "MATCH_MODES",
    "VALUE_TYPES",
    "Condition",
    "FieldDescriptor",
    "MatchMode",
    "MaterializeResult",
    "ParsedRule",
    "PreviewResult",
    "RuleIssue",
    "RuleSet",
    "RuleShape",
    "SelectionResult",
    "SortOrder",
    "SortSpec",
    "ValueType",
]
