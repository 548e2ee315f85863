"""Rule evaluation: does one entity satisfy a RuleSet?

compile_rule resolves every condition against the field registry and
coerces its value once, so evaluating a pool costs one registry lookup per
condition instead of one per condition per candidate.

Degradation rules (never raised):
- empty rule (no non-blank conditions) -> matches nothing, in both modes
- unknown field, illegal operator, uncoercible value -> that condition is false
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from reelrules.components.rules.coercion_comp import CoercionError, coerce_condition_value
from reelrules.components.rules.entity_fields_comp import resolve_field_value
from reelrules.components.rules.field_registry_comp import FieldRegistry
from reelrules.components.rules.operator_eval_comp import (
    canonical_operator,
    compile_operator,
    is_operator_allowed,
    never_matches,
)
from reelrules.helpers.dto.rules_dto import Condition, MatchMode, RuleIssue, RuleSet

logger = logging.getLogger(__name__)

EntityPredicate = Callable[[Any], bool]


def compile_condition(condition: Condition, registry: FieldRegistry, kind: str) -> EntityPredicate:
    """Build an entity predicate for one condition (constant false when unusable)."""
    descriptor = registry.describe(kind, condition.field)
    if descriptor is None:
        logger.debug(f"[rule_eval] Unknown field {condition.field!r} for {kind}")
        return never_matches
    if not is_operator_allowed(condition.operator, descriptor.legal_operators):
        logger.debug(f"[rule_eval] Operator {condition.operator!r} not allowed on {kind}.{descriptor.name}")
        return never_matches

    predicate = compile_operator(condition.operator, descriptor, condition.value)
    if predicate is never_matches:
        return never_matches

    def entity_predicate(entity: Any) -> bool:
        return predicate(resolve_field_value(entity, descriptor))

    return entity_predicate


class CompiledRule:
    """A RuleSet bound to one entity kind, ready to test candidates.

    Instances hold no mutable state and can be shared across threads.
    """

    def __init__(self, kind: str, match: MatchMode, predicates: list[EntityPredicate]) -> None:
        self.kind = kind
        self.match = match
        self._predicates = tuple(predicates)

    @property
    def is_empty(self) -> bool:
        return not self._predicates

    @property
    def never_matches(self) -> bool:
        """True when no entity can satisfy the rule, whatever the pool holds."""
        if self.is_empty:
            return True
        constant_false = [p is never_matches for p in self._predicates]
        return all(constant_false) if self.match == "any" else any(constant_false)

    def __call__(self, entity: Any) -> bool:
        if not self._predicates:
            return False
        if self.match == "all":
            return all(p(entity) for p in self._predicates)
        return any(p(entity) for p in self._predicates)

    def __repr__(self) -> str:
        return f"CompiledRule(kind={self.kind!r}, match={self.match!r}, conditions={len(self._predicates)})"


def compile_rule(rule_set: RuleSet, registry: FieldRegistry, kind: str) -> CompiledRule:
    """Compile a RuleSet for an entity kind.

    Raises:
        UnknownEntityKindError: If kind is not registered (caller bug)
    """
    registry.require_kind(kind)
    predicates = [compile_condition(c, registry, kind) for c in rule_set.active_conditions()]
    return CompiledRule(kind, rule_set.match, predicates)


def matches(rule_set: RuleSet, entity: Any, registry: FieldRegistry, kind: str) -> bool:
    """True if the entity satisfies the rule."""
    return compile_rule(rule_set, registry, kind)(entity)


def validate_rule(rule_set: RuleSet, registry: FieldRegistry, kind: str) -> list[RuleIssue]:
    """List the problems the rule builder should show. Never raises for odd rules.

    Issue index is the condition's position in rule_set.conditions; index -1
    refers to the rule as a whole.

    Raises:
        UnknownEntityKindError: If kind is not registered (caller bug)
    """
    registry.require_kind(kind)
    issues: list[RuleIssue] = []

    def issue(reason: str) -> RuleIssue:
        return RuleIssue(index=index, field=condition.field, operator=condition.operator, reason=reason)

    for index, condition in enumerate(rule_set.conditions):
        if condition.is_blank:
            issues.append(issue("value is blank; condition will be dropped"))
            continue
        descriptor = registry.describe(kind, condition.field)
        if descriptor is None:
            issues.append(issue(f"unknown field for {kind}"))
            continue
        if not is_operator_allowed(condition.operator, descriptor.legal_operators):
            allowed = ", ".join(descriptor.legal_operators)
            issues.append(issue(f"operator not allowed for {descriptor.name} (allowed: {allowed})"))
            continue
        try:
            coerce_condition_value(condition.value, descriptor, canonical_operator(condition.operator))
        except CoercionError as e:
            issues.append(issue(str(e)))

    if rule_set.is_empty:
        issues.append(RuleIssue(index=-1, field="", operator="", reason="rule has no conditions; it matches nothing"))
    return issues
