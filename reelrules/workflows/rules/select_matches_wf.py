"""Selection: filter a candidate pool with a rule, then order the matches.

Selection preserves pool order. Ordering is a separate, optional step so
that preview and materialization share one code path for both.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from reelrules.components.rules.coercion_comp import candidate_values
from reelrules.components.rules.entity_fields_comp import resolve_field_value
from reelrules.components.rules.field_registry_comp import FieldRegistry
from reelrules.helpers.dto.rules_dto import RuleSet, SelectionResult, SortSpec
from reelrules.workflows.rules.rule_eval_wf import compile_rule

logger = logging.getLogger(__name__)


def iter_matches(rule_set: RuleSet, pool: Iterable[Any], registry: FieldRegistry, kind: str) -> Iterator[Any]:
    """Lazily yield matching candidates in pool order."""
    compiled = compile_rule(rule_set, registry, kind)
    if compiled.never_matches:
        return
    for candidate in pool:
        if compiled(candidate):
            yield candidate


def select_matches(rule_set: RuleSet, pool: Iterable[Any], registry: FieldRegistry, kind: str) -> SelectionResult:
    """Select every matching candidate, in pool order, in one pass.

    Preview and materialization both select through this function.
    """
    items = list(iter_matches(rule_set, pool, registry, kind))
    return SelectionResult(count=len(items), items=items)


def order_items(items: Iterable[Any], sort: SortSpec | None, registry: FieldRegistry, kind: str) -> list[Any]:
    """Stable sort by one registry field; entities missing the field go last.

    An unknown sort field leaves the order unchanged.
    """
    result = list(items)
    if sort is None:
        return result
    descriptor = registry.describe(kind, sort.field)
    if descriptor is None:
        logger.debug(f"[select_matches] Unknown sort field {sort.field!r} for {kind}; keeping pool order")
        return result

    keyed: list[tuple[Any, Any]] = []
    missing: list[Any] = []
    for item in result:
        raw = resolve_field_value(item, descriptor)
        values = candidate_values(raw, descriptor) if raw is not None else []
        if values:
            keyed.append((values[0], item))
        else:
            missing.append(item)

    keyed.sort(key=lambda pair: pair[0], reverse=sort.order == "desc")
    return [item for _, item in keyed] + missing


def select_ordered(
    rule_set: RuleSet,
    pool: Iterable[Any],
    registry: FieldRegistry,
    kind: str,
    sort: SortSpec | None = None,
) -> list[Any]:
    """Matches in the order preview and materialization both present them."""
    return order_items(select_matches(rule_set, pool, registry, kind).items, sort, registry, kind)
