"""Materialize workflow: the member IDs a saved rule resolves to.

Uses the same selection and ordering as preview, so a preview is an exact
preview of what gets saved.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from reelrules.components.rules.entity_fields_comp import entity_id
from reelrules.components.rules.field_registry_comp import FieldRegistry
from reelrules.helpers.dto.rules_dto import MaterializeResult, SortSpec
from reelrules.workflows.rules.parse_rule_wf import MAX_CONDITIONS, MAX_RULE_LENGTH, parse_rule
from reelrules.workflows.rules.select_matches_wf import select_ordered

logger = logging.getLogger(__name__)


def materialize_rule_workflow(
    registry: FieldRegistry,
    candidates: Iterable[Any],
    kind: str,
    raw_rule: str | None,
    *,
    manual_ids: Iterable[Any] = (),
    sort: SortSpec | None = None,
    id_key: str = "id",
    max_rule_length: int = MAX_RULE_LENGTH,
    max_conditions: int = MAX_CONDITIONS,
) -> MaterializeResult:
    """
    Resolve a stored rule to an ordered, de-duplicated list of entity IDs.

    Manual IDs (items added by hand to a smart collection) are appended
    after the rule's matches. A wrapped rule with "enabled": false
    materializes nothing.

    Raises:
        UnknownEntityKindError: If kind is not registered
    """
    parsed = parse_rule(raw_rule, max_length=max_rule_length, max_conditions=max_conditions)
    if not parsed.enabled:
        registry.require_kind(kind)
        logger.info(f"[materialize_rule] {kind}: rule disabled, nothing to materialize")
        return MaterializeResult(entity_ids=[], count=0, enabled=False)

    ordered = select_ordered(parsed.rule_set, candidates, registry, kind, sort or parsed.sort)

    ids: list[Any] = []
    seen: set[Any] = set()
    skipped = 0
    for candidate_id in [entity_id(e, id_key) for e in ordered] + list(manual_ids):
        if candidate_id is None:
            skipped += 1
            continue
        if candidate_id in seen:
            continue
        seen.add(candidate_id)
        ids.append(candidate_id)

    if skipped:
        logger.warning(f"[materialize_rule] {kind}: {skipped} matched entities have no {id_key!r}; skipped")
    logger.info(f"[materialize_rule] {kind}: {len(ids)} entities ({len(ordered)} from rule)")
    return MaterializeResult(entity_ids=ids, count=len(ids), enabled=True)
