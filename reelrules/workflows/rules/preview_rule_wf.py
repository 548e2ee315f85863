"""Preview workflow: what would this stored rule select right now?"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from reelrules.components.rules.field_registry_comp import FieldRegistry
from reelrules.helpers.dto.rules_dto import PreviewResult, SortSpec
from reelrules.workflows.rules.parse_rule_wf import MAX_CONDITIONS, MAX_RULE_LENGTH, parse_rule
from reelrules.workflows.rules.select_matches_wf import select_ordered

logger = logging.getLogger(__name__)


def preview_rule_workflow(
    registry: FieldRegistry,
    candidates: Iterable[Any],
    kind: str,
    raw_rule: str | None,
    *,
    limit: int | None = None,
    sort: SortSpec | None = None,
    max_rule_length: int = MAX_RULE_LENGTH,
    max_conditions: int = MAX_CONDITIONS,
) -> PreviewResult:
    """
    Select matches for a stored rule without persisting anything.

    Args:
        registry: Field registry
        candidates: Candidate pool for the entity kind
        kind: Entity kind (channel, media, ...)
        raw_rule: Stored rule string in any accepted shape
        limit: Maximum items returned (None = all)
        sort: Ordering; defaults to the rule's own sort (personal sections)
        max_rule_length: Parser length limit
        max_conditions: Parser condition-count limit

    Returns:
        PreviewResult with the total count and the first `limit` items.
        The enabled flag of wrapped rules is ignored here.

    Raises:
        UnknownEntityKindError: If kind is not registered
    """
    parsed = parse_rule(raw_rule, max_length=max_rule_length, max_conditions=max_conditions)
    ordered = select_ordered(parsed.rule_set, candidates, registry, kind, sort or parsed.sort)

    count = len(ordered)
    items = ordered if limit is None else ordered[: max(limit, 0)]
    logger.debug(f"[preview_rule] {kind}: {count} matches ({parsed.shape} rule), returning {len(items)}")
    return PreviewResult(count=count, items=items, limit=limit, truncated=len(items) < count)
