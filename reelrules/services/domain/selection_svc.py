"""
Selection service - facade over the rule workflows.

Owns the field registry and the candidate source so interfaces never touch
either directly. Preview and materialize go through the same workflows, so
a preview is exactly what a save would store.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Protocol

if TYPE_CHECKING:
    from reelrules.components.rules.field_registry_comp import FieldRegistry
    from reelrules.helpers.dto.rules_dto import (
        FieldDescriptor,
        MaterializeResult,
        PreviewResult,
        RuleIssue,
        SortSpec,
    )


class CandidateSource(Protocol):
    """Supplies the candidate pool for an entity kind."""

    def iter_candidates(self, kind: str) -> Iterable[Any]: ...


@dataclass
class SelectionConfig:
    """Configuration for SelectionService."""

    default_preview_limit: int | None = 50
    max_preview_limit: int = 500
    max_rule_length: int = 65536
    max_conditions: int = 200


class SelectionService:
    """
    Service for rule preview, materialization and validation.

    Wraps workflows from workflows/rules/*.
    """

    def __init__(self, registry: FieldRegistry, source: CandidateSource, cfg: SelectionConfig) -> None:
        """
        Initialize selection service.

        Args:
            registry: Validated field registry
            source: Candidate pools per entity kind
            cfg: Selection configuration
        """
        self._registry = registry
        self._source = source
        self.cfg = cfg

    def entity_kinds(self) -> tuple[str, ...]:
        """Registered entity kinds."""
        return self._registry.entity_kinds()

    def describe_fields(self, kind: str) -> tuple[FieldDescriptor, ...]:
        """Field descriptors for the rule builder (raises UnknownEntityKindError)."""
        return self._registry.fields(kind)

    def _clamp_limit(self, limit: int | None) -> int | None:
        if limit is None:
            limit = self.cfg.default_preview_limit
        if limit is None:
            return None
        return max(0, min(limit, self.cfg.max_preview_limit))

    def preview(
        self,
        kind: str,
        raw_rule: str | None,
        limit: int | None = None,
        sort: SortSpec | None = None,
    ) -> PreviewResult:
        """
        Preview what a stored rule selects.

        Args:
            kind: Entity kind
            raw_rule: Stored rule string
            limit: Maximum items (defaults to the configured preview limit,
                capped at the configured maximum)
            sort: Optional ordering

        Returns:
            PreviewResult with total count and the first `limit` items
        """
        from reelrules.workflows.rules import preview_rule_workflow

        self._registry.require_kind(kind)
        return preview_rule_workflow(
            self._registry,
            self._source.iter_candidates(kind),
            kind,
            raw_rule,
            limit=self._clamp_limit(limit),
            sort=sort,
            max_rule_length=self.cfg.max_rule_length,
            max_conditions=self.cfg.max_conditions,
        )

    def materialize(
        self,
        kind: str,
        raw_rule: str | None,
        manual_ids: Iterable[Any] = (),
        sort: SortSpec | None = None,
    ) -> MaterializeResult:
        """Resolve a stored rule to the member IDs to persist."""
        from reelrules.workflows.rules import materialize_rule_workflow

        self._registry.require_kind(kind)
        return materialize_rule_workflow(
            self._registry,
            self._source.iter_candidates(kind),
            kind,
            raw_rule,
            manual_ids=manual_ids,
            sort=sort,
            max_rule_length=self.cfg.max_rule_length,
            max_conditions=self.cfg.max_conditions,
        )

    def validate(self, kind: str, raw_rule: str | None) -> list[RuleIssue]:
        """Problems in a rule being edited (empty list = rule is usable)."""
        from reelrules.workflows.rules import parse_rule, validate_rule

        parsed = parse_rule(raw_rule, max_length=self.cfg.max_rule_length, max_conditions=self.cfg.max_conditions)
        return validate_rule(parsed.rule_set, self._registry, kind)

    def normalize(self, raw_rule: str | None, shape: Literal["object", "array"] = "object") -> str:
        """Parse and re-serialize a rule, dropping blank conditions."""
        from reelrules.workflows.rules import normalize_rule

        return normalize_rule(raw_rule, shape=shape)
