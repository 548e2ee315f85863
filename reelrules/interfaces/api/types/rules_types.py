"""
Rule API types - Pydantic models for the rule engine endpoints.

These models are thin adapters around DTOs from helpers/dto/rules_dto.py.

Architecture:
- Response models use .from_dto() to convert DTOs to Pydantic
- Request models use .to_dto() / .raw_rule() to hand plain values to services
- Services continue using DTOs (no Pydantic imports in services layer)
"""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, Field

from reelrules.helpers.dto.rules_dto import FieldDescriptor, MaterializeResult, PreviewResult, RuleIssue, SortSpec

# ──────────────────────────────────────────────────────────────────────
# Request Models
# ──────────────────────────────────────────────────────────────────────


class RuleRequest(BaseModel):
    """Base for requests carrying a stored rule."""

    rule: str | list[Any] | dict[str, Any] | None = Field(
        None, description="Stored rule string, or the decoded JSON object/array"
    )

    def raw_rule(self) -> str | None:
        """The rule as the stored string the engine parses."""
        if self.rule is None or isinstance(self.rule, str):
            return self.rule
        return json.dumps(self.rule)


class SortRequest(BaseModel):
    """Ordering applied to matches."""

    field: str = Field(..., description="Registry field to sort by")
    order: Literal["asc", "desc"] = Field("asc", description="Sort direction")

    def to_dto(self) -> SortSpec:
        return SortSpec(field=self.field, order=self.order)


class PreviewRequest(RuleRequest):
    limit: int | None = Field(None, ge=0, description="Maximum items returned (server default if omitted)")
    sort: SortRequest | None = Field(None, description="Optional ordering")


class MaterializeRequest(RuleRequest):
    manual_ids: list[str | int] = Field(default_factory=list, description="IDs added by hand, appended after matches")
    sort: SortRequest | None = Field(None, description="Optional ordering")


class ValidateRequest(RuleRequest):
    pass


class NormalizeRequest(RuleRequest):
    shape: Literal["object", "array"] = Field("object", description="Stored shape to emit")


# ──────────────────────────────────────────────────────────────────────
# Response Models
# ──────────────────────────────────────────────────────────────────────


class FieldDescriptorResponse(BaseModel):
    """Pydantic model for FieldDescriptor DTO."""

    name: str
    label: str
    value_type: Literal["string", "numeric", "boolean", "enum"]
    operators: list[str]
    enum_values: list[str] | None = None
    temporal: bool = False
    multi_valued: bool = False

    @classmethod
    def from_dto(cls, dto: FieldDescriptor) -> FieldDescriptorResponse:
        return cls(
            name=dto.name,
            label=dto.label or dto.name,
            value_type=dto.value_type,
            operators=list(dto.legal_operators),
            enum_values=list(dto.enum_values) if dto.enum_values is not None else None,
            temporal=dto.temporal,
            multi_valued=dto.multi_valued,
        )


class FieldListResponse(BaseModel):
    kind: str
    fields: list[FieldDescriptorResponse]

    @classmethod
    def from_dto(cls, kind: str, fields: tuple[FieldDescriptor, ...]) -> FieldListResponse:
        return cls(kind=kind, fields=[FieldDescriptorResponse.from_dto(f) for f in fields])


class EntityKindsResponse(BaseModel):
    kinds: list[str]


class PreviewResponse(BaseModel):
    """Pydantic model for PreviewResult DTO."""

    count: int = Field(..., description="Total number of matching entities")
    items: list[Any] = Field(default_factory=list, description="First `limit` matching entities")
    limit: int | None = Field(None, description="Limit applied to items")
    truncated: bool = Field(False, description="True when count exceeds the items returned")

    @classmethod
    def from_dto(cls, dto: PreviewResult) -> PreviewResponse:
        return cls(count=dto.count, items=dto.items, limit=dto.limit, truncated=dto.truncated)


class MaterializeResponse(BaseModel):
    """Pydantic model for MaterializeResult DTO."""

    entity_ids: list[Any]
    count: int
    enabled: bool

    @classmethod
    def from_dto(cls, dto: MaterializeResult) -> MaterializeResponse:
        return cls(entity_ids=dto.entity_ids, count=dto.count, enabled=dto.enabled)


class RuleIssueResponse(BaseModel):
    index: int = Field(..., description="Condition position; -1 for the rule as a whole")
    field: str
    operator: str
    reason: str

    @classmethod
    def from_dto(cls, dto: RuleIssue) -> RuleIssueResponse:
        return cls(index=dto.index, field=dto.field, operator=dto.operator, reason=dto.reason)


class ValidateResponse(BaseModel):
    valid: bool
    issues: list[RuleIssueResponse] = Field(default_factory=list)

    @classmethod
    def from_dto(cls, issues: list[RuleIssue]) -> ValidateResponse:
        return cls(valid=not issues, issues=[RuleIssueResponse.from_dto(i) for i in issues])


class NormalizeResponse(BaseModel):
    rule: str = Field(..., description="Normalized stored rule string")
