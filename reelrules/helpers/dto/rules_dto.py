"""Rule engine DTOs.

Data transfer objects for smart rules: conditions, rule sets, field
descriptors and selection results. These form cross-layer contracts
between interfaces, services, workflows and components.

Rules:
- Import only stdlib and typing (no reelrules.* imports)
- Pure data structures only (no I/O, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

ValueType = Literal["string", "numeric", "boolean", "enum"]
MatchMode = Literal["any", "all"]
SortOrder = Literal["asc", "desc"]
RuleShape = Literal["empty", "object", "array", "criteria", "invalid"]

VALUE_TYPES: tuple[ValueType, ...] = ("string", "numeric", "boolean", "enum")
MATCH_MODES: tuple[MatchMode, ...] = ("any", "all")


@dataclass(frozen=True)
class FieldDescriptor:
    """Registry entry for one field of one entity kind."""

    name: str
    """Field identifier as used in stored conditions (e.g. "sourceName")"""

    value_type: ValueType
    """Type the condition value is coerced to before comparing"""

    legal_operators: tuple[str, ...]
    """Operators the rule builder offers for this field, in display order"""

    label: str = ""
    """Human-readable label for the rule builder"""

    enum_values: tuple[str, ...] | None = None
    """Closed value set for enum fields (None = open enum)"""

    temporal: bool = False
    """Numeric field holding epoch milliseconds; accepts ISO-8601 dates as values"""

    multi_valued: bool = False
    """Candidate value may be a list or a comma-separated string"""

    aliases: tuple[str, ...] = ()
    """Alternate keys tried on the candidate record (e.g. "source_name")"""


@dataclass
class Condition:
    """A single field/operator/value triple in a rule.

    The value is kept as the untyped string it is stored as.
    """

    field: str
    operator: str
    value: str

    @property
    def is_blank(self) -> bool:
        """True for placeholder rows the user has not filled in yet."""
        return not self.value.strip()


@dataclass
class RuleSet:
    """A stored rule: ordered conditions combined with one match mode."""

    conditions: list[Condition] = field(default_factory=list)
    """Conditions in display order (order never affects the result)"""

    match: MatchMode = "any"
    """Either any (one condition suffices) or all (every condition must hold)"""

    def active_conditions(self) -> list[Condition]:
        """Conditions that take part in evaluation (blank rows dropped)."""
        return [c for c in self.conditions if not c.is_blank]

    @property
    def is_empty(self) -> bool:
        """True when no condition would be evaluated; such a rule matches nothing."""
        return not self.active_conditions()


@dataclass(frozen=True)
class SortSpec:
    """Ordering applied to matches after selection."""

    field: str
    order: SortOrder = "asc"


@dataclass
class ParsedRule:
    """Result of parsing a stored rule string."""

    rule_set: RuleSet
    """Normalized rule"""

    enabled: bool = True
    """Caller-level gate carried by wrapped channel rules; never evaluated"""

    shape: RuleShape = "empty"
    """Which persisted shape the string was in"""

    sort: SortSpec | None = None
    """Default ordering carried by the stored rule (personal sections)"""


@dataclass
class RuleIssue:
    """One problem found in a rule while it is being edited."""

    index: int
    field: str
    operator: str
    reason: str


@dataclass
class SelectionResult:
    """Matches of a rule against a candidate pool, in pool order."""

    count: int
    items: list[Any]


@dataclass
class PreviewResult:
    """Result from a preview: total match count and the first `limit` items."""

    count: int
    """Total number of matching entities"""

    items: list[Any]
    """Ordered matches, capped at limit"""

    limit: int | None
    """Cap applied to items (None = unlimited)"""

    truncated: bool
    """True when count exceeds the number of items returned"""


@dataclass
class MaterializeResult:
    """Result from materializing a rule into an entity-ID list."""

    entity_ids: list[Any]
    count: int
    enabled: bool
