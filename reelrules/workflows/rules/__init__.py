"""Rule workflows: parse, evaluate, select, preview, materialize."""

from .materialize_rule_wf import materialize_rule_workflow
from .parse_rule_wf import (
    MAX_CONDITIONS,
    MAX_RULE_LENGTH,
    normalize_rule,
    parse_rule,
    parse_rule_set,
    rule_from_section_criteria,
    serialize_rule_set,
)
from .preview_rule_wf import preview_rule_workflow
from .rule_eval_wf import CompiledRule, compile_rule, matches, validate_rule
from .select_matches_wf import iter_matches, order_items, select_matches, select_ordered

__all__ = [
    "MAX_CONDITIONS",
    "MAX_RULE_LENGTH",
    "CompiledRule",
    "compile_rule",
    "iter_matches",
    "materialize_rule_workflow",
    "matches",
    "normalize_rule",
    "order_items",
    "parse_rule",
    "parse_rule_set",
    "preview_rule_workflow",
    "rule_from_section_criteria",
    "select_matches",
    "select_ordered",
    "serialize_rule_set",
    "validate_rule",
]
