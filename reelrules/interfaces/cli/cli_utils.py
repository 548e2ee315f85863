"""
Shared helpers for CLI commands.
"""

from __future__ import annotations

import sys

from reelrules.helpers.dto.rules_dto import SortSpec

__all__ = [
    "parse_sort_argument",
    "read_rule_argument",
]


def read_rule_argument(value: str) -> str:
    """Resolve a RULE argument: "-" reads stdin, "@path" reads a file, anything else is the rule itself.

    Raises:
        OSError: If the file cannot be read
    """
    if value == "-":
        return sys.stdin.read()
    if value.startswith("@"):
        with open(value[1:], encoding="utf-8") as f:
            return f.read()
    return value


def parse_sort_argument(value: str | None) -> SortSpec | None:
    """Parse "field" or "field:desc" into a SortSpec."""
    if not value:
        return None
    field_name, _, order = value.partition(":")
    return SortSpec(field=field_name, order="desc" if order.lower() == "desc" else "asc")
