"""
Preview command: show what a rule selects from a candidates file.

Architecture:
- Uses CLI bootstrap service to get a SelectionService instance
- Does NOT depend on running Application (separate process)
"""

from __future__ import annotations

import argparse
import json

from reelrules.helpers.exceptions import RegistryConfigError, UnknownEntityKindError
from reelrules.interfaces.cli.cli_ui import COLOR_WARNING, InfoPanel, print_error, print_raw
from reelrules.interfaces.cli.cli_utils import parse_sort_argument, read_rule_argument
from reelrules.services.cli_bootstrap_svc import get_selection_service


def cmd_preview(args: argparse.Namespace) -> int:
    """
    Evaluate a rule against candidate pools and print the count and matches.
    """
    try:
        rule = read_rule_argument(args.rule)
        service = get_selection_service(getattr(args, "candidates", None))
    except (OSError, ValueError, RegistryConfigError) as e:
        print_error(f"Cannot load inputs: {e}")
        return 1

    try:
        result = service.preview(
            args.kind,
            rule,
            limit=getattr(args, "limit", None),
            sort=parse_sort_argument(getattr(args, "sort", None)),
        )
    except UnknownEntityKindError as e:
        print_error(str(e))
        return 1

    if getattr(args, "json", False):
        print_raw(json.dumps({"count": result.count, "items": result.items}, default=str, indent=2))
        return 0

    shown = f" (showing {len(result.items)})" if result.truncated else ""
    content = f"[bold]Kind:[/bold] {args.kind}\n[bold]Matches:[/bold] {result.count}{shown}"
    InfoPanel.show("Rule Preview", content, COLOR_WARNING if result.count == 0 else "green")
    for item in result.items:
        print_raw(json.dumps(item, default=str))
    return 0
