"""
Validate command: report problems in a rule before it is saved.
"""

from __future__ import annotations

import argparse

from reelrules.helpers.exceptions import RegistryConfigError, UnknownEntityKindError
from reelrules.interfaces.cli.cli_ui import print_error, print_success, show_table
from reelrules.interfaces.cli.cli_utils import read_rule_argument
from reelrules.services.cli_bootstrap_svc import get_selection_service


def cmd_validate(args: argparse.Namespace) -> int:
    """Exit 0 when the rule has no issues, 1 otherwise."""
    try:
        rule = read_rule_argument(args.rule)
        service = get_selection_service()
        issues = service.validate(args.kind, rule)
    except (OSError, RegistryConfigError, UnknownEntityKindError) as e:
        print_error(str(e))
        return 1

    if not issues:
        print_success(f"Rule is valid for {args.kind}")
        return 0

    show_table(
        f"Rule issues ({args.kind})",
        ["#", "Field", "Operator", "Problem"],
        ((i.index if i.index >= 0 else "-", i.field, i.operator, i.reason) for i in issues),
    )
    return 1
