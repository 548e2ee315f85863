"""
Normalize command: print a rule the way it should be stored.
"""

from __future__ import annotations

import argparse

from reelrules.interfaces.cli.cli_ui import print_error, print_raw
from reelrules.interfaces.cli.cli_utils import read_rule_argument
from reelrules.workflows.rules.parse_rule_wf import normalize_rule


def cmd_normalize(args: argparse.Namespace) -> int:
    """Parse the rule and re-serialize it; blank rows are dropped."""
    try:
        rule = read_rule_argument(args.rule)
    except OSError as e:
        print_error(f"Cannot read rule: {e}")
        return 1

    print_raw(normalize_rule(rule, shape=getattr(args, "shape", "object")))
    return 0
