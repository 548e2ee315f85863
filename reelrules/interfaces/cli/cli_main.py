#!/usr/bin/env python3
"""
Main CLI entry point with argument parser and command dispatch.
"""

from __future__ import annotations

import argparse

from reelrules.helpers.logging_helper import configure_logging
from reelrules.interfaces.cli.commands.fields_cli import cmd_fields
from reelrules.interfaces.cli.commands.normalize_cli import cmd_normalize
from reelrules.interfaces.cli.commands.preview_cli import cmd_preview
from reelrules.interfaces.cli.commands.validate_cli import cmd_validate

RULE_HELP = 'stored rule JSON, "@path" to read a file, or "-" for stdin'


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    p = argparse.ArgumentParser(
        prog="reelrules",
        description="reelrules - smart rule engine for channel lineups, collections and sections",
        epilog="Examples:\n"
        "  reelrules fields channel                                   # Fields and operators\n"
        "  reelrules preview media @rule.json --candidates pools.json  # What a rule selects\n"
        "  reelrules validate channel '{\"conditions\": [...]}'          # Check a rule\n"
        "  reelrules normalize @rule.json --shape array                # Storage form",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")

    sub = p.add_subparsers(
        dest="cmd",
        title="commands",
        description="Available commands (use 'reelrules <command> --help' for command-specific help)",
    )

    # fields: registry listing
    s = sub.add_parser("fields", help="List entity kinds, or the fields of one kind")
    s.add_argument("kind", nargs="?", help="entity kind (channel, media, virtual_station, section_item)")
    s.set_defaults(func=cmd_fields)

    # preview: evaluate against a candidates file
    s = sub.add_parser("preview", help="Show what a rule selects from candidate pools")
    s.add_argument("kind", help="entity kind")
    s.add_argument("rule", help=RULE_HELP)
    s.add_argument("--candidates", help="JSON file of candidate pools (default: configured candidates_path)")
    s.add_argument("--limit", type=int, default=None, help="maximum items to print")
    s.add_argument("--sort", help='sort field, optionally with direction: "year:desc"')
    s.add_argument("--json", action="store_true", help="print JSON instead of a panel")
    s.set_defaults(func=cmd_preview)

    # validate: rule builder checks
    s = sub.add_parser("validate", help="Report unknown fields, illegal operators and bad values")
    s.add_argument("kind", help="entity kind")
    s.add_argument("rule", help=RULE_HELP)
    s.set_defaults(func=cmd_validate)

    # normalize: storage form
    s = sub.add_parser("normalize", help="Print the rule as it should be stored")
    s.add_argument("rule", help=RULE_HELP)
    s.add_argument("--shape", choices=["object", "array"], default="object", help="stored shape (default: object)")
    s.set_defaults(func=cmd_normalize)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command provided, show help
    if args.cmd is None:
        parser.print_help()
        return 0

    configure_logging(args.log_level.upper())
    result: int = args.func(args)
    return result


if __name__ == "__main__":
    raise SystemExit(main())
