"""
Fields command: list the rule fields and operators of an entity kind.
"""

from __future__ import annotations

import argparse

from reelrules.helpers.exceptions import RegistryConfigError, UnknownEntityKindError
from reelrules.interfaces.cli.cli_ui import print_error, show_table
from reelrules.services.cli_bootstrap_svc import get_selection_service


def cmd_fields(args: argparse.Namespace) -> int:
    """Show field descriptors for one kind, or the kind list when no kind is given."""
    try:
        service = get_selection_service()
    except RegistryConfigError as e:
        print_error(f"Invalid field registry: {e}")
        return 1

    kind = getattr(args, "kind", None)
    if not kind:
        kinds = service.entity_kinds()
        show_table("Entity kinds", ["Kind", "Fields"], ((k, len(service.describe_fields(k))) for k in kinds))
        return 0

    try:
        fields = service.describe_fields(kind)
    except UnknownEntityKindError as e:
        print_error(f"{e} (known: {', '.join(service.entity_kinds())})")
        return 1

    show_table(
        f"Fields for {kind}",
        ["Field", "Label", "Type", "Operators", "Values"],
        (
            (
                d.name,
                d.label,
                f"{d.value_type}{' (date)' if d.temporal else ''}{' (multi)' if d.multi_valued else ''}",
                ", ".join(d.legal_operators),
                ", ".join(d.enum_values) if d.enum_values else "",
            )
            for d in fields
        ),
    )
    return 0
