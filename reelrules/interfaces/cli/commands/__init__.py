"""
Commands package.
"""

from .fields_cli import cmd_fields
from .normalize_cli import cmd_normalize
from .preview_cli import cmd_preview
from .validate_cli import cmd_validate

__all__ = [
    "cmd_fields",
    "cmd_normalize",
    "cmd_preview",
    "cmd_validate",
]
