"""
Cli package.
"""

from .cli_ui import COLOR_ERROR, COLOR_INFO, COLOR_SUCCESS, COLOR_WARNING, InfoPanel, print_error, print_success

__all__ = [
    "COLOR_ERROR",
    "COLOR_INFO",
    "COLOR_SUCCESS",
    "COLOR_WARNING",
    "InfoPanel",
    "print_error",
    "print_success",
]
