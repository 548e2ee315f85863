"""
Helpers package.
"""

from .exceptions import RegistryConfigError, UnknownEntityKindError
from .logging_helper import (
    RuleLogFilter,
    clear_log_context,
    configure_logging,
    sanitize_exception_message,
    set_log_context,
)

__all__ = [
    "RegistryConfigError",
    "RuleLogFilter",
    "UnknownEntityKindError",
    "clear_log_context",
    "configure_logging",
    "sanitize_exception_message",
    "set_log_context",
]
