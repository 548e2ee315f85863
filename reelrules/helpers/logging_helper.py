"""
Logging helpers for safe error handling and consistent log tagging.

This module provides:
- sanitize_exception_message(): generic client messages, full detail in the log
- RuleLogFilter: derives [Identity] [Role] tags from module names
- set_log_context()/clear_log_context(): per-request context injected into records
- configure_logging(): one-time process logging setup
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(rule_identity_tag)s %(rule_role_tag)s %(context_str)s%(message)s"

# Module suffix -> role tag
_ROLE_SUFFIXES: dict[str, str] = {
    "_svc": "Service",
    "_wf": "Workflow",
    "_comp": "Component",
    "_helper": "Helper",
    "_dto": "DTO",
    "_if": "Interface",
    "_cli": "CLI",
}

_log_context: ContextVar[dict[str, Any] | None] = ContextVar("reelrules_log_context", default=None)


def sanitize_exception_message(e: Exception, safe_message: str = "An error occurred") -> str:
    """
    Sanitize exception message for user display.

    Prevents information leakage through detailed error messages while
    preserving the ability to log full details.

    Args:
        e: The exception to sanitize
        safe_message: Generic message to return to users

    Returns:
        Safe error message for user display
    """
    logger.exception(f"[security] Exception sanitized: {e}")
    return safe_message


def set_log_context(**values: Any) -> None:
    """Attach key/value context (e.g. kind="channel") to subsequent records."""
    current = dict(_log_context.get() or {})
    current.update(values)
    _log_context.set(current)


def clear_log_context() -> None:
    """Drop all context set by set_log_context()."""
    _log_context.set(None)


def _derive_tags(name: str) -> tuple[str, str]:
    module = name.rsplit(".", 1)[-1] if name else ""
    for suffix, role in _ROLE_SUFFIXES.items():
        if module.endswith(suffix):
            stem = module[: -len(suffix)]
            if not stem:
                break
            identity = " ".join(part.capitalize() for part in stem.split("_") if part)
            return f"[{identity}]", f"[{role}]"
    return name, ""


class RuleLogFilter(logging.Filter):
    """Adds rule_identity_tag, rule_role_tag and context_str to every record.

    Never suppresses a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            identity, role = _derive_tags(str(record.name or ""))
        except Exception:
            identity, role = str(getattr(record, "name", "")), ""
        record.rule_identity_tag = identity
        record.rule_role_tag = role

        context = _log_context.get()
        if context:
            pairs = " ".join(f"{k}={v}" for k, v in context.items())
            record.context_str = f"[{pairs}] "
        else:
            record.context_str = ""
        return True


def configure_logging(level: str | int = "INFO") -> None:
    """Install the reelrules format and filter on the root logger (idempotent)."""
    root = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)

    for handler in root.handlers:
        if any(isinstance(f, RuleLogFilter) for f in handler.filters):
            return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RuleLogFilter())
    root.addHandler(handler)
