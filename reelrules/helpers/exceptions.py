"""Custom exceptions used across multiple layers.

Rules:
- Only put exceptions here if they need to be raised in one layer and caught in another.
- Keep exceptions simple and focused.
- No I/O, no config loading, no complex logic.

Semantically odd rule input (malformed JSON, unknown fields, bad values) is
never an exception: it degrades to "no match". These are programmer and
configuration errors only.
"""

from __future__ import annotations


class RegistryConfigError(Exception):
    """Raised at startup when a field registry table is inconsistent."""


class UnknownEntityKindError(LookupError):
    """Raised when a caller asks for an entity kind the registry does not describe."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"Unknown entity kind: {kind!r}")
        self.kind = kind
