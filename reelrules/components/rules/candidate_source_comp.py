"""In-memory candidate pools.

The real pools (channels, library files) live in the caller's data store.
This source holds pools per entity kind in memory, optionally loaded from a
JSON file shaped as {"channel": [...], "media": [...]} for development and
the CLI.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class InMemoryCandidateSource:
    """Candidate pools keyed by entity kind. Pools are copied on replace."""

    def __init__(self, pools: Mapping[str, Iterable[Any]] | None = None) -> None:
        self._pools: dict[str, tuple[Any, ...]] = {}
        for kind, items in (pools or {}).items():
            self.replace(kind, items)

    def replace(self, kind: str, items: Iterable[Any]) -> None:
        """Swap in a new snapshot for one kind."""
        self._pools[kind] = tuple(items)

    def iter_candidates(self, kind: str) -> Iterator[Any]:
        """Iterate the current snapshot for a kind (empty if none loaded)."""
        return iter(self._pools.get(kind, ()))

    def size(self, kind: str) -> int:
        return len(self._pools.get(kind, ()))

    @classmethod
    def from_json_file(cls, path: str | Path) -> InMemoryCandidateSource:
        """Load pools from a JSON file.

        Raises:
            OSError: If the file cannot be read
            ValueError: If the file is not a JSON object of lists
        """
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict) or not all(isinstance(v, list) for v in data.values()):
            msg = f"{path}: expected a JSON object mapping entity kinds to lists"
            raise ValueError(msg)
        source = cls(data)
        logger.info(
            "[candidate_source] Loaded %s from %s",
            ", ".join(f"{kind}={len(items)}" for kind, items in data.items()) or "no pools",
            path,
        )
        return source
