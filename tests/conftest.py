"""
Pytest fixtures and configuration for the test suite.

Candidate pools are plain dicts shaped like the rows the caller's data
store hands to the rule engine.
"""

import sys
from pathlib import Path
from typing import Any

import pytest

# Add project root to path so tests can import reelrules package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from reelrules.components.rules.candidate_source_comp import InMemoryCandidateSource  # noqa: E402
from reelrules.components.rules.field_registry_comp import FieldRegistry, build_registry  # noqa: E402
from reelrules.services.domain.selection_svc import SelectionConfig, SelectionService  # noqa: E402


@pytest.fixture
def registry() -> FieldRegistry:
    """Default field registry (all four entity kinds)."""
    return build_registry()


@pytest.fixture
def channels() -> list[dict[str, Any]]:
    """Live channels from two sources."""
    return [
        {
            "id": "c1",
            "group": "Sports",
            "name": "ESPN HD",
            "number": 5,
            "sourceName": "Provider A",
            "sourceType": "m3u",
            "hd": True,
            "favorite": False,
        },
        {
            "id": "c2",
            "group": "News",
            "name": "CNN",
            "number": 12,
            "sourceName": "Provider A",
            "sourceType": "xtream",
            "hd": False,
            "favorite": True,
        },
        {
            "id": "c3",
            "group": "sports",
            "name": "Sky Sports 1",
            "number": 30,
            "sourceName": "Provider B",
            "sourceType": "M3U",
            "hd": True,
            "favorite": False,
        },
        {
            "id": "c4",
            "group": "Movies",
            "name": "HBO",
            "number": None,
            "source_name": "Provider B",
            "sourceType": "xtream",
            "hd": False,
        },
    ]


@pytest.fixture
def media() -> list[dict[str, Any]]:
    """Library items with the value shapes seen in practice (lists, comma strings, ISO dates)."""
    return [
        {
            "id": "m1",
            "title": "Die Hard",
            "genre": "Action, Thriller",
            "year": 1988,
            "rating": 8.2,
            "duration": 7920000,
            "type": "movie",
            "studio": "Fox",
            "resolution": "1080p",
            "addedAt": "2024-01-05T10:00:00Z",
        },
        {
            "id": "m2",
            "title": "Heat",
            "genre": ["Crime", "Drama"],
            "year": 1995,
            "rating": 8.3,
            "duration": 10200000,
            "type": "movie",
            "studio": "Warner",
            "resolution": "4K",
            "addedAt": 1717200000000,
        },
        {
            "id": "m3",
            "title": "The Wire",
            "genre": "Crime,Drama",
            "year": 2002,
            "rating": 9.3,
            "type": "show",
            "studio": "HBO",
            "resolution": "1080p",
        },
        {
            "id": "m4",
            "title": "Mad Max: Fury Road",
            "genre": "Action",
            "year": 2015,
            "rating": 8.1,
            "duration": 7200000,
            "type": "movie",
            "studio": "Warner",
            "resolution": "4K",
            "added_at": "2023-06-01",
        },
    ]


@pytest.fixture
def section_items() -> list[dict[str, Any]]:
    """Items as a personal section sees them."""
    return [
        {"id": "s1", "type": "movie", "title": "Alien", "genre": "Horror,Sci-Fi", "year": 1979, "rating": 8.5},
        {"id": "s2", "type": "show", "title": "Dark", "genre": ["Drama", "Sci-Fi"], "year": 2017, "rating": 8.7},
        {"id": "s3", "type": "episode", "title": "Pilot", "genre": "Drama", "year": 2017, "rating": 7.0},
        {"id": "s4", "type": "movie", "title": "Arrival", "genre": "Drama,Sci-Fi", "year": 2016, "rating": 7.9},
        {"id": "s5", "type": "movie", "title": "Clue", "genre": "Comedy", "year": 1985},
    ]


@pytest.fixture
def candidate_source(channels, media, section_items) -> InMemoryCandidateSource:
    return InMemoryCandidateSource(
        {"channel": channels, "media": media, "virtual_station": media, "section_item": section_items}
    )


@pytest.fixture
def selection_service(registry, candidate_source) -> SelectionService:
    return SelectionService(registry, candidate_source, SelectionConfig())
