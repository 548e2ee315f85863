"""CLI Bootstrap Service - service container for CLI commands.

Builds services for CLI use without the running API application.

Architecture:
- CLI commands should NOT use app.application.services (that's the running server)
- CLI commands should NOT build the registry or candidate pools themselves
- CLI commands SHOULD use these bootstrap functions to get service instances
"""

from __future__ import annotations

import logging

from reelrules.components.rules.candidate_source_comp import InMemoryCandidateSource
from reelrules.components.rules.field_registry_comp import build_registry
from reelrules.services.config_svc import ConfigService
from reelrules.services.domain.selection_svc import SelectionConfig, SelectionService

logger = logging.getLogger(__name__)


def get_config_service() -> ConfigService:
    """Get ConfigService instance for CLI operations."""
    return ConfigService()


def get_selection_service(candidates_path: str | None = None) -> SelectionService:
    """Get SelectionService instance for CLI operations.

    Args:
        candidates_path: JSON candidate pools; defaults to the configured
            candidates_path. Without either, pools are empty.

    Raises:
        RegistryConfigError: If configured extra fields are invalid
        OSError, ValueError: If the candidates file cannot be loaded
    """
    config_service = get_config_service()
    registry = build_registry(config_service.get("registry.extra_fields") or {})

    path = candidates_path or config_service.get("candidates_path")
    source = InMemoryCandidateSource.from_json_file(path) if path else InMemoryCandidateSource()

    cfg = SelectionConfig(
        default_preview_limit=None,
        max_preview_limit=int(config_service.get("preview.max_limit", 500)),
        max_rule_length=int(config_service.get("rules.max_rule_length", 65536)),
        max_conditions=int(config_service.get("rules.max_conditions", 200)),
    )
    return SelectionService(registry, source, cfg)
