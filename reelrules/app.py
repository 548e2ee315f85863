"""
Application composition root and dependency injection container.

This module defines the Application class, which owns configuration, the
field registry, the candidate source and all services.

Architecture:
- Application owns: config, registry, candidate source, services
- Services are registered via register_service() during start()
- Access services via: application.get_service("name") or application.services["name"]
- Do NOT construct services directly outside of this class

The singleton instance is available as `application` at module level.
"""

from __future__ import annotations

import logging
from typing import Any

from reelrules.components.rules.candidate_source_comp import InMemoryCandidateSource
from reelrules.components.rules.field_registry_comp import FieldRegistry, build_registry
from reelrules.helpers.logging_helper import configure_logging
from reelrules.services.config_svc import ConfigService
from reelrules.services.domain.selection_svc import SelectionConfig, SelectionService

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
#  Application Class - Composition Root & DI Container
# ----------------------------------------------------------------------
class Application:
    """
    Application composition root and dependency injection container.

    Configuration Access:
    - Raw config is PRIVATE (_config) and used only internally in Application
    - To access config outside app.py, use: application.get_service("config").get_config()
    - Prefer the instance attributes (api_host, preview_limit, ...) over raw config
    """

    def __init__(self, config_service: ConfigService | None = None) -> None:
        """
        Initialize application with configuration only.

        The registry and services are built during start().
        """
        self._config_service = config_service or ConfigService()
        self._config = self._config_service.get_config()

        self.api_host: str = str(self._config.get("host", "0.0.0.0"))
        self.api_port: int = int(self._config.get("port", 8372))
        self.log_level: str = str(self._config.get("log_level", "INFO")).upper()
        self.candidates_path: str | None = self._config.get("candidates_path")

        preview_cfg = self._config.get("preview", {})
        rules_cfg = self._config.get("rules", {})
        default_limit = preview_cfg.get("default_limit", 50)
        self.selection_config = SelectionConfig(
            default_preview_limit=int(default_limit) if default_limit is not None else None,
            max_preview_limit=int(preview_cfg.get("max_limit", 500)),
            max_rule_length=int(rules_cfg.get("max_rule_length", 65536)),
            max_conditions=int(rules_cfg.get("max_conditions", 200)),
        )
        self.extra_fields: dict[str, Any] = self._config.get("registry", {}).get("extra_fields") or {}

        self.registry: FieldRegistry | None = None
        self.candidate_source: InMemoryCandidateSource | None = None

        # Services container (DI registry)
        self.services: dict[str, Any] = {}
        self._running = False

    def register_service(self, name: str, service: Any) -> None:
        """
        Register a service in the DI container.

        Args:
            name: Service name for lookup
            service: Service instance
        """
        self.services[name] = service

    def get_service(self, name: str) -> Any:
        """
        Get a service from the DI container.

        Raises:
            KeyError: If service not found
        """
        if name not in self.services:
            raise KeyError(f"Service '{name}' not found. Available services: {list(self.services.keys())}")
        return self.services[name]

    def start(self) -> None:
        """
        Start the application: build the registry and register services.

        Raises:
            RegistryConfigError: If the configured field tables are invalid
            OSError, ValueError: If candidates_path is set but unreadable
        """
        if self._running:
            logger.warning("[Application] Already running, ignoring start() call")
            return

        configure_logging(self.log_level)
        logger.info("[Application] Starting...")

        # Fail fast: a broken field table is a deployment bug, not a per-request condition
        self.registry = build_registry(self.extra_fields)
        logger.info(f"[Application] Field registry ready: {', '.join(self.registry.entity_kinds())}")

        if self.candidates_path:
            self.candidate_source = InMemoryCandidateSource.from_json_file(self.candidates_path)
        else:
            logger.info("[Application] No candidates_path configured; candidate pools start empty")
            self.candidate_source = InMemoryCandidateSource()

        self.register_service("config", self._config_service)
        self.register_service(
            "selection",
            SelectionService(self.registry, self.candidate_source, self.selection_config),
        )

        self._running = True
        logger.info("[Application] Started successfully")

    def stop(self) -> None:
        """Stop the application and drop registered services."""
        if not self._running:
            return
        logger.info("[Application] Shutting down...")
        self.services.clear()
        self._running = False
        logger.info("[Application] Shutdown complete")

    def is_running(self) -> bool:
        """Check if application is running."""
        return self._running


# ----------------------------------------------------------------------
#  Global application instance
# ----------------------------------------------------------------------
application = Application()
