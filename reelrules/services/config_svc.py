#!/usr/bin/env python3
# ======================================================================
#  Config Service - Configuration loading and caching
#  - Loads config from defaults, YAML files, env vars
#  - Caches composed config
#  - Provides reload() for runtime changes
# ======================================================================

from __future__ import annotations

import logging
import os
from typing import Any

import yaml

from reelrules.workflows.rules.parse_rule_wf import MAX_CONDITIONS, MAX_RULE_LENGTH

# ======================================================================
# Internal Constants (Not User-Configurable)
# ======================================================================
INTERNAL_HOST = "0.0.0.0"
INTERNAL_PORT = 8372
INTERNAL_ENV_PREFIX = "REELRULES_"

# Preview caps (media collections show 50 items)
DEFAULT_PREVIEW_LIMIT = 50
DEFAULT_PREVIEW_MAX_LIMIT = 500

# Flat environment variables -> dotted config path
ENV_OVERRIDES: dict[str, str] = {
    "REELRULES_HOST": "host",
    "REELRULES_PORT": "port",
    "REELRULES_LOG_LEVEL": "log_level",
    "REELRULES_CANDIDATES_PATH": "candidates_path",
    "REELRULES_PREVIEW_LIMIT": "preview.default_limit",
}


class ConfigService:
    """
    Service for loading and caching application configuration.

    Loads config from multiple sources (defaults → YAML → overrides → env),
    caches the result, and provides reload capability.
    """

    def __init__(self, overrides: dict[str, Any] | None = None) -> None:
        """
        Initialize ConfigService with empty cache.

        Args:
            overrides: Values merged over every file source (tests, CLI flags)
        """
        self._config: dict[str, Any] | None = None
        self._overrides = overrides or {}
        self._logger = logging.getLogger(__name__)

    def get_config(self, force_reload: bool = False) -> dict[str, Any]:
        """
        Get the composed configuration.

        Args:
            force_reload: If True, bypass cache and reload from sources

        Returns:
            Complete configuration dict
        """
        if self._config is None or force_reload:
            self._config = self._compose(self._overrides)
        return self._config

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dotted path.

        Example:
            >>> service.get("preview.default_limit")
            50
            >>> service.get("registry.extra_fields", {})
            {}
        """
        node: Any = self.get_config()
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def reload(self) -> dict[str, Any]:
        """Force reload configuration from all sources."""
        self._logger.info("[ConfigService] Reloading configuration from all sources")
        return self.get_config(force_reload=True)

    # ----------------------------------------------------------------------
    # Private composition logic
    # ----------------------------------------------------------------------

    def _compose(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Load final configuration from:
          1) Built-in defaults
          2) /etc/reelrules/config.yaml  (if present)
          3) ./config/config.yaml
          4) $REELRULES_CONFIG_PATH (if set)
          5) overrides dict passed in
          6) Whitelisted environment variables (REELRULES_*)

        Returns merged config as dict.
        """
        cfg = self._default_config()

        self._deep_merge(cfg, self._load_yaml("/etc/reelrules/config.yaml"))
        self._deep_merge(cfg, self._load_yaml(os.path.join(os.getcwd(), "config", "config.yaml")))

        env_path = os.getenv(f"{INTERNAL_ENV_PREFIX}CONFIG_PATH")
        if env_path:
            self._deep_merge(cfg, self._load_yaml(env_path))

        if overrides:
            self._deep_merge(cfg, overrides)

        self._apply_env_overrides(cfg)

        self._logger.debug("[ConfigService] compose() loaded config; keys: %s", list(cfg.keys()))
        return cfg

    def _default_config(self) -> dict[str, Any]:
        """Base defaults for user-configurable settings."""
        return {
            "host": INTERNAL_HOST,
            "port": INTERNAL_PORT,
            "log_level": "INFO",
            "candidates_path": None,  # JSON file of candidate pools; None = empty pools
            "preview": {
                "default_limit": DEFAULT_PREVIEW_LIMIT,
                "max_limit": DEFAULT_PREVIEW_MAX_LIMIT,
            },
            "rules": {
                "max_rule_length": MAX_RULE_LENGTH,
                "max_conditions": MAX_CONDITIONS,
            },
            "registry": {
                "extra_fields": {},  # kind -> [{name, type, operators, ...}]
            },
        }

    def _deep_merge(self, a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
        """
        Recursively merge dict b into dict a (mutates a, returns it).
        """
        for k, v in b.items():
            if isinstance(v, dict) and isinstance(a.get(k), dict):
                self._deep_merge(a[k], v)
            else:
                a[k] = v
        return a

    def _load_yaml(self, path: str) -> dict[str, Any]:
        """
        Load a YAML file; returns {} if not found or invalid.
        """
        if not path or not os.path.exists(path):
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            self._logger.warning(f"[ConfigService] Ignoring unreadable config file {path}: {e}")
            return {}
        if not isinstance(data, dict):
            self._logger.warning(f"[ConfigService] Ignoring {path}: top level is not a mapping")
            return {}
        self._logger.debug(f"[ConfigService] Loaded {path}")
        return data

    def _apply_env_overrides(self, cfg: dict[str, Any]) -> None:
        """
        Apply the whitelisted environment overrides.

        Supported:
          REELRULES_HOST=127.0.0.1
          REELRULES_PORT=9000
          REELRULES_LOG_LEVEL=DEBUG
          REELRULES_CANDIDATES_PATH=/data/pools.json
          REELRULES_PREVIEW_LIMIT=25

        Other REELRULES_* variables are ignored.
        """
        for env_key, v in os.environ.items():
            if not env_key.startswith(INTERNAL_ENV_PREFIX):
                continue
            key_path = ENV_OVERRIDES.get(env_key)
            if key_path is None:
                if env_key != f"{INTERNAL_ENV_PREFIX}CONFIG_PATH":
                    self._logger.debug(f"[ConfigService] Ignoring environment override {env_key}")
                continue

            val: Any
            if v.lower() in ("true", "false"):
                val = v.lower() == "true"
            elif v.isdigit():
                val = int(v)
            else:
                val = v

            node = cfg
            *parents, leaf = key_path.split(".")
            for part in parents:
                node = node.setdefault(part, {})
            node[leaf] = val
