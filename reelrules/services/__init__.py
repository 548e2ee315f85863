"""
Services package.
"""

from .cli_bootstrap_svc import get_selection_service
from .config_svc import INTERNAL_HOST, INTERNAL_PORT, ConfigService
from .domain.selection_svc import CandidateSource, SelectionConfig, SelectionService

__all__ = [
    "INTERNAL_HOST",
    "INTERNAL_PORT",
    "CandidateSource",
    "ConfigService",
    "SelectionConfig",
    "SelectionService",
    "get_selection_service",
]
