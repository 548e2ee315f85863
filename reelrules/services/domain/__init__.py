"""
Domain services package.
"""

from .selection_svc import CandidateSource, SelectionConfig, SelectionService

__all__ = [
    "CandidateSource",
    "SelectionConfig",
    "SelectionService",
]
