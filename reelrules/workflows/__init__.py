"""
Workflows package.
"""

from .rules.materialize_rule_wf import materialize_rule_workflow
from .rules.preview_rule_wf import preview_rule_workflow

__all__ = [
    "materialize_rule_workflow",
    "preview_rule_workflow",
]
