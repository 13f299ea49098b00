"""Analytics workflows package."""

from .bridges_wf import bridges_workflow
from .field_state_wf import field_state_workflow
from .polarization_state_wf import polarization_state_workflow

__all__ = [
    "bridges_workflow",
    "field_state_workflow",
    "polarization_state_workflow",
]
