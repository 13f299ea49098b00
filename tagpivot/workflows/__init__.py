"""
Workflows package - orchestration over services and components.
"""

from .analytics import bridges_workflow, field_state_workflow, polarization_state_workflow
from .events import record_page_event_workflow

__all__ = [
    "bridges_workflow",
    "field_state_workflow",
    "polarization_state_workflow",
    "record_page_event_workflow",
]
