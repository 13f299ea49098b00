"""Event workflows package."""

from .record_page_event_wf import record_page_event_workflow

__all__ = ["record_page_event_workflow"]
