"""
CLI commands package.
"""

from .bridges_cli import cmd_bridges
from .days_cli import cmd_days
from .field_cli import cmd_field
from .history_cli import cmd_history
from .polarization_cli import cmd_polarization
from .purge_cli import cmd_purge
from .record_cli import cmd_record

__all__ = [
    "cmd_bridges",
    "cmd_days",
    "cmd_field",
    "cmd_history",
    "cmd_polarization",
    "cmd_purge",
    "cmd_record",
]
