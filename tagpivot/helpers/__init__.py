"""
Helpers package.
"""

from .exceptions import EventParseError, StoreError
from .logging_helper import TagpivotLogFilter, clear_log_context, configure_logging, set_log_context
from .time_helper import day_key_from_ms, now_ms, parse_day_key, shift_day, today_day_key

__all__ = [
    "EventParseError",
    "StoreError",
    "TagpivotLogFilter",
    "clear_log_context",
    "configure_logging",
    "day_key_from_ms",
    "now_ms",
    "parse_day_key",
    "set_log_context",
    "shift_day",
    "today_day_key",
]
