"""
Cli package.
"""

from .cli_ui import (
    COLOR_ERROR,
    COLOR_INFO,
    COLOR_SUCCESS,
    COLOR_WARNING,
    InfoPanel,
    TableDisplay,
    format_reading,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from .utils import format_day_range, split_tag_args

__all__ = [
    "COLOR_ERROR",
    "COLOR_INFO",
    "COLOR_SUCCESS",
    "COLOR_WARNING",
    "InfoPanel",
    "TableDisplay",
    "format_day_range",
    "format_reading",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "split_tag_args",
]
