"""
Shared utility functions for CLI commands.
"""

from __future__ import annotations

from collections.abc import Iterable

__all__ = [
    "format_day_range",
    "split_tag_args",
]


def split_tag_args(values: Iterable[str] | None) -> list[str]:
    """Accept tags as separate arguments, comma-separated, or both."""
    out: list[str] = []
    for value in values or []:
        out.extend(part.strip() for part in value.split(",") if part.strip())
    return out


def format_day_range(day_range: tuple[str, str] | None) -> str:
    if not day_range:
        return ""
    return f"{day_range[0]} → {day_range[1]}"
