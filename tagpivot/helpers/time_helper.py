"""Time and day-key utility helpers.

Day keys are local calendar dates formatted as YYYY-MM-DD.
"""

from __future__ import annotations

import math
import re
import time
from datetime import date, datetime, timedelta

MS_PER_DAY = 24 * 60 * 60 * 1000

_DAY_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def now_ms() -> int:
    """
    Get current timestamp in milliseconds since epoch.

    Returns:
        Current time as integer milliseconds
    """
    return int(time.time() * 1000)


def day_key_from_ms(ts_ms: int) -> str:
    """Format an epoch-millisecond timestamp as a local YYYY-MM-DD day key."""
    return datetime.fromtimestamp(ts_ms / 1000).strftime("%Y-%m-%d")


def today_day_key(ts_ms: int | None = None) -> str:
    """Day key for `ts_ms` (defaults to now)."""
    return day_key_from_ms(now_ms() if ts_ms is None else ts_ms)


def parse_day_key(day: object) -> date | None:
    """
    Parse a YYYY-MM-DD day key.

    Returns:
        The calendar date, or None if `day` is not a well-formed key
    """
    if not isinstance(day, str) or not _DAY_KEY_RE.match(day):
        return None
    try:
        return date.fromisoformat(day)
    except ValueError:
        return None


def is_valid_day_key(day: object) -> bool:
    return parse_day_key(day) is not None


def day_start_ms(day: str) -> int | None:
    """Epoch milliseconds of local midnight for `day`, or None if malformed."""
    parsed = parse_day_key(day)
    if parsed is None:
        return None
    midnight = datetime(parsed.year, parsed.month, parsed.day)
    return int(midnight.timestamp() * 1000)


def shift_day(day: str, days_back: int) -> str:
    """
    Move a day key back by `days_back` calendar days (negative moves forward).

    Raises:
        ValueError: If `day` is not a valid day key
    """
    parsed = parse_day_key(day)
    if parsed is None:
        raise ValueError(f"Invalid day key: {day!r}")
    return (parsed - timedelta(days=days_back)).isoformat()


def is_finite_number(value: object) -> bool:
    """True for finite int/float values (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
