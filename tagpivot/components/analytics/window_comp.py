"""
Window selection component.

A window is a contiguous, inclusive range of calendar days. The selector
prefers the smallest window with enough signal so recent shifts show up
early, and requires the comparison ("prev") window to be equally populated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import timedelta

from tagpivot.components.events.event_parsing_comp import resolve_event_day
from tagpivot.helpers.dto.events_dto import DailyAgg, TagEvent
from tagpivot.helpers.dto.metrics_dto import WindowAgg, WindowChoice
from tagpivot.helpers.time_helper import MS_PER_DAY, day_start_ms, parse_day_key, shift_day

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_CANDIDATES: tuple[int, ...] = (8, 13, 21, 30, 60)
DEFAULT_MIN_TOTAL = 20
DEFAULT_MIN_UNIQUE = 15


def build_window_agg(daily: Mapping[str, DailyAgg], end_day: str, window_days: int) -> WindowAgg:
    """
    Sum tag frequencies over [end_day - (window_days - 1), end_day].

    Days missing from `daily` contribute nothing.

    Raises:
        ValueError: If end_day is malformed or window_days < 1
    """
    end = parse_day_key(end_day)
    if end is None:
        raise ValueError(f"Invalid end day: {end_day!r}")
    if window_days < 1:
        raise ValueError(f"window_days must be >= 1, got {window_days}")

    start = end - timedelta(days=window_days - 1)
    freq: dict[str, int] = {}
    total = 0
    for offset in range(window_days):
        agg = daily.get((start + timedelta(days=offset)).isoformat())
        if agg is None:
            continue
        for tag, count in agg.tag_freq.items():
            freq[tag] = freq.get(tag, 0) + count
            total += count

    prob = {tag: count / total for tag, count in freq.items()} if total > 0 else {}
    return WindowAgg(
        tag_prob=prob,
        total_count=total,
        unique_tags=len(freq),
        day_from=start.isoformat(),
        day_to=end.isoformat(),
    )


def _has_signal(window: WindowAgg, min_total: int, min_unique: int) -> bool:
    return window.total_count >= min_total and window.unique_tags >= min_unique


def choose_window_days(
    daily: Mapping[str, DailyAgg],
    end_day: str,
    candidates: Sequence[int] = DEFAULT_WINDOW_CANDIDATES,
    min_total: int = DEFAULT_MIN_TOTAL,
    min_unique: int = DEFAULT_MIN_UNIQUE,
) -> WindowChoice | None:
    """
    Pick the smallest candidate window where both "now" (ending at end_day)
    and "prev" (the same length, ending the day before "now" starts) pass
    the total/unique thresholds.

    Returns:
        WindowChoice, or None if no candidate qualifies
    """
    for window_days in sorted(set(candidates)):
        if window_days < 1:
            continue
        now = build_window_agg(daily, end_day, window_days)
        prev = build_window_agg(daily, shift_day(end_day, window_days), window_days)
        if _has_signal(now, min_total, min_unique) and _has_signal(prev, min_total, min_unique):
            logger.debug("[window] Chose %dd window ending %s", window_days, end_day)
            return WindowChoice(window_days=window_days, now=now, prev=prev)
    return None


def events_in_window(events: Iterable[TagEvent], day_from: str, day_to: str) -> list[TagEvent]:
    """
    Events whose resolved day lies in [day_from, day_to] (ISO day keys compare
    lexically). An event without a valid day falls back to its timestamp.
    """
    out: list[TagEvent] = []
    for evt in events:
        day = resolve_event_day(evt.day, evt.captured_at_ms)
        if day is not None and day_from <= day <= day_to:
            out.append(evt)
    return out


def events_within_last_days(events: Iterable[TagEvent], days: int, now_ms: int) -> list[TagEvent]:
    """
    Events whose resolved day starts within the last `days` days of now_ms.

    Events with neither a valid day nor a finite timestamp are dropped.
    Future-dated days are excluded so a bad clock cannot skew metrics.
    """
    cutoff = now_ms - days * MS_PER_DAY
    recent: list[TagEvent] = []
    for evt in events:
        day = resolve_event_day(evt.day, evt.captured_at_ms)
        start = day_start_ms(day) if day is not None else None
        if start is None:
            continue
        if cutoff <= start <= now_ms:
            recent.append(evt)
    return recent
