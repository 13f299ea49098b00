"""
Daily aggregation and retention component.

Pure functions the event store runs on every write:
- should_dedupe: repeat-visit suppression against the last stored event
- apply_retention: age window plus hard cap, oldest first
- build_daily_from_events: full rebuild of the day buckets (never patched)
- prune_daily: drop buckets whose day starts before the retention cutoff
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from tagpivot.helpers.dto.events_dto import DailyAgg, TagEvent
from tagpivot.helpers.time_helper import MS_PER_DAY, day_start_ms

DEDUPE_WINDOW_MS = 30_000
MAX_EVENTS = 20_000
DEFAULT_RETENTION_DAYS = 60


def should_dedupe(last: TagEvent | None, nxt: TagEvent, window_ms: int = DEDUPE_WINDOW_MS) -> bool:
    """True when `nxt` repeats the last stored page within the dedupe window."""
    if last is None:
        return False
    if last.url_hash != nxt.url_hash:
        return False
    delta = nxt.captured_at_ms - last.captured_at_ms
    return 0 <= delta <= window_ms


def retention_cutoff_ms(now_ms: int, retention_days: int = DEFAULT_RETENTION_DAYS) -> int:
    return now_ms - retention_days * MS_PER_DAY


def apply_retention(
    events: list[TagEvent],
    now_ms: int,
    retention_days: int = DEFAULT_RETENTION_DAYS,
    max_events: int = MAX_EVENTS,
) -> list[TagEvent]:
    """
    Keep events captured within the retention window, then trim to the most
    recent `max_events` by log position. Append order is preserved.
    """
    cutoff = retention_cutoff_ms(now_ms, retention_days)
    retained = [e for e in events if e.captured_at_ms >= cutoff]
    if len(retained) > max_events:
        retained = retained[len(retained) - max_events :]
    return retained


def build_daily_from_events(events: Iterable[TagEvent]) -> dict[str, DailyAgg]:
    """Rebuild every day bucket from scratch. Each tag counts once per event."""
    daily: dict[str, DailyAgg] = {}
    for evt in events:
        agg = daily.get(evt.day)
        if agg is None:
            agg = DailyAgg(day=evt.day, event_count=0, unique_tags=0, tag_freq={})
            daily[evt.day] = agg
        agg.event_count += 1
        for tag in set(evt.tags):
            agg.tag_freq[tag] = agg.tag_freq.get(tag, 0) + 1
    for agg in daily.values():
        agg.unique_tags = len(agg.tag_freq)
    return daily


def prune_daily(
    daily: Mapping[str, DailyAgg],
    now_ms: int,
    retention_days: int = DEFAULT_RETENTION_DAYS,
) -> dict[str, DailyAgg]:
    """Drop buckets whose local midnight falls before the retention cutoff (or is unparseable)."""
    cutoff = retention_cutoff_ms(now_ms, retention_days)
    kept: dict[str, DailyAgg] = {}
    for day, agg in daily.items():
        start = day_start_ms(day)
        if start is None or start < cutoff:
            continue
        kept[day] = agg
    return kept
