"""
Event parsing component.

Stored records are untrusted: older writers, manual edits or partial writes can
leave missing days, non-finite timestamps or junk tags. Every record passes
through parse_tag_event before any aggregate touches it; records that cannot
be normalized are dropped at the collection boundary (parse_events).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import asdict
from typing import Any

from tagpivot.components.tags.tag_normalization_comp import normalize_tags
from tagpivot.helpers.dto.events_dto import DailyAgg, Probe, StoreMeta, TagEvent
from tagpivot.helpers.exceptions import EventParseError
from tagpivot.helpers.time_helper import day_key_from_ms, day_start_ms, is_finite_number, is_valid_day_key

logger = logging.getLogger(__name__)


def resolve_event_day(day: object, captured_at_ms: object) -> str | None:
    """
    Day key for an event record.

    Uses `day` when it is a well-formed key, otherwise derives it from a finite
    timestamp. Returns None when neither is usable.
    """
    if is_valid_day_key(day):
        return str(day)
    if is_finite_number(captured_at_ms):
        try:
            return day_key_from_ms(int(captured_at_ms))  # type: ignore[arg-type]
        except (OverflowError, OSError, ValueError):
            return None
    return None


def _parse_probe(raw: object) -> Probe | None:
    if not isinstance(raw, Mapping):
        return None
    scroll = raw.get("scroll_count")
    click = raw.get("click_count")
    energy = raw.get("energy")
    if not (is_finite_number(scroll) and is_finite_number(click) and is_finite_number(energy)):
        return None
    return Probe(
        scroll_count=int(scroll),  # type: ignore[arg-type]
        click_count=int(click),  # type: ignore[arg-type]
        energy=min(1.0, max(0.0, float(energy))),  # type: ignore[arg-type]
    )


def parse_tag_event(raw: object) -> TagEvent:
    """
    Turn a raw record into a normalized TagEvent.

    Raises:
        EventParseError: If the record is not a mapping, has no resolvable day,
            or has no tags left after normalization
    """
    if isinstance(raw, TagEvent):
        raw = event_to_record(raw)
    if not isinstance(raw, Mapping):
        raise EventParseError(f"Event record must be a mapping, got {type(raw).__name__}")

    ts = raw.get("captured_at_ms")
    day = resolve_event_day(raw.get("day"), ts)
    if day is None:
        raise EventParseError("Event record has neither a valid day nor a finite timestamp")

    tags = normalize_tags(raw.get("tags"))
    if not tags:
        raise EventParseError("Event record has no tags after normalization")

    if is_finite_number(ts):
        captured_at_ms = int(ts)  # type: ignore[arg-type]
    else:
        # Day is known; pin the event to that day's local midnight
        captured_at_ms = day_start_ms(day) or 0

    domain = raw.get("domain")
    url_hash = raw.get("url_hash")
    return TagEvent(
        day=day,
        captured_at_ms=captured_at_ms,
        domain=domain.strip().lower() if isinstance(domain, str) else "",
        url_hash=url_hash if isinstance(url_hash, str) else "",
        tags=tags,
        probe=_parse_probe(raw.get("probe")),
    )


def parse_events(raws: object) -> list[TagEvent]:
    """Parse a stored event list, dropping records that fail to parse. Order is preserved."""
    if not isinstance(raws, list):
        return []
    events: list[TagEvent] = []
    dropped = 0
    for raw in raws:
        try:
            events.append(parse_tag_event(raw))
        except EventParseError as exc:
            dropped += 1
            logger.debug("[event_parsing] Dropping record: %s", exc)
    if dropped:
        logger.info("[event_parsing] Dropped %d malformed event record(s)", dropped)
    return events


def event_to_record(evt: TagEvent) -> dict[str, Any]:
    return asdict(evt)


def events_to_records(events: Iterable[TagEvent]) -> list[dict[str, Any]]:
    return [event_to_record(e) for e in events]


def parse_daily_aggs(raw: object) -> dict[str, DailyAgg]:
    """Parse the stored day -> DailyAgg mapping; malformed buckets are skipped."""
    if not isinstance(raw, Mapping):
        return {}
    out: dict[str, DailyAgg] = {}
    for day, agg in raw.items():
        if not is_valid_day_key(day) or not isinstance(agg, Mapping):
            continue
        freq_raw = agg.get("tag_freq")
        if not isinstance(freq_raw, Mapping):
            continue
        tag_freq = {
            str(tag): int(count)
            for tag, count in freq_raw.items()
            if is_finite_number(count) and count > 0
        }
        event_count = agg.get("event_count")
        out[day] = DailyAgg(
            day=day,
            event_count=int(event_count) if is_finite_number(event_count) else 0,
            unique_tags=len(tag_freq),
            tag_freq=tag_freq,
        )
    return out


def daily_aggs_to_record(daily: Mapping[str, DailyAgg]) -> dict[str, Any]:
    return {day: asdict(agg) for day, agg in daily.items()}


def parse_store_meta(raw: object) -> StoreMeta | None:
    """Parse stored meta; wrong shape counts as absent."""
    if not isinstance(raw, Mapping):
        return None
    version = raw.get("version")
    created = raw.get("created_at_ms")
    last_write = raw.get("last_write_at_ms")
    if not (is_finite_number(version) and is_finite_number(created) and is_finite_number(last_write)):
        return None
    return StoreMeta(version=int(version), created_at_ms=int(created), last_write_at_ms=int(last_write))  # type: ignore[arg-type]
