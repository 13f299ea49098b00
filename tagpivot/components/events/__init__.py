"""Event parsing, probe energy, and daily aggregation components."""

from .daily_aggregation_comp import (
    DEDUPE_WINDOW_MS,
    DEFAULT_RETENTION_DAYS,
    MAX_EVENTS,
    apply_retention,
    build_daily_from_events,
    prune_daily,
    should_dedupe,
)
from .event_parsing_comp import parse_daily_aggs, parse_events, parse_store_meta, parse_tag_event
from .probe_comp import build_probe, compute_energy

__all__ = [
    "DEDUPE_WINDOW_MS",
    "DEFAULT_RETENTION_DAYS",
    "MAX_EVENTS",
    "apply_retention",
    "build_daily_from_events",
    "build_probe",
    "compute_energy",
    "parse_daily_aggs",
    "parse_events",
    "parse_store_meta",
    "parse_tag_event",
    "prune_daily",
    "should_dedupe",
]
