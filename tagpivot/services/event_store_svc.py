"""
Event store service - owns the persisted event log and its daily aggregates.

ARCHITECTURE:
- Persistence: three JSON values in the KV store (events, daily, meta)
- Components do the work: parsing, dedupe, retention, daily rebuild
- Every mutation is one read-rebuild-write inside a single transaction

The daily aggregates are never patched incrementally. They are rebuilt from
the retained event set on every write so they cannot drift from the log.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from tagpivot.components.events.daily_aggregation_comp import (
    DEDUPE_WINDOW_MS,
    DEFAULT_RETENTION_DAYS,
    MAX_EVENTS,
    apply_retention,
    build_daily_from_events,
    prune_daily,
    should_dedupe,
)
from tagpivot.components.events.event_parsing_comp import (
    daily_aggs_to_record,
    events_to_records,
    parse_daily_aggs,
    parse_events,
    parse_store_meta,
    parse_tag_event,
)
from tagpivot.helpers.dto.events_dto import DailyAgg, StoreMeta, TagEvent
from tagpivot.helpers.exceptions import EventParseError
from tagpivot.helpers.time_helper import now_ms
from tagpivot.persistence.db import STORAGE_KEYS
from tagpivot.services.config_svc import INTERNAL_STORE_VERSION

if TYPE_CHECKING:
    from tagpivot.persistence.db import Database

logger = logging.getLogger(__name__)

STORE_VERSION = INTERNAL_STORE_VERSION

_STORE_KEYS = (STORAGE_KEYS["EVENTS"], STORAGE_KEYS["DAILY"], STORAGE_KEYS["META"])


class EventStoreService:
    """
    Append-only, capped, local event log.

    Single logical writer. Writers sharing one database file serialize on
    SQLite's write lock (BEGIN IMMEDIATE).
    """

    def __init__(
        self,
        db: Database,
        clock: Callable[[], int] = now_ms,
        retention_days: int = DEFAULT_RETENTION_DAYS,
        max_events: int = MAX_EVENTS,
        dedupe_window_ms: int = DEDUPE_WINDOW_MS,
    ) -> None:
        """
        Initialize event store.

        Args:
            db: Database holding the KV table
            clock: Returns the current epoch milliseconds
            retention_days: Age window for retained events
            max_events: Hard cap on retained events (oldest dropped first)
            dedupe_window_ms: Repeat-visit suppression window
        """
        self._db = db
        self._clock = clock
        self.retention_days = retention_days
        self.max_events = max_events
        self.dedupe_window_ms = dedupe_window_ms

    # ------------------------------------------------------------------
    # Meta
    # ------------------------------------------------------------------

    def ensure_meta(self) -> StoreMeta:
        """
        Return valid store meta, creating it if absent.

        A stored version other than STORE_VERSION wipes events, daily
        aggregates and meta before fresh meta is written. There is no migration.
        """
        with self._db.kv.transaction():
            raw = self._db.kv.get_json(STORAGE_KEYS["META"])
            meta = parse_store_meta(raw)
            if meta is not None and meta.version == STORE_VERSION:
                return meta

            if meta is not None:
                logger.warning(
                    "[event_store] Store version %s != %s, discarding stored events", meta.version, STORE_VERSION
                )
                self._db.kv.delete_many(_STORE_KEYS)
            elif raw is not None:
                logger.warning("[event_store] Malformed store meta, recreating")

            ts = self._clock()
            fresh = StoreMeta(version=STORE_VERSION, created_at_ms=ts, last_write_at_ms=ts)
            self._db.kv.set_json(STORAGE_KEYS["META"], _meta_record(fresh))
            return fresh

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def append_event(self, evt: TagEvent) -> bool:
        """
        Append one event to the log.

        Tags are normalized first; an event with no tags left is discarded.
        A repeat of the last stored page within the dedupe window is dropped
        without touching meta.

        Returns:
            True if the event was stored, False if discarded or deduplicated
        """
        try:
            normalized = parse_tag_event(evt)
        except EventParseError as exc:
            logger.debug("[event_store] Discarding event: %s", exc)
            return False

        with self._db.kv.transaction():
            meta = self.ensure_meta()
            events = self.load_events()

            last = events[-1] if events else None
            if should_dedupe(last, normalized, self.dedupe_window_ms):
                logger.debug("[event_store] Dedupe: %s within %d ms", normalized.url_hash, self.dedupe_window_ms)
                return False

            events.append(normalized)
            ts = self._clock()
            retained = apply_retention(events, ts, self.retention_days, self.max_events)
            daily = prune_daily(build_daily_from_events(retained), ts, self.retention_days)
            meta.last_write_at_ms = ts

            self._db.kv.set_many(
                {
                    STORAGE_KEYS["EVENTS"]: events_to_records(retained),
                    STORAGE_KEYS["DAILY"]: daily_aggs_to_record(daily),
                    STORAGE_KEYS["META"]: _meta_record(meta),
                }
            )

        logger.debug("[event_store] Stored event day=%s tags=%d (log=%d)", normalized.day, len(normalized.tags), len(retained))
        return True

    def purge_all(self) -> None:
        """Delete events, daily aggregates and meta."""
        self._db.kv.delete_many(_STORE_KEYS)
        logger.info("[event_store] Purged all stored events")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load_events(self) -> list[TagEvent]:
        """All retained events in append order. Malformed records are dropped."""
        return parse_events(self._db.kv.get_json(STORAGE_KEYS["EVENTS"]))

    def load_daily_aggs(self) -> dict[str, DailyAgg]:
        return parse_daily_aggs(self._db.kv.get_json(STORAGE_KEYS["DAILY"]))

    def load_meta(self) -> StoreMeta | None:
        return parse_store_meta(self._db.kv.get_json(STORAGE_KEYS["META"]))

    def list_days(self) -> list[str]:
        """Days that have an aggregate bucket, ascending."""
        return sorted(self.load_daily_aggs())

    def recent_events(self, limit: int = 20) -> list[TagEvent]:
        """Most recent events, newest first."""
        if limit <= 0:
            return []
        events = self.load_events()
        return list(reversed(events[-limit:]))


def _meta_record(meta: StoreMeta) -> dict[str, int]:
    return {
        "version": meta.version,
        "created_at_ms": meta.created_at_ms,
        "last_write_at_ms": meta.last_write_at_ms,
    }
