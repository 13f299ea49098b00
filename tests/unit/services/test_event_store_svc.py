"""Unit tests for EventStoreService."""

from __future__ import annotations

import pytest
from conftest import NOW_MS, local_ms, make_event

from tagpivot.components.events.daily_aggregation_comp import build_daily_from_events
from tagpivot.helpers.time_helper import MS_PER_DAY
from tagpivot.persistence.db import STORAGE_KEYS, Database
from tagpivot.services.event_store_svc import STORE_VERSION, EventStoreService


@pytest.mark.unit
class TestEnsureMeta:
    def test_creates_meta_when_absent(self, store: EventStoreService) -> None:
        meta = store.ensure_meta()
        assert meta.version == STORE_VERSION
        assert meta.created_at_ms == NOW_MS
        assert store.load_meta() == meta

    def test_existing_meta_is_kept(self, temp_db: Database) -> None:
        first = EventStoreService(temp_db, clock=lambda: 1000).ensure_meta()
        second = EventStoreService(temp_db, clock=lambda: 2000).ensure_meta()
        assert second.created_at_ms == first.created_at_ms == 1000

    def test_version_mismatch_discards_everything(self, store: EventStoreService, temp_db: Database) -> None:
        assert store.append_event(make_event(["a"]))
        temp_db.kv.set_json(STORAGE_KEYS["META"], {"version": 99, "created_at_ms": 1, "last_write_at_ms": 1})

        meta = store.ensure_meta()

        assert meta.version == STORE_VERSION
        assert store.load_events() == []
        assert store.load_daily_aggs() == {}


@pytest.mark.unit
class TestAppendEvent:
    def test_stores_normalized_event(self, store: EventStoreService) -> None:
        assert store.append_event(make_event(["Rust", " rust", "Go"]))
        events = store.load_events()
        assert len(events) == 1
        assert events[0].tags == ["go", "rust"]

    def test_empty_tags_discarded(self, store: EventStoreService) -> None:
        assert not store.append_event(make_event(["", "  "]))
        assert store.load_events() == []
        assert store.load_meta() is None

    def test_repeat_within_window_deduped_without_touching_meta(self, temp_db: Database) -> None:
        now = {"t": NOW_MS}
        store = EventStoreService(temp_db, clock=lambda: now["t"])
        assert store.append_event(make_event(["a"], NOW_MS))
        meta_before = store.load_meta()

        now["t"] = NOW_MS + 10_000
        assert not store.append_event(make_event(["b"], NOW_MS + 10_000))

        assert len(store.load_events()) == 1
        assert store.load_meta() == meta_before

    def test_repeat_after_window_is_stored(self, store: EventStoreService) -> None:
        assert store.append_event(make_event(["a"], NOW_MS - 40_000))
        assert store.append_event(make_event(["a"], NOW_MS))
        assert len(store.load_events()) == 2

    def test_different_page_not_deduped(self, store: EventStoreService) -> None:
        assert store.append_event(make_event(["a"], NOW_MS, url_hash="sha256:1"))
        assert store.append_event(make_event(["a"], NOW_MS, url_hash="sha256:2"))

    def test_retention_drops_old_events(self, store: EventStoreService) -> None:
        assert store.append_event(make_event(["old"], NOW_MS - 61 * MS_PER_DAY, url_hash="sha256:old"))
        assert store.append_event(make_event(["new"], NOW_MS, url_hash="sha256:new"))
        assert [e.tags for e in store.load_events()] == [["new"]]
        assert set(store.load_daily_aggs()) == {"2026-03-15"}

    def test_cap_keeps_most_recent(self, temp_db: Database) -> None:
        store = EventStoreService(temp_db, clock=lambda: NOW_MS, max_events=3)
        for i in range(5):
            assert store.append_event(make_event([f"t{i}"], NOW_MS - (5 - i) * 60_000, url_hash=f"sha256:{i}"))
        assert [e.tags[0] for e in store.load_events()] == ["t2", "t3", "t4"]

    def test_daily_always_matches_events(self, store: EventStoreService) -> None:
        for i, day in enumerate((10, 10, 11, 12, 14)):
            store.append_event(make_event(["x", f"d{day}"], local_ms(2026, 3, day, 9 + i), url_hash=f"sha256:{i}"))
        assert store.load_daily_aggs() == build_daily_from_events(store.load_events())
        assert store.list_days() == ["2026-03-10", "2026-03-11", "2026-03-12", "2026-03-14"]

    def test_last_write_updated(self, temp_db: Database) -> None:
        now = {"t": NOW_MS}
        store = EventStoreService(temp_db, clock=lambda: now["t"])
        store.append_event(make_event(["a"], NOW_MS, url_hash="sha256:1"))
        now["t"] = NOW_MS + 5_000
        store.append_event(make_event(["b"], NOW_MS + 5_000, url_hash="sha256:2"))
        meta = store.load_meta()
        assert meta is not None
        assert meta.created_at_ms == NOW_MS
        assert meta.last_write_at_ms == NOW_MS + 5_000


@pytest.mark.unit
class TestReadsAndPurge:
    def test_malformed_stored_events_are_dropped(self, store: EventStoreService, temp_db: Database) -> None:
        store.append_event(make_event(["a"]))
        raw = temp_db.kv.get_json(STORAGE_KEYS["EVENTS"])
        raw.append({"tags": "bad"})
        raw.append("junk")
        temp_db.kv.set_json(STORAGE_KEYS["EVENTS"], raw)
        assert len(store.load_events()) == 1

    def test_wrong_shape_reads_as_absent(self, store: EventStoreService, temp_db: Database) -> None:
        temp_db.kv.set_json(STORAGE_KEYS["EVENTS"], {"not": "a list"})
        temp_db.kv.set_json(STORAGE_KEYS["DAILY"], ["not", "a", "map"])
        assert store.load_events() == []
        assert store.load_daily_aggs() == {}

    def test_recent_events_newest_first(self, store: EventStoreService) -> None:
        for i in range(4):
            store.append_event(make_event([f"t{i}"], NOW_MS - (4 - i) * 60_000, url_hash=f"sha256:{i}"))
        assert [e.tags[0] for e in store.recent_events(2)] == ["t3", "t2"]
        assert store.recent_events(0) == []

    def test_purge_all(self, store: EventStoreService) -> None:
        store.append_event(make_event(["a"]))
        store.purge_all()
        assert store.load_events() == []
        assert store.load_daily_aggs() == {}
        assert store.load_meta() is None

    def test_works_in_memory(self, in_memory_db: Database) -> None:
        store = EventStoreService(in_memory_db, clock=lambda: NOW_MS)
        assert store.append_event(make_event(["a"]))
        assert store.list_days() == ["2026-03-15"]
