"""Unit tests for adaptive window selection."""

from __future__ import annotations

from dataclasses import replace

import pytest
from conftest import NOW_MS, TODAY, local_ms, make_event

from tagpivot.components.analytics.window_comp import (
    build_window_agg,
    choose_window_days,
    events_in_window,
    events_within_last_days,
)
from tagpivot.helpers.dto.events_dto import DailyAgg
from tagpivot.helpers.time_helper import MS_PER_DAY, shift_day


def _daily_with(days_back: range, tags_per_day: int) -> dict[str, DailyAgg]:
    """One bucket per day with `tags_per_day` distinct tags, each seen once."""
    daily: dict[str, DailyAgg] = {}
    for back in days_back:
        day = shift_day(TODAY, back)
        freq = {f"{day}-t{k}": 1 for k in range(tags_per_day)}
        daily[day] = DailyAgg(day=day, event_count=tags_per_day, unique_tags=tags_per_day, tag_freq=freq)
    return daily


@pytest.mark.unit
class TestBuildWindowAgg:
    def test_inclusive_range_and_probabilities(self) -> None:
        daily = {
            "2026-03-14": DailyAgg("2026-03-14", 2, 2, {"a": 1, "b": 1}),
            "2026-03-15": DailyAgg("2026-03-15", 2, 1, {"a": 2}),
            "2026-03-16": DailyAgg("2026-03-16", 9, 1, {"z": 9}),
        }
        agg = build_window_agg(daily, "2026-03-15", 2)
        assert (agg.day_from, agg.day_to) == ("2026-03-14", "2026-03-15")
        assert agg.total_count == 4
        assert agg.unique_tags == 2
        assert agg.tag_prob == {"a": 0.75, "b": 0.25}

    def test_empty_window(self) -> None:
        agg = build_window_agg({}, TODAY, 8)
        assert agg.total_count == 0
        assert agg.tag_prob == {}

    def test_invalid_arguments(self) -> None:
        with pytest.raises(ValueError):
            build_window_agg({}, "nope", 8)
        with pytest.raises(ValueError):
            build_window_agg({}, TODAY, 0)


@pytest.mark.unit
class TestChooseWindowDays:
    def test_no_data_returns_none(self) -> None:
        assert choose_window_days({}, TODAY) is None

    def test_picks_smallest_adequate_window(self) -> None:
        # 2 tags/day over 26 days: 8d windows hold 16 (< 20), 13d windows hold 26
        daily = _daily_with(range(26), 2)
        chosen = choose_window_days(daily, TODAY)
        assert chosen is not None
        assert chosen.window_days == 13
        assert chosen.now.day_to == TODAY
        assert chosen.prev.day_to == shift_day(chosen.now.day_from, 1)

    def test_falls_through_to_21_days(self) -> None:
        # 1 tag/day: 8d and 13d windows stay under 20, 21d windows hold 21
        daily = _daily_with(range(42), 1)
        chosen = choose_window_days(daily, TODAY)
        assert chosen is not None
        assert chosen.window_days == 21
        assert chosen.prev.day_from == shift_day(TODAY, 41)

    def test_candidate_order_does_not_matter(self) -> None:
        daily = _daily_with(range(26), 2)
        chosen = choose_window_days(daily, TODAY, candidates=[60, 13, 8])
        assert chosen is not None and chosen.window_days == 13

    def test_prev_window_must_also_qualify(self) -> None:
        # Plenty of data now, nothing before
        daily = _daily_with(range(8), 10)
        assert choose_window_days(daily, TODAY, candidates=[8]) is None

    def test_thresholds_are_respected(self) -> None:
        daily = _daily_with(range(16), 3)
        chosen = choose_window_days(daily, TODAY, candidates=[8])
        assert chosen is not None
        assert chosen.now.total_count >= 20 and chosen.now.unique_tags >= 15
        assert chosen.prev.total_count >= 20 and chosen.prev.unique_tags >= 15


@pytest.mark.unit
class TestEventFilters:
    def test_events_in_window_is_inclusive(self) -> None:
        events = [make_event([str(d)], local_ms(2026, 3, d)) for d in (9, 10, 12, 13)]
        picked = events_in_window(events, "2026-03-10", "2026-03-12")
        assert [e.tags[0] for e in picked] == ["10", "12"]

    def test_recent_excludes_old_and_future(self) -> None:
        old = make_event(["old"], NOW_MS - 61 * MS_PER_DAY)
        recent = make_event(["recent"], NOW_MS - 3 * MS_PER_DAY)
        future = make_event(["future"], NOW_MS + 2 * MS_PER_DAY)
        picked = events_within_last_days([old, recent, future], 60, NOW_MS)
        assert [e.tags[0] for e in picked] == ["recent"]

    def test_undated_events_use_their_timestamp(self) -> None:
        undated = replace(make_event(["undated"], local_ms(2026, 3, 11)), day="")
        unusable = replace(make_event(["unusable"], local_ms(2026, 3, 11)), day="", captured_at_ms=float("nan"))
        picked = events_in_window([undated, unusable], "2026-03-10", "2026-03-12")
        assert [e.tags[0] for e in picked] == ["undated"]

        recent = events_within_last_days([undated, unusable], 60, NOW_MS)
        assert [e.tags[0] for e in recent] == ["undated"]
