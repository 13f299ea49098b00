"""Unit tests for the polarization engine."""

from __future__ import annotations

import random

import pytest
from conftest import make_event

from tagpivot.components.analytics.polarization_comp import (
    build_counterview_query,
    compute_polarization,
    downsample_deterministic,
)

A = ["a1", "a2", "a3", "a4"]
B = ["b1", "b2", "b3", "b4"]


def _two_camps(cross_events: int = 0):
    events = [make_event(A) for _ in range(5)] + [make_event(B) for _ in range(4)]
    events += [make_event(["a2", "b2"]) for _ in range(cross_events)]
    return events


@pytest.mark.unit
class TestComputePolarizationNullCases:
    def test_no_events(self) -> None:
        assert compute_polarization([]) is None

    def test_too_few_events(self) -> None:
        assert compute_polarization([make_event(A + B) for _ in range(5)]) is None

    def test_too_few_distinct_tags(self) -> None:
        assert compute_polarization([make_event(["a", "b", "c"]) for _ in range(10)]) is None

    def test_no_opposite_candidate(self) -> None:
        # Only the center tag repeats; everything else is seen once
        events = [make_event(["hub", f"solo{i}"]) for i in range(8)]
        assert compute_polarization(events) is None


@pytest.mark.unit
class TestComputePolarization:
    def test_separated_camps_are_fully_polarized(self) -> None:
        out = compute_polarization(_two_camps())
        assert out is not None
        assert out.active_pole == A
        assert out.counter_pole == B
        assert out.pol == pytest.approx(1.0, abs=1e-6)
        assert out.debug is not None
        assert (out.debug.within, out.debug.cross) == (54, 0)
        assert (out.debug.events, out.debug.tags) == (9, 8)

    def test_cross_traffic_lowers_pol(self) -> None:
        out = compute_polarization(_two_camps(cross_events=3))
        assert out is not None
        assert 0.0 <= out.pol < 1.0
        assert out.debug is not None and out.debug.cross > 0

    def test_order_independent(self) -> None:
        events = _two_camps(cross_events=2)
        shuffled = list(events)
        random.Random(7).shuffle(shuffled)
        assert compute_polarization(events) == compute_polarization(shuffled)

    def test_poles_are_disjoint_and_bounded(self) -> None:
        out = compute_polarization(_two_camps(cross_events=2), pole_size=3)
        assert out is not None
        assert len(out.active_pole) <= 3 and len(out.counter_pole) <= 3
        assert out.active_pole[0] not in out.counter_pole
        assert out.counter_pole[0] not in out.active_pole


@pytest.mark.unit
class TestDownsampleDeterministic:
    def test_under_cap_is_copy(self) -> None:
        items = [1, 2, 3]
        out = downsample_deterministic(items, 5)
        assert out == items and out is not items

    def test_fixed_stride_from_start(self) -> None:
        assert downsample_deterministic(list(range(10)), 3) == [0, 4, 8]

    def test_never_exceeds_cap(self) -> None:
        for n in (2501, 5000, 7777):
            assert len(downsample_deterministic(list(range(n)))) <= 2500

    def test_zero_cap(self) -> None:
        assert downsample_deterministic([1, 2], 0) == []


@pytest.mark.unit
class TestCounterviewQuery:
    def test_skips_seeds_and_appends_bridge(self) -> None:
        assert build_counterview_query(B, ["B2"], "bridge") == "b1 b3 b4 bridge"

    def test_bridge_already_present_or_seed(self) -> None:
        assert build_counterview_query(B, [], "b1") == "b1 b2 b3"
        assert build_counterview_query(B, ["x"], "X") == "b1 b2 b3"

    def test_no_bridge(self) -> None:
        assert build_counterview_query(["c1"], [], None) == "c1"
