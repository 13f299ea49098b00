"""Unit tests for counterpoint scoring."""

from __future__ import annotations

import math

import pytest
from conftest import NOW_MS, make_event

from tagpivot.components.analytics.bizarro_comp import compute_bizarro
from tagpivot.components.analytics.bridges_comp import compute_bridges
from tagpivot.helpers.dto.metrics_dto import BridgeResult


def history():
    events = [make_event(["rust", "memory-safety"]) for _ in range(4)]
    events += [make_event(["memory-safety", "c++", "valgrind"]) for _ in range(3)]
    events += [make_event(["memory-safety", "zig"]) for _ in range(2)]
    events += [make_event(["python", "pandas"]) for _ in range(3)]
    return events


@pytest.mark.unit
class TestComputeBizarro:
    def test_ranks_tags_near_bridges_away_from_seeds(self) -> None:
        events = history()
        bridges = compute_bridges(events, ["rust"], days=60, top_k=10, now_ms=NOW_MS)
        assert [b.tag for b in bridges] == ["memory-safety"]

        out = compute_bizarro(events, ["rust"], bridges, days=60, top_k=10, now_ms=NOW_MS)
        assert [r.tag for r in out] == ["c++", "valgrind", "zig"]
        assert out[0].co_bridge == 3 and out[0].df == 3
        assert out[0].score == pytest.approx((3 / 5) * math.log1p(12 / 3))
        assert out[2].score == pytest.approx((2 / 5) * math.log1p(12 / 2))

    def test_seed_and_bridge_tags_never_returned(self) -> None:
        events = history()
        bridges = compute_bridges(events, ["rust"], days=60, top_k=10, now_ms=NOW_MS)
        out = compute_bizarro(events, ["rust"], bridges, days=60, top_k=10, now_ms=NOW_MS)
        assert {"rust", "memory-safety"}.isdisjoint(r.tag for r in out)

    def test_empty_seed(self) -> None:
        bridges = [BridgeResult(tag="memory-safety", score=1.0, co=4, df=9)]
        assert compute_bizarro(history(), [], bridges, days=60, top_k=10, now_ms=NOW_MS) == []

    def test_no_bridges(self) -> None:
        assert compute_bizarro(history(), ["rust"], [], days=60, top_k=10, now_ms=NOW_MS) == []

    def test_bridges_that_are_seeds_are_ignored(self) -> None:
        bridges = [BridgeResult(tag="Rust", score=1.0, co=4, df=4)]
        assert compute_bizarro(history(), ["rust"], bridges, days=60, top_k=10, now_ms=NOW_MS) == []

    def test_only_top_m_bridges_anchor(self) -> None:
        bridges = [
            BridgeResult(tag="python", score=2.0, co=2, df=3),
            BridgeResult(tag="memory-safety", score=1.0, co=4, df=9),
        ]
        out = compute_bizarro(history(), ["rust"], bridges, days=60, top_k=10, bridge_top_m=1, now_ms=NOW_MS)
        assert [r.tag for r in out] == ["pandas"]

    def test_min_co(self) -> None:
        events = history()
        bridges = compute_bridges(events, ["rust"], days=60, top_k=10, now_ms=NOW_MS)
        out = compute_bizarro(events, ["rust"], bridges, days=60, top_k=10, min_co=3, now_ms=NOW_MS)
        assert [r.tag for r in out] == ["c++", "valgrind"]
