"""Probe energy: bounded, log-compressed blend of scroll and click counts."""

from __future__ import annotations

import math

from tagpivot.helpers.dto.events_dto import Probe

SCROLL_CAP = 200
CLICK_CAP = 80
SCROLL_WEIGHT = 0.65
CLICK_WEIGHT = 0.35


def _clamp01(x: float) -> float:
    if x < 0:
        return 0.0
    if x > 1:
        return 1.0
    return x


def compute_energy(scroll_count: int, click_count: int) -> float:
    s_norm = math.log1p(min(max(scroll_count, 0), SCROLL_CAP)) / math.log1p(SCROLL_CAP)
    c_norm = math.log1p(min(max(click_count, 0), CLICK_CAP)) / math.log1p(CLICK_CAP)
    return _clamp01(SCROLL_WEIGHT * s_norm + CLICK_WEIGHT * c_norm)


def build_probe(scroll_count: int, click_count: int) -> Probe:
    return Probe(
        scroll_count=scroll_count,
        click_count=click_count,
        energy=compute_energy(scroll_count, click_count),
    )
