"""
Rolling baseline component.

Turns a raw scalar (temperature, polarization) into a z-score against its own
recent history, a qualitative state, and a compact sparkline.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence

import numpy as np

from tagpivot.helpers.dto.metrics_dto import MeanStd, PolState, RollingSample, TempState, TrendReading

ROLLING_MAX = 60
SPARK_CHARS = "▁▂▃▄▅▆▇█"
SPARK_LAST = 8


def append_sample(series: Sequence[RollingSample], sample: RollingSample, max_len: int = ROLLING_MAX) -> list[RollingSample]:
    """
    Add or replace the sample for sample.day, keep ascending day order, and
    truncate to the most recent `max_len` days.
    """
    updated = [s for s in series if s.day != sample.day]
    updated.append(sample)
    updated.sort(key=lambda s: s.day)
    return updated[max(0, len(updated) - max_len) :]


def mean_std(values: Sequence[float]) -> MeanStd:
    """
    Population mean and standard deviation of the finite values.

    std is floored to 1 below 1e-6 so z-scores never divide by ~0; an empty
    series yields (0, 1).
    """
    arr = np.asarray(list(values), dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        return MeanStd(mean=0.0, std=1.0)
    mean = float(np.mean(arr))
    std = float(np.std(arr))
    return MeanStd(mean=mean, std=std if std > 1e-6 else 1.0)


def z_score(x: float, mean: float, std: float) -> float:
    return (x - mean) / (std or 1.0)


def temp_state_from_z(z_abs: float) -> TempState:
    if z_abs < 0.5:
        return "Settled"
    if z_abs < 1.0:
        return "Active"
    if z_abs < 2.0:
        return "Changing"
    return "Calibrating"


def pol_state_from_z(z_abs: float) -> PolState:
    if z_abs < 0.5:
        return "Flat"
    if z_abs < 1.5:
        return "Split"
    return "Peaks"


def sparkline(values: Sequence[float]) -> str:
    """Map values linearly onto 8 glyphs spanning [min, max] of the slice."""
    if not values:
        return ""
    lo = min(values)
    hi = max(values)
    span = hi - lo
    if span < 1e-9:
        return SPARK_CHARS[0] * len(values)

    out = []
    for v in values:
        t = (v - lo) / span
        idx = max(0, min(7, math.floor(t * 7 + 0.5)))
        out.append(SPARK_CHARS[idx])
    return "".join(out)


def tv_distance(now: Mapping[str, float], prev: Mapping[str, float]) -> float:
    """
    Total variation distance between two tag-probability mappings.

    Keys missing on one side count as probability 0. Result is clamped to
    [0, 1]; non-finite results become 0.
    """
    total = 0.0
    # Fixed summation order keeps the result symmetric bit-for-bit
    for key in sorted(set(now) | set(prev)):
        total += abs(now.get(key, 0.0) - prev.get(key, 0.0))
    tv = 0.5 * total
    if not math.isfinite(tv):
        return 0.0
    return max(0.0, min(1.0, tv))


def build_trend_reading(
    series: Sequence[RollingSample],
    value: float,
    state_from_z: Callable[[float], str],
) -> TrendReading:
    """
    Place `value` against the whole series (which should already contain it).

    The sparkline and history cover the last SPARK_LAST samples only.
    """
    values = [s.value for s in series]
    stats = mean_std(values)
    z = z_score(value, stats.mean, stats.std)
    recent = values[-SPARK_LAST:]
    return TrendReading(
        value=value,
        z_score=z,
        state=state_from_z(abs(z)),
        sparkline=sparkline(recent),
        history=recent,
    )
