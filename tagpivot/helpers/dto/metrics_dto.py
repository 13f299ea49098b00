"""
Metrics domain DTOs.

Results of the window, temperature, polarization, bridge and counterpoint
computations, plus the rolling baseline sample type.

Rules:
- Import only stdlib and typing (no tagpivot.* imports)
- Pure data structures only (no I/O, no DB access, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

TempState = Literal["Settled", "Active", "Changing", "Calibrating"]
PolState = Literal["Flat", "Split", "Peaks"]


@dataclass
class WindowAgg:
    """Summed tag frequencies over an inclusive range of days."""

    tag_prob: dict[str, float]  # tag -> count / total_count
    total_count: int
    unique_tags: int
    day_from: str
    day_to: str


@dataclass
class WindowChoice:
    """Smallest candidate window where both periods carry enough signal."""

    window_days: int
    now: WindowAgg
    prev: WindowAgg


@dataclass
class PolarizationDebug:
    within: float
    cross: float
    events: int
    tags: int


@dataclass
class PolarizationOut:
    """Polarization scalar plus the two grown topic clusters."""

    pol: float  # 0..1
    active_pole: list[str]
    counter_pole: list[str]
    debug: PolarizationDebug | None = None


@dataclass
class BridgeResult:
    tag: str
    score: float
    co: int  # events containing the tag and any seed tag
    df: int  # events containing the tag


@dataclass
class BizarroResult:
    tag: str
    score: float
    co_bridge: int  # bridge-hit events (no seed) containing the tag
    df: int


@dataclass
class RollingSample:
    day: str
    value: float


@dataclass
class MeanStd:
    mean: float
    std: float


@dataclass
class TrendReading:
    """A scalar observation placed against its rolling baseline."""

    value: float
    z_score: float
    state: str
    sparkline: str
    history: list[float] = field(default_factory=list)
