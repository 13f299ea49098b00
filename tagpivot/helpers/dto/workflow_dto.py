"""
Workflow result DTOs.

Outputs handed from workflows to interfaces (CLI, overlay renderers).

Rules:
- Import only stdlib, typing and sibling DTO modules
- Pure data structures only (no I/O, no DB access, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tagpivot.helpers.dto.metrics_dto import BizarroResult, BridgeResult, TrendReading


@dataclass
class FieldStateResult:
    """Temperature of the topic mix for the chosen window."""

    available: bool
    reason: str | None = None
    window_days: int | None = None
    now_range: tuple[str, str] | None = None
    prev_range: tuple[str, str] | None = None
    reading: TrendReading | None = None


@dataclass
class PolarizationStateResult:
    """Polarization reading plus the poles it was computed from."""

    available: bool
    reason: str | None = None
    window_days: int | None = None
    reading: TrendReading | None = None
    active_pole: list[str] = field(default_factory=list)
    counter_pole: list[str] = field(default_factory=list)
    counterview_query: str = ""
    sampled_events: int = 0


@dataclass
class BridgesResult:
    seed_tags: list[str]
    bridges: list[BridgeResult]
    counterpoint: list[BizarroResult]


@dataclass
class RecordEventResult:
    stored: bool
    day: str
    url_hash: str
    tags: list[str]
