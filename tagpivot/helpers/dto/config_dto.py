"""
Config domain DTOs.

Data transfer objects for configuration service results.
These form cross-layer contracts between services, workflows and interfaces.

Rules:
- Import only stdlib and typing (no tagpivot.* imports)
- Pure data structures only (no I/O, no DB access, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AnalysisConfig:
    """Tunables for the analytics workflows, resolved from user config."""

    window_candidates: tuple[int, ...] = (8, 13, 21, 30, 60)
    window_min_total: int = 20
    window_min_unique: int = 15
    bridge_days: int = 60
    bridge_top_k: int = 10
    bridge_top_m: int = 6
    min_co: int = 2
    pole_size: int = 8
    pol_min_events: int = 80
    pol_max_events: int = 2500


@dataclass
class InternalInfo:
    """Result from ConfigService.get_internal_info (read-only constants)."""

    store_version: int
    retention_days: int
    max_events: int
    dedupe_window_ms: int
    rolling_max: int
