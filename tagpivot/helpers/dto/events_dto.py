"""
Event domain DTOs.

Data transfer objects for the persisted event log and its daily rollups.
These form cross-layer contracts between persistence, components and services.

Rules:
- Import only stdlib and typing (no tagpivot.* imports)
- Pure data structures only (no I/O, no DB access, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Probe:
    """Interaction snapshot captured alongside a page visit."""

    scroll_count: int
    click_count: int
    energy: float  # 0..1, log-compressed blend of the two counts


@dataclass
class TagEvent:
    """One observation of a page visit's derived interests."""

    day: str  # YYYY-MM-DD, local date of captured_at_ms
    captured_at_ms: int
    domain: str
    url_hash: str  # e.g. "sha256:<hex>"
    tags: list[str]  # normalized, deduplicated, sorted
    probe: Probe | None = None


@dataclass
class DailyAgg:
    """Per-day rollup, always rebuilt from the retained events of that day."""

    day: str
    event_count: int
    unique_tags: int
    tag_freq: dict[str, int] = field(default_factory=dict)  # tag -> events containing it


@dataclass
class StoreMeta:
    """Store bookkeeping. A version mismatch discards the whole store."""

    version: int
    created_at_ms: int
    last_write_at_ms: int
