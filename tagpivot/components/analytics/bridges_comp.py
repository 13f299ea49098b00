"""
Bridge scoring component.

Bridges are tags that ride along with the seed tags in recent history:

    score = (co / seed_hits) * log1p(total / df)

- co        = recent events containing the tag and any seed tag
- seed_hits = recent events containing any seed tag
- df        = recent events containing the tag
- total     = recent events

The first factor is relevance to the seeds, the second boosts tags that are
not ubiquitous. Ties are broken by tag name so output is reproducible.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from tagpivot.components.analytics.window_comp import events_within_last_days
from tagpivot.components.tags.tag_normalization_comp import normalize_tag_set
from tagpivot.helpers.dto.events_dto import TagEvent
from tagpivot.helpers.dto.metrics_dto import BridgeResult
from tagpivot.helpers.time_helper import now_ms as current_ms

logger = logging.getLogger(__name__)

DEFAULT_MIN_CO = 2


def compute_bridges(
    events: Sequence[TagEvent],
    seed_tags: Iterable[str],
    days: int,
    top_k: int,
    min_co: int = DEFAULT_MIN_CO,
    now_ms: int | None = None,
) -> list[BridgeResult]:
    """
    Rank tags connecting the seed tags to the rest of recent history.

    Returns:
        Up to top_k BridgeResult, score descending then tag ascending; empty
        when there are no seeds, no recent events, or no seed hits
    """
    seed = normalize_tag_set(seed_tags)
    recent = events_within_last_days(events, days, current_ms() if now_ms is None else now_ms)
    total = len(recent)
    if total == 0 or not seed:
        return []

    df: dict[str, int] = {}
    co: dict[str, int] = {}
    seed_hits = 0

    for evt in recent:
        tags = normalize_tag_set(evt.tags)
        if not tags:
            continue
        hit_seed = not seed.isdisjoint(tags)
        if hit_seed:
            seed_hits += 1
        for tag in tags - seed:
            df[tag] = df.get(tag, 0) + 1
            if hit_seed:
                co[tag] = co.get(tag, 0) + 1

    if seed_hits == 0:
        return []

    out: list[BridgeResult] = []
    for tag, c in co.items():
        if c < min_co:
            continue
        d = df.get(tag, 1)
        score = (c / seed_hits) * math.log1p(total / d)
        out.append(BridgeResult(tag=tag, score=score, co=c, df=d))

    out.sort(key=lambda r: (-r.score, r.tag))
    logger.debug("[bridges] %d candidates from %d recent events (%d seed hits)", len(out), total, seed_hits)
    return out[: max(0, top_k)]
