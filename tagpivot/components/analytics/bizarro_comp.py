"""
Counterpoint ("bizarro") scoring component.

Second-order contrast: tags that show up near the user's bridge topics in
events that deliberately avoid the seed topics.

    score = (co_bridge / bridge_hits) * log1p(total / df)

- bridge set  = top `bridge_top_m` bridges, minus any seed tag
- bridge_hits = recent events with no seed tag and at least one bridge tag
- co_bridge   = bridge-hit events containing the candidate
- df          = recent events containing the candidate
Seed and bridge tags are never candidates.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from tagpivot.components.analytics.window_comp import events_within_last_days
from tagpivot.components.tags.tag_normalization_comp import normalize_tag_set
from tagpivot.helpers.dto.events_dto import TagEvent
from tagpivot.helpers.dto.metrics_dto import BizarroResult, BridgeResult
from tagpivot.helpers.time_helper import now_ms as current_ms

logger = logging.getLogger(__name__)

DEFAULT_BRIDGE_TOP_M = 6
DEFAULT_MIN_CO = 2


def compute_bizarro(
    events: Sequence[TagEvent],
    seed_tags: Iterable[str],
    bridges: Sequence[BridgeResult],
    days: int,
    top_k: int,
    bridge_top_m: int = DEFAULT_BRIDGE_TOP_M,
    min_co: int = DEFAULT_MIN_CO,
    now_ms: int | None = None,
) -> list[BizarroResult]:
    """
    Rank counterpoint tags anchored on the top bridges.

    Returns:
        Up to top_k BizarroResult, score descending then tag ascending
    """
    seed = normalize_tag_set(seed_tags)
    if not seed:
        return []

    bridge_set = normalize_tag_set(b.tag for b in bridges[: max(0, bridge_top_m)]) - seed
    if not bridge_set:
        return []

    recent = events_within_last_days(events, days, current_ms() if now_ms is None else now_ms)
    total = len(recent)
    if total == 0:
        return []

    excluded = seed | bridge_set
    df: dict[str, int] = {}
    co_bridge: dict[str, int] = {}
    bridge_hits = 0

    for evt in recent:
        tags = normalize_tag_set(evt.tags)
        candidates = tags - excluded
        for tag in candidates:
            df[tag] = df.get(tag, 0) + 1

        if not seed.isdisjoint(tags) or bridge_set.isdisjoint(tags):
            continue
        bridge_hits += 1
        for tag in candidates:
            co_bridge[tag] = co_bridge.get(tag, 0) + 1

    if bridge_hits == 0:
        return []

    out: list[BizarroResult] = []
    for tag, c in co_bridge.items():
        if c < min_co:
            continue
        d = df.get(tag, 1)
        score = (c / bridge_hits) * math.log1p(total / d)
        out.append(BizarroResult(tag=tag, score=score, co_bridge=c, df=d))

    out.sort(key=lambda r: (-r.score, r.tag))
    logger.debug("[bizarro] %d candidates from %d bridge hits", len(out), bridge_hits)
    return out[: max(0, top_k)]
