"""Workflow for bridges and counterpoint around a set of seed tags."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from tagpivot.components.analytics.bizarro_comp import compute_bizarro
from tagpivot.components.analytics.bridges_comp import compute_bridges
from tagpivot.components.tags.tag_normalization_comp import normalize_tags
from tagpivot.helpers.dto.config_dto import AnalysisConfig
from tagpivot.helpers.dto.events_dto import TagEvent
from tagpivot.helpers.dto.workflow_dto import BridgesResult
from tagpivot.helpers.time_helper import now_ms as current_ms

if TYPE_CHECKING:
    from tagpivot.services.event_store_svc import EventStoreService

logger = logging.getLogger(__name__)


def bridges_workflow(
    store: EventStoreService,
    seed_tags: Iterable[str],
    cfg: AnalysisConfig | None = None,
    now_ms: int | None = None,
    events: list[TagEvent] | None = None,
) -> BridgesResult:
    """Rank bridges for the seed tags, then counterpoint anchored on them.

    Args:
        store: Event store providing the event log.
        seed_tags: The current page's tags.
        cfg: days / top_k / bridge_top_m / min_co; defaults to AnalysisConfig().
        now_ms: Reference time for the recency filter.
        events: Already-loaded events (skips a store read).

    Returns:
        BridgesResult with normalized seeds, bridges and counterpoint.
    """
    cfg = cfg or AnalysisConfig()
    ts = current_ms() if now_ms is None else now_ms
    seeds = normalize_tags(seed_tags)
    if events is None:
        events = store.load_events()

    bridges = compute_bridges(events, seeds, days=cfg.bridge_days, top_k=cfg.bridge_top_k, min_co=cfg.min_co, now_ms=ts)
    counterpoint = compute_bizarro(
        events,
        seeds,
        bridges,
        days=cfg.bridge_days,
        top_k=cfg.bridge_top_k,
        bridge_top_m=cfg.bridge_top_m,
        min_co=cfg.min_co,
        now_ms=ts,
    )

    logger.info("[bridges] %d seed(s): %d bridge(s), %d counterpoint(s)", len(seeds), len(bridges), len(counterpoint))
    return BridgesResult(seed_tags=seeds, bridges=bridges, counterpoint=counterpoint)
