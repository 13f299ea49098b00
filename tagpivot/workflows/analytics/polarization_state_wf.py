"""Workflow for the polarization reading.

Uses the same adaptive window as the field state, runs the polarization
engine over a deterministic sample of the "now" window's events, and scores
the result against the rolling polarization series. When seed tags are given,
a counter-view search query is built from the counter pole and the top bridge.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from tagpivot.components.analytics.bridges_comp import compute_bridges
from tagpivot.components.analytics.polarization_comp import (
    build_counterview_query,
    compute_polarization,
    downsample_deterministic,
)
from tagpivot.components.analytics.rolling_stats_comp import build_trend_reading, pol_state_from_z
from tagpivot.components.analytics.window_comp import choose_window_days, events_in_window
from tagpivot.components.tags.tag_normalization_comp import normalize_tags
from tagpivot.helpers.dto.config_dto import AnalysisConfig
from tagpivot.helpers.dto.metrics_dto import RollingSample
from tagpivot.helpers.dto.workflow_dto import PolarizationStateResult
from tagpivot.helpers.time_helper import now_ms as current_ms
from tagpivot.helpers.time_helper import today_day_key

if TYPE_CHECKING:
    from tagpivot.services.event_store_svc import EventStoreService
    from tagpivot.services.rolling_series_svc import RollingSeriesService

logger = logging.getLogger(__name__)

NOT_ENOUGH_DATA = "Not enough local data yet."
NOT_ENOUGH_STRUCTURE = "Not enough structure yet."


def polarization_state_workflow(
    store: EventStoreService,
    pol_series: RollingSeriesService,
    seed_tags: Iterable[str] = (),
    end_day: str | None = None,
    cfg: AnalysisConfig | None = None,
    now_ms: int | None = None,
) -> PolarizationStateResult:
    """Compute today's polarization and place it against its baseline.

    Args:
        store: Event store providing aggregates and events.
        pol_series: Rolling polarization series (appended to).
        seed_tags: Current page tags, used only for the counter-view query.
        end_day: Last day of the "now" window; defaults to today.
        cfg: Thresholds and caps; defaults to AnalysisConfig().
        now_ms: Reference time for the bridge recency filter.

    Returns:
        PolarizationStateResult; available=False when there is no qualifying
        window, too few events in it, or no opposing structure.
    """
    cfg = cfg or AnalysisConfig()
    end_day = end_day or today_day_key(now_ms)

    chosen = choose_window_days(
        store.load_daily_aggs(),
        end_day,
        candidates=cfg.window_candidates,
        min_total=cfg.window_min_total,
        min_unique=cfg.window_min_unique,
    )
    if chosen is None:
        return PolarizationStateResult(available=False, reason=NOT_ENOUGH_DATA)

    events_all = store.load_events()
    window_events = events_in_window(events_all, chosen.now.day_from, chosen.now.day_to)
    if len(window_events) < cfg.pol_min_events:
        logger.debug("[polarization] %d events in window, need %d", len(window_events), cfg.pol_min_events)
        return PolarizationStateResult(available=False, reason=NOT_ENOUGH_STRUCTURE, window_days=chosen.window_days)

    sampled = downsample_deterministic(window_events, cfg.pol_max_events)
    out = compute_polarization(sampled, cfg.pole_size)
    if out is None:
        return PolarizationStateResult(
            available=False,
            reason=NOT_ENOUGH_STRUCTURE,
            window_days=chosen.window_days,
            sampled_events=len(sampled),
        )

    series = pol_series.append(RollingSample(day=end_day, value=out.pol))
    reading = build_trend_reading(series, out.pol, pol_state_from_z)

    seeds = normalize_tags(seed_tags)
    query = ""
    if seeds:
        bridges = compute_bridges(
            events_all,
            seeds,
            days=cfg.bridge_days,
            top_k=cfg.bridge_top_k,
            min_co=cfg.min_co,
            now_ms=current_ms() if now_ms is None else now_ms,
        )
        query = build_counterview_query(out.counter_pole, seeds, bridges[0].tag if bridges else None)

    logger.info("[polarization] %s pol=%.3f z=%.2f w=%dd", reading.state, out.pol, reading.z_score, chosen.window_days)
    return PolarizationStateResult(
        available=True,
        window_days=chosen.window_days,
        reading=reading,
        active_pole=out.active_pole,
        counter_pole=out.counter_pole,
        counterview_query=query,
        sampled_events=len(sampled),
    )
