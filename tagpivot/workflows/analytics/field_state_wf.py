"""Workflow for the field state (temperature) reading.

Temperature is the total variation distance between the "now" and "prev"
tag distributions of the adaptively chosen window. Each reading is stored as
the sample for end_day and scored against the rolling temperature series.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tagpivot.components.analytics.rolling_stats_comp import build_trend_reading, temp_state_from_z, tv_distance
from tagpivot.components.analytics.window_comp import choose_window_days
from tagpivot.helpers.dto.config_dto import AnalysisConfig
from tagpivot.helpers.dto.metrics_dto import RollingSample
from tagpivot.helpers.dto.workflow_dto import FieldStateResult
from tagpivot.helpers.time_helper import today_day_key

if TYPE_CHECKING:
    from tagpivot.services.event_store_svc import EventStoreService
    from tagpivot.services.rolling_series_svc import RollingSeriesService

logger = logging.getLogger(__name__)

NOT_ENOUGH_DATA = "Not enough local data yet."


def field_state_workflow(
    store: EventStoreService,
    temp_series: RollingSeriesService,
    end_day: str | None = None,
    cfg: AnalysisConfig | None = None,
) -> FieldStateResult:
    """Compute today's temperature and place it against its baseline.

    Args:
        store: Event store providing the daily aggregates.
        temp_series: Rolling temperature series (appended to).
        end_day: Last day of the "now" window; defaults to today.
        cfg: Window thresholds; defaults to AnalysisConfig().

    Returns:
        FieldStateResult; available=False when no window qualifies.
    """
    cfg = cfg or AnalysisConfig()
    end_day = end_day or today_day_key()

    chosen = choose_window_days(
        store.load_daily_aggs(),
        end_day,
        candidates=cfg.window_candidates,
        min_total=cfg.window_min_total,
        min_unique=cfg.window_min_unique,
    )
    if chosen is None:
        logger.debug("[field_state] No qualifying window ending %s", end_day)
        return FieldStateResult(available=False, reason=NOT_ENOUGH_DATA)

    temp = tv_distance(chosen.now.tag_prob, chosen.prev.tag_prob)
    series = temp_series.append(RollingSample(day=end_day, value=temp))
    reading = build_trend_reading(series, temp, temp_state_from_z)

    logger.info("[field_state] %s temp=%.3f z=%.2f w=%dd", reading.state, temp, reading.z_score, chosen.window_days)
    return FieldStateResult(
        available=True,
        window_days=chosen.window_days,
        now_range=(chosen.now.day_from, chosen.now.day_to),
        prev_range=(chosen.prev.day_from, chosen.prev.day_to),
        reading=reading,
    )
