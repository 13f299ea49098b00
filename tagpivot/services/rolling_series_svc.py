"""
Rolling series service - a bounded per-day series of one scalar metric.

One instance per metric (temperature, polarization), each under its own KV key.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tagpivot.components.analytics.rolling_stats_comp import ROLLING_MAX, append_sample
from tagpivot.helpers.dto.metrics_dto import RollingSample
from tagpivot.helpers.time_helper import is_finite_number, is_valid_day_key

if TYPE_CHECKING:
    from tagpivot.persistence.db import Database

logger = logging.getLogger(__name__)


class RollingSeriesService:
    """Load and append samples for one persisted rolling series."""

    def __init__(self, db: Database, key: str, max_len: int = ROLLING_MAX) -> None:
        self._db = db
        self.key = key
        self.max_len = max_len

    def load(self) -> list[RollingSample]:
        """Stored samples in ascending day order. Malformed entries are skipped."""
        raw = self._db.kv.get_json(self.key)
        if not isinstance(raw, list):
            return []
        samples = [
            RollingSample(day=item["day"], value=float(item["value"]))
            for item in raw
            if isinstance(item, dict) and is_valid_day_key(item.get("day")) and is_finite_number(item.get("value"))
        ]
        samples.sort(key=lambda s: s.day)
        return samples

    def append(self, sample: RollingSample) -> list[RollingSample]:
        """
        Store a sample (replacing any existing sample for the same day).

        Returns:
            The updated series, ascending by day, at most max_len long
        """
        with self._db.kv.transaction():
            series = append_sample(self.load(), sample, self.max_len)
            self._db.kv.set_json(self.key, [{"day": s.day, "value": s.value} for s in series])
        logger.debug("[rolling_series] %s: %s=%.4f (n=%d)", self.key, sample.day, sample.value, len(series))
        return series

    def clear(self) -> None:
        self._db.kv.delete_many([self.key])
