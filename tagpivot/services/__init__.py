"""
Services package.
"""

from .config_svc import (
    INTERNAL_DEDUPE_WINDOW_MS,
    INTERNAL_MAX_EVENTS,
    INTERNAL_RETENTION_DAYS,
    INTERNAL_ROLLING_MAX,
    INTERNAL_STORE_VERSION,
    ConfigService,
)
from .event_store_svc import STORE_VERSION, EventStoreService
from .rolling_series_svc import RollingSeriesService

__all__ = [
    "INTERNAL_DEDUPE_WINDOW_MS",
    "INTERNAL_MAX_EVENTS",
    "INTERNAL_RETENTION_DAYS",
    "INTERNAL_ROLLING_MAX",
    "INTERNAL_STORE_VERSION",
    "STORE_VERSION",
    "ConfigService",
    "EventStoreService",
    "RollingSeriesService",
]
