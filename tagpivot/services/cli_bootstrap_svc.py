"""CLI Bootstrap Service - Service Container for CLI Commands.

Builds the services a CLI command needs from config (or an explicit --db path).

Architecture:
- CLI commands should NOT import persistence modules directly
- CLI commands SHOULD use these bootstrap functions to get service instances
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tagpivot.helpers.dto.config_dto import AnalysisConfig
from tagpivot.persistence.db import STORAGE_KEYS, Database
from tagpivot.services.config_svc import ConfigService
from tagpivot.services.event_store_svc import EventStoreService
from tagpivot.services.rolling_series_svc import RollingSeriesService

logger = logging.getLogger(__name__)


@dataclass
class CliServices:
    """Everything a command needs, sharing one Database."""

    db: Database
    store: EventStoreService
    temp_series: RollingSeriesService
    pol_series: RollingSeriesService
    analysis: AnalysisConfig

    def close(self) -> None:
        self.db.close()


def get_config_service() -> ConfigService:
    """Get ConfigService instance for CLI operations."""
    return ConfigService()


def get_database(db_path: str | None = None, config_service: ConfigService | None = None) -> Database:
    """Get Database instance for CLI operations.

    Args:
        db_path: Explicit path (the --db option); falls back to config db_path

    Raises:
        StoreError: If the database cannot be opened
    """
    if not db_path:
        config_service = config_service or get_config_service()
        db_path = str(config_service.get("db_path"))
    return Database(db_path)


def get_cli_services(db_path: str | None = None) -> CliServices:
    """Build the store, rolling series and analysis config for one command run."""
    config_service = get_config_service()
    analysis = config_service.make_analysis_config()
    internal = config_service.get_internal_info()
    db = get_database(db_path, config_service)
    logger.debug("[CLI Bootstrap] Services initialized for %s", db.path)
    return CliServices(
        db=db,
        store=EventStoreService(
            db,
            retention_days=internal.retention_days,
            max_events=internal.max_events,
            dedupe_window_ms=internal.dedupe_window_ms,
        ),
        temp_series=RollingSeriesService(db, STORAGE_KEYS["TEMP_SERIES"], internal.rolling_max),
        pol_series=RollingSeriesService(db, STORAGE_KEYS["POL_SERIES"], internal.rolling_max),
        analysis=analysis,
    )
