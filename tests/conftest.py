"""
Pytest fixtures and configuration for the test suite.

- Real SQLite database in a temp directory (no mocks)
- Fixed clock so retention and recency filters are reproducible
- Timestamps are built from local datetimes, matching how day keys are derived
"""

import sys
from collections.abc import Callable, Generator, Iterable
from datetime import datetime
from pathlib import Path

import pytest

# Add project root to path so tests can import tagpivot package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from tagpivot.helpers.dto.events_dto import TagEvent  # noqa: E402
from tagpivot.helpers.logging_helper import clear_log_context  # noqa: E402
from tagpivot.helpers.time_helper import day_key_from_ms  # noqa: E402
from tagpivot.persistence.db import STORAGE_KEYS, Database  # noqa: E402
from tagpivot.services.event_store_svc import EventStoreService  # noqa: E402
from tagpivot.services.rolling_series_svc import RollingSeriesService  # noqa: E402


def local_ms(year: int, month: int, day: int, hour: int = 12, minute: int = 0, second: int = 0) -> int:
    """Epoch milliseconds of a local wall-clock time."""
    return int(datetime(year, month, day, hour, minute, second).timestamp() * 1000)


# Reference "now" for tests: 2026-03-15 12:00 local
NOW_MS = local_ms(2026, 3, 15)
TODAY = "2026-03-15"


def make_event(
    tags: Iterable[str],
    ts_ms: int = NOW_MS,
    url_hash: str = "sha256:page",
    domain: str = "example.com",
) -> TagEvent:
    """Build a TagEvent whose day matches its timestamp."""
    return TagEvent(
        day=day_key_from_ms(ts_ms),
        captured_at_ms=ts_ms,
        domain=domain,
        url_hash=url_hash,
        tags=list(tags),
    )


@pytest.fixture(autouse=True)
def _reset_log_context() -> Generator[None, None, None]:
    yield
    clear_log_context()


@pytest.fixture
def fixed_now() -> int:
    return NOW_MS


@pytest.fixture
def temp_db(tmp_path: Path) -> Generator[Database, None, None]:
    """File-backed database in a per-test temp directory."""
    db = Database(str(tmp_path / "db" / "tagpivot.db"))
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def in_memory_db() -> Generator[Database, None, None]:
    """Throwaway in-memory database."""
    db = Database(":memory:")
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def clock() -> Callable[[], int]:
    return lambda: NOW_MS


@pytest.fixture
def store(temp_db: Database, clock: Callable[[], int]) -> EventStoreService:
    return EventStoreService(temp_db, clock=clock)


@pytest.fixture
def temp_series(temp_db: Database) -> RollingSeriesService:
    return RollingSeriesService(temp_db, STORAGE_KEYS["TEMP_SERIES"])


@pytest.fixture
def pol_series(temp_db: Database) -> RollingSeriesService:
    return RollingSeriesService(temp_db, STORAGE_KEYS["POL_SERIES"])
