import logging
import os
import sqlite3
import threading

from tagpivot.helpers.exceptions import StoreError
from tagpivot.persistence.database.kv_store_sql import KeyValueOperations

__all__ = [
    "SCHEMA",
    "SCHEMA_VERSION",
    "STORAGE_KEYS",
    "Database",
]

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
#  Database Schema
# ----------------------------------------------------------------------

SCHEMA = [
    # Key-value store: event log, daily aggregates, meta, rolling series
    """
    CREATE TABLE IF NOT EXISTS kv (
        key TEXT PRIMARY KEY,
        value TEXT
    );
    """,
]

# Schema version of the SQLite container itself (the stored payload has its
# own version inside StoreMeta)
SCHEMA_VERSION = 1

# Fixed logical keys
STORAGE_KEYS = {
    "EVENTS": "tagpivot_events_v1",
    "DAILY": "tagpivot_daily_v1",
    "META": "tagpivot_meta_v1",
    "TEMP_SERIES": "tagpivot_temp_series_v1",
    "POL_SERIES": "tagpivot_pol_series_v1",
}


# ----------------------------------------------------------------------
#  Database Layer
# ----------------------------------------------------------------------
class Database:
    """
    Local key-value persistence.

    One SQLite file holds every persisted structure as JSON under a fixed key.
    Pass ":memory:" for a throwaway store.
    """

    def __init__(self, path: str):
        self.path = path
        if path != ":memory:":
            # Ensure parent directory exists so sqlite can create the DB file.
            db_dir = os.path.dirname(path) or "."
            try:
                os.makedirs(db_dir, exist_ok=True)
            except OSError as exc:
                raise StoreError(f"Unable to create database directory '{db_dir}': {exc}") from exc

        try:
            # Autocommit mode; multi-statement units use KeyValueOperations.transaction()
            self.conn = sqlite3.connect(path, check_same_thread=False, isolation_level=None)
            if path != ":memory:":
                self.conn.execute("PRAGMA journal_mode=WAL;")
            for ddl in SCHEMA:
                self.conn.execute(ddl)
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to open SQLite DB at '{path}'. Ensure the directory is writable: {exc}") from exc

        self._lock = threading.RLock()
        self.kv = KeyValueOperations(self.conn, self._lock)

        if self.kv.get_raw("schema_version") is None:
            self.kv.set_json("schema_version", SCHEMA_VERSION)
        logger.debug("[db] Opened %s", path)

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            self.conn.close()
