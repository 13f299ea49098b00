"""Key-value store operations (JSON values under fixed logical keys)."""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from tagpivot.helpers.exceptions import StoreError

logger = logging.getLogger(__name__)


class KeyValueOperations:
    """Operations for the kv table. Values are stored as JSON text."""

    def __init__(self, conn: sqlite3.Connection, lock: threading.RLock) -> None:
        self.conn = conn
        self._lock = lock
        self._depth = 0

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """
        Run a block as one atomic unit.

        Takes the write lock up front (BEGIN IMMEDIATE) so a read-modify-write
        sequence cannot interleave with another writer. Nested calls join the
        outer transaction.
        """
        with self._lock:
            if self._depth:
                self._depth += 1
                try:
                    yield
                finally:
                    self._depth -= 1
                return

            try:
                self.conn.execute("BEGIN IMMEDIATE")
            except sqlite3.Error as exc:
                raise StoreError(f"Failed to begin transaction: {exc}") from exc

            self._depth = 1
            try:
                yield
            except BaseException:
                try:
                    self.conn.execute("ROLLBACK")
                except sqlite3.Error:
                    logger.exception("[kv_store] Rollback failed")
                raise
            else:
                try:
                    self.conn.execute("COMMIT")
                except sqlite3.Error as exc:
                    raise StoreError(f"Failed to commit transaction: {exc}") from exc
            finally:
                self._depth = 0

    def get_raw(self, key: str) -> str | None:
        """Get the stored JSON text for a key."""
        try:
            cur = self.conn.execute("SELECT value FROM kv WHERE key=?", (key,))
            row = cur.fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to read key '{key}': {exc}") from exc
        return row[0] if row else None

    def get_json(self, key: str) -> Any | None:
        """
        Get a decoded value by key.

        Returns:
            Decoded JSON value, or None if absent or not valid JSON
        """
        raw = self.get_raw(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            logger.warning("[kv_store] Ignoring malformed JSON under key '%s'", key)
            return None

    def get_many(self, keys: Iterable[str]) -> dict[str, Any | None]:
        """Decode several keys inside one read."""
        with self.transaction():
            return {key: self.get_json(key) for key in keys}

    def set_json(self, key: str, value: Any) -> None:
        """Encode and store a single value."""
        self.set_many({key: value})

    def set_many(self, values: Mapping[str, Any]) -> None:
        """Encode and store several values atomically."""
        rows = [(key, json.dumps(value, ensure_ascii=False, separators=(",", ":"))) for key, value in values.items()]
        with self.transaction():
            try:
                self.conn.executemany("INSERT OR REPLACE INTO kv(key, value) VALUES(?,?)", rows)
            except sqlite3.Error as exc:
                raise StoreError(f"Failed to write keys {list(values)}: {exc}") from exc

    def delete_many(self, keys: Iterable[str]) -> None:
        """Delete several keys atomically (missing keys are ignored)."""
        rows = [(key,) for key in keys]
        with self.transaction():
            try:
                self.conn.executemany("DELETE FROM kv WHERE key=?", rows)
            except sqlite3.Error as exc:
                raise StoreError(f"Failed to delete keys: {exc}") from exc

    def keys(self) -> list[str]:
        try:
            cur = self.conn.execute("SELECT key FROM kv ORDER BY key")
            return [row[0] for row in cur.fetchall()]
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to list keys: {exc}") from exc
