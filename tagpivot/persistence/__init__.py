"""
Persistence package - local SQLite key-value storage.
"""

from .db import STORAGE_KEYS, Database

__all__ = ["STORAGE_KEYS", "Database"]
