"""
Table-level operation classes.
"""

from .kv_store_sql import KeyValueOperations

__all__ = ["KeyValueOperations"]
