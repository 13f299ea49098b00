"""Custom exceptions used across multiple layers.

Rules:
- Only put exceptions here if they need to be raised in one layer and caught in another.
- Keep exceptions simple and focused.
- No I/O, no config loading, no complex logic.
"""

from __future__ import annotations


class StoreError(Exception):
    """Raised when the local key-value store cannot be opened, read or written."""


class EventParseError(ValueError):
    """Raised when a raw event record cannot be turned into a TagEvent."""
