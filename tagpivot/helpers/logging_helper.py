"""
Logging helpers: identity/role tagging, per-thread context, and setup.

Log lines look like:
    2026-10-19 10:00:00 INFO [Event Store] [Service] [cmd=record] Appended event ...

Identity and role are derived from the logger name suffix, so modules only
need `logging.getLogger(__name__)`.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
import threading
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(tagpivot_identity_tag)s %(tagpivot_role_tag)s%(context_str)s%(message)s"

# Module suffix -> role label
ROLE_SUFFIXES: dict[str, str] = {
    "_svc": "Service",
    "_wf": "Workflow",
    "_comp": "Component",
    "_sql": "SQL",
    "_helper": "Helper",
    "_dto": "DTO",
    "_cli": "CLI",
}

_context = threading.local()


def set_log_context(**values: Any) -> None:
    """Attach key=value pairs to every log line emitted from this thread."""
    current = getattr(_context, "values", None)
    if current is None:
        current = {}
        _context.values = current
    current.update(values)


def clear_log_context() -> None:
    """Remove all context values for this thread."""
    _context.values = {}


def _format_context() -> str:
    values = getattr(_context, "values", None)
    if not values:
        return ""
    inner = " ".join(f"{k}={v}" for k, v in values.items())
    return f"[{inner}] "


def _derive_tags(name: str) -> tuple[str, str]:
    if not name.startswith("tagpivot") and "." in name:
        return name, ""

    leaf = name.rsplit(".", 1)[-1]
    for suffix, role in ROLE_SUFFIXES.items():
        if leaf.endswith(suffix):
            stem = leaf[: -len(suffix)]
            if not stem:
                return name, ""
            identity = " ".join(part.capitalize() for part in stem.split("_") if part)
            return f"[{identity}]", f"[{role}]"
    return name, ""


class TagpivotLogFilter(logging.Filter):
    """
    Adds `tagpivot_identity_tag`, `tagpivot_role_tag` and `context_str`
    attributes to every record. Never suppresses a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            identity, role = _derive_tags(str(record.name or ""))
        except Exception:
            identity, role = str(getattr(record, "name", "")), ""
        record.tagpivot_identity_tag = identity
        record.tagpivot_role_tag = f"{role} " if role else ""
        record.context_str = _format_context()
        return True


def configure_logging(level: str | int = "INFO", log_file: str | None = None) -> None:
    """
    Configure root logging once for the process.

    Args:
        level: Log level name or number
        log_file: Optional path for a rotating file handler (10MB x 5)
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler.addFilter(TagpivotLogFilter())
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler.addFilter(TagpivotLogFilter())
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logger.debug("[logging] Configured level=%s file=%s", logging.getLevelName(level), log_file)
