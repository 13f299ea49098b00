# ======================================================================
#  Config Service - Configuration loading and caching
#  - Loads config from YAML and env vars
#  - Caches composed config
#  - Builds typed AnalysisConfig for the workflows
# ======================================================================

from __future__ import annotations

import logging
import os
from typing import Any

import yaml

from tagpivot.helpers.dto.config_dto import AnalysisConfig, InternalInfo

# ======================================================================
# Internal Constants (Not User-Configurable)
# ======================================================================
# Storage policy. Changing these changes what the store keeps, so they are
# not exposed in config.yaml or environment variables.

INTERNAL_STORE_VERSION = 1
INTERNAL_RETENTION_DAYS = 60  # Events older than this are dropped on write
INTERNAL_MAX_EVENTS = 20_000  # Hard cap on the event log
INTERNAL_DEDUPE_WINDOW_MS = 30_000  # Same page within 30s counts once
INTERNAL_ROLLING_MAX = 60  # Samples kept per rolling series

ENV_PREFIX = "TAGPIVOT_"

# Whitelist of user-configurable keys (YAML and env)
USER_KEYS = frozenset(
    {
        "db_path",
        "log_level",
        "window_candidates",
        "window_min_total",
        "window_min_unique",
        "bridge_days",
        "bridge_top_k",
        "bridge_top_m",
        "min_co",
        "pole_size",
        "pol_min_events",
        "pol_max_events",
    }
)


class ConfigService:
    """
    Service for loading and caching application configuration.

    Loads config from multiple sources (defaults → YAML → overrides → env)
    and caches the result.
    """

    def __init__(self, overrides: dict[str, Any] | None = None) -> None:
        """
        Initialize ConfigService with empty cache.

        Args:
            overrides: Values applied after YAML files and before env vars
        """
        self._config: dict[str, Any] | None = None
        self._overrides = overrides or {}
        self._logger = logging.getLogger(__name__)

    def get_config(self, force_reload: bool = False) -> dict[str, Any]:
        """
        Get the composed configuration.

        Args:
            force_reload: If True, bypass cache and reload from sources

        Returns:
            Complete configuration dict
        """
        if self._config is None or force_reload:
            self._config = self._compose(self._overrides)
        return self._config

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dotted path.

        Example:
            >>> service.get("bridge_top_k")
            10
        """
        node: Any = self.get_config()
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def reload(self) -> dict[str, Any]:
        """Force reload configuration from all sources."""
        self._logger.info("[config] Reloading configuration from all sources")
        return self.get_config(force_reload=True)

    def get_internal_info(self) -> InternalInfo:
        """Internal (read-only) storage constants."""
        return InternalInfo(
            store_version=INTERNAL_STORE_VERSION,
            retention_days=INTERNAL_RETENTION_DAYS,
            max_events=INTERNAL_MAX_EVENTS,
            dedupe_window_ms=INTERNAL_DEDUPE_WINDOW_MS,
            rolling_max=INTERNAL_ROLLING_MAX,
        )

    def make_analysis_config(self) -> AnalysisConfig:
        """
        Build an AnalysisConfig from the current configuration.

        Raises:
            ValueError: If a value cannot be coerced to its expected type
        """
        cfg = self.get_config()
        return AnalysisConfig(
            window_candidates=_parse_int_list(cfg["window_candidates"]),
            window_min_total=int(cfg["window_min_total"]),
            window_min_unique=int(cfg["window_min_unique"]),
            bridge_days=int(cfg["bridge_days"]),
            bridge_top_k=int(cfg["bridge_top_k"]),
            bridge_top_m=int(cfg["bridge_top_m"]),
            min_co=int(cfg["min_co"]),
            pole_size=int(cfg["pole_size"]),
            pol_min_events=int(cfg["pol_min_events"]),
            pol_max_events=int(cfg["pol_max_events"]),
        )

    # ----------------------------------------------------------------------
    # Private composition logic
    # ----------------------------------------------------------------------

    def _compose(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Load final configuration from:
          1) Built-in defaults
          2) /etc/tagpivot/config.yaml  (if present)
          3) ./config/config.yaml
          4) $TAGPIVOT_CONFIG_PATH (if set)
          5) overrides dict passed in
          6) Environment variables (TAGPIVOT_*)
        """
        cfg = self._default_config()

        self._deep_merge(cfg, self._load_yaml("/etc/tagpivot/config.yaml"))
        self._deep_merge(cfg, self._load_yaml(os.path.join(os.getcwd(), "config", "config.yaml")))

        env_path = os.getenv(f"{ENV_PREFIX}CONFIG_PATH")
        if env_path:
            self._deep_merge(cfg, self._load_yaml(env_path))

        if overrides:
            self._deep_merge(cfg, overrides)

        self._apply_env_overrides(cfg)

        self._logger.debug("[config] compose() loaded config; keys: %s", sorted(cfg))
        return cfg

    def _default_config(self) -> dict[str, Any]:
        """Base defaults for USER-CONFIGURABLE settings only."""
        defaults = AnalysisConfig()
        return {
            "db_path": os.path.join(os.path.expanduser("~"), ".tagpivot", "tagpivot.db"),
            "log_level": "WARNING",
            "window_candidates": list(defaults.window_candidates),
            "window_min_total": defaults.window_min_total,
            "window_min_unique": defaults.window_min_unique,
            "bridge_days": defaults.bridge_days,
            "bridge_top_k": defaults.bridge_top_k,
            "bridge_top_m": defaults.bridge_top_m,
            "min_co": defaults.min_co,
            "pole_size": defaults.pole_size,
            "pol_min_events": defaults.pol_min_events,
            "pol_max_events": defaults.pol_max_events,
        }

    def _deep_merge(self, a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
        """Recursively merge dict b into dict a (mutates a, returns it)."""
        for k, v in b.items():
            if isinstance(v, dict) and isinstance(a.get(k), dict):
                self._deep_merge(a[k], v)
            else:
                a[k] = v
        return a

    def _load_yaml(self, path: str) -> dict[str, Any]:
        """Load a YAML mapping; returns {} if not found or invalid."""
        if not path or not os.path.exists(path):
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            self._logger.warning("[config] Ignoring unreadable config file %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            return {}
        return data

    def _apply_env_overrides(self, cfg: dict[str, Any]) -> None:
        """
        Support environment overrides for the user-configurable keys only.

        Supported formats:
          TAGPIVOT_DB_PATH=/custom/tagpivot.db
          TAGPIVOT_LOG_LEVEL=DEBUG
          TAGPIVOT_WINDOW_CANDIDATES=8,13,21
          TAGPIVOT_BRIDGE_TOP_K=15
        """
        for k, v in os.environ.items():
            if not k.startswith(ENV_PREFIX):
                continue
            key = k[len(ENV_PREFIX) :].lower()
            if key == "config_path":
                continue
            if key not in USER_KEYS:
                self._logger.debug("[config] Ignoring environment override for unknown key: %s", key)
                continue

            val: Any
            if v.lower() in ("true", "false"):
                val = v.lower() == "true"
            elif v.isdigit():
                val = int(v)
            elif v.replace(".", "", 1).replace("-", "", 1).isdigit():
                val = float(v)
            else:
                val = v
            cfg[key] = val


def _parse_int_list(value: Any) -> tuple[int, ...]:
    """Accept a YAML list, a single number, or a comma-separated string."""
    if isinstance(value, str):
        parts = [p.strip() for p in value.split(",") if p.strip()]
        return tuple(int(p) for p in parts)
    if isinstance(value, (int, float)):
        return (int(value),)
    return tuple(int(v) for v in value)
