"""
Analytics components - windows, rolling baselines, co-occurrence polarization,
bridges and counterpoint.
"""

from .bizarro_comp import compute_bizarro
from .bridges_comp import compute_bridges
from .cooccurrence_graph_comp import CoOccurrenceGraph, build_cooccurrence_graph
from .polarization_comp import build_counterview_query, compute_polarization, downsample_deterministic
from .rolling_stats_comp import (
    append_sample,
    build_trend_reading,
    mean_std,
    pol_state_from_z,
    sparkline,
    temp_state_from_z,
    tv_distance,
    z_score,
)
from .window_comp import build_window_agg, choose_window_days, events_in_window, events_within_last_days

__all__ = [
    "CoOccurrenceGraph",
    "append_sample",
    "build_trend_reading",
    "build_cooccurrence_graph",
    "build_counterview_query",
    "build_window_agg",
    "choose_window_days",
    "compute_bizarro",
    "compute_bridges",
    "compute_polarization",
    "downsample_deterministic",
    "events_in_window",
    "events_within_last_days",
    "mean_std",
    "pol_state_from_z",
    "sparkline",
    "temp_state_from_z",
    "tv_distance",
    "z_score",
]
