"""
Polarization component.

Builds two opposing topic clusters on the co-occurrence graph and measures
how much co-occurrence mass stays inside them versus crossing between them.
The "opposite" pole is structural separation, not a sentiment judgment.

Steps:
1. center   = tag with the highest df (ties: lexicographically smallest)
2. opposite = reasonably frequent tag least tied to center
3. grow a cluster of `pole_size` tags around each
4. pol = within / (within + cross), clamped to [0, 1]
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from typing import TypeVar

from tagpivot.components.analytics.cooccurrence_graph_comp import CoOccurrenceGraph, build_cooccurrence_graph
from tagpivot.components.tags.tag_normalization_comp import normalize_tag, normalize_tag_set
from tagpivot.helpers.dto.events_dto import TagEvent
from tagpivot.helpers.dto.metrics_dto import PolarizationDebug, PolarizationOut

logger = logging.getLogger(__name__)

MIN_EVENTS = 6
MIN_DISTINCT_TAGS = 8
DEFAULT_POLE_SIZE = 8
MIN_CANDIDATE_DF = 2  # rarer tags are noise
POL_MAX_EVENTS = 2500
COUNTERVIEW_MAX_COUNTER = 3

T = TypeVar("T")


def downsample_deterministic(items: Sequence[T], cap: int = POL_MAX_EVENTS) -> list[T]:
    """
    Fixed-stride sample from the start: stride = ceil(n / cap), at most `cap`
    items, order preserved. Same input always yields the same sample.
    """
    n = len(items)
    if cap <= 0:
        return []
    if n <= cap:
        return list(items)
    stride = math.ceil(n / cap)
    return list(items[::stride][:cap])


def pick_center(graph: CoOccurrenceGraph) -> str | None:
    if not graph.df:
        return None
    return min(graph.df.items(), key=lambda kv: (-kv[1], kv[0]))[0]


def pick_opposite(graph: CoOccurrenceGraph, center: str) -> str | None:
    """Among tags with df >= 2, minimize (co(center, t) + 0.25) / (df(t) + 0.25)."""
    if graph.df.get(center, 0) <= 0:
        return None
    best: tuple[float, str] | None = None
    for tag, d in graph.df.items():
        if tag == center or d < MIN_CANDIDATE_DF:
            continue
        score = (graph.get_co(center, tag) + 0.25) / (d + 0.25)
        if best is None or (score, tag) < best:
            best = (score, tag)
    return best[1] if best else None


def grow_cluster(graph: CoOccurrenceGraph, seed: str, ban: set[str], k: int) -> list[str]:
    """
    Seed plus the top k-1 neighbours by co(seed, t) / (df(t) + 0.5).

    Neighbours must have df >= 2 and co(seed, t) > 0; banned tags are skipped.
    """
    scored: list[tuple[float, str]] = []
    for tag, d in graph.df.items():
        if tag == seed or tag in ban or d < MIN_CANDIDATE_DF:
            continue
        co = graph.get_co(seed, tag)
        if co <= 0:
            continue
        scored.append((co / (d + 0.5), tag))

    scored.sort(key=lambda st: (-st[0], st[1]))
    return [seed] + [tag for _, tag in scored[: max(0, k - 1)]]


def compute_polarization(events: Sequence[TagEvent], pole_size: int = DEFAULT_POLE_SIZE) -> PolarizationOut | None:
    """
    Compute the polarization scalar and its two poles.

    Returns:
        PolarizationOut, or None when there are fewer than 6 events, fewer
        than 8 distinct tags, or no qualifying opposite tag
    """
    if len(events) < MIN_EVENTS:
        return None

    graph = build_cooccurrence_graph(events)
    if graph.tag_count < MIN_DISTINCT_TAGS:
        return None

    center = pick_center(graph)
    if center is None:
        return None
    opposite = pick_opposite(graph, center)
    if opposite is None:
        return None

    active = grow_cluster(graph, center, {opposite}, pole_size)
    counter = grow_cluster(graph, opposite, {center}, pole_size)

    within = graph.sum_within(active) + graph.sum_within(counter)
    cross = graph.sum_cross(active, counter)
    pol = max(0.0, min(1.0, within / (within + cross + 1e-6)))

    logger.debug(
        "[polarization] center=%s opposite=%s within=%d cross=%d pol=%.3f",
        center,
        opposite,
        within,
        cross,
        pol,
    )
    return PolarizationOut(
        pol=pol,
        active_pole=active,
        counter_pole=counter,
        debug=PolarizationDebug(within=within, cross=cross, events=len(events), tags=graph.tag_count),
    )


def build_counterview_query(
    counter_pole: Sequence[str],
    seed_tags: Iterable[str],
    top_bridge: str | None = None,
    max_counter: int = COUNTERVIEW_MAX_COUNTER,
) -> str:
    """
    Search query for stepping into the counter pole.

    Up to `max_counter` counter-pole tags that are not seeds, plus the top
    bridge when it is neither a seed nor already included.
    """
    seeds = normalize_tag_set(seed_tags)
    parts = [t for t in counter_pole if normalize_tag(t) not in seeds][: max(0, max_counter)]
    if top_bridge:
        key = normalize_tag(top_bridge)
        if key and key not in seeds and key not in {normalize_tag(p) for p in parts}:
            parts.append(top_bridge)
    return " ".join(parts)
