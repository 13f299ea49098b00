"""
Tag co-occurrence graph component.

df[t]     = number of events containing t
co[a][b]  = number of events containing both a and b (symmetric, no self-pairs)
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from itertools import combinations

from tagpivot.helpers.dto.events_dto import TagEvent


@dataclass
class CoOccurrenceGraph:
    df: dict[str, int] = field(default_factory=dict)
    co: dict[str, dict[str, int]] = field(default_factory=dict)

    def get_co(self, a: str, b: str) -> int:
        row = self.co.get(a)
        return row.get(b, 0) if row else 0

    @property
    def tag_count(self) -> int:
        return len(self.df)

    def sum_within(self, cluster: Sequence[str]) -> int:
        """Co-occurrence mass over every unordered pair inside a cluster."""
        return sum(self.get_co(a, b) for a, b in combinations(cluster, 2))

    def sum_cross(self, left: Sequence[str], right: Sequence[str]) -> int:
        """Co-occurrence mass over every (left, right) pair."""
        return sum(self.get_co(a, b) for a in left for b in right)


def _add_co(co: dict[str, dict[str, int]], a: str, b: str) -> None:
    row = co.setdefault(a, {})
    row[b] = row.get(b, 0) + 1


def build_cooccurrence_graph(events: Iterable[TagEvent]) -> CoOccurrenceGraph:
    graph = CoOccurrenceGraph()
    for evt in events:
        tags = sorted({t for t in evt.tags if t})
        for tag in tags:
            graph.df[tag] = graph.df.get(tag, 0) + 1
        for a, b in combinations(tags, 2):
            _add_co(graph.co, a, b)
            _add_co(graph.co, b, a)
    return graph
