"""
results.py — Batch Algorithm Results
======================================
What each run-to-completion algorithm hands back.  All results are
frozen dataclasses: plain data the benchmark harness, the HTTP layer and
the tests read without touching the algorithm again.

    TraversalResult – DFS / BFS visit order (+ BFS levels)
    SpanningResult  – Prim / Kruskal tree (or forest) edges
    ShortestPaths   – Dijkstra distance + predecessor tables
    AllPairsResult  – Floyd–Warshall distance matrix
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

from graph import Edge
from algorithms.distance import Distance, is_reachable


@dataclass(frozen=True)
class TraversalResult:
    source: int
    order:  Tuple[int, ...]
    levels: Dict[int, int] = field(default_factory=dict)   # BFS only: hop count from source

    @property
    def visited(self) -> FrozenSet[int]:
        return frozenset(self.order)

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "order":  list(self.order),
            "levels": {str(k): v for k, v in self.levels.items()},
        }


@dataclass(frozen=True)
class SpanningResult:
    """
    Attributes:
        edges      : tree edges in the order they were accepted.
        node_count : size of the input graph.
        order      : Prim only — nodes in the order they joined the tree.
        roots      : Prim only — the node each tree of the forest grew from.
    """

    edges:      Tuple[Edge, ...]
    node_count: int
    order:      Tuple[int, ...] = ()
    roots:      Tuple[int, ...] = ()

    @property
    def total_weight(self) -> int:
        return sum(e.weight for e in self.edges)

    @property
    def is_forest(self) -> bool:
        """True when the input was disconnected and only a spanning forest exists."""
        return len(self.edges) < max(self.node_count - 1, 0)

    def to_dict(self) -> dict:
        return {
            "edges":        [e.to_dict() for e in self.edges],
            "total_weight": self.total_weight,
            "is_forest":    self.is_forest,
            "order":        list(self.order),
            "roots":        list(self.roots),
        }


@dataclass(frozen=True)
class ShortestPaths:
    source:      int
    distances:   Tuple[Distance, ...]
    previous:    Tuple[Optional[int], ...]
    visit_order: Tuple[int, ...] = ()

    def distance_to(self, node: int) -> Distance:
        return self.distances[node]

    def reachable(self) -> List[int]:
        return [n for n, d in enumerate(self.distances) if is_reachable(d)]

    def path_to(self, node: int) -> List[int]:
        """Source → node along predecessors; empty when node is unreachable."""
        if not is_reachable(self.distances[node]):
            return []
        path: List[int] = []
        cur: Optional[int] = node
        while cur is not None:
            path.append(cur)
            cur = self.previous[cur]
        path.reverse()
        return path

    def to_dict(self) -> dict:
        return {
            "source":      self.source,
            "distances":   list(self.distances),
            "previous":    list(self.previous),
            "visit_order": list(self.visit_order),
        }


@dataclass(frozen=True)
class AllPairsResult:
    matrix: Tuple[Tuple[Distance, ...], ...]

    def distance(self, i: int, j: int) -> Distance:
        return self.matrix[i][j]

    def is_symmetric(self) -> bool:
        n = len(self.matrix)
        return all(self.matrix[i][j] == self.matrix[j][i] for i in range(n) for j in range(i + 1, n))

    def to_dict(self) -> dict:
        return {"matrix": [list(row) for row in self.matrix]}
