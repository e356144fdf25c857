"""
graph.py — Graph Container & Builder
=====================================
Single source of truth for the graph.  Generators, batch algorithms,
step states and the benchmark harness all read the same object.

Responsibilities:
  1. Adjacency queries                      (neighbours, degree, has_edge, …)
  2. Whole-graph views                      (edges, unique_edges, components)
  3. Serialisation round-trip               (to_dict / from_dict)
  4. Construction via GraphBuilder          (the only place edges are added)

Design decisions:
  - Node ids are the dense integer range [0, n).  No gaps, no removal.
  - Adjacency is `_adj[node_id] → tuple(Edge, …)` in insertion order.  That
    order is observable: Prim and Dijkstra break ties by it.
  - A Graph is immutable once built.  It has no mutating methods, so any
    number of algorithm states can share one instance.
  - Undirected graphs mirror every edge: (u, v, w) in u's list implies
    (v, u, w) in v's list.  Directed graphs (the Acyclic topology) store
    each edge once, in its source's list.
"""

from collections import deque
from typing import Dict, Iterator, List, Optional, Set, Tuple

from graph.edge import Edge
from graph.errors import InvalidNode, InvalidParameter


class Graph:
    """
    Attributes:
        directed : bool – graph-level directedness
        weighted : bool – whether weights are meaningful (False ⇒ all 1)
        topology : name of the generator that produced it (None if imported)
        _adj     : tuple indexed by node id → tuple of outgoing Edges
    """

    __slots__ = ("_adj", "directed", "weighted", "topology", "_edge_count")

    def __init__(
        self,
        adjacency: List[List[Edge]],
        directed: bool = False,
        weighted: bool = True,
        topology: Optional[str] = None,
    ):
        self._adj:      Tuple[Tuple[Edge, ...], ...] = tuple(tuple(edges) for edges in adjacency)
        self.directed:  bool          = directed
        self.weighted:  bool          = weighted
        self.topology:  Optional[str] = topology
        self._edge_count: int         = sum(1 for _ in self.edges())

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: int) -> Tuple[Edge, ...]:
        """Outgoing edges of node_id, in insertion order."""
        self.check_node(node_id)
        return self._adj[node_id]

    def degree(self, node_id: int) -> int:
        return len(self.neighbours(node_id))

    def has_edge(self, a: int, b: int) -> bool:
        """True if some edge a → b exists (direction-aware)."""
        return any(e.target == b for e in self.neighbours(a))

    def get_edge_between(self, a: int, b: int) -> Optional[Edge]:
        """Lightest edge a → b, or None."""
        best: Optional[Edge] = None
        for e in self.neighbours(a):
            if e.target == b and (best is None or e.weight < best.weight):
                best = e
        return best

    def has_node(self, node_id) -> bool:
        return isinstance(node_id, int) and not isinstance(node_id, bool) and 0 <= node_id < len(self._adj)

    def check_node(self, node_id) -> None:
        if not self.has_node(node_id):
            raise InvalidNode(node_id, len(self._adj))

    # ==================================================================
    # WHOLE-GRAPH VIEWS
    # ==================================================================
    def edges(self) -> Iterator[Edge]:
        """Each logical edge exactly once (parallel edges included)."""
        for node_edges in self._adj:
            for e in node_edges:
                if self.directed or e.source < e.target:
                    yield e

    def unique_edges(self) -> List[Edge]:
        """
        Edges deduplicated by canonical (min, max) endpoint key, in
        first-seen order.  Among parallel edges the lightest one is kept.
        """
        best: Dict[Tuple[int, int], Edge] = {}
        for e in self.edges():
            key = e.key
            current = best.get(key)
            if current is None or e.weight < current.weight:
                best[key] = Edge(key[0], key[1], e.weight)
        return list(best.values())

    def components(self) -> List[List[int]]:
        """Connected components (weak connectivity for directed graphs)."""
        undirected: List[Set[int]] = [set() for _ in self._adj]
        for e in self.edges():
            undirected[e.source].add(e.target)
            undirected[e.target].add(e.source)

        seen: Set[int] = set()
        result: List[List[int]] = []
        for start in range(len(self._adj)):
            if start in seen:
                continue
            seen.add(start)
            queue = deque([start])
            members = [start]
            while queue:
                node = queue.popleft()
                for nbr in undirected[node]:
                    if nbr not in seen:
                        seen.add(nbr)
                        members.append(nbr)
                        queue.append(nbr)
            result.append(sorted(members))
        return result

    def is_connected(self) -> bool:
        return len(self.components()) <= 1

    def total_weight(self) -> int:
        return sum(e.weight for e in self.edges())

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self._adj)

    def edge_count(self) -> int:
        return self._edge_count

    def node_ids(self) -> List[int]:
        return list(range(len(self._adj)))

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "topology":   self.topology,
            "directed":   self.directed,
            "weighted":   self.weighted,
            "node_count": self.node_count(),
            "nodes":      self.node_ids(),
            "edges":      [e.to_dict() for e in self.edges()],
        }

    @classmethod
    def from_dict(cls, data: dict, max_nodes: Optional[int] = None) -> "Graph":
        """
        Rebuild a graph; every edge passes through GraphBuilder validation.
        `max_nodes` is checked before anything is allocated.
        """
        if "node_count" in data:
            n = data["node_count"]
        else:
            n = len(data.get("nodes", []))
        try:
            n = int(n)
        except (TypeError, ValueError):
            raise InvalidParameter(f"node_count must be an integer, got {n!r}")
        if max_nodes is not None and n > max_nodes:
            raise InvalidParameter(f"At most {max_nodes} nodes are allowed, got {n}")

        builder = GraphBuilder(
            n,
            directed=bool(data.get("directed", False)),
            weighted=bool(data.get("weighted", True)),
            topology=data.get("topology"),
        )
        for ed in data.get("edges", []):
            try:
                edge = Edge.from_dict(ed)
            except (KeyError, TypeError, ValueError) as exc:
                raise InvalidParameter(f"Malformed edge {ed!r}: {exc}")
            builder.add_edge(edge.source, edge.target, edge.weight)
        return builder.build()

    def __repr__(self) -> str:
        return (
            f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, "
            f"directed={self.directed}, topology={self.topology})"
        )


# ---------------------------------------------------------------------------
# GraphBuilder — the mutable scratch-pad generators write into
# ---------------------------------------------------------------------------
class GraphBuilder:
    """
    Usage inside a generator:
        gb = GraphBuilder(n, weighted=True, topology="Tree")
        gb.add_edge(0, 1, weight=4)     # mirrored automatically
        graph = gb.build()
    """

    def __init__(
        self,
        n: int,
        directed: bool = False,
        weighted: bool = True,
        topology: Optional[str] = None,
    ):
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise InvalidParameter(f"Node count must be a non-negative integer, got {n!r}")
        self.n          = n
        self.directed   = directed
        self.weighted   = weighted
        self.topology   = topology
        self._adj:  List[List[Edge]] = [[] for _ in range(n)]
        self._nbrs: List[Set[int]]   = [set() for _ in range(n)]

    def add_edge(self, source: int, target: int, weight: int = 1) -> Edge:
        for node in (source, target):
            if isinstance(node, bool) or not isinstance(node, int) or not 0 <= node < self.n:
                raise InvalidNode(node, self.n)
        if source == target:
            raise InvalidParameter(f"Self-loop on node {source} is not allowed")
        if isinstance(weight, bool) or not isinstance(weight, int) or weight < 1:
            raise InvalidParameter(f"Edge weight must be an integer >= 1, got {weight!r}")
        if not self.weighted:
            weight = 1

        edge = Edge(source, target, weight)
        self._adj[source].append(edge)
        self._nbrs[source].add(target)
        if not self.directed:
            self._adj[target].append(edge.reversed())
            self._nbrs[target].add(source)
        return edge

    def has_edge(self, source: int, target: int) -> bool:
        return target in self._nbrs[source]

    def degree(self, node_id: int) -> int:
        return len(self._adj[node_id])

    def build(self) -> Graph:
        return Graph(self._adj, directed=self.directed, weighted=self.weighted, topology=self.topology)
