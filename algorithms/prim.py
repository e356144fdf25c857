"""
prim.py — Prim's Minimum Spanning Tree
========================================
Greedy tree growth from a source.  Every iteration recomputes the
minimum-weight edge crossing the in-tree / out-of-tree boundary.

Tie-break: in-tree nodes are scanned in the order they joined the tree,
each node's adjacency in insertion order, and only a strictly lighter
edge replaces the current best — so the first edge encountered wins.
The step engine imports `min_crossing_edge` so both paths agree.

Disconnected input: when no crossing edge exists but nodes remain, the
lowest-numbered remaining node starts a new tree.  The result is then a
spanning FOREST (`SpanningResult.is_forest`), and its total weight is
only minimal per component.
"""

from typing import Iterable, List, Optional, Set

from graph import Edge, Graph
from algorithms.results import SpanningResult


PSEUDOCODE: List[str] = [
    "def Prim(graph, source):",                          # 0
    "    tree ← {source}",                               # 1
    "    while tree ≠ V:",                               # 2
    "        e ← lightest edge (u ∈ tree, v ∉ tree)",    # 3
    "        if e is None:",                             # 4
    "            v ← first node ∉ tree   # new tree",    # 5
    "        tree.add(v); mst.add(e)",                   # 6
    "    return mst",                                    # 7
]


def min_crossing_edge(graph: Graph, tree_order: Iterable[int], in_tree: Set[int]) -> Optional[Edge]:
    """Lightest edge leaving the tree; first encountered wins ties."""
    best: Optional[Edge] = None
    for node in tree_order:
        for edge in graph.neighbours(node):
            if edge.target in in_tree:
                continue
            if best is None or edge.weight < best.weight:
                best = edge
    return best


def prim(graph: Graph, source: int = 0) -> SpanningResult:
    graph.check_node(source)
    n = graph.node_count()

    order:   List[int]  = [source]
    roots:   List[int]  = [source]
    in_tree: Set[int]   = {source}
    edges:   List[Edge] = []

    while len(order) < n:
        edge = min_crossing_edge(graph, order, in_tree)
        if edge is None:
            nxt = next(v for v in range(n) if v not in in_tree)
            roots.append(nxt)
        else:
            nxt = edge.target
            edges.append(edge)
        in_tree.add(nxt)
        order.append(nxt)

    return SpanningResult(edges=tuple(edges), node_count=n, order=tuple(order), roots=tuple(roots))
