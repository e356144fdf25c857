"""
kruskal.py — Kruskal's Minimum Spanning Tree
==============================================
Sort the deduplicated edge list by weight, then accept each edge whose
endpoints are still in different components.

The edge list comes from `Graph.unique_edges()`: mirrored undirected
entries collapse onto one canonical (min, max) key and, among parallel
edges, only the lightest survives.  The sort is stable, so equal weights
keep first-seen order.  On a graph with c components the result has
exactly n - c edges.
"""

from typing import List

from graph import Graph
from algorithms.disjoint_set import DisjointSet
from algorithms.results import SpanningResult


PSEUDOCODE: List[str] = [
    "def Kruskal(graph):",                        # 0
    "    for v in V: make_set(v)",                # 1
    "    for (u, v, w) in sorted(E, by w):",      # 2
    "        if find(u) ≠ find(v):",              # 3
    "            union(u, v); mst.add((u, v))",   # 4
    "    return mst",                             # 5
]


def kruskal(graph: Graph) -> SpanningResult:
    sets  = DisjointSet(graph.node_ids())
    edges = sorted(graph.unique_edges(), key=lambda e: e.weight)

    accepted = [e for e in edges if sets.union(e.source, e.target)]

    return SpanningResult(edges=tuple(accepted), node_count=graph.node_count())
