"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Single-source relaxation with linear-scan selection: each round scans
every unvisited node for the smallest tentative distance (lowest id wins
ties).  O(V²) overall, which is fine at a few hundred nodes and keeps
the selection rule identical to the step engine's.

Stops when the unvisited set is empty, when every remaining node is
UNREACHABLE, or as soon as the optional `target` is selected.
Unreachable nodes keep the UNREACHABLE marker; see distance.py.

Correctness note: Dijkstra requires non-negative weights.  Graph
construction already rejects weights below 1.
"""

from typing import Container, List, Optional, Sequence, Set

from graph import Graph
from algorithms.distance import UNREACHABLE, Distance, add, is_shorter
from algorithms.results import ShortestPaths


PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source):",                  # 0
    "    dist ← {v: ∞ for v in V}; dist[source] ← 0", # 1
    "    while unvisited is not empty:",             # 2
    "        u ← unvisited node with min dist",      # 3
    "        if dist[u] = ∞: break",                 # 4
    "        visited.add(u)",                        # 5
    "        for (v, w) in adj(u), v unvisited:",    # 6
    "            if dist[u] + w < dist[v]:",         # 7
    "                dist[v] ← dist[u] + w",         # 8
    "                prev[v] ← u",                   # 9
    "    return dist, prev",                         # 10
]


def select_min(distances: Sequence[Distance], visited: Container[int]) -> Optional[int]:
    """Unvisited node with the smallest finite distance, or None."""
    best: Optional[int] = None
    for node, d in enumerate(distances):
        if node in visited or d is UNREACHABLE:
            continue
        if best is None or d < distances[best]:
            best = node
    return best


def dijkstra(graph: Graph, source: int = 0, target: Optional[int] = None) -> ShortestPaths:
    graph.check_node(source)
    if target is not None:
        graph.check_node(target)

    n = graph.node_count()
    dist:    List[Distance]      = [UNREACHABLE] * n
    prev:    List[Optional[int]] = [None] * n
    visited: Set[int]            = set()
    order:   List[int]           = []
    dist[source] = 0

    while len(visited) < n:
        node = select_min(dist, visited)
        if node is None:
            break                       # the rest is unreachable
        visited.add(node)
        order.append(node)
        if node == target:
            break

        for edge in graph.neighbours(node):
            nbr = edge.target
            if nbr in visited:
                continue
            candidate = add(dist[node], edge.weight)
            if is_shorter(candidate, dist[nbr]):
                dist[nbr] = candidate
                prev[nbr] = node

    return ShortestPaths(
        source=source,
        distances=tuple(dist),
        previous=tuple(prev),
        visit_order=tuple(order),
    )
