"""
dfs.py — Depth-First Search
=============================
Run-to-completion DFS from a source.

Iterative, with one neighbour iterator per stack frame, so the visit
order is exactly that of the textbook recursive version (dive into the
first unvisited neighbour, resume the parent's scan on backtrack) without
Python's recursion limit.  Unreachable nodes are simply absent from the
result.
"""

from typing import Iterator, List, Set

from graph import Edge, Graph
from algorithms.results import TraversalResult


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(graph, node, visited):",            # 0
    "    visited.add(node)",                     # 1
    "    for neighbour in adj(node):",           # 2
    "        if neighbour not in visited:",      # 3
    "            DFS(graph, neighbour, visited)",  # 4
    "    return visited",                        # 5
]


def dfs(graph: Graph, source: int = 0) -> TraversalResult:
    graph.check_node(source)

    visited: Set[int] = {source}
    order:   List[int] = [source]
    stack:   List[Iterator[Edge]] = [iter(graph.neighbours(source))]

    while stack:
        for edge in stack[-1]:
            nbr = edge.target
            if nbr not in visited:
                visited.add(nbr)
                order.append(nbr)
                stack.append(iter(graph.neighbours(nbr)))
                break
        else:
            # frame exhausted — backtrack
            stack.pop()

    return TraversalResult(source=source, order=tuple(order))
