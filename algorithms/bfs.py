"""
bfs.py — Breadth-First Search
==============================
Run-to-completion BFS from a source.  Nodes are marked visited when
they are enqueued, so each node enters the queue at most once and its
recorded level is its hop distance from the source.

The visited set is exactly the source's (forward-)reachable component;
unreachable nodes are absent, never an error.
"""

from collections import deque
from typing import Dict, List

from graph import Graph
from algorithms.results import TraversalResult


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, source):",                  # 0
    "    queue ← [source]",                     # 1
    "    level ← {source: 0}",                  # 2
    "    while queue is not empty:",            # 3
    "        node ← queue.dequeue()",           # 4
    "        for neighbour in adj(node):",      # 5
    "            if neighbour not in level:",   # 6
    "                level[neighbour] ← level[node] + 1",  # 7
    "                queue.enqueue(neighbour)", # 8
    "    return level.keys()",                  # 9
]


def bfs(graph: Graph, source: int = 0) -> TraversalResult:
    graph.check_node(source)

    queue  = deque([source])
    levels: Dict[int, int] = {source: 0}
    order:  List[int] = [source]

    while queue:
        node = queue.popleft()
        for edge in graph.neighbours(node):
            nbr = edge.target
            if nbr not in levels:
                levels[nbr] = levels[node] + 1
                order.append(nbr)
                queue.append(nbr)

    return TraversalResult(source=source, order=tuple(order), levels=levels)
