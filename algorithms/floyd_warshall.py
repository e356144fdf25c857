"""
floyd_warshall.py — Floyd–Warshall (All-Pairs Shortest Paths)
===============================================================
The classic triple loop, intentionally cubic:

  for k in nodes:          ← "intermediate" node
      for i in nodes:
          for j in nodes:
              if dist[i][k] + dist[k][j] < dist[i][j]:
                  dist[i][j] = dist[i][k] + dist[k][j]

Entries are ints or UNREACHABLE.  The loop skips a relaxation whenever
either half of the detour is UNREACHABLE, so two "infinite" legs are
never added together.  Parallel edges keep their lightest weight.
"""

from typing import List

from graph import Graph
from algorithms.distance import UNREACHABLE, Distance, is_shorter
from algorithms.results import AllPairsResult


PSEUDOCODE: List[str] = [
    "def FloydWarshall(graph):",                   # 0
    "    dist ← adjacency matrix (∞ off-edge)",    # 1
    "    for k in 0 … n-1:",                       # 2
    "        for i in 0 … n-1:",                   # 3
    "            for j in 0 … n-1:",               # 4
    "                if dist[i][k]+dist[k][j]",    # 5
    "                      < dist[i][j]:",         # 6
    "                    dist[i][j] = …",          # 7
    "    return dist",                             # 8
]


def floyd_warshall(graph: Graph) -> AllPairsResult:
    n = graph.node_count()

    # --- initialise matrix from adjacency ---
    dist: List[List[Distance]] = [[UNREACHABLE] * n for _ in range(n)]
    for i in range(n):
        dist[i][i] = 0
    for edge in graph.edges():
        u, v, w = edge.source, edge.target, edge.weight
        if is_shorter(w, dist[u][v]):
            dist[u][v] = w
        if not graph.directed and is_shorter(w, dist[v][u]):
            dist[v][u] = w

    # ==============================================================
    # MAIN TRIPLE LOOP
    # ==============================================================
    for k in range(n):
        row_k = dist[k]
        for i in range(n):
            d_ik = dist[i][k]
            if d_ik is UNREACHABLE:
                continue
            row_i = dist[i]
            for j in range(n):
                d_kj = row_k[j]
                if d_kj is UNREACHABLE:
                    continue
                candidate = d_ik + d_kj
                current = row_i[j]
                if current is UNREACHABLE or candidate < current:
                    row_i[j] = candidate

    return AllPairsResult(matrix=tuple(tuple(row) for row in dist))
