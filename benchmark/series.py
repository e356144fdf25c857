"""
series.py — Chart Grouping
============================
The benchmark front-end draws three line charts, each comparing two
algorithms over node count.  `group_series()` reshapes a flat record
list into exactly that:

    {
        "DFS + BFS": {"DFS": [(10, 0.02), (50, 0.1), …], "BFS": […]},
        …
    }
"""

from typing import Dict, Iterable, List, Tuple

from benchmark.models import BenchmarkRecord

ALGORITHM_PAIRS: List[Tuple[str, Tuple[str, str]]] = [
    ("DFS + BFS",               ("DFS", "BFS")),
    ("Prim + Kruskal",          ("Prim", "Kruskal")),
    ("Dijkstra + FloydWarshall", ("Dijkstra", "Floyd-Warshall")),
]

Series = Dict[str, Dict[str, List[Tuple[int, float]]]]


def group_series(records: Iterable[BenchmarkRecord]) -> Series:
    records = list(records)
    series: Series = {}
    for title, labels in ALGORITHM_PAIRS:
        series[title] = {
            label: [(r.node_count, r.elapsed_ms) for r in records if r.algorithm == label]
            for label in labels
        }
    return series
