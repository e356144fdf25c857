"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the engine knows about.

    from algorithms import REGISTRY, get_algorithm, run_algorithm

REGISTRY is an ordered dict:
    {
        "dfs": AlgoInfo(key, label, title, fn, pseudocode, kind, …),
        …
    }

Insertion order IS the benchmark order (DFS, BFS, Prim, Kruskal,
Dijkstra, Floyd-Warshall); the harness and the chart grouping rely on
it.  Adding an algorithm is: write the module, add one entry here.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from graph import Graph, UnknownAlgorithm

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.dfs            import dfs            as _dfs,      PSEUDOCODE as _dfs_pc
from algorithms.bfs            import bfs            as _bfs,      PSEUDOCODE as _bfs_pc
from algorithms.prim           import prim           as _prim,     PSEUDOCODE as _prim_pc
from algorithms.kruskal        import kruskal        as _kruskal,  PSEUDOCODE as _kru_pc
from algorithms.dijkstra       import dijkstra       as _dijkstra, PSEUDOCODE as _dij_pc
from algorithms.floyd_warshall import floyd_warshall as _fw,       PSEUDOCODE as _fw_pc
from algorithms.disjoint_set   import DisjointSet
from algorithms.distance       import UNREACHABLE, Distance
from algorithms.results import (
    AllPairsResult,
    ShortestPaths,
    SpanningResult,
    TraversalResult,
)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgoInfo:
    key:              str                   # registry key, e.g. "bfs"
    label:            str                   # benchmark / chart name, e.g. "BFS"
    title:            str                   # human label, e.g. "Breadth-First Search"
    fn:               Callable              # the run-to-completion function
    pseudocode:       Tuple[str, ...]       # lines for the side-panel
    kind:             str                   # traversal | spanning-tree | shortest-path | all-pairs
    uses_source:      bool     = True       # False for Kruskal / Floyd–Warshall
    steppable:        bool     = False      # has a StepEngine state machine?
    complexity_time:  str      = ""
    complexity_space: str      = ""
    description:      str      = ""
    tags:             Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":              self.key,
            "label":            self.label,
            "title":            self.title,
            "kind":             self.kind,
            "uses_source":      self.uses_source,
            "steppable":        self.steppable,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
            "pseudocode":       list(self.pseudocode),
            "tags":             list(self.tags),
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "dfs": AlgoInfo(
        key="dfs", label="DFS", title="Depth-First Search", fn=_dfs, pseudocode=tuple(_dfs_pc),
        kind="traversal", tags=("unweighted", "traversal"),
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking. Visits the source's reachable component.",
    ),

    "bfs": AlgoInfo(
        key="bfs", label="BFS", title="Breadth-First Search", fn=_bfs, pseudocode=tuple(_bfs_pc),
        kind="traversal", steppable=True, tags=("unweighted", "traversal", "levels"),
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer by layer. Level = hop distance from the source.",
    ),

    "prim": AlgoInfo(
        key="prim", label="Prim", title="Prim's Algorithm", fn=_prim, pseudocode=tuple(_prim_pc),
        kind="spanning-tree", steppable=True, tags=("weighted", "mst", "greedy"),
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Grows one tree by the lightest crossing edge. Spanning forest on disconnected input.",
    ),

    "kruskal": AlgoInfo(
        key="kruskal", label="Kruskal", title="Kruskal's Algorithm", fn=_kruskal, pseudocode=tuple(_kru_pc),
        kind="spanning-tree", uses_source=False, tags=("weighted", "mst", "union-find"),
        complexity_time="O(E log E)", complexity_space="O(V + E)",
        description="Sorts edges by weight and joins components with union-find.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra", title="Dijkstra's Algorithm", fn=_dijkstra, pseudocode=tuple(_dij_pc),
        kind="shortest-path", steppable=True, tags=("weighted", "shortest-path"),
        complexity_time="O(V²)", complexity_space="O(V)",
        description="Repeatedly finalises the closest unvisited node. Linear-scan selection.",
    ),

    "floyd_warshall": AlgoInfo(
        key="floyd_warshall", label="Floyd-Warshall", title="Floyd–Warshall", fn=_fw, pseudocode=tuple(_fw_pc),
        kind="all-pairs", uses_source=False, tags=("weighted", "all-pairs", "dynamic-programming"),
        complexity_time="O(V³)", complexity_space="O(V²)",
        description="All-pairs shortest paths via dynamic programming over intermediate nodes.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def _normalise(name: str) -> str:
    return re.sub(r"[^0-9a-z]", "", name.casefold())


_ALIASES: Dict[str, str] = {}
for _info in REGISTRY.values():
    _ALIASES[_normalise(_info.key)]   = _info.key
    _ALIASES[_normalise(_info.label)] = _info.key


def get_algorithm(name: str) -> AlgoInfo:
    """
    Resolve a registry key or label ("floyd_warshall", "Floyd-Warshall",
    "FloydWarshall" …).  Fails closed with UnknownAlgorithm.
    """
    key = _ALIASES.get(_normalise(name)) if isinstance(name, str) else None
    if key is None:
        raise UnknownAlgorithm(name, list(REGISTRY))
    return REGISTRY[key]


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in benchmark order."""
    return list(REGISTRY.values())


def steppable_algorithms() -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.steppable]


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


def run_algorithm(name: str, graph: Graph, source: int = 0):
    """Run one algorithm to completion; `source` is ignored where unused."""
    info = get_algorithm(name)
    if info.uses_source:
        return info.fn(graph, source)
    return info.fn(graph)


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "steppable_algorithms",
    "algorithms_by_tag",
    "run_algorithm",
    "DisjointSet",
    "UNREACHABLE",
    "Distance",
    "TraversalResult",
    "SpanningResult",
    "ShortestPaths",
    "AllPairsResult",
]
