"""
generators.py — Topology Generators
=====================================
Twelve named graph-generation strategies, each with its own structural
guarantee, behind one entry point:

    from graph import generate, Topology, GeneratorParams
    g = generate(Topology.TREE, 20, weighted=True, seed=7)

Design decisions:
  - Randomness is injected.  Pass `rng` (a random.Random) to share one
    stream across calls, or `seed` to get a fresh reproducible stream.
    Nothing here touches the module-level `random` state.
  - Every generator writes through GraphBuilder, so the graph invariants
    (mirrored undirected edges, no self-loops, dense ids) hold by
    construction rather than by convention.
  - The catalogue is closed.  An unrecognised topology name raises
    UnknownTopology; there is no silent fallback to Complete.
"""

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from graph.errors import InvalidParameter, UnknownTopology
from graph.graph import Graph, GraphBuilder

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Topology catalogue — values are the names surfaced to the UI
# ---------------------------------------------------------------------------
class Topology(Enum):
    COMPLETE     = "Complete"
    SIMPLE       = "Simple"
    MULTIGRAPH   = "Multigraph"
    SPARSE       = "Sparse"
    DENSE        = "Dense"
    UNWEIGHTED   = "Unweighted"
    REGULAR      = "Regular"
    TREE         = "Tree"
    DISCONNECTED = "Disconnected"
    ACYCLIC      = "Acyclic"
    CYCLIC       = "Cyclic"
    PLANAR       = "Planar"


# default edge probability per topology (only where the policy uses one)
DEFAULT_PROBABILITY: Dict[Topology, float] = {
    Topology.SIMPLE:     0.5,
    Topology.MULTIGRAPH: 0.7,
    Topology.DENSE:      0.8,
    Topology.UNWEIGHTED: 0.5,
    Topology.ACYCLIC:    0.3,
    Topology.CYCLIC:     0.3,
}


def list_topologies() -> List[str]:
    """The twelve topology names, in catalogue order."""
    return [t.value for t in Topology]


def parse_topology(name: Union[str, Topology]) -> Topology:
    """Resolve a Topology member or its name (case-insensitive)."""
    if isinstance(name, Topology):
        return name
    if isinstance(name, str):
        wanted = name.strip().casefold()
        for t in Topology:
            if wanted in (t.value.casefold(), t.name.casefold()):
                return t
    raise UnknownTopology(name, list_topologies())


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class GeneratorParams:
    """
    Knobs shared by the generators.  `None` means "use the topology's
    default" — see DEFAULT_PROBABILITY, and the degree / component rules
    in the Regular and Disconnected generators.
    """

    edge_probability:   Optional[float] = None
    max_parallel_edges: int             = 3
    degree:             Optional[int]   = None
    components:         Optional[int]   = None
    min_weight:         int             = 1
    max_weight:         int             = 10

    def validate(self) -> None:
        for name in ("max_parallel_edges", "min_weight", "max_weight", "degree", "components"):
            value = getattr(self, name)
            if value is None and name in ("degree", "components"):
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidParameter(f"{name} must be an integer, got {value!r}")
        p = self.edge_probability
        if p is not None and (isinstance(p, bool) or not isinstance(p, (int, float))):
            raise InvalidParameter(f"edge_probability must be a number, got {p!r}")
        if p is not None and not 0.0 <= p <= 1.0:
            raise InvalidParameter(f"edge_probability must be within [0, 1], got {p!r}")
        if self.min_weight < 1 or self.max_weight < self.min_weight:
            raise InvalidParameter(
                f"Weight range must satisfy 1 <= min_weight <= max_weight, "
                f"got [{self.min_weight}, {self.max_weight}]"
            )
        if self.max_parallel_edges < 1:
            raise InvalidParameter(f"max_parallel_edges must be >= 1, got {self.max_parallel_edges}")

    def probability_for(self, topology: Topology) -> float:
        if self.edge_probability is not None:
            return self.edge_probability
        return DEFAULT_PROBABILITY.get(topology, 0.5)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "GeneratorParams":
        """Build from a JSON payload, ignoring keys that are not parameters."""
        if not data:
            return cls()
        known = {k: data[k] for k in cls.__dataclass_fields__ if k in data}
        try:
            return replace(cls(), **known)
        except TypeError as exc:
            raise InvalidParameter(str(exc))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
class _Weights:
    """Draws per-edge weights; always 1 on unweighted graphs."""

    def __init__(self, rng: random.Random, params: GeneratorParams, weighted: bool):
        self.rng = rng
        self.lo = params.min_weight
        self.hi = params.max_weight
        self.weighted = weighted

    def __call__(self) -> int:
        if not self.weighted:
            return 1
        return self.rng.randint(self.lo, self.hi)


def _ring(gb: GraphBuilder, n: int, weight: _Weights) -> None:
    for i in range(n):
        gb.add_edge(i, (i + 1) % n, weight())


# ---------------------------------------------------------------------------
# The twelve generators
# ---------------------------------------------------------------------------
def _complete(n, weighted, params, rng):
    w  = _Weights(rng, params, weighted)
    gb = GraphBuilder(n, weighted=weighted, topology=Topology.COMPLETE.value)
    for i in range(n):
        for j in range(i + 1, n):
            gb.add_edge(i, j, w())
    return gb.build()


def _simple(n, weighted, params, rng, topology=Topology.SIMPLE):
    """Erdős–Rényi: each unordered pair independently with probability p."""
    p  = params.probability_for(topology)
    w  = _Weights(rng, params, weighted)
    gb = GraphBuilder(n, weighted=weighted, topology=topology.value)
    for i in range(n):
        for j in range(i + 1, n):
            if rng.random() < p:
                gb.add_edge(i, j, w())
    return gb.build()


def _dense(n, weighted, params, rng):
    return _simple(n, weighted, params, rng, topology=Topology.DENSE)


def _unweighted(n, weighted, params, rng):
    return _simple(n, False, params, rng, topology=Topology.UNWEIGHTED)


def _multigraph(n, weighted, params, rng):
    """
    For every ordered pair draw k in 1..max_parallel_edges and keep each of
    the k candidate edges with probability p.  Each kept edge is mirrored,
    so parallel edges appear one-for-one in both endpoint lists.
    """
    p  = params.probability_for(Topology.MULTIGRAPH)
    w  = _Weights(rng, params, weighted)
    gb = GraphBuilder(n, weighted=weighted, topology=Topology.MULTIGRAPH.value)
    for i in range(n):
        for j in range(n):
            if i == j:
                continue
            k = rng.randint(1, params.max_parallel_edges)
            for _ in range(k):
                if rng.random() < p:
                    gb.add_edge(i, j, w())
    return gb.build()


def _sparse(n, weighted, params, rng):
    """Path backbone 0-1-…-(n-1) plus about n extra distinct edges."""
    w  = _Weights(rng, params, weighted)
    gb = GraphBuilder(n, weighted=weighted, topology=Topology.SPARSE.value)
    for i in range(n - 1):
        gb.add_edge(i, i + 1, w())

    # cap at the number of still-free pairs so small graphs terminate
    free_pairs = n * (n - 1) // 2 - max(n - 1, 0)
    extra = min(n, free_pairs)
    added = 0
    while added < extra:
        i = rng.randrange(n)
        j = rng.randrange(n)
        if i != j and not gb.has_edge(i, j):
            gb.add_edge(i, j, w())
            added += 1
    return gb.build()


def _regular(n, weighted, params, rng):
    """
    d-regular circulant graph.
      even d : node i links to i+1 … i+d/2 (mod n)
      odd d  : ring offsets 1 … (d-1)/2, plus the diameter chord i ↔ i+n/2
    """
    d = params.degree if params.degree is not None else min(4, n - 1)
    if d < 0 or d >= n:
        raise InvalidParameter(f"Regular graph degree must satisfy 0 <= d < n, got d={d}, n={n}")
    if d % 2 == 1 and n % 2 == 1:
        raise InvalidParameter(f"Regular graph with odd degree {d} needs an even node count, got n={n}")
    if d < 2 and n > 2:
        raise InvalidParameter(f"Regular graph with degree {d} cannot be connected for n={n}")

    w  = _Weights(rng, params, weighted)
    gb = GraphBuilder(n, weighted=weighted, topology=Topology.REGULAR.value)
    for i in range(n):
        for offset in range(1, d // 2 + 1):
            gb.add_edge(i, (i + offset) % n, w())
    if d % 2 == 1:
        half = n // 2
        for i in range(half):
            gb.add_edge(i, i + half, w())
    return gb.build()


def _tree(n, weighted, params, rng):
    """Each node i > 0 attaches to a uniformly random node with a lower index."""
    w  = _Weights(rng, params, weighted)
    gb = GraphBuilder(n, weighted=weighted, topology=Topology.TREE.value)
    for i in range(1, n):
        gb.add_edge(rng.randrange(i), i, w())
    return gb.build()


def _disconnected(n, weighted, params, rng):
    """k blocks of consecutive ids; each block a random tree plus a few chords."""
    k = params.components if params.components is not None else max(1, min(3, n // 3))
    if k < 1 or k > n:
        raise InvalidParameter(f"Component count must satisfy 1 <= k <= n, got k={k}, n={n}")

    w    = _Weights(rng, params, weighted)
    gb   = GraphBuilder(n, weighted=weighted, topology=Topology.DISCONNECTED.value)
    size = n // k
    for c in range(k):
        start = c * size
        end   = n if c == k - 1 else (c + 1) * size
        span  = end - start

        for i in range(start + 1, end):
            gb.add_edge(start + rng.randrange(i - start), i, w())

        for _ in range(min(5, span // 2)):
            u = start + rng.randrange(span)
            v = start + rng.randrange(span)
            if u != v and not gb.has_edge(u, v):
                gb.add_edge(u, v, w())
    return gb.build()


def _acyclic(n, weighted, params, rng):
    """DAG: directed edges only from a lower to a higher index."""
    p  = params.probability_for(Topology.ACYCLIC)
    w  = _Weights(rng, params, weighted)
    gb = GraphBuilder(n, directed=True, weighted=weighted, topology=Topology.ACYCLIC.value)
    for i in range(n):
        for j in range(i + 1, n):
            if rng.random() < p:
                gb.add_edge(i, j, w())
    return gb.build()


def _cyclic(n, weighted, params, rng):
    if n < 3:
        raise InvalidParameter(f"Cyclic graph requires at least 3 nodes, got n={n}")
    p  = params.probability_for(Topology.CYCLIC)
    w  = _Weights(rng, params, weighted)
    gb = GraphBuilder(n, weighted=weighted, topology=Topology.CYCLIC.value)
    _ring(gb, n, w)
    for i in range(n):
        for j in range(i + 2, i + n - 1):
            other = j % n
            if other != i and rng.random() < p and not gb.has_edge(i, other):
                gb.add_edge(i, other, w())
    return gb.build()


def _planar(n, weighted, params, rng):
    """Outer ring plus a single hub (node n//2) fanned out to every other node."""
    w  = _Weights(rng, params, weighted)
    gb = GraphBuilder(n, weighted=weighted, topology=Topology.PLANAR.value)
    if n == 2:
        gb.add_edge(0, 1, w())
    elif n >= 3:
        _ring(gb, n, w)
    if n > 3:
        hub = n // 2
        for i in range(n):
            if i != hub and not gb.has_edge(hub, i):
                gb.add_edge(hub, i, w())
    return gb.build()


_GENERATORS: Dict[Topology, Callable[..., Graph]] = {
    Topology.COMPLETE:     _complete,
    Topology.SIMPLE:       _simple,
    Topology.MULTIGRAPH:   _multigraph,
    Topology.SPARSE:       _sparse,
    Topology.DENSE:        _dense,
    Topology.UNWEIGHTED:   _unweighted,
    Topology.REGULAR:      _regular,
    Topology.TREE:         _tree,
    Topology.DISCONNECTED: _disconnected,
    Topology.ACYCLIC:      _acyclic,
    Topology.CYCLIC:       _cyclic,
    Topology.PLANAR:       _planar,
}


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------
def _resolve_rng(seed: Optional[int], rng: Optional[random.Random]) -> random.Random:
    if rng is not None:
        return rng
    return random.Random(seed)


def _check_count(n) -> None:
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise InvalidParameter(f"Node count must be a positive integer, got {n!r}")


def generate(
    topology: Union[str, Topology],
    n: int,
    weighted: bool = True,
    params: Optional[GeneratorParams] = None,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Graph:
    """
    Build a graph of the requested topology.

    Args:
        topology : Topology member or its name ("Tree", "complete", …).
        n        : number of nodes, ids 0 … n-1.
        weighted : draw weights from [min_weight, max_weight]; else all 1.
        params   : GeneratorParams overrides; None ⇒ per-topology defaults.
        seed/rng : randomness source (rng wins if both are given).

    Raises:
        UnknownTopology  – name not in the catalogue.
        InvalidParameter – n or params cannot be satisfied.
    """
    kind = parse_topology(topology)
    _check_count(n)
    params = params or GeneratorParams()
    params.validate()

    graph = _GENERATORS[kind](n, weighted, params, _resolve_rng(seed, rng))
    logger.debug("Generated %r", graph)
    return graph


def generate_random_connected(
    n: int,
    density: float = 0.2,
    weighted: bool = True,
    *,
    min_weight: int = 1,
    max_weight: int = 9,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Graph:
    """
    Random connected graph for step-by-step sessions: a random tree
    backbone, then every remaining pair with probability `density`.
    Not one of the twelve benchmark topologies.
    """
    _check_count(n)
    params = GeneratorParams(edge_probability=density, min_weight=min_weight, max_weight=max_weight)
    params.validate()

    rng = _resolve_rng(seed, rng)
    w   = _Weights(rng, params, weighted)
    gb  = GraphBuilder(n, weighted=weighted)
    for i in range(1, n):
        gb.add_edge(rng.randrange(i), i, w())
    for i in range(n):
        for j in range(i + 1, n):
            if not gb.has_edge(i, j) and rng.random() < density:
                gb.add_edge(i, j, w())
    return gb.build()
