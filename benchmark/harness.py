"""
harness.py — Benchmark Harness
================================
For each node count (ascending) the harness generates ONE fresh graph,
then times every registered algorithm on it in registry order:

    DFS, BFS, Prim, Kruskal, Dijkstra, Floyd-Warshall

Design decisions:
  - Each algorithm is timed on its own with a monotonic high-resolution
    clock (`time.perf_counter`); the clock is injectable for tests.
  - Generation errors abort only that node count: the error is logged,
    recorded as a BenchmarkFailure and the sweep moves on.
  - Algorithm errors are NOT caught.  A generated graph that breaks an
    algorithm is a bug, not a benchmark outcome.
"""

import logging
import random
import time
from typing import Callable, Iterable, List, Optional, Sequence

from graph import GeneratorParams, GraphEngineError, InvalidParameter, UnknownTopology, generate, parse_topology
from algorithms import list_algorithms, run_algorithm
from benchmark.models import BenchmarkFailure, BenchmarkRecord, BenchmarkReport

logger = logging.getLogger(__name__)

DEFAULT_NODE_COUNTS = (10, 50, 100, 200)


def _check_counts(node_counts: Iterable[int]) -> List[int]:
    counts = list(node_counts)
    for n in counts:
        if isinstance(n, bool) or not isinstance(n, int) or n < 1:
            raise InvalidParameter(f"Node counts must be positive integers, got {n!r}")
    return sorted(counts)


class BenchmarkHarness:
    """
    Attributes:
        seed   : base seed; None ⇒ non-deterministic graphs.
        params : GeneratorParams forwarded to every generate() call.
        clock  : zero-argument callable returning seconds.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        params: Optional[GeneratorParams] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.seed   = seed
        self.params = params
        self.clock  = clock

    # ------------------------------------------------------------------
    # One topology
    # ------------------------------------------------------------------
    def run(
        self,
        topology,
        node_counts: Sequence[int] = DEFAULT_NODE_COUNTS,
        weighted: bool = True,
    ) -> BenchmarkReport:
        """
        Raises:
            UnknownTopology  – `topology` is not one of the twelve.
            InvalidParameter – a node count is not a positive int.
        """
        topo = parse_topology(topology)
        counts = _check_counts(node_counts)
        rng = random.Random(self.seed)
        report = BenchmarkReport()

        for n in counts:
            try:
                graph = generate(topo, n, weighted, self.params, rng=rng)
            except GraphEngineError as exc:
                logger.warning("Generation failed for %s n=%d: %s", topo.value, n, exc)
                report.failures.append(BenchmarkFailure(
                    topology=topo.value, node_count=n,
                    error_type=type(exc).__name__, message=str(exc),
                ))
                continue

            for info in list_algorithms():
                start = self.clock()
                run_algorithm(info.key, graph, 0)
                elapsed_ms = (self.clock() - start) * 1000.0
                report.records.append(BenchmarkRecord(
                    algorithm=info.label, node_count=n, elapsed_ms=elapsed_ms,
                    topology=topo.value, weighted=weighted,
                ))
            logger.debug("Benchmarked %s n=%d (%d edges)", topo.value, n, graph.edge_count())

        return report

    # ------------------------------------------------------------------
    # Several topologies
    # ------------------------------------------------------------------
    def sweep(
        self,
        topologies: Iterable,
        node_counts: Sequence[int] = DEFAULT_NODE_COUNTS,
        weighted: bool = True,
    ) -> BenchmarkReport:
        """Run every topology in turn; unknown names become failures."""
        counts = _check_counts(node_counts)
        report = BenchmarkReport()
        for topology in topologies:
            try:
                report.extend(self.run(topology, counts, weighted))
            except UnknownTopology as exc:
                logger.warning("Skipping topology %r: %s", topology, exc)
                report.failures.append(BenchmarkFailure(
                    topology=str(topology), node_count=None,
                    error_type=type(exc).__name__, message=str(exc),
                ))
        return report


# ---------------------------------------------------------------------------
# Boundary functions
# ---------------------------------------------------------------------------
def run_benchmark(
    topology,
    node_counts: Sequence[int] = DEFAULT_NODE_COUNTS,
    weighted: bool = True,
    *,
    seed: Optional[int] = None,
    params: Optional[GeneratorParams] = None,
) -> List[BenchmarkRecord]:
    return BenchmarkHarness(seed=seed, params=params).run(topology, node_counts, weighted).records


def run_algorithms_on_graph(topology, weighted: bool = True) -> List[BenchmarkRecord]:
    """Benchmark every algorithm on `topology` at the default node counts."""
    return run_benchmark(topology, DEFAULT_NODE_COUNTS, weighted)
