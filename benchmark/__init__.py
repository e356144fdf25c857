"""
benchmark/
----------
Timed sweeps of every algorithm over generated graphs.

    from benchmark import run_algorithms_on_graph, group_series
"""

from benchmark.models  import BenchmarkRecord, BenchmarkFailure, BenchmarkReport
from benchmark.harness import (
    DEFAULT_NODE_COUNTS,
    BenchmarkHarness,
    run_algorithms_on_graph,
    run_benchmark,
)
from benchmark.series  import ALGORITHM_PAIRS, group_series

__all__ = [
    "BenchmarkRecord",
    "BenchmarkFailure",
    "BenchmarkReport",
    "DEFAULT_NODE_COUNTS",
    "BenchmarkHarness",
    "run_benchmark",
    "run_algorithms_on_graph",
    "ALGORITHM_PAIRS",
    "group_series",
]
