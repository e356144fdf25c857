"""Tests for the benchmark harness and chart grouping."""

import itertools
import logging

import pytest

from benchmark import (
    ALGORITHM_PAIRS,
    BenchmarkHarness,
    BenchmarkRecord,
    group_series,
    run_algorithms_on_graph,
    run_benchmark,
)
from graph import GeneratorParams, InvalidParameter, UnknownTopology

LABELS = ["DFS", "BFS", "Prim", "Kruskal", "Dijkstra", "Floyd-Warshall"]


def fake_clock(step=0.001):
    """Each call advances by `step` seconds, so every run measures 1 ms."""
    ticks = itertools.count()
    return lambda: next(ticks) * step


class TestRunBenchmark:

    def test_record_order(self):
        records = run_benchmark("Complete", [8, 3, 5], seed=1)
        assert [(r.node_count, r.algorithm) for r in records] == [
            (n, label) for n in (3, 5, 8) for label in LABELS
        ]

    def test_records_carry_context(self):
        records = run_benchmark("Tree", [4], weighted=False, seed=0)
        assert {r.topology for r in records} == {"Tree"}
        assert all(r.weighted is False for r in records)
        assert all(r.elapsed_ms >= 0 for r in records)

    def test_injected_clock(self):
        report = BenchmarkHarness(clock=fake_clock()).run("Sparse", [6])
        assert [r.elapsed_ms for r in report.records] == pytest.approx([1.0] * 6)

    @pytest.mark.parametrize("counts", [[0], [10, -1], [2.5], ["10"]])
    def test_bad_counts(self, counts):
        with pytest.raises(InvalidParameter):
            run_benchmark("Complete", counts)

    def test_unknown_topology(self):
        with pytest.raises(UnknownTopology):
            run_benchmark("Hypercube", [5])

    def test_generation_failure_is_recorded(self, caplog):
        harness = BenchmarkHarness(params=GeneratorParams(degree=3), seed=0)
        with caplog.at_level(logging.WARNING, logger="benchmark.harness"):
            report = harness.run("Regular", [5, 6, 7])
        assert [f.node_count for f in report.failures] == [5, 7]
        assert report.failures[0].error_type == "InvalidParameter"
        assert {r.node_count for r in report.records} == {6}
        assert not report.ok
        assert "Generation failed" in caplog.text

    def test_disconnected_and_directed_inputs_run(self):
        for topology in ("Disconnected", "Acyclic"):
            assert len(run_benchmark(topology, [9], seed=2)) == 6

    def test_seeded_runs_use_the_same_graphs(self):
        a = BenchmarkHarness(seed=5, clock=fake_clock()).run("Simple", [7, 9])
        b = BenchmarkHarness(seed=5, clock=fake_clock()).run("Simple", [7, 9])
        assert a.records == b.records

    @pytest.mark.slow
    def test_scenario_complete_default_counts(self):
        records = run_algorithms_on_graph("Complete", True)
        assert len(records) == 24
        assert [(r.node_count, r.algorithm) for r in records] == [
            (n, label) for n in (10, 50, 100, 200) for label in LABELS
        ]


class TestSweep:

    def test_unknown_topologies_become_failures(self):
        report = BenchmarkHarness(seed=0).sweep(["Tree", "Nope", "Cyclic"], [4])
        assert len(report.records) == 12
        assert [(f.topology, f.node_count, f.error_type) for f in report.failures] == [
            ("Nope", None, "UnknownTopology"),
        ]

    def test_to_dict(self):
        report = BenchmarkHarness(seed=0).sweep(["Planar"], [3])
        data = report.to_dict()
        assert len(data["records"]) == 6
        assert data["records"][0]["algorithm"] == "DFS"
        assert data["failures"] == []


class TestSeries:

    def test_pairs(self):
        assert [title for title, _ in ALGORITHM_PAIRS] == [
            "DFS + BFS", "Prim + Kruskal", "Dijkstra + FloydWarshall",
        ]

    def test_group_series(self):
        records = [
            BenchmarkRecord(label, n, float(n + i))
            for n in (10, 20) for i, label in enumerate(LABELS)
        ]
        series = group_series(records)
        assert series["DFS + BFS"]["BFS"] == [(10, 11.0), (20, 21.0)]
        assert series["Dijkstra + FloydWarshall"]["Floyd-Warshall"] == [(10, 15.0), (20, 25.0)]
        assert set(series["Prim + Kruskal"]) == {"Prim", "Kruskal"}

    def test_empty(self):
        assert group_series([])["DFS + BFS"] == {"DFS": [], "BFS": []}
