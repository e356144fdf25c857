"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the graph algorithm engine.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -k "step"          # Only step-engine tests
    pytest tests/ --quick            # Skip slow benchmark sweeps
"""

from typing import Iterable, Tuple

import pytest

from graph import Graph, GraphBuilder


# =============================================================================
# Custom Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow")


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Skip slow tests",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests if --quick is specified"""
    if config.getoption("--quick"):
        skip_slow = pytest.mark.skip(reason="Skipped with --quick")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


# =============================================================================
# Graph Fixtures
# =============================================================================

def build(n: int, edges: Iterable[Tuple[int, int, int]], directed: bool = False, weighted: bool = True) -> Graph:
    gb = GraphBuilder(n, directed=directed, weighted=weighted)
    for u, v, w in edges:
        gb.add_edge(u, v, w)
    return gb.build()


@pytest.fixture
def make_graph():
    """Factory: make_graph(n, [(u, v, w), ...], directed=False)"""
    return build


@pytest.fixture
def path_graph() -> Graph:
    """0 - 1 - 2, unit weights"""
    return build(3, [(0, 1, 1), (1, 2, 1)])


@pytest.fixture
def weighted_graph() -> Graph:
    """
    Small weighted graph with one cheaper detour:

        0 --4-- 1
        |       |
        1       1
        |       |
        2 --2-- 3 --5-- 4
    """
    return build(5, [(0, 1, 4), (0, 2, 1), (1, 3, 1), (2, 3, 2), (3, 4, 5)])


@pytest.fixture
def split_graph() -> Graph:
    """Two components: {0, 1, 2} and {3, 4}"""
    return build(5, [(0, 1, 2), (1, 2, 3), (3, 4, 1)])
