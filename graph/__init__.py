"""
graph/
------
Core data layer.  Public API:

    from graph import Graph, GraphBuilder, Edge
    from graph import generate, Topology, GeneratorParams
    from graph import InvalidParameter, UnknownTopology, …
"""

from graph.edge   import Edge
from graph.graph  import Graph, GraphBuilder
from graph.errors import (
    GraphEngineError,
    InvalidParameter,
    InvalidNode,
    UnknownTopology,
    UnknownAlgorithm,
)
from graph.generators import (
    Topology,
    GeneratorParams,
    generate,
    generate_random_connected,
    list_topologies,
    parse_topology,
)

__all__ = [
    "Edge",
    "Graph",            "GraphBuilder",
    "GraphEngineError", "InvalidParameter", "InvalidNode",
    "UnknownTopology",  "UnknownAlgorithm",
    "Topology",         "GeneratorParams",
    "generate",         "generate_random_connected",
    "list_topologies",  "parse_topology",
]
