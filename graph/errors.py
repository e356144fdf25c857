"""
errors.py — Engine Error Taxonomy
==================================
Every error the engine raises derives from GraphEngineError so callers
(the Flask layer, the benchmark sweep) can catch the whole family in one
place and still branch on the concrete type.

    InvalidParameter   – generator / input constraint cannot be satisfied
    InvalidNode        – a source / target outside the node range
    UnknownTopology    – topology name not in the closed catalogue
    UnknownAlgorithm   – algorithm key not in the registry

"No path exists" is deliberately NOT here: it is a terminal step event,
not a failure.
"""

from typing import Iterable, Optional


class GraphEngineError(Exception):
    """Base class for every engine error."""


class InvalidParameter(GraphEngineError, ValueError):
    """A generator or input constraint is unsatisfiable."""


class InvalidNode(InvalidParameter):
    def __init__(self, node, node_count: int):
        self.node = node
        self.node_count = node_count
        super().__init__(f"Node {node!r} is not in the graph (valid ids: 0..{node_count - 1})")


class UnknownTopology(GraphEngineError, ValueError):
    def __init__(self, name, known: Optional[Iterable[str]] = None):
        self.name = name
        self.known = list(known or [])
        hint = f" Known topologies: {', '.join(self.known)}" if self.known else ""
        super().__init__(f"Unknown topology: {name!r}.{hint}")


class UnknownAlgorithm(GraphEngineError, ValueError):
    def __init__(self, key, known: Optional[Iterable[str]] = None):
        self.key = key
        self.known = list(known or [])
        hint = f" Known algorithms: {', '.join(self.known)}" if self.known else ""
        super().__init__(f"Unknown algorithm: {key!r}.{hint}")
