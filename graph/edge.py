"""
edge.py — Graph Edge
====================
The one canonical edge record: (source, target, weight).

Design decisions:
  - `source` and `target` are integer node ids, NOT Node references.
    This keeps edges hashable, serialisable and trivially shareable
    between concurrent algorithm states.
  - Weight defaults to 1 for unweighted graphs — algorithms that ignore
    weights simply never read it.
  - Frozen: an Edge never changes after the generator creates it.  An
    undirected graph stores the edge in both endpoints' adjacency lists,
    once as-is and once `reversed()`.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        source : id of the tail node.
        target : id of the head node.
        weight : positive integer cost (1 on unweighted graphs).
    """

    source: int
    target: int
    weight: int = 1

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def key(self) -> Tuple[int, int]:
        """Canonical undirected key: endpoints sorted ascending."""
        if self.source <= self.target:
            return (self.source, self.target)
        return (self.target, self.source)

    def reversed(self) -> "Edge":
        return Edge(self.target, self.source, self.weight)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=int(data["source"]),
            target=int(data["target"]),
            weight=int(data.get("weight", 1)),
        )

    def __repr__(self) -> str:
        return f"Edge({self.source}→{self.target}, w={self.weight})"
