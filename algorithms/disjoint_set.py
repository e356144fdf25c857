"""
disjoint_set.py — Union-Find
=============================
Component bookkeeping for Kruskal: path compression on find, union by
rank.  Both loops are iterative so deep parent chains never hit the
recursion limit.
"""

from typing import Dict, Hashable, Iterable


class DisjointSet:
    """
    Attributes:
        _parent : {element: parent}; a root is its own parent.
        _rank   : {element: upper bound on tree height}.
    """

    def __init__(self, elements: Iterable[Hashable] = ()):
        self._parent: Dict[Hashable, Hashable] = {}
        self._rank:   Dict[Hashable, int]      = {}
        self._count:  int                      = 0
        for x in elements:
            self.add(x)

    def add(self, x: Hashable) -> None:
        """make-set; a no-op for elements already present."""
        if x in self._parent:
            return
        self._parent[x] = x
        self._rank[x] = 0
        self._count += 1

    def find(self, x: Hashable) -> Hashable:
        """Representative of x's set.  Raises KeyError for unknown elements."""
        root = x
        while self._parent[root] != root:
            root = self._parent[root]
        # compress: point every node on the walked path straight at the root
        while self._parent[x] != root:
            nxt = self._parent[x]
            self._parent[x] = root
            x = nxt
        return root

    def union(self, a: Hashable, b: Hashable) -> bool:
        """Merge the sets of a and b.  False if they were already joined."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self._rank[ra] < self._rank[rb]:
            ra, rb = rb, ra
        self._parent[rb] = ra
        if self._rank[ra] == self._rank[rb]:
            self._rank[ra] += 1
        self._count -= 1
        return True

    def connected(self, a: Hashable, b: Hashable) -> bool:
        return self.find(a) == self.find(b)

    @property
    def component_count(self) -> int:
        return self._count
