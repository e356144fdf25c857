"""
states.py — Resumable Algorithm States
========================================
BFS, Prim and Dijkstra written as explicit state machines.  Each state
object holds the algorithm's private working memory (queue, tree set,
distance table, …) plus a reference to the Graph it was initialised on.

    state = init("dijkstra", graph, source=0, target=5)
    while True:
        state, events, finished = step(state)
        render(events)            # caller's business
        if finished:
            break

`step()` is pure: it clones the state (sharing the immutable Graph),
advances the clone by exactly one logical unit and returns it with the
events that unit produced.  The input state is never mutated, so a
caller that discards a state can never be surprised by a late step
writing into it.

Step units:
  BFS      – first call enqueues the source; each later call dequeues one
             node, enqueues its new neighbours, finalizes it.
  Prim     – first call seeds the tree; later calls alternate between
             SELECT (lightest crossing edge → candidate) and COMMIT
             (candidate joins the tree), for a two-phase highlight.
  Dijkstra – each call selects the closest unvisited node, relaxes its
             neighbours and finalizes it; the target ends the run.
"""

from collections import deque
from dataclasses import dataclass, field, replace
from typing import ClassVar, Deque, Dict, List, NamedTuple, Optional, Set, Tuple

from graph import Edge, Graph, UnknownAlgorithm
from algorithms import get_algorithm, steppable_algorithms
from algorithms.dijkstra import select_min
from algorithms.distance import UNREACHABLE, Distance, add, format_distance, is_shorter
from algorithms.prim import min_crossing_edge
from engine.events import EventKind, StepEvent


# ---------------------------------------------------------------------------
# Base state
# ---------------------------------------------------------------------------
@dataclass(eq=False)
class AlgorithmState:
    """
    Attributes:
        graph       : the (shared, immutable) graph this state runs on.
        source      : start node.
        target      : Dijkstra goal node (None ⇒ settle everything).
        started     : False until the first step.
        finished    : True once a terminal event has been emitted.
        steps_taken : number of successful steps so far.
        current     : node processed by the most recent step.
    """

    algorithm: ClassVar[str] = ""

    graph:       Graph
    source:      int
    target:      Optional[int] = None
    started:     bool          = False
    finished:    bool          = False
    steps_taken: int           = 0
    current:     Optional[int] = None

    def clone(self) -> "AlgorithmState":
        raise NotImplementedError

    def advance(self) -> List[StepEvent]:
        """Mutate THIS object by one unit.  Only `step()` calls it, on a clone."""
        raise NotImplementedError

    def view(self) -> dict:
        """Plain-data picture of the public progress (for snapshots / JSON)."""
        return {
            "algorithm":   self.algorithm,
            "source":      self.source,
            "target":      self.target,
            "started":     self.started,
            "finished":    self.finished,
            "steps_taken": self.steps_taken,
            "current":     self.current,
        }

    def _finish(self, kind: EventKind, message: str, **extra) -> StepEvent:
        self.finished = True
        return StepEvent(kind=kind, message=message, **extra)


# ---------------------------------------------------------------------------
# BFS
# ---------------------------------------------------------------------------
@dataclass(eq=False)
class BfsState(AlgorithmState):
    algorithm: ClassVar[str] = "bfs"

    queue:     Deque[int]     = field(default_factory=deque)
    levels:    Dict[int, int] = field(default_factory=dict)
    finalized: List[int]      = field(default_factory=list)

    def clone(self) -> "BfsState":
        return replace(self, queue=deque(self.queue), levels=dict(self.levels), finalized=list(self.finalized))

    def advance(self) -> List[StepEvent]:
        if not self.started:
            self.started = True
            self.queue.append(self.source)
            self.levels[self.source] = 0
            self.current = self.source
            return [StepEvent(
                kind=EventKind.NODE_ENTERED, node=self.source, level=0,
                message=f"Node {self.source} entered the queue at level 0.",
            )]

        node = self.queue.popleft()
        self.current = node
        level = self.levels[node]
        events: List[StepEvent] = []

        for edge in self.graph.neighbours(node):
            nbr = edge.target
            if nbr in self.levels:
                continue
            self.levels[nbr] = level + 1
            self.queue.append(nbr)
            events.append(StepEvent(
                kind=EventKind.NODE_ENTERED, node=nbr, edge=edge, level=level + 1,
                message=f"Node {nbr} entered the queue at level {level + 1}.",
            ))

        self.finalized.append(node)
        events.append(StepEvent(
            kind=EventKind.NODE_FINALIZED, node=node, level=level,
            message=f"Node {node} finalized (level {level}).",
        ))

        if not self.queue:
            events.append(self._finish(
                EventKind.TERMINAL_COMPLETE,
                f"BFS complete. Visited {len(self.finalized)} node(s).",
            ))
        return events

    def view(self) -> dict:
        data = super().view()
        data.update(
            queue=list(self.queue),
            levels={str(k): v for k, v in self.levels.items()},
            finalized=list(self.finalized),
        )
        return data


# ---------------------------------------------------------------------------
# Prim
# ---------------------------------------------------------------------------
@dataclass(eq=False)
class PrimState(AlgorithmState):
    algorithm: ClassVar[str] = "prim"

    tree_order:   List[int]      = field(default_factory=list)
    in_tree:      Set[int]       = field(default_factory=set)
    tree_edges:   List[Edge]     = field(default_factory=list)
    candidate:    Optional[Edge] = None
    total_weight: int            = 0

    def clone(self) -> "PrimState":
        return replace(
            self,
            tree_order=list(self.tree_order),
            in_tree=set(self.in_tree),
            tree_edges=list(self.tree_edges),
        )

    def advance(self) -> List[StepEvent]:
        if not self.started:
            self.started = True
            self._join(self.source)
            events = [StepEvent(
                kind=EventKind.NODE_IN_TREE, node=self.source, distance=0,
                message=f"Starting from node {self.source}.",
            )]
            return self._finish_if_stuck(events)

        if self.candidate is None:
            # SELECT phase
            edge = min_crossing_edge(self.graph, self.tree_order, self.in_tree)
            if edge is None:
                return self._finish_if_stuck([])
            self.candidate = edge
            self.current = edge.target
            return [
                StepEvent(
                    kind=EventKind.EDGE_SELECTED, node=edge.target, edge=edge,
                    message=f"Adding edge ({edge.source}-{edge.target}). Weight: {edge.weight}",
                ),
                StepEvent(
                    kind=EventKind.NODE_ENTERING_TREE, node=edge.target, edge=edge,
                    message=f"Node {edge.target} is entering the tree.",
                ),
            ]

        # COMMIT phase
        edge = self.candidate
        self.candidate = None
        self._join(edge.target)
        self.tree_edges.append(edge)
        self.total_weight += edge.weight
        events = [StepEvent(
            kind=EventKind.NODE_IN_TREE, node=edge.target, edge=edge, distance=self.total_weight,
            message=f"Node {edge.target} joined the tree. Total weight: {self.total_weight}",
        )]
        return self._finish_if_stuck(events)

    def _join(self, node: int) -> None:
        self.in_tree.add(node)
        self.tree_order.append(node)
        self.current = node

    def _finish_if_stuck(self, events: List[StepEvent]) -> List[StepEvent]:
        """Finish once every node is in the tree or no crossing edge remains."""
        done = len(self.in_tree) == self.graph.node_count()
        if done or min_crossing_edge(self.graph, self.tree_order, self.in_tree) is None:
            if done:
                msg = f"MST complete. Total weight: {self.total_weight}"
            else:
                msg = (f"No crossing edges remain. Tree spans {len(self.in_tree)} of "
                       f"{self.graph.node_count()} nodes. Total weight: {self.total_weight}")
            events.append(self._finish(EventKind.TERMINAL_COMPLETE, msg, distance=self.total_weight))
        return events

    def view(self) -> dict:
        data = super().view()
        data.update(
            tree_order=list(self.tree_order),
            tree_edges=[e.to_dict() for e in self.tree_edges],
            candidate=self.candidate.to_dict() if self.candidate else None,
            total_weight=self.total_weight,
        )
        return data


# ---------------------------------------------------------------------------
# Dijkstra
# ---------------------------------------------------------------------------
@dataclass(eq=False)
class DijkstraState(AlgorithmState):
    algorithm: ClassVar[str] = "dijkstra"

    distances:   List[Distance]      = field(default_factory=list)
    previous:    List[Optional[int]] = field(default_factory=list)
    visited:     Set[int]            = field(default_factory=set)
    visit_order: List[int]           = field(default_factory=list)
    path_found:  Optional[bool]      = None     # None until finished with a target

    def __post_init__(self):
        n = self.graph.node_count()
        if not self.distances:
            self.distances = [UNREACHABLE] * n
            self.distances[self.source] = 0
        if not self.previous:
            self.previous = [None] * n

    def clone(self) -> "DijkstraState":
        return replace(
            self,
            distances=list(self.distances),
            previous=list(self.previous),
            visited=set(self.visited),
            visit_order=list(self.visit_order),
        )

    def advance(self) -> List[StepEvent]:
        self.started = True
        node = select_min(self.distances, self.visited)
        if node is None:
            return [self._no_more_nodes()]

        dist = self.distances[node]
        self.current = node
        self.visited.add(node)
        self.visit_order.append(node)
        events = [StepEvent(
            kind=EventKind.NODE_SELECTED, node=node, distance=dist,
            message=f"Visiting node {node}. Distance: {dist}",
        )]

        if node == self.target:
            path = self.path_to(node)
            self.path_found = True
            events.append(StepEvent(
                kind=EventKind.NODE_FINALIZED, node=node, distance=dist, previous=self.previous[node],
                message=f"Node {node} finalized at distance {dist}.",
            ))
            events.append(self._finish(
                EventKind.TERMINAL_PATH_FOUND,
                f"Shortest path found. Distance: {dist}",
                node=node, distance=dist, path=tuple(path),
            ))
            return events

        for edge in self.graph.neighbours(node):
            nbr = edge.target
            if nbr in self.visited:
                continue
            candidate = add(dist, edge.weight)
            if is_shorter(candidate, self.distances[nbr]):
                old = self.distances[nbr]
                self.distances[nbr] = candidate
                self.previous[nbr] = node
                events.append(StepEvent(
                    kind=EventKind.DISTANCE_IMPROVED, node=nbr, edge=edge,
                    distance=candidate, previous=node,
                    message=f"Distance to node {nbr}: {format_distance(old)} → {candidate} via {node}.",
                ))

        events.append(StepEvent(
            kind=EventKind.NODE_FINALIZED, node=node, distance=dist, previous=self.previous[node],
            message=f"Node {node} finalized at distance {dist}.",
        ))

        if select_min(self.distances, self.visited) is None:
            events.append(self._no_more_nodes())
        return events

    def _no_more_nodes(self) -> StepEvent:
        if self.target is not None:
            self.path_found = False
            return self._finish(
                EventKind.TERMINAL_NO_PATH,
                f"No path exists to target {self.target}.",
                node=self.target,
            )
        return self._finish(
            EventKind.TERMINAL_COMPLETE,
            f"All reachable nodes settled ({len(self.visited)} of {self.graph.node_count()}).",
        )

    def path_to(self, node: int) -> List[int]:
        if self.distances[node] is UNREACHABLE:
            return []
        path: List[int] = []
        cur: Optional[int] = node
        while cur is not None:
            path.append(cur)
            cur = self.previous[cur]
        path.reverse()
        return path

    def view(self) -> dict:
        data = super().view()
        data.update(
            distances=list(self.distances),
            previous=list(self.previous),
            visit_order=list(self.visit_order),
            path_found=self.path_found,
            path=self.path_to(self.target) if self.path_found else [],
        )
        return data


STATE_TYPES = {
    "bfs":      BfsState,
    "prim":     PrimState,
    "dijkstra": DijkstraState,
}


# ---------------------------------------------------------------------------
# Functional API
# ---------------------------------------------------------------------------
class StepResult(NamedTuple):
    state:    Optional[AlgorithmState]
    events:   Tuple[StepEvent, ...]
    finished: bool


def init(algorithm: str, graph: Graph, source: int = 0, target: Optional[int] = None) -> AlgorithmState:
    """
    Fresh state, no steps taken.

    Raises:
        UnknownAlgorithm – not one of bfs / prim / dijkstra.
        InvalidNode      – source or target outside the graph.
    """
    try:
        key = get_algorithm(algorithm).key
    except UnknownAlgorithm:
        key = None
    if key not in STATE_TYPES:
        raise UnknownAlgorithm(algorithm, [a.key for a in steppable_algorithms()])

    graph.check_node(source)
    if key == "dijkstra" and target is not None:
        graph.check_node(target)
    else:
        target = None
    return STATE_TYPES[key](graph=graph, source=source, target=target)


def step(state: AlgorithmState) -> StepResult:
    """Advance a copy of `state` by one unit.  A finished state is returned unchanged."""
    if state.finished:
        return StepResult(state, (), True)
    nxt = state.clone()
    events = nxt.advance()
    nxt.steps_taken += 1
    return StepResult(nxt, tuple(events), nxt.finished)
