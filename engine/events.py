"""
events.py — Step Events
========================
A StepEvent is an immutable description of ONE thing that changed
during a `step()` call.  The caller (renderer, HTTP client, test) owns
translating events into visuals; the engine never touches presentation
state and never hands out its working memory.

Design decisions:
  - One flat frozen dataclass with optional fields rather than a class
    per kind: the renderer switches on `kind` and reads what it needs,
    and `to_dict()` stays trivial.
  - `message` carries the human-readable status line the visualizer
    shows under the canvas ("Visiting node 4. Distance: 7").
  - Terminal kinds mark the end of a run.  TERMINAL_NO_PATH is how
    "no path exists" is reported — it is an outcome, not an exception.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from graph import Edge
from algorithms.distance import Distance


class EventKind(Enum):
    NODE_ENTERED        = "node_entered"         # BFS: queued at `level`
    NODE_FINALIZED      = "node_finalized"       # BFS / Dijkstra: fully processed
    NODE_SELECTED       = "node_selected"        # Dijkstra: current min-distance node
    DISTANCE_IMPROVED   = "distance_improved"    # Dijkstra: relaxation succeeded
    EDGE_SELECTED       = "edge_selected"        # Prim: candidate crossing edge
    NODE_ENTERING_TREE  = "node_entering_tree"   # Prim: candidate endpoint
    NODE_IN_TREE        = "node_in_tree"         # Prim: committed to the tree
    TERMINAL_COMPLETE   = "terminal_complete"
    TERMINAL_PATH_FOUND = "terminal_path_found"
    TERMINAL_NO_PATH    = "terminal_no_path"


TERMINAL_KINDS = frozenset({
    EventKind.TERMINAL_COMPLETE,
    EventKind.TERMINAL_PATH_FOUND,
    EventKind.TERMINAL_NO_PATH,
})


@dataclass(frozen=True)
class StepEvent:
    """
    Attributes:
        kind     : what happened.
        node     : the node concerned (None for edge-only / terminal events).
        edge     : the edge concerned (Prim selection, Dijkstra relaxation).
        level    : BFS level of `node`.
        distance : Dijkstra tentative / final distance, or Prim running tree weight.
        previous : Dijkstra predecessor of `node` after a relaxation.
        path     : TERMINAL_PATH_FOUND only — source → target.
        message  : human-readable status line.
    """

    kind:     EventKind
    node:     Optional[int]    = None
    edge:     Optional[Edge]   = None
    level:    Optional[int]    = None
    distance: Distance         = None
    previous: Optional[int]    = None
    path:     Tuple[int, ...]  = ()
    message:  str              = ""

    @property
    def is_terminal(self) -> bool:
        return self.kind in TERMINAL_KINDS

    def to_dict(self) -> dict:
        return {
            "kind":     self.kind.value,
            "node":     self.node,
            "edge":     self.edge.to_dict() if self.edge else None,
            "level":    self.level,
            "distance": self.distance,
            "previous": self.previous,
            "path":     list(self.path),
            "message":  self.message,
        }
