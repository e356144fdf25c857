"""
stepper.py — Step-by-Step Session Engine
==========================================
The StepEngine is the ONLY object a front-end talks to during an
animated run.  It owns the current AlgorithmState, buffers every event
it has emitted, and exposes a play/pause/step/reset/speed API.

State machine:
    READY    →  step()          →  RUNNING
    RUNNING  ⇄  pause() / play()   PAUSED
    PAUSED   →  step()          →  PAUSED   (manual single-step)
    any      →  (terminal event) → FINISHED
    any      →  reset()         →  READY

Scheduling is the caller's job.  The engine never sleeps and never reads
the clock; `interval` is just the number of seconds the caller's timer
should wait between `step()` calls while playing.

Cancellation:
  Every reset() bumps `generation`.  A timer that was armed before the
  reset passes the generation it saw; `step(generation=old)` is a no-op,
  so a late tick can never advance the fresh state.

Thread safety:
  This class is NOT thread-safe.  Callers serialize step()/reset() per
  engine (the HTTP layer holds one lock per session).
"""

from enum import Enum
from typing import List, Optional

from graph import Graph, InvalidParameter
from engine.events import StepEvent
from engine.states import AlgorithmState, StepResult, init, step


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------
class Phase(Enum):
    READY    = "ready"
    RUNNING  = "running"
    PAUSED   = "paused"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.4,
    "fast":   0.15,   # demo mode
    "turbo":  0.05,
}

MIN_INTERVAL = 0.02

# reset() default meaning "leave the target as it is"
KEEP = object()


# ---------------------------------------------------------------------------
# StepEngine
# ---------------------------------------------------------------------------
class StepEngine:
    """
    Attributes:
        phase      : Current Phase.
        generation : Bumped on every reset(); stale step() calls are ignored.
        interval   : Seconds between auto-advance ticks (caller schedules).
        history    : Every StepEvent emitted since the last reset.
        state      : Current AlgorithmState (replaced, never mutated, by step()).
    """

    def __init__(self, algorithm: str, graph: Graph, source: int = 0, target: Optional[int] = None):
        self.state:      AlgorithmState  = init(algorithm, graph, source, target)
        self.phase:      Phase           = Phase.READY
        self.generation: int             = 0
        self.interval:   float           = SPEED_PRESETS["medium"]
        self.history:    List[StepEvent] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(
        self,
        graph: Optional[Graph] = None,
        source: Optional[int] = None,
        target=KEEP,
        algorithm: Optional[str] = None,
    ) -> int:
        """
        Discard the current run and start over, optionally on a new
        graph / source / target / algorithm.  Returns the new generation.

        Omitted arguments keep the current value.  `target=None` clears a
        Dijkstra target.  On a new graph a kept source that no longer
        exists falls back to node 0, and a kept target that no longer
        exists is dropped.  An explicit bad source or target raises and
        leaves the current run untouched.
        """
        graph = graph if graph is not None else self.state.graph
        if source is None:
            source = self.state.source
            if not graph.has_node(source):
                source = 0
        if target is KEEP:
            target = self.state.target
            if target is not None and not graph.has_node(target):
                target = None

        fresh = init(algorithm if algorithm is not None else self.state.algorithm, graph, source, target)
        self.state      = fresh
        self.phase      = Phase.READY
        self.history    = []
        self.generation += 1
        return self.generation

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def step(self, generation: Optional[int] = None) -> StepResult:
        """Advance one unit.  Stale generations and finished runs are no-ops."""
        if generation is not None and generation != self.generation:
            return StepResult(None, (), self.is_finished)
        if self.phase == Phase.FINISHED:
            return StepResult(self.state, (), True)

        result = step(self.state)
        self.state = result.state
        self.history.extend(result.events)

        if result.finished:
            self.phase = Phase.FINISHED
        elif self.phase == Phase.READY:
            self.phase = Phase.RUNNING
        return result

    def run_to_completion(self) -> List[StepEvent]:
        """Pump step() until finished; return the events produced along the way."""
        events: List[StepEvent] = []
        while not self.is_finished:
            events.extend(self.step().events)
        return events

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.phase == Phase.FINISHED:
            return
        self.phase = Phase.RUNNING

    def pause(self) -> None:
        if self.phase in (Phase.RUNNING, Phase.READY):
            self.phase = Phase.PAUSED

    def toggle_play(self) -> None:
        if self.phase == Phase.RUNNING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            raise InvalidParameter(
                f"Unknown speed preset {preset!r}; expected one of {', '.join(SPEED_PRESETS)}"
            )
        self.interval = SPEED_PRESETS[preset]

    def set_speed_value(self, seconds: float) -> None:
        self.interval = max(MIN_INTERVAL, float(seconds))

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def algorithm(self) -> str:
        return self.state.algorithm

    @property
    def is_finished(self) -> bool:
        return self.phase == Phase.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.phase == Phase.RUNNING

    @property
    def last_event(self) -> Optional[StepEvent]:
        return self.history[-1] if self.history else None

    def snapshot(self) -> dict:
        last = self.last_event
        return {
            "phase":      self.phase.value,
            "generation": self.generation,
            "interval":   self.interval,
            "finished":   self.is_finished,
            "events":     len(self.history),
            "message":    last.message if last else "",
            "state":      self.state.view(),
        }
