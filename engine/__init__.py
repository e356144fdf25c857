"""
engine/
-------
Resumable step-by-step layer.

    from engine import StepEngine, init, step
"""

from engine.events  import EventKind, StepEvent, TERMINAL_KINDS
from engine.states  import (
    AlgorithmState,
    BfsState,
    DijkstraState,
    PrimState,
    StepResult,
    init,
    step,
)
from engine.stepper import StepEngine, Phase, SPEED_PRESETS, KEEP

__all__ = [
    "EventKind",
    "StepEvent",
    "TERMINAL_KINDS",
    "AlgorithmState",
    "BfsState",
    "PrimState",
    "DijkstraState",
    "StepResult",
    "init",
    "step",
    "StepEngine",
    "Phase",
    "SPEED_PRESETS",
    "KEEP",
]
