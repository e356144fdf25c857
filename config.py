"""
config.py — Application Settings
==================================
Environment configuration for the HTTP front-end.  Every variable is
prefixed with GRAPH_ENGINE_.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from graph import InvalidParameter


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _parse_counts(raw: str) -> Tuple[int, ...]:
    try:
        counts = tuple(int(part) for part in raw.split(",") if part.strip())
    except ValueError:
        raise InvalidParameter(f"GRAPH_ENGINE_NODE_COUNTS must be a comma list of ints, got {raw!r}")
    if not counts or any(n < 1 for n in counts):
        raise InvalidParameter(f"GRAPH_ENGINE_NODE_COUNTS must list positive ints, got {raw!r}")
    return counts


@dataclass
class Settings:
    """Application settings from environment."""

    host:          str              = "127.0.0.1"
    port:          int              = 5000
    debug:         bool             = False
    log_level:     str              = "INFO"
    max_nodes:     int              = 500           # upper bound for API-generated graphs
    max_sessions:  int              = 256           # open step sessions; LRU eviction past this
    node_counts:   Tuple[int, ...]  = (10, 50, 100, 200)
    seed:          Optional[int]    = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        seed = os.getenv("GRAPH_ENGINE_SEED")
        return cls(
            host=os.getenv("GRAPH_ENGINE_HOST", "127.0.0.1"),
            port=int(os.getenv("GRAPH_ENGINE_PORT", "5000")),
            debug=_parse_bool(os.getenv("GRAPH_ENGINE_DEBUG", "false")),
            log_level=os.getenv("GRAPH_ENGINE_LOG_LEVEL", "INFO").upper(),
            max_nodes=int(os.getenv("GRAPH_ENGINE_MAX_NODES", "500")),
            max_sessions=int(os.getenv("GRAPH_ENGINE_MAX_SESSIONS", "256")),
            node_counts=_parse_counts(os.getenv("GRAPH_ENGINE_NODE_COUNTS", "10,50,100,200")),
            seed=int(seed) if seed not in (None, "") else None,
        )
