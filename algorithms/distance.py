"""
distance.py — Tentative Distances & the Unreachable Marker
===========================================================
Shortest-path tables hold either a finite int or UNREACHABLE.

UNREACHABLE is `None`, not `float("inf")`: Python refuses to order None
against an int, so any code path that forgets to check reachability
fails loudly instead of quietly producing a bogus finite sum.  All
arithmetic on table entries goes through the two helpers below.
"""

from typing import Optional

Distance = Optional[int]

UNREACHABLE: Distance = None


def is_reachable(d: Distance) -> bool:
    return d is not None


def add(d: Distance, weight: Distance) -> Distance:
    """d + weight, or UNREACHABLE if either side is unreachable."""
    if d is None or weight is None:
        return UNREACHABLE
    return d + weight


def is_shorter(candidate: Distance, current: Distance) -> bool:
    """Strict candidate < current, with UNREACHABLE above every finite value."""
    if candidate is None:
        return False
    if current is None:
        return True
    return candidate < current


def format_distance(d: Distance) -> str:
    return "∞" if d is None else str(d)
