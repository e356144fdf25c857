"""
models.py — Benchmark Records
==============================
Plain-data results of a benchmark sweep.  Everything here is frozen and
serialises with `to_dict()` for the JSON API and the chart front-end.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class BenchmarkRecord:
    """One timed run of one algorithm on one generated graph."""
    algorithm:  str             # registry label, e.g. "Floyd-Warshall"
    node_count: int
    elapsed_ms: float
    topology:   str = ""
    weighted:   bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BenchmarkFailure:
    """A trial that could not run (generation refused the parameters)."""
    topology:   str
    node_count: Optional[int]
    error_type: str
    message:    str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class BenchmarkReport:
    records:  List[BenchmarkRecord]  = field(default_factory=list)
    failures: List[BenchmarkFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def extend(self, other: "BenchmarkReport") -> None:
        self.records.extend(other.records)
        self.failures.extend(other.failures)

    def for_algorithm(self, label: str) -> List[BenchmarkRecord]:
        return [r for r in self.records if r.algorithm == label]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "records":  [r.to_dict() for r in self.records],
            "failures": [f.to_dict() for f in self.failures],
        }
