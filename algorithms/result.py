"""
result.py — Algorithm Result
============================
Outcome of one complete engine run: the recorded steps plus the final
path, its cost and a couple of counters the metrics view reads.

"Has a path" means exactly: the cost is finite.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from graph import Node
from algorithms.step import AlgorithmStep


@dataclass(frozen=True)
class AlgorithmResult:
    """
    Attributes:
        steps         : Ordered AlgorithmStep sequence.
        path          : Nodes from source to target (empty if none).
        cost          : Total path cost, +∞ when there is no path.
        source        : Start Node.
        target        : Goal Node.
        duration_ms   : Wall-clock run time in milliseconds.
        nodes_visited : Nodes the engine finalised / reached.
        algorithm     : Registry key of the engine that produced this.
    """

    steps:         Tuple[AlgorithmStep, ...]
    path:          Tuple[Node, ...]
    cost:          float
    source:        Node
    target:        Node
    duration_ms:   float = 0.0
    nodes_visited: int   = 0
    algorithm:     str   = ""

    def __post_init__(self):
        if self.source is None:
            raise ValueError("source must not be None")
        if self.target is None:
            raise ValueError("target must not be None")
        if isinstance(self.duration_ms, bool) or not isinstance(self.duration_ms, (int, float)):
            raise ValueError(f"duration_ms must be a number, got {self.duration_ms!r}")
        if self.duration_ms < 0:
            raise ValueError("duration_ms must be >= 0")
        if isinstance(self.nodes_visited, bool) or not isinstance(self.nodes_visited, int):
            raise ValueError(f"nodes_visited must be an int, got {self.nodes_visited!r}")
        if self.nodes_visited < 0:
            raise ValueError("nodes_visited must be >= 0")
        object.__setattr__(self, "steps", tuple(self.steps or ()))
        object.__setattr__(self, "path", tuple(self.path or ()))

    def has_path(self) -> bool:
        return not math.isinf(self.cost)

    def step_count(self) -> int:
        return len(self.steps)

    def path_ids(self) -> List[str]:
        return [n.id for n in self.path]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm":     self.algorithm,
            "source":        self.source.id,
            "target":        self.target.id,
            "path":          self.path_ids(),
            "cost":          self.cost if self.has_path() else None,
            "has_path":      self.has_path(),
            "duration_ms":   round(self.duration_ms, 3),
            "nodes_visited": self.nodes_visited,
            "step_count":    self.step_count(),
        }

    def __str__(self) -> str:
        route = " -> ".join(self.path_ids()) or "<no path>"
        return (
            f"{self.algorithm or 'Algorithm'} result: path={route}, cost={self.cost}, "
            f"steps={self.step_count()}, visited={self.nodes_visited}, time_ms={self.duration_ms:.3f}"
        )
