"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every shortest-path engine.

    from algorithms import REGISTRY, get_algorithm, run_algorithm

REGISTRY is a dict:
    {
        "dijkstra": AlgoInfo(key, label, fn, supports_negative, …),
        …
    }

Every `fn` has the same signature:
    fn(graph, source, target) -> AlgorithmResult
so callers pick an engine by key and never branch on it.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from algorithms.step         import AlgorithmStep
from algorithms.result       import AlgorithmResult
from algorithms.dijkstra     import dijkstra     as _dijkstra
from algorithms.bellman_ford import bellman_ford as _bf
from algorithms.astar        import astar        as _astar


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each engine
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgoInfo:
    key:               str                    # registry key, e.g. "dijkstra"
    label:             str                    # human label
    fn:                Callable[..., AlgorithmResult]
    tags:              List[str] = field(default_factory=list)
    supports_negative: bool      = False      # can handle negative edges?
    has_heuristic:     bool      = False
    complexity_time:   str       = ""
    description:       str       = ""

    def to_dict(self) -> dict:
        return {
            "key":               self.key,
            "label":             self.label,
            "tags":              list(self.tags),
            "supports_negative": self.supports_negative,
            "has_heuristic":     self.has_heuristic,
            "complexity_time":   self.complexity_time,
            "description":       self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra,
        tags=["weighted", "shortest-path"],
        complexity_time="O((V + E) log V)",
        description="Settles the nearest unvisited node first. Exact when every weight is >= 0.",
    ),

    "bellman_ford": AlgoInfo(
        key="bellman_ford", label="Bellman–Ford", fn=_bf,
        tags=["weighted", "shortest-path", "negative-edges"],
        supports_negative=True,
        complexity_time="O(V · E)",
        description="Relaxes every edge |V|-1 times. Accepts negative weights and reports negative cycles.",
    ),

    "astar": AlgoInfo(
        key="astar", label="A* Search", fn=_astar,
        tags=["weighted", "shortest-path", "heuristic"],
        has_heuristic=True,
        complexity_time="O((V + E) log V)",
        description="Dijkstra + Euclidean heuristic guidance. Optimal when h is admissible.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered engines in insertion order."""
    return list(REGISTRY.values())


def run_algorithm(key: str, graph, source, target) -> AlgorithmResult:
    """Run the engine registered under `key`."""
    info = get_algorithm(key)
    if info is None:
        raise ValueError(f"Unknown algorithm: {key}")
    return info.fn(graph, source, target)


__all__ = [
    "AlgoInfo",
    "AlgorithmStep",
    "AlgorithmResult",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "run_algorithm",
]
