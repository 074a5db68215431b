"""
step.py — Algorithm Step Snapshot
==================================
Every engine records a sequence of AlgorithmStep objects.  A step is a
frozen-in-time picture of the search:

    • Which node is being processed right now (None for init / Bellman-Ford)
    • Which nodes are visited / closed
    • The best-known distance and predecessor of every node
    • The frontier, ordered by priority at capture time
    • A plain-English description of what happened

Design decisions:
  - Step is a frozen dataclass.  Collections are copied in __post_init__
    and exposed as frozenset / tuple / MappingProxyType, so neither the
    engine's later work nor a caller can change a recorded step.
  - Everything is keyed by node id; accessors also accept Node objects.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from graph import Node

INF = float("inf")


def _id(node) -> str:
    return node.id if isinstance(node, Node) else node


@dataclass(frozen=True)
class AlgorithmStep:
    """
    Attributes:
        step_number  : 0-based position in the run.
        current_node : Id of the node being processed, or None.
        visited      : Ids of nodes visited / closed so far.
        distances    : {node_id: best-known distance}; missing means +∞.
        predecessors : {node_id: predecessor id or None}.
        frontier     : Frontier node ids ordered by current priority.
        description  : Human-readable account of the step.
    """

    step_number:  int
    current_node: Optional[str]                = None
    visited:      FrozenSet[str]               = frozenset()
    distances:    Mapping[str, float]          = field(default_factory=dict)
    predecessors: Mapping[str, Optional[str]]  = field(default_factory=dict)
    frontier:     Tuple[str, ...]              = ()
    description:  str                          = ""

    def __post_init__(self):
        if self.step_number < 0:
            raise ValueError("step_number must be >= 0")
        object.__setattr__(self, "current_node", None if self.current_node is None else _id(self.current_node))
        object.__setattr__(self, "visited", frozenset(_id(n) for n in (self.visited or ())))
        object.__setattr__(self, "distances", MappingProxyType(
            {_id(n): d for n, d in dict(self.distances or {}).items()}
        ))
        object.__setattr__(self, "predecessors", MappingProxyType(
            {_id(n): (None if p is None else _id(p)) for n, p in dict(self.predecessors or {}).items()}
        ))
        object.__setattr__(self, "frontier", tuple(_id(n) for n in (self.frontier or ())))
        object.__setattr__(self, "description", self.description or "")

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def distance(self, node) -> float:
        return self.distances.get(_id(node), INF)

    def predecessor(self, node) -> Optional[str]:
        return self.predecessors.get(_id(node))

    def is_visited(self, node) -> bool:
        return _id(node) in self.visited

    # ------------------------------------------------------------------
    # Serialisation  (+∞ becomes None so the output is valid JSON)
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number":  self.step_number,
            "current_node": self.current_node,
            "visited":      sorted(self.visited),
            "distances":    {n: (None if math.isinf(d) else d) for n, d in self.distances.items()},
            "predecessors": dict(self.predecessors),
            "frontier":     list(self.frontier),
            "description":  self.description,
        }

    def __str__(self) -> str:
        return f"Step {self.step_number}: {self.description}"
