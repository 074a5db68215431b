"""
edge.py — Weighted Graph Edge
=============================
A directed connection `source → target` with a finite weight.

Design decisions:
  - `source` and `target` are Node objects; the id defaults to
    "{source.id}->{target.id}" so an edge is addressable without a uuid.
  - The weight may be changed after construction, but it is validated on
    every write: NaN and ±inf are rejected.  Negative weights are allowed
    (Bellman-Ford demos need them).  Setting `weight` touches this edge
    only; in an undirected Graph use `Graph.set_weight` so the stored
    reverse edge follows.
  - Two edges are equal when their ids match OR when they join the same
    ordered (source, target) pair.  The hash covers the pair only.
"""

import math
from typing import Optional

from graph.node import Node


def _check_weight(weight: float) -> float:
    try:
        value = float(weight)
    except (TypeError, ValueError):
        raise ValueError(f"Edge weight must be a number, got {weight!r}")
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Edge weight must be a finite number")
    return value


class Edge:
    """
    Attributes:
        id     : Identifier, "{source}->{target}" unless given.
        source : Tail Node.
        target : Head Node.
        weight : Finite numeric cost.

    Equality is "same id OR same (source, target) pair" and is therefore not
    transitive.  `__hash__` covers the pair only, so two edges that share an
    id but join different pairs compare equal yet hash differently; do not
    mix such edges in one set or dict.  A Graph never creates them: default
    ids are derived from the pair.
    """

    __slots__ = ("_id", "_source", "_target", "_weight")

    def __init__(
        self,
        source: Node,
        target: Node,
        weight: float = 1.0,
        edge_id: Optional[str] = None,
    ):
        if source is None or target is None:
            raise ValueError("Source and target nodes must not be None")
        if edge_id is not None and not edge_id:
            raise ValueError("Edge id must be non-empty")
        self._weight: float = _check_weight(weight)
        self._source: Node  = source
        self._target: Node  = target
        self._id:     str   = edge_id or f"{source.id}->{target.id}"

    @property
    def id(self) -> str:
        return self._id

    @property
    def source(self) -> Node:
        return self._source

    @property
    def target(self) -> Node:
        return self._target

    @property
    def weight(self) -> float:
        return self._weight

    @weight.setter
    def weight(self, value: float) -> None:
        self._weight = _check_weight(value)

    def endpoints(self):
        """(source_id, target_id) pair."""
        return self._source.id, self._target.id

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":     self._id,
            "source": self._source.id,
            "target": self._target.id,
            "weight": self._weight,
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self._source.id} → {self._target.id}, w={self._weight})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Edge):
            return False
        return self._id == other.id or self.endpoints() == other.endpoints()

    def __hash__(self) -> int:
        return hash(self.endpoints())
