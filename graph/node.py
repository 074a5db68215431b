"""
node.py — Graph Node
====================
A vertex of the graph.  Identity is the `id` string; the (x, y)
coordinate is only read by A* as heuristic input, and the label is for
display.

Design decisions:
  - `id`, `x` and `y` are fixed at construction (read-only properties).
    Engines snapshot node ids, so a node that moved mid-search would make
    recorded heuristic values lie.
  - Equality and hashing use the id alone, so two Node objects built from
    the same id are interchangeable as dict keys.
"""

import math
from typing import Optional


class Node:
    """
    Attributes:
        id     : Unique identifier (non-empty string).
        x, y   : Coordinates, heuristic input only.
        label  : Human-readable name, defaults to the id.
    """

    __slots__ = ("_id", "_x", "_y", "_label")

    def __init__(
        self,
        node_id: str,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
    ):
        if not node_id or not isinstance(node_id, str):
            raise ValueError("Node id must be a non-empty string")
        self._id:    str   = node_id
        self._x:     float = float(x)
        self._y:     float = float(y)
        self._label: str   = label or node_id

    # ------------------------------------------------------------------
    # Read-only identity & position
    # ------------------------------------------------------------------
    @property
    def id(self) -> str:
        return self._id

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def label(self) -> str:
        return self._label

    @label.setter
    def label(self, value: Optional[str]) -> None:
        self._label = value or self._id

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def distance_to(self, other: "Node") -> float:
        """Euclidean distance — the A* heuristic."""
        return math.hypot(self._x - other.x, self._y - other.y)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":    self._id,
            "label": self._label,
            "x":     self._x,
            "y":     self._y,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(
            node_id=data["id"],
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
            label=data.get("label"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self._id}, label={self._label}, pos=({self._x:.2f},{self._y:.2f}))"

    def __str__(self) -> str:
        return self._id

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self._id == other.id

    def __hash__(self) -> int:
        return hash(self._id)
