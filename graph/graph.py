"""
graph.py — Weighted Graph Container
===================================
Single source of truth for the graph.  Engines only read it; callers
build and mutate it before a search starts.

Responsibilities:
  1. CRUD on nodes & edges                  (add / remove / get)
  2. Adjacency queries                      (outgoing, incoming, neighbours)
  3. Deep copy                              (clone)
  4. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes stored in a dict keyed by id; edges in an insertion-ordered list
    (Bellman-Ford relaxes them in that order).
  - A separate adjacency dict `_adj[node_id] → [Edge, …]` holds outgoing
    edges so neighbour queries are O(degree), not O(E).  Incoming edges are
    a linear scan.
  - Undirected graphs store both directions explicitly: adding (u, v, w)
    also stores (v, u, w), and removal drops both.
  - Query methods hand out tuples / mapping proxies, never the internal
    containers.
  - Every query accepts either a Node or a node id.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

from graph.node import Node
from graph.edge import Edge

NodeRef = Union[Node, str]


def _key(node: NodeRef) -> str:
    if isinstance(node, Node):
        return node.id
    if isinstance(node, str):
        return node
    raise ValueError(f"Expected a Node or node id, got {node!r}")


class Graph:
    """
    Attributes:
        directed : bool – graph-level directedness
        _nodes   : {node_id: Node}
        _edges   : [Edge, …] in insertion order
        _adj     : {node_id: [outgoing Edge, …]}
    """

    def __init__(self, directed: bool = True):
        self.directed: bool              = directed
        self._nodes:   Dict[str, Node]       = {}
        self._edges:   List[Edge]            = []
        self._adj:     Dict[str, List[Edge]] = {}

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        if node is None:
            raise ValueError("Node cannot be None")
        if node.id in self._nodes:
            raise ValueError(f"Duplicate node id: {node.id}")
        self._nodes[node.id] = node
        self._adj[node.id]   = []
        return node

    def create_node(self, node_id: str, x: float = 0.0, y: float = 0.0, label: Optional[str] = None) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(node_id, x=x, y=y, label=label))

    def remove_node(self, node: NodeRef) -> bool:
        nid = _key(node)
        if nid not in self._nodes:
            return False
        touching = [e for e in self._edges if nid in e.endpoints()]
        for e in touching:
            self._detach(e)
        del self._nodes[nid]
        self._adj.pop(nid, None)
        return True

    def get_node(self, node: NodeRef) -> Optional[Node]:
        return self._nodes.get(_key(node))

    def contains_node(self, node: NodeRef) -> bool:
        return _key(node) in self._nodes

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        if edge is None:
            raise ValueError("Edge cannot be None")
        src, dst = edge.endpoints()
        if src not in self._nodes or dst not in self._nodes:
            raise ValueError("Both source and target nodes must exist in the graph")
        self._insert(edge)
        if not self.directed:
            self._insert(Edge(edge.target, edge.source, edge.weight))
        return edge

    def create_edge(self, source: NodeRef, target: NodeRef, weight: float = 1.0, edge_id: Optional[str] = None) -> Edge:
        """Create an edge between two nodes already in the graph."""
        src = self._require(source)
        dst = self._require(target)
        return self.add_edge(Edge(src, dst, weight, edge_id=edge_id))

    def remove_edge(self, edge: Union[Edge, str]) -> bool:
        """Remove by Edge object or by edge id.  Undirected: both directions go."""
        if isinstance(edge, Edge):
            found = self._find(lambda e: e is edge) or self._find(lambda e: e.id == edge.id)
        else:
            found = self._find(lambda e: e.id == edge)
        if found is None:
            return False
        self._detach(found)
        if not self.directed:
            src, dst = found.endpoints()
            mirror = self._find(lambda e: e.endpoints() == (dst, src))
            if mirror is not None:
                self._detach(mirror)
        return True

    def remove_edge_between(self, source: NodeRef, target: NodeRef) -> bool:
        pair  = (_key(source), _key(target))
        found = self._find(lambda e: e.endpoints() == pair)
        if found is None:
            return False
        return self.remove_edge(found)

    def set_weight(self, source: NodeRef, target: NodeRef, weight: float) -> Edge:
        """
        Re-weight the edge source → target.  Undirected: the stored reverse
        edge gets the same weight.  Raises ValueError when there is no such
        edge or the weight is not finite; nothing changes in that case.
        """
        found = self.get_edge_between(source, target)
        if found is None:
            raise ValueError(f"No edge {_key(source)}->{_key(target)}")
        mirror = None
        if not self.directed:
            mirror = self.get_edge_between(target, source)
        found.weight = weight
        if mirror is not None:
            mirror.weight = found.weight
        return found

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self._find(lambda e: e.id == edge_id)

    def get_edge_between(self, source: NodeRef, target: NodeRef) -> Optional[Edge]:
        """First outgoing edge source → target, or None."""
        dst = _key(target)
        for e in self._adj.get(_key(source), ()):
            if e.target.id == dst:
                return e
        return None

    # ==================================================================
    # QUERIES
    # ==================================================================
    @property
    def nodes(self) -> Mapping[str, Node]:
        """Read-only {node_id: Node} view."""
        return MappingProxyType(self._nodes)

    def all_nodes(self) -> Tuple[Node, ...]:
        return tuple(self._nodes.values())

    def all_edges(self) -> Tuple[Edge, ...]:
        return tuple(self._edges)

    def node_ids(self) -> List[str]:
        return list(self._nodes.keys())

    def edges_from(self, node: NodeRef) -> Tuple[Edge, ...]:
        """Outgoing edges of a node."""
        return tuple(self._adj.get(_key(node), ()))

    def edges_to(self, node: NodeRef) -> Tuple[Edge, ...]:
        """Incoming edges of a node (linear scan)."""
        nid = _key(node)
        return tuple(e for e in self._edges if e.target.id == nid)

    def neighbours(self, node: NodeRef) -> Tuple[Node, ...]:
        return tuple(e.target for e in self._adj.get(_key(node), ()))

    def edge_weight(self, source: NodeRef, target: NodeRef) -> float:
        e = self.get_edge_between(source, target)
        return float("inf") if e is None else e.weight

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self._edges)

    # ==================================================================
    # COPY / RESET
    # ==================================================================
    def clone(self) -> "Graph":
        """Deep copy: new Node and Edge instances, identical topology."""
        copy = Graph(directed=self.directed)
        for n in self._nodes.values():
            copy.add_node(Node(n.id, x=n.x, y=n.y, label=n.label))
        for e in self._edges:
            src, dst = e.endpoints()
            copy._insert(Edge(copy._nodes[src], copy._nodes[dst], e.weight, edge_id=e.id))
        return copy

    def clear(self) -> None:
        self._nodes.clear()
        self._edges.clear()
        self._adj.clear()

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self.directed,
            "nodes":    [n.to_dict() for n in self._nodes.values()],
            "edges":    [e.to_dict() for e in self._edges],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        """
        Rebuild from `to_dict` output.  Edges are taken as stored, so an
        undirected graph's explicit reverse edges are not doubled up.
        Plain {source, target, weight} lists without reverses should go
        through `create_edge` instead.
        """
        g = cls(directed=data.get("directed", True))
        for nd in data.get("nodes", []):
            g.add_node(Node.from_dict(nd))
        for ed in data.get("edges", []):
            src = g._require(ed["source"])
            dst = g._require(ed["target"])
            g._insert(Edge(src, dst, ed.get("weight", 1.0), edge_id=ed.get("id")))
        return g

    # ==================================================================
    # INTERNAL
    # ==================================================================
    def _require(self, node: NodeRef) -> Node:
        found = self._nodes.get(_key(node))
        if found is None:
            raise ValueError(f"Node not in graph: {_key(node)}")
        return found

    def _insert(self, edge: Edge) -> None:
        self._edges.append(edge)
        self._adj.setdefault(edge.source.id, []).append(edge)

    def _detach(self, edge: Edge) -> None:
        self._edges[:] = [e for e in self._edges if e is not edge]
        out = self._adj.get(edge.source.id)
        if out is not None:
            out[:] = [e for e in out if e is not edge]

    def _find(self, predicate) -> Optional[Edge]:
        for e in self._edges:
            if predicate(e):
                return e
        return None

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"
