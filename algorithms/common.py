"""
common.py — helpers shared by the three engines
================================================
Argument validation and predecessor-chain path reconstruction.  Frontier
handling lives in each engine: priority functions (distance vs. f-score)
and tie-breaks differ.
"""

from typing import Dict, List, Optional, Tuple, Union

from graph import Graph, Node

INF = float("inf")


def resolve_endpoints(
    graph: Graph,
    source: Union[Node, str],
    target: Union[Node, str],
) -> Tuple[Node, Node]:
    """Validate inputs and return the graph's own Node objects."""
    if graph is None:
        raise ValueError("graph must not be None")
    if source is None:
        raise ValueError("source must not be None")
    if target is None:
        raise ValueError("target must not be None")
    src = graph.get_node(source)
    if src is None:
        raise ValueError("source not in graph")
    dst = graph.get_node(target)
    if dst is None:
        raise ValueError("target not in graph")
    return src, dst


def reconstruct_path(
    graph: Graph,
    predecessors: Dict[str, Optional[str]],
    source: str,
    target: str,
) -> List[Node]:
    """
    Walk predecessors back from target.  Returns [] unless the chain ends
    at source; returns [source] when source == target.
    """
    if source == target:
        return [graph.get_node(source)]
    if predecessors.get(target) is None:
        return []
    path, cur, seen = [], target, set()
    while cur is not None and cur not in seen:
        seen.add(cur)
        path.append(cur)
        if cur == source:
            break
        cur = predecessors.get(cur)
    if not path or path[-1] != source:
        return []
    path.reverse()
    return [graph.get_node(nid) for nid in path]


def path_cost(path: List[Node], source: Node, target: Node, distance: float) -> float:
    """+∞ when no route was found, otherwise the engine's distance to target."""
    if not path and source != target:
        return INF
    return distance
