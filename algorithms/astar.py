"""
astar.py — A* Search
=====================
heapq A* guided by the Euclidean distance between node coordinates and
the target's coordinates.

The heuristic is admissible only when edge weights respect the geometry.
Nothing here checks that: with an inconsistent heuristic the search still
runs and may return a non-optimal path.  With all coordinates equal, h is
0 everywhere and A* expands in Dijkstra order.

Step distances are g-scores; the frontier is ordered by f = g + h.  Each
description shows the current node with its g, h and f.
"""

import heapq
import logging
import time
from typing import Dict, List, Optional, Set, Tuple, Union

from graph import Graph, Node
from algorithms.common import INF, path_cost, reconstruct_path, resolve_endpoints
from algorithms.result import AlgorithmResult
from algorithms.step import AlgorithmStep

logger = logging.getLogger(__name__)


def euclidean(a: Node, b: Node) -> float:
    return a.distance_to(b)


def find_shortest_path(
    graph: Graph,
    source: Union[Node, str],
    target: Union[Node, str],
) -> AlgorithmResult:
    src, dst = resolve_endpoints(graph, source, target)
    if graph.has_negative_edges():
        logger.warning("A* run on a graph with negative edge weights; result is not guaranteed optimal")

    started = time.perf_counter()

    g_score: Dict[str, float]         = {nid: INF for nid in graph.nodes}
    f_score: Dict[str, float]         = {nid: INF for nid in graph.nodes}
    parent:  Dict[str, Optional[str]] = {nid: None for nid in graph.nodes}
    closed:  Set[str]                 = set()
    h_cache: Dict[str, float]         = {}

    def h(nid: str) -> float:
        if nid not in h_cache:
            h_cache[nid] = euclidean(graph.get_node(nid), dst)
        return h_cache[nid]

    g_score[src.id] = 0.0
    f_score[src.id] = h(src.id)
    open_set: List[Tuple[float, str]] = [(f_score[src.id], src.id)]

    steps: List[AlgorithmStep] = [
        _snapshot(0, None, closed, g_score, f_score, parent, open_set,
                  f"Initialized source node {src.id} with g=0, h={h(src.id):.2f}, f={f_score[src.id]:.2f}"),
    ]
    nodes_visited = 0
    reached       = False

    # --- main loop ---
    while open_set:
        _, node = heapq.heappop(open_set)
        if node in closed:
            continue

        if node == dst.id:
            reached = True
            steps.append(_snapshot(len(steps), node, closed, g_score, f_score, parent, open_set,
                                   _describe(node, g_score, f_score, h, []) + ". Reached target."))
            break

        closed.add(node)
        nodes_visited += 1

        updated: List[str] = []
        for edge in graph.edges_from(node):
            nbr = edge.target.id
            if nbr in closed:
                continue
            tentative_g = g_score[node] + edge.weight
            if tentative_g < g_score[nbr]:
                g_score[nbr] = tentative_g
                f_score[nbr] = tentative_g + h(nbr)
                parent[nbr]  = node
                heapq.heappush(open_set, (f_score[nbr], nbr))
                updated.append(nbr)

        steps.append(_snapshot(len(steps), node, closed, g_score, f_score, parent, open_set,
                               _describe(node, g_score, f_score, h, updated)))

    if not reached:
        steps.append(_snapshot(len(steps), None, closed, g_score, f_score, parent, open_set,
                               f"Open set empty. Target {dst.id} is not reachable from {src.id}."))

    path = reconstruct_path(graph, parent, src.id, dst.id)
    cost = path_cost(path, src, dst, g_score[dst.id])
    elapsed_ms = (time.perf_counter() - started) * 1000

    logger.debug("astar %s->%s: cost=%s steps=%d closed=%d", src.id, dst.id, cost, len(steps), nodes_visited)
    return AlgorithmResult(
        steps=tuple(steps),
        path=tuple(path),
        cost=cost,
        source=src,
        target=dst,
        duration_ms=elapsed_ms,
        nodes_visited=nodes_visited,
        algorithm="astar",
    )


astar = find_shortest_path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _snapshot(
    step_number: int,
    current: Optional[str],
    closed: Set[str],
    g_score: Dict[str, float],
    f_score: Dict[str, float],
    parent: Dict[str, Optional[str]],
    open_set: List[Tuple[float, str]],
    description: str,
) -> AlgorithmStep:
    pending  = {n for _, n in open_set if n not in closed}
    frontier = sorted(pending, key=lambda n: (f_score[n], n))
    return AlgorithmStep(
        step_number=step_number,
        current_node=current,
        visited=closed,
        distances=g_score,
        predecessors=parent,
        frontier=frontier,
        description=description,
    )


def _describe(node: str, g_score, f_score, h, updated: List[str]) -> str:
    text = f"Visiting node {node} (g={g_score[node]:.2f}, h={h(node):.2f}, f={f_score[node]:.2f})"
    if updated:
        parts = [f"{n} (g={g_score[n]:.2f}, h={h(n):.2f}, f={f_score[n]:.2f})" for n in updated]
        text += ", updated neighbors: " + ", ".join(parts)
    return text
