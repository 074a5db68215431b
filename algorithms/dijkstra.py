"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Min-heap (heapq) Dijkstra with lazy deletion: a node may sit in the heap
several times, stale entries are skipped once the node is visited.

Records a Step at:
  1. Initialisation  (current = None, source at distance 0)
  2. Each popped + visited node, naming the neighbours it improved
  3. Target popped  →  "reached target", early exit
  4. Heap exhausted without reaching the target

Correctness note: Dijkstra requires non-negative weights.  Negative
weights are not rejected; the run logs a warning and the result is
unverified.
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


def find_shortest_path(
    graph: Graph,
    source: Union[Node, str],
    target: Union[Node, str],
) -> AlgorithmResult:
    src, dst = resolve_endpoints(graph, source, target)
    if graph.has_negative_edges():
        logger.warning("Dijkstra run on a graph with negative edge weights; result is not guaranteed optimal")

    started = time.perf_counter()

    dist:    Dict[str, float]         = {nid: INF for nid in graph.nodes}
    parent:  Dict[str, Optional[str]] = {nid: None for nid in graph.nodes}
    visited: Set[str]                 = set()
    dist[src.id] = 0.0
    pq: List[Tuple[float, str]] = [(0.0, src.id)]

    steps: List[AlgorithmStep] = [
        _snapshot(0, None, visited, dist, parent, pq,
                  f"Initialized source node {src.id} with distance 0"),
    ]
    nodes_visited = 0
    reached       = False

    # --- main loop ---
    while pq:
        _, node = heapq.heappop(pq)
        if node in visited:
            continue
        visited.add(node)
        nodes_visited += 1

        if node == dst.id:
            reached = True
            steps.append(_snapshot(len(steps), node, visited, dist, parent, pq,
                                   f"Reached target {node} with distance {dist[node]}. Early exit."))
            break

        updated: List[str] = []
        for edge in graph.edges_from(node):
            nbr      = edge.target.id
            new_dist = dist[node] + edge.weight
            if new_dist < dist[nbr]:
                dist[nbr]   = new_dist
                parent[nbr] = node
                heapq.heappush(pq, (new_dist, nbr))
                updated.append(nbr)

        steps.append(_snapshot(len(steps), node, visited, dist, parent, pq, _describe(node, updated)))

    if not reached:
        steps.append(_snapshot(len(steps), None, visited, dist, parent, pq,
                               f"Priority queue empty. Target {dst.id} is not reachable from {src.id}."))

    path = reconstruct_path(graph, parent, src.id, dst.id)
    cost = path_cost(path, src, dst, dist[dst.id])
    elapsed_ms = (time.perf_counter() - started) * 1000

    logger.debug("dijkstra %s->%s: cost=%s steps=%d visited=%d", src.id, dst.id, cost, len(steps), nodes_visited)
    return AlgorithmResult(
        steps=tuple(steps),
        path=tuple(path),
        cost=cost,
        source=src,
        target=dst,
        duration_ms=elapsed_ms,
        nodes_visited=nodes_visited,
        algorithm="dijkstra",
    )


# the registry imports engines by algorithm name
dijkstra = find_shortest_path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _snapshot(
    step_number: int,
    current: Optional[str],
    visited: Set[str],
    dist: Dict[str, float],
    parent: Dict[str, Optional[str]],
    pq: List[Tuple[float, str]],
    description: str,
) -> AlgorithmStep:
    # frontier: distinct unvisited heap entries, ordered by current distance
    pending  = {n for _, n in pq if n not in visited}
    frontier = sorted(pending, key=lambda n: (dist[n], n))
    return AlgorithmStep(
        step_number=step_number,
        current_node=current,
        visited=visited,
        distances=dist,
        predecessors=parent,
        frontier=frontier,
        description=description,
    )


def _describe(node: str, updated: List[str]) -> str:
    if not updated:
        return f"Visiting node {node}, no updates"
    return f"Visiting node {node}, updated neighbors: {', '.join(updated)}"
