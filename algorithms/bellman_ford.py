"""
bellman_ford.py — Bellman–Ford Algorithm
=========================================
The single-source shortest-path engine that handles NEGATIVE edge
weights, and detects negative cycles reachable from the source.

Structure:
  • Exactly |V|-1 passes relaxing every edge in the graph.
  • One extra "detector" pass: any edge that still relaxes means a
    negative cycle, and the result carries no path.

Records a Step for:
  1. Initialisation
  2. Each completed pass (iteration number + how many distances changed)
  3. Negative-cycle detection, or an unreachable target

There is no frontier and no current node: every step has
current_node = None, an empty frontier, and "visited" = every node whose
distance is finite.
"""

import logging
import math
import time
from typing import Dict, List, Optional, Union

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
    started  = time.perf_counter()

    dist:   Dict[str, float]         = {nid: INF for nid in graph.nodes}
    parent: Dict[str, Optional[str]] = {nid: None for nid in graph.nodes}
    dist[src.id] = 0.0
    edges = graph.all_edges()
    V     = graph.node_count()

    steps: List[AlgorithmStep] = [
        _snapshot(0, dist, parent, f"Initialized source node {src.id} with distance 0"),
    ]

    if src == dst:
        steps.append(_snapshot(1, dist, parent, f"Source {src.id} is the target. Path cost 0."))
        return _result(steps, [src], 0.0, src, dst, started, 1)

    # ==============================================================
    # RELAXATION PASSES
    # ==============================================================
    for iteration in range(1, V):
        updates = 0
        for edge in edges:
            u, v = edge.endpoints()
            if math.isinf(dist[u]):
                continue
            alt = dist[u] + edge.weight
            if alt < dist[v]:
                dist[v]   = alt
                parent[v] = u
                updates  += 1
        steps.append(_snapshot(len(steps), dist, parent,
                               f"Iteration {iteration}: Relaxed edges, updated {updates} distances"))

    nodes_visited = _reachable(dist)

    # ==============================================================
    # NEGATIVE-CYCLE DETECTOR
    # ==============================================================
    for edge in edges:
        u, v = edge.endpoints()
        if not math.isinf(dist[u]) and dist[u] + edge.weight < dist[v]:
            steps.append(_snapshot(len(steps), dist, parent,
                                   f"Negative cycle detected via edge {u}->{v} (w={edge.weight}). "
                                   f"Shortest paths are undefined."))
            logger.debug("bellman_ford %s->%s: negative cycle", src.id, dst.id)
            return _result(steps, [], INF, src, dst, started, nodes_visited)

    path = reconstruct_path(graph, parent, src.id, dst.id)
    cost = path_cost(path, src, dst, dist[dst.id])
    if not path:
        steps.append(_snapshot(len(steps), dist, parent,
                               f"No negative cycle, but target {dst.id} is unreachable from {src.id}."))
    return _result(steps, path, cost, src, dst, started, nodes_visited)


bellman_ford = find_shortest_path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _snapshot(
    step_number: int,
    dist: Dict[str, float],
    parent: Dict[str, Optional[str]],
    description: str,
) -> AlgorithmStep:
    return AlgorithmStep(
        step_number=step_number,
        current_node=None,
        visited={n for n, d in dist.items() if not math.isinf(d)},
        distances=dist,
        predecessors=parent,
        frontier=(),
        description=description,
    )


def _reachable(dist: Dict[str, float]) -> int:
    return sum(1 for d in dist.values() if not math.isinf(d))


def _result(steps, path, cost, src, dst, started, nodes_visited) -> AlgorithmResult:
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.debug("bellman_ford %s->%s: cost=%s steps=%d", src.id, dst.id, cost, len(steps))
    return AlgorithmResult(
        steps=tuple(steps),
        path=tuple(path),
        cost=cost,
        source=src,
        target=dst,
        duration_ms=elapsed_ms,
        nodes_visited=nodes_visited,
        algorithm="bellman_ford",
    )
