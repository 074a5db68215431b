"""
Properties every engine must satisfy, run against all three.
"""

import math
import random
from concurrent.futures import ThreadPoolExecutor

import pytest

from graph import Graph
from algorithms import REGISTRY, run_algorithm
from algorithms.astar import astar
from algorithms.bellman_ford import bellman_ford
from algorithms.dijkstra import dijkstra

ENGINES = [
    pytest.param(dijkstra, id="dijkstra"),
    pytest.param(bellman_ford, id="bellman_ford"),
    pytest.param(astar, id="astar"),
]


def random_graph(seed: int, size: int = 8, same_coordinates: bool = False) -> Graph:
    rng = random.Random(seed)
    g = Graph(directed=True)
    for i in range(size):
        x, y = (0, 0) if same_coordinates else (rng.uniform(0, 3), rng.uniform(0, 3))
        g.create_node(str(i), x, y)
    for i in range(size):
        for j in range(size):
            if i != j and rng.random() < 0.35:
                g.create_edge(str(i), str(j), rng.randint(1, 9))
    return g


@pytest.mark.parametrize("engine", ENGINES)
class TestEveryEngine:

    def test_line_scenario(self, engine, line_graph):
        result = engine(line_graph, line_graph.get_node("A"), line_graph.get_node("C"))
        assert result.has_path()
        assert result.cost == pytest.approx(8.0)
        assert result.path_ids() == ["A", "B", "C"]
        assert result.duration_ms >= 0
        assert result.nodes_visited > 0

    def test_diamond_scenario_rejects_costlier_route(self, engine, diamond_graph):
        result = engine(diamond_graph, "A", "D")
        assert result.cost == pytest.approx(4.0)
        assert result.path_ids() == ["A", "C", "D"]

    def test_source_equals_target(self, engine, line_graph):
        result = engine(line_graph, "B", "B")
        assert result.path_ids() == ["B"]
        assert result.cost == 0.0
        assert result.has_path()

    def test_source_equals_target_on_negative_cycle(self, engine, negative_cycle_graph):
        result = engine(negative_cycle_graph, "A", "A")
        assert result.path_ids() == ["A"]
        assert result.cost == 0.0

    def test_no_route(self, engine, disconnected_graph):
        result = engine(disconnected_graph, "A", "D")
        assert not result.has_path()
        assert result.cost == math.inf
        assert result.path == ()
        assert "reachable" in result.steps[-1].description.lower()

    def test_step_numbers_start_at_zero_and_increase(self, engine, diamond_graph):
        steps = engine(diamond_graph, "A", "D").steps
        assert steps
        assert [s.step_number for s in steps] == list(range(len(steps)))
        assert steps[0].current_node is None
        assert steps[0].distance("A") == 0.0
        assert "initialized" in steps[0].description.lower()

    def test_steps_are_independent_snapshots(self, engine, diamond_graph):
        steps = engine(diamond_graph, "A", "D").steps
        assert steps[0].distance("D") == math.inf
        assert steps[-1].distance("D") == pytest.approx(4.0)
        assert steps[0].predecessor("D") is None

    def test_graph_is_not_mutated(self, engine, diamond_graph):
        before = diamond_graph.to_dict()
        engine(diamond_graph, "A", "D")
        assert diamond_graph.to_dict() == before

    def test_undirected_graph(self, engine):
        g = Graph(directed=False)
        g.create_node("A", 0, 0)
        g.create_node("B", 1, 0)
        g.create_node("C", 2, 0)
        g.create_edge("B", "A", 1.0)
        g.create_edge("C", "B", 1.0)
        result = engine(g, "A", "C")
        assert result.path_ids() == ["A", "B", "C"]
        assert result.cost == pytest.approx(2.0)

    def test_invalid_arguments(self, engine, line_graph):
        with pytest.raises(ValueError):
            engine(None, "A", "C")
        with pytest.raises(ValueError):
            engine(line_graph, None, "C")
        with pytest.raises(ValueError):
            engine(line_graph, "A", None)
        with pytest.raises(ValueError):
            engine(line_graph, "A", "Z")
        with pytest.raises(ValueError):
            engine(line_graph, "Z", "A")


class TestCrossEngineAgreement:

    @pytest.mark.parametrize("seed", [1, 2, 3, 4])
    def test_bellman_ford_matches_dijkstra(self, seed):
        g = random_graph(seed)
        for target in g.node_ids():
            expected = dijkstra(g, "0", target).cost
            assert bellman_ford(g, "0", target).cost == pytest.approx(expected)

    @pytest.mark.parametrize("seed", [5, 6, 7])
    def test_astar_matches_dijkstra_with_uninformative_heuristic(self, seed):
        g = random_graph(seed, same_coordinates=True)
        for target in g.node_ids():
            assert astar(g, "0", target).cost == pytest.approx(dijkstra(g, "0", target).cost)


class TestIndependentGraphsInThreads:

    def test_concurrent_runs_match_sequential_runs(self):
        seeds = list(range(10, 18))
        keys  = ["dijkstra", "bellman_ford", "astar"]

        def run_all(seed):
            g = random_graph(seed)
            results = [run_algorithm(key, g, "0", target) for key in keys for target in g.node_ids()]
            return [(r.cost, r.path_ids(), r.step_count()) for r in results]

        expected = {seed: run_all(seed) for seed in seeds}
        with ThreadPoolExecutor(max_workers=4) as pool:
            actual = dict(zip(seeds, pool.map(run_all, seeds)))
        assert actual == expected


class TestRegistry:

    def test_keys(self):
        assert list(REGISTRY) == ["dijkstra", "bellman_ford", "astar"]
        assert REGISTRY["bellman_ford"].supports_negative
        assert REGISTRY["astar"].has_heuristic

    def test_run_algorithm_tags_result(self, line_graph):
        result = run_algorithm("astar", line_graph, "A", "C")
        assert result.algorithm == "astar"

    def test_unknown_key(self, line_graph):
        with pytest.raises(ValueError):
            run_algorithm("bogus", line_graph, "A", "C")
