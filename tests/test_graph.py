"""
Unit tests for the graph model: Node, Edge, Graph.
"""

import math

import pytest

from graph import Edge, Graph, Node


class TestNode:

    def test_equality_and_hash_use_id_only(self):
        a1 = Node("A", 0, 0, label="first")
        a2 = Node("A", 9, 9, label="second")
        assert a1 == a2
        assert hash(a1) == hash(a2)
        assert len({a1, a2}) == 1

    def test_coordinates_are_read_only(self):
        node = Node("A", 1, 2)
        with pytest.raises(AttributeError):
            node.x = 5

    def test_label_defaults_to_id(self):
        node = Node("A")
        assert node.label == "A"
        node.label = ""
        assert node.label == "A"

    def test_empty_id_rejected(self):
        with pytest.raises(ValueError):
            Node("")

    def test_distance_to_is_euclidean(self):
        assert Node("A", 0, 0).distance_to(Node("B", 3, 4)) == pytest.approx(5.0)


class TestEdge:

    def test_default_id_from_endpoints(self):
        e = Edge(Node("A"), Node("B"), 2.0)
        assert e.id == "A->B"

    @pytest.mark.parametrize("weight", [math.nan, math.inf, -math.inf])
    def test_non_finite_weight_rejected(self, weight):
        with pytest.raises(ValueError):
            Edge(Node("A"), Node("B"), weight)

    def test_weight_setter_validates(self):
        e = Edge(Node("A"), Node("B"), 2.0)
        e.weight = -3.5
        assert e.weight == -3.5
        with pytest.raises(ValueError):
            e.weight = math.inf
        assert e.weight == -3.5

    def test_equal_by_id_or_by_pair(self):
        a, b, c = Node("A"), Node("B"), Node("C")
        assert Edge(a, b, 1.0, edge_id="x") == Edge(b, c, 2.0, edge_id="x")
        assert Edge(a, b, 1.0, edge_id="x") == Edge(a, b, 7.0, edge_id="y")
        assert Edge(a, b, 1.0) != Edge(b, a, 1.0)


class TestGraphNodes:

    def test_duplicate_node_rejected(self):
        g = Graph()
        g.create_node("A")
        with pytest.raises(ValueError):
            g.create_node("A")
        assert g.node_count() == 1

    def test_nodes_view_is_read_only(self, line_graph):
        with pytest.raises(TypeError):
            line_graph.nodes["X"] = Node("X")

    def test_remove_node_drops_touching_edges(self, line_graph):
        assert line_graph.remove_node("B")
        assert line_graph.edge_count() == 0
        assert line_graph.edges_from("A") == ()
        assert line_graph.edges_to("C") == ()
        assert line_graph.get_node("B") is None

    def test_remove_missing_node_is_noop(self, line_graph):
        assert not line_graph.remove_node("Z")
        assert line_graph.node_count() == 3


class TestGraphEdges:

    def test_edge_requires_both_endpoints(self):
        g = Graph()
        a = g.create_node("A")
        with pytest.raises(ValueError):
            g.add_edge(Edge(a, Node("B"), 1.0))
        assert g.edge_count() == 0
        assert g.edges_from("A") == ()

    def test_queries(self, diamond_graph):
        g = diamond_graph
        assert [e.target.id for e in g.edges_from("A")] == ["B", "C"]
        assert [n.id for n in g.neighbours("A")] == ["B", "C"]
        assert sorted(e.source.id for e in g.edges_to("D")) == ["B", "C"]
        assert g.edge_weight("C", "D") == 2.0
        assert g.edge_weight("D", "A") == math.inf
        assert g.get_edge_between("A", "C").weight == 2.0
        assert g.get_edge("B->D").weight == 5.0
        assert isinstance(g.all_edges(), tuple)

    def test_remove_edge_by_id_and_pair(self, diamond_graph):
        g = diamond_graph
        assert g.remove_edge("A->B")
        assert g.get_edge_between("A", "B") is None
        assert g.remove_edge_between("C", "D")
        assert [e.id for e in g.all_edges()] == ["B->D", "A->C"]
        assert not g.remove_edge("nope")

    def test_undirected_stores_both_directions(self):
        g = Graph(directed=False)
        g.create_node("A")
        g.create_node("B")
        g.create_edge("A", "B", 4.0)
        assert g.edge_count() == 2
        assert g.edge_weight("B", "A") == 4.0

    def test_undirected_removal_drops_both_directions(self):
        g = Graph(directed=False)
        g.create_node("A")
        g.create_node("B")
        g.create_edge("A", "B", 4.0)
        assert g.remove_edge_between("B", "A")
        assert g.edge_count() == 0
        assert g.edges_from("A") == ()
        assert g.edges_from("B") == ()

    def test_set_weight_undirected_updates_both_directions(self):
        g = Graph(directed=False)
        g.create_node("A")
        g.create_node("B")
        g.create_edge("A", "B", 4.0)
        g.set_weight("B", "A", 7.5)
        assert g.edge_weight("A", "B") == 7.5
        assert g.edge_weight("B", "A") == 7.5

    def test_set_weight_directed_touches_one_edge(self, line_graph):
        line_graph.create_edge("B", "A", 2.0)
        line_graph.set_weight("A", "B", 1.0)
        assert line_graph.edge_weight("A", "B") == 1.0
        assert line_graph.edge_weight("B", "A") == 2.0

    def test_set_weight_rejects_missing_edge_and_bad_weight(self):
        g = Graph(directed=False)
        g.create_node("A")
        g.create_node("B")
        g.create_edge("A", "B", 4.0)
        with pytest.raises(ValueError):
            g.set_weight("A", "Z", 1.0)
        with pytest.raises(ValueError):
            g.set_weight("A", "B", math.nan)
        assert g.edge_weight("A", "B") == 4.0
        assert g.edge_weight("B", "A") == 4.0

    def test_has_negative_edges(self, line_graph):
        assert not line_graph.has_negative_edges()
        line_graph.create_edge("C", "A", -1.0)
        assert line_graph.has_negative_edges()


class TestGraphCopy:

    def test_clone_is_deep(self, diamond_graph):
        copy = diamond_graph.clone()
        assert copy.node_ids() == diamond_graph.node_ids()
        assert [e.id for e in copy.all_edges()] == [e.id for e in diamond_graph.all_edges()]
        assert copy.get_node("A") is not diamond_graph.get_node("A")
        assert copy.get_edge("A->B") is not diamond_graph.get_edge("A->B")

        copy.get_edge("A->B").weight = 100.0
        copy.remove_node("D")
        assert diamond_graph.edge_weight("A", "B") == 1.0
        assert diamond_graph.node_count() == 4

    def test_clone_undirected_keeps_edge_count(self):
        g = Graph(directed=False)
        g.create_node("A")
        g.create_node("B")
        g.create_edge("A", "B", 1.0)
        assert g.clone().edge_count() == 2

    def test_dict_round_trip(self):
        g = Graph(directed=False)
        g.create_node("A", 1, 2)
        g.create_node("B", 3, 4)
        g.create_edge("A", "B", 2.5)
        again = Graph.from_dict(g.to_dict())
        assert again.directed is False
        assert again.edge_count() == 2
        assert again.get_node("B").x == 3
        assert again.edge_weight("B", "A") == 2.5
