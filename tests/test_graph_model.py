"""Tests for Edge, Graph and GraphBuilder."""

import pytest

from graph import Edge, Graph, GraphBuilder, InvalidNode, InvalidParameter


class TestEdge:

    def test_key_is_sorted(self):
        assert Edge(3, 1, 5).key == (1, 3)
        assert Edge(1, 3, 5).key == (1, 3)

    def test_reversed(self):
        assert Edge(0, 2, 7).reversed() == Edge(2, 0, 7)

    def test_from_dict_coerces_and_defaults_weight(self):
        assert Edge.from_dict({"source": "1", "target": 2}) == Edge(1, 2, 1)


class TestGraphBuilder:

    def test_undirected_edges_are_mirrored(self, make_graph):
        g = make_graph(3, [(0, 1, 4), (1, 2, 2)])
        assert g.neighbours(1) == (Edge(1, 0, 4), Edge(1, 2, 2))
        assert g.has_edge(1, 0)
        assert g.edge_count() == 2

    def test_directed_edges_stored_once(self, make_graph):
        g = make_graph(3, [(0, 1, 1), (1, 2, 1)], directed=True)
        assert g.neighbours(1) == (Edge(1, 2, 1),)
        assert not g.has_edge(1, 0)
        assert g.edge_count() == 2

    def test_parallel_edges_mirrored_one_for_one(self, make_graph):
        g = make_graph(2, [(0, 1, 5), (0, 1, 2), (1, 0, 3)])
        assert g.degree(0) == 3
        assert g.degree(1) == 3
        assert g.edge_count() == 3

    def test_rejects_self_loop(self):
        gb = GraphBuilder(3)
        with pytest.raises(InvalidParameter):
            gb.add_edge(1, 1, 1)

    def test_rejects_out_of_range_node(self):
        gb = GraphBuilder(3)
        with pytest.raises(InvalidNode):
            gb.add_edge(0, 3, 1)

    @pytest.mark.parametrize("weight", [0, -2, 1.5, True])
    def test_rejects_bad_weight(self, weight):
        gb = GraphBuilder(2)
        with pytest.raises(InvalidParameter):
            gb.add_edge(0, 1, weight)

    def test_unweighted_forces_weight_one(self, make_graph):
        g = make_graph(2, [(0, 1, 9)], weighted=False)
        assert g.neighbours(0)[0].weight == 1

    def test_negative_node_count_rejected(self):
        with pytest.raises(InvalidParameter):
            GraphBuilder(-1)


class TestGraphQueries:

    def test_unique_edges_keeps_lightest_parallel(self, make_graph):
        g = make_graph(3, [(0, 1, 5), (1, 2, 3), (1, 0, 2)])
        assert g.unique_edges() == [Edge(0, 1, 2), Edge(1, 2, 3)]

    def test_get_edge_between_returns_lightest(self, make_graph):
        g = make_graph(2, [(0, 1, 5), (0, 1, 2)])
        assert g.get_edge_between(0, 1).weight == 2
        assert g.get_edge_between(1, 0).weight == 2

    def test_components(self, split_graph):
        assert split_graph.components() == [[0, 1, 2], [3, 4]]
        assert not split_graph.is_connected()

    def test_components_use_weak_connectivity(self, make_graph):
        g = make_graph(3, [(1, 0, 1), (1, 2, 1)], directed=True)
        assert g.components() == [[0, 1, 2]]

    def test_total_weight_counts_each_edge_once(self, weighted_graph):
        assert weighted_graph.total_weight() == 4 + 1 + 1 + 2 + 5

    def test_check_node(self, path_graph):
        path_graph.check_node(2)
        for bad in (-1, 3, "1", True):
            with pytest.raises(InvalidNode):
                path_graph.check_node(bad)

    def test_neighbours_of_unknown_node(self, path_graph):
        with pytest.raises(InvalidNode):
            path_graph.neighbours(7)

    def test_empty_graph(self):
        g = GraphBuilder(0).build()
        assert g.node_count() == 0
        assert g.components() == []
        assert g.is_connected()


class TestSerialisation:

    def test_round_trip(self, weighted_graph):
        again = Graph.from_dict(weighted_graph.to_dict())
        assert again.node_count() == 5
        assert list(again.edges()) == list(weighted_graph.edges())

    def test_directed_round_trip(self, make_graph):
        g = make_graph(3, [(0, 2, 4), (1, 2, 1)], directed=True)
        again = Graph.from_dict(g.to_dict())
        assert again.directed
        assert again.neighbours(2) == ()

    def test_from_dict_counts_nodes_from_list(self):
        g = Graph.from_dict({"nodes": [0, 1, 2, 3], "edges": [{"source": 0, "target": 3, "weight": 2}]})
        assert g.node_count() == 4
        assert g.has_edge(3, 0)

    @pytest.mark.parametrize("payload", [
        {"node_count": 2, "edges": [{"source": 0, "target": 0}]},
        {"node_count": 2, "edges": [{"source": 0, "target": 5}]},
        {"node_count": 2, "edges": [{"source": 0, "target": 1, "weight": 0}]},
        {"node_count": 2, "edges": [{"source": 0}]},
        {"node_count": "lots", "edges": []},
    ])
    def test_from_dict_rejects_bad_input(self, payload):
        with pytest.raises(InvalidParameter):
            Graph.from_dict(payload)

    def test_from_dict_enforces_node_limit(self):
        with pytest.raises(InvalidParameter, match="At most 10 nodes"):
            Graph.from_dict({"node_count": 10 ** 9, "edges": []}, max_nodes=10)
        assert Graph.from_dict({"node_count": 10, "edges": []}, max_nodes=10).node_count() == 10
