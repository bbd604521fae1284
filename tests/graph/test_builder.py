import pytest

from routegen.builder import (
    ACCEPTED_ROAD_TYPES,
    GraphBuilder,
    build_graph,
    filter_nodes_on_ways,
    resolve_way_nodes,
    select_ways,
    ways_with_tag_keys,
)
from routegen.geo import distance
from routegen.model import EdgeData, Node, Way

N1 = Node(1, 0.0, 0.0)
N2 = Node(2, 1.0, 1.0)
N3 = Node(3, 2.0, 2.0)
N4 = Node(4, 3.0, 3.0)


def _way(way_id, *nodes, highway="residential"):
    return Way(
        way_id,
        tuple(n.id for n in nodes),
        nodes,
        {"highway": highway},
    )


class TestGraphBuilder:
    def test_add_node(self):
        builder = GraphBuilder()
        assert builder.add_node(N1) == 0
        assert builder.add_node(N2) == 1
        assert len(builder) == 2
        assert 1 in builder
        assert 3 not in builder

        graph = builder.build()
        assert graph.nodes == (N1, N2)
        assert graph.adjacency == ((), ())

    def test_duplicate_node_returns_existing_index(self):
        builder = GraphBuilder()
        builder.add_node(N1)
        builder.add_node(N2)
        assert builder.add_node(Node(1, 9.0, 9.0)) == 0
        assert len(builder) == 2

        graph = builder.build()
        # First registration wins
        assert graph.node(0) == N1

    def test_add_edge_bidirectional(self):
        builder = GraphBuilder()
        builder.add_node(N1)
        builder.add_node(N2)
        edge = EdgeData(way_id=1, length_m=1.5)
        builder.add_edge_bidirectional(1, 2, edge)

        graph = builder.build()
        (fwd,) = graph.neighbors(0)
        (back,) = graph.neighbors(1)
        assert (fwd.osm_id, fwd.index, fwd.edge) == (2, 1, edge)
        assert (back.osm_id, back.index, back.edge) == (1, 0, edge)

    def test_unknown_id_leaves_builder_untouched(self):
        builder = GraphBuilder()
        builder.add_node(N1)
        with pytest.raises(KeyError, match="not registered"):
            builder.add_edge_bidirectional(1, 99, EdgeData(1, 1.0))
        with pytest.raises(KeyError):
            builder.add_edge_bidirectional(99, 1, EdgeData(1, 1.0))

        graph = builder.build()
        assert graph.adjacency == ((),)

    def test_add_way(self):
        builder = GraphBuilder()
        builder.add_way(_way(1, N1, N2, N3))
        graph = builder.build()

        assert [n.id for n in graph.nodes] == [1, 2, 3]
        assert [n.index for n in graph.neighbors(0)] == [1]
        assert [n.index for n in graph.neighbors(1)] == [0, 2]
        assert [n.index for n in graph.neighbors(2)] == [1]

        first = graph.neighbors(0)[0].edge
        assert first.way_id == 1
        assert first.length_m == pytest.approx(distance(0.0, 0.0, 1.0, 1.0))

    def test_two_ways_share_a_node(self):
        builder = GraphBuilder()
        builder.add_way(_way(1, N1, N2))
        builder.add_way(_way(2, N2, N3))
        graph = builder.build()

        assert graph.num_nodes == 3
        assert graph.num_edges == 2
        assert [n.edge.way_id for n in graph.neighbors(1)] == [1, 2]

    def test_multiple_ways(self):
        builder = GraphBuilder()
        builder.add_way(_way(1, N1, N2))
        builder.add_way(_way(2, N3, N4))
        builder.add_way(_way(3, N4, N1))
        graph = builder.build()

        assert [n.id for n in graph.nodes] == [1, 2, 3, 4]
        assert sorted(n.index for n in graph.neighbors(0)) == [1, 3]
        assert graph.num_edges == 3

    def test_single_node_way_adds_nothing(self):
        builder = GraphBuilder()
        builder.add_way(_way(1, N1))
        assert len(builder) == 0

    def test_closed_way(self):
        builder = GraphBuilder()
        builder.add_way(_way(1, N1, N2, N3, N1))
        graph = builder.build()
        assert graph.num_nodes == 3
        assert graph.num_edges == 3
        assert sorted(n.index for n in graph.neighbors(0)) == [1, 2]

    def test_build_consumes_builder(self):
        builder = GraphBuilder()
        builder.add_node(N1)
        builder.build()

        with pytest.raises(RuntimeError):
            builder.add_node(N2)
        with pytest.raises(RuntimeError):
            builder.add_way(_way(1, N1, N2))
        with pytest.raises(RuntimeError):
            builder.build()


class TestWayFiltering:
    def test_select_ways_by_highway(self):
        ways = [
            _way(1, N1, N2, highway="residential"),
            _way(2, N2, N3, highway="footway"),
            Way(3, (3, 4), tags={"building": "yes"}),
            _way(4, N3, N4, highway="trunk_link"),
        ]
        assert [w.id for w in select_ways(ways)] == [1, 4]
        assert [w.id for w in select_ways(ways, ["footway"])] == [2]

    def test_accepted_road_types(self):
        assert "residential" in ACCEPTED_ROAD_TYPES
        assert "footway" not in ACCEPTED_ROAD_TYPES
        assert len(set(ACCEPTED_ROAD_TYPES)) == len(ACCEPTED_ROAD_TYPES)

    def test_ways_with_tag_keys(self):
        ways = [
            Way(1, (1, 2), tags={"highway": "path"}),
            Way(2, (2, 3), tags={"waterway": "river"}),
            Way(3, (3, 4), tags={}),
        ]
        assert [w.id for w in ways_with_tag_keys(ways, ["highway"])] == [1]
        assert [w.id for w in ways_with_tag_keys(ways, ["highway", "waterway"])] == [1, 2]

    def test_filter_nodes_on_ways(self):
        ways = [Way(1, (1, 2)), Way(2, (2, 4))]
        kept = filter_nodes_on_ways([N1, N2, N3, N4], ways)
        assert kept == [N1, N2, N4]

    def test_resolve_way_nodes(self):
        (way,) = resolve_way_nodes([Way(7, (3, 1, 2), tags={"highway": "road"})], [N1, N2, N3])
        assert way.nodes == (N3, N1, N2)
        assert way.tags == {"highway": "road"}

    def test_resolve_unknown_node(self):
        with pytest.raises(KeyError, match="unknown node '9'"):
            resolve_way_nodes([Way(7, (1, 9))], [N1])


class TestBuildGraph:
    def test_city_block(self, city_block):
        # Footway 12 and its far node 6 are dropped
        assert [n.id for n in city_block.nodes] == [1, 2, 3, 4, 5]
        assert city_block.num_edges == 5
        assert {n.edge.way_id for nbrs in city_block.adjacency for n in nbrs} == {10, 11}

    def test_keep_all_ways(self):
        nodes = [N1, N2, N3]
        ways = [Way(1, (1, 2), tags={"highway": "footway"}), Way(2, (2, 3))]
        graph = build_graph(nodes, ways, accepted=None)
        assert graph.num_nodes == 3
        assert graph.num_edges == 2

    def test_logs_summary(self, caplog):
        caplog.set_level("INFO", logger="routegen")
        build_graph([N1, N2], [_way(1, N1, N2)])
        assert "Built graph from 1/1 ways" in caplog.text

    def test_no_ways(self):
        graph = build_graph([N1, N2], [])
        assert graph.num_nodes == 0
