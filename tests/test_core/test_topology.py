"""Tests for topology generation."""

from random import Random

import networkx as nx
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from adaptnet.config import ConfigurationError
from adaptnet.core.nodes import AREA_SIZE, NodeType
from adaptnet.core.topology import (
    build_topology,
    partition_node_types,
    target_connection_count,
)


class TestPartitionNodeTypes:
    def test_hundred_nodes(self) -> None:
        buckets = partition_node_types(100)
        assert buckets == {
            NodeType.DATACENTER: 10,
            NodeType.EDGE_SERVER: 20,
            NodeType.MOBILE_DEVICE: 33,
            NodeType.CLIENT_DEVICE: 37,
        }

    def test_small_counts_fall_back_to_clients(self) -> None:
        buckets = partition_node_types(2)
        assert buckets[NodeType.CLIENT_DEVICE] == 2
        assert sum(buckets.values()) == 2


class TestBuildTopology:
    def test_node_ids_and_names_follow_type_order(self) -> None:
        topology = build_topology(10, 0.3, Random(1))
        nodes = list(topology.nodes)

        assert [node.id for node in nodes] == list(range(10))
        assert nodes[0].node_type is NodeType.DATACENTER
        assert nodes[0].name == "datacenter_0"
        assert nodes[1].name == "edge_1"
        assert nodes[3].name == "mobile_3"
        assert nodes[-1].name == "client_9"

    def test_positions_inside_area(self) -> None:
        topology = build_topology(30, 0.1, Random(2))
        for node in topology.nodes:
            assert 0.0 <= node.position[0] <= AREA_SIZE
            assert 0.0 <= node.position[1] <= AREA_SIZE

    def test_exact_target_connection_count(self) -> None:
        topology = build_topology(10, 0.3, Random(3))
        assert len(topology.connections) == target_connection_count(10, 0.3) == 13

    def test_initial_metric_ranges(self) -> None:
        topology = build_topology(20, 0.5, Random(4))
        for conn in topology.connections:
            assert 50.0 <= conn.latency <= 100.0
            assert 5000.0 <= conn.bandwidth <= 10000.0
            assert 0.0 <= conn.packet_loss <= 0.05
            assert 0.0 <= conn.jitter <= 10.0

    def test_same_seed_same_topology(self) -> None:
        first = build_topology(15, 0.4, Random(11))
        second = build_topology(15, 0.4, Random(11))

        assert first.connections.keys() == second.connections.keys()
        assert [n.position for n in first.nodes] == [n.position for n in second.nodes]

    def test_full_density_is_complete_graph(self) -> None:
        topology = build_topology(6, 1.0, Random(5))
        graph = topology.to_graph()

        assert nx.is_isomorphic(graph, nx.complete_graph(6))
        assert topology.is_connected()
        assert topology.degree_stats() == (5, 5.0, 5)

    def test_zero_density_has_no_connections(self) -> None:
        topology = build_topology(5, 0.0, Random(6))
        assert len(topology.connections) == 0
        assert not topology.is_connected()

    def test_graph_carries_attributes(self) -> None:
        topology = build_topology(8, 0.5, Random(7))
        graph = topology.to_graph()

        assert graph.nodes[0]["node_type"] == "edge"
        for a, b, data in graph.edges(data=True):
            expected = topology.nodes[a].distance_to(topology.nodes[b])
            assert data["distance"] == pytest.approx(expected)

    @pytest.mark.parametrize(
        ("node_count", "density"),
        [(1, 0.5), (0, 0.5), (10, -0.1), (10, 1.01)],
    )
    def test_invalid_arguments_raise(self, node_count: int, density: float) -> None:
        with pytest.raises(ConfigurationError):
            build_topology(node_count, density, Random(0))

    @given(
        node_count=st.integers(min_value=2, max_value=25),
        density=st.floats(min_value=0.0, max_value=1.0),
        seed=st.integers(min_value=0, max_value=2**16),
    )
    @settings(max_examples=50)
    def test_no_duplicates_or_self_pairs(self, node_count: int, density: float, seed: int) -> None:
        topology = build_topology(node_count, density, Random(seed))
        keys = topology.connections.keys()

        assert len(keys) == len(set(keys))
        assert len(keys) <= int(density * (node_count * (node_count - 1) // 2))
        for source, dest in keys:
            assert source < dest
