"""Network topology generation with typed nodes and random connections."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import networkx as nx
from loguru import logger

from adaptnet.config import ConfigurationError
from adaptnet.core.connection import Connection, ConnectionTable, normalize_pair
from adaptnet.core.nodes import AREA_SIZE, Node, NodeRegistry, NodeType
from adaptnet.core.types import NodeId

if TYPE_CHECKING:
    from random import Random


class Topology(NamedTuple):
    """Network topology: typed nodes and the connections between them."""

    nodes: NodeRegistry
    connections: ConnectionTable

    def to_graph(self) -> nx.Graph:
        """Undirected graph view; edges carry the euclidean node distance."""
        graph = nx.Graph()
        for node in self.nodes:
            graph.add_node(node.id, node_type=node.node_type.value, position=node.position)
        for conn in self.connections:
            distance = self.nodes[conn.source_id].distance_to(self.nodes[conn.dest_id])
            graph.add_edge(conn.source_id, conn.dest_id, distance=distance)
        return graph

    def is_connected(self) -> bool:
        graph = self.to_graph()
        return graph.number_of_nodes() > 0 and nx.is_connected(graph)

    def degree_stats(self) -> tuple[int, float, int]:
        """(min, mean, max) node degree."""
        degrees = [degree for _, degree in self.to_graph().degree()]
        if not degrees:
            return (0, 0.0, 0)
        return (min(degrees), sum(degrees) / len(degrees), max(degrees))


def partition_node_types(node_count: int) -> dict[NodeType, int]:
    """Split node_count into type buckets; rounding leftovers become clients."""
    datacenters = node_count // 10
    edges = node_count // 5
    mobiles = node_count // 3
    clients = node_count - datacenters - edges - mobiles
    return {
        NodeType.DATACENTER: datacenters,
        NodeType.EDGE_SERVER: edges,
        NodeType.MOBILE_DEVICE: mobiles,
        NodeType.CLIENT_DEVICE: clients,
    }


def target_connection_count(node_count: int, density: float) -> int:
    max_connections = node_count * (node_count - 1) // 2
    return int(max_connections * density)


def build_topology(node_count: int, connection_density: float, rng: Random) -> Topology:
    """Build typed nodes and a random graph hitting the target density."""
    if node_count < 2:
        raise ConfigurationError(f"node_count ({node_count}) < 2")
    if not 0.0 <= connection_density <= 1.0:
        raise ConfigurationError(f"connection_density ({connection_density}) not in [0, 1]")

    nodes = _create_nodes(node_count, rng)
    connections = _create_connections(nodes, connection_density, rng)

    logger.debug(
        "Built topology with {} nodes and {} connections", len(nodes), len(connections)
    )
    return Topology(nodes=nodes, connections=connections)


def _create_nodes(node_count: int, rng: Random) -> NodeRegistry:
    registry = NodeRegistry()

    node_id = 0
    for node_type, count in partition_node_types(node_count).items():
        for _ in range(count):
            position = (rng.random() * AREA_SIZE, rng.random() * AREA_SIZE)
            registry.add(
                Node(
                    id=NodeId(node_id),
                    name=f"{node_type.value}_{node_id}",
                    node_type=node_type,
                    position=position,
                )
            )
            node_id += 1

    return registry


def _create_connections(
    nodes: NodeRegistry,
    density: float,
    rng: Random,
) -> ConnectionTable:
    node_ids = nodes.ids
    n = len(node_ids)
    target = target_connection_count(n, density)

    table = ConnectionTable()
    seen: set[tuple[NodeId, NodeId]] = set()

    while len(seen) < target:
        idx1 = rng.randrange(n)
        idx2 = rng.randrange(n)
        while idx2 == idx1:
            idx2 = rng.randrange(n)

        pair = normalize_pair(node_ids[idx1], node_ids[idx2])
        if pair in seen:
            continue
        seen.add(pair)

        table.add(
            Connection(
                source_id=pair[0],
                dest_id=pair[1],
                latency=50.0 + rng.uniform(0.0, 50.0),
                bandwidth=5000.0 + rng.uniform(0.0, 5000.0),
                packet_loss=rng.uniform(0.0, 0.05),
                jitter=rng.uniform(0.0, 10.0),
            )
        )

    return table
