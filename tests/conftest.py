"""Shared pytest fixtures for adaptnet tests."""

from collections.abc import Callable
from random import Random

import pytest

from adaptnet.config import SimulationConfig
from adaptnet.core.connection import Connection, ConnectionTable
from adaptnet.core.nodes import Node, NodeRegistry, NodeType
from adaptnet.core.simulator import NetworkSimulation
from adaptnet.core.types import NodeId
from adaptnet.metrics.collector import MetricsCollector
from adaptnet.scenarios.catalog import ScenarioCatalog


@pytest.fixture
def rng() -> Random:
    return Random(42)


@pytest.fixture
def catalog() -> ScenarioCatalog:
    return ScenarioCatalog.predefined()


@pytest.fixture
def metrics() -> MetricsCollector:
    return MetricsCollector()


@pytest.fixture
def small_config() -> SimulationConfig:
    """Small, fast configuration driven by tick counts."""
    return SimulationConfig(
        node_count=10,
        connection_density=0.3,
        duration=0.0,
        ticks_per_scenario=3,
        seed=7,
    )


@pytest.fixture
def simulation(small_config: SimulationConfig) -> NetworkSimulation:
    return NetworkSimulation.build(small_config)


@pytest.fixture
def typed_nodes() -> NodeRegistry:
    """Registry with one node of every type, ids 0-3 in enum order."""
    registry = NodeRegistry()
    for index, node_type in enumerate(NodeType):
        registry.add(
            Node(id=NodeId(index), name=f"{node_type.value}_{index}", node_type=node_type)
        )
    return registry


def _make_connection(
    source: int = 0,
    dest: int = 1,
    latency: float = 100.0,
    bandwidth: float = 5000.0,
    packet_loss: float = 0.02,
    jitter: float = 10.0,
) -> Connection:
    return Connection(
        source_id=NodeId(source),
        dest_id=NodeId(dest),
        latency=latency,
        bandwidth=bandwidth,
        packet_loss=packet_loss,
        jitter=jitter,
    )


@pytest.fixture
def make_connection() -> Callable[..., Connection]:
    """Factory for standalone connections with overridable metrics."""
    return _make_connection


@pytest.fixture
def connection_table() -> ConnectionTable:
    table = ConnectionTable()
    table.add(_make_connection(0, 1))
    table.add(_make_connection(1, 2))
    table.add(_make_connection(2, 3))
    return table
