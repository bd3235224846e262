"""Core simulation infrastructure."""

from adaptnet.core.connection import (
    AdaptationState,
    Connection,
    ConnectionTable,
    NetworkCondition,
)
from adaptnet.core.nodes import Node, NodeRegistry, NodeType
from adaptnet.core.topology import Topology, build_topology
from adaptnet.core.types import ConnectionHandle, ConnectionKey, NodeId

__all__ = [
    "AdaptationState",
    "Connection",
    "ConnectionHandle",
    "ConnectionKey",
    "ConnectionTable",
    "NetworkCondition",
    "Node",
    "NodeId",
    "NodeRegistry",
    "NodeType",
    "Topology",
    "build_topology",
]
