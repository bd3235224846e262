"""Network endpoints and the registry that owns them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator
    from random import Random

    from adaptnet.core.types import NodeId

AREA_SIZE = 1000.0  # positions live in [0, AREA_SIZE] on both axes
MOBILE_SPEED = 10.0  # units per second


class NodeType(Enum):
    DATACENTER = "datacenter"  # high bandwidth, low latency, stable
    EDGE_SERVER = "edge"  # medium bandwidth, low latency, fairly stable
    MOBILE_DEVICE = "mobile"  # variable bandwidth, higher latency, unstable
    CLIENT_DEVICE = "client"  # medium bandwidth, medium latency, mostly stable

    @property
    def is_mobile(self) -> bool:
        return self is NodeType.MOBILE_DEVICE


@dataclass
class Node:
    """A simulated network endpoint.

    Identity and type are fixed at creation. Only the position of mobile nodes
    changes over the lifetime of a simulation.
    """

    id: NodeId
    name: str
    node_type: NodeType
    position: tuple[float, float] = (0.0, 0.0)

    @property
    def is_mobile(self) -> bool:
        return self.node_type.is_mobile

    def distance_to(self, other: Node) -> float:
        dx = self.position[0] - other.position[0]
        dy = self.position[1] - other.position[1]
        return math.hypot(dx, dy)

    def update_position(self, delta_time: float, rng: Random) -> None:
        """Random walk for mobile nodes, kept inside the simulation area."""
        if not self.is_mobile:
            return

        distance = MOBILE_SPEED * delta_time
        angle = rng.random() * 2.0 * math.pi
        x = min(max(self.position[0] + distance * math.cos(angle), 0.0), AREA_SIZE)
        y = min(max(self.position[1] + distance * math.sin(angle), 0.0), AREA_SIZE)
        self.position = (x, y)


@dataclass
class NodeRegistry:
    """Owns every node of a topology, keyed by id."""

    _nodes: dict[NodeId, Node] = field(default_factory=dict)

    def add(self, node: Node) -> None:
        if node.id in self._nodes:
            raise ValueError(f"Node {node.id} already registered")
        self._nodes[node.id] = node

    def get(self, node_id: NodeId) -> Node | None:
        return self._nodes.get(node_id)

    def __getitem__(self, node_id: NodeId) -> Node:
        return self._nodes[node_id]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    @property
    def ids(self) -> list[NodeId]:
        return list(self._nodes.keys())

    def by_type(self, node_type: NodeType) -> list[Node]:
        return [node for node in self._nodes.values() if node.node_type is node_type]

    def type_of(self, node_id: NodeId) -> NodeType:
        """Node type lookup; unknown ids are treated as client devices."""
        node = self._nodes.get(node_id)
        return node.node_type if node is not None else NodeType.CLIENT_DEVICE

    def update_mobility(self, delta_time: float, rng: Random) -> None:
        for node in self._nodes.values():
            node.update_position(delta_time, rng)
