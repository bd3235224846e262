"""Connections between nodes and the arena that stores them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from adaptnet.core.types import ConnectionHandle

if TYPE_CHECKING:
    from collections.abc import Iterator

    from adaptnet.core.types import ConnectionKey, NodeId
    from adaptnet.protocol.engine import ProtocolFamily

# Physical floors every connection must respect at all times
MIN_LATENCY_MS = 1.0
MIN_BANDWIDTH_KBPS = 100.0


class AdaptationState(Enum):
    UNADAPTED = auto()
    ADAPTING = auto()  # engine is being consulted
    ADAPTED = auto()


@dataclass(frozen=True)
class NetworkCondition:
    """A single named condition sample, raw or normalized to [0, 1]."""

    name: str
    value: float
    timestamp: float = 0.0


@dataclass
class Connection:
    """Link between two nodes with its live metrics.

    source_id is always the smaller of the two node ids.
    """

    source_id: NodeId
    dest_id: NodeId
    latency: float  # ms
    bandwidth: float  # kbps
    packet_loss: float  # fraction in [0, 1]
    jitter: float  # ms
    uses_adaptation: bool = False
    active_protocol: str | None = None
    protocol_family: ProtocolFamily | None = None
    state: AdaptationState = AdaptationState.UNADAPTED
    current_conditions: list[NetworkCondition] = field(default_factory=list)
    # Set once a protocol transform has been applied to the current metrics.
    # Condition evolution clears it.
    optimized: bool = False

    @property
    def key(self) -> ConnectionKey:
        return (self.source_id, self.dest_id)

    def set_metrics(
        self, latency: float, bandwidth: float, packet_loss: float, jitter: float
    ) -> None:
        """Store new live metrics, enforcing the physical floors."""
        self.latency = max(latency, MIN_LATENCY_MS)
        self.bandwidth = max(bandwidth, MIN_BANDWIDTH_KBPS)
        self.packet_loss = min(max(packet_loss, 0.0), 1.0)
        self.jitter = max(jitter, 0.0)


def normalize_pair(a: NodeId, b: NodeId) -> ConnectionKey:
    """Normalize pair to avoid duplicates (smaller ID first)."""
    return (a, b) if a < b else (b, a)


class ConnectionTable:
    """Arena of connections addressed by a stable integer handle.

    Handles are insertion indices; connections are never removed during a run.
    """

    def __init__(self) -> None:
        self._connections: list[Connection] = []
        self._keys: set[ConnectionKey] = set()

    def add(self, connection: Connection) -> ConnectionHandle:
        if connection.source_id == connection.dest_id:
            raise ValueError(f"Self-loop on node {connection.source_id}")
        if connection.source_id > connection.dest_id:
            raise ValueError(f"Connection {connection.key} is not normalized")
        if connection.key in self._keys:
            raise ValueError(f"Connection {connection.key} already exists")

        handle = ConnectionHandle(len(self._connections))
        self._connections.append(connection)
        self._keys.add(connection.key)
        return handle

    def __len__(self) -> int:
        return len(self._connections)

    def __iter__(self) -> Iterator[Connection]:
        return iter(self._connections)

    def items(self) -> Iterator[tuple[ConnectionHandle, Connection]]:
        for index, connection in enumerate(self._connections):
            yield ConnectionHandle(index), connection

    def handles(self) -> list[ConnectionHandle]:
        return [ConnectionHandle(index) for index in range(len(self._connections))]

    def keys(self) -> list[ConnectionKey]:
        return [connection.key for connection in self._connections]
