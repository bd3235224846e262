"""Scenario-driven recomputation of live connection metrics."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, TypeAlias

from loguru import logger

from adaptnet.core.connection import NetworkCondition
from adaptnet.core.nodes import NodeType

if TYPE_CHECKING:
    from random import Random

    from adaptnet.core.connection import Connection, ConnectionTable
    from adaptnet.core.nodes import NodeRegistry
    from adaptnet.scenarios.catalog import Scenario

DC = NodeType.DATACENTER
EDGE = NodeType.EDGE_SERVER
MOBILE = NodeType.MOBILE_DEVICE

TypePair: TypeAlias = frozenset[NodeType]


class Modifiers(NamedTuple):
    latency: float
    bandwidth: float
    packet_loss: float
    jitter: float


NEUTRAL = Modifiers(1.0, 1.0, 1.0, 1.0)

# (latency ms, bandwidth kbps) a link starts from when a scenario is applied
PAIR_BASE: dict[TypePair, tuple[float, float]] = {
    frozenset({DC}): (10.0, 100000.0),
    frozenset({DC, EDGE}): (20.0, 50000.0),
    frozenset({DC, MOBILE}): (50.0, 20000.0),
    frozenset({EDGE, MOBILE}): (30.0, 15000.0),
    frozenset({MOBILE}): (40.0, 10000.0),
}
DEFAULT_PAIR_BASE = (25.0, 25000.0)

SCENARIO_MODIFIERS: dict[str, Modifiers] = {
    "asymmetric": Modifiers(1.5, 0.8, 1.2, 1.5),
    "mobile_handover": Modifiers(1.2, 0.9, 1.1, 1.3),
    "satellite": Modifiers(2.0, 0.5, 1.5, 2.0),
}

# Condition flags attached to every link while the scenario is active
SCENARIO_FLAGS: dict[str, str] = {
    "asymmetric": "asymmetric",
    "mobile_handover": "handover",
    "satellite": "high_latency",
}

# Per-tick modifiers: pair -> {scenario name or None for the fallback: modifiers}
TICK_MODIFIERS: dict[TypePair, dict[str | None, Modifiers]] = {
    frozenset({DC}): {None: Modifiers(0.5, 2.0, 0.2, 0.5)},
    frozenset({DC, EDGE}): {None: Modifiers(0.7, 1.5, 0.3, 0.7)},
    frozenset({DC, MOBILE}): {
        "congestion": Modifiers(1.5, 0.6, 1.3, 1.4),
        "wireless_interference": Modifiers(1.3, 0.7, 1.5, 1.6),
        None: Modifiers(1.0, 0.8, 1.1, 1.2),
    },
    frozenset({EDGE, MOBILE}): {
        "wireless_interference": Modifiers(1.4, 0.6, 1.6, 1.8),
        "mobile_handover": Modifiers(1.6, 0.5, 1.7, 1.9),
        None: Modifiers(1.1, 0.7, 1.2, 1.3),
    },
    frozenset({MOBILE}): {
        "wireless_interference": Modifiers(1.7, 0.4, 1.8, 2.0),
        "mobile_handover": Modifiers(1.8, 0.3, 1.9, 2.2),
        None: Modifiers(1.4, 0.5, 1.5, 1.7),
    },
}

# Symmetric perturbation half-widths
LATENCY_JITTER_MS = 5.0
BANDWIDTH_JITTER_KBPS = 200.0
PACKET_LOSS_JITTER = 0.01
JITTER_JITTER_MS = 1.0


def tick_modifiers(pair: TypePair, scenario_name: str) -> Modifiers:
    table = TICK_MODIFIERS.get(pair)
    if table is None:
        return NEUTRAL
    return table.get(scenario_name, table[None])


class ConditionEngine:
    """Recomputes link metrics from the active scenario.

    Both operations are memoryless: new metrics derive only from the scenario,
    the node types at either end, and fresh random perturbation.
    """

    def __init__(self, rng: Random) -> None:
        self.rng = rng
        self.current_scenario: Scenario | None = None

    def apply_scenario(
        self,
        scenario: Scenario,
        nodes: NodeRegistry,
        connections: ConnectionTable,
        timestamp: float = 0.0,
    ) -> None:
        logger.info("Applying network scenario: {}", scenario.name)
        self.current_scenario = scenario

        mods = SCENARIO_MODIFIERS.get(scenario.name, NEUTRAL)
        flag = SCENARIO_FLAGS.get(scenario.name)

        for conn in connections:
            conn.current_conditions.clear()
            conn.optimized = False

            base_latency, base_bandwidth = PAIR_BASE.get(
                self._pair(conn, nodes), DEFAULT_PAIR_BASE
            )
            self._set_perturbed(
                conn,
                latency=base_latency * mods.latency,
                bandwidth=base_bandwidth * mods.bandwidth,
                packet_loss=scenario.base_packet_loss * mods.packet_loss,
                jitter=scenario.base_jitter * mods.jitter,
            )

            if flag is not None:
                conn.current_conditions.append(
                    NetworkCondition(name=flag, value=1.0, timestamp=timestamp)
                )

    def evolve(self, nodes: NodeRegistry, connections: ConnectionTable) -> None:
        """Advance every link by one tick under the current scenario."""
        scenario = self.current_scenario
        if scenario is None:
            return

        for conn in connections:
            mods = tick_modifiers(self._pair(conn, nodes), scenario.name)
            self._set_perturbed(
                conn,
                latency=scenario.base_latency * mods.latency,
                bandwidth=scenario.base_bandwidth * mods.bandwidth,
                packet_loss=scenario.base_packet_loss * mods.packet_loss,
                jitter=scenario.base_jitter * mods.jitter,
            )
            conn.optimized = False

    def _set_perturbed(
        self,
        conn: Connection,
        latency: float,
        bandwidth: float,
        packet_loss: float,
        jitter: float,
    ) -> None:
        rng = self.rng
        conn.set_metrics(
            latency=latency + rng.uniform(-LATENCY_JITTER_MS, LATENCY_JITTER_MS),
            bandwidth=bandwidth + rng.uniform(-BANDWIDTH_JITTER_KBPS, BANDWIDTH_JITTER_KBPS),
            packet_loss=packet_loss + rng.uniform(-PACKET_LOSS_JITTER, PACKET_LOSS_JITTER),
            jitter=jitter + rng.uniform(-JITTER_JITTER_MS, JITTER_JITTER_MS),
        )

    @staticmethod
    def _pair(conn: Connection, nodes: NodeRegistry) -> TypePair:
        return frozenset({nodes.type_of(conn.source_id), nodes.type_of(conn.dest_id)})
