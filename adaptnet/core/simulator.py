"""Tick-driven network simulation controller."""

from __future__ import annotations

import time
from collections import Counter
from random import Random
from typing import TYPE_CHECKING

from loguru import logger

from adaptnet.config import DEFAULT_FILE_SIZE_KB
from adaptnet.core.connection import AdaptationState

if TYPE_CHECKING:
    from adaptnet.config import SimulationConfig
    from adaptnet.core.conditions import ConditionEngine
    from adaptnet.core.connection import ConnectionTable
    from adaptnet.core.nodes import NodeRegistry
    from adaptnet.core.topology import Topology
    from adaptnet.core.types import ConnectionHandle
    from adaptnet.metrics.collector import MetricsCollector
    from adaptnet.protocol.adaptation import ProtocolAdapter
    from adaptnet.protocol.engine import ProtocolEngine
    from adaptnet.scenarios.catalog import Scenario, ScenarioCatalog


class NetworkSimulation:
    """Single-threaded simulation of a network under named scenarios.

    Each tick runs mobility, condition evolution, protocol adaptation (when
    enabled) and metric collection, in that order. All randomness comes from
    one seeded RNG so runs with the same seed are identical.
    """

    def __init__(
        self,
        seed: int = 42,
        tick_interval: float = 0.1,
        enable_mobility: bool = True,
        file_size_kb: float = DEFAULT_FILE_SIZE_KB,
    ) -> None:
        if tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {tick_interval}")

        self._rng = Random(seed)
        self.tick_interval = tick_interval
        self.enable_mobility = enable_mobility
        self.file_size_kb = file_size_kb

        self._ticks: int = 0
        self._adaptation_enabled = False

        self._topology: Topology | None = None
        self._conditions: ConditionEngine | None = None
        self._engines: dict[ConnectionHandle, ProtocolEngine] = {}
        self._adapter: ProtocolAdapter | None = None
        self._metrics: MetricsCollector | None = None
        self._catalog: ScenarioCatalog | None = None

    @property
    def rng(self) -> Random:
        return self._rng

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def current_time(self) -> float:
        """Simulated seconds elapsed."""
        return self._ticks * self.tick_interval

    @property
    def adaptation_enabled(self) -> bool:
        return self._adaptation_enabled

    @property
    def topology(self) -> Topology:
        if self._topology is None:
            raise RuntimeError("Simulation not configured with topology")
        return self._topology

    @property
    def nodes(self) -> NodeRegistry:
        return self.topology.nodes

    @property
    def connections(self) -> ConnectionTable:
        return self.topology.connections

    @property
    def conditions(self) -> ConditionEngine:
        if self._conditions is None:
            raise RuntimeError("Simulation not configured with condition engine")
        return self._conditions

    @property
    def adapter(self) -> ProtocolAdapter:
        if self._adapter is None:
            raise RuntimeError("Simulation not configured with protocol adapter")
        return self._adapter

    @property
    def metrics(self) -> MetricsCollector:
        if self._metrics is None:
            raise RuntimeError("Simulation not configured with metrics")
        return self._metrics

    @property
    def catalog(self) -> ScenarioCatalog:
        if self._catalog is None:
            raise RuntimeError("Simulation not configured with scenario catalog")
        return self._catalog

    @property
    def engines(self) -> dict[ConnectionHandle, ProtocolEngine]:
        return self._engines

    @property
    def current_scenario(self) -> Scenario | None:
        return self.conditions.current_scenario

    @classmethod
    def build(cls, config: SimulationConfig | None = None) -> NetworkSimulation:
        """Build a fully configured simulation.

        Creates the topology, one protocol engine per connection loaded with the
        default physics models, the condition engine, the metrics collector and
        the scenario catalog.
        """
        from adaptnet.config import SimulationConfig, ensure_valid
        from adaptnet.core.conditions import ConditionEngine
        from adaptnet.core.topology import build_topology
        from adaptnet.metrics.collector import MetricsCollector
        from adaptnet.protocol.adaptation import ProtocolAdapter
        from adaptnet.protocol.engine import DynamicProtocolEngine
        from adaptnet.protocol.models import default_physics_models
        from adaptnet.scenarios.catalog import ScenarioCatalog

        if config is None:
            config = SimulationConfig()
        ensure_valid(config)

        simulation = cls(
            seed=config.seed,
            tick_interval=config.tick_interval,
            enable_mobility=config.enable_mobility,
            file_size_kb=config.file_size_kb,
        )

        topology = build_topology(config.node_count, config.connection_density, simulation.rng)
        metrics = MetricsCollector()

        engines: dict[ConnectionHandle, ProtocolEngine] = {}
        for handle, conn in topology.connections.items():
            engine = DynamicProtocolEngine()
            for model in default_physics_models():
                engine.register_model(model)
            engines[handle] = engine
            metrics.register_connection(conn.key)

        simulation._topology = topology
        simulation._conditions = ConditionEngine(simulation.rng)
        simulation._engines = engines
        simulation._adapter = ProtocolAdapter(engines, metrics)
        simulation._metrics = metrics
        simulation._catalog = ScenarioCatalog.predefined()

        logger.info(
            "Simulation built: {} nodes, {} connections",
            len(topology.nodes),
            len(topology.connections),
        )
        return simulation

    def set_adaptation_enabled(self, enabled: bool) -> None:
        self._adaptation_enabled = enabled
        for conn in self.connections:
            conn.uses_adaptation = enabled
            if not enabled:
                conn.active_protocol = None
                conn.protocol_family = None
                conn.state = AdaptationState.UNADAPTED
        logger.info("Protocol adaptation {}", "enabled" if enabled else "disabled")

    def select_scenario(self, name: str) -> Scenario | None:
        """Apply a catalog scenario by name. Unknown names return None."""
        scenario = self.catalog.get(name)
        if scenario is None:
            logger.warning("Unknown scenario: {}", name)
            return None
        self.apply_scenario(scenario)
        return scenario

    def apply_scenario(self, scenario: Scenario) -> None:
        """Recompute every link for the scenario and start a fresh metrics run."""
        from adaptnet.metrics.collector import RunMode

        self.conditions.apply_scenario(
            scenario, self.nodes, self.connections, timestamp=self.current_time
        )
        mode = RunMode.ADAPTATION if self._adaptation_enabled else RunMode.BASELINE
        self.metrics.begin_run(scenario.name, mode)

    def update_network_conditions(self) -> None:
        self.conditions.evolve(self.nodes, self.connections)

    def update_protocols(self) -> int:
        return self.adapter.update_protocols(self.connections, timestamp=self.current_time)

    def collect_metrics(self) -> None:
        from adaptnet.metrics.collector import MetricSample
        from adaptnet.protocol.adaptation import transfer_time

        now = self.current_time
        metrics = self.metrics
        for conn in self.connections:
            metrics.record(
                conn.key,
                MetricSample(
                    timestamp=now,
                    latency=conn.latency,
                    bandwidth=conn.bandwidth,
                    packet_loss=conn.packet_loss * 100.0,
                    jitter=conn.jitter,
                    transfer_time=transfer_time(conn, self.file_size_kb),
                    protocol=conn.active_protocol,
                ),
            )

    def tick(self) -> None:
        self._ticks += 1
        if self.enable_mobility:
            self.nodes.update_mobility(self.tick_interval, self._rng)
        self.update_network_conditions()
        if self._adaptation_enabled:
            self.update_protocols()
        self.collect_metrics()

    def run_ticks(self, count: int) -> None:
        """Execute count ticks back to back, without waiting."""
        self._require_scenario()
        for _ in range(count):
            self.tick()

    def run(self, duration: float) -> int:
        """Tick every tick_interval of wall clock for duration seconds.

        Returns the number of ticks executed.
        """
        self._require_scenario()
        logger.debug("Running simulation for {:.1f}s", duration)

        executed = 0
        start = time.monotonic()
        next_tick = start + self.tick_interval
        while True:
            now = time.monotonic()
            if now - start >= duration:
                break
            if now < next_tick:
                time.sleep(min(next_tick, start + duration) - now)
                continue
            self.tick()
            executed += 1
            next_tick = now + self.tick_interval
        return executed

    def protocol_distribution(self) -> dict[str, int]:
        """Active protocol name -> number of connections using it."""
        return dict(
            Counter(
                conn.active_protocol
                for conn in self.connections
                if conn.active_protocol is not None
            )
        )

    def average_transfer_time(self) -> float:
        """Mean transfer time over all connections at their current metrics."""
        from adaptnet.protocol.adaptation import transfer_time

        connections = list(self.connections)
        if not connections:
            return 0.0
        return sum(transfer_time(c, self.file_size_kb) for c in connections) / len(connections)

    def _require_scenario(self) -> None:
        if self.current_scenario is None:
            raise RuntimeError("No scenario applied; call apply_scenario first")
