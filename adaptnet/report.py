"""Report payload of a finished comparison run."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from adaptnet.core.simulator import NetworkSimulation
    from adaptnet.core.topology import Topology
    from adaptnet.metrics.results import PerformanceImprovement, ScenarioMetrics


class ScenarioMetricsModel(BaseModel):
    name: str
    avg_latency: float
    avg_bandwidth: float
    avg_packet_loss: float
    avg_jitter: float
    avg_transfer_time: float
    resilience_score: float
    efficiency_score: float

    @classmethod
    def from_metrics(cls, metrics: ScenarioMetrics) -> ScenarioMetricsModel:
        return cls(**metrics.to_dict())


class ImprovementModel(BaseModel):
    overall: float = 0.0
    latency: float = 0.0
    bandwidth: float = 0.0
    packet_loss: float = 0.0
    transfer_time: float = 0.0
    resilience: float = 0.0

    @classmethod
    def from_improvement(cls, improvement: PerformanceImprovement) -> ImprovementModel:
        return cls(**improvement.to_dict())


class ScenarioReport(BaseModel):
    name: str
    baseline: ScenarioMetricsModel
    adaptation: ScenarioMetricsModel
    improvement: ImprovementModel
    connection_count: int


class ProtocolUsageModel(BaseModel):
    model_name: str
    usage_count: int
    avg_improvement: float
    best_improvement: float
    worst_improvement: float
    most_common_scenario: str | None


class TopologyModel(BaseModel):
    connected: bool
    min_degree: int
    mean_degree: float
    max_degree: int

    @classmethod
    def from_topology(cls, topology: Topology) -> TopologyModel:
        min_degree, mean_degree, max_degree = topology.degree_stats()
        return cls(
            connected=topology.is_connected(),
            min_degree=min_degree,
            mean_degree=mean_degree,
            max_degree=max_degree,
        )


class RunReport(BaseModel):
    run_id: str
    generated_at: datetime
    node_count: int
    connection_count: int
    topology: TopologyModel
    scenarios: list[ScenarioReport] = Field(default_factory=list)
    overall: ImprovementModel = Field(default_factory=ImprovementModel)
    protocol_usage: list[ProtocolUsageModel] = Field(default_factory=list)
    protocol_switches: int = 0
    avg_adaptation_time_ms: float = 0.0
    most_used_model: str | None = None


def build_report(simulation: NetworkSimulation, run_id: str) -> RunReport:
    """Snapshot the metrics of a finished run. Scenarios missing a pass are left out."""
    metrics = simulation.metrics

    scenarios: list[ScenarioReport] = []
    for name, baseline in metrics.baseline_metrics.items():
        adapted = metrics.adaptation_metrics.get(name)
        if adapted is None:
            continue
        scenarios.append(
            ScenarioReport(
                name=name,
                baseline=ScenarioMetricsModel.from_metrics(baseline),
                adaptation=ScenarioMetricsModel.from_metrics(adapted),
                improvement=ImprovementModel.from_improvement(metrics.scenario_improvement(name)),
                connection_count=metrics.connection_counts.get(name, 0),
            )
        )

    return RunReport(
        run_id=run_id,
        generated_at=datetime.now(UTC),
        node_count=len(simulation.nodes),
        connection_count=len(simulation.connections),
        topology=TopologyModel.from_topology(simulation.topology),
        scenarios=scenarios,
        overall=ImprovementModel.from_improvement(metrics.overall_improvement()),
        protocol_usage=[ProtocolUsageModel(**s.to_dict()) for s in metrics.protocol_stats()],
        protocol_switches=metrics.protocol_switch_count(),
        avg_adaptation_time_ms=metrics.avg_adaptation_time(),
        most_used_model=metrics.most_used_model(),
    )
