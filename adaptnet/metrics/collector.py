"""Per-connection measurement histories and their scenario-level aggregation."""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, TypeAlias

from adaptnet.metrics.improvement import (
    calculate_improvement,
    efficiency_score,
    improvement_between,
    mean_metrics,
    resilience_score,
    weighted_improvement,
)
from adaptnet.metrics.results import (
    PerformanceImprovement,
    PerformanceMetrics,
    ProtocolUsageStats,
    ScenarioMetrics,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from adaptnet.core.connection import Connection
    from adaptnet.core.types import ConnectionKey

Averages: TypeAlias = tuple[float, float, float, float, float]

ZERO_AVERAGES: Averages = (0.0, 0.0, 0.0, 0.0, 0.0)


class RunMode(Enum):
    BASELINE = "baseline"
    ADAPTATION = "adaptation"


@dataclass(frozen=True)
class MetricSample:
    timestamp: float
    latency: float
    bandwidth: float
    packet_loss: float  # percent
    jitter: float
    transfer_time: float
    protocol: str | None = None


@dataclass
class ConnectionMetricsHistory:
    """Append-only measurements for one connection. Timestamps may repeat."""

    samples: list[MetricSample] = field(default_factory=list)

    def add(self, sample: MetricSample) -> None:
        self.samples.append(sample)

    def averages(self) -> Averages:
        """Mean (latency, bandwidth, packet loss %, jitter, transfer time)."""
        if not self.samples:
            return ZERO_AVERAGES
        count = len(self.samples)
        return (
            sum(s.latency for s in self.samples) / count,
            sum(s.bandwidth for s in self.samples) / count,
            sum(s.packet_loss for s in self.samples) / count,
            sum(s.jitter for s in self.samples) / count,
            sum(s.transfer_time for s in self.samples) / count,
        )

    def __len__(self) -> int:
        return len(self.samples)


@dataclass
class MetricsCollector:
    """Collects link measurements and turns them into scenario comparisons.

    Histories cover a single (scenario, mode) run: ``begin_run`` clears them.
    Summaries are kept per scenario name for each mode so the baseline and
    adaptation passes can be compared once both have run.
    """

    histories: dict[ConnectionKey, ConnectionMetricsHistory] = field(default_factory=dict)
    baseline_metrics: dict[str, ScenarioMetrics] = field(default_factory=dict)
    adaptation_metrics: dict[str, ScenarioMetrics] = field(default_factory=dict)
    connection_counts: dict[str, int] = field(default_factory=dict)

    current_scenario: str | None = None
    current_mode: RunMode = RunMode.BASELINE

    # Protocol usage
    protocol_usage: dict[str, int] = field(default_factory=lambda: defaultdict(int))
    protocol_scenarios: dict[str, Counter[str]] = field(
        default_factory=lambda: defaultdict(Counter)
    )
    protocol_performance: dict[str, list[float]] = field(
        default_factory=lambda: defaultdict(list)
    )
    protocol_switches: int = 0
    adaptation_times: list[float] = field(default_factory=list)  # ms

    # (scenario, mode) -> per-connection averages at summary time
    _connection_averages: dict[tuple[str, RunMode], dict[ConnectionKey, Averages]] = field(
        default_factory=dict
    )

    def register_connection(self, key: ConnectionKey) -> None:
        self.histories.setdefault(key, ConnectionMetricsHistory())

    def begin_run(self, scenario_name: str, mode: RunMode) -> None:
        self.current_scenario = scenario_name
        self.current_mode = mode
        for key in self.histories:
            self.histories[key] = ConnectionMetricsHistory()

    def record(self, key: ConnectionKey, sample: MetricSample) -> None:
        history = self.histories.get(key)
        if history is None:
            history = self.histories[key] = ConnectionMetricsHistory()
        history.add(sample)

    def record_protocol_switch(self) -> None:
        self.protocol_switches += 1

    def record_adaptation_time(self, elapsed_ms: float) -> None:
        self.adaptation_times.append(elapsed_ms)

    def metrics_for(self, mode: RunMode) -> dict[str, ScenarioMetrics]:
        return self.baseline_metrics if mode is RunMode.BASELINE else self.adaptation_metrics

    def scenario_summary(self, mode: RunMode | None = None) -> ScenarioMetrics:
        """Mean of per-connection means for the current run, stored under its scenario."""
        mode = mode or self.current_mode
        name = self.current_scenario or "unknown"

        averages = {key: history.averages() for key, history in self.histories.items()}
        recorded = [avg for key, avg in averages.items() if len(self.histories[key]) > 0]

        if recorded:
            count = len(recorded)
            latency, bandwidth, packet_loss, jitter, transfer = (
                sum(column) / count for column in zip(*recorded, strict=True)
            )
            metrics = ScenarioMetrics(
                name=name,
                avg_latency=latency,
                avg_bandwidth=bandwidth,
                avg_packet_loss=packet_loss,
                avg_jitter=jitter,
                avg_transfer_time=transfer,
                resilience_score=resilience_score(latency, packet_loss, jitter),
                efficiency_score=efficiency_score(bandwidth, transfer, packet_loss),
            )
        else:
            metrics = ScenarioMetrics(name=name)

        self.metrics_for(mode)[name] = metrics
        self.connection_counts[name] = len(self.histories)
        self._connection_averages[(name, mode)] = averages
        return metrics

    def overall_improvement(self) -> PerformanceImprovement:
        shared = [name for name in self.baseline_metrics if name in self.adaptation_metrics]
        if not shared:
            return PerformanceImprovement()

        baseline = mean_metrics("baseline", [self.baseline_metrics[n] for n in shared])
        adapted = mean_metrics("adaptation", [self.adaptation_metrics[n] for n in shared])
        return improvement_between(baseline, adapted)

    def scenario_improvement(self, scenario_name: str) -> PerformanceImprovement:
        baseline = self.baseline_metrics.get(scenario_name)
        adapted = self.adaptation_metrics.get(scenario_name)
        if baseline is None or adapted is None:
            return PerformanceImprovement()
        return weighted_improvement(baseline, adapted)

    def performance(self, scenario_name: str) -> PerformanceMetrics | None:
        baseline = self.baseline_metrics.get(scenario_name)
        adapted = self.adaptation_metrics.get(scenario_name)
        if baseline is None or adapted is None:
            return None
        return PerformanceMetrics(
            baseline=baseline,
            adaptation=adapted,
            improvement=weighted_improvement(baseline, adapted),
        )

    def connection_transfer_improvement(self, scenario_name: str, key: ConnectionKey) -> float:
        """Transfer-time improvement of one connection, adaptation vs baseline run."""
        baseline = self._connection_averages.get((scenario_name, RunMode.BASELINE), {})
        adapted = self._connection_averages.get((scenario_name, RunMode.ADAPTATION), {})
        if key not in baseline or key not in adapted:
            return 0.0
        return calculate_improvement(baseline[key][4], adapted[key][4], lower_is_better=True)

    def collect_protocol_usage(
        self, connections: Iterable[Connection], scenario_name: str | None = None
    ) -> None:
        """Tally active protocols. Run after the scenario's adaptation summary."""
        scenario_name = scenario_name or self.current_scenario
        for conn in connections:
            protocol = conn.active_protocol
            if protocol is None:
                continue
            self.protocol_usage[protocol] += 1
            if scenario_name is not None:
                self.protocol_scenarios[protocol][scenario_name] += 1
                self.protocol_performance[protocol].append(
                    self.connection_transfer_improvement(scenario_name, conn.key)
                )

    def protocol_switch_count(self) -> int:
        return self.protocol_switches

    def avg_adaptation_time(self) -> float:
        if not self.adaptation_times:
            return 0.0
        return sum(self.adaptation_times) / len(self.adaptation_times)

    def most_used_model(self) -> str | None:
        if not self.protocol_usage:
            return None
        return max(self.protocol_usage.items(), key=lambda item: item[1])[0]

    def protocol_stats(self) -> list[ProtocolUsageStats]:
        """Usage statistics per protocol, most used first."""
        stats = []
        for name, count in self.protocol_usage.items():
            improvements = self.protocol_performance.get(name) or [0.0]
            scenarios = self.protocol_scenarios.get(name)
            stats.append(
                ProtocolUsageStats(
                    model_name=name,
                    usage_count=count,
                    avg_improvement=sum(improvements) / len(improvements),
                    best_improvement=max(improvements),
                    worst_improvement=min(improvements),
                    most_common_scenario=(
                        scenarios.most_common(1)[0][0] if scenarios else None
                    ),
                )
            )
        stats.sort(key=lambda s: s.usage_count, reverse=True)
        return stats

    def reset(self) -> None:
        for key in self.histories:
            self.histories[key] = ConnectionMetricsHistory()
        self.baseline_metrics.clear()
        self.adaptation_metrics.clear()
        self.connection_counts.clear()
        self.protocol_usage.clear()
        self.protocol_scenarios.clear()
        self.protocol_performance.clear()
        self.adaptation_times.clear()
        self.protocol_switches = 0
        self.current_scenario = None
        self.current_mode = RunMode.BASELINE
        self._connection_averages.clear()
