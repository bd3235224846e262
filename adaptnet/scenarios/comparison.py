"""Baseline vs adaptation comparison across every catalog scenario."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loguru import logger

from adaptnet.config import SimulationConfig
from adaptnet.core.simulator import NetworkSimulation
from adaptnet.metrics.collector import RunMode

if TYPE_CHECKING:
    from collections.abc import Sequence

    from adaptnet.metrics.results import (
        PerformanceImprovement,
        PerformanceMetrics,
        ProtocolUsageStats,
    )
    from adaptnet.scenarios.catalog import Scenario


@dataclass
class ComparisonResults:
    """Outcome of a full baseline-then-adaptation run."""

    scenarios: list[str]
    performance: dict[str, PerformanceMetrics]
    overall: PerformanceImprovement
    connection_counts: dict[str, int] = field(default_factory=dict)
    protocol_stats: list[ProtocolUsageStats] = field(default_factory=list)
    protocol_switches: int = 0
    avg_adaptation_time_ms: float = 0.0
    most_used_model: str | None = None
    simulation: NetworkSimulation | None = field(default=None, repr=False, compare=False)

    def to_dict(self) -> dict[str, object]:
        return {
            "scenarios": list(self.scenarios),
            "performance": {name: pm.to_dict() for name, pm in self.performance.items()},
            "overall": self.overall.to_dict(),
            "connection_counts": dict(self.connection_counts),
            "protocol_stats": [stats.to_dict() for stats in self.protocol_stats],
            "protocol_switches": self.protocol_switches,
            "avg_adaptation_time_ms": self.avg_adaptation_time_ms,
            "most_used_model": self.most_used_model,
        }


def scenario_duration(config: SimulationConfig, scenario_count: int) -> float:
    """Wall-clock seconds per scenario: half the duration per pass, split evenly."""
    if scenario_count == 0:
        return 0.0
    return config.duration / 2 / scenario_count


def run_scenario(
    sim: NetworkSimulation,
    scenario: Scenario,
    mode: RunMode,
    config: SimulationConfig,
    duration: float,
) -> None:
    sim.set_adaptation_enabled(mode is RunMode.ADAPTATION)
    sim.apply_scenario(scenario)

    if config.ticks_per_scenario is not None:
        sim.run_ticks(config.ticks_per_scenario)
    else:
        sim.run(duration)

    summary = sim.metrics.scenario_summary(mode)
    if mode is RunMode.ADAPTATION:
        sim.metrics.collect_protocol_usage(sim.connections, scenario.name)

    logger.info(
        "[{}] {}: avg transfer time {:.1f} ms, resilience {:.1f}",
        mode.value,
        scenario.name,
        summary.avg_transfer_time,
        summary.resilience_score,
    )


def run_comparison(
    config: SimulationConfig | None = None,
    scenario_names: Sequence[str] | None = None,
) -> NetworkSimulation:
    """Run every scenario without adaptation, then every scenario with it."""
    if config is None:
        config = SimulationConfig()

    sim = NetworkSimulation.build(config)

    if scenario_names is None:
        scenarios = sim.catalog.all()
    else:
        scenarios = []
        for name in scenario_names:
            scenario = sim.catalog.get(name)
            if scenario is None:
                raise ValueError(f"Unknown scenario: {name}")
            scenarios.append(scenario)

    duration = scenario_duration(config, len(scenarios))
    for mode in (RunMode.BASELINE, RunMode.ADAPTATION):
        logger.info("Starting {} pass over {} scenarios", mode.value, len(scenarios))
        for scenario in scenarios:
            run_scenario(sim, scenario, mode, config, duration)

    return sim


def summarize(sim: NetworkSimulation) -> ComparisonResults:
    metrics = sim.metrics
    names = [name for name in metrics.baseline_metrics if name in metrics.adaptation_metrics]

    performance: dict[str, PerformanceMetrics] = {}
    for name in names:
        pm = metrics.performance(name)
        if pm is not None:
            performance[name] = pm

    return ComparisonResults(
        scenarios=names,
        performance=performance,
        overall=metrics.overall_improvement(),
        connection_counts=dict(metrics.connection_counts),
        protocol_stats=metrics.protocol_stats(),
        protocol_switches=metrics.protocol_switch_count(),
        avg_adaptation_time_ms=metrics.avg_adaptation_time(),
        most_used_model=metrics.most_used_model(),
        simulation=sim,
    )


def execute_comparison(
    config: SimulationConfig,
    scenario_names: Sequence[str] | None = None,
) -> tuple[ComparisonResults | None, Exception | None]:
    try:
        sim = run_comparison(config, scenario_names)
        return (summarize(sim), None)
    except Exception as e:
        return (None, e)


def main() -> None:
    """Run a short comparison and print the per-scenario improvements."""
    import json
    import time

    config = SimulationConfig(node_count=20, connection_density=0.3, ticks_per_scenario=20)
    print(
        f"Building simulation with {config.node_count} nodes "
        f"(density {config.connection_density})..."
    )

    start = time.time()
    sim = run_comparison(config)
    elapsed = time.time() - start
    print(f"Comparison completed in {elapsed:.2f}s (wall clock)")

    results = summarize(sim)

    print("\n=== Scenario Improvements ===")
    for name, pm in results.performance.items():
        imp = pm.improvement
        print(
            f"{name:<22} overall={imp.overall:+7.2f}% latency={imp.latency:+7.2f}% "
            f"transfer={imp.transfer_time:+7.2f}%"
        )

    overall = results.overall
    print("\n=== Overall ===")
    print(f"Overall improvement: {overall.overall:+.2f}%")
    print(f"Latency: {overall.latency:+.2f}%")
    print(f"Bandwidth: {overall.bandwidth:+.2f}%")
    print(f"Packet loss: {overall.packet_loss:+.2f}%")
    print(f"Transfer time: {overall.transfer_time:+.2f}%")
    print(f"Resilience: {overall.resilience:+.2f}%")

    print("\n=== Protocol Usage ===")
    print(f"Protocol switches: {results.protocol_switches}")
    print(f"Avg adaptation time: {results.avg_adaptation_time_ms:.3f} ms")
    print(f"Most used model: {results.most_used_model}")

    print("\n=== Exporting to JSON ===")
    print(json.dumps(results.to_dict(), indent=2))


if __name__ == "__main__":
    main()
