"""Tests for the run report payload."""

import json

import pytest

from adaptnet.config import SimulationConfig
from adaptnet.core.simulator import NetworkSimulation
from adaptnet.metrics.results import PerformanceImprovement, ScenarioMetrics
from adaptnet.report import (
    ImprovementModel,
    RunReport,
    ScenarioMetricsModel,
    build_report,
)
from adaptnet.scenarios.comparison import run_comparison


class TestModels:
    def test_scenario_metrics_model(self) -> None:
        metrics = ScenarioMetrics("ideal", avg_latency=20.0, resilience_score=90.0)
        model = ScenarioMetricsModel.from_metrics(metrics)

        assert model.name == "ideal"
        assert model.avg_latency == 20.0
        assert model.resilience_score == 90.0
        assert model.avg_bandwidth == 0.0

    def test_improvement_model(self) -> None:
        model = ImprovementModel.from_improvement(PerformanceImprovement(overall=12.5))
        assert model.overall == 12.5
        assert model.latency == 0.0


class TestBuildReport:
    def test_report_after_comparison(self, small_config: SimulationConfig) -> None:
        sim = run_comparison(small_config, ["ideal", "satellite"])
        report = build_report(sim, "brave-orange-otter")

        assert report.run_id == "brave-orange-otter"
        assert report.node_count == 10
        assert report.connection_count == 13
        assert [s.name for s in report.scenarios] == ["ideal", "satellite"]
        assert all(s.connection_count == 13 for s in report.scenarios)
        assert report.protocol_switches == sim.metrics.protocol_switch_count()
        assert sum(p.usage_count for p in report.protocol_usage) == 2 * 13
        assert report.most_used_model == sim.metrics.most_used_model()

    def test_topology_block(self, small_config: SimulationConfig) -> None:
        sim = run_comparison(small_config, ["ideal"])
        report = build_report(sim, "run")

        assert report.topology.connected == sim.topology.is_connected()
        assert report.topology.mean_degree == pytest.approx(2 * 13 / 10)
        assert report.topology.min_degree <= report.topology.max_degree
        assert (
            report.topology.min_degree,
            report.topology.max_degree,
        ) == (sim.topology.degree_stats()[0], sim.topology.degree_stats()[2])

    def test_scenarios_missing_a_pass_are_skipped(self, simulation: NetworkSimulation) -> None:
        simulation.select_scenario("ideal")
        simulation.run_ticks(2)
        simulation.metrics.scenario_summary()

        report = build_report(simulation, "run")

        assert report.scenarios == []
        assert report.overall == ImprovementModel()
        assert report.most_used_model is None

    def test_json_round_trip(self, small_config: SimulationConfig) -> None:
        sim = run_comparison(small_config, ["extreme"])
        report = build_report(sim, "run")

        data = json.loads(report.model_dump_json())
        assert data["scenarios"][0]["name"] == "extreme"
        assert RunReport.model_validate(data) == report
