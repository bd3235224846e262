"""Scenario summaries, improvements and protocol usage records."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class ScenarioMetrics:
    """Aggregate link quality over one scenario run."""

    name: str
    avg_latency: float = 0.0  # ms
    avg_bandwidth: float = 0.0  # kbps
    avg_packet_loss: float = 0.0  # percent
    avg_jitter: float = 0.0  # ms
    avg_transfer_time: float = 0.0  # ms
    resilience_score: float = 0.0  # 0-100, higher is better
    efficiency_score: float = 0.0  # 0-100, higher is better

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class PerformanceImprovement:
    """Percent improvement of adapted over baseline. Positive is better."""

    overall: float = 0.0
    latency: float = 0.0
    bandwidth: float = 0.0
    packet_loss: float = 0.0
    transfer_time: float = 0.0
    resilience: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {
            "overall": self.overall,
            "latency": self.latency,
            "bandwidth": self.bandwidth,
            "packet_loss": self.packet_loss,
            "transfer_time": self.transfer_time,
            "resilience": self.resilience,
        }


@dataclass(frozen=True)
class PerformanceMetrics:
    baseline: ScenarioMetrics
    adaptation: ScenarioMetrics
    improvement: PerformanceImprovement

    def to_dict(self) -> dict[str, object]:
        return {
            "baseline": self.baseline.to_dict(),
            "adaptation": self.adaptation.to_dict(),
            "improvement": self.improvement.to_dict(),
        }


@dataclass(frozen=True)
class ProtocolUsageStats:
    """How often a protocol was chosen and how much it helped transfer time."""

    model_name: str
    usage_count: int
    avg_improvement: float
    best_improvement: float
    worst_improvement: float
    most_common_scenario: str | None

    def to_dict(self) -> dict[str, object]:
        return asdict(self)
