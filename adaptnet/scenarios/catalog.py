"""Named network scenarios with baseline conditions and variation ranges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True)
class Scenario:
    """Baseline network conditions for a named scenario."""

    name: str
    description: str
    base_latency: float  # ms
    base_bandwidth: float  # kbps
    base_packet_loss: float  # fraction in [0, 1]
    base_jitter: float  # ms
    latency_variation: float
    bandwidth_variation: float
    packet_loss_variation: float
    jitter_variation: float


PREDEFINED_SCENARIOS: tuple[Scenario, ...] = (
    Scenario(
        name="ideal",
        description="Ideal network conditions with low latency, high bandwidth, "
        "and minimal packet loss",
        base_latency=20.0,
        base_bandwidth=10000.0,
        base_packet_loss=0.001,
        base_jitter=1.0,
        latency_variation=5.0,
        bandwidth_variation=1000.0,
        packet_loss_variation=0.002,
        jitter_variation=0.5,
    ),
    Scenario(
        name="congestion",
        description="Network congestion with high latency and reduced bandwidth",
        base_latency=120.0,
        base_bandwidth=2000.0,
        base_packet_loss=0.02,
        base_jitter=15.0,
        latency_variation=50.0,
        bandwidth_variation=1000.0,
        packet_loss_variation=0.03,
        jitter_variation=10.0,
    ),
    Scenario(
        name="international",
        description="International connections with high latency and moderate bandwidth",
        base_latency=200.0,
        base_bandwidth=5000.0,
        base_packet_loss=0.01,
        base_jitter=8.0,
        latency_variation=30.0,
        bandwidth_variation=1000.0,
        packet_loss_variation=0.01,
        jitter_variation=5.0,
    ),
    Scenario(
        name="wireless_interference",
        description="Wireless networks with interference causing packet loss and jitter",
        base_latency=50.0,
        base_bandwidth=3000.0,
        base_packet_loss=0.05,
        base_jitter=20.0,
        latency_variation=20.0,
        bandwidth_variation=1500.0,
        packet_loss_variation=0.1,
        jitter_variation=15.0,
    ),
    Scenario(
        name="mobile_handover",
        description="Mobile devices during cell tower handover with unstable connections",
        base_latency=80.0,
        base_bandwidth=2000.0,
        base_packet_loss=0.1,
        base_jitter=25.0,
        latency_variation=40.0,
        bandwidth_variation=1000.0,
        packet_loss_variation=0.15,
        jitter_variation=20.0,
    ),
    Scenario(
        name="asymmetric",
        description="Asymmetric connections with high download but low upload speeds",
        base_latency=40.0,
        base_bandwidth=8000.0,
        base_packet_loss=0.01,
        base_jitter=5.0,
        latency_variation=10.0,
        bandwidth_variation=2000.0,
        packet_loss_variation=0.02,
        jitter_variation=3.0,
    ),
    Scenario(
        name="satellite",
        description="Satellite connections with very high latency but decent bandwidth",
        base_latency=500.0,
        base_bandwidth=5000.0,
        base_packet_loss=0.02,
        base_jitter=10.0,
        latency_variation=100.0,
        bandwidth_variation=1000.0,
        packet_loss_variation=0.03,
        jitter_variation=8.0,
    ),
    Scenario(
        name="extreme",
        description="Extreme network conditions with high latency, low bandwidth, "
        "and high packet loss",
        base_latency=300.0,
        base_bandwidth=500.0,
        base_packet_loss=0.2,
        base_jitter=50.0,
        latency_variation=100.0,
        bandwidth_variation=300.0,
        packet_loss_variation=0.2,
        jitter_variation=30.0,
    ),
)


class ScenarioCatalog:
    """Scenario lookup by name."""

    def __init__(self) -> None:
        self._scenarios: dict[str, Scenario] = {}

    @classmethod
    def predefined(cls) -> ScenarioCatalog:
        catalog = cls()
        catalog.load_predefined()
        return catalog

    def load_predefined(self) -> None:
        """Replace the catalog contents with the built-in scenarios."""
        self._scenarios.clear()
        for scenario in PREDEFINED_SCENARIOS:
            self.add(scenario)
        logger.debug("Loaded {} predefined network scenarios", len(self._scenarios))

    def add(self, scenario: Scenario) -> None:
        self._scenarios[scenario.name] = scenario

    def get(self, name: str) -> Scenario | None:
        return self._scenarios.get(name)

    def all(self) -> list[Scenario]:
        return list(self._scenarios.values())

    @property
    def names(self) -> list[str]:
        return list(self._scenarios.keys())

    def __len__(self) -> int:
        return len(self._scenarios)

    def __iter__(self) -> Iterator[Scenario]:
        return iter(self._scenarios.values())

    def __contains__(self, name: object) -> bool:
        return name in self._scenarios
