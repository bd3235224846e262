"""Protocol synthesis: physics models in, generated protocols out.

The simulation talks to engines only through the ``ProtocolEngine`` protocol.
``DynamicProtocolEngine`` is the deterministic reference implementation used
for runs and tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from adaptnet.core.connection import NetworkCondition
    from adaptnet.protocol.models import PhysicsModel

# Samples whose value is a normalized quality (1.0 best). Everything else is a flag.
METRIC_CONDITIONS = frozenset({"latency", "bandwidth", "packet_loss", "jitter"})


class ProtocolFamily(Enum):
    LOW_LATENCY = auto()
    HIGH_BANDWIDTH = auto()
    RELIABILITY = auto()
    MOBILE = auto()
    SATELLITE = auto()
    ASYMMETRIC = auto()
    OTHER = auto()


@dataclass(frozen=True)
class FlowControlParams:
    window_size: int  # packets in flight
    retransmit_timeout_ms: float
    congestion_sensitivity: float


@dataclass(frozen=True)
class RoutingParams:
    path_redundancy: int
    reroute_threshold: float


@dataclass(frozen=True)
class SecurityParams:
    handshake_rounds: int
    rekey_interval_s: float


@dataclass(frozen=True)
class GeneratedProtocol:
    """Protocol produced by an engine for one set of conditions."""

    name: str
    family: ProtocolFamily
    model_id: str
    parameters: dict[str, float] = field(default_factory=dict)
    flow_control: FlowControlParams = FlowControlParams(64, 200.0, 0.5)
    routing: RoutingParams = RoutingParams(1, 0.5)
    security: SecurityParams = SecurityParams(1, 3600.0)

    def parameter(self, name: str) -> float:
        return self.parameters.get(name, 0.0)


class ProtocolEngine(Protocol):
    def register_model(self, model: PhysicsModel) -> None: ...

    def update_conditions(self, conditions: Sequence[NetworkCondition]) -> None: ...

    def generate_protocol(self) -> GeneratedProtocol | None: ...


def condition_need(condition: NetworkCondition) -> float:
    """How strongly a sample asks for optimization, in [0, 1]."""
    if condition.name in METRIC_CONDITIONS:
        return 1.0 - min(max(condition.value, 0.0), 1.0)
    return condition.value


class DynamicProtocolEngine:
    """Picks the registered model whose condition weights best match the need.

    Each model scores sum(weight(name) * need(sample)) over the current samples.
    The highest score wins, ties going to the earliest registered model. The
    engine declines when it has no models or no samples, or when the best score
    does not exceed ``min_score``.
    """

    def __init__(self, min_score: float = 0.0) -> None:
        self.min_score = min_score
        self._models: dict[str, PhysicsModel] = {}
        self._conditions: list[NetworkCondition] = []

    @property
    def models(self) -> list[PhysicsModel]:
        return list(self._models.values())

    @property
    def conditions(self) -> list[NetworkCondition]:
        return list(self._conditions)

    def register_model(self, model: PhysicsModel) -> None:
        # Re-registering an id replaces the model but keeps its position
        self._models[model.id] = model

    def update_conditions(self, conditions: Sequence[NetworkCondition]) -> None:
        self._conditions = list(conditions)

    def score(self, model: PhysicsModel) -> float:
        return sum(model.weight(c.name) * condition_need(c) for c in self._conditions)

    def generate_protocol(self) -> GeneratedProtocol | None:
        if not self._models or not self._conditions:
            return None

        best: PhysicsModel | None = None
        best_score = 0.0
        for model in self._models.values():
            score = self.score(model)
            if best is None or score > best_score:
                best, best_score = model, score

        if best is None or best_score <= self.min_score:
            return None
        return synthesize(best)


def synthesize(model: PhysicsModel) -> GeneratedProtocol:
    """Derive a concrete protocol from a model's parameters."""
    params = dict(model.parameters)
    lat_opt = params.get("latency_optimization", 0.0)
    bw_opt = params.get("bandwidth_optimization", 0.0)
    pl_opt = params.get("packet_loss_optimization", 0.0)
    jit_opt = params.get("jitter_optimization", 0.0)

    flow_control = FlowControlParams(
        window_size=int(64 * (1.0 + bw_opt)),
        retransmit_timeout_ms=200.0 * (1.0 - 0.5 * lat_opt),
        congestion_sensitivity=pl_opt,
    )
    routing = RoutingParams(
        path_redundancy=1 + round(2 * pl_opt),
        reroute_threshold=1.0 - 0.5 * jit_opt,
    )
    security = SecurityParams(
        # Low-latency protocols trade handshake rounds for startup time
        handshake_rounds=1 if lat_opt >= 0.8 else 2,
        rekey_interval_s=3600.0 * (1.0 + params.get("quantum_resilience", 0.0)),
    )

    return GeneratedProtocol(
        name=model.name,
        family=model.family,
        model_id=model.id,
        parameters=params,
        flow_control=flow_control,
        routing=routing,
        security=security,
    )
