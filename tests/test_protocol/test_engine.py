"""Tests for the reference protocol synthesis engine and physics models."""

import pytest

from adaptnet.core.connection import NetworkCondition
from adaptnet.protocol.engine import (
    DynamicProtocolEngine,
    ProtocolEngine,
    ProtocolFamily,
    condition_need,
    synthesize,
)
from adaptnet.protocol.models import PhysicsModel, default_physics_models


def _metrics(latency: float, bandwidth: float, packet_loss: float, jitter: float):
    return [
        NetworkCondition("latency", latency),
        NetworkCondition("bandwidth", bandwidth),
        NetworkCondition("packet_loss", packet_loss),
        NetworkCondition("jitter", jitter),
    ]


@pytest.fixture
def engine() -> DynamicProtocolEngine:
    engine = DynamicProtocolEngine()
    for model in default_physics_models():
        engine.register_model(model)
    return engine


class TestDefaultModels:
    def test_seven_models_one_per_family(self) -> None:
        models = default_physics_models()

        assert len(models) == 7
        assert len({m.id for m in models}) == 7
        assert {m.family for m in models} == set(ProtocolFamily)

    def test_missing_weight_is_zero(self) -> None:
        model = default_physics_models()[0]
        assert model.weight("handover") == 0.0
        assert model.weight("latency") == 1.5


class TestConditionNeed:
    def test_metric_need_is_inverse_quality(self) -> None:
        assert condition_need(NetworkCondition("latency", 0.2)) == pytest.approx(0.8)
        assert condition_need(NetworkCondition("bandwidth", 1.3)) == 0.0

    def test_flag_need_is_value(self) -> None:
        assert condition_need(NetworkCondition("handover", 1.0)) == 1.0


class TestDynamicProtocolEngine:
    def test_satisfies_engine_protocol(self, engine: DynamicProtocolEngine) -> None:
        typed: ProtocolEngine = engine
        assert typed is engine

    def test_declines_without_models(self) -> None:
        engine = DynamicProtocolEngine()
        engine.update_conditions(_metrics(0.1, 0.1, 0.1, 0.1))
        assert engine.generate_protocol() is None

    def test_declines_without_conditions(self, engine: DynamicProtocolEngine) -> None:
        assert engine.generate_protocol() is None

    def test_declines_when_nothing_needs_fixing(self, engine: DynamicProtocolEngine) -> None:
        engine.update_conditions(_metrics(1.0, 1.0, 1.0, 1.0))
        assert engine.generate_protocol() is None

    def test_min_score_threshold(self) -> None:
        engine = DynamicProtocolEngine(min_score=100.0)
        for model in default_physics_models():
            engine.register_model(model)
        engine.update_conditions(_metrics(0.0, 0.0, 0.0, 0.0))
        assert engine.generate_protocol() is None

    def test_high_latency_flag_selects_satellite(self, engine: DynamicProtocolEngine) -> None:
        engine.update_conditions(
            [*_metrics(0.0, 0.74, 0.97, 0.8), NetworkCondition("high_latency", 1.0)]
        )
        protocol = engine.generate_protocol()

        assert protocol is not None
        assert protocol.family is ProtocolFamily.SATELLITE
        assert protocol.model_id == "satellite_model"

    def test_handover_flag_selects_mobile(self, engine: DynamicProtocolEngine) -> None:
        engine.update_conditions(
            [*_metrics(0.8, 0.7, 0.9, 0.7), NetworkCondition("handover", 1.0)]
        )
        protocol = engine.generate_protocol()
        assert protocol is not None
        assert protocol.family is ProtocolFamily.MOBILE

    def test_asymmetric_flag_selects_asymmetric(self, engine: DynamicProtocolEngine) -> None:
        engine.update_conditions(
            [*_metrics(0.9, 0.8, 0.98, 0.92), NetworkCondition("asymmetric", 1.0)]
        )
        protocol = engine.generate_protocol()
        assert protocol is not None
        assert protocol.family is ProtocolFamily.ASYMMETRIC

    def test_ties_go_to_first_registered(self) -> None:
        weights = {"latency": 1.0}
        engine = DynamicProtocolEngine()
        engine.register_model(PhysicsModel("a", "A", ProtocolFamily.OTHER, {}, weights))
        engine.register_model(PhysicsModel("b", "B", ProtocolFamily.MOBILE, {}, weights))
        engine.update_conditions([NetworkCondition("latency", 0.5)])

        protocol = engine.generate_protocol()
        assert protocol is not None
        assert protocol.name == "A"

    def test_reregistering_replaces_model(self) -> None:
        engine = DynamicProtocolEngine()
        engine.register_model(PhysicsModel("a", "A", ProtocolFamily.OTHER))
        engine.register_model(PhysicsModel("a", "A2", ProtocolFamily.RELIABILITY))

        assert [m.name for m in engine.models] == ["A2"]

    def test_update_conditions_replaces_samples(self, engine: DynamicProtocolEngine) -> None:
        engine.update_conditions(_metrics(0.1, 0.1, 0.1, 0.1))
        engine.update_conditions([NetworkCondition("latency", 0.5)])
        assert len(engine.conditions) == 1


class TestSynthesize:
    def test_protocol_copies_model(self) -> None:
        model = default_physics_models()[0]
        protocol = synthesize(model)

        assert protocol.name == model.name
        assert protocol.family is model.family
        assert protocol.parameters == model.parameters
        assert protocol.parameters is not model.parameters
        assert protocol.parameter("does_not_exist") == 0.0

    def test_derived_parameters(self) -> None:
        model = PhysicsModel(
            "m",
            "M",
            ProtocolFamily.OTHER,
            parameters={
                "latency_optimization": 1.0,
                "bandwidth_optimization": 0.5,
                "packet_loss_optimization": 1.0,
                "jitter_optimization": 0.0,
            },
        )
        protocol = synthesize(model)

        assert protocol.flow_control.window_size == 96
        assert protocol.flow_control.retransmit_timeout_ms == pytest.approx(100.0)
        assert protocol.routing.path_redundancy == 3
        assert protocol.routing.reroute_threshold == 1.0
        assert protocol.security.handshake_rounds == 1
