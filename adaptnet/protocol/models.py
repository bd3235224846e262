"""Physics models registered with every connection's protocol engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from adaptnet.protocol.engine import ProtocolFamily


@dataclass(frozen=True)
class PhysicsModel:
    id: str
    name: str
    family: ProtocolFamily
    parameters: dict[str, float] = field(default_factory=dict)
    condition_weights: dict[str, float] = field(default_factory=dict)

    def weight(self, condition_name: str) -> float:
        return self.condition_weights.get(condition_name, 0.0)


def default_physics_models() -> list[PhysicsModel]:
    """The seven stock models, in registration order."""
    return [
        PhysicsModel(
            id="low_latency_model",
            name="Low Latency Optimization Model",
            family=ProtocolFamily.LOW_LATENCY,
            parameters={
                "wave_propagation": 0.9,
                "entropy_scaling": 0.7,
                "quantum_resilience": 0.8,
                "phase_vector_precaching": 0.9,
                "observer_sync_interval": 0.5,
                "latency_optimization": 0.9,
                "bandwidth_optimization": 0.3,
                "packet_loss_optimization": 0.5,
                "jitter_optimization": 0.7,
                "directional_bias_correction": 0.3,
            },
            condition_weights={
                "latency": 1.5,
                "bandwidth": 0.3,
                "packet_loss": 0.8,
                "jitter": 1.5,
            },
        ),
        PhysicsModel(
            id="high_bandwidth_model",
            name="High Bandwidth Optimization Model",
            family=ProtocolFamily.HIGH_BANDWIDTH,
            parameters={
                "wave_propagation": 0.7,
                "entropy_scaling": 1.3,
                "quantum_resilience": 0.6,
                "latency_optimization": 0.2,
                "bandwidth_optimization": 0.9,
                "packet_loss_optimization": 0.4,
                "jitter_optimization": 0.2,
                "asymmetric_buffer_sizing": 0.5,
            },
            condition_weights={
                "latency": 0.5,
                "bandwidth": 2.0,
                "packet_loss": 0.7,
                "jitter": 0.3,
                "low_bandwidth": 1.0,
            },
        ),
        PhysicsModel(
            id="reliability_model",
            name="Network Reliability Optimization Model",
            family=ProtocolFamily.RELIABILITY,
            parameters={
                "wave_propagation": 0.6,
                "entropy_scaling": 0.9,
                "quantum_resilience": 1.4,
                "latency_optimization": 0.5,
                "bandwidth_optimization": 0.4,
                "packet_loss_optimization": 0.9,
                "jitter_optimization": 0.6,
                "directional_bias_correction": 0.7,
            },
            condition_weights={
                "latency": 0.6,
                "bandwidth": 0.4,
                "packet_loss": 2.0,
                "jitter": 1.0,
                "high_packet_loss": 1.0,
            },
        ),
        PhysicsModel(
            id="balanced_model",
            name="Balanced Network Optimization Model",
            family=ProtocolFamily.OTHER,
            parameters={
                "wave_propagation": 0.8,
                "entropy_scaling": 1.0,
                "quantum_resilience": 1.0,
                "adaptive_silence": 0.5,
                "latency_optimization": 0.3,
                "bandwidth_optimization": 0.3,
                "packet_loss_optimization": 0.3,
                "jitter_optimization": 0.3,
            },
            condition_weights={
                "latency": 1.0,
                "bandwidth": 1.0,
                "packet_loss": 1.0,
                "jitter": 1.0,
            },
        ),
        PhysicsModel(
            id="mobile_model",
            name="Mobile Network Optimization Model",
            family=ProtocolFamily.MOBILE,
            parameters={
                "wave_propagation": 0.75,
                "entropy_scaling": 0.8,
                "quantum_resilience": 1.2,
                "time_weighted_phase_stabilization": 1.0,
                "handover_optimization": 0.9,
                "latency_optimization": 0.6,
                "bandwidth_optimization": 0.3,
                "packet_loss_optimization": 0.4,
                "jitter_optimization": 0.9,
                "thermal_echo_boosting": 0.4,
            },
            condition_weights={
                "latency": 0.9,
                "bandwidth": 0.8,
                "packet_loss": 1.5,
                "jitter": 1.2,
                "handover": 2.0,
            },
        ),
        PhysicsModel(
            id="satellite_model",
            name="Satellite Link Optimization Model",
            family=ProtocolFamily.SATELLITE,
            parameters={
                "wave_propagation": 0.6,
                "entropy_scaling": 1.1,
                "quantum_resilience": 1.0,
                "phase_vector_precaching": 1.0,
                "latency_optimization": 0.8,
                "bandwidth_optimization": 0.2,
                "packet_loss_optimization": 0.6,
                "jitter_optimization": 0.4,
                "thermal_echo_boosting": 0.8,
            },
            condition_weights={
                "latency": 1.0,
                "bandwidth": 0.5,
                "packet_loss": 0.8,
                "jitter": 0.5,
                "high_latency": 2.0,
            },
        ),
        PhysicsModel(
            id="asymmetric_model",
            name="Asymmetric Link Optimization Model",
            family=ProtocolFamily.ASYMMETRIC,
            parameters={
                "wave_propagation": 0.7,
                "entropy_scaling": 1.2,
                "quantum_resilience": 1.1,
                "latency_optimization": 0.5,
                "bandwidth_optimization": 0.7,
                "packet_loss_optimization": 0.8,
                "jitter_optimization": 0.6,
                "directional_bias_correction": 0.9,
                "asymmetric_buffer_sizing": 0.8,
                "thermal_echo_boosting": 0.7,
            },
            condition_weights={
                "latency": 0.8,
                "bandwidth": 1.0,
                "packet_loss": 1.0,
                "jitter": 0.8,
                "asymmetric": 2.0,
            },
        ),
    ]
