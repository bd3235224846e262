"""Per-connection protocol adaptation and its effect on live metrics."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from loguru import logger

from adaptnet.config import DEFAULT_FILE_SIZE_KB
from adaptnet.core.connection import AdaptationState, NetworkCondition
from adaptnet.protocol.engine import ProtocolFamily
from adaptnet.protocol.normalization import (
    normalize_bandwidth,
    normalize_jitter,
    normalize_latency,
    normalize_packet_loss,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from adaptnet.core.connection import Connection, ConnectionTable
    from adaptnet.core.types import ConnectionHandle
    from adaptnet.metrics.collector import MetricsCollector
    from adaptnet.protocol.engine import GeneratedProtocol, ProtocolEngine

# Derived condition flags
HIGH_LATENCY_MS = 200.0
HIGH_PACKET_LOSS = 0.1
LOW_BANDWIDTH_KBPS = 1000.0

# Allowed multiplicative effect of a protocol on each metric
LATENCY_FACTOR_BOUNDS = (0.6, 1.0)
BANDWIDTH_FACTOR_BOUNDS = (1.0, 1.5)
PACKET_LOSS_FACTOR_BOUNDS = (0.5, 1.0)
JITTER_FACTOR_BOUNDS = (0.7, 1.0)

TRANSFER_FACTORS: dict[ProtocolFamily, float] = {
    ProtocolFamily.LOW_LATENCY: 0.65,
    ProtocolFamily.HIGH_BANDWIDTH: 0.7,
    ProtocolFamily.RELIABILITY: 0.75,
    ProtocolFamily.MOBILE: 0.75,
    ProtocolFamily.OTHER: 0.8,
}
UNLISTED_TRANSFER_FACTOR = 0.85


def _clamp(value: float, bounds: tuple[float, float]) -> float:
    return min(max(value, bounds[0]), bounds[1])


def build_conditions(conn: Connection, timestamp: float = 0.0) -> list[NetworkCondition]:
    """Normalized metric samples followed by scenario and derived flags."""
    conditions = [
        NetworkCondition("latency", normalize_latency(conn.latency), timestamp),
        NetworkCondition("bandwidth", normalize_bandwidth(conn.bandwidth), timestamp),
        NetworkCondition("packet_loss", normalize_packet_loss(conn.packet_loss), timestamp),
        NetworkCondition("jitter", normalize_jitter(conn.jitter), timestamp),
    ]
    conditions.extend(conn.current_conditions)

    if conn.latency > HIGH_LATENCY_MS:
        conditions.append(NetworkCondition("high_latency", 1.0, timestamp))
    if conn.packet_loss > HIGH_PACKET_LOSS:
        conditions.append(NetworkCondition("high_packet_loss", 1.0, timestamp))
    if conn.bandwidth < LOW_BANDWIDTH_KBPS:
        conditions.append(NetworkCondition("low_bandwidth", 1.0, timestamp))
    return conditions


def improvement_fractions(
    protocol: GeneratedProtocol, latency: float, bandwidth: float
) -> tuple[float, float, float, float]:
    """Raw (latency, bandwidth, packet loss, jitter) improvement fractions."""
    lat_opt = protocol.parameter("latency_optimization")
    bw_opt = protocol.parameter("bandwidth_optimization")
    pl_opt = protocol.parameter("packet_loss_optimization")
    jit_opt = protocol.parameter("jitter_optimization")
    dir_bias = protocol.parameter("directional_bias_correction")
    asym_buffer = protocol.parameter("asymmetric_buffer_sizing")
    thermal_echo = protocol.parameter("thermal_echo_boosting")

    match protocol.family:
        case ProtocolFamily.ASYMMETRIC:
            return (
                0.3 * lat_opt * dir_bias,
                0.25 * bw_opt * asym_buffer,
                0.4 * pl_opt * dir_bias,
                0.3 * jit_opt * thermal_echo,
            )
        case ProtocolFamily.SATELLITE:
            return (0.2 * lat_opt, 0.15 * bw_opt, 0.35 * pl_opt, 0.1 * jit_opt * thermal_echo)
        case ProtocolFamily.MOBILE:
            return (0.25 * lat_opt, 0.1 * bw_opt, 0.2 * pl_opt, 0.4 * jit_opt)

    # Near-ideal links have little left to gain
    scale = 0.01 if latency < 5.0 and bandwidth > 9000.0 else 0.15
    return (scale * lat_opt, scale * bw_opt, scale * pl_opt, scale * jit_opt)


def apply_protocol_transform(conn: Connection, protocol: GeneratedProtocol) -> None:
    lat_imp, bw_imp, pl_imp, jit_imp = improvement_fractions(
        protocol, conn.latency, conn.bandwidth
    )
    conn.set_metrics(
        latency=conn.latency * _clamp(1.0 - lat_imp, LATENCY_FACTOR_BOUNDS),
        bandwidth=conn.bandwidth * _clamp(1.0 + bw_imp, BANDWIDTH_FACTOR_BOUNDS),
        packet_loss=conn.packet_loss * _clamp(1.0 - pl_imp, PACKET_LOSS_FACTOR_BOUNDS),
        jitter=conn.jitter * _clamp(1.0 - jit_imp, JITTER_FACTOR_BOUNDS),
    )
    conn.optimized = True


def transfer_time(conn: Connection, file_size_kb: float = DEFAULT_FILE_SIZE_KB) -> float:
    """Milliseconds to move file_size_kb over the link with its active protocol."""
    base_time = file_size_kb / conn.bandwidth * 1000.0
    loss_factor = 1.0 + 2.0 * conn.packet_loss

    if conn.active_protocol is None:
        protocol_factor = 1.0
    else:
        protocol_factor = TRANSFER_FACTORS.get(conn.protocol_family, UNLISTED_TRANSFER_FACTOR)

    return base_time * loss_factor * protocol_factor


class ProtocolAdapter:
    """Consults each connection's engine and applies the protocol it returns."""

    def __init__(
        self,
        engines: Mapping[ConnectionHandle, ProtocolEngine],
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.engines = engines
        self.metrics = metrics

    def update_protocols(self, connections: ConnectionTable, timestamp: float = 0.0) -> int:
        """Adapt every connection that opted in. Returns how many were adapted."""
        adapted = 0
        for handle, conn in connections.items():
            if not conn.uses_adaptation:
                continue
            # Metrics unchanged since the last adaptation; the protocol still holds
            if conn.optimized and conn.active_protocol is not None:
                continue
            engine = self.engines.get(handle)
            if engine is None:
                continue
            if self.adapt_connection(conn, engine, timestamp):
                adapted += 1
        return adapted

    def adapt_connection(
        self, conn: Connection, engine: ProtocolEngine, timestamp: float = 0.0
    ) -> bool:
        prior_state = conn.state
        conn.state = AdaptationState.ADAPTING

        started = time.perf_counter()
        engine.update_conditions(build_conditions(conn, timestamp))
        protocol = engine.generate_protocol()
        elapsed_ms = (time.perf_counter() - started) * 1000.0

        if protocol is None:
            conn.state = prior_state
            return False

        if self.metrics is not None:
            self.metrics.record_adaptation_time(elapsed_ms)

        if conn.active_protocol != protocol.name:
            logger.trace(
                "Connection {} switched {} -> {}", conn.key, conn.active_protocol, protocol.name
            )
            if self.metrics is not None:
                self.metrics.record_protocol_switch()
            conn.active_protocol = protocol.name
            conn.protocol_family = protocol.family

        if not conn.optimized:
            apply_protocol_transform(conn, protocol)

        conn.state = AdaptationState.ADAPTED
        return True
