"""Map live link metrics onto [0, 1] quality scores and back.

1.0 is always the best quality: 1 ms latency, 100000 kbps, no loss, no jitter.
"""

import math

MAX_LATENCY_MS = 500.0
MIN_LATENCY_MS = 1.0
MAX_BANDWIDTH_KBPS = 100_000.0
MAX_JITTER_MS = 100.0

_LATENCY_SPAN = MAX_LATENCY_MS - MIN_LATENCY_MS
_LOG_MAX_BANDWIDTH = math.log(MAX_BANDWIDTH_KBPS)


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def normalize_latency(latency_ms: float) -> float:
    clamped = _clamp(latency_ms, MIN_LATENCY_MS, MAX_LATENCY_MS)
    return (MAX_LATENCY_MS - clamped) / _LATENCY_SPAN


def denormalize_latency(value: float) -> float:
    return MAX_LATENCY_MS - _clamp(value, 0.0, 1.0) * _LATENCY_SPAN


def normalize_bandwidth(bandwidth_kbps: float) -> float:
    """Log scale: 1 kbps -> 0.0, 100000 kbps -> 1.0."""
    return math.log(_clamp(bandwidth_kbps, 1.0, MAX_BANDWIDTH_KBPS)) / _LOG_MAX_BANDWIDTH


def denormalize_bandwidth(value: float) -> float:
    return math.exp(value * _LOG_MAX_BANDWIDTH)


def normalize_packet_loss(packet_loss: float) -> float:
    return 1.0 - _clamp(packet_loss, 0.0, 1.0)


def denormalize_packet_loss(value: float) -> float:
    return 1.0 - _clamp(value, 0.0, 1.0)


def normalize_jitter(jitter_ms: float) -> float:
    return (MAX_JITTER_MS - _clamp(jitter_ms, 0.0, MAX_JITTER_MS)) / MAX_JITTER_MS


def denormalize_jitter(value: float) -> float:
    return MAX_JITTER_MS - _clamp(value, 0.0, 1.0) * MAX_JITTER_MS
