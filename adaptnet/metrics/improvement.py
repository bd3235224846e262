"""Scores and baseline-vs-adapted improvement arithmetic.

Every function here returns a finite number for any finite input. Zero
baselines map to 0 or a +/-100 sentinel instead of dividing by zero.
"""

from adaptnet.metrics.results import PerformanceImprovement, ScenarioMetrics

# Overall weights (latency, bandwidth, packet loss, transfer time, resilience)
OVERALL_WEIGHTS = (0.25, 0.25, 0.2, 0.2, 0.1)
WEIGHTED_OVERALL_WEIGHTS = (0.3, 0.25, 0.25, 0.15, 0.05)

# Lowest raw ratio kept before a degradation is pinned to its cap
LATENCY_RATIO_FLOOR = -1.0
BANDWIDTH_RATIO_FLOOR = -0.5
PACKET_LOSS_RATIO_FLOOR = -1.0
TRANSFER_TIME_RATIO_FLOOR = -1.0


def resilience_score(latency: float, packet_loss_pct: float, jitter: float) -> float:
    norm_latency = 1.0 - min(latency, 500.0) / 500.0
    norm_packet_loss = 1.0 - min(packet_loss_pct, 100.0) / 100.0
    norm_jitter = 1.0 - min(jitter, 100.0) / 100.0
    return (0.2 * norm_latency + 0.5 * norm_packet_loss + 0.3 * norm_jitter) * 100.0


def efficiency_score(bandwidth: float, transfer_time: float, packet_loss_pct: float) -> float:
    norm_bandwidth = min(bandwidth, 10000.0) / 10000.0
    norm_transfer = 1.0 - min(transfer_time, 10000.0) / 10000.0
    norm_packet_loss = 1.0 - min(packet_loss_pct, 100.0) / 100.0
    return (0.4 * norm_bandwidth + 0.4 * norm_transfer + 0.2 * norm_packet_loss) * 100.0


def calculate_improvement(baseline: float, adapted: float, lower_is_better: bool) -> float:
    """Relative change in percent, signed so that positive means better."""
    if baseline == 0.0:
        if adapted == 0.0:
            return 0.0
        return -100.0 if lower_is_better else 100.0

    if lower_is_better:
        return (baseline - adapted) / baseline * 100.0
    return (adapted - baseline) / baseline * 100.0


def _capped(baseline: float, adapted: float, lower_is_better: bool, floor: float) -> float:
    improvement = calculate_improvement(baseline, adapted, lower_is_better)
    if baseline != 0.0 and improvement / 100.0 < floor:
        return floor * 100.0
    return improvement


def _overall(components: tuple[float, ...], weights: tuple[float, ...]) -> float:
    return sum(value * weight for value, weight in zip(components, weights, strict=True))


def improvement_between(
    baseline: ScenarioMetrics, adapted: ScenarioMetrics
) -> PerformanceImprovement:
    """Uncapped improvement with the whole-run weights."""
    latency = calculate_improvement(baseline.avg_latency, adapted.avg_latency, True)
    bandwidth = calculate_improvement(baseline.avg_bandwidth, adapted.avg_bandwidth, False)
    packet_loss = calculate_improvement(baseline.avg_packet_loss, adapted.avg_packet_loss, True)
    transfer_time = calculate_improvement(
        baseline.avg_transfer_time, adapted.avg_transfer_time, True
    )
    resilience = calculate_improvement(
        baseline.resilience_score, adapted.resilience_score, False
    )

    components = (latency, bandwidth, packet_loss, transfer_time, resilience)
    return PerformanceImprovement(
        overall=_overall(components, OVERALL_WEIGHTS),
        latency=latency,
        bandwidth=bandwidth,
        packet_loss=packet_loss,
        transfer_time=transfer_time,
        resilience=resilience,
    )


def weighted_improvement(
    baseline: ScenarioMetrics, adapted: ScenarioMetrics
) -> PerformanceImprovement:
    """Per-scenario improvement with severe degradations capped."""
    latency = _capped(baseline.avg_latency, adapted.avg_latency, True, LATENCY_RATIO_FLOOR)
    bandwidth = _capped(
        baseline.avg_bandwidth, adapted.avg_bandwidth, False, BANDWIDTH_RATIO_FLOOR
    )
    packet_loss = _capped(
        baseline.avg_packet_loss, adapted.avg_packet_loss, True, PACKET_LOSS_RATIO_FLOOR
    )
    transfer_time = _capped(
        baseline.avg_transfer_time, adapted.avg_transfer_time, True, TRANSFER_TIME_RATIO_FLOOR
    )
    resilience = calculate_improvement(
        baseline.resilience_score, adapted.resilience_score, False
    )

    components = (latency, bandwidth, packet_loss, transfer_time, resilience)
    return PerformanceImprovement(
        overall=_overall(components, WEIGHTED_OVERALL_WEIGHTS),
        latency=latency,
        bandwidth=bandwidth,
        packet_loss=packet_loss,
        transfer_time=transfer_time,
        resilience=resilience,
    )


def mean_metrics(name: str, metrics: list[ScenarioMetrics]) -> ScenarioMetrics:
    """Field-wise mean of several scenario summaries."""
    if not metrics:
        return ScenarioMetrics(name=name)

    count = len(metrics)
    return ScenarioMetrics(
        name=name,
        avg_latency=sum(m.avg_latency for m in metrics) / count,
        avg_bandwidth=sum(m.avg_bandwidth for m in metrics) / count,
        avg_packet_loss=sum(m.avg_packet_loss for m in metrics) / count,
        avg_jitter=sum(m.avg_jitter for m in metrics) / count,
        avg_transfer_time=sum(m.avg_transfer_time for m in metrics) / count,
        resilience_score=sum(m.resilience_score for m in metrics) / count,
        efficiency_score=sum(m.efficiency_score for m in metrics) / count,
    )
