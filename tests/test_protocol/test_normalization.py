"""Tests for metric normalization."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from adaptnet.protocol.normalization import (
    denormalize_bandwidth,
    denormalize_jitter,
    denormalize_latency,
    denormalize_packet_loss,
    normalize_bandwidth,
    normalize_jitter,
    normalize_latency,
    normalize_packet_loss,
)


class TestEndpoints:
    def test_latency(self) -> None:
        assert normalize_latency(1.0) == 1.0
        assert normalize_latency(500.0) == 0.0
        assert normalize_latency(0.0) == 1.0  # clamped
        assert normalize_latency(2000.0) == 0.0

    def test_bandwidth_is_log_scaled(self) -> None:
        assert normalize_bandwidth(1.0) == 0.0
        assert normalize_bandwidth(100_000.0) == pytest.approx(1.0)
        assert normalize_bandwidth(316.227766) == pytest.approx(0.5, abs=1e-6)
        assert normalize_bandwidth(0.0) == 0.0
        assert normalize_bandwidth(100_150.0) == 1.0  # clamped

    def test_packet_loss(self) -> None:
        assert normalize_packet_loss(0.0) == 1.0
        assert normalize_packet_loss(1.0) == 0.0
        assert normalize_packet_loss(0.25) == 0.75
        assert normalize_packet_loss(-1.0) == 1.0

    def test_jitter(self) -> None:
        assert normalize_jitter(0.0) == 1.0
        assert normalize_jitter(100.0) == 0.0
        assert normalize_jitter(250.0) == 0.0
        assert normalize_jitter(40.0) == pytest.approx(0.6)


class TestRoundTrip:
    @given(latency=st.floats(min_value=1.0, max_value=500.0))
    @settings(max_examples=100)
    def test_latency(self, latency: float) -> None:
        assert denormalize_latency(normalize_latency(latency)) == pytest.approx(latency)

    @given(bandwidth=st.floats(min_value=1.0, max_value=100_000.0))
    @settings(max_examples=100)
    def test_bandwidth(self, bandwidth: float) -> None:
        assert denormalize_bandwidth(normalize_bandwidth(bandwidth)) == pytest.approx(
            bandwidth, rel=1e-9
        )

    @given(packet_loss=st.floats(min_value=0.0, max_value=1.0))
    @settings(max_examples=100)
    def test_packet_loss(self, packet_loss: float) -> None:
        assert denormalize_packet_loss(normalize_packet_loss(packet_loss)) == pytest.approx(
            packet_loss, abs=1e-12
        )

    @given(jitter=st.floats(min_value=0.0, max_value=100.0))
    @settings(max_examples=100)
    def test_jitter(self, jitter: float) -> None:
        assert denormalize_jitter(normalize_jitter(jitter)) == pytest.approx(jitter, abs=1e-9)

    @given(value=st.floats(min_value=-10.0, max_value=1e7, allow_nan=False))
    @settings(max_examples=100)
    def test_normalized_values_stay_in_unit_interval(self, value: float) -> None:
        assert 0.0 <= normalize_latency(value) <= 1.0
        assert 0.0 <= normalize_packet_loss(value) <= 1.0
        assert 0.0 <= normalize_jitter(value) <= 1.0
        assert 0.0 <= normalize_bandwidth(value) <= 1.0
