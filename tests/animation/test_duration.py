"""Tests for the animation duration model."""

from __future__ import annotations

import random

import pytest

from ride_tracking.animation.duration import (
    DEFAULT_SPEED_MPS,
    MAX_DURATION_MS,
    MIN_DURATION_MS,
    animation_duration,
)


class TestAnimationDuration:
    def test_uses_sampled_speed(self):
        """10 m at 10 m/s → 1000 ms."""
        assert animation_duration(10.0, 10.0) == 1000

    def test_falls_back_to_default_speed(self):
        expected = round(10.0 / DEFAULT_SPEED_MPS * 1000)
        assert animation_duration(10.0) == expected
        assert animation_duration(10.0, None) == expected

    @pytest.mark.parametrize("speed", [0.0, -3.0, float("nan")])
    def test_non_positive_speed_uses_default(self, speed):
        assert animation_duration(10.0, speed) == animation_duration(10.0)

    def test_short_hop_clamped_to_minimum(self):
        assert animation_duration(0.5, 20.0) == MIN_DURATION_MS

    def test_long_hop_clamped_to_maximum(self):
        assert animation_duration(500.0, 5.0) == MAX_DURATION_MS

    def test_zero_distance_returns_minimum(self):
        assert animation_duration(0.0, 10.0) == MIN_DURATION_MS

    def test_custom_bounds(self):
        assert animation_duration(100.0, 1.0, min_ms=100, max_ms=500) == 500
        assert animation_duration(0.01, 1.0, min_ms=100, max_ms=500) == 100

    def test_returns_int(self):
        assert isinstance(animation_duration(12.3, 4.56), int)

    def test_always_within_bounds(self):
        rng = random.Random(6)
        for _ in range(1000):
            distance = rng.uniform(0, 5000)
            speed = rng.choice([None, 0.0, rng.uniform(0, 60)])
            d = animation_duration(distance, speed)
            assert MIN_DURATION_MS <= d <= MAX_DURATION_MS
