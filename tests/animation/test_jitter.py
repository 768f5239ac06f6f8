"""Tests for the jitter filter."""

from __future__ import annotations

import random

from ride_tracking.animation.jitter import is_significant
from ride_tracking.geo.models import GeoPoint

ORIGIN = GeoPoint(12.9716, 77.5946)

# ~1.11 m of latitude per 1e-5 degree
METRE_LAT = 1.0 / 111_195.0


def north_of(p: GeoPoint, metres: float) -> GeoPoint:
    return GeoPoint(p.latitude + metres * METRE_LAT, p.longitude)


def test_same_point_is_never_significant():
    rng = random.Random(5)
    for _ in range(100):
        p = GeoPoint(rng.uniform(-80, 80), rng.uniform(-180, 180))
        assert is_significant(p, p) is False


def test_below_default_threshold():
    assert not is_significant(ORIGIN, north_of(ORIGIN, 4.0))


def test_above_default_threshold():
    assert is_significant(ORIGIN, north_of(ORIGIN, 6.0))


def test_custom_threshold():
    target = north_of(ORIGIN, 4.0)
    assert is_significant(ORIGIN, target, threshold_m=3.0)
    assert not is_significant(ORIGIN, target, threshold_m=10.0)


def test_zero_threshold_still_rejects_identical_points():
    assert not is_significant(ORIGIN, ORIGIN, threshold_m=0.0)
    assert is_significant(ORIGIN, north_of(ORIGIN, 0.5), threshold_m=0.0)


def test_malformed_points_are_not_significant():
    bad = GeoPoint(float("nan"), 77.0)
    assert not is_significant(ORIGIN, bad)
    assert not is_significant(bad, ORIGIN)
