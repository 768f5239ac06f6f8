"""Tests for camera placement helpers."""

from __future__ import annotations

import pytest

from ride_tracking.geo.models import GeoPoint
from ride_tracking.render.camera import (
    Bounds,
    camera_for_two_points,
    camera_region,
    follow_camera,
    route_bounds,
)

DRIVER = GeoPoint(12.9716, 77.5946)


class TestFollowCamera:
    @pytest.mark.parametrize(
        ("level", "zoom", "altitude", "pitch"),
        [("close", 17, 500, 50), ("medium", 15, 1500, 45), ("far", 13, 3000, 30)],
    )
    def test_presets(self, level, zoom, altitude, pitch):
        cam = follow_camera(DRIVER, 90.0, level)
        assert cam.center == DRIVER
        assert cam.heading == 90.0
        assert (cam.zoom, cam.altitude, cam.pitch) == (zoom, altitude, pitch)

    def test_heading_normalised(self):
        assert follow_camera(DRIVER, -90.0).heading == pytest.approx(270.0)

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            follow_camera(DRIVER, 0.0, "street")

    def test_to_dict(self):
        d = follow_camera(DRIVER, 10.0).to_dict()
        assert d["center"] == {"latitude": 12.9716, "longitude": 77.5946}
        assert d["zoom"] == 17


class TestCameraRegion:
    def test_deltas(self):
        assert camera_region(DRIVER, "close").latitude_delta == 0.027
        assert camera_region(DRIVER, "medium").longitude_delta == 0.09
        assert camera_region(DRIVER, "far").latitude_delta == 0.27

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            camera_region(DRIVER, "tiny")


class TestTwoPoints:
    def test_midpoint_and_bearing(self):
        pickup = GeoPoint(12.9806, 77.5946)  # ~1 km north
        cam = camera_for_two_points(DRIVER, pickup)
        assert cam.center.latitude == pytest.approx(12.9761)
        assert cam.heading == pytest.approx(0.0, abs=1e-6)
        assert cam.zoom == 14

    @pytest.mark.parametrize(
        ("d_lat", "zoom"),
        [(0.027, 13), (0.054, 12), (0.18, 11)],  # ~3 km, ~6 km, ~20 km
    )
    def test_zoom_steps_out_with_distance(self, d_lat, zoom):
        far = GeoPoint(DRIVER.latitude + d_lat, DRIVER.longitude)
        assert camera_for_two_points(DRIVER, far).zoom == zoom


class TestRouteBounds:
    def test_bounds(self):
        pts = [GeoPoint(1.0, 5.0), GeoPoint(-2.0, 7.0), GeoPoint(0.5, 4.0)]
        assert route_bounds(pts) == Bounds(GeoPoint(-2.0, 4.0), GeoPoint(1.0, 7.0))

    def test_skips_invalid(self):
        pts = [GeoPoint(1.0, 1.0), GeoPoint(float("nan"), 9.0)]
        assert route_bounds(pts) == Bounds(GeoPoint(1.0, 1.0), GeoPoint(1.0, 1.0))

    def test_empty(self):
        assert route_bounds([]) is None
