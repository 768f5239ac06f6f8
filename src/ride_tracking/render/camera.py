"""Camera placement values handed to the map widget.

The widget animates and draws; these helpers only decide where it should
look.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ride_tracking.geo.geodesy import bearing, distance_meters, normalize_bearing
from ride_tracking.geo.models import GeoPoint


@dataclass(frozen=True)
class CameraPreset:
    zoom: float
    altitude: float  # metres
    pitch: float     # degrees of tilt


FOLLOW_PRESETS: dict[str, CameraPreset] = {
    "close": CameraPreset(zoom=17, altitude=500, pitch=50),    # turn-by-turn
    "medium": CameraPreset(zoom=15, altitude=1500, pitch=45),  # overview
    "far": CameraPreset(zoom=13, altitude=3000, pitch=30),
}

# Latitude/longitude span of the visible region, in degrees (~3 / 10 / 30 km)
REGION_DELTAS: dict[str, float] = {
    "close": 0.027,
    "medium": 0.09,
    "far": 0.27,
}


@dataclass(frozen=True)
class CameraPosition:
    center: GeoPoint
    heading: float
    zoom: float
    pitch: float = 0.0
    altitude: float | None = None

    def to_dict(self) -> dict:
        return {
            "center": self.center.to_dict(),
            "heading": self.heading,
            "zoom": self.zoom,
            "pitch": self.pitch,
            "altitude": self.altitude,
        }


@dataclass(frozen=True)
class CameraRegion:
    center: GeoPoint
    latitude_delta: float
    longitude_delta: float


@dataclass(frozen=True)
class Bounds:
    south_west: GeoPoint
    north_east: GeoPoint


def _preset(zoom_level: str) -> CameraPreset:
    try:
        return FOLLOW_PRESETS[zoom_level]
    except KeyError:
        raise ValueError(f"Unknown zoom level {zoom_level!r}") from None


def follow_camera(
    position: GeoPoint, heading: float = 0.0, zoom_level: str = "close"
) -> CameraPosition:
    """Tilted camera centred on the agent and rotated to its heading."""
    preset = _preset(zoom_level)
    return CameraPosition(
        center=position,
        heading=normalize_bearing(heading),
        zoom=preset.zoom,
        pitch=preset.pitch,
        altitude=preset.altitude,
    )


def camera_region(position: GeoPoint, zoom_level: str = "close") -> CameraRegion:
    """Flat region centred on *position* with a fixed span per zoom level."""
    if zoom_level not in REGION_DELTAS:
        raise ValueError(f"Unknown zoom level {zoom_level!r}")
    delta = REGION_DELTAS[zoom_level]
    return CameraRegion(center=position, latitude_delta=delta, longitude_delta=delta)


def camera_for_two_points(a: GeoPoint, b: GeoPoint) -> CameraPosition:
    """Frame both *a* and *b* (e.g. driver and pickup), facing from *a* to *b*.

    Zoom steps out as the points get further apart:
    14 up to 2 km, 13 up to 5 km, 12 up to 10 km, 11 beyond.
    """
    center = GeoPoint((a.latitude + b.latitude) / 2, (a.longitude + b.longitude) / 2)
    distance = distance_meters(a, b)
    if distance > 10_000:
        zoom = 11
    elif distance > 5_000:
        zoom = 12
    elif distance > 2_000:
        zoom = 13
    else:
        zoom = 14
    return CameraPosition(center=center, heading=bearing(a, b), zoom=zoom)


def route_bounds(points: Sequence[GeoPoint]) -> Bounds | None:
    """Bounding box of the valid *points*, or None if there are none."""
    valid = [p for p in points if p.is_valid()]
    if not valid:
        return None
    lats = [p.latitude for p in valid]
    lons = [p.longitude for p in valid]
    return Bounds(
        south_west=GeoPoint(min(lats), min(lons)),
        north_east=GeoPoint(max(lats), max(lons)),
    )
