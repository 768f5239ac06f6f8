"""Spherical geodesy primitives.

Pure functions, no state.  NaN inputs propagate as NaN; callers filter
malformed points first (see :meth:`GeoPoint.is_valid`).
"""

from __future__ import annotations

import math

from ride_tracking.geo.models import GeoPoint

EARTH_RADIUS_M = 6_371_000.0


def normalize_bearing(degrees: float) -> float:
    """Wrap *degrees* into ``[0, 360)``."""
    result = ((degrees % 360.0) + 360.0) % 360.0
    # -1e-14 % 360 rounds to 360.0 in floating point
    return 0.0 if result == 360.0 else result


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine great-circle distance between *a* and *b* in metres."""
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.latitude))
        * math.cos(math.radians(b.latitude))
        * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push h a hair above 1 for antipodal points
    h = min(h, 1.0)
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def bearing(a: GeoPoint, b: GeoPoint) -> float:
    """Initial compass bearing travelling from *a* to *b*, in ``[0, 360)``.

    0 = north, increasing clockwise.  Coincident points yield 0.
    """
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    d_lon = math.radians(b.longitude - a.longitude)
    y = math.sin(d_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)
    return normalize_bearing(math.degrees(math.atan2(y, x)))


def angular_distance(a: float, b: float) -> float:
    """Smallest absolute angle between two headings, in ``[0, 180]``."""
    diff = abs(normalize_bearing(a) - normalize_bearing(b))
    return min(diff, 360.0 - diff)
