"""Linear and circular interpolation plus the easing curves used by the animator."""

from __future__ import annotations

from ride_tracking.geo.geodesy import normalize_bearing
from ride_tracking.geo.models import GeoPoint


def lerp_point(a: GeoPoint, b: GeoPoint, t: float) -> GeoPoint:
    """Component-wise linear interpolation between two coordinates.

    Not geodesically exact; adequate at street-level zoom over a few km.
    """
    return GeoPoint(
        latitude=a.latitude + (b.latitude - a.latitude) * t,
        longitude=a.longitude + (b.longitude - a.longitude) * t,
    )


def lerp_bearing(a: float, b: float, t: float) -> float:
    """Interpolate between two headings along the shortest arc.

    Never rotates more than 180° in either direction, so crossing the 0°/360°
    seam does not spin the marker the long way round.
    """
    start = normalize_bearing(a)
    end = normalize_bearing(b)
    diff = ((end - start + 540.0) % 360.0) - 180.0
    return normalize_bearing(start + diff * t)


def densify(a: GeoPoint, b: GeoPoint, steps: int = 10) -> list[GeoPoint]:
    """Return ``steps + 1`` evenly spaced points from *a* to *b* inclusive.

    Raises:
        ValueError: If *steps* < 1.
    """
    if steps < 1:
        raise ValueError("steps must be >= 1")
    return [lerp_point(a, b, i / steps) for i in range(steps + 1)]


# ---------------------------------------------------------------------------
# Easing curves — map elapsed fraction [0, 1] to progress [0, 1]
# ---------------------------------------------------------------------------

def _clamp01(t: float) -> float:
    return 0.0 if t < 0.0 else 1.0 if t > 1.0 else t


def ease_out_cubic(t: float) -> float:
    """Fast start, gentle settle."""
    t = _clamp01(t)
    return 1.0 - (1.0 - t) ** 3


def ease_in_out_cubic(t: float) -> float:
    """Slow start and stop, symmetric around the midpoint."""
    t = _clamp01(t)
    if t < 0.5:
        return 4.0 * t ** 3
    return 1.0 - (-2.0 * t + 2.0) ** 3 / 2.0
