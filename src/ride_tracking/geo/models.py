"""Geographic value types."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    """Immutable WGS-84 coordinate in decimal degrees."""

    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        """Return True if both coordinates are finite numbers."""
        try:
            return math.isfinite(self.latitude) and math.isfinite(self.longitude)
        except TypeError:
            return False

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}

    @staticmethod
    def from_dict(d: dict) -> GeoPoint:
        return GeoPoint(latitude=float(d["latitude"]), longitude=float(d["longitude"]))


@dataclass(frozen=True)
class LocationFix:
    """A single raw position sample from the device location source.

    Fixes may arrive at irregular intervals and out of timestamp order; no
    ordering is assumed.
    """

    latitude: float
    longitude: float

    speed: float | None = None
    """Instantaneous speed in m/s, if the sensor reported one."""

    heading: float | None = None
    """Device-reported heading in degrees, if any."""

    accuracy: float | None = None
    """Horizontal accuracy radius in metres."""

    timestamp: float | None = None
    """Sample time in seconds (source clock); informational only."""

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)

    def is_valid(self) -> bool:
        """Return True if the fix carries a usable (finite) position."""
        return self.point.is_valid()

    @staticmethod
    def from_dict(d: dict) -> LocationFix:
        def _opt(key: str) -> float | None:
            value = d.get(key)
            return None if value is None else float(value)

        return LocationFix(
            latitude=float(d["latitude"]),
            longitude=float(d["longitude"]),
            speed=_opt("speed"),
            heading=_opt("heading"),
            accuracy=_opt("accuracy"),
            timestamp=_opt("timestamp"),
        )
