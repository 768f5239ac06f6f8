"""Trip odometer — distance covered by the agent, in total and per leg."""

from __future__ import annotations

from ride_tracking.geo.geodesy import distance_meters
from ride_tracking.geo.models import GeoPoint


class TripOdometer:
    """Accumulates haversine distance between consecutive valid positions.

    A *leg* is the distance since the last :meth:`mark` — e.g. since the
    passenger boarded — while the total covers the whole session.

    Args:
        min_step_m: Hops shorter than this are treated as noise and skipped
            without moving the reference point.
    """

    def __init__(self, min_step_m: float = 0.0) -> None:
        if min_step_m < 0:
            raise ValueError("min_step_m must be >= 0")
        self.min_step_m = min_step_m
        self._last: GeoPoint | None = None
        self._total_m = 0.0
        self._leg_m = 0.0
        self._leg_active = False

    @property
    def total_m(self) -> float:
        return self._total_m

    @property
    def total_km(self) -> float:
        return self._total_m / 1000.0

    @property
    def leg_m(self) -> float:
        """Distance since :meth:`mark`; 0 if no leg was started."""
        return self._leg_m

    @property
    def leg_active(self) -> bool:
        return self._leg_active

    def update(self, point: GeoPoint) -> float:
        """Add the hop to *point* and return its length in metres (0 if skipped)."""
        if not point.is_valid():
            return 0.0
        if self._last is None:
            self._last = point
            return 0.0
        step = distance_meters(self._last, point)
        if step < self.min_step_m:
            return 0.0
        self._last = point
        self._total_m += step
        if self._leg_active:
            self._leg_m += step
        return step

    def mark(self) -> None:
        """Start a new leg at the current position."""
        self._leg_m = 0.0
        self._leg_active = True

    def reset(self) -> None:
        self._last = None
        self._total_m = 0.0
        self._leg_m = 0.0
        self._leg_active = False
