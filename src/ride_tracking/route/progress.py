"""Route progress — splits a fixed route into travelled and remaining parts.

Given the live position and the trip's ordered polyline, find the nearest
route vertex, bias it forward by a small look-ahead so GPS noise does not
pull the split point backwards, and cut the route there.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from ride_tracking.geo.geodesy import distance_meters
from ride_tracking.geo.models import GeoPoint

DEFAULT_LOOK_AHEAD = 5


@dataclass(frozen=True)
class RouteProgress:
    """A fresh snapshot of how far along the route the agent is.

    ``travelled`` and ``remaining`` both contain the live position so the two
    polylines meet exactly at the marker: ``travelled[-1] == remaining[0]``.
    """

    travelled: tuple[GeoPoint, ...]
    remaining: tuple[GeoPoint, ...]
    nearest_index: int
    """Split index: nearest vertex plus look-ahead, capped at the last vertex."""
    matched_index: int
    """Literal nearest vertex (first occurrence on ties)."""
    progress_percent: float
    """``nearest_index / len(route) * 100`` — in ``[0, 100)``."""


EMPTY_PROGRESS = RouteProgress((), (), 0, 0, 0.0)


def find_nearest_vertex(point: GeoPoint, route: Sequence[GeoPoint]) -> tuple[int, float]:
    """Return ``(index, distance_m)`` of the route vertex closest to *point*.

    Ties resolve to the lowest index.  Returns ``(0, inf)`` for an empty route.
    """
    best_index = 0
    best_dist = math.inf
    for i, vertex in enumerate(route):
        d = distance_meters(point, vertex)
        if d < best_dist:
            best_dist = d
            best_index = i
    return best_index, best_dist


def compute_progress(
    current: GeoPoint,
    route: Sequence[GeoPoint],
    look_ahead: int = DEFAULT_LOOK_AHEAD,
) -> RouteProgress:
    """Split *route* at the agent's *current* position.

    Args:
        current: Live agent position.
        route: Ordered route vertices, start → destination.  Not modified.
        look_ahead: Vertices to move the split forward of the nearest vertex.

    Returns:
        :class:`RouteProgress`.  An empty route yields :data:`EMPTY_PROGRESS`;
        a malformed *current* yields zero progress with the whole route remaining.
    """
    if not route:
        return EMPTY_PROGRESS
    if not current.is_valid():
        return RouteProgress((), tuple(route), 0, 0, 0.0)

    matched, _ = find_nearest_vertex(current, route)
    effective = min(matched + max(look_ahead, 0), len(route) - 1)

    travelled = (*route[:effective], current)
    remaining = (current, *route[effective:])
    progress = effective / len(route) * 100.0

    return RouteProgress(
        travelled=travelled,
        remaining=remaining,
        nearest_index=effective,
        matched_index=matched,
        progress_percent=progress,
    )


class RouteProgressTracker:
    """Holds one trip's route and the most recent :class:`RouteProgress`.

    The route is copied into a tuple on load, so later changes to the caller's
    list cannot tear a computation in progress.

    Usage:
        tracker = RouteProgressTracker(route)

        # On every accepted fix:
        progress = tracker.update(fix.point)
    """

    def __init__(
        self,
        route: Sequence[GeoPoint] = (),
        look_ahead: int = DEFAULT_LOOK_AHEAD,
    ) -> None:
        if look_ahead < 0:
            raise ValueError("look_ahead must be >= 0")
        self.look_ahead = look_ahead
        self._route: tuple[GeoPoint, ...] = ()
        self._last: RouteProgress = EMPTY_PROGRESS
        self.load_route(route)

    def load_route(self, route: Sequence[GeoPoint]) -> None:
        """Replace the route and reset progress."""
        self._route = tuple(p for p in route if p.is_valid())
        self._last = EMPTY_PROGRESS

    @property
    def route(self) -> tuple[GeoPoint, ...]:
        return self._route

    @property
    def has_route(self) -> bool:
        return bool(self._route)

    @property
    def last(self) -> RouteProgress:
        return self._last

    def update(self, current: GeoPoint) -> RouteProgress:
        """Recompute progress for *current*; malformed points keep the last result."""
        if not current.is_valid():
            return self._last
        self._last = compute_progress(current, self._route, self.look_ahead)
        return self._last
