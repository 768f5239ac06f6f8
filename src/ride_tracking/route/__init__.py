"""Route progress tracking and trip distance."""

from ride_tracking.route.odometer import TripOdometer
from ride_tracking.route.progress import (
    EMPTY_PROGRESS,
    RouteProgress,
    RouteProgressTracker,
    compute_progress,
    find_nearest_vertex,
)

__all__ = [
    "EMPTY_PROGRESS",
    "RouteProgress",
    "RouteProgressTracker",
    "TripOdometer",
    "compute_progress",
    "find_nearest_vertex",
]
