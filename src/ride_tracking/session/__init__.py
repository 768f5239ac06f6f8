"""Per-ride tracking session."""

from ride_tracking.session.engine import RidePhase, TrackingSession

__all__ = ["RidePhase", "TrackingSession"]
