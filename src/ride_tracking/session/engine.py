"""TrackingSession — wires the fix stream to animation, progress and camera for one ride."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from enum import Enum

from ride_tracking.animation.driver import AgentState, MarkerAnimator
from ride_tracking.animation.jitter import is_significant
from ride_tracking.config import TrackingConfig
from ride_tracking.geo.models import GeoPoint, LocationFix
from ride_tracking.render.camera import follow_camera
from ride_tracking.render.renderer import MapFrame
from ride_tracking.route.odometer import TripOdometer
from ride_tracking.route.progress import RouteProgress, RouteProgressTracker
from ride_tracking.timing.limiters import Debounce, Throttle

_logger = logging.getLogger(__name__)


class RidePhase(Enum):
    IDLE = "idle"            # online, no ride assigned
    ACCEPTED = "accepted"    # heading to pickup
    STARTED = "started"      # passenger on board, following the trip route
    COMPLETED = "completed"


_CAMERA_FOLLOW_PHASES = frozenset({RidePhase.ACCEPTED, RidePhase.STARTED})


class TrackingSession:
    """Integrates the marker animator, route tracker, odometer and rate limiters.

    Parameters
    ----------
    route:
        The trip polyline, start → destination.  Copied; never mutated.
    config:
        Thresholds, rate limits and camera settings.
    clock:
        Monotonic clock in seconds shared by every time-based component.

    Usage::

        session = TrackingSession(route, config)
        session.start_ride()

        # On every raw fix:
        session.push_fix(fix)

        # On every frame:
        frame = session.tick()
    """

    def __init__(
        self,
        route: Sequence[GeoPoint] = (),
        config: TrackingConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or TrackingConfig()
        self._clock = clock
        self._phase = RidePhase.IDLE

        self.animator = MarkerAnimator(self.config, clock=clock)
        self.tracker = RouteProgressTracker(route, look_ahead=self.config.look_ahead)
        self.odometer = TripOdometer(min_step_m=self.config.jitter_threshold_m)

        self._animate = Throttle(self.animator.push_fix, self.config.animation_throttle_ms, clock)
        self._refresh_progress = Throttle(
            self._recompute_progress, self.config.progress_throttle_ms, clock
        )
        self._settle = Debounce(self._emit_settled, self.config.settle_debounce_ms, clock)

        self._progress_callbacks: list[Callable[[RouteProgress], None]] = []
        self._settled_callbacks: list[Callable[[LocationFix], None]] = []
        self._last_fix: LocationFix | None = None
        self.fixes_received = 0
        self.fixes_rejected = 0

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def phase(self) -> RidePhase:
        return self._phase

    @property
    def last_fix(self) -> LocationFix | None:
        return self._last_fix

    @property
    def progress(self) -> RouteProgress:
        return self.tracker.last

    @property
    def agent(self) -> AgentState | None:
        return self.animator.state

    # ------------------------------------------------------------------
    # Ride lifecycle
    # ------------------------------------------------------------------

    def load_route(self, route: Sequence[GeoPoint]) -> None:
        """Replace the trip route; progress restarts from zero."""
        self.tracker.load_route(route)
        _logger.debug("Route loaded (%d vertices)", len(self.tracker.route))

    def set_phase(self, phase: RidePhase) -> None:
        if phase is self._phase:
            return
        previous, self._phase = self._phase, phase
        if phase is RidePhase.STARTED:
            self.odometer.mark()
            if self._last_fix is not None and self.tracker.has_route:
                self._recompute_progress(self._last_fix.point)
        elif phase is RidePhase.COMPLETED:
            self._settle.flush()
        _logger.info("Ride phase %s -> %s", previous.value, phase.value)

    def accept_ride(self) -> None:
        self.set_phase(RidePhase.ACCEPTED)

    def start_ride(self) -> None:
        self.set_phase(RidePhase.STARTED)

    def complete_ride(self) -> None:
        self.set_phase(RidePhase.COMPLETED)

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    def register_progress_callback(self, callback: Callable[[RouteProgress], None]) -> None:
        """Called with every recomputed :class:`RouteProgress`."""
        self._progress_callbacks.append(callback)

    def register_settled_callback(self, callback: Callable[[LocationFix], None]) -> None:
        """Called with the last fix once the stream has been quiet for ``settle_debounce_ms``."""
        self._settled_callbacks.append(callback)

    def register_arrival_callback(self, callback: Callable[[AgentState], None]) -> None:
        """Called when the marker finishes a transition."""
        self.animator.register_callback(callback)

    # ------------------------------------------------------------------
    # Core methods — fix stream in, frames out
    # ------------------------------------------------------------------

    def push_fix(self, fix: LocationFix) -> bool:
        """Feed one raw fix.  Returns True if it moved (or placed) the marker."""
        self.fixes_received += 1
        if not fix.is_valid():
            self.fixes_rejected += 1
            _logger.debug("Session dropped malformed fix (%r, %r)", fix.latitude, fix.longitude)
            return False

        self._last_fix = fix
        self.odometer.update(fix.point)
        self._settle(fix)

        # Jitter must not open the animation throttle window
        anchor = self.animator.anchor
        if anchor is not None and not is_significant(
            anchor, fix.point, self.config.jitter_threshold_m
        ):
            return False

        accepted = self._animate(fix) and bool(self._animate.last_result)
        if accepted and self._phase is RidePhase.STARTED and self.tracker.has_route:
            self._refresh_progress(fix.point)
        return accepted

    def tick(self, now: float | None = None) -> MapFrame:
        """Advance animation, deliver any due debounced call, and return the frame to draw."""
        now = self._clock() if now is None else now
        agent = self.animator.tick(now)
        self._settle.poll(now)

        camera = None
        if agent is not None and self._phase in _CAMERA_FOLLOW_PHASES:
            camera = follow_camera(agent.position, agent.bearing, self.config.follow_zoom)

        return MapFrame(
            agent=agent,
            progress=self.tracker.last,
            camera=camera,
            phase=self._phase.value,
        )

    def summary(self) -> dict:
        """Counters and distances for diagnostics."""
        return {
            "phase": self._phase.value,
            "fixes_received": self.fixes_received,
            "fixes_rejected": self.fixes_rejected,
            "transitions": self.animator.generation,
            "total_km": round(self.odometer.total_km, 3),
            "ride_km": round(self.odometer.leg_m / 1000.0, 3),
            "progress_pct": round(self.tracker.last.progress_percent, 1),
        }

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _recompute_progress(self, point: GeoPoint) -> RouteProgress:
        progress = self.tracker.update(point)
        for cb in self._progress_callbacks:
            cb(progress)
        return progress

    def _emit_settled(self, fix: LocationFix) -> None:
        for cb in self._settled_callbacks:
            cb(fix)
