"""Marker animation driver — turns accepted fixes into timed transitions.

The host loop calls :meth:`MarkerAnimator.push_fix` for every raw fix and
:meth:`MarkerAnimator.tick` once per rendered frame.  At most one transition
is in flight; a newer accepted fix replaces it (last-fix-wins), starting from
whatever the marker is showing at that instant.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ride_tracking.animation.duration import animation_duration
from ride_tracking.animation.jitter import is_significant
from ride_tracking.config import TrackingConfig
from ride_tracking.geo.geodesy import bearing, distance_meters, normalize_bearing
from ride_tracking.geo.interpolation import (
    ease_in_out_cubic,
    ease_out_cubic,
    lerp_bearing,
    lerp_point,
)
from ride_tracking.geo.models import GeoPoint, LocationFix

_logger = logging.getLogger(__name__)


class AnimatorState(Enum):
    IDLE = "idle"
    ANIMATING = "animating"


@dataclass(frozen=True)
class AgentState:
    """Rendered marker: where it is drawn and which way it points."""

    position: GeoPoint
    bearing: float = 0.0
    """Heading in degrees, always in ``[0, 360)``."""


@dataclass(frozen=True)
class AnimationTransition:
    """One in-flight move of the marker from *start* to *target*.

    Position follows an ease-out curve and heading an ease-in-out curve over
    the same duration, so both finish together.
    """

    start: AgentState
    target: AgentState
    duration_ms: int
    started_at: float
    """Clock reading (seconds) when the transition began."""
    generation: int

    def fraction(self, now: float) -> float:
        """Elapsed fraction of the transition in ``[0, 1]``."""
        if self.duration_ms <= 0:
            return 1.0
        elapsed_ms = (now - self.started_at) * 1000.0
        return max(0.0, min(1.0, elapsed_ms / self.duration_ms))

    def is_complete(self, now: float) -> bool:
        return self.fraction(now) >= 1.0

    def state_at(self, now: float) -> AgentState:
        f = self.fraction(now)
        if f >= 1.0:
            return self.target
        return AgentState(
            position=lerp_point(self.start.position, self.target.position, ease_out_cubic(f)),
            bearing=lerp_bearing(self.start.bearing, self.target.bearing, ease_in_out_cubic(f)),
        )


class MarkerAnimator:
    """Owns the live :class:`AgentState` of one agent.

    Args:
        config: Thresholds and duration bounds.
        initial: Starting position; if omitted the first valid fix snaps the
            marker into place without animating.
        initial_bearing: Starting heading in degrees.
        clock: Monotonic clock in seconds.  Injected for testability.
    """

    def __init__(
        self,
        config: TrackingConfig | None = None,
        initial: GeoPoint | None = None,
        initial_bearing: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or TrackingConfig()
        self._clock = clock
        self._state: AgentState | None = None
        self._anchor: GeoPoint | None = None
        self._transition: AnimationTransition | None = None
        self._generation = 0
        self._callbacks: list[Callable[[AgentState], None]] = []
        if initial is not None and initial.is_valid():
            self._state = AgentState(initial, normalize_bearing(initial_bearing))
            self._anchor = initial

    # ------------------------------------------------------------------
    # Read-only properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> AgentState | None:
        """Marker state as of the last :meth:`tick` (None before any fix)."""
        return self._state

    @property
    def anchor(self) -> GeoPoint | None:
        """Last accepted fix position; new fixes are jitter-checked against it."""
        return self._anchor

    @property
    def transition(self) -> AnimationTransition | None:
        return self._transition

    @property
    def status(self) -> AnimatorState:
        return AnimatorState.ANIMATING if self._transition is not None else AnimatorState.IDLE

    @property
    def is_animating(self) -> bool:
        return self._transition is not None

    @property
    def generation(self) -> int:
        """Number of transitions started so far."""
        return self._generation

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def register_callback(self, callback: Callable[[AgentState], None]) -> None:
        """Register *callback* to receive the final state of each completed transition.

        Superseded transitions never complete and do not fire.
        """
        self._callbacks.append(callback)

    def push_fix(self, fix: LocationFix, now: float | None = None) -> bool:
        """Offer a raw fix to the animator.

        Returns:
            True if the fix was accepted (snapped or a transition started),
            False if it was malformed or below the jitter threshold.
        """
        now = self._clock() if now is None else now

        if not fix.is_valid():
            _logger.debug("Dropping malformed fix (%r, %r)", fix.latitude, fix.longitude)
            return False

        target = fix.point
        sensor_heading = self._sensor_heading(fix)

        if self._state is None or self._anchor is None:
            self._state = AgentState(target, sensor_heading or 0.0)
            self._anchor = target
            return True

        if not is_significant(self._anchor, target, self.config.jitter_threshold_m):
            return False

        current = self._state if self._transition is None else self._transition.state_at(now)
        heading = sensor_heading if sensor_heading is not None else bearing(self._anchor, target)
        duration = animation_duration(
            distance_meters(current.position, target),
            fix.speed,
            min_ms=self.config.min_duration_ms,
            max_ms=self.config.max_duration_ms,
            default_speed_mps=self.config.default_speed_mps,
        )

        self._generation += 1
        self._state = current
        self._transition = AnimationTransition(
            start=current,
            target=AgentState(target, heading),
            duration_ms=duration,
            started_at=now,
            generation=self._generation,
        )
        self._anchor = target
        _logger.debug(
            "Transition #%d: %.1f° over %d ms", self._generation, heading, duration
        )
        return True

    def tick(self, now: float | None = None) -> AgentState | None:
        """Advance the in-flight transition and return the state to draw."""
        transition = self._transition
        if transition is None:
            return self._state

        now = self._clock() if now is None else now
        self._state = transition.state_at(now)
        if transition.is_complete(now):
            self._transition = None
            for cb in self._callbacks:
                cb(self._state)
        return self._state

    def snap_to(self, position: GeoPoint, bearing_deg: float | None = None) -> None:
        """Place the marker immediately, cancelling any in-flight transition."""
        if not position.is_valid():
            _logger.debug("Ignoring snap to malformed position %r", position)
            return
        if bearing_deg is not None:
            heading = bearing_deg
        elif self._state is not None:
            heading = self._state.bearing
        else:
            heading = 0.0
        self._transition = None
        self._state = AgentState(position, normalize_bearing(heading))
        self._anchor = position

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _sensor_heading(self, fix: LocationFix) -> float | None:
        if not self.config.prefer_sensor_heading or fix.heading is None:
            return None
        # Many devices report 0 when the heading is unknown
        if not fix.heading > 0:
            return None
        return normalize_bearing(fix.heading)
