"""In-memory registry of tracking sessions served by the web feed."""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable

from ride_tracking.config import TrackingConfig
from ride_tracking.geo.models import GeoPoint, LocationFix
from ride_tracking.render.renderer import MapFrameRenderer
from ride_tracking.session.engine import RidePhase, TrackingSession
from ride_tracking.web.schemas import CreateSessionRequest, FixRequest

_logger = logging.getLogger(__name__)


class UnknownSessionError(KeyError):
    """Raised when a session id is not registered."""


def parse_phase(name: str) -> RidePhase:
    """Map a phase name to :class:`RidePhase`.

    Raises:
        ValueError: If *name* is not a known phase.
    """
    try:
        return RidePhase(name.strip().lower())
    except ValueError:
        valid = ", ".join(p.value for p in RidePhase)
        raise ValueError(f"Unknown phase {name!r} (expected one of: {valid})") from None


class SessionRegistry:
    """Process-local store of :class:`TrackingSession` objects keyed by id.

    Args:
        config: Settings applied to every new session.
        clock: Clock shared by all sessions.
    """

    def __init__(
        self,
        config: TrackingConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or TrackingConfig()
        self._clock = clock
        self._sessions: dict[str, TrackingSession] = {}
        self.renderer = MapFrameRenderer()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, req: CreateSessionRequest) -> tuple[str, TrackingSession]:
        phase = parse_phase(req.phase)
        route = [GeoPoint(p.latitude, p.longitude) for p in req.route]
        session = TrackingSession(route, self.config, clock=self._clock)
        session.set_phase(phase)

        session_id = uuid.uuid4().hex
        self._sessions[session_id] = session
        _logger.info("Session %s created (%d route points)", session_id, len(session.tracker.route))
        return session_id, session

    def get(self, session_id: str) -> TrackingSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise UnknownSessionError(session_id) from None

    def delete(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise UnknownSessionError(session_id)
        _logger.info("Session %s closed", session_id)

    def clear(self) -> None:
        self._sessions.clear()

    def push_fix(self, session_id: str, req: FixRequest) -> bool:
        session = self.get(session_id)
        fix = LocationFix(
            latitude=req.latitude,
            longitude=req.longitude,
            speed=req.speed,
            heading=req.heading,
            accuracy=req.accuracy,
            timestamp=req.timestamp,
        )
        return session.push_fix(fix)

    def set_phase(self, session_id: str, name: str) -> RidePhase:
        session = self.get(session_id)
        phase = parse_phase(name)
        session.set_phase(phase)
        return phase

    def frame(self, session_id: str) -> dict:
        """Render the session's current frame."""
        session = self.get(session_id)
        return self.renderer.render(session.tick())
