"""Renderer output — per-frame snapshot and its display-ready form."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ride_tracking.animation.driver import AgentState
from ride_tracking.geo.geodesy import normalize_bearing
from ride_tracking.geo.models import GeoPoint
from ride_tracking.render.camera import CameraPosition
from ride_tracking.route.progress import EMPTY_PROGRESS, RouteProgress


@dataclass(frozen=True)
class MapFrame:
    """Everything the map widget needs to draw one frame.

    Parameters
    ----------
    agent:
        Marker state, or None before the first fix.
    progress:
        Latest route split (the empty result when no route is being followed).
    camera:
        Where the camera should look, or None to leave it where the user put it.
    phase:
        Ride phase name (``"idle"``, ``"accepted"``, ...).
    """

    agent: AgentState | None
    progress: RouteProgress = EMPTY_PROGRESS
    camera: CameraPosition | None = None
    phase: str = "idle"


class MapFrameRenderer:
    """Formats :class:`MapFrame` for the map widget.

    Pure data transformations with no side effects.

    Args:
        precision: Decimal places kept for coordinates (7 ≈ 1 cm).
    """

    def __init__(self, precision: int = 7) -> None:
        self.precision = precision

    def format_progress(self, percent: float) -> str:
        """Format a progress value for a label.

        Examples
        --------
        >>> MapFrameRenderer().format_progress(45.0)
        '45.0%'
        """
        return f"{percent:.1f}%"

    def coordinates(self, points: Sequence[GeoPoint]) -> list[list[float]]:
        """Polyline as ``[[lat, lon], ...]``."""
        p = self.precision
        return [[round(pt.latitude, p), round(pt.longitude, p)] for pt in points]

    def render(self, frame: MapFrame) -> dict:
        """Return a JSON-ready dict from a :class:`MapFrame`.

        Returns
        -------
        dict with keys:
            ``marker``        – ``{latitude, longitude, rotation}`` or None
            ``travelled``     – polyline already driven
            ``remaining``     – polyline still ahead
            ``progress_pct``  – float rounded to 1 dp
            ``progress_label``– e.g. ``'45.0%'``
            ``camera``        – camera dict or None
            ``phase``         – ride phase name
        """
        marker = None
        if frame.agent is not None:
            marker = {
                "latitude": round(frame.agent.position.latitude, self.precision),
                "longitude": round(frame.agent.position.longitude, self.precision),
                "rotation": normalize_bearing(round(frame.agent.bearing, 1)),
            }
        return {
            "marker": marker,
            "travelled": self.coordinates(frame.progress.travelled),
            "remaining": self.coordinates(frame.progress.remaining),
            "progress_pct": round(frame.progress.progress_percent, 1),
            "progress_label": self.format_progress(frame.progress.progress_percent),
            "camera": frame.camera.to_dict() if frame.camera is not None else None,
            "phase": frame.phase,
        }
