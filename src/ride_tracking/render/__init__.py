"""Camera placement and renderer-ready frame formatting."""

from ride_tracking.render.camera import (
    Bounds,
    CameraPosition,
    CameraRegion,
    camera_for_two_points,
    camera_region,
    follow_camera,
    route_bounds,
)
from ride_tracking.render.renderer import MapFrame, MapFrameRenderer

__all__ = [
    "Bounds",
    "CameraPosition",
    "CameraRegion",
    "MapFrame",
    "MapFrameRenderer",
    "camera_for_two_points",
    "camera_region",
    "follow_camera",
    "route_bounds",
]
