"""Geographic value types, spherical geodesy and interpolation.

Public API
----------
GeoPoint          - immutable latitude/longitude pair
LocationFix       - raw position sample (speed, heading, accuracy optional)
bearing           - initial compass bearing between two points
distance_meters   - haversine distance in metres
normalize_bearing - wrap an angle into [0, 360)
lerp_point        - linear coordinate interpolation
lerp_bearing      - shortest-arc heading interpolation
"""

from ride_tracking.geo.geodesy import (
    EARTH_RADIUS_M,
    angular_distance,
    bearing,
    distance_meters,
    normalize_bearing,
)
from ride_tracking.geo.interpolation import (
    densify,
    ease_in_out_cubic,
    ease_out_cubic,
    lerp_bearing,
    lerp_point,
)
from ride_tracking.geo.models import GeoPoint, LocationFix

__all__ = [
    "EARTH_RADIUS_M",
    "GeoPoint",
    "LocationFix",
    "angular_distance",
    "bearing",
    "densify",
    "distance_meters",
    "ease_in_out_cubic",
    "ease_out_cubic",
    "lerp_bearing",
    "lerp_point",
    "normalize_bearing",
]
