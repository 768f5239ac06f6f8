"""Jitter filter — gates fixes that do not represent real movement."""

from __future__ import annotations

from ride_tracking.geo.geodesy import distance_meters
from ride_tracking.geo.models import GeoPoint

DEFAULT_JITTER_THRESHOLD_M = 5.0


def is_significant(
    prev: GeoPoint,
    new: GeoPoint,
    threshold_m: float = DEFAULT_JITTER_THRESHOLD_M,
) -> bool:
    """Return True if moving from *prev* to *new* covers at least *threshold_m*.

    Malformed points (NaN, None) are never significant, and neither is a
    zero-length hop, even with a threshold of 0.
    """
    if not (prev.is_valid() and new.is_valid()):
        return False
    distance = distance_meters(prev, new)
    return distance > 0.0 and distance >= threshold_m
