"""Animation duration model — derives transition time from physical speed."""

from __future__ import annotations

import math

MIN_DURATION_MS = 300
MAX_DURATION_MS = 2000
DEFAULT_SPEED_MPS = 8.33  # ~30 km/h


def animation_duration(
    distance_m: float,
    speed_mps: float | None = None,
    *,
    min_ms: int = MIN_DURATION_MS,
    max_ms: int = MAX_DURATION_MS,
    default_speed_mps: float = DEFAULT_SPEED_MPS,
) -> int:
    """Return the time in ms to animate a hop of *distance_m* metres.

    Uses the sampled *speed_mps* when it is a positive number, otherwise
    *default_speed_mps*.  The result is clamped to ``[min_ms, max_ms]`` so
    small moves stay visible and coarse updates never crawl.
    """
    if speed_mps is not None and math.isfinite(speed_mps) and speed_mps > 0:
        speed = speed_mps
    else:
        speed = default_speed_mps

    if not math.isfinite(distance_m) or distance_m <= 0:
        return min_ms

    millis = distance_m / speed * 1000.0
    return int(round(max(min_ms, min(millis, max_ms))))
