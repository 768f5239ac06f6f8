"""Tunable constants for the tracking engine.

One authoritative set of thresholds.  Pass a :class:`TrackingConfig` to every
component that needs settings; use :meth:`TrackingConfig.from_env` at entry
points so deployments can override values through ``RIDE_TRACKING_*``
environment variables (or a ``.env`` file loaded by ``python-dotenv``).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields

ZOOM_LEVELS = ("close", "medium", "far")

ENV_PREFIX = "RIDE_TRACKING_"


@dataclass
class TrackingConfig:
    # Jitter filter
    jitter_threshold_m: float = 5.0        # fixes closer than this are GPS noise

    # Duration model
    min_duration_ms: int = 300
    max_duration_ms: int = 2000
    default_speed_mps: float = 8.33        # ~30 km/h when the fix has no speed

    # Heading
    prefer_sensor_heading: bool = False    # use the device heading when it is > 0

    # Route progress
    look_ahead: int = 5                    # vertices to bias the split forward

    # Rate limiting (0 disables)
    animation_throttle_ms: int = 0
    progress_throttle_ms: int = 0
    settle_debounce_ms: int = 3000

    # Camera
    follow_zoom: str = "close"

    def __post_init__(self) -> None:
        if self.jitter_threshold_m < 0:
            raise ValueError("jitter_threshold_m must be >= 0")
        if self.min_duration_ms < 0:
            raise ValueError("min_duration_ms must be >= 0")
        if self.min_duration_ms > self.max_duration_ms:
            raise ValueError("min_duration_ms must be <= max_duration_ms")
        if self.default_speed_mps <= 0:
            raise ValueError("default_speed_mps must be > 0")
        if self.look_ahead < 0:
            raise ValueError("look_ahead must be >= 0")
        for name in ("animation_throttle_ms", "progress_throttle_ms", "settle_debounce_ms"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")
        if self.follow_zoom not in ZOOM_LEVELS:
            raise ValueError(f"follow_zoom must be one of {ZOOM_LEVELS}")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> TrackingConfig:
        """Build a config from ``RIDE_TRACKING_<FIELD>`` variables.

        Unset variables keep their defaults.  Values are converted to the
        type of the field's default; booleans accept ``1/true/yes/on``.

        Raises:
            ValueError: If a value cannot be converted or fails validation.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            default = f.default
            if isinstance(default, bool):
                overrides[f.name] = raw.strip().lower() in {"1", "true", "yes", "on"}
            elif isinstance(default, int):
                overrides[f.name] = int(raw)
            elif isinstance(default, float):
                overrides[f.name] = float(raw)
            else:
                overrides[f.name] = raw.strip()
        return cls(**overrides)
