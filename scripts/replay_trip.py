"""Replay a recorded fix file through a TrackingSession on a simulated clock.

Usage:
    uv run python scripts/replay_trip.py --fixes trip.json
    uv run python scripts/replay_trip.py --fixes trip.json --route route.json --fps 30
    uv run python scripts/replay_trip.py --fixes trip.json --verbose

The fix file is a JSON list of ``{latitude, longitude, speed?, heading?, timestamp?}``
objects, or an object with ``"fixes"`` (and optionally ``"route"``) keys.
Fixes without a timestamp are spaced one second apart.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from ride_tracking.config import TrackingConfig  # noqa: E402
from ride_tracking.geo.models import GeoPoint, LocationFix  # noqa: E402
from ride_tracking.render.renderer import MapFrameRenderer  # noqa: E402
from ride_tracking.session.engine import TrackingSession  # noqa: E402


class SimulatedClock:
    """Manually advanced clock in seconds."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


def _load(path: Path) -> tuple[list[LocationFix], list[GeoPoint]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, list):
        raw_fixes, raw_route = data, []
    else:
        raw_fixes, raw_route = data.get("fixes", []), data.get("route", [])
    fixes = [LocationFix.from_dict(d) for d in raw_fixes]
    route = [GeoPoint.from_dict(d) for d in raw_route]
    return fixes, route


def main() -> None:
    ap = argparse.ArgumentParser(description="Replay GPS fixes through the tracking engine")
    ap.add_argument("--fixes", required=True, type=Path, help="JSON fix file")
    ap.add_argument("--route", type=Path, default=None, help="JSON route file (list of points)")
    ap.add_argument("--fps", type=float, default=30.0, help="Simulated frame rate")
    ap.add_argument("--verbose", action="store_true", help="Log every transition")
    args = ap.parse_args()
    if not args.fps > 0:
        ap.error("--fps must be > 0")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        fixes, route = _load(args.fixes)
        if args.route is not None:
            raw_route = json.loads(args.route.read_text(encoding="utf-8"))
            route = [GeoPoint.from_dict(d) for d in raw_route]
        config = TrackingConfig.from_env()
    except (OSError, ValueError, KeyError, TypeError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    if not fixes:
        print("No fixes to replay.")
        return

    clock = SimulatedClock()
    session = TrackingSession(route, config, clock=clock)
    session.register_progress_callback(
        lambda p: print(f"  progress {p.progress_percent:5.1f}%  (vertex {p.nearest_index})")
    )
    session.start_ride()
    renderer = MapFrameRenderer()
    frame_dt = 1.0 / args.fps
    frames = 0

    t0 = fixes[0].timestamp or 0.0
    for i, fix in enumerate(fixes):
        at = (fix.timestamp - t0) if fix.timestamp is not None else float(i)
        # Render frames up to this fix's arrival
        while clock.now + frame_dt <= at:
            clock.now += frame_dt
            session.tick()
            frames += 1
        clock.now = max(clock.now, at)
        session.push_fix(fix)

    # Let the last transition finish
    end = clock.now + config.max_duration_ms / 1000.0
    while clock.now < end:
        clock.now += frame_dt
        session.tick()
        frames += 1

    final = renderer.render(session.tick())
    print()
    print(f"Frames rendered: {frames}")
    for key, value in session.summary().items():
        print(f"  {key:15s} {value}")
    print(f"  marker          {final['marker']}")


if __name__ == "__main__":
    main()
