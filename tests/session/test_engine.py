"""Tests for TrackingSession — fix stream in, map frames out."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from ride_tracking.config import TrackingConfig
from ride_tracking.geo.models import GeoPoint, LocationFix
from ride_tracking.render.renderer import MapFrame
from ride_tracking.route.progress import EMPTY_PROGRESS
from ride_tracking.session.engine import RidePhase, TrackingSession

# ---------------------------------------------------------------------------
# Test-data helpers
# ---------------------------------------------------------------------------

ROUTE = [GeoPoint(12.9 + i * 0.0001, 77.6) for i in range(50)]   # ~11 m spacing


class FakeClock:
    def __init__(self, now: float = 10.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def fix(i: int, **kwargs) -> LocationFix:
    """Fix exactly on route vertex *i*."""
    return LocationFix(ROUTE[i].latitude, ROUTE[i].longitude, **kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session(clock) -> TrackingSession:
    return TrackingSession(ROUTE, TrackingConfig(), clock=clock)


# ---------------------------------------------------------------------------
# Phases and camera
# ---------------------------------------------------------------------------

class TestPhases:
    def test_initial_phase_idle(self, session):
        assert session.phase is RidePhase.IDLE

    def test_idle_frame_has_no_camera_or_progress(self, session):
        session.push_fix(fix(0))
        frame = session.tick()
        assert isinstance(frame, MapFrame)
        assert frame.agent.position == ROUTE[0]
        assert frame.camera is None
        assert frame.progress is EMPTY_PROGRESS
        assert frame.phase == "idle"

    def test_camera_follows_while_accepted(self, session):
        session.accept_ride()
        session.push_fix(fix(0))
        frame = session.tick()
        assert frame.camera is not None
        assert frame.camera.center == ROUTE[0]
        assert frame.camera.zoom == 17

    def test_camera_released_after_completion(self, session):
        session.start_ride()
        session.push_fix(fix(0))
        session.complete_ride()
        assert session.tick().camera is None

    def test_progress_not_tracked_before_ride_starts(self, session):
        session.accept_ride()
        session.push_fix(fix(0))
        session.push_fix(fix(10))
        assert session.progress is EMPTY_PROGRESS

    def test_start_ride_computes_progress_from_last_fix(self, session):
        session.push_fix(fix(20))
        session.start_ride()
        assert session.progress.matched_index == 20
        assert session.progress.nearest_index == 25

    def test_phase_change_logged(self, session, caplog):
        with caplog.at_level(logging.INFO, logger="ride_tracking.session.engine"):
            session.start_ride()
        assert any("idle -> started" in r.message for r in caplog.records)


# ---------------------------------------------------------------------------
# Fix handling
# ---------------------------------------------------------------------------

class TestPushFix:
    def test_progress_callback_on_significant_fix(self, session):
        seen = MagicMock()
        session.register_progress_callback(seen)
        session.start_ride()

        session.push_fix(fix(0))
        session.push_fix(fix(10))

        assert seen.call_count == 2
        latest = seen.call_args.args[0]
        assert latest.nearest_index == 15
        assert latest.progress_percent == pytest.approx(30.0)

    def test_jitter_fix_does_not_recompute_progress(self, session):
        seen = MagicMock()
        session.register_progress_callback(seen)
        session.start_ride()
        session.push_fix(fix(10))
        jitter = LocationFix(ROUTE[10].latitude + 0.00001, ROUTE[10].longitude)  # ~1 m
        assert session.push_fix(jitter) is False
        assert seen.call_count == 1

    def test_malformed_fix_counted_not_raised(self, session):
        session.push_fix(fix(0))
        assert session.push_fix(LocationFix(float("nan"), float("nan"))) is False
        assert session.fixes_rejected == 1
        assert session.fixes_received == 2
        assert session.agent.position == ROUTE[0]

    def test_animation_throttle_drops_fast_fixes(self, clock):
        cfg = TrackingConfig(animation_throttle_ms=1000)
        s = TrackingSession(ROUTE, cfg, clock=clock)
        assert s.push_fix(fix(0)) is True
        clock.now += 0.2
        assert s.push_fix(fix(5)) is False
        clock.now += 1.0
        assert s.push_fix(fix(10)) is True
        assert s.animator.generation == 1

    def test_jitter_does_not_use_up_animation_window(self, clock):
        cfg = TrackingConfig(animation_throttle_ms=1000)
        s = TrackingSession(ROUTE, cfg, clock=clock)
        assert s.push_fix(fix(0)) is True
        clock.now += 1.5
        jitter = LocationFix(ROUTE[0].latitude + 0.00001, ROUTE[0].longitude)  # ~1 m
        assert s.push_fix(jitter) is False
        clock.now += 0.1
        assert s.push_fix(fix(10)) is True
        assert s.animator.generation == 1
        assert s.animator.transition.target.position == ROUTE[10]

    def test_progress_throttle(self, clock):
        cfg = TrackingConfig(progress_throttle_ms=1000)
        s = TrackingSession(ROUTE, cfg, clock=clock)
        seen = MagicMock()
        s.register_progress_callback(seen)
        s.start_ride()
        s.push_fix(fix(0))
        clock.now += 0.3
        s.push_fix(fix(5))
        clock.now += 1.0
        s.push_fix(fix(10))
        assert seen.call_count == 2

    def test_odometer_tracks_ride_leg(self, session):
        session.push_fix(fix(0))
        session.push_fix(fix(10))
        session.start_ride()
        session.push_fix(fix(20))
        summary = session.summary()
        assert summary["total_km"] == pytest.approx(0.222, abs=0.002)
        assert summary["ride_km"] == pytest.approx(0.111, abs=0.002)
        assert summary["phase"] == "started"

    def test_load_route_resets_progress(self, session):
        session.start_ride()
        session.push_fix(fix(10))
        session.load_route(ROUTE[:5])
        assert session.progress is EMPTY_PROGRESS
        assert len(session.tracker.route) == 5


# ---------------------------------------------------------------------------
# Ticking, arrival and settle
# ---------------------------------------------------------------------------

class TestTick:
    def test_marker_arrives_and_fires_callback(self, session, clock):
        arrived = MagicMock()
        session.register_arrival_callback(arrived)
        session.push_fix(fix(0))
        session.push_fix(fix(10, speed=11.0))
        clock.now += 2.0
        frame = session.tick()
        assert frame.agent.position == ROUTE[10]
        arrived.assert_called_once()

    def test_settled_callback_after_quiet_period(self, session, clock):
        settled = MagicMock()
        session.register_settled_callback(settled)
        session.push_fix(fix(0))
        last = fix(10)
        session.push_fix(last)

        clock.now += 2.9
        session.tick()
        settled.assert_not_called()

        clock.now += 0.1
        session.tick()
        settled.assert_called_once_with(last)

    def test_complete_ride_flushes_settle(self, session):
        settled = MagicMock()
        session.register_settled_callback(settled)
        session.start_ride()
        session.push_fix(fix(3))
        session.complete_ride()
        settled.assert_called_once_with(fix(3))

    def test_tick_before_any_fix(self, session):
        frame = session.tick()
        assert frame.agent is None
        assert frame.camera is None
