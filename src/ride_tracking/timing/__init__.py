"""Throttle and debounce helpers for high-frequency fix streams."""

from ride_tracking.timing.limiters import Debounce, Throttle, debounce, throttle

__all__ = ["Debounce", "Throttle", "debounce", "throttle"]
