"""Marker animation: jitter gate, duration model and the animation driver."""

from ride_tracking.animation.driver import (
    AgentState,
    AnimationTransition,
    AnimatorState,
    MarkerAnimator,
)
from ride_tracking.animation.duration import animation_duration
from ride_tracking.animation.jitter import is_significant

__all__ = [
    "AgentState",
    "AnimationTransition",
    "AnimatorState",
    "MarkerAnimator",
    "animation_duration",
    "is_significant",
]
