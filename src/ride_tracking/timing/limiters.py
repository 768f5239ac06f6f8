"""Rate limiters bounding how often fix handlers run.

Both limiters are cooperative: they never start threads or timers.
:class:`Throttle` decides synchronously on each call; :class:`Debounce`
records the latest call and fires from :meth:`Debounce.poll`, which the host
loop invokes once per tick.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

# Absorbs float error when a clock delta lands exactly on the interval
_EPSILON_MS = 1e-6


class Throttle:
    """Run *fn* at most once per *interval_ms*.

    The first call passes immediately and opens a window; calls inside the
    window are dropped (not queued).  The first call after the window closes
    passes and opens a new one.

    Args:
        fn: Wrapped callable.
        interval_ms: Window length in milliseconds; 0 lets every call through.
        clock: Monotonic clock in seconds.
    """

    def __init__(
        self,
        fn: Callable[..., Any],
        interval_ms: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval_ms < 0:
            raise ValueError("interval_ms must be >= 0")
        self._fn = fn
        self.interval_ms = interval_ms
        self._clock = clock
        self._window_start: float | None = None
        self.last_result: Any = None
        self.calls = 0
        self.dropped = 0

    def __call__(self, *args: Any, **kwargs: Any) -> bool:
        """Invoke *fn* unless throttled.  Returns True if it ran."""
        now = self._clock()
        if self._window_start is not None:
            elapsed_ms = (now - self._window_start) * 1000.0
            if elapsed_ms < self.interval_ms - _EPSILON_MS:
                self.dropped += 1
                return False
        self._window_start = now
        self.calls += 1
        self.last_result = self._fn(*args, **kwargs)
        return True

    def reset(self) -> None:
        """Forget the open window so the next call passes."""
        self._window_start = None


class Debounce:
    """Run *fn* once a burst of calls has been quiet for *wait_ms*.

    Each call replaces the pending arguments and restarts the wait, so only
    the final call of a burst is delivered.

    Args:
        fn: Wrapped callable.
        wait_ms: Quiet period in milliseconds.
        clock: Monotonic clock in seconds.
    """

    def __init__(
        self,
        fn: Callable[..., Any],
        wait_ms: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if wait_ms < 0:
            raise ValueError("wait_ms must be >= 0")
        self._fn = fn
        self.wait_ms = wait_ms
        self._clock = clock
        self._pending: tuple[tuple[Any, ...], dict[str, Any]] | None = None
        self._last_call: float = 0.0
        self.calls = 0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self._pending = (args, kwargs)
        self._last_call = self._clock()

    def poll(self, now: float | None = None) -> bool:
        """Fire the pending call if the quiet period has elapsed.  Returns True if it ran."""
        if self._pending is None:
            return False
        now = self._clock() if now is None else now
        if (now - self._last_call) * 1000.0 < self.wait_ms - _EPSILON_MS:
            return False
        return self._fire(self._pending)

    def flush(self) -> bool:
        """Fire the pending call immediately, if any."""
        if self._pending is None:
            return False
        return self._fire(self._pending)

    def cancel(self) -> None:
        """Drop the pending call without running it."""
        self._pending = None

    def _fire(self, pending: tuple[tuple[Any, ...], dict[str, Any]]) -> bool:
        args, kwargs = pending
        self._pending = None
        self.calls += 1
        self._fn(*args, **kwargs)
        return True


def throttle(
    fn: Callable[..., Any],
    interval_ms: float,
    clock: Callable[[], float] = time.monotonic,
) -> Throttle:
    """Wrap *fn* in a :class:`Throttle`."""
    return Throttle(fn, interval_ms, clock)


def debounce(
    fn: Callable[..., Any],
    wait_ms: float,
    clock: Callable[[], float] = time.monotonic,
) -> Debounce:
    """Wrap *fn* in a :class:`Debounce`; drive it with :meth:`Debounce.poll`."""
    return Debounce(fn, wait_ms, clock)
