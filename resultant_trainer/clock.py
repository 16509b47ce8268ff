from __future__ import annotations

import time
from collections.abc import Callable
from typing import Protocol


class Clock(Protocol):
    """Monotonic clock abstraction.

    Core logic depends on this interface rather than calling real time directly.
    """

    def now(self) -> float:
        """Return monotonic seconds."""


class RealClock:
    """Production clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class TimerHandle(Protocol):
    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Periodic callback primitive consumed by the challenge engine."""

    def call_every(self, interval_s: float, callback: Callable[[], None]) -> TimerHandle: ...


class _IntervalTimer:
    def __init__(self, *, interval_s: float, callback: Callable[[], None], next_due_s: float) -> None:
        self._interval_s = interval_s
        self._callback = callback
        self._next_due_s = next_due_s
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False

    def _fire_due(self, now_s: float) -> int:
        fired = 0
        # A callback may cancel its own timer; re-check on every pass.
        while self._active and now_s >= self._next_due_s:
            self._next_due_s += self._interval_s
            self._callback()
            fired += 1
        return fired


class PolledScheduler:
    """Scheduler whose callbacks fire from ``poll()``.

    The UI frame loop (or a test with a fake clock) calls ``poll()``; each live
    timer fires once per whole interval elapsed since it was created, so a late
    poll catches up instead of dropping ticks. Cancelled timers never fire.
    """

    def __init__(self, clock: Clock) -> None:
        self._clock = clock
        self._timers: list[_IntervalTimer] = []

    def call_every(self, interval_s: float, callback: Callable[[], None]) -> TimerHandle:
        if interval_s <= 0:
            raise ValueError("interval_s must be > 0")
        timer = _IntervalTimer(
            interval_s=float(interval_s),
            callback=callback,
            next_due_s=self._clock.now() + float(interval_s),
        )
        self._timers.append(timer)
        return timer

    @property
    def live_count(self) -> int:
        return sum(1 for t in self._timers if t.active)

    def poll(self) -> int:
        """Fire due callbacks. Returns how many callbacks ran."""

        now_s = self._clock.now()
        fired = 0
        for timer in list(self._timers):
            fired += timer._fire_due(now_s)
        self._timers = [t for t in self._timers if t.active]
        return fired
