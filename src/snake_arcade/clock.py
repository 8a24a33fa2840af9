"""Tick scheduling and the speed-ramp policy."""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol


TickCallback = Callable[[], None]


class Scheduler(Protocol):
    """Capability to run a callback repeatedly at a fixed interval."""

    def schedule(self, interval_ms: int, callback: TickCallback) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


class _AsyncioTimer:
    __slots__ = ("cancelled", "timer")

    def __init__(self) -> None:
        self.cancelled = False
        self.timer: asyncio.TimerHandle | None = None


class AsyncioScheduler:
    """Repeating timers driven by an asyncio event loop.

    Without an explicit loop each timer is armed on the loop running at
    the time :meth:`schedule` is called.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def schedule(self, interval_ms: int, callback: TickCallback) -> _AsyncioTimer:
        loop = self._get_loop()
        delay = interval_ms / 1000.0
        handle = _AsyncioTimer()

        def _fire() -> None:
            if handle.cancelled:
                return
            # Re-arm first so the callback can cancel the next firing.
            handle.timer = loop.call_later(delay, _fire)
            callback()

        handle.timer = loop.call_later(delay, _fire)
        return handle

    def cancel(self, handle: _AsyncioTimer) -> None:
        handle.cancelled = True
        if handle.timer is not None:
            handle.timer.cancel()
            handle.timer = None


@dataclass
class _ManualTimer:
    timer_id: int
    interval_ms: int
    callback: TickCallback
    due_ms: int


class ManualScheduler:
    """Deterministic scheduler advanced by hand.

    Nothing fires until :meth:`advance` is called; timers then fire in due
    order, ties broken by creation order.
    """

    def __init__(self) -> None:
        self.now_ms = 0
        self._timers: dict[int, _ManualTimer] = {}
        self._ids = itertools.count()

    @property
    def pending(self) -> int:
        return len(self._timers)

    def schedule(self, interval_ms: int, callback: TickCallback) -> int:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive.")
        timer_id = next(self._ids)
        self._timers[timer_id] = _ManualTimer(
            timer_id, interval_ms, callback, self.now_ms + interval_ms,
        )
        return timer_id

    def cancel(self, handle: int) -> None:
        self._timers.pop(handle, None)

    def advance(self, ms: int) -> int:
        """Move time forward by *ms*, firing due timers. Returns fire count."""
        target = self.now_ms + ms
        fired = 0
        while True:
            due = [t for t in self._timers.values() if t.due_ms <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due_ms, t.timer_id))
            self.now_ms = timer.due_ms
            timer.due_ms += timer.interval_ms
            fired += 1
            timer.callback()
        self.now_ms = target
        return fired


class GameClock:
    """Fires a tick callback at the current interval.

    Owns at most one scheduled timer. ``min_interval_seen`` holds the
    lowest interval that has been active since the last :meth:`reset`.
    """

    def __init__(self, scheduler: Scheduler, callback: TickCallback) -> None:
        self._scheduler = scheduler
        self._callback = callback
        self._handle: Any = None
        self.interval_ms: int | None = None
        self.min_interval_seen: int | None = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def reset(self) -> None:
        """Stop and forget the interval history."""
        self.stop()
        self.interval_ms = None
        self.min_interval_seen = None

    def start(self, interval_ms: int) -> None:
        """(Re)start ticking every *interval_ms* milliseconds."""
        self.stop()
        self._set(interval_ms)
        self._handle = self._scheduler.schedule(interval_ms, self._callback)

    def stop(self) -> None:
        """Cancel the pending tick. Safe to call when already stopped."""
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None

    def set_interval(self, interval_ms: int) -> None:
        """Change the interval, rescheduling at once if running."""
        if self.running:
            if interval_ms != self.interval_ms:
                self.start(interval_ms)
        else:
            self._set(interval_ms)

    def _set(self, interval_ms: int) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive.")
        self.interval_ms = interval_ms
        if self.min_interval_seen is None or interval_ms < self.min_interval_seen:
            self.min_interval_seen = interval_ms


@dataclass(frozen=True)
class SpeedRamp:
    """Step function shortening the tick interval as the score rises."""

    base_ms: int = 140
    min_ms: int = 50
    step_ms: int = 6
    every: int = 3

    def __post_init__(self) -> None:
        if self.min_ms < 1:
            raise ValueError("min_ms must be at least 1.")
        if self.base_ms < self.min_ms:
            raise ValueError("base_ms must not be below min_ms.")
        if self.step_ms < 0:
            raise ValueError("step_ms must be >= 0.")
        if self.every < 1:
            raise ValueError("every must be at least 1.")

    def next_interval(self, score: int, current_ms: int) -> int:
        """Return the interval to use after *score* was reached."""
        if score > 0 and score % self.every == 0 and current_ms > self.min_ms:
            return max(self.min_ms, current_ms - self.step_ms)
        return current_ms


def speed_label(interval_ms: int) -> str:
    """Human-friendly name for a tick interval."""
    if interval_ms <= 80:
        return "Fast"
    if interval_ms <= 110:
        return "Normal"
    return "Relaxed"
