"""Timer sources for the director.

The director never touches a clock directly: it asks a Scheduler for the
current time and for cancelable one-shot and repeating callbacks. In
production that is the asyncio loop; in tests and the headless preview it is
a virtual clock that only moves when told to.
"""

import asyncio
import heapq
import itertools
import time


class TimerHandle:
    """Cancelable reference to a scheduled callback."""

    def __init__(self):
        self.active = True
        self._loop_handle = None

    def cancel(self):
        self.active = False
        if self._loop_handle is not None:
            self._loop_handle.cancel()
            self._loop_handle = None


class Scheduler:
    """Interface: time in seconds, callbacks run on the owner's thread."""

    def now(self) -> float:
        raise NotImplementedError

    def call_later(self, delay: float, callback) -> TimerHandle:
        raise NotImplementedError

    def call_every(self, interval: float, callback) -> TimerHandle:
        raise NotImplementedError


class LoopScheduler(Scheduler):
    """Schedules on an asyncio event loop (the running one unless given).

    Timers can only be armed while a loop is running; ``now()`` works anywhere
    and shares the loop's monotonic clock.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def now(self) -> float:
        return time.monotonic()

    def call_later(self, delay: float, callback) -> TimerHandle:
        handle = TimerHandle()

        def fire():
            if handle.active:
                handle.active = False
                handle._loop_handle = None
                callback()

        handle._loop_handle = self._get_loop().call_later(max(0.0, delay), fire)
        return handle

    def call_every(self, interval: float, callback) -> TimerHandle:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        loop = self._get_loop()
        handle = TimerHandle()

        def tick():
            if not handle.active:
                return
            # Re-arm first so the callback may cancel its own interval
            handle._loop_handle = loop.call_later(interval, tick)
            callback()

        handle._loop_handle = loop.call_later(interval, tick)
        return handle


class ManualScheduler(Scheduler):
    """Virtual clock. Nothing fires until ``advance()`` moves time forward.

    Due callbacks run in time order, ties in scheduling order. Callbacks that
    schedule new work inside the advanced window see it fire in the same call.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue = []  # (due, seq, handle, callback, interval | None)
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def _push(self, due: float, handle: TimerHandle, callback, interval):
        heapq.heappush(self._queue, (due, next(self._seq), handle, callback, interval))

    def call_later(self, delay: float, callback) -> TimerHandle:
        handle = TimerHandle()
        self._push(self._now + max(0.0, delay), handle, callback, None)
        return handle

    def call_every(self, interval: float, callback) -> TimerHandle:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        handle = TimerHandle()
        self._push(self._now + interval, handle, callback, interval)
        return handle

    def advance(self, seconds: float):
        """Move the clock forward, firing everything that comes due."""
        target = self._now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, callback, interval = heapq.heappop(self._queue)
            if not handle.active:
                continue
            self._now = due
            if interval is None:
                handle.active = False
            else:
                self._push(due + interval, handle, callback, interval)
            callback()
        self._now = target

    def pending(self) -> int:
        """Number of live timers still queued."""
        return sum(1 for entry in self._queue if entry[2].active)
