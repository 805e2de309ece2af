"""Cooperative timers driven by the host loop."""
from __future__ import annotations

import heapq
import itertools
import time
from typing import Callable, List, Optional, Tuple

Callback = Callable[[], None]


class TimerHandle:
    def __init__(self, when: float, callback: Callback, interval: Optional[float] = None) -> None:
        self.when = when
        self.callback = callback
        self.interval = interval
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def repeating(self) -> bool:
        return self.interval is not None


class Scheduler:
    """Heap of timers against ``clock``; callbacks only run inside ``run_pending``.

    Repeating timers fire once per elapsed interval, so a stalled host loop
    catches up tick by tick instead of dropping ticks.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()

    def _push(self, handle: TimerHandle) -> None:
        heapq.heappush(self._queue, (handle.when, next(self._counter), handle))

    def call_later(self, delay: float, callback: Callback) -> TimerHandle:
        handle = TimerHandle(self.clock() + max(delay, 0.0), callback)
        self._push(handle)
        return handle

    def call_every(self, interval: float, callback: Callback) -> TimerHandle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        handle = TimerHandle(self.clock() + interval, callback, interval)
        self._push(handle)
        return handle

    def pending(self) -> int:
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def run_pending(self) -> int:
        """Fire every timer that is due; return how many callbacks ran."""
        now = self.clock()
        fired = 0
        while self._queue and self._queue[0][0] <= now:
            _, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            if handle.interval is not None:
                handle.when += handle.interval
                self._push(handle)
            handle.callback()
            fired += 1
        return fired

    def clear(self) -> None:
        for _, _, handle in self._queue:
            handle.cancel()
        self._queue.clear()
