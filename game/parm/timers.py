"""
Cancelable one-shot timers.

Everything time-based in a session (sprite drops, fire cooldown, countdown
ticks, staged end-of-game delays) goes through a scheduler exposing
``call_later(delay_ms, callback) -> TimerHandle``. ``ManualScheduler`` advances
a virtual clock explicitly and drives the headless environment and the tests;
the arcade window provides a real-time implementation on the pyglet clock.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, List, Optional, Tuple


class TimerHandle:
    """A scheduled callback that fires at most once"""

    def __init__(self, callback: Callable[[], None], due: float = 0.0):
        self.callback = callback
        self.due = due
        self.cancelled = False
        self.fired = False
        self._on_cancel: Optional[Callable[[], None]] = None

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self):
        if not self.active:
            return
        self.cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()

    def fire(self):
        if not self.active:
            return
        self.fired = True
        self.callback()


class ManualScheduler:
    """Virtual clock in milliseconds, advanced by the caller"""

    def __init__(self):
        self.now = 0.0
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(callback, due=self.now + max(0.0, delay_ms))
        heapq.heappush(self._queue, (handle.due, next(self._seq), handle))
        return handle

    def advance(self, ms: float):
        """Move the clock forward, firing due timers in order.

        Timers scheduled by a callback that fall inside the window also fire.
        """
        target = self.now + ms
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            self.now = due
            handle.fire()
        self.now = target

    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if h.active)

    def cancel_all(self):
        for _, _, handle in self._queue:
            handle.cancel()
        self._queue.clear()
