"""Cancellable timers pumped from the game loop.

Nothing here runs on its own thread: the host loop calls
``Scheduler.run_due()`` once per frame and due callbacks fire one after
another, so two ticks can never overlap.
"""

from __future__ import annotations

import itertools
import logging
import time
from typing import Callable, List, Optional

log = logging.getLogger(__name__)

Clock = Callable[[], int]


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class Timer:
    """Handle for a scheduled callback."""

    def __init__(self, due: int, callback: Callable[[], None],
                 interval: Optional[int], seq: int):
        self.due = due
        self.callback = callback
        self.interval = interval
        self.seq = seq
        self.cancelled = False

    @property
    def active(self) -> bool:
        return not self.cancelled

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self):
        kind = f"every {self.interval}ms" if self.interval else "once"
        state = "cancelled" if self.cancelled else f"due {self.due}"
        return f"<Timer {kind} {state}>"


class Scheduler:
    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or monotonic_ms
        self._timers: List[Timer] = []
        self._seq = itertools.count()

    def now(self) -> int:
        return self.clock()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Timer:
        return self._add(Timer(self.now() + delay_ms, callback, None, next(self._seq)))

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> Timer:
        if interval_ms <= 0:
            raise ValueError("interval must be positive")
        return self._add(Timer(self.now() + interval_ms, callback, interval_ms, next(self._seq)))

    def _add(self, timer: Timer) -> Timer:
        self._timers.append(timer)
        return timer

    @property
    def pending(self) -> List[Timer]:
        return [t for t in self._timers if t.active]

    def run_due(self, now: Optional[int] = None) -> int:
        """Fire every timer due at ``now``. Returns the number of callbacks run.

        A repeating timer that fell behind fires once per missed period.
        Timers cancelled by an earlier callback in the same pass are skipped.
        """
        if now is None:
            now = self.now()
        fired = 0
        while True:
            self._timers = [t for t in self._timers if t.active]
            due = [t for t in self._timers if t.due <= now]
            if not due:
                return fired
            timer = min(due, key=lambda t: (t.due, t.seq))
            if timer.interval:
                timer.due += timer.interval
            else:
                timer.cancel()
            timer.callback()
            fired += 1

    def cancel_all(self) -> None:
        for timer in self._timers:
            timer.cancel()
        self._timers = []
