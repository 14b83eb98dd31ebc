"""
scheduler.py - Cooperative Timers
==================================
The Player never sleeps and never spawns threads.  It asks a scheduler to
call it back later and keeps the returned handle so it can cancel it.

Any object with

    call_later(delay_seconds, callback) -> handle      # handle.cancel()

works, which means an asyncio event loop can be passed straight in.  For
polled UIs (the Flask API, tests) TickScheduler is driven by calling
tick() from the host loop, e.g. every 50 ms or on every /api/state poll.
"""

import heapq
import itertools
import time
from typing import Callable, List, Optional, Protocol, Tuple


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


# ---------------------------------------------------------------------------
# Clocks
# ---------------------------------------------------------------------------
class ManualClock:
    """A clock that only moves when told to.  Deterministic tests use it."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# TickScheduler
# ---------------------------------------------------------------------------
# cancelled entries are dropped from the heap once they outnumber live ones
COMPACT_AFTER = 32


class ScheduledCall:
    __slots__ = ("when", "callback", "cancelled", "_owner")

    def __init__(self, when: float, callback: Callable[[], None], owner: "Optional[TickScheduler]" = None):
        self.when      = when
        self.callback  = callback
        self.cancelled = False
        self._owner    = owner

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        owner, self._owner = self._owner, None
        if owner is not None:
            owner._forget(self)

    def __repr__(self) -> str:
        return f"ScheduledCall(when={self.when:.3f}, cancelled={self.cancelled})"


class TickScheduler:
    """
    Single-threaded timer queue.

    tick() runs every callback whose deadline has passed, in deadline
    order.  Callbacks scheduled *during* a tick wait for the next tick, so
    a callback that reschedules itself fires at most once per tick.

    Cancelling only flags a call; the heap is compacted once more than
    COMPACT_AFTER flagged entries make up over half of it.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._seq = itertools.count()
        self._cancelled = 0

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self._clock() + max(0.0, delay), callback, owner=self)
        heapq.heappush(self._queue, (call.when, next(self._seq), call))
        return call

    def tick(self) -> int:
        """Fire everything that is due.  Returns how many callbacks ran."""
        now = self._clock()
        due: List[ScheduledCall] = []
        while self._queue and self._queue[0][0] <= now:
            _, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                self._cancelled -= 1
                continue
            call._owner = None
            due.append(call)

        fired = 0
        for call in due:
            # an earlier callback in this batch may have cancelled it
            if call.cancelled:
                continue
            call.cancelled = True
            call.callback()
            fired += 1
        return fired

    @property
    def pending(self) -> int:
        return len(self._queue) - self._cancelled

    @property
    def queued(self) -> int:
        """Heap size, cancelled entries included."""
        return len(self._queue)

    def next_deadline(self) -> Optional[float]:
        live = [when for when, _, c in self._queue if not c.cancelled]
        return min(live) if live else None

    def clear(self) -> None:
        queue, self._queue = self._queue, []
        for _, _, call in queue:
            call._owner = None
            call.cancel()
        self._cancelled = 0

    def _forget(self, call: ScheduledCall) -> None:
        self._cancelled += 1
        if self._cancelled > COMPACT_AFTER and self._cancelled * 2 > len(self._queue):
            self._queue = [entry for entry in self._queue if not entry[2].cancelled]
            heapq.heapify(self._queue)
            self._cancelled = 0
