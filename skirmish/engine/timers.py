"""Deferred, cancellation-free timers polled against the simulation clock.

Each actor owns one TimerQueue.  A timer is a ``(due_at, seq, callback)``
record in a min-heap; ``poll`` runs every record whose ``due_at`` has been
reached, in due order (ties broken by scheduling order).  Timers cannot be
cancelled: a callback that may fire after its actor died must re-check
liveness / current state before mutating anything.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from skirmish.engine.clock import SimulationClock

logger = logging.getLogger(__name__)


@dataclass(order=True, slots=True)
class Timer:
    due_at: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    label: str = field(default="", compare=False)


class TimerQueue:
    """Min-heap of pending timers for a single owner."""

    __slots__ = ("_clock", "_heap", "_seq", "_polling")

    def __init__(self, clock: SimulationClock) -> None:
        self._clock = clock
        self._heap: list[Timer] = []
        self._seq = itertools.count()
        self._polling = False

    def schedule(self, delay_ms: float, callback: Callable[[], None], label: str = "") -> Timer:
        """Run *callback* once, *delay_ms* after the current clock time."""
        timer = Timer(self._clock.now() + max(delay_ms, 0.0), next(self._seq), callback, label)
        heapq.heappush(self._heap, timer)
        return timer

    def poll(self) -> int:
        """Fire every due timer.  Returns the number of callbacks run.

        Timers scheduled by a callback with zero delay fire in the same poll.
        Nested polls (a callback reaching back into its owner's update path)
        are ignored; the outer poll keeps draining.
        """
        if self._polling:
            return 0
        self._polling = True
        fired = 0
        try:
            now = self._clock.now()
            while self._heap and self._heap[0].due_at <= now:
                timer = heapq.heappop(self._heap)
                logger.debug("Timer %r fired at %.0f ms (due %.0f)", timer.label, now, timer.due_at)
                timer.callback()
                fired += 1
        finally:
            self._polling = False
        return fired

    def pending(self) -> list[Timer]:
        return sorted(self._heap)

    def __len__(self) -> int:
        return len(self._heap)
