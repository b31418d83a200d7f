"""Tests for the simulation clock and per-actor timer queues.

Covers:
- Clock only moves forward
- Due-order firing with ties broken by scheduling order
- Zero-delay timers scheduled from a callback fire in the same poll
- Re-entrant polls are ignored
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from skirmish.engine.clock import SimulationClock
from skirmish.engine.event_queue import EventQueue
from skirmish.engine.timers import TimerQueue
from skirmish.core.enums import EventKind
from skirmish.core.models import CombatEvent


class TestSimulationClock:

    def test_advance_accumulates(self):
        clock = SimulationClock()
        clock.advance(50)
        clock.advance(25)
        assert clock.now() == 75

    def test_negative_advance_ignored(self):
        clock = SimulationClock(100.0)
        clock.advance(-40)
        assert clock.now() == 100.0

    def test_reset(self):
        clock = SimulationClock()
        clock.advance(500)
        clock.reset()
        assert clock.now() == 0.0


class TestTimerQueue:

    def test_fires_only_when_due(self):
        clock = SimulationClock()
        timers = TimerQueue(clock)
        fired = []
        timers.schedule(100, lambda: fired.append("a"))

        clock.advance(99)
        assert timers.poll() == 0
        clock.advance(1)
        assert timers.poll() == 1
        assert fired == ["a"]
        assert len(timers) == 0

    def test_due_order_then_schedule_order(self):
        clock = SimulationClock()
        timers = TimerQueue(clock)
        fired = []
        timers.schedule(300, lambda: fired.append("late"))
        timers.schedule(100, lambda: fired.append("first"))
        timers.schedule(100, lambda: fired.append("second"))

        clock.advance(500)
        timers.poll()
        assert fired == ["first", "second", "late"]

    def test_zero_delay_from_callback_fires_same_poll(self):
        clock = SimulationClock()
        timers = TimerQueue(clock)
        fired = []

        def outer():
            fired.append("outer")
            timers.schedule(0, lambda: fired.append("inner"))

        timers.schedule(50, outer)
        clock.advance(50)
        assert timers.poll() == 2
        assert fired == ["outer", "inner"]

    def test_nested_poll_is_ignored(self):
        clock = SimulationClock()
        timers = TimerQueue(clock)
        nested_results = []

        def reentrant():
            nested_results.append(timers.poll())

        timers.schedule(10, reentrant)
        timers.schedule(10, lambda: None)
        clock.advance(10)
        assert timers.poll() == 2
        assert nested_results == [0]

    def test_negative_delay_treated_as_now(self):
        clock = SimulationClock(200.0)
        timers = TimerQueue(clock)
        timer = timers.schedule(-50, lambda: None)
        assert timer.due_at == 200.0

    def test_pending_sorted_by_due_time(self):
        clock = SimulationClock()
        timers = TimerQueue(clock)
        timers.schedule(500, lambda: None, "b")
        timers.schedule(200, lambda: None, "a")
        assert [t.label for t in timers.pending()] == ["a", "b"]


class TestEventQueue:

    def test_drain_is_fifo_and_empties(self):
        queue = EventQueue()
        queue.push(CombatEvent(EventKind.ATTACK, 1, 0.0))
        queue.push(CombatEvent(EventKind.DAMAGE, 2, 0.0))
        assert len(queue) == 2

        drained = queue.drain()
        assert [e.kind for e in drained] == [EventKind.ATTACK, EventKind.DAMAGE]
        assert queue.empty

    def test_peek_does_not_consume(self):
        queue = EventQueue()
        queue.push(CombatEvent(EventKind.HEAL, 1, 0.0))
        assert len(queue.peek()) == 1
        assert len(queue) == 1
