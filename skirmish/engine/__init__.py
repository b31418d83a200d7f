"""Engine layer: clock, timers, event queue.  WorldLoop lives in engine.world_loop."""

from skirmish.engine.clock import SimulationClock
from skirmish.engine.event_queue import EventQueue
from skirmish.engine.timers import Timer, TimerQueue

__all__ = ["EventQueue", "SimulationClock", "Timer", "TimerQueue"]
