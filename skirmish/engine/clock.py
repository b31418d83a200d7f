"""Monotonic simulation clock supplied by the host."""

from __future__ import annotations


class SimulationClock:
    """Millisecond clock advanced explicitly by the world loop (or a test).

    Nothing in the combat core reads wall time; every cooldown, windup and
    invulnerability window is measured against ``now()``.
    """

    __slots__ = ("_now",)

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = start_ms

    def now(self) -> float:
        return self._now

    def advance(self, delta_ms: float) -> float:
        """Move time forward by *delta_ms* and return the new time."""
        if delta_ms > 0:
            self._now += delta_ms
        return self._now

    def reset(self, start_ms: float = 0.0) -> None:
        self._now = start_ms
