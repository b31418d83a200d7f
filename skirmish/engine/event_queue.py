"""Outbound event queue connecting actors to the WorldLoop."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from skirmish.core.models import CombatEvent


class EventQueue:
    """FIFO of CombatEvents.

    Actors, projectiles and the spawner push; the WorldLoop drains once per
    phase and reacts in emission order.  Single-threaded by design: the loop
    that pushes is the loop that drains.
    """

    __slots__ = ("_events",)

    def __init__(self) -> None:
        self._events: deque[CombatEvent] = deque()

    def push(self, event: CombatEvent) -> None:
        self._events.append(event)

    def drain(self) -> list[CombatEvent]:
        """Remove and return every pending event, oldest first."""
        events = list(self._events)
        self._events.clear()
        return events

    def peek(self) -> list[CombatEvent]:
        return list(self._events)

    @property
    def empty(self) -> bool:
        return not self._events

    def __len__(self) -> int:
        return len(self._events)
