"""Thread-safe ring buffer for combat events exposed via the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any

from skirmish.core.models import Vector2


@dataclass(frozen=True, slots=True)
class SimEvent:
    """A single combat event for the API event feed."""

    tick: int
    at_ms: float
    category: str
    message: str
    entity_ids: tuple[int, ...] = ()  # IDs of actors/projectiles involved
    metadata: dict[str, Any] = field(default_factory=dict)


def to_plain(value: Any) -> Any:
    """Reduce event payload values to JSON-friendly primitives."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Vector2):
        return {"x": round(value.x, 2), "y": round(value.y, 2)}
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    # Live objects (projectiles, actors) are reported by id
    return getattr(value, "id", repr(value))


class EventLog:
    """Bounded event log.  Writers append; readers snapshot a slice.

    The oldest events fall off once ``maxlen`` is reached.  Thread-safe via
    a simple lock: writes happen once per tick batch and reads are copies.
    """

    __slots__ = ("_buffer", "_lock")

    def __init__(self, maxlen: int = 5000) -> None:
        self._buffer: deque[SimEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def append(self, event: SimEvent) -> None:
        with self._lock:
            self._buffer.append(event)

    def append_many(self, events: list[SimEvent]) -> None:
        with self._lock:
            self._buffer.extend(events)

    def since_tick(self, tick: int) -> list[SimEvent]:
        """Return all events with tick >= *tick*."""
        with self._lock:
            return [e for e in self._buffer if e.tick >= tick]

    def latest(self, count: int = 50) -> list[SimEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def by_category(self, category: str) -> list[SimEvent]:
        with self._lock:
            return [e for e in self._buffer if e.category == category]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)
