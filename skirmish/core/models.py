"""Core value models: Vector2, Health, Bounds, AttackIntent, CombatEvent."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from skirmish.core.enums import AttackKind, EventKind


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D world coordinate in pixels (y grows downward)."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def scaled(self, factor: float) -> Vector2:
        return Vector2(self.x * factor, self.y * factor)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance(self, other: Vector2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def normalized(self) -> Vector2:
        """Unit vector in the same direction; the zero vector stays zero."""
        n = self.length()
        if n == 0:
            return Vector2()
        return Vector2(self.x / n, self.y / n)

    @property
    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def __repr__(self) -> str:
        return f"({self.x:.1f}, {self.y:.1f})"


ZERO = Vector2()


@dataclass(slots=True)
class Health:
    """Mutable health pool.  ``current`` is kept within ``[0, max]``."""

    current: int
    max: int

    @property
    def alive(self) -> bool:
        return self.current > 0

    @property
    def ratio(self) -> float:
        return self.current / self.max if self.max > 0 else 0.0

    def as_dict(self) -> dict[str, int]:
        return {"current": self.current, "max": self.max}


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned rectangle, used for the walkable band and projectile culling."""

    left: float
    top: float
    right: float
    bottom: float

    def contains(self, pos: Vector2) -> bool:
        return self.left <= pos.x <= self.right and self.top <= pos.y <= self.bottom

    def clamp(self, pos: Vector2) -> Vector2:
        return Vector2(
            min(max(pos.x, self.left), self.right),
            min(max(pos.y, self.top), self.bottom),
        )


@dataclass(frozen=True, slots=True)
class AttackIntent:
    """An emitted, not-yet-resolved attack.

    The resolver tests candidate targets against a circle of ``range``
    around ``origin``.  Ranged intents are informational; their damage is
    delivered by a Projectile.
    """

    attacker_id: int
    origin: Vector2
    facing: int
    damage: int
    range: float
    kind: AttackKind = AttackKind.MELEE


@dataclass(frozen=True, slots=True)
class CombatEvent:
    """A single outbound notification from an actor, projectile or spawner."""

    kind: EventKind
    source_id: int
    at_ms: float
    data: dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"Event({self.kind.value}, source={self.source_id}, t={self.at_ms:.0f})"


@dataclass(frozen=True, slots=True)
class PlayerCommand:
    """Device-independent player intent for one tick.

    ``move_x`` / ``move_y`` are in {-1, 0, 1}.  ``block`` is a held button:
    True starts blocking, False releases it.
    """

    move_x: int = 0
    move_y: int = 0
    attack: bool = False
    block: bool = False


IDLE_COMMAND = PlayerCommand()
