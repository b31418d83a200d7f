"""Projectile — straight-line shot fired by a ranged enemy."""

from __future__ import annotations

import logging
import weakref
from typing import TYPE_CHECKING, Any

from skirmish.core.enums import Cue, EventKind
from skirmish.core.models import CombatEvent, Vector2

if TYPE_CHECKING:
    from skirmish.core.actor import Actor
    from skirmish.core.models import Bounds
    from skirmish.engine.clock import SimulationClock
    from skirmish.engine.event_queue import EventQueue

logger = logging.getLogger(__name__)


class Projectile:
    """A single shot.  Never pooled; once destroyed it stays destroyed.

    The owner is held weakly and only for attribution: a projectile keeps
    flying after its shooter died or was removed.
    """

    __slots__ = (
        "id", "position", "origin", "velocity", "damage", "range", "radius",
        "distance_traveled", "age_ms", "lifetime_ms", "owner_id", "_owner",
        "has_hit_target", "destroyed", "destroy_reason", "_clock", "_events",
    )

    def __init__(
        self,
        projectile_id: int,
        position: Vector2,
        velocity: Vector2,
        damage: int,
        max_range: float,
        *,
        clock: SimulationClock,
        events: EventQueue,
        owner: Actor | None = None,
        radius: float = 8.0,
        lifetime_ms: float = 5000.0,
    ) -> None:
        self.id = projectile_id
        self.position = position
        self.origin = position
        self.velocity = velocity
        self.damage = damage
        self.range = max_range
        self.radius = radius
        self.distance_traveled = 0.0
        self.age_ms = 0.0
        self.lifetime_ms = lifetime_ms
        self.owner_id = owner.id if owner is not None else None
        self._owner = weakref.ref(owner) if owner is not None else None
        self.has_hit_target = False
        self.destroyed = False
        self.destroy_reason = ""
        self._clock = clock
        self._events = events

    @property
    def owner(self) -> Actor | None:
        return self._owner() if self._owner is not None else None

    @property
    def active(self) -> bool:
        return not self.destroyed

    def _emit(self, kind: EventKind, **data: Any) -> None:
        self._events.push(CombatEvent(kind=kind, source_id=self.id, at_ms=self._clock.now(), data=data))

    def advance(self, dt_ms: float, bounds: Bounds) -> None:
        """Move one step and expire on range, world exit or lifetime."""
        if self.destroyed:
            return
        self.position = self.position + self.velocity.scaled(dt_ms / 1000.0)
        self.distance_traveled = self.position.distance(self.origin)
        self.age_ms += dt_ms

        if self.distance_traveled >= self.range:
            self.destroy("range")
        elif not bounds.contains(self.position):
            self.destroy("out_of_bounds")
        elif self.age_ms >= self.lifetime_ms:
            self.destroy("lifetime")

    def hit_target(self, target: Actor) -> bool:
        """Latch a hit on *target*.  Only the first call has any effect."""
        if self.has_hit_target or self.destroyed:
            return False
        self.has_hit_target = True
        self._emit(
            EventKind.PROJECTILE_HIT,
            target=target.id,
            damage=self.damage,
            owner=self.owner_id,
            position=self.position,
        )
        self._emit(EventKind.CUE, cue=Cue.IMPACT_PULSE, position=self.position)
        self.destroy("hit")
        return True

    def destroy(self, reason: str) -> None:
        if self.destroyed:
            return
        self.destroyed = True
        self.destroy_reason = reason
        self.velocity = Vector2()
        if reason != "hit":
            self._emit(EventKind.PROJECTILE_EXPIRED, reason=reason, distance=self.distance_traveled)
        logger.debug("Projectile %d destroyed (%s) after %.0f px", self.id, reason, self.distance_traveled)

    def __repr__(self) -> str:
        return f"Projectile(id={self.id}, pos={self.position}, dmg={self.damage}, destroyed={self.destroyed})"
