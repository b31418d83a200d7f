"""Actor — the state-machine record shared by the player and every enemy.

Design:
  - An Actor owns its health, combat stats, timers and (optionally) its own
    outbound EventQueue.  No mutable state is shared between actors; they
    communicate only through emitted events.
  - ``set_state`` is the single transition point.  Re-entering the current
    state is a no-op (so enter-hooks never re-arm their timers) and DEAD is
    terminal.
  - Enter-hooks may schedule one delayed revert.  Timers are never
    cancelled, so every revert re-checks liveness and the current state.
  - Subclasses extend ``_on_enter`` / ``_on_exit`` and implement
    ``take_damage`` and ``die``.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Callable

from skirmish.core.enums import BUSY_STATES, ActorState, Cue, EventKind, Stat
from skirmish.core.models import ZERO, CombatEvent, Health, Vector2
from skirmish.engine.event_queue import EventQueue
from skirmish.engine.timers import TimerQueue

if TYPE_CHECKING:
    from skirmish.core.models import Bounds
    from skirmish.engine.clock import SimulationClock

logger = logging.getLogger(__name__)

# Velocity magnitude below which an actor counts as standing still
MOVING_THRESHOLD = 10.0


class Actor:
    """Base combat actor.  Not instantiated directly."""

    def __init__(
        self,
        actor_id: int,
        kind: str,
        position: Vector2,
        *,
        clock: SimulationClock,
        max_health: int,
        attack_damage: int,
        speed: float,
        attack_range: float,
        attack_cooldown_ms: float,
        invulnerability_ms: float,
        frame_height: float = 64.0,
        events: EventQueue | None = None,
    ) -> None:
        self.id = actor_id
        self.kind = kind
        self.position = position
        self.velocity: Vector2 = ZERO
        self.facing: int = 1

        self.health = Health(max_health, max_health)
        self.attack_damage = attack_damage
        self.speed = speed
        self.attack_range = attack_range

        self.attack_cooldown_ms = attack_cooldown_ms
        self.last_attack_time: float | None = None
        self.invulnerability_ms = invulnerability_ms
        self.invulnerable = False
        self.invulnerable_until = 0.0

        self.state = ActorState.IDLE

        self.frame_height = frame_height
        self.display_scale = 1.0

        self._clock = clock
        self.timers = TimerQueue(clock)
        self.events = events if events is not None else EventQueue()

    # -- queries --

    def now(self) -> float:
        return self._clock.now()

    def is_alive(self) -> bool:
        return self.state != ActorState.DEAD and self.health.alive

    def is_busy(self) -> bool:
        return self.state in BUSY_STATES

    def cooldown_elapsed(self) -> bool:
        if self.last_attack_time is None:
            return True
        return self.now() - self.last_attack_time >= self.attack_cooldown_ms

    def health_percentage(self) -> float:
        return self.health.ratio

    @property
    def display_height(self) -> float:
        return self.frame_height * self.display_scale

    @property
    def is_moving(self) -> bool:
        return abs(self.velocity.x) > MOVING_THRESHOLD or abs(self.velocity.y) > MOVING_THRESHOLD

    # -- state machine --

    def set_state(self, new_state: ActorState) -> bool:
        """Transition to *new_state*.  Returns False when nothing changed."""
        if new_state == self.state or self.state == ActorState.DEAD:
            return False
        previous = self.state
        self.state = new_state
        logger.debug("%s %d: %s -> %s", self.kind, self.id, previous.name, new_state.name)
        self._on_exit(previous, new_state)
        self._on_enter(new_state)
        return True

    def _on_exit(self, previous: ActorState, new_state: ActorState) -> None:
        """Hook: clean up flags owned by *previous*."""

    def _on_enter(self, state: ActorState) -> None:
        if state == ActorState.DEAD:
            self.stop()

    def settle_movement_state(self) -> None:
        """Pick WALKING or IDLE from velocity unless a busy state owns the actor."""
        if self.is_busy() or self.state == ActorState.DEAD:
            return
        self.set_state(ActorState.WALKING if self.is_moving else ActorState.IDLE)

    # -- timers & events --

    def process_timers(self) -> int:
        """Fire every timer due at the current clock time."""
        return self.timers.poll()

    def schedule(self, delay_ms: float, callback: Callable[[], None], label: str = "") -> None:
        self.timers.schedule(delay_ms, callback, label or f"{self.kind}:{self.id}")

    def emit(self, kind: EventKind, **data: Any) -> CombatEvent:
        event = CombatEvent(kind=kind, source_id=self.id, at_ms=self.now(), data=data)
        self.events.push(event)
        return event

    def cue(self, cue: Cue, **data: Any) -> None:
        self.emit(EventKind.CUE, cue=cue, **data)

    # -- invulnerability --

    def make_invulnerable(self, duration_ms: float | None = None) -> None:
        duration = self.invulnerability_ms if duration_ms is None else duration_ms
        self.invulnerable = True
        self.invulnerable_until = self.now() + duration
        self.schedule(duration, self._end_invulnerability, "invulnerability")

    def _end_invulnerability(self) -> None:
        if self.now() >= self.invulnerable_until:
            self.invulnerable = False
            if self.state != ActorState.DEAD:
                self.cue(Cue.CLEAR_TINT)

    # -- health --

    def _lose_health(self, amount: float) -> int:
        """Subtract *amount* (floored, never below 0) and emit the damage feed."""
        loss = max(int(math.floor(amount)), 0)
        self.health.current = max(0, self.health.current - loss)
        self.emit(EventKind.DAMAGE, amount=loss, **self.health.as_dict())
        return loss

    def take_damage(self, amount: float) -> bool:
        raise NotImplementedError

    def die(self) -> None:
        raise NotImplementedError

    def heal(self, amount: float) -> int:
        """Restore up to *amount* health.  Never resurrects.  Returns HP restored."""
        if not self.is_alive() or amount <= 0:
            return 0
        before = self.health.current
        self.health.current = min(self.health.max, self.health.current + int(amount))
        restored = self.health.current - before
        self.emit(EventKind.HEAL, amount=restored, **self.health.as_dict())
        return restored

    # -- stat mutation hooks (items, potions, level-ups) --

    def adjust_stat(self, stat: Stat, delta: float) -> None:
        """Apply a signed modifier to one stat.

        Raising max health also raises current health by the same amount
        (living actors only); lowering it clamps current health.
        """
        if stat == Stat.ATTACK_DAMAGE:
            self.attack_damage = max(0, self.attack_damage + int(delta))
            value: float = self.attack_damage
        elif stat == Stat.SPEED:
            self.speed = max(0.0, self.speed + delta)
            value = self.speed
        elif stat == Stat.MAX_HEALTH:
            self.health.max = max(1, self.health.max + int(delta))
            if delta > 0 and self.is_alive():
                self.health.current += int(delta)
            self.health.current = min(self.health.current, self.health.max)
            value = self.health.max
        else:
            return
        self.emit(EventKind.STAT_CHANGED, stat=stat, delta=delta, value=value)

    # -- kinematics --

    def stop(self) -> None:
        self.velocity = ZERO

    def face_toward(self, x: float) -> None:
        if x < self.position.x:
            self.facing = -1
        elif x > self.position.x:
            self.facing = 1

    def integrate(self, dt_ms: float, bounds: Bounds | None = None) -> None:
        """Advance position by velocity over *dt_ms*, clamped to *bounds*."""
        if self.velocity.is_zero:
            return
        new_pos = self.position + self.velocity.scaled(dt_ms / 1000.0)
        self.position = bounds.clamp(new_pos) if bounds is not None else new_pos

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.id}, state={self.state.name}, "
            f"hp={self.health.current}/{self.health.max}, pos={self.position})"
        )
