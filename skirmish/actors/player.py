"""Player — the input-driven actor: attack, block, stun, leveling.

State machine:
  IDLE ↔ WALKING          (velocity from the per-tick PlayerCommand)
  IDLE/WALKING → ATTACKING (attack(); reverts to IDLE after the swing)
  IDLE/WALKING → BLOCKING  (held block; released explicitly, no timeout)
  any living   → STUNNED   (unblocked hit; reverts to IDLE)
  any          → DEAD      (lethal damage; terminal)
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from skirmish.core.actor import Actor
from skirmish.core.enums import ActorState, AttackKind, Cue, EventKind
from skirmish.core.models import AttackIntent, PlayerCommand, Vector2

if TYPE_CHECKING:
    from skirmish.config import CombatConfig
    from skirmish.engine.clock import SimulationClock
    from skirmish.engine.event_queue import EventQueue

logger = logging.getLogger(__name__)

PLAYER_ID = 0


def experience_threshold(level: int, config: CombatConfig) -> int:
    """XP required to advance *from* ``level``: floor(base * mult^(level-1))."""
    return int(math.floor(config.base_experience_to_level * config.experience_multiplier ** (level - 1)))


class Player(Actor):
    """The single player-controlled actor."""

    def __init__(
        self,
        config: CombatConfig,
        clock: SimulationClock,
        position: Vector2 | None = None,
        events: EventQueue | None = None,
        actor_id: int = PLAYER_ID,
    ) -> None:
        super().__init__(
            actor_id,
            "player",
            position if position is not None else Vector2(config.player_start_x, config.player_start_y),
            clock=clock,
            max_health=config.player_max_health,
            attack_damage=config.player_attack_damage,
            speed=config.player_speed,
            attack_range=config.player_attack_range,
            attack_cooldown_ms=config.player_attack_cooldown_ms,
            invulnerability_ms=config.player_invulnerability_ms,
            frame_height=config.player_frame_height,
            events=events,
        )
        self.config = config
        self.display_scale = config.player_scale

        self.level = 1
        self.experience = 0
        self.total_experience = 0
        self.experience_to_next_level = experience_threshold(1, config)

        self.is_blocking = False
        self.is_attacking = False
        self.death_notified = False

    # =================================================================
    # State hooks
    # =================================================================

    def _on_exit(self, previous: ActorState, new_state: ActorState) -> None:
        if previous == ActorState.BLOCKING:
            self.is_blocking = False
        elif previous == ActorState.ATTACKING:
            self.is_attacking = False

    def _on_enter(self, state: ActorState) -> None:
        super()._on_enter(state)
        if state == ActorState.ATTACKING:
            self.is_attacking = True
            self.stop()
            self.schedule(self.config.player_attack_duration_ms, self._end_attack, "player:attack")
        elif state == ActorState.STUNNED:
            self.stop()
            self.schedule(self.config.player_stun_ms, self._end_stun, "player:stun")
        elif state == ActorState.BLOCKING:
            self.is_blocking = True
            self.stop()
        elif state == ActorState.DEAD:
            self.is_blocking = False
            self.is_attacking = False

    def _end_attack(self) -> None:
        if self.is_alive() and self.state == ActorState.ATTACKING:
            self.set_state(ActorState.IDLE)

    def _end_stun(self) -> None:
        if self.is_alive() and self.state == ActorState.STUNNED:
            self.set_state(ActorState.IDLE)

    # =================================================================
    # Combat
    # =================================================================

    def can_attack(self) -> bool:
        if not self.is_alive() or self.is_attacking:
            return False
        if self.state in (ActorState.STUNNED, ActorState.HURT, ActorState.BLOCKING):
            return False
        return self.cooldown_elapsed()

    def attack(self) -> AttackIntent | None:
        """Swing in the facing direction.  Returns the emitted intent or None."""
        if not self.can_attack():
            return None
        self.last_attack_time = self.now()
        self.set_state(ActorState.ATTACKING)
        origin = Vector2(self.position.x + self.facing * self.attack_range, self.position.y)
        intent = AttackIntent(
            attacker_id=self.id,
            origin=origin,
            facing=self.facing,
            damage=self.attack_damage,
            range=self.attack_range,
            kind=AttackKind.MELEE,
        )
        self.emit(EventKind.ATTACK, intent=intent)
        return intent

    def take_damage(self, amount: float) -> bool:
        """Apply an incoming hit.  Returns True when health was touched."""
        if self.state == ActorState.DEAD or self.invulnerable:
            return False

        if self.state == ActorState.BLOCKING:
            reduced = math.floor(amount * self.config.player_block_damage_mult)
            self._lose_health(reduced)
            self.emit(EventKind.BLOCKED, original=amount, applied=reduced)
            self.cue(Cue.BLOCK_PULSE)
            if self.health.current == 0:
                self.die()
            return True

        self._lose_health(amount)
        if self.health.current == 0:
            self.die()
            return True

        self.set_state(ActorState.STUNNED)
        self.make_invulnerable()
        self.cue(Cue.INVULNERABLE_FLASH)
        return True

    def start_blocking(self) -> bool:
        if self.state not in (ActorState.IDLE, ActorState.WALKING):
            return False
        return self.set_state(ActorState.BLOCKING)

    def stop_blocking(self) -> bool:
        if self.state != ActorState.BLOCKING:
            return False
        return self.set_state(ActorState.IDLE)

    def is_currently_blocking(self) -> bool:
        return self.is_blocking and self.state == ActorState.BLOCKING

    def die(self) -> None:
        if not self.set_state(ActorState.DEAD):
            return
        logger.info("Player died at level %d (t=%.0f ms)", self.level, self.now())
        self.cue(Cue.HIDE_HEALTH_BAR)
        self.cue(Cue.FADE_OUT, duration_ms=self.config.player_death_fade_ms)
        self.schedule(self.config.player_death_fade_ms, self._notify_death, "player:death")

    def _notify_death(self) -> None:
        if self.death_notified:
            return
        self.death_notified = True
        self.emit(EventKind.DEATH, level=self.level, total_experience=self.total_experience)

    # =================================================================
    # Progression
    # =================================================================

    def gain_experience(self, amount: int) -> int:
        """Grant XP and process any level-ups.  Returns levels gained."""
        if amount < 0:
            return 0
        self.experience += amount
        self.total_experience += amount

        gained_levels = 0
        while self.experience >= self.experience_to_next_level:
            self.experience -= self.experience_to_next_level
            self._level_up()
            gained_levels += 1

        self.emit(
            EventKind.EXPERIENCE_GAIN,
            gained=amount,
            current=self.experience,
            needed=self.experience_to_next_level,
            level=self.level,
            total=self.total_experience,
        )
        return gained_levels

    def _level_up(self) -> None:
        cfg = self.config
        self.level += 1
        self.experience_to_next_level = experience_threshold(self.level, cfg)

        bonuses: dict[str, float] = {
            "health": cfg.level_bonus_health,
            "damage": cfg.level_bonus_damage,
            "speed": 0,
        }
        self.health.max += cfg.level_bonus_health
        if self.is_alive():
            self.health.current = min(self.health.max, self.health.current + cfg.level_bonus_health)
        self.attack_damage += cfg.level_bonus_damage
        if self.speed < cfg.speed_cap:
            self.speed += cfg.level_bonus_speed
            bonuses["speed"] = cfg.level_bonus_speed

        logger.info("Player reached level %d (next at %d XP)", self.level, self.experience_to_next_level)
        self.emit(
            EventKind.LEVEL_UP,
            new_level=self.level,
            experience_to_next=self.experience_to_next_level,
            bonuses=bonuses,
        )

    def level_info(self) -> dict[str, Any]:
        progress = self.experience / self.experience_to_next_level if self.experience_to_next_level else 0.0
        return {
            "level": self.level,
            "experience": self.experience,
            "experience_to_next": self.experience_to_next_level,
            "total_experience": self.total_experience,
            "progress_pct": round(progress * 100),
        }

    # =================================================================
    # Per-tick input
    # =================================================================

    def update(self, command: PlayerCommand) -> None:
        """Consume one tick of player intent.  Timers are polled first."""
        self.process_timers()
        if self.state == ActorState.DEAD:
            return

        if command.block and self.state in (ActorState.IDLE, ActorState.WALKING):
            self.start_blocking()
        elif not command.block and self.state == ActorState.BLOCKING:
            self.stop_blocking()

        if self.is_busy():
            self.stop()
            return

        mx, my = command.move_x, command.move_y
        velocity = Vector2(mx * self.speed, my * self.speed)
        if mx != 0 and my != 0:
            velocity = velocity.scaled(self.config.diagonal_factor)
        self.velocity = velocity
        if mx != 0:
            self.facing = 1 if mx > 0 else -1

        if command.attack and self.attack() is not None:
            return
        self.settle_movement_state()
