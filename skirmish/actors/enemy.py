"""Enemy — AI-driven actor with telegraphed attacks and probabilistic blocking.

State machine:
  IDLE ↔ WALKING              (behavior-driven velocity)
  IDLE/WALKING → windup        (flag, not a state; telegraph, frozen)
  windup → ATTACKING           (alignment still holds after the windup)
  windup → WALKING             (alignment lost: attack cancelled)
  IDLE/WALKING → BLOCKING      (successful block; invulnerable, reverts to IDLE)
  any living → HURT            (unblocked hit; reverts to IDLE, interrupts windup)
  any → DEAD                   (lethal damage; removal scheduled)
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from skirmish.ai.behaviors import make_behavior
from skirmish.ai.targeting import is_vertically_aligned
from skirmish.core.actor import Actor
from skirmish.core.enums import ActorState, Cue, Domain, EnemyKind, EventKind
from skirmish.core.models import AttackIntent, Vector2

if TYPE_CHECKING:
    from skirmish.ai.behaviors import Behavior
    from skirmish.ai.context import CombatContext
    from skirmish.config import CombatConfig
    from skirmish.engine.clock import SimulationClock
    from skirmish.engine.event_queue import EventQueue
    from skirmish.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


class Enemy(Actor):
    """One hostile actor.  Its fighting style lives in ``behavior``."""

    def __init__(
        self,
        enemy_id: int,
        position: Vector2,
        behavior: Behavior,
        config: CombatConfig,
        clock: SimulationClock,
        rng: DeterministicRNG,
        level: int = 1,
        events: EventQueue | None = None,
    ) -> None:
        super().__init__(
            enemy_id,
            f"enemy:{behavior.kind.value}",
            position,
            clock=clock,
            max_health=config.enemy_max_health,
            attack_damage=config.enemy_attack_damage,
            speed=config.enemy_speed,
            attack_range=config.enemy_attack_range,
            attack_cooldown_ms=config.enemy_attack_cooldown_ms,
            invulnerability_ms=config.enemy_invulnerability_ms,
            frame_height=config.enemy_frame_height,
            events=events,
        )
        self.config = config
        self.rng = rng
        self.level = max(1, level)
        self.detection_range = config.enemy_detection_range
        self.action_cooldown_ms = config.enemy_action_cooldown_ms
        self.last_action_time: float | None = None
        self.block_chance = config.enemy_block_chance
        self.item_drop_chance = config.enemy_item_drop_chance
        self.is_winding_up = False
        self.removed = False
        self._windup_token = 0

        self.behavior = behavior
        behavior.configure(self, config)

    @property
    def enemy_kind(self) -> EnemyKind:
        return self.behavior.kind

    # =================================================================
    # State hooks
    # =================================================================

    def _on_enter(self, state: ActorState) -> None:
        super()._on_enter(state)
        cfg = self.config
        if state == ActorState.ATTACKING:
            self.stop()
            self.schedule(cfg.enemy_attack_duration_ms, self._revert_to_idle(ActorState.ATTACKING), "enemy:attack")
        elif state == ActorState.BLOCKING:
            self.stop()
            self.schedule(cfg.enemy_block_ms, self._revert_to_idle(ActorState.BLOCKING), "enemy:block")
        elif state == ActorState.HURT:
            self.stop()
            self._interrupt_windup("interrupted")
            self.make_invulnerable()
            self.cue(Cue.HURT_TINT)
            self.schedule(cfg.enemy_hurt_ms, self._revert_to_idle(ActorState.HURT), "enemy:hurt")
        elif state == ActorState.DEAD:
            self.is_winding_up = False

    def _revert_to_idle(self, expected: ActorState):
        def revert() -> None:
            if self.is_alive() and self.state == expected:
                self.set_state(ActorState.IDLE)
        return revert

    # =================================================================
    # AI tick
    # =================================================================

    def update(self, ctx: CombatContext) -> None:
        """Poll timers, then let the behavior act if the enemy is free to."""
        self.process_timers()
        if self.state == ActorState.DEAD:
            return

        self.behavior.orient(self, ctx)
        if self.is_busy() or self.is_winding_up:
            return
        if not ctx.player_alive():
            self.stop()
            self.settle_movement_state()
            return
        if self.last_action_time is not None and ctx.now() - self.last_action_time < self.action_cooldown_ms:
            return

        self.behavior.decide(self, ctx)
        self.settle_movement_state()

    def can_attack(self) -> bool:
        if not self.is_alive() or self.is_busy() or self.is_winding_up:
            return False
        return self.cooldown_elapsed()

    def start_attack_windup(self, ctx: CombatContext) -> bool:
        """Telegraph an attack; it lands after the windup if still aligned."""
        if not self.can_attack():
            return False
        self.is_winding_up = True
        self._windup_token += 1
        token = self._windup_token
        self.last_action_time = ctx.now()
        self.stop()
        self.set_state(ActorState.IDLE)
        self.cue(Cue.TELEGRAPH_TINT)
        self.emit(EventKind.WINDUP, duration_ms=self.config.enemy_windup_ms)
        self.schedule(self.config.enemy_windup_ms, lambda: self._finish_windup(ctx, token), "enemy:windup")
        return True

    def _finish_windup(self, ctx: CombatContext, token: int) -> None:
        if token != self._windup_token or not self.is_winding_up:
            return
        self.is_winding_up = False
        if not self.is_alive():
            return
        self.cue(Cue.CLEAR_TINT)
        dy = ctx.player_position().y - self.position.y
        if not is_vertically_aligned(dy, self.config.enemy_vertical_tolerance):
            self.emit(EventKind.ATTACK_CANCELLED, reason="misaligned")
            self.set_state(ActorState.WALKING)
            return
        self.attack(ctx)

    def _interrupt_windup(self, reason: str) -> None:
        if not self.is_winding_up:
            return
        self.is_winding_up = False
        self.emit(EventKind.ATTACK_CANCELLED, reason=reason)

    def attack(self, ctx: CombatContext) -> AttackIntent | None:
        if not self.is_alive() or self.state in (ActorState.HURT, ActorState.BLOCKING, ActorState.ATTACKING):
            return None
        now = ctx.now()
        self.last_attack_time = now
        self.last_action_time = now
        self.set_state(ActorState.ATTACKING)
        return self.behavior.attack(self, ctx)

    # =================================================================
    # Damage intake
    # =================================================================

    def _rolls_block(self) -> bool:
        key = self.rng.time_key(self.now())
        if not self.rng.next_bool(Domain.BLOCK, self.id, key, self.block_chance):
            return False
        return self.rng.next_bool(Domain.BLOCK, self.id, key + 1, self.config.enemy_block_success_rate)

    def take_damage(self, amount: float) -> bool:
        """Apply an incoming hit.  Returns True when health was touched."""
        if self.state == ActorState.DEAD or self.invulnerable:
            return False

        if self._rolls_block():
            reduced = math.floor(amount * self.config.enemy_block_damage_mult)
            self._lose_health(reduced)
            self.emit(EventKind.BLOCKED, original=amount, applied=reduced)
            self.cue(Cue.BLOCK_PULSE)
            if self.health.current == 0:
                self.die()
                return True
            self.make_invulnerable()
            if self.state in (ActorState.IDLE, ActorState.WALKING) and not self.is_winding_up:
                self.set_state(ActorState.BLOCKING)
            return True

        self._lose_health(amount)
        if self.health.current == 0:
            self.die()
        else:
            self.set_state(ActorState.HURT)
        return True

    def die(self) -> None:
        if not self.set_state(ActorState.DEAD):
            return
        reward = self.experience_reward()
        logger.info("Enemy %d (%s, lvl %d) died; reward %d XP", self.id, self.enemy_kind.value, self.level, reward)
        self.cue(Cue.DEATH_TINT)
        self.cue(Cue.HIDE_HEALTH_BAR)
        self.emit(
            EventKind.DEATH,
            level=self.level,
            experience_reward=reward,
            item_drop_chance=self.item_drop_chance,
            enemy_kind=self.enemy_kind.value,
        )
        self.schedule(self.config.enemy_removal_delay_ms, self._mark_removed, "enemy:removal")

    def _mark_removed(self) -> None:
        if self.removed:
            return
        self.removed = True
        self.emit(EventKind.ENEMY_REMOVED)

    def experience_reward(self) -> int:
        cfg = self.config
        base = cfg.enemy_base_experience * (1 + (self.level - 1) * cfg.enemy_experience_level_scale)
        return int(math.floor(base * self.behavior.experience_multiplier))


# =====================================================================
# Factories
# =====================================================================

def make_enemy(
    kind: EnemyKind,
    enemy_id: int,
    position: Vector2,
    config: CombatConfig,
    clock: SimulationClock,
    rng: DeterministicRNG,
    level: int = 1,
    events: EventQueue | None = None,
) -> Enemy:
    return Enemy(enemy_id, position, make_behavior(kind, config), config, clock, rng, level, events)


def make_melee_enemy(enemy_id: int, position: Vector2, config: CombatConfig, clock: SimulationClock,
                     rng: DeterministicRNG, level: int = 1, events: EventQueue | None = None) -> Enemy:
    return make_enemy(EnemyKind.MELEE, enemy_id, position, config, clock, rng, level, events)


def make_ranged_enemy(enemy_id: int, position: Vector2, config: CombatConfig, clock: SimulationClock,
                      rng: DeterministicRNG, level: int = 1, events: EventQueue | None = None) -> Enemy:
    return make_enemy(EnemyKind.RANGED, enemy_id, position, config, clock, rng, level, events)
