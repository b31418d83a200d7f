"""Enemy behaviors — class-based, registered by EnemyKind.

Architecture:
  - An Enemy is one record; its fighting style is a Behavior variant
    composed in, never a subclass.
  - ``decide`` runs only when the owning enemy is free to act (not busy,
    not winding up, action cooldown elapsed).  It sets velocity / facing and
    may commit an action (windup or retreat) by stamping
    ``last_action_time``.
  - ``attack`` runs when a windup completes and emits the attack intent.
  - New behaviors are added by creating a class and inserting one entry in
    BEHAVIORS.

Melee policy:
  in detection range → aligned & in reach: windup (or hold if cooling down)
                     → otherwise: step along the single worse axis
  beyond detection   → stop

Ranged policy (stand-off envelope):
  closer than min distance       → retreat directly away (commits an action)
  in [min, range] and aligned    → windup, then fire a projectile
  in range but misaligned        → reposition vertically
  in (range, range + margin]     → close distance
  beyond                         → stop
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from skirmish.ai.targeting import (
    axis_priority_step,
    direction_away_from,
    direction_toward,
    is_vertically_aligned,
    predict_aim_point,
)
from skirmish.combat.projectile import Projectile
from skirmish.core.enums import AttackKind, EnemyKind, EventKind
from skirmish.core.models import AttackIntent, Vector2

if TYPE_CHECKING:
    from skirmish.actors.enemy import Enemy
    from skirmish.ai.context import CombatContext
    from skirmish.config import CombatConfig

logger = logging.getLogger(__name__)


class Behavior(ABC):
    """Base class for enemy fighting styles."""

    kind: EnemyKind
    experience_multiplier: float = 1.0

    def configure(self, enemy: Enemy, config: CombatConfig) -> None:
        """Adjust the enemy's stats for this style at construction."""

    def orient(self, enemy: Enemy, ctx: CombatContext) -> None:
        """Per-tick facing update, run even while busy."""

    @abstractmethod
    def decide(self, enemy: Enemy, ctx: CombatContext) -> None:
        ...

    @abstractmethod
    def attack(self, enemy: Enemy, ctx: CombatContext) -> AttackIntent | None:
        ...


# =====================================================================
# Melee
# =====================================================================

class MeleeBehavior(Behavior):
    """Close in on one axis at a time, telegraph, then swing."""

    kind = EnemyKind.MELEE

    def decide(self, enemy: Enemy, ctx: CombatContext) -> None:
        target = ctx.player_position()
        dx = target.x - enemy.position.x
        dy = target.y - enemy.position.y
        distance = enemy.position.distance(target)
        tolerance = ctx.config.enemy_vertical_tolerance

        if distance > enemy.detection_range:
            enemy.stop()
            return

        enemy.face_toward(target.x)
        if abs(dx) <= enemy.attack_range and is_vertically_aligned(dy, tolerance):
            enemy.stop()
            if enemy.can_attack():
                enemy.start_attack_windup(ctx)
            return

        enemy.velocity = axis_priority_step(dx, dy, enemy.attack_range, tolerance, enemy.speed)

    def attack(self, enemy: Enemy, ctx: CombatContext) -> AttackIntent | None:
        origin = Vector2(enemy.position.x + enemy.facing * enemy.attack_range, enemy.position.y)
        intent = AttackIntent(
            attacker_id=enemy.id,
            origin=origin,
            facing=enemy.facing,
            damage=enemy.attack_damage,
            range=enemy.attack_range,
            kind=AttackKind.MELEE,
        )
        enemy.emit(EventKind.ATTACK, intent=intent)
        return intent


# =====================================================================
# Ranged
# =====================================================================

class RangedBehavior(Behavior):
    """Hold a stand-off distance and shoot leading projectiles."""

    kind = EnemyKind.RANGED

    def __init__(self, config: CombatConfig) -> None:
        self.projectile_speed = config.projectile_speed
        self.projectile_range = config.projectile_range
        self.min_attack_distance = config.ranged_min_attack_distance
        self.detection_margin = config.ranged_detection_margin
        self.retreat_speed_mult = config.ranged_retreat_speed_mult
        self.lead_factor = config.projectile_lead_factor
        self.spawn_offset = config.projectile_spawn_offset
        self.experience_multiplier = config.ranged_experience_mult

    def configure(self, enemy: Enemy, config: CombatConfig) -> None:
        enemy.attack_range = config.ranged_attack_range
        enemy.detection_range = config.ranged_attack_range + self.detection_margin
        max_health = int(math.floor(config.enemy_max_health * config.ranged_health_mult))
        enemy.health.max = max_health
        enemy.health.current = max_health

    def orient(self, enemy: Enemy, ctx: CombatContext) -> None:
        enemy.face_toward(ctx.player_position().x)

    def decide(self, enemy: Enemy, ctx: CombatContext) -> None:
        target = ctx.player_position()
        dx = target.x - enemy.position.x
        dy = target.y - enemy.position.y
        distance = enemy.position.distance(target)
        aligned = is_vertically_aligned(dy, ctx.config.enemy_vertical_tolerance)

        if distance <= enemy.attack_range:
            if distance < self.min_attack_distance:
                away = direction_away_from(enemy.position, target)
                enemy.velocity = away.scaled(enemy.speed * self.retreat_speed_mult)
                enemy.last_action_time = ctx.now()
            elif abs(dx) <= enemy.attack_range and aligned:
                enemy.stop()
                if enemy.can_attack():
                    enemy.start_attack_windup(ctx)
            else:
                enemy.velocity = Vector2(0.0, math.copysign(enemy.speed, dy))
        elif distance <= enemy.detection_range:
            enemy.velocity = direction_toward(enemy.position, target).scaled(enemy.speed)
        else:
            enemy.stop()

    def attack(self, enemy: Enemy, ctx: CombatContext) -> AttackIntent | None:
        target = ctx.player_position()
        aim = predict_aim_point(
            enemy.position, target, ctx.player_velocity(), self.projectile_speed, self.lead_factor,
        )
        direction = direction_toward(enemy.position, aim)
        if direction.is_zero:
            direction = Vector2(float(enemy.facing), 0.0)

        projectile = Projectile(
            ctx.next_id(),
            enemy.position + direction.scaled(self.spawn_offset),
            direction.scaled(self.projectile_speed),
            enemy.attack_damage,
            self.projectile_range,
            clock=ctx.clock,
            events=enemy.events,
            owner=enemy,
            radius=ctx.config.projectile_radius,
            lifetime_ms=ctx.config.projectile_lifetime_ms,
        )
        intent = AttackIntent(
            attacker_id=enemy.id,
            origin=enemy.position,
            facing=enemy.facing,
            damage=enemy.attack_damage,
            range=enemy.attack_range,
            kind=AttackKind.RANGED,
        )
        enemy.emit(EventKind.ATTACK, intent=intent)
        enemy.emit(EventKind.PROJECTILE_FIRED, projectile=projectile, owner=enemy.id)
        logger.debug("Ranged enemy %d fired projectile %d toward %s", enemy.id, projectile.id, aim)
        return intent


# =====================================================================
# Registry
# =====================================================================

def make_behavior(kind: EnemyKind, config: CombatConfig) -> Behavior:
    """Build the behavior registered for *kind*."""
    factory = BEHAVIORS[kind]
    return factory(config)


BEHAVIORS = {
    EnemyKind.MELEE: lambda config: MeleeBehavior(),
    EnemyKind.RANGED: RangedBehavior,
}

