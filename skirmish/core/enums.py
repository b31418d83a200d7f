"""Enumerations used throughout the combat core."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class ActorState(IntEnum):
    """Finite-state-machine states shared by the player and enemies.

    STUNNED is only entered by the player; enemies recoil through HURT.
    """

    IDLE = 0
    WALKING = 1
    ATTACKING = 2
    HURT = 3
    STUNNED = 4
    BLOCKING = 5
    DEAD = 6


# States during which neither AI nor player commands may start a new action
BUSY_STATES = frozenset({
    ActorState.ATTACKING,
    ActorState.HURT,
    ActorState.STUNNED,
    ActorState.BLOCKING,
})


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    BLOCK = 0
    LOOT = 1
    SPAWN = 2
    AI_DECISION = 3


@unique
class AttackKind(str, Enum):
    """How an attack intent delivers its damage."""

    MELEE = "melee"
    RANGED = "ranged"


@unique
class EnemyKind(str, Enum):
    """Behavior variants an enemy can be built with."""

    MELEE = "melee"
    RANGED = "ranged"


@unique
class Stat(str, Enum):
    """Actor stats that items and potions may modify."""

    ATTACK_DAMAGE = "attack_damage"
    MAX_HEALTH = "max_health"
    SPEED = "speed"


@unique
class EventKind(str, Enum):
    """Outbound notifications drained by the world loop each tick."""

    ATTACK = "attack"
    DAMAGE = "damage"
    HEAL = "heal"
    DEATH = "death"
    LEVEL_UP = "level_up"
    EXPERIENCE_GAIN = "experience_gain"
    PROJECTILE_FIRED = "projectile_fired"
    PROJECTILE_HIT = "projectile_hit"
    PROJECTILE_EXPIRED = "projectile_expired"
    BLOCKED = "blocked"
    WINDUP = "windup"
    ATTACK_CANCELLED = "attack_cancelled"
    ENEMY_SPAWNED = "enemy_spawned"
    ENEMY_REMOVED = "enemy_removed"
    ITEM_DROPPED = "item_dropped"
    ITEM_USED = "item_used"
    STAT_CHANGED = "stat_changed"
    CUE = "cue"                 # Presentation-only signal (tint, pulse, fade)


@unique
class Cue(str, Enum):
    """Presentation cues the renderer may react to.  The core never waits on them."""

    BLOCK_PULSE = "block_pulse"
    INVULNERABLE_FLASH = "invulnerable_flash"
    HURT_TINT = "hurt_tint"
    CLEAR_TINT = "clear_tint"
    TELEGRAPH_TINT = "telegraph_tint"
    DEATH_TINT = "death_tint"
    HIDE_HEALTH_BAR = "hide_health_bar"
    FADE_OUT = "fade_out"
    IMPACT_PULSE = "impact_pulse"
