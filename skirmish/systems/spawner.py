"""Enemy spawner — proximity-triggered spawn points, reaping, XP and loot drops."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from skirmish.actors.enemy import make_enemy
from skirmish.core.enums import Domain, EnemyKind, EventKind
from skirmish.core.models import CombatEvent, Vector2
from skirmish.engine.event_queue import EventQueue

if TYPE_CHECKING:
    from skirmish.actors.enemy import Enemy
    from skirmish.actors.player import Player
    from skirmish.ai.context import CombatContext
    from skirmish.config import CombatConfig

logger = logging.getLogger(__name__)

SPAWNER_ID = -1

# Level-banded loot pools, keyed by tier name
DROP_POOLS: dict[str, tuple[str, ...]] = {
    "low": ("potion_health_small",),
    "mid": ("potion_health_small", "potion_attack_tonic", "potion_speed_draught"),
    "high": ("potion_attack_tonic", "potion_speed_draught", "item_boots_haste", "item_amulet_strength"),
    "elite": ("item_boots_haste", "item_amulet_strength", "item_ring_vitality"),
}


def drop_tier(level: int) -> str:
    """Levels 1–2 low, 3–5 mid, 6–8 high, 9+ elite."""
    if level <= 2:
        return "low"
    if level <= 5:
        return "mid"
    if level <= 8:
        return "high"
    return "elite"


@dataclass(slots=True)
class SpawnPoint:
    """A one-shot spawn trigger.  ``triggered`` only goes back to False on reset."""

    index: int
    position: Vector2
    trigger_distance: float
    triggered: bool = False

    def in_range(self, player_x: float) -> bool:
        return abs(player_x - self.position.x) <= self.trigger_distance

    def reset(self) -> None:
        self.triggered = False


def build_spawn_points(config: CombatConfig) -> list[SpawnPoint]:
    """One near-top and one near-bottom point every ``spawn_interval`` px past the first screen."""
    top_y = config.walkable_top + config.spawn_offset_from_edge
    bottom_y = config.walkable_bottom - config.spawn_offset_from_edge
    points: list[SpawnPoint] = []
    x = float(config.screen_width)
    while x < config.world_width:
        for y in (top_y, bottom_y):
            points.append(SpawnPoint(len(points), Vector2(x, y), config.spawn_trigger_distance))
        x += config.spawn_interval
    return points


class EnemySpawner:
    """Owns live enemies, dying enemies awaiting removal and the spawn points.

    Sole authority for the concurrent-enemy cap.  Enemies are ticked in
    insertion order; removals compact the list without reordering it.
    """

    __slots__ = ("_config", "_player", "_events", "_enemies", "_dying", "spawn_points", "max_enemies", "kills")

    def __init__(self, config: CombatConfig, player: Player, events: EventQueue | None = None) -> None:
        self._config = config
        self._player = player
        self._events = events if events is not None else EventQueue()
        self._enemies: list[Enemy] = []
        self._dying: list[Enemy] = []
        self.spawn_points = build_spawn_points(config)
        self.max_enemies = config.max_enemies
        self.kills = 0
        logger.debug("Created %d spawn points", len(self.spawn_points))

    @property
    def events(self) -> EventQueue:
        return self._events

    def _emit(self, ctx: CombatContext, kind: EventKind, **data: Any) -> None:
        self._events.push(CombatEvent(kind=kind, source_id=SPAWNER_ID, at_ms=ctx.now(), data=data))

    # -- per tick --

    def update(self, ctx: CombatContext) -> None:
        """Spawn on triggers, tick live enemies, reap the dead, age the dying."""
        self.check_triggers(ctx)
        for enemy in list(self._enemies):
            enemy.update(ctx)
        self.reap_dead(ctx)
        self.update_dying()

    def check_triggers(self, ctx: CombatContext) -> list[Enemy]:
        spawned: list[Enemy] = []
        player_x = ctx.player_position().x
        for point in self.spawn_points:
            if point.triggered or len(self._enemies) >= self.max_enemies:
                continue
            if point.in_range(player_x):
                spawned.append(self.spawn_at(point, ctx))
                point.triggered = True
        return spawned

    def spawn_at(self, point: SpawnPoint, ctx: CombatContext) -> Enemy:
        cfg = self._config
        now = ctx.now()
        kind = EnemyKind.RANGED if ctx.rng.next_bool(
            Domain.SPAWN, point.index, ctx.rng.time_key(now), cfg.ranged_spawn_chance) else EnemyKind.MELEE
        level = ctx.player_level()

        enemy = make_enemy(kind, ctx.next_id(), point.position, cfg, ctx.clock, ctx.rng, level, self._events)
        if enemy.frame_height > 0:
            enemy.display_scale = self._player.display_height / enemy.frame_height
        self._enemies.append(enemy)

        self._emit(
            ctx, EventKind.ENEMY_SPAWNED,
            enemy_id=enemy.id, enemy_kind=kind.value, level=level,
            position=point.position, spawn_point=point.index,
        )
        logger.info(
            "Spawned level %d %s enemy %d at %s (active: %d)",
            level, kind.value, enemy.id, point.position, len(self._enemies),
        )
        return enemy

    def reap_dead(self, ctx: CombatContext) -> list[Enemy]:
        """Move dead enemies to the dying list, award XP and roll loot."""
        dead = [e for e in self._enemies if not e.is_alive()]
        if not dead:
            return []
        self._enemies = [e for e in self._enemies if e.is_alive()]
        self.kills += len(dead)
        for enemy in dead:
            self._dying.append(enemy)
            reward = enemy.experience_reward()
            self._player.gain_experience(reward)
            logger.info("Player gained %d XP from level %d enemy %d", reward, enemy.level, enemy.id)
            self._roll_drop(enemy, ctx)
        return dead

    def update_dying(self) -> None:
        for enemy in self._dying:
            enemy.process_timers()
        self._dying = [e for e in self._dying if not e.removed]

    # -- loot --

    def select_item_for_level(self, level: int, ctx: CombatContext, entity_id: int) -> str:
        pool = DROP_POOLS[drop_tier(level)]
        index = ctx.rng.next_int(Domain.LOOT, entity_id, ctx.rng.time_key(ctx.now(), 1), 0, len(pool) - 1)
        return pool[index]

    def _roll_drop(self, enemy: Enemy, ctx: CombatContext) -> None:
        if not ctx.rng.next_bool(Domain.LOOT, enemy.id, ctx.rng.time_key(ctx.now()), enemy.item_drop_chance):
            return
        item_id = self.select_item_for_level(enemy.level, ctx, enemy.id)
        added = False
        slot_index = None
        inventory = ctx.inventory
        if inventory is not None and not inventory.is_full():
            result = inventory.add(item_id)
            added = result.success
            slot_index = result.slot_index
        self._emit(
            ctx, EventKind.ITEM_DROPPED,
            item_id=item_id, added=added, slot_index=slot_index, enemy_id=enemy.id,
        )
        logger.info("Enemy %d dropped %s (added=%s)", enemy.id, item_id, added)

    # -- queries --

    def active_enemies(self) -> list[Enemy]:
        return [e for e in self._enemies if e.is_alive()]

    def dying_enemies(self) -> list[Enemy]:
        return list(self._dying)

    def enemy_count(self) -> int:
        return len(self._enemies)

    def closest_enemy(self, pos: Vector2) -> Enemy | None:
        best: Enemy | None = None
        best_dist = float("inf")
        for enemy in self._enemies:
            if not enemy.is_alive():
                continue
            d = pos.distance(enemy.position)
            if d < best_dist:
                best, best_dist = enemy, d
        return best

    def reset(self) -> None:
        for point in self.spawn_points:
            point.reset()
        self._enemies = []
        self._dying = []
        self.kills = 0
