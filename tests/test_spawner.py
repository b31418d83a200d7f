"""Tests for the EnemySpawner: spawn points, cap, reaping, XP and loot.

Covers:
- Spawn point layout and one-shot latching
- Concurrent-enemy cap
- Kind roll, level matching and display scaling
- Reaping awards experience and rolls loot into the inventory
- Full inventory refuses drops
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from tests.helpers.combat_arena import CombatArena, ScriptedRNG
from skirmish.config import CombatConfig
from skirmish.core.enums import EnemyKind, EventKind
from skirmish.systems.spawner import DROP_POOLS, EnemySpawner, build_spawn_points, drop_tier


def _make_spawner(rng: ScriptedRNG | None = None) -> tuple[CombatArena, EnemySpawner]:
    arena = CombatArena(rng=rng)
    spawner = EnemySpawner(arena.config, arena.player, arena.events)
    return arena, spawner


# ---------------------------------------------------------------------------
# Spawn points
# ---------------------------------------------------------------------------

class TestSpawnPoints:

    def test_layout(self):
        points = build_spawn_points(CombatConfig())
        xs = sorted({p.position.x for p in points})
        assert xs == [1024, 1424, 1824, 2224, 2624]
        ys = sorted({p.position.y for p in points})
        assert ys == [434, 718]
        assert len(points) == 10

    def test_trigger_is_horizontal_distance(self):
        _, spawner = _make_spawner()
        point = spawner.spawn_points[0]
        assert point.in_range(824)
        assert not point.in_range(823)

    def test_triggers_once(self):
        arena, spawner = _make_spawner()
        arena.place_player(1000, 600)
        first = spawner.check_triggers(arena.ctx)
        second = spawner.check_triggers(arena.ctx)
        assert len(first) == 2
        assert second == []
        assert spawner.spawn_points[0].triggered
        assert spawner.spawn_points[1].triggered

    def test_cap_leaves_points_armed(self):
        arena, spawner = _make_spawner()
        arena.place_player(1224, 600)
        spawned = spawner.check_triggers(arena.ctx)
        assert len(spawned) == 3
        assert spawner.enemy_count() == 3
        assert [p.triggered for p in spawner.spawn_points[:4]] == [True, True, True, False]

    def test_reset_rearms_points(self):
        arena, spawner = _make_spawner()
        arena.place_player(1000, 600)
        spawner.check_triggers(arena.ctx)
        spawner.reset()
        assert spawner.enemy_count() == 0
        assert not any(p.triggered for p in spawner.spawn_points)


# ---------------------------------------------------------------------------
# Spawned enemies
# ---------------------------------------------------------------------------

class TestSpawnedEnemies:

    def test_default_roll_spawns_melee(self):
        arena, spawner = _make_spawner()
        enemy = spawner.spawn_at(spawner.spawn_points[0], arena.ctx)
        assert enemy.enemy_kind == EnemyKind.MELEE

    def test_low_roll_spawns_ranged(self):
        arena, spawner = _make_spawner(ScriptedRNG([0.1]))
        enemy = spawner.spawn_at(spawner.spawn_points[0], arena.ctx)
        assert enemy.enemy_kind == EnemyKind.RANGED

    def test_level_matches_player(self):
        arena, spawner = _make_spawner()
        arena.player.level = 4
        enemy = spawner.spawn_at(spawner.spawn_points[0], arena.ctx)
        assert enemy.level == 4

    def test_display_matches_player_height(self):
        arena, spawner = _make_spawner()
        enemy = spawner.spawn_at(spawner.spawn_points[0], arena.ctx)
        assert enemy.display_height == pytest.approx(arena.player.display_height)

    def test_spawn_event(self):
        arena, spawner = _make_spawner()
        enemy = spawner.spawn_at(spawner.spawn_points[3], arena.ctx)
        spawned = arena.events_of(EventKind.ENEMY_SPAWNED)
        assert spawned[0].data["enemy_id"] == enemy.id
        assert spawned[0].data["spawn_point"] == 3

    def test_closest_enemy(self):
        arena, spawner = _make_spawner()
        top = spawner.spawn_at(spawner.spawn_points[0], arena.ctx)
        spawner.spawn_at(spawner.spawn_points[1], arena.ctx)
        assert spawner.closest_enemy(top.position) is top


# ---------------------------------------------------------------------------
# Reaping, experience and loot
# ---------------------------------------------------------------------------

class TestReaping:

    def test_reap_awards_experience(self):
        arena, spawner = _make_spawner()
        enemy = spawner.spawn_at(spawner.spawn_points[0], arena.ctx)
        enemy.take_damage(1000)

        reaped = spawner.reap_dead(arena.ctx)
        assert reaped == [enemy]
        assert spawner.enemy_count() == 0
        assert spawner.dying_enemies() == [enemy]
        assert arena.player.experience == 25

    def test_reap_is_once_per_enemy(self):
        arena, spawner = _make_spawner()
        enemy = spawner.spawn_at(spawner.spawn_points[0], arena.ctx)
        enemy.take_damage(1000)
        spawner.reap_dead(arena.ctx)
        spawner.reap_dead(arena.ctx)
        assert arena.player.experience == 25

    def test_reap_counts_kills(self):
        arena, spawner = _make_spawner()
        for point in spawner.spawn_points[:2]:
            spawner.spawn_at(point, arena.ctx).take_damage(1000)
        spawner.reap_dead(arena.ctx)
        spawner.reap_dead(arena.ctx)
        assert spawner.kills == 2

        spawner.reset()
        assert spawner.kills == 0

    def test_dying_enemy_removed_after_delay(self):
        arena, spawner = _make_spawner()
        enemy = spawner.spawn_at(spawner.spawn_points[0], arena.ctx)
        enemy.take_damage(1000)
        spawner.reap_dead(arena.ctx)

        arena.clock.advance(1999)
        spawner.update_dying()
        assert spawner.dying_enemies() == [enemy]
        arena.clock.advance(1)
        spawner.update_dying()
        assert spawner.dying_enemies() == []

    def test_no_drop_on_failed_roll(self):
        arena, spawner = _make_spawner()
        enemy = spawner.spawn_at(spawner.spawn_points[0], arena.ctx)
        enemy.take_damage(1000)
        spawner.reap_dead(arena.ctx)
        assert arena.events_of(EventKind.ITEM_DROPPED) == []
        assert len(arena.inventory) == 0

    def test_drop_goes_into_inventory(self):
        arena, spawner = _make_spawner()
        enemy = spawner.spawn_at(spawner.spawn_points[0], arena.ctx)
        enemy.take_damage(1000)
        arena.rng.script(0.1, 0.0)
        spawner.reap_dead(arena.ctx)

        assert arena.inventory.get_at(0) == "potion_health_small"
        dropped = arena.events_of(EventKind.ITEM_DROPPED)[0]
        assert dropped.data["added"] is True
        assert dropped.data["slot_index"] == 0
        assert dropped.data["enemy_id"] == enemy.id

    def test_full_inventory_refuses_drop(self):
        arena, spawner = _make_spawner()
        for _ in range(6):
            arena.inventory.add("potion_health_small")
        enemy = spawner.spawn_at(spawner.spawn_points[0], arena.ctx)
        enemy.take_damage(1000)
        arena.rng.script(0.1, 0.0)
        spawner.reap_dead(arena.ctx)

        dropped = arena.events_of(EventKind.ITEM_DROPPED)[0]
        assert dropped.data["added"] is False
        assert dropped.data["slot_index"] is None
        assert len(arena.inventory) == 6

    def test_high_level_enemy_draws_from_its_tier(self):
        arena, spawner = _make_spawner()
        arena.player.level = 9
        enemy = spawner.spawn_at(spawner.spawn_points[0], arena.ctx)
        enemy.take_damage(1000)
        arena.rng.script(0.1, 0.99)
        spawner.reap_dead(arena.ctx)
        assert arena.inventory.get_at(0) == DROP_POOLS["elite"][-1]


class TestDropTiers:

    @pytest.mark.parametrize("level,tier", [
        (1, "low"), (2, "low"), (3, "mid"), (5, "mid"),
        (6, "high"), (8, "high"), (9, "elite"), (20, "elite"),
    ])
    def test_tier_bands(self, level, tier):
        assert drop_tier(level) == tier

    def test_pools_only_hold_registered_items(self):
        from skirmish.items.registry import ITEM_REGISTRY
        for pool in DROP_POOLS.values():
            assert all(item_id in ITEM_REGISTRY for item_id in pool)
