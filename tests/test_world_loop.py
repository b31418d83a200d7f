"""End-to-end tests for the WorldLoop tick cycle.

Covers:
- Clock, movement and walkable-band clamping
- Player melee kill → reap → experience
- Potion use with per-item cooldown
- Carried item pickup and discard
- Game over after the death notification
- Determinism: same seed, same session
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from skirmish.ai.autopilot import Autopilot
from skirmish.config import CombatConfig
from skirmish.core.enums import ActorState, Domain, EnemyKind, EventKind
from skirmish.core.models import CombatEvent, PlayerCommand, Vector2
from skirmish.engine.world_loop import WorldLoop
from skirmish.systems.spawner import SPAWNER_ID
from skirmish.utils.event_log import EventLog


def _make_world(**overrides) -> WorldLoop:
    return WorldLoop(CombatConfig(**overrides))


def _disarm_spawns(world: WorldLoop) -> None:
    for point in world.spawner.spawn_points:
        point.triggered = True


class _FixedSpawnKind:
    """Wraps the session RNG so spawn-kind rolls always give the same answer."""

    def __init__(self, inner, ranged: bool) -> None:
        self._inner = inner
        self._ranged = ranged

    def next_bool(self, domain, entity_id, key, probability=0.5):
        if domain == Domain.SPAWN:
            return self._ranged
        return self._inner.next_bool(domain, entity_id, key, probability)

    def __getattr__(self, name):
        return getattr(self._inner, name)


def _spawn_one(world: WorldLoop, ranged: bool = False):
    world.context.rng = _FixedSpawnKind(world.context.rng, ranged)
    return world.spawner.spawn_at(world.spawner.spawn_points[0], world.context)


# ---------------------------------------------------------------------------
# Basic ticking
# ---------------------------------------------------------------------------

class TestTicking:

    def test_tick_advances_clock(self):
        world = _make_world()
        assert world.tick_once()
        assert world.tick == 1
        assert world.clock.now() == 50

    def test_player_moves_with_command(self):
        world = _make_world()
        world.set_command(PlayerCommand(move_x=1))
        world.tick_once()
        assert world.player.position.x == pytest.approx(210)
        assert world.player.state == ActorState.WALKING

    def test_walkable_band_clamps_player(self):
        world = _make_world()
        world.set_command(PlayerCommand(move_y=-1))
        for _ in range(40):
            world.tick_once()
        assert world.player.position.y == world.config.walkable_top

    def test_max_ticks_stops_run(self):
        world = _make_world(max_ticks=5)
        world.run()
        assert world.tick == 5
        assert world.tick_once() is False

    def test_walking_into_spawn_range_spawns(self):
        world = _make_world()
        world.player.position = Vector2(830, world.config.player_start_y)
        world.tick_once()
        assert world.spawner.enemy_count() == 2
        assert world.event_log.by_category(EventKind.ENEMY_SPAWNED.value)


# ---------------------------------------------------------------------------
# Combat through the loop
# ---------------------------------------------------------------------------

class TestCombatFlow:

    def test_player_kill_awards_experience(self):
        world = _make_world()
        _disarm_spawns(world)
        enemy = _spawn_one(world)
        enemy.block_chance = 0.0
        enemy.health.current = 20
        world.player.position = Vector2(enemy.position.x - 60, enemy.position.y)

        world.set_command(PlayerCommand(attack=True))
        world.tick_once()

        assert enemy.state == ActorState.DEAD
        assert world.spawner.enemy_count() == 0
        assert world.player.experience == 25
        assert world.event_log.by_category(EventKind.DEATH.value)

    def test_kill_count_survives_event_log_rollover(self):
        world = WorldLoop(CombatConfig(), event_log=EventLog(maxlen=2))
        _disarm_spawns(world)
        enemy = _spawn_one(world)
        enemy.block_chance = 0.0
        enemy.health.current = 20
        world.player.position = Vector2(enemy.position.x - 60, enemy.position.y)

        world.set_command(PlayerCommand(attack=True))
        world.tick_once()
        assert len(world.event_log) == 2
        assert world.event_log.by_category(EventKind.ENEMY_SPAWNED.value) == []
        assert world.spawner.kills == 1

    def test_enemy_swing_hurts_player(self):
        world = _make_world()
        _disarm_spawns(world)
        enemy = _spawn_one(world)
        world.player.position = Vector2(enemy.position.x - 50, enemy.position.y)

        # Windup starts on tick 1 (50 ms) and lands 800 ms later on tick 17
        for _ in range(16):
            world.tick_once()
        assert world.player.health.current == 100
        world.tick_once()
        assert world.player.health.current == 85
        assert world.player.state == ActorState.STUNNED

    def test_enemies_never_hit_each_other(self):
        world = _make_world()
        _disarm_spawns(world)
        first = _spawn_one(world)
        second = world.spawner.spawn_at(world.spawner.spawn_points[0], world.context)
        world.player.position = Vector2(first.position.x - 50, first.position.y)
        for _ in range(20):
            world.tick_once()
        assert first.health.current == first.health.max
        assert second.health.current == second.health.max
        assert world.player.health.current == 85

    def test_projectile_registered_and_tracked(self):
        world = _make_world()
        _disarm_spawns(world)
        enemy = _spawn_one(world, ranged=True)
        assert enemy.enemy_kind == EnemyKind.RANGED
        world.player.position = Vector2(enemy.position.x - 200, enemy.position.y)

        for _ in range(17):
            world.tick_once()
        assert len(world.projectiles) == 1
        snap = world.snapshot()
        assert snap["projectiles"][0]["owner_id"] == enemy.id

    def test_projectile_hits_player(self):
        world = _make_world()
        _disarm_spawns(world)
        enemy = _spawn_one(world, ranged=True)
        world.player.position = Vector2(enemy.position.x - 200, enemy.position.y)

        for _ in range(40):
            world.tick_once()
        assert world.player.health.current == 85
        assert world.event_log.by_category(EventKind.PROJECTILE_HIT.value)


# ---------------------------------------------------------------------------
# Inventory operations
# ---------------------------------------------------------------------------

class TestItemUse:

    def test_use_health_potion(self):
        world = _make_world()
        world.inventory.add("potion_health_small")
        world.player.health.current = 50
        result = world.use_item(0)
        assert result.success
        assert world.player.health.current == 75
        assert world.inventory.get_at(0) is None

    def test_potion_cooldown(self):
        world = _make_world()
        world.inventory.add("potion_health_small")
        world.inventory.add("potion_health_small")
        assert world.use_item(0).success
        blocked = world.use_item(1)
        assert not blocked.success
        assert blocked.reason == "cooldown"

        for _ in range(10):
            world.tick_once()
        assert world.use_item(1).success

    def test_use_empty_and_non_consumable(self):
        world = _make_world()
        world.inventory.add("item_boots_haste")
        assert world.use_item(3).reason == "empty"
        assert world.use_item(0).reason == "not_consumable"
        assert world.inventory.get_at(0) == "item_boots_haste"

    def test_dead_player_cannot_drink(self):
        world = _make_world()
        world.inventory.add("potion_health_small")
        world.player.take_damage(1000)
        assert world.use_item(0).reason == "dead"

    def test_item_used_event_logged(self):
        world = _make_world()
        world.inventory.add("potion_health_small")
        world.use_item(0)
        world.tick_once()
        assert world.event_log.by_category(EventKind.ITEM_USED.value)

    def test_pickup_and_discard_carried_item(self):
        world = _make_world()
        slot = world.inventory.add("item_boots_haste").slot_index
        world.spawner.events.push(CombatEvent(
            EventKind.ITEM_DROPPED, SPAWNER_ID, 0.0,
            {"item_id": "item_boots_haste", "added": True, "slot_index": slot, "enemy_id": 5},
        ))
        world.tick_once()
        assert world.player.speed == 260

        assert world.discard_item(slot).success
        assert world.player.speed == 200
        assert world.discard_item(slot).reason == "empty"


# ---------------------------------------------------------------------------
# Session end & determinism
# ---------------------------------------------------------------------------

class TestSessionEnd:

    def test_game_over_after_death_notification(self):
        world = _make_world()
        world.player.take_damage(1000)
        ticks = 0
        while world.tick_once():
            ticks += 1
            assert ticks < 100
        assert world.game_over
        assert world.tick == 20
        assert world.snapshot()["game_over"] is True

    def test_same_seed_same_session(self):
        a = WorldLoop(CombatConfig(world_seed=7), autopilot=Autopilot())
        b = WorldLoop(CombatConfig(world_seed=7), autopilot=Autopilot())
        for _ in range(300):
            a.tick_once()
            b.tick_once()
        assert a.snapshot() == b.snapshot()
        assert len(a.event_log) == len(b.event_log)

    def test_autopilot_makes_progress(self):
        world = WorldLoop(CombatConfig(), autopilot=Autopilot())
        for _ in range(200):
            world.tick_once()
        assert world.player.position.x > 200
