"""Tests for DeterministicRNG and the time-keyed roll scheme."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tests.helpers.combat_arena import CombatArena, ScriptedRNG
from skirmish.core.enums import Domain
from skirmish.systems.rng import DeterministicRNG


class TestDeterministicRNG:

    def test_same_inputs_same_roll(self):
        a = DeterministicRNG(7)
        b = DeterministicRNG(7)
        assert a.next_float(Domain.BLOCK, 3, 100) == b.next_float(Domain.BLOCK, 3, 100)

    def test_domains_entities_and_seeds_are_separated(self):
        rng = DeterministicRNG(7)
        base = rng.next_float(Domain.BLOCK, 3, 100)
        assert rng.next_float(Domain.LOOT, 3, 100) != base
        assert rng.next_float(Domain.BLOCK, 4, 100) != base
        assert DeterministicRNG(8).next_float(Domain.BLOCK, 3, 100) != base

    def test_float_range(self):
        rng = DeterministicRNG(1)
        for key in range(200):
            assert 0.0 <= rng.next_float(Domain.SPAWN, 0, key) < 1.0

    def test_int_bounds_inclusive(self):
        rng = DeterministicRNG(1)
        seen = {rng.next_int(Domain.LOOT, 0, key, 0, 2) for key in range(300)}
        assert seen == {0, 1, 2}

    def test_bool_extremes(self):
        rng = DeterministicRNG(1)
        assert not any(rng.next_bool(Domain.BLOCK, 0, key, 0.0) for key in range(50))
        assert all(rng.next_bool(Domain.BLOCK, 0, key, 1.0) for key in range(50))


class TestTimeKey:

    def test_salted_keys_never_collide_across_milliseconds(self):
        keys = {DeterministicRNG.time_key(ms, salt) for ms in range(100) for salt in (0, 1)}
        assert len(keys) == 200

    def test_fractional_time_truncated(self):
        assert DeterministicRNG.time_key(12.9) == 24
        assert DeterministicRNG.time_key(12.9, 1) == 25

    def test_block_rolls_use_consecutive_keys(self):
        arena = CombatArena(rng=ScriptedRNG([0.1, 0.5]))
        enemy = arena.add_melee_enemy(500, 500)
        arena.clock.advance(150)
        arena.rng.calls.clear()
        enemy.take_damage(20)
        assert arena.rng.calls == [(Domain.BLOCK, enemy.id, 300), (Domain.BLOCK, enemy.id, 301)]
