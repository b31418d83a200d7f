"""Tests for player experience and level progression."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tests.helpers.combat_arena import CombatArena
from skirmish.actors.player import experience_threshold
from skirmish.config import CombatConfig
from skirmish.core.enums import EventKind


class TestThresholdCurve:

    def test_geometric_thresholds(self):
        cfg = CombatConfig()
        assert [experience_threshold(lvl, cfg) for lvl in (1, 2, 3, 4)] == [100, 150, 225, 337]

    def test_custom_base(self):
        cfg = CombatConfig(base_experience_to_level=50, experience_multiplier=2.0)
        assert experience_threshold(3, cfg) == 200


class TestGainExperience:

    def test_multi_level_in_one_grant(self):
        arena = CombatArena()
        player = arena.player
        gained = player.gain_experience(250)

        assert gained == 2
        assert player.level == 3
        assert player.experience == 0
        assert player.experience_to_next_level == 225
        assert player.total_experience == 250

    def test_level_up_bonuses(self):
        arena = CombatArena()
        player = arena.player
        player.gain_experience(100)

        assert player.health.max == 110
        assert player.health.current == 110
        assert player.attack_damage == 22
        assert player.speed == 205

    def test_events_per_level_and_one_gain_summary(self):
        arena = CombatArena()
        arena.player.gain_experience(250)
        level_ups = arena.events_of(EventKind.LEVEL_UP)
        assert [e.data["new_level"] for e in level_ups] == [2, 3]
        gains = arena.events_of(EventKind.EXPERIENCE_GAIN)
        assert len(gains) == 1
        assert gains[0].data["level"] == 3

    def test_partial_progress(self):
        arena = CombatArena()
        player = arena.player
        assert player.gain_experience(60) == 0
        info = player.level_info()
        assert info["experience"] == 60
        assert info["progress_pct"] == 60

    def test_negative_grant_ignored(self):
        arena = CombatArena()
        player = arena.player
        player.gain_experience(40)
        assert player.gain_experience(-30) == 0
        assert player.experience == 40
        assert player.total_experience == 40

    def test_speed_bonus_stops_at_cap(self):
        arena = CombatArena()
        player = arena.player
        player.speed = 300
        player.gain_experience(100)
        assert player.speed == 300
        bonuses = arena.events_of(EventKind.LEVEL_UP)[0].data["bonuses"]
        assert bonuses["speed"] == 0

    def test_dead_player_levels_without_healing(self):
        arena = CombatArena()
        player = arena.player
        player.take_damage(1000)
        player.gain_experience(100)
        assert player.level == 2
        assert player.health.max == 110
        assert player.health.current == 0

    def test_wounded_player_heals_by_bonus(self):
        arena = CombatArena()
        player = arena.player
        player.health.current = 40
        player.gain_experience(100)
        assert player.health.current == 50
