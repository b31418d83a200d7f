"""Tests for projectile flight, expiry and the single-hit latch."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from skirmish.combat.projectile import Projectile
from skirmish.core.enums import EventKind
from skirmish.core.models import Bounds, Vector2
from skirmish.engine.clock import SimulationClock
from skirmish.engine.event_queue import EventQueue

BOUNDS = Bounds(0.0, 0.0, 3000.0, 768.0)


def _make_projectile(
    pos: tuple = (500, 400),
    vel: tuple = (200, 0),
    max_range: float = 400.0,
    lifetime_ms: float = 5000.0,
) -> tuple[Projectile, EventQueue]:
    events = EventQueue()
    projectile = Projectile(
        7, Vector2(*pos), Vector2(*vel), 15, max_range,
        clock=SimulationClock(), events=events, lifetime_ms=lifetime_ms,
    )
    return projectile, events


def _fly(projectile: Projectile, max_steps: int = 500, dt: float = 50.0) -> int:
    steps = 0
    while not projectile.destroyed and steps < max_steps:
        projectile.advance(dt, BOUNDS)
        steps += 1
    return steps


class _Target:
    """Minimal stand-in carrying only what a hit report reads."""

    def __init__(self, tid: int) -> None:
        self.id = tid


class TestProjectileFlight:

    def test_moves_by_velocity(self):
        projectile, _ = _make_projectile()
        projectile.advance(500, BOUNDS)
        assert projectile.position == Vector2(600, 400)
        assert projectile.distance_traveled == 100
        assert projectile.active

    def test_expires_at_max_range(self):
        projectile, events = _make_projectile()
        steps = _fly(projectile)
        assert steps == 40
        assert projectile.destroy_reason == "range"
        expired = [e for e in events.drain() if e.kind == EventKind.PROJECTILE_EXPIRED]
        assert len(expired) == 1
        assert expired[0].data["reason"] == "range"

    def test_expires_leaving_world(self):
        projectile, _ = _make_projectile(pos=(10, 400), vel=(-200, 0))
        _fly(projectile)
        assert projectile.destroy_reason == "out_of_bounds"

    def test_expires_at_lifetime(self):
        projectile, _ = _make_projectile(vel=(0, 0))
        steps = _fly(projectile)
        assert steps == 100
        assert projectile.destroy_reason == "lifetime"

    def test_destroyed_projectile_stays_put(self):
        projectile, _ = _make_projectile()
        projectile.destroy("range")
        projectile.advance(500, BOUNDS)
        assert projectile.position == Vector2(500, 400)
        assert projectile.velocity.is_zero


class TestProjectileHit:

    def test_hit_latches_once(self):
        projectile, events = _make_projectile()
        assert projectile.hit_target(_Target(0)) is True
        assert projectile.hit_target(_Target(0)) is False
        assert projectile.destroyed
        assert projectile.destroy_reason == "hit"

        kinds = [e.kind for e in events.drain()]
        assert kinds.count(EventKind.PROJECTILE_HIT) == 1
        assert EventKind.PROJECTILE_EXPIRED not in kinds

    def test_hit_payload(self):
        projectile, events = _make_projectile()
        projectile.hit_target(_Target(3))
        hit = [e for e in events.drain() if e.kind == EventKind.PROJECTILE_HIT][0]
        assert hit.source_id == 7
        assert hit.data["target"] == 3
        assert hit.data["damage"] == 15

    def test_no_hit_after_expiry(self):
        projectile, _ = _make_projectile()
        projectile.destroy("lifetime")
        assert projectile.hit_target(_Target(0)) is False
