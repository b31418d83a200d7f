"""CombatContext — everything an enemy needs to decide and act in one tick."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from skirmish.core.models import Vector2

if TYPE_CHECKING:
    from skirmish.actors.player import Player
    from skirmish.config import CombatConfig
    from skirmish.core.models import Bounds
    from skirmish.engine.clock import SimulationClock
    from skirmish.items.inventory import InventoryPort
    from skirmish.systems.rng import DeterministicRNG


@dataclass(slots=True)
class CombatContext:
    """Read-only view of the world handed to behaviors and the spawner.

    Player data is exposed through accessors rather than the Player object
    so enemies never hold a reference they could mutate.  Extend this to
    add new world inputs without changing behavior signatures.
    """

    config: CombatConfig
    clock: SimulationClock
    rng: DeterministicRNG
    bounds: Bounds
    player_position: Callable[[], Vector2]
    player_velocity: Callable[[], Vector2]
    player_alive: Callable[[], bool] = lambda: True
    player_level: Callable[[], int] = lambda: 1
    inventory: InventoryPort | None = None
    next_id: Callable[[], int] = field(default_factory=lambda: itertools.count(1).__next__)

    def now(self) -> float:
        return self.clock.now()

    @classmethod
    def for_player(
        cls,
        player: Player,
        config: CombatConfig,
        clock: SimulationClock,
        rng: DeterministicRNG,
        bounds: Bounds,
        inventory: InventoryPort | None = None,
        next_id: Callable[[], int] | None = None,
    ) -> CombatContext:
        ctx = cls(
            config=config,
            clock=clock,
            rng=rng,
            bounds=bounds,
            player_position=lambda: player.position,
            player_velocity=lambda: player.velocity,
            player_alive=player.is_alive,
            player_level=lambda: player.level,
            inventory=inventory,
        )
        if next_id is not None:
            ctx.next_id = next_id
        return ctx
