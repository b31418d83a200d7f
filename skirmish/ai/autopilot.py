"""Scripted player controller for headless runs and API demos."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from skirmish.core.models import IDLE_COMMAND, PlayerCommand

if TYPE_CHECKING:
    from skirmish.engine.world_loop import WorldLoop

logger = logging.getLogger(__name__)

HEALTH_POTION = "potion_health_small"


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


class Autopilot:
    """Walk right, line up with the nearest enemy, swing, block telegraphs.

    Decision order each tick:
      1. Low health and a health potion carried → drink it
      2. An enemy in reach is winding up → hold block
      3. No enemy → walk right
      4. Misaligned → close the vertical gap (and the horizontal one if far)
      5. Facing away → turn
      6. Otherwise swing
    """

    __slots__ = ("potion_threshold", "align_tolerance")

    def __init__(self, potion_threshold: float = 0.4, align_tolerance: float = 12.0) -> None:
        self.potion_threshold = potion_threshold
        self.align_tolerance = align_tolerance

    def decide(self, world: WorldLoop) -> PlayerCommand:
        player = world.player
        if not player.is_alive():
            return IDLE_COMMAND

        if player.health_percentage() < self.potion_threshold:
            slot = world.inventory.find_first(HEALTH_POTION)
            if slot is not None and world.use_item(slot).success:
                logger.debug("Autopilot drank a health potion at %d HP", player.health.current)

        enemy = world.spawner.closest_enemy(player.position)
        if enemy is None:
            return PlayerCommand(move_x=1)

        dx = enemy.position.x - player.position.x
        dy = enemy.position.y - player.position.y
        reach = player.attack_range

        if enemy.is_winding_up and abs(dx) <= enemy.attack_range + reach and abs(dy) <= world.config.enemy_vertical_tolerance:
            return PlayerCommand(block=True)

        move_y = _sign(dy) if abs(dy) > self.align_tolerance else 0
        move_x = _sign(dx) if abs(dx) > reach * 1.5 else 0
        if move_x or move_y:
            return PlayerCommand(move_x=move_x, move_y=move_y)

        direction = _sign(dx) or player.facing
        if player.facing != direction:
            return PlayerCommand(move_x=direction)

        return PlayerCommand(attack=True)
