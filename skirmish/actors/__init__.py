"""Player and enemy actors."""

from skirmish.actors.player import Player
from skirmish.actors.enemy import Enemy, make_enemy, make_melee_enemy, make_ranged_enemy

__all__ = ["Enemy", "Player", "make_enemy", "make_melee_enemy", "make_ranged_enemy"]
