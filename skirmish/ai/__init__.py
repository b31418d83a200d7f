"""AI layer: combat context, enemy behaviors, targeting and the player autopilot."""

from skirmish.ai.autopilot import Autopilot
from skirmish.ai.behaviors import BEHAVIORS, Behavior, MeleeBehavior, RangedBehavior, make_behavior
from skirmish.ai.context import CombatContext

__all__ = [
    "Autopilot",
    "BEHAVIORS",
    "Behavior",
    "CombatContext",
    "MeleeBehavior",
    "RangedBehavior",
    "make_behavior",
]
