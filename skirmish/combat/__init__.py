"""Combat resolution: projectiles and distance-based hit testing."""

from skirmish.combat.projectile import Projectile
from skirmish.combat.resolver import CombatResolver

__all__ = ["CombatResolver", "Projectile"]
