"""Distance-based hit resolution for attack intents and projectiles."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from skirmish.core.enums import AttackKind

if TYPE_CHECKING:
    from skirmish.combat.projectile import Projectile
    from skirmish.config import CombatConfig
    from skirmish.core.actor import Actor
    from skirmish.core.models import AttackIntent

logger = logging.getLogger(__name__)


class CombatResolver:
    """Validates and applies hits in deterministic order.

    Resolution policies:
    - Melee: every living target other than the attacker whose position lies
      within ``intent.range`` of ``intent.origin`` takes ``intent.damage``.
    - Ranged: intents are informational; damage flows through projectiles.
    - Projectile: hits the target when within ``projectile.radius`` plus the
      target hit radius.  The projectile latches so it hits at most once.
    Targets are visited in ascending actor-id order.
    """

    __slots__ = ("_hit_radius",)

    def __init__(self, config: CombatConfig) -> None:
        self._hit_radius = config.player_hit_radius

    def resolve(self, intent: AttackIntent, targets: Iterable[Actor]) -> list[Actor]:
        """Apply *intent* to *targets*.  Returns the targets whose health changed."""
        if intent.kind == AttackKind.RANGED:
            return []

        hit: list[Actor] = []
        for target in sorted(targets, key=lambda a: a.id):
            if not self._can_hit(intent, target):
                continue
            if target.take_damage(intent.damage):
                hit.append(target)

        if hit:
            logger.debug("Attack by %d hit %s", intent.attacker_id, [t.id for t in hit])
        return hit

    def resolve_projectile(self, projectile: Projectile, target: Actor) -> bool:
        """Test one projectile against *target*.  Returns True on a damaging hit."""
        if projectile.destroyed or projectile.has_hit_target or not target.is_alive():
            return False
        if projectile.position.distance(target.position) > projectile.radius + self._hit_radius:
            return False
        projectile.hit_target(target)
        return target.take_damage(projectile.damage)

    # -- internals --

    @staticmethod
    def _can_hit(intent: AttackIntent, target: Actor) -> bool:
        if target.id == intent.attacker_id or not target.is_alive():
            return False
        return intent.origin.distance(target.position) <= intent.range
