"""Applying potion effects and carried-item modifiers to an actor.

Every stat change goes through ``Actor.adjust_stat`` so the actor emits a
``stat_changed`` event and keeps its health invariants.  Timed buffs reverse
themselves on the actor's own timer queue.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from skirmish.items.registry import HealEffect, StatModifier, TimedBuff

if TYPE_CHECKING:
    from skirmish.core.actor import Actor
    from skirmish.items.registry import PotionEffect

logger = logging.getLogger(__name__)


def apply_modifiers(actor: Actor, modifiers: Iterable[StatModifier], sign: int = 1) -> None:
    """Apply each modifier with the given sign (+1 on pickup, -1 on discard)."""
    for mod in modifiers:
        actor.adjust_stat(mod.stat, mod.amount * sign)


def apply_potion(actor: Actor, effect: PotionEffect) -> bool:
    """Consume one potion effect.  Returns False when it had no target to act on."""
    if not actor.is_alive():
        return False

    if isinstance(effect, HealEffect):
        actor.heal(effect.amount)
        return True

    if isinstance(effect, TimedBuff):
        mod = effect.modifier
        actor.adjust_stat(mod.stat, mod.amount)
        actor.schedule(effect.duration_ms, lambda: actor.adjust_stat(mod.stat, -mod.amount), f"buff:{mod.stat.value}")
        logger.debug("Buff %s %+g on actor %d for %.0f ms", mod.stat.value, mod.amount, actor.id, effect.duration_ms)
        return True

    return False
