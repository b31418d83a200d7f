"""Item registry, potion/modifier effects and the slot inventory."""

from skirmish.items.registry import ITEM_REGISTRY, HealEffect, ItemDefinition, StatModifier, TimedBuff, get_item
from skirmish.items.effects import apply_modifiers, apply_potion
from skirmish.items.inventory import AddResult, Inventory

__all__ = [
    "AddResult",
    "HealEffect",
    "ITEM_REGISTRY",
    "Inventory",
    "ItemDefinition",
    "StatModifier",
    "TimedBuff",
    "apply_modifiers",
    "apply_potion",
    "get_item",
]
