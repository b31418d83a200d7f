"""Item definitions: potions (consumable) and carried items (permanent modifiers)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, unique

from skirmish.core.enums import Stat


@unique
class ItemCategory(str, Enum):
    POTION = "potion"
    ITEM = "item"


# ---------------------------------------------------------------------------
# Effect contracts
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class StatModifier:
    """Flat signed change to one stat."""

    stat: Stat
    amount: float


@dataclass(frozen=True, slots=True)
class HealEffect:
    amount: int


@dataclass(frozen=True, slots=True)
class TimedBuff:
    """Apply ``modifier`` now and reverse it after ``duration_ms``."""

    modifier: StatModifier
    duration_ms: float


PotionEffect = HealEffect | TimedBuff


# ---------------------------------------------------------------------------
# Item template
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ItemDefinition:
    """Immutable blueprint for an item.  Inventory slots hold only the item_id."""

    item_id: str
    name: str
    description: str
    category: ItemCategory
    potion_use: PotionEffect | None = None
    permanent_modifiers: tuple[StatModifier, ...] = field(default_factory=tuple)
    cooldown_ms: float = 0.0

    @property
    def consumable(self) -> bool:
        return self.category == ItemCategory.POTION


# ---------------------------------------------------------------------------
# Item registry: all item definitions live here
# ---------------------------------------------------------------------------

ITEM_REGISTRY: dict[str, ItemDefinition] = {}


def _reg(d: ItemDefinition) -> ItemDefinition:
    ITEM_REGISTRY[d.item_id] = d
    return d


# ---- Potions ----
_reg(ItemDefinition(
    "potion_health_small", "Health Potion", "Instantly restores a small amount of health.",
    ItemCategory.POTION, potion_use=HealEffect(25), cooldown_ms=500.0,
))
_reg(ItemDefinition(
    "potion_attack_tonic", "Attack Tonic", "Temporarily increases attack damage.",
    ItemCategory.POTION, potion_use=TimedBuff(StatModifier(Stat.ATTACK_DAMAGE, 10), 10_000.0), cooldown_ms=1000.0,
))
_reg(ItemDefinition(
    "potion_speed_draught", "Speed Draught", "Temporarily increases movement speed.",
    ItemCategory.POTION, potion_use=TimedBuff(StatModifier(Stat.SPEED, 80), 10_000.0), cooldown_ms=1000.0,
))

# ---- Carried items ----
_reg(ItemDefinition(
    "item_boots_haste", "Boots of Haste", "Permanently increases speed while carried.",
    ItemCategory.ITEM, permanent_modifiers=(StatModifier(Stat.SPEED, 60),),
))
_reg(ItemDefinition(
    "item_amulet_strength", "Amulet of Strength", "Permanently increases attack while carried.",
    ItemCategory.ITEM, permanent_modifiers=(StatModifier(Stat.ATTACK_DAMAGE, 10),),
))
_reg(ItemDefinition(
    "item_ring_vitality", "Ring of Vitality", "Permanently increases max health while carried.",
    ItemCategory.ITEM, permanent_modifiers=(StatModifier(Stat.MAX_HEALTH, 25),),
))


def get_item(item_id: str) -> ItemDefinition | None:
    return ITEM_REGISTRY.get(item_id)


def is_consumable(item_id: str) -> bool:
    definition = ITEM_REGISTRY.get(item_id)
    return definition is not None and definition.consumable
