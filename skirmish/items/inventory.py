"""Fixed-size slot inventory and the port the spawner drops loot into."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from skirmish.items.registry import ITEM_REGISTRY

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AddResult:
    success: bool
    slot_index: int | None = None
    reason: str | None = None        # "full" | "invalid"


class InventoryPort(Protocol):
    """What the combat core needs from an inventory: room check and insert."""

    def is_full(self) -> bool: ...

    def add(self, item_id: str) -> AddResult: ...


class Inventory:
    """Non-stacking slots, each holding one item_id or None."""

    __slots__ = ("size", "_slots")

    def __init__(self, size: int = 6) -> None:
        self.size = size
        self._slots: list[str | None] = [None] * size

    @property
    def slots(self) -> tuple[str | None, ...]:
        return tuple(self._slots)

    def _valid(self, index: int) -> bool:
        return 0 <= index < self.size

    def is_full(self) -> bool:
        return all(s is not None for s in self._slots)

    def used_slots(self) -> int:
        return sum(1 for s in self._slots if s is not None)

    def add(self, item_id: str) -> AddResult:
        if item_id not in ITEM_REGISTRY:
            return AddResult(False, reason="invalid")
        for index, slot in enumerate(self._slots):
            if slot is None:
                self._slots[index] = item_id
                logger.debug("Inventory: %s -> slot %d", item_id, index)
                return AddResult(True, slot_index=index)
        return AddResult(False, reason="full")

    def remove_at(self, index: int) -> str | None:
        if not self._valid(index):
            return None
        existing = self._slots[index]
        self._slots[index] = None
        return existing

    def get_at(self, index: int) -> str | None:
        if not self._valid(index):
            return None
        return self._slots[index]

    def swap(self, a: int, b: int) -> bool:
        if not self._valid(a) or not self._valid(b) or a == b:
            return False
        self._slots[a], self._slots[b] = self._slots[b], self._slots[a]
        return True

    def find_first(self, item_id: str) -> int | None:
        for index, slot in enumerate(self._slots):
            if slot == item_id:
                return index
        return None

    def has(self, item_id: str) -> bool:
        return item_id in self._slots

    def clear(self) -> None:
        self._slots = [None] * self.size

    def snapshot(self) -> list[str | None]:
        return list(self._slots)

    def __len__(self) -> int:
        return self.used_slots()
