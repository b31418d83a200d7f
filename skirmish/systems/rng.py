"""Domain-separated deterministic RNG using xxhash.

Every roll is a pure function of (WorldSeed, Domain, EntityID, Key).  Combat
rolls are keyed on the simulation time rather than on a running counter, so a
roll never depends on how many other rolls happened before it:

    key = int(now_ms) * 2 + salt

``salt`` is 0 for the first roll made at a given millisecond and 1 for the
follow-up roll that depends on it (block success after the block-chance
roll, pool index after the drop roll).  Doubling the time keeps the salted
keys of neighbouring milliseconds apart.  Entity ids separate two enemies
rolling in the same millisecond; the domain separates block rolls from loot
and spawn rolls of the same entity.
"""

from __future__ import annotations

import struct

import xxhash

from skirmish.core.enums import Domain


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator."""

    __slots__ = ("_seed",)

    _SCALE = float(1 << 64)

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    @staticmethod
    def time_key(now_ms: float, salt: int = 0) -> int:
        """Roll key for the *salt*-th dependent roll made at *now_ms*."""
        return int(now_ms) * 2 + salt

    def _digest(self, domain: Domain, entity_id: int, key: int) -> int:
        return xxhash.xxh64_intdigest(struct.pack("<qiqq", self._seed, domain.value, entity_id, key))

    def next_float(self, domain: Domain, entity_id: int, key: float) -> float:
        """Uniform float in [0.0, 1.0)."""
        return self._digest(domain, entity_id, int(key)) / self._SCALE

    def next_int(self, domain: Domain, entity_id: int, key: float, low: int, high: int) -> int:
        """Uniform integer in [low, high]; clamped so float rounding never yields high + 1."""
        span = high - low + 1
        return min(low + int(self.next_float(domain, entity_id, key) * span), high)

    def next_bool(self, domain: Domain, entity_id: int, key: float, probability: float = 0.5) -> bool:
        if probability <= 0.0:
            return False
        return self.next_float(domain, entity_id, key) < probability
