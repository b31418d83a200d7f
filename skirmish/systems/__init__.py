"""Engine systems: deterministic RNG and enemy spawning."""

from skirmish.systems.rng import DeterministicRNG
from skirmish.systems.spawner import EnemySpawner, SpawnPoint

__all__ = ["DeterministicRNG", "EnemySpawner", "SpawnPoint"]
