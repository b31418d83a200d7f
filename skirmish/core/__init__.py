"""Core data models and the shared actor state machine."""

from skirmish.core.enums import ActorState, AttackKind, Cue, Domain, EnemyKind, EventKind, Stat
from skirmish.core.models import AttackIntent, Bounds, CombatEvent, Health, PlayerCommand, Vector2
from skirmish.core.actor import Actor

__all__ = [
    "Actor",
    "ActorState",
    "AttackIntent",
    "AttackKind",
    "Bounds",
    "CombatEvent",
    "Cue",
    "Domain",
    "EnemyKind",
    "EventKind",
    "Health",
    "PlayerCommand",
    "Stat",
    "Vector2",
]
