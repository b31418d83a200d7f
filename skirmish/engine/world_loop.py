"""WorldLoop — the host tick coordinator for one combat session.

Tick cycle (fixed ``tick_ms``):
  1. Advance the clock
  2. Player update (command from input or autopilot)
  3. Spawner update (triggers, enemy AI, reaping)
  4. Drain events — resolve melee intents, register fired projectiles
  5. Integrate positions, clamped to the walkable band
  6. Advance projectiles and resolve projectile hits
  7. Reap dead enemies, drain events again, publish to the EventLog
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from skirmish.actors.player import Player
from skirmish.ai.context import CombatContext
from skirmish.combat.resolver import CombatResolver
from skirmish.core.enums import AttackKind, EventKind
from skirmish.core.models import IDLE_COMMAND, Bounds, PlayerCommand
from skirmish.engine.clock import SimulationClock
from skirmish.engine.event_queue import EventQueue
from skirmish.items.effects import apply_modifiers, apply_potion
from skirmish.items.inventory import Inventory
from skirmish.items.registry import get_item
from skirmish.systems.rng import DeterministicRNG
from skirmish.systems.spawner import EnemySpawner
from skirmish.utils.event_log import EventLog, SimEvent, to_plain

if TYPE_CHECKING:
    from skirmish.ai.autopilot import Autopilot
    from skirmish.combat.projectile import Projectile
    from skirmish.config import CombatConfig
    from skirmish.core.actor import Actor
    from skirmish.core.models import CombatEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UseResult:
    success: bool
    reason: str | None = None       # "empty" | "not_consumable" | "cooldown" | "dead"
    item_id: str | None = None


class WorldLoop:
    """The heartbeat of a session.

    Single-threaded: every actor, projectile and the spawner push to one
    shared EventQueue, and only this loop drains it.
    """

    __slots__ = (
        "_config",
        "_clock",
        "_rng",
        "_events",
        "_ids",
        "_player",
        "_inventory",
        "_walkable",
        "_world_bounds",
        "_ctx",
        "_spawner",
        "_resolver",
        "_projectiles",
        "_event_log",
        "_tick",
        "_command",
        "_autopilot",
        "_item_cooldowns",
        "_tick_events",
        "_game_over",
    )

    def __init__(
        self,
        config: CombatConfig,
        event_log: EventLog | None = None,
        autopilot: Autopilot | None = None,
    ) -> None:
        self._config = config
        self._clock = SimulationClock()
        self._rng = DeterministicRNG(config.world_seed)
        self._events = EventQueue()
        self._ids = itertools.count(1)

        self._player = Player(config, self._clock, events=self._events)
        self._inventory = Inventory(config.inventory_slots)
        self._walkable = Bounds(0.0, config.walkable_top, float(config.world_width), config.walkable_bottom)
        self._world_bounds = Bounds(0.0, 0.0, float(config.world_width), float(config.screen_height))
        self._ctx = CombatContext.for_player(
            self._player, config, self._clock, self._rng, self._world_bounds,
            inventory=self._inventory, next_id=self._ids.__next__,
        )
        self._spawner = EnemySpawner(config, self._player, self._events)
        self._resolver = CombatResolver(config)
        self._projectiles: list[Projectile] = []

        self._event_log = event_log if event_log is not None else EventLog()
        self._tick = 0
        self._command: PlayerCommand = IDLE_COMMAND
        self._autopilot = autopilot
        self._item_cooldowns: dict[str, float] = {}
        self._tick_events: list[SimEvent] = []
        self._game_over = False

    # -- accessors --

    @property
    def config(self) -> CombatConfig:
        return self._config

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def clock(self) -> SimulationClock:
        return self._clock

    @property
    def player(self) -> Player:
        return self._player

    @property
    def spawner(self) -> EnemySpawner:
        return self._spawner

    @property
    def inventory(self) -> Inventory:
        return self._inventory

    @property
    def projectiles(self) -> list[Projectile]:
        return list(self._projectiles)

    @property
    def context(self) -> CombatContext:
        return self._ctx

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def tick_events(self) -> list[SimEvent]:
        """Events published during the most recent tick."""
        return self._tick_events

    @property
    def game_over(self) -> bool:
        return self._game_over

    @property
    def autopilot(self) -> Autopilot | None:
        return self._autopilot

    @autopilot.setter
    def autopilot(self, value: Autopilot | None) -> None:
        self._autopilot = value

    def set_command(self, command: PlayerCommand) -> None:
        """Hold *command* until replaced (ignored while the autopilot drives)."""
        self._command = command

    # -- loop --

    def tick_once(self) -> bool:
        """Execute a single tick.  Returns False once the session is over."""
        if self._game_over:
            return False
        if self._tick >= self._config.max_ticks:
            logger.info("Tick %d: Max ticks reached.", self._tick)
            return False

        self._step()
        self._tick += 1
        if self._game_over:
            logger.info("Tick %d: Player defeated — session ended.", self._tick)
        return not self._game_over

    def run(self) -> None:
        """Tick until the player's death notification or max_ticks."""
        logger.info("=== Session started (seed=%d) ===", self._config.world_seed)
        while self.tick_once():
            if self._tick % 200 == 0:
                logger.info(
                    "Tick %d: player lvl %d hp %d/%d at x=%.0f, %d enemies",
                    self._tick, self._player.level, self._player.health.current,
                    self._player.health.max, self._player.position.x, self._spawner.enemy_count(),
                )
        logger.info("=== Session finished at tick %d ===", self._tick)

    def _step(self) -> None:
        self._tick_events = []
        dt = self._config.tick_ms
        self._clock.advance(dt)

        command = self._autopilot.decide(self) if self._autopilot is not None else self._command
        self._player.update(command)
        self._spawner.update(self._ctx)
        self._process_events()

        self._integrate(dt)
        self._advance_projectiles(dt)

        self._spawner.reap_dead(self._ctx)
        self._process_events()
        self._event_log.append_many(self._tick_events)

    # -- phases --

    def _integrate(self, dt: float) -> None:
        self._player.integrate(dt, self._walkable)
        for enemy in self._spawner.active_enemies():
            enemy.integrate(dt, self._walkable)

    def _advance_projectiles(self, dt: float) -> None:
        for projectile in self._projectiles:
            projectile.advance(dt, self._world_bounds)
            if not projectile.destroyed:
                self._resolver.resolve_projectile(projectile, self._player)
        self._projectiles = [p for p in self._projectiles if not p.destroyed]

    def _process_events(self) -> None:
        """Drain until quiet; handling an event may emit more."""
        while not self._events.empty:
            for event in self._events.drain():
                self._handle(event)
                self._record(event)

    def _handle(self, event: CombatEvent) -> None:
        match event.kind:
            case EventKind.ATTACK:
                intent = event.data["intent"]
                if intent.kind == AttackKind.MELEE:
                    self._resolver.resolve(intent, self._targets_for(intent.attacker_id))

            case EventKind.PROJECTILE_FIRED:
                self._projectiles.append(event.data["projectile"])

            case EventKind.ITEM_DROPPED:
                if event.data.get("added"):
                    definition = get_item(event.data["item_id"])
                    if definition is not None and definition.permanent_modifiers:
                        apply_modifiers(self._player, definition.permanent_modifiers, 1)

            case EventKind.DEATH:
                if event.source_id == self._player.id:
                    self._game_over = True

    def _targets_for(self, attacker_id: int) -> list[Actor]:
        if attacker_id == self._player.id:
            return list(self._spawner.active_enemies())
        return [self._player]

    def _record(self, event: CombatEvent) -> None:
        data = to_plain(event.data)
        entity_ids = [event.source_id]
        for key in ("target", "enemy_id", "owner"):
            value = data.get(key)
            if isinstance(value, int) and value not in entity_ids:
                entity_ids.append(value)
        self._tick_events.append(SimEvent(
            tick=self._tick,
            at_ms=event.at_ms,
            category=event.kind.value,
            message=_describe(event, data),
            entity_ids=tuple(entity_ids),
            metadata=data,
        ))

    # -- inventory operations --

    def use_item(self, slot: int) -> UseResult:
        """Drink the potion in *slot*, honoring per-item cooldowns."""
        item_id = self._inventory.get_at(slot)
        if item_id is None:
            return UseResult(False, "empty")
        definition = get_item(item_id)
        if definition is None or not definition.consumable or definition.potion_use is None:
            return UseResult(False, "not_consumable", item_id)
        if not self._player.is_alive():
            return UseResult(False, "dead", item_id)

        now = self._clock.now()
        last = self._item_cooldowns.get(item_id)
        if last is not None and now - last < definition.cooldown_ms:
            return UseResult(False, "cooldown", item_id)

        apply_potion(self._player, definition.potion_use)
        self._inventory.remove_at(slot)
        self._item_cooldowns[item_id] = now
        self._player.emit(EventKind.ITEM_USED, item_id=item_id, slot_index=slot)
        logger.info("Player used %s from slot %d", item_id, slot)
        return UseResult(True, item_id=item_id)

    def discard_item(self, slot: int) -> UseResult:
        """Drop the item in *slot*; carried modifiers are withdrawn."""
        item_id = self._inventory.remove_at(slot)
        if item_id is None:
            return UseResult(False, "empty")
        definition = get_item(item_id)
        if definition is not None and definition.permanent_modifiers:
            apply_modifiers(self._player, definition.permanent_modifiers, -1)
        return UseResult(True, item_id=item_id)

    # -- snapshot --

    def snapshot(self) -> dict[str, Any]:
        """Plain-data view of the session for the API."""
        player = self._player
        return {
            "tick": self._tick,
            "time_ms": self._clock.now(),
            "game_over": self._game_over,
            "player": {
                "id": player.id,
                "state": player.state.name,
                "position": to_plain(player.position),
                "velocity": to_plain(player.velocity),
                "facing": player.facing,
                "health": player.health.as_dict(),
                "attack_damage": player.attack_damage,
                "speed": player.speed,
                "invulnerable": player.invulnerable,
                "is_blocking": player.is_currently_blocking(),
                **player.level_info(),
            },
            "enemies": [
                {
                    "id": e.id,
                    "kind": e.enemy_kind.value,
                    "level": e.level,
                    "state": e.state.name,
                    "position": to_plain(e.position),
                    "facing": e.facing,
                    "health": e.health.as_dict(),
                    "winding_up": e.is_winding_up,
                    "display_scale": round(e.display_scale, 3),
                }
                for e in self._spawner.active_enemies()
            ],
            "projectiles": [
                {
                    "id": p.id,
                    "position": to_plain(p.position),
                    "velocity": to_plain(p.velocity),
                    "damage": p.damage,
                    "owner_id": p.owner_id,
                    "distance_traveled": round(p.distance_traveled, 2),
                }
                for p in self._projectiles
            ],
            "inventory": self._inventory.snapshot(),
            "spawn_points_triggered": sum(1 for sp in self._spawner.spawn_points if sp.triggered),
            "spawn_points_total": len(self._spawner.spawn_points),
        }


def _describe(event: CombatEvent, data: dict[str, Any]) -> str:
    """One-line human-readable summary for the event feed."""
    src = event.source_id
    match event.kind:
        case EventKind.DAMAGE:
            return f"#{src} took {data.get('amount')} damage ({data.get('current')}/{data.get('max')})"
        case EventKind.HEAL:
            return f"#{src} healed {data.get('amount')} ({data.get('current')}/{data.get('max')})"
        case EventKind.BLOCKED:
            return f"#{src} blocked {data.get('original')} -> {data.get('applied')}"
        case EventKind.DEATH:
            return f"#{src} died"
        case EventKind.LEVEL_UP:
            return f"Player reached level {data.get('new_level')}"
        case EventKind.EXPERIENCE_GAIN:
            return f"Player gained {data.get('gained')} XP ({data.get('current')}/{data.get('needed')})"
        case EventKind.ENEMY_SPAWNED:
            return f"Spawned {data.get('enemy_kind')} enemy #{data.get('enemy_id')} (lvl {data.get('level')})"
        case EventKind.ITEM_DROPPED:
            return f"Enemy #{data.get('enemy_id')} dropped {data.get('item_id')} (added={data.get('added')})"
        case EventKind.CUE:
            return f"#{src} cue {data.get('cue')}"
        case _:
            return f"#{src} {event.kind.value}"
