"""Pydantic response and request models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Actors ---

class PointSchema(BaseModel):
    x: float
    y: float


class HealthSchema(BaseModel):
    current: int
    max: int


class PlayerSchema(BaseModel):
    id: int
    state: str
    position: PointSchema
    velocity: PointSchema
    facing: int
    health: HealthSchema
    attack_damage: int
    speed: float
    invulnerable: bool = False
    is_blocking: bool = False
    level: int = 1
    experience: int = 0
    experience_to_next: int = 100
    total_experience: int = 0
    progress_pct: int = 0


class EnemySchema(BaseModel):
    id: int
    kind: str
    level: int
    state: str
    position: PointSchema
    facing: int
    health: HealthSchema
    winding_up: bool = False
    display_scale: float = 1.0


class ProjectileSchema(BaseModel):
    id: int
    position: PointSchema
    velocity: PointSchema
    damage: int
    owner_id: int | None = None
    distance_traveled: float = 0.0


class EventSchema(BaseModel):
    tick: int
    at_ms: float
    category: str
    message: str
    entity_ids: list[int] = Field(default_factory=list)
    metadata: dict = Field(default_factory=dict)


# --- State ---

class WorldStateResponse(BaseModel):
    tick: int
    time_ms: float
    game_over: bool
    running: bool = False
    paused: bool = False
    autopilot: bool = False
    player: PlayerSchema
    enemies: list[EnemySchema]
    projectiles: list[ProjectileSchema]
    inventory: list[str | None]
    spawn_points_triggered: int = 0
    spawn_points_total: int = 0


class EventsResponse(BaseModel):
    since_tick: int
    events: list[EventSchema]


# --- Control & input ---

class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int = 0


class InputRequest(BaseModel):
    """Held player intent.  Stays in effect until the next request."""

    move_x: int = Field(0, ge=-1, le=1)
    move_y: int = Field(0, ge=-1, le=1)
    attack: bool = False
    block: bool = False
    autopilot: bool | None = Field(None, description="Toggle the scripted controller; omitted = unchanged")


class InputResponse(BaseModel):
    status: str
    autopilot: bool
    tick: int = 0


class ItemUseResponse(BaseModel):
    success: bool
    reason: str | None = None
    item_id: str | None = None
    inventory: list[str | None]


# --- Config ---

class CombatConfigResponse(BaseModel):
    world_seed: int
    screen_width: int
    screen_height: int
    world_width: int
    tick_ms: float
    max_ticks: int
    player_max_health: int
    player_attack_damage: int
    player_speed: float
    enemy_max_health: int
    enemy_attack_damage: int
    max_enemies: int
    ranged_spawn_chance: float
    inventory_slots: int
    tick_rate: float
