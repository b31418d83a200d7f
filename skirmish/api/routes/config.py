"""GET /api/v1/config — expose the combat configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from skirmish.api.dependencies import get_engine_manager
from skirmish.api.engine_manager import EngineManager
from skirmish.api.schemas import CombatConfigResponse

router = APIRouter()


@router.get("/config", response_model=CombatConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> CombatConfigResponse:
    cfg = manager.config
    return CombatConfigResponse(
        world_seed=cfg.world_seed,
        screen_width=cfg.screen_width,
        screen_height=cfg.screen_height,
        world_width=cfg.world_width,
        tick_ms=cfg.tick_ms,
        max_ticks=cfg.max_ticks,
        player_max_health=cfg.player_max_health,
        player_attack_damage=cfg.player_attack_damage,
        player_speed=cfg.player_speed,
        enemy_max_health=cfg.enemy_max_health,
        enemy_attack_damage=cfg.enemy_attack_damage,
        max_enemies=cfg.max_enemies,
        ranged_spawn_chance=cfg.ranged_spawn_chance,
        inventory_slots=cfg.inventory_slots,
        tick_rate=manager.tick_rate,
    )
