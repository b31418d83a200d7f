"""POST /api/v1/input — held player intent and autopilot toggle."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from skirmish.api.dependencies import get_engine_manager
from skirmish.api.engine_manager import EngineManager
from skirmish.api.schemas import InputRequest, InputResponse
from skirmish.core.models import PlayerCommand

router = APIRouter()


@router.post("/input", response_model=InputResponse)
def set_input(
    body: InputRequest,
    manager: EngineManager = Depends(get_engine_manager),
) -> InputResponse:
    if body.autopilot is not None and body.autopilot != manager.autopilot:
        manager.set_autopilot(body.autopilot)
    manager.set_input(PlayerCommand(
        move_x=body.move_x,
        move_y=body.move_y,
        attack=body.attack,
        block=body.block,
    ))
    snapshot = manager.get_snapshot()
    return InputResponse(
        status="ok",
        autopilot=manager.autopilot,
        tick=snapshot["tick"] if snapshot else 0,
    )
