"""POST /api/v1/inventory/{slot}/use and /discard — potion and item actions."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from skirmish.api.dependencies import get_engine_manager
from skirmish.api.engine_manager import EngineManager
from skirmish.api.schemas import ItemUseResponse

router = APIRouter()


def _check_slot(slot: int, manager: EngineManager) -> None:
    if not 0 <= slot < manager.config.inventory_slots:
        raise HTTPException(status_code=404, detail=f"Inventory slot {slot} does not exist.")


def _inventory(manager: EngineManager) -> list[str | None]:
    snapshot = manager.get_snapshot()
    return snapshot["inventory"] if snapshot else []


@router.post("/inventory/{slot}/use", response_model=ItemUseResponse)
def use_item(
    slot: int,
    manager: EngineManager = Depends(get_engine_manager),
) -> ItemUseResponse:
    _check_slot(slot, manager)
    result = manager.use_item(slot)
    return ItemUseResponse(
        success=result.success,
        reason=result.reason,
        item_id=result.item_id,
        inventory=_inventory(manager),
    )


@router.post("/inventory/{slot}/discard", response_model=ItemUseResponse)
def discard_item(
    slot: int,
    manager: EngineManager = Depends(get_engine_manager),
) -> ItemUseResponse:
    _check_slot(slot, manager)
    result = manager.discard_item(slot)
    return ItemUseResponse(
        success=result.success,
        reason=result.reason,
        item_id=result.item_id,
        inventory=_inventory(manager),
    )
