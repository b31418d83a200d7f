"""GET /api/v1/state and /events — dynamic session data (polled by a UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from skirmish.api.dependencies import get_engine_manager
from skirmish.api.engine_manager import EngineManager
from skirmish.api.schemas import EventSchema, EventsResponse, WorldStateResponse

router = APIRouter()


@router.get("/state", response_model=WorldStateResponse)
def get_state(
    manager: EngineManager = Depends(get_engine_manager),
) -> WorldStateResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")
    return WorldStateResponse(
        **snapshot,
        running=manager.running,
        paused=manager.paused,
        autopilot=manager.autopilot,
    )


@router.get("/events", response_model=EventsResponse)
def get_events(
    since_tick: int = Query(0, ge=0, description="Only return events since this tick"),
    category: str | None = Query(None, description="Filter by event category, e.g. 'damage'"),
    manager: EngineManager = Depends(get_engine_manager),
) -> EventsResponse:
    events = manager.event_log.since_tick(since_tick)
    if category is not None:
        events = [e for e in events if e.category == category]
    return EventsResponse(
        since_tick=since_tick,
        events=[
            EventSchema(
                tick=e.tick,
                at_ms=e.at_ms,
                category=e.category,
                message=e.message,
                entity_ids=list(e.entity_ids),
                metadata=e.metadata,
            )
            for e in events
        ],
    )
