"""GET /api/v1/state — live entities, powerups and feedback events."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from neuromaze.api.dependencies import get_engine_manager
from neuromaze.api.engine_manager import EngineManager
from neuromaze.api.schemas import (
    EnemySchema,
    EventSchema,
    GameStateResponse,
    PlayerSchema,
    PowerupSchema,
)
from neuromaze.core.enums import GameStatus

router = APIRouter()


@router.get("/state", response_model=GameStateResponse)
def get_state(
    since_tick: int = Query(0, ge=0, description="Only return events at or after this tick"),
    manager: EngineManager = Depends(get_engine_manager),
) -> GameStateResponse:
    snap = manager.get_snapshot()
    if snap is None:
        raise HTTPException(status_code=503, detail="Game not initialized yet.")

    p = snap.player
    player = PlayerSchema(
        x=p.pos.x, y=p.pos.y, visual_x=p.visual_x, visual_y=p.visual_y,
        health=p.health, max_health=p.max_health, score=p.score,
        ability_charge=p.ability_charge,
    )
    enemies = [
        EnemySchema(
            id=e.id, x=e.pos.x, y=e.pos.y, visual_x=e.visual_x, visual_y=e.visual_y,
            intelligence=e.intelligence, path=[[s.x, s.y] for s in e.path],
        )
        for _, e in sorted(snap.enemies.items())
    ]
    powerups = [
        PowerupSchema(x=pu.pos.x, y=pu.pos.y, kind=pu.kind.name.lower())
        for pu in snap.powerups
    ]
    events = [
        EventSchema(tick=ev.tick, category=ev.category, message=ev.message, metadata=ev.metadata)
        for ev in manager.event_log.since_tick(since_tick)
    ]
    return GameStateResponse(
        tick=snap.tick,
        level=snap.level,
        status="running" if snap.status == GameStatus.RUNNING else "game_over",
        high_score=manager.high_score,
        player=player,
        enemies=enemies,
        powerups=powerups,
        events=events,
    )
