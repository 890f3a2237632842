"""GET /api/v1/map — current maze layout (re-fetch after tile_flip events)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from neuromaze.api.dependencies import get_engine_manager
from neuromaze.api.engine_manager import EngineManager
from neuromaze.api.schemas import MapResponse

router = APIRouter()


@router.get("/map", response_model=MapResponse)
def get_map(manager: EngineManager = Depends(get_engine_manager)) -> MapResponse:
    snap = manager.get_snapshot()
    if snap is None:
        raise HTTPException(status_code=503, detail="Game not initialized yet.")
    grid = snap.grid
    return MapResponse(
        size=grid.size,
        start=[snap.start.x, snap.start.y],
        exit=[snap.exit.x, snap.exit.y],
        grid=grid.rows(),
        adaptability=grid.adaptability_rows(),
        pending_walls=[[x, y] for x, y in snap.pending_walls],
    )
