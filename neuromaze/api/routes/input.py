"""POST /api/v1/input/* — player moves and the special ability."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from neuromaze.api.dependencies import get_engine_manager
from neuromaze.api.engine_manager import EngineManager
from neuromaze.api.schemas import AbilityResponse, MoveRequest, MoveResponse
from neuromaze.core.enums import GameStatus

router = APIRouter()

_DIRECTION_DELTAS: dict[str, tuple[int, int]] = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}


def _require_running(manager: EngineManager) -> None:
    snap = manager.get_snapshot()
    if snap is None:
        raise HTTPException(status_code=503, detail="Game not initialized yet.")
    if snap.status != GameStatus.RUNNING:
        raise HTTPException(status_code=409, detail="Game over. Restart to play again.")


@router.post("/input/move", response_model=MoveResponse)
def move(body: MoveRequest, manager: EngineManager = Depends(get_engine_manager)) -> MoveResponse:
    _require_running(manager)
    dx, dy = _DIRECTION_DELTAS[body.direction]
    result = manager.move_player(dx, dy)
    return MoveResponse(accepted=result.accepted, reached_exit=result.reached_exit)


@router.post("/input/ability", response_model=AbilityResponse)
def ability(manager: EngineManager = Depends(get_engine_manager)) -> AbilityResponse:
    _require_running(manager)
    result = manager.trigger_ability()
    return AbilityResponse(activated=result.activated, pushed=list(result.pushed))
