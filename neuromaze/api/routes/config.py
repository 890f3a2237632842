"""GET /api/v1/config — expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from neuromaze.api.dependencies import get_engine_manager
from neuromaze.api.engine_manager import EngineManager
from neuromaze.api.schemas import GameConfigResponse

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> GameConfigResponse:
    cfg = manager.config
    return GameConfigResponse(
        seed=cfg.seed,
        grid_size=cfg.grid_size,
        wall_probability=cfg.wall_probability,
        tick_rate=manager.tick_rate,
        enemy_decision_interval=cfg.enemy_decision_interval,
        adaptation_interval=cfg.adaptation_interval,
        adaptation_rate=cfg.adaptation_rate,
        adapt_min_radius=cfg.adapt_min_radius,
        wall_warning_ticks=cfg.wall_warning_ticks,
        collision_damage=cfg.collision_damage,
        heal_amount=cfg.heal_amount,
        score_pickup=cfg.score_pickup,
        max_path_nodes=cfg.max_path_nodes,
        ability_cost=cfg.ability_cost,
    )
