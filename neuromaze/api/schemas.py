"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# --- Entities ---

class PlayerSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    visual_x: float
    visual_y: float
    health: int
    max_health: int
    score: int
    ability_charge: float


class EnemySchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    x: int
    y: int
    visual_x: float
    visual_y: float
    intelligence: float
    path: list[list[int]] = Field(default_factory=list, description="Cached A* path as [x, y] pairs")


class PowerupSchema(BaseModel):
    x: int
    y: int
    kind: Literal["health", "score"]


# --- Map ---

class MapResponse(BaseModel):
    size: int
    start: list[int]
    exit: list[int]
    grid: list[list[int]] = Field(description="Rows of TileKind values (0=Floor, 1=Wall)")
    adaptability: list[list[float]] = Field(description="Per-tile mutation weight in [0, 1)")
    pending_walls: list[list[int]] = Field(default_factory=list)


# --- Game state ---

class EventSchema(BaseModel):
    tick: int
    category: str
    message: str
    metadata: dict[str, Any] | None = None


class GameStateResponse(BaseModel):
    tick: int
    level: int
    status: Literal["running", "game_over"]
    high_score: int
    player: PlayerSchema
    enemies: list[EnemySchema]
    powerups: list[PowerupSchema]
    events: list[EventSchema] = Field(default_factory=list)


# --- Input ---

class MoveRequest(BaseModel):
    direction: Literal["up", "down", "left", "right"]


class MoveResponse(BaseModel):
    accepted: bool
    reached_exit: bool


class AbilityResponse(BaseModel):
    activated: bool
    pushed: list[int] = Field(default_factory=list)


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int = 0


# --- Config ---

class GameConfigResponse(BaseModel):
    seed: int
    grid_size: int
    wall_probability: float
    tick_rate: float
    enemy_decision_interval: int
    adaptation_interval: int
    adaptation_rate: float
    adapt_min_radius: int
    wall_warning_ticks: int
    collision_damage: int
    heal_amount: int
    score_pickup: int
    max_path_nodes: int
    ability_cost: float
