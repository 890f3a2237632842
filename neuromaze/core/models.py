"""Core data models: Vector2, Player, Enemy, Powerup."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from neuromaze.core.enums import PowerupKind


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def manhattan(self, other: Vector2) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


# Direction offsets mapped to Direction enum values
DIRECTION_OFFSETS: dict[int, Vector2] = {
    0: Vector2(0, -1),  # NORTH
    1: Vector2(1, 0),   # EAST
    2: Vector2(0, 1),   # SOUTH
    3: Vector2(-1, 0),  # WEST
}


def ease_toward(current: float, target: float, factor: float) -> float:
    """Exponential smoothing step; snaps once within 0.01 of *target*."""
    diff = target - current
    if abs(diff) < 0.01:
        return float(target)
    return current + diff * factor


@dataclass(slots=True)
class Player:
    """The player: authoritative grid cell plus an interpolated visual position."""

    pos: Vector2
    visual_x: float = 0.0
    visual_y: float = 0.0
    health: int = 100
    max_health: int = 100
    score: int = 0
    ability_charge: float = 0.0
    last_hit_tick: int | None = None
    move_history: deque[tuple[int, int]] = field(default_factory=lambda: deque(maxlen=20))

    @property
    def alive(self) -> bool:
        return self.health > 0

    def snap_visual(self) -> None:
        self.visual_x = float(self.pos.x)
        self.visual_y = float(self.pos.y)

    def ease(self, factor: float) -> None:
        self.visual_x = ease_toward(self.visual_x, self.pos.x, factor)
        self.visual_y = ease_toward(self.visual_y, self.pos.y, factor)

    def copy(self) -> Player:
        history: deque[tuple[int, int]] = deque(self.move_history, maxlen=self.move_history.maxlen)
        return Player(
            pos=self.pos, visual_x=self.visual_x, visual_y=self.visual_y,
            health=self.health, max_health=self.max_health, score=self.score,
            ability_charge=self.ability_charge, last_hit_tick=self.last_hit_tick,
            move_history=history,
        )


@dataclass(slots=True)
class Enemy:
    """A pursuer. Shares nothing with Player beyond having a position."""

    id: int
    pos: Vector2
    visual_x: float = 0.0
    visual_y: float = 0.0
    path: list[Vector2] = field(default_factory=list)
    decision_timer: int = 0
    intelligence: float = 1.0

    def snap_visual(self) -> None:
        self.visual_x = float(self.pos.x)
        self.visual_y = float(self.pos.y)

    def ease(self, factor: float) -> None:
        self.visual_x = ease_toward(self.visual_x, self.pos.x, factor)
        self.visual_y = ease_toward(self.visual_y, self.pos.y, factor)

    def copy(self) -> Enemy:
        return Enemy(
            id=self.id, pos=self.pos, visual_x=self.visual_x, visual_y=self.visual_y,
            path=list(self.path), decision_timer=self.decision_timer,
            intelligence=self.intelligence,
        )


@dataclass(frozen=True, slots=True)
class Powerup:
    """A pickup lying on a floor tile."""

    pos: Vector2
    kind: PowerupKind
