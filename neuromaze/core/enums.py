"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class TileKind(IntEnum):
    """Tile kinds on the grid. Start and exit are plain floor tiles."""

    FLOOR = 0
    WALL = 1


@unique
class PowerupKind(IntEnum):
    """Pickups scattered across the maze."""

    HEALTH = 0
    SCORE = 1


@unique
class GameStatus(IntEnum):
    """Lifecycle of a run."""

    RUNNING = 0
    GAME_OVER = 1


@unique
class Direction(IntEnum):
    """Cardinal movement directions."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    MAP_GEN = 0
    ADAPTABILITY = 1
    CARVE = 2
    ADAPTATION = 3
    AI_DECISION = 4
    SPAWN = 5
    POWERUP = 6
