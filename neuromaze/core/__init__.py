"""Core data models and game representation."""

from neuromaze.core.enums import Direction, Domain, GameStatus, PowerupKind, TileKind
from neuromaze.core.models import Enemy, Player, Powerup, Vector2
from neuromaze.core.grid import Grid, OutOfBoundsError, Tile
from neuromaze.core.game_state import GameState
from neuromaze.core.snapshot import Snapshot

__all__ = [
    "Direction",
    "Domain",
    "Enemy",
    "GameState",
    "GameStatus",
    "Grid",
    "OutOfBoundsError",
    "Player",
    "Powerup",
    "PowerupKind",
    "Snapshot",
    "Tile",
    "TileKind",
    "Vector2",
]
