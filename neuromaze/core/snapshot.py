"""Immutable snapshot of the game state for renderers and the API."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from neuromaze.core.enums import GameStatus
from neuromaze.core.game_state import GameState
from neuromaze.core.grid import Grid
from neuromaze.core.models import Enemy, Player, Powerup, Vector2


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the game, safe to hand to another thread.

    The grid and entities are copies: the adapter mutates the live grid in
    place, so sharing it would let a reader see a half-applied tick.
    """

    tick: int
    seed: int
    level: int
    status: GameStatus
    grid: Grid
    start: Vector2
    exit: Vector2
    player: Player
    enemies: Mapping[int, Enemy]
    powerups: tuple[Powerup, ...]
    pending_walls: tuple[tuple[int, int], ...]

    @classmethod
    def from_state(cls, state: GameState) -> Snapshot:
        return cls(
            tick=state.tick,
            seed=state.seed,
            level=state.level,
            status=state.status,
            grid=state.grid.copy(),
            start=state.start,
            exit=state.exit,
            player=state.player.copy(),
            enemies=MappingProxyType({eid: e.copy() for eid, e in state.enemies.items()}),
            powerups=tuple(state.powerups),
            pending_walls=tuple(sorted(state.pending_walls)),
        )
