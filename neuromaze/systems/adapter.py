"""Maze adapter — online tile mutation that never breaks solvability.

Each adaptation tick every eligible interior tile rolls against
``adaptability * adaptation_rate``. Selected tiles propose flipping their
kind. Wall-creating proposals are committed only when every anchor (the
player and the level start) can still reach the exit with the new wall in
place; wall-removing proposals are always safe and committed as-is.

Wall-creating proposals are resolved before wall-removing ones, so a
proposal that would disconnect the pre-tick grid is always rejected:
adding walls can only shrink connectivity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from neuromaze.core.enums import Domain, TileKind
from neuromaze.core.models import Vector2
from neuromaze.systems.connectivity import reachable_under_hypothetical

if TYPE_CHECKING:
    from neuromaze.config import GameConfig
    from neuromaze.core.grid import Grid
    from neuromaze.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TileFlip:
    """A committed (or telegraphed) change of one tile's kind."""

    pos: Vector2
    new_kind: TileKind


@dataclass(slots=True)
class AdaptationResult:
    committed: list[TileFlip] = field(default_factory=list)
    warned: list[TileFlip] = field(default_factory=list)
    rejected: list[Vector2] = field(default_factory=list)


def axis_bias(move_history: Iterable[tuple[int, int]]) -> tuple[str | None, float]:
    """Return the dominant travel axis ('x', 'y' or None) and its dominance in [0, 1]."""
    horizontal = vertical = 0
    for dx, dy in move_history:
        if dx:
            horizontal += 1
        elif dy:
            vertical += 1
    total = horizontal + vertical
    if total == 0 or horizontal == vertical:
        return None, 0.0
    axis = "x" if horizontal > vertical else "y"
    return axis, abs(horizontal - vertical) / total


class MazeAdapter:
    """Proposes and validates tile flips on the adaptation cadence."""

    __slots__ = ("_config", "_rng")

    def __init__(self, config: GameConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng

    def adapt(
        self,
        grid: Grid,
        player_pos: Vector2,
        exit_pos: Vector2,
        tick: int,
        anchors: Iterable[Vector2] = (),
        protected: Iterable[Vector2] = (),
        move_history: Iterable[tuple[int, int]] = (),
        pending: dict[tuple[int, int], int] | None = None,
    ) -> AdaptationResult:
        """Run one adaptation pass, mutating *grid* in place.

        *anchors* are extra positions that must stay connected to the exit
        besides the player. *protected* tiles are never proposed (entities,
        powerups, the start tile). With ``wall_warning_ticks > 0`` accepted
        wall flips go into *pending* (keyed by (x, y), valued by expiry
        tick) instead of being committed.
        """
        cfg = self._config
        result = AdaptationResult()
        blocked = {(p.x, p.y) for p in protected}
        blocked.add((exit_pos.x, exit_pos.y))
        if pending:
            blocked.update(pending)
        must_connect = [player_pos, *anchors]
        dominant_axis, dominance = axis_bias(move_history)

        to_wall: list[Vector2] = []
        to_floor: list[Vector2] = []
        for x, y in grid.interior():
            if (x, y) in blocked:
                continue
            if abs(x - player_pos.x) + abs(y - player_pos.y) <= cfg.adapt_min_radius:
                continue
            kind = grid.kind_xy(x, y)
            chance = grid.adaptability_xy(x, y) * cfg.adaptation_rate
            if kind == TileKind.FLOOR and dominant_axis is not None:
                along_x = abs(x - player_pos.x) > abs(y - player_pos.y)
                if along_x == (dominant_axis == "x"):
                    chance *= 1.0 + cfg.axis_bias_strength * dominance
            if not self._rng.next_bool(Domain.ADAPTATION, y * grid.size + x, tick, min(chance, 1.0)):
                continue
            if kind == TileKind.FLOOR:
                to_wall.append(Vector2(x, y))
            else:
                to_floor.append(Vector2(x, y))

        for pos in to_wall:
            if not self._keeps_connected(grid, pos, exit_pos, must_connect):
                result.rejected.append(pos)
                logger.debug("Tick %d: wall at %s rejected (would disconnect)", tick, pos)
                continue
            flip = TileFlip(pos, TileKind.WALL)
            if cfg.wall_warning_ticks > 0 and pending is not None:
                pending[(pos.x, pos.y)] = tick + cfg.wall_warning_ticks
                result.warned.append(flip)
            else:
                grid.set_kind(pos.x, pos.y, TileKind.WALL)
                result.committed.append(flip)

        for pos in to_floor:
            grid.set_kind(pos.x, pos.y, TileKind.FLOOR)
            result.committed.append(TileFlip(pos, TileKind.FLOOR))

        if result.committed or result.rejected:
            logger.debug(
                "Tick %d: adaptation committed %d, warned %d, rejected %d",
                tick, len(result.committed), len(result.warned), len(result.rejected),
            )
        return result

    def resolve_pending(
        self,
        grid: Grid,
        pending: dict[tuple[int, int], int],
        player_pos: Vector2,
        exit_pos: Vector2,
        tick: int,
        anchors: Iterable[Vector2] = (),
        protected: Iterable[Vector2] = (),
    ) -> AdaptationResult:
        """Solidify expired warning tiles whose wall would still be safe.

        Expired warnings that would now disconnect an anchor, or that an
        entity is standing on, are cancelled and the tile stays floor.
        """
        result = AdaptationResult()
        occupied = {(p.x, p.y) for p in protected}
        must_connect = [player_pos, *anchors]
        for key in sorted(k for k, expiry in pending.items() if expiry <= tick):
            del pending[key]
            pos = Vector2(*key)
            if key in occupied or pos == player_pos or not self._keeps_connected(grid, pos, exit_pos, must_connect):
                result.rejected.append(pos)
                logger.debug("Tick %d: warning at %s cancelled", tick, pos)
                continue
            grid.set_kind(pos.x, pos.y, TileKind.WALL)
            result.committed.append(TileFlip(pos, TileKind.WALL))
        return result

    @staticmethod
    def _keeps_connected(grid: Grid, pos: Vector2, exit_pos: Vector2, must_connect: list[Vector2]) -> bool:
        return all(
            reachable_under_hypothetical(grid, anchor, exit_pos, (pos, TileKind.WALL))
            for anchor in must_connect
        )
