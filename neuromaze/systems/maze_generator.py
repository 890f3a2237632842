"""Maze generator — random walls plus a one-shot carve that guarantees a route."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from neuromaze.core.enums import Domain, TileKind
from neuromaze.core.grid import Grid
from neuromaze.core.models import Vector2
from neuromaze.systems.connectivity import reachable

if TYPE_CHECKING:
    from neuromaze.config import GameConfig
    from neuromaze.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


class MazeGenerator:
    """Builds a fresh solvable grid for each level.

    Interior tiles are walls with probability ``wall_probability``; every
    interior tile also draws its adaptability once. Start ``(1, 1)`` and
    exit ``(N-2, N-2)`` are forced to floor, and if the flood fill cannot
    connect them a monotone staircase is carved from start to exit. No
    retry loop is ever needed.

    Draws are keyed by tile index and level only, so a seed fixes the whole
    sequence of mazes: restarting a run replays level 1, 2, ... exactly as
    before, which is what makes a seed shareable and a replay reproducible.
    """

    __slots__ = ("_config", "_rng")

    def __init__(self, config: GameConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng

    def generate(
        self,
        level: int = 1,
        size: int | None = None,
        wall_probability: float | None = None,
    ) -> Grid:
        size = size if size is not None else self._config.grid_size
        if wall_probability is None:
            wall_probability = self._config.wall_probability
        if size < 4:
            raise ValueError(f"maze size must be at least 4, got {size}")

        rng = self._rng
        grid = Grid(size)
        for x, y in grid.interior():
            idx = y * size + x
            if rng.next_bool(Domain.MAP_GEN, idx, level, wall_probability):
                grid.set_kind(x, y, TileKind.WALL)
            grid.set_adaptability(x, y, rng.next_float(Domain.ADAPTABILITY, idx, level))

        start = Vector2(1, 1)
        goal = Vector2(size - 2, size - 2)
        grid.set_kind(start.x, start.y, TileKind.FLOOR)
        grid.set_kind(goal.x, goal.y, TileKind.FLOOR)

        if not reachable(grid, start, goal):
            carved = self.carve(grid, start, goal, level)
            logger.debug("Level %d: start/exit disconnected, carved %d tiles", level, carved)

        return grid

    def carve(self, grid: Grid, start: Vector2, goal: Vector2, level: int = 1) -> int:
        """Floor every tile on a random monotone walk from *start* to *goal*.

        Each step closes either the x gap or the y gap, picked at random
        while both remain. Returns the number of walls removed.
        """
        carved = 0
        x, y = start.x, start.y
        step = 0
        while (x, y) != (goal.x, goal.y):
            dx = goal.x - x
            dy = goal.y - y
            if dx and dy:
                move_x = self._rng.next_bool(Domain.CARVE, step, level)
            else:
                move_x = dx != 0
            if move_x:
                x += 1 if dx > 0 else -1
            else:
                y += 1 if dy > 0 else -1
            if grid.kind_xy(x, y) == TileKind.WALL:
                grid.set_kind(x, y, TileKind.FLOOR)
                carved += 1
            step += 1
        return carved
