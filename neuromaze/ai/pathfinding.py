"""A* pathfinding over the maze grid.

Provides a `Pathfinder` class that computes shortest 4-connected paths
with unit step cost and the Manhattan heuristic.

Usage:
    pf = Pathfinder(grid)
    path = pf.find_path(start, goal)          # list[Vector2], [] if unreachable
    next_step = pf.next_step(start, goal)     # Vector2 or None
"""

from __future__ import annotations

import heapq
from typing import TYPE_CHECKING

from neuromaze.core.models import Vector2

if TYPE_CHECKING:
    from neuromaze.core.grid import Grid

# Cardinal directions in N, E, S, W expansion order
_DIRS = (Vector2(0, -1), Vector2(1, 0), Vector2(0, 1), Vector2(-1, 0))

DEFAULT_MAX_NODES = 200


class Pathfinder:
    """A* pathfinder operating on a Grid.

    Performance-bounded: gives up once more than `max_nodes` nodes have
    been closed. Callers size the budget with :func:`node_budget` so a
    connected maze never reaches it.

    Ties on f go to the lower heuristic (deeper node) first, then to
    insertion order via a monotonically increasing counter, so an open
    board is crossed without flooding it and results are reproducible.
    """

    __slots__ = ("_grid", "_max_nodes")

    def __init__(self, grid: Grid, max_nodes: int = DEFAULT_MAX_NODES) -> None:
        self._grid = grid
        self._max_nodes = max_nodes

    def find_path(self, start: Vector2, goal: Vector2) -> list[Vector2]:
        """Compute an A* path from *start* to *goal*.

        Returns the positions from *start* to *goal* inclusive, or an empty
        list if *goal* is unreachable or the node budget ran out. *start*
        itself is not required to be walkable.
        """
        grid = self._grid
        if not grid.in_bounds(start) or not grid.is_walkable(goal):
            return []
        if start == goal:
            return [start]

        # A* open set: (f_score, h_score, counter, x, y); equal f prefers the
        # node nearer the goal, then insertion order
        counter = 0
        open_heap: list[tuple[int, int, int, int, int]] = []
        h0 = start.manhattan(goal)
        heapq.heappush(open_heap, (h0, h0, counter, start.x, start.y))

        g_score: dict[tuple[int, int], int] = {(start.x, start.y): 0}
        came_from: dict[tuple[int, int], tuple[int, int]] = {}
        closed: set[tuple[int, int]] = set()

        gx, gy = goal.x, goal.y

        while open_heap:
            _, _, _, cx, cy = heapq.heappop(open_heap)
            ckey = (cx, cy)

            if cx == gx and cy == gy:
                return self._reconstruct(came_from, ckey)

            if ckey in closed:
                continue  # stale entry superseded by a cheaper push
            closed.add(ckey)
            if len(closed) > self._max_nodes:
                return []

            tentative_g = g_score[ckey] + 1

            for d in _DIRS:
                nx, ny = cx + d.x, cy + d.y
                nkey = (nx, ny)

                if nkey in closed or not grid.is_walkable_xy(nx, ny):
                    continue

                if tentative_g < g_score.get(nkey, 1 << 30):
                    g_score[nkey] = tentative_g
                    came_from[nkey] = ckey
                    h = abs(nx - gx) + abs(ny - gy)  # Manhattan heuristic
                    counter += 1
                    heapq.heappush(open_heap, (tentative_g + h, h, counter, nx, ny))

        return []

    def next_step(self, start: Vector2, goal: Vector2) -> Vector2 | None:
        """Return the first step after *start*, or None if there is none."""
        path = self.find_path(start, goal)
        if len(path) > 1:
            return path[1]
        return None

    @staticmethod
    def _reconstruct(
        came_from: dict[tuple[int, int], tuple[int, int]],
        current: tuple[int, int],
    ) -> list[Vector2]:
        """Walk back through came_from to build the path (start included)."""
        path: list[Vector2] = [Vector2(current[0], current[1])]
        while current in came_from:
            current = came_from[current]
            path.append(Vector2(current[0], current[1]))
        path.reverse()
        return path


def find_path(grid: Grid, start: Vector2, goal: Vector2, max_nodes: int = DEFAULT_MAX_NODES) -> list[Vector2]:
    """Functional shorthand for ``Pathfinder(grid, max_nodes).find_path``."""
    return Pathfinder(grid, max_nodes).find_path(start, goal)


def node_budget(grid: Grid, configured: int = DEFAULT_MAX_NODES) -> int:
    """Expansion cap for *grid*: the configured cap, raised to the interior area on big boards."""
    return max(configured, (grid.size - 2) ** 2)
