"""Connectivity oracle — 4-connected flood fill over floor tiles.

Neither function mutates the grid. The hypothetical variant overlays a
single changed tile during the search instead of copying the grid.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from neuromaze.core.enums import TileKind

if TYPE_CHECKING:
    from neuromaze.core.grid import Grid
    from neuromaze.core.models import Vector2

_NEIGHBORS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def _search(
    grid: Grid,
    start: Vector2,
    goal: Vector2,
    override: tuple[int, int, TileKind] | None,
) -> bool:
    def walkable(x: int, y: int) -> bool:
        if override is not None and x == override[0] and y == override[1]:
            return override[2] == TileKind.FLOOR and grid.in_bounds_xy(x, y)
        return grid.is_walkable_xy(x, y)

    if not walkable(start.x, start.y) or not walkable(goal.x, goal.y):
        return False
    if start == goal:
        return True

    target = (goal.x, goal.y)
    seen = {(start.x, start.y)}
    frontier = deque([(start.x, start.y)])
    while frontier:
        cx, cy = frontier.popleft()
        for dx, dy in _NEIGHBORS:
            nkey = (cx + dx, cy + dy)
            if nkey in seen or not walkable(*nkey):
                continue
            if nkey == target:
                return True
            seen.add(nkey)
            frontier.append(nkey)
    return False


def reachable(grid: Grid, start: Vector2, goal: Vector2) -> bool:
    """True if a floor path connects *start* and *goal*."""
    return _search(grid, start, goal, None)


def reachable_under_hypothetical(
    grid: Grid,
    start: Vector2,
    goal: Vector2,
    changed_tile: tuple[Vector2, TileKind],
) -> bool:
    """Same as :func:`reachable` as if *changed_tile* had the given kind."""
    pos, kind = changed_tile
    return _search(grid, start, goal, (pos.x, pos.y, kind))


def reachable_region(grid: Grid, start: Vector2) -> set[tuple[int, int]]:
    """All floor tiles 4-connected to *start* (empty if *start* is a wall)."""
    if not grid.is_walkable(start):
        return set()
    seen = {(start.x, start.y)}
    frontier = deque([(start.x, start.y)])
    while frontier:
        cx, cy = frontier.popleft()
        for dx, dy in _NEIGHBORS:
            nkey = (cx + dx, cy + dy)
            if nkey not in seen and grid.is_walkable_xy(*nkey):
                seen.add(nkey)
                frontier.append(nkey)
    return seen
