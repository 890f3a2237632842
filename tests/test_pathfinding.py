"""Unit tests for A* pathfinding."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from neuromaze.ai.pathfinding import DEFAULT_MAX_NODES, Pathfinder, find_path, node_budget
from neuromaze.core.enums import TileKind
from neuromaze.core.grid import Grid
from neuromaze.core.models import Vector2


def _grid(n: int = 10) -> Grid:
    return Grid(n, bordered=False)


def _assert_valid_path(g: Grid, path: list[Vector2]) -> None:
    for a, b in zip(path, path[1:]):
        assert a.manhattan(b) == 1, f"{a} -> {b} is not a unit step"
    for step in path[1:]:
        assert g.is_walkable(step), f"Step {step} is on a wall"


# ---------------------------------------------------------------------------
# Basic A* tests
# ---------------------------------------------------------------------------

class TestAStarBasic:
    def test_straight_line_path(self):
        g = _grid()
        path = Pathfinder(g).find_path(Vector2(0, 0), Vector2(4, 0))
        assert len(path) == 5
        assert path[0] == Vector2(0, 0)
        assert path[-1] == Vector2(4, 0)

    def test_same_start_and_goal(self):
        g = _grid()
        assert Pathfinder(g).find_path(Vector2(3, 3), Vector2(3, 3)) == [Vector2(3, 3)]

    def test_adjacent_goal(self):
        g = _grid()
        assert Pathfinder(g).find_path(Vector2(5, 5), Vector2(6, 5)) == [Vector2(5, 5), Vector2(6, 5)]

    def test_open_board_is_manhattan_optimal(self):
        for n in (5, 10, 15):
            g = _grid(n)
            path = Pathfinder(g).find_path(Vector2(0, 0), Vector2(n - 1, n - 1))
            assert len(path) - 1 == 2 * (n - 1)
            _assert_valid_path(g, path)

    def test_path_around_wall(self):
        g = _grid()
        for y in range(5):
            g.set_kind(3, y, TileKind.WALL)
        path = Pathfinder(g).find_path(Vector2(2, 2), Vector2(4, 2))
        assert path[-1] == Vector2(4, 2)
        # Around the wall bottom at y=5: 3 down, 2 across, 3 up
        assert len(path) - 1 == 8
        _assert_valid_path(g, path)

    def test_no_path_through_walls(self):
        g = _grid()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            g.set_kind(5 + dx, 5 + dy, TileKind.WALL)
        assert Pathfinder(g).find_path(Vector2(0, 0), Vector2(5, 5)) == []

    def test_unwalkable_goal(self):
        g = _grid()
        g.set_kind(5, 5, TileKind.WALL)
        assert Pathfinder(g).find_path(Vector2(0, 0), Vector2(5, 5)) == []

    def test_out_of_bounds_goal(self):
        g = _grid()
        assert Pathfinder(g).find_path(Vector2(0, 0), Vector2(10, 3)) == []

    def test_deterministic(self):
        g = Grid(15)
        a = Pathfinder(g).find_path(Vector2(1, 1), Vector2(13, 13))
        b = Pathfinder(g).find_path(Vector2(1, 1), Vector2(13, 13))
        assert a == b

    def test_functional_shorthand(self):
        g = Grid(7)
        assert find_path(g, Vector2(1, 1), Vector2(5, 5)) == Pathfinder(g).find_path(Vector2(1, 1), Vector2(5, 5))


# ---------------------------------------------------------------------------
# Budget
# ---------------------------------------------------------------------------

class TestNodeBudget:
    def test_default_cap(self):
        assert DEFAULT_MAX_NODES == 200

    def test_max_nodes_budget(self):
        """Pathfinder with tiny budget should return [] for long paths."""
        g = _grid(50)
        assert Pathfinder(g, max_nodes=5).find_path(Vector2(0, 0), Vector2(49, 49)) == []

    def test_unreachable_in_large_open_area_is_bounded(self):
        """Goal sealed in a 60x60 open board: gives up at the cap instead of flooding 3600 tiles."""
        g = _grid(60)
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            g.set_kind(30 + dx, 30 + dy, TileKind.WALL)
        assert Pathfinder(g).find_path(Vector2(0, 0), Vector2(30, 30)) == []

    def test_cap_never_binds_on_connected_15x15(self):
        g = Grid(15)
        path = Pathfinder(g).find_path(Vector2(1, 1), Vector2(13, 13))
        assert len(path) - 1 == 24


class TestOpenBoards:
    """Equal-f ties must not turn the search into a flood fill."""

    @pytest.mark.parametrize("n", [15, 16, 17, 21, 31])
    def test_unbordered_corner_to_corner_within_default_cap(self, n):
        g = _grid(n)
        path = Pathfinder(g).find_path(Vector2(0, 0), Vector2(n - 1, n - 1))
        assert len(path) - 1 == 2 * (n - 1)
        _assert_valid_path(g, path)

    @pytest.mark.parametrize("n", [17, 20, 21, 31])
    def test_bordered_start_to_exit_within_default_cap(self, n):
        g = Grid(n)
        path = Pathfinder(g).find_path(Vector2(1, 1), Vector2(n - 2, n - 2))
        assert len(path) - 1 == 2 * (n - 3)
        _assert_valid_path(g, path)

    def test_equal_f_prefers_node_nearer_goal(self):
        """Straight line along the top row: only the path itself gets closed."""
        g = _grid(40)
        path = Pathfinder(g, max_nodes=39).find_path(Vector2(0, 0), Vector2(39, 0))
        assert len(path) == 40

    def test_budget_scales_with_board(self):
        assert node_budget(Grid(15)) == DEFAULT_MAX_NODES
        assert node_budget(Grid(31)) == 29 * 29
        assert node_budget(Grid(9), configured=50) == 50

    def test_serpentine_on_large_board_found_with_scaled_budget(self):
        """A long winding corridor closes more than 200 tiles."""
        n = 25
        g = Grid(n)
        for x in range(2, n - 2, 2):
            gap_y = n - 2 if (x // 2) % 2 else 1
            for y in range(1, n - 1):
                if y != gap_y:
                    g.set_kind(x, y, TileKind.WALL)
        goal = Vector2(n - 2, n - 2)
        assert Pathfinder(g).find_path(Vector2(1, 1), goal) == []
        path = Pathfinder(g, node_budget(g)).find_path(Vector2(1, 1), goal)
        assert path and path[-1] == goal
        _assert_valid_path(g, path)


# ---------------------------------------------------------------------------
# next_step
# ---------------------------------------------------------------------------

class TestNextStep:
    def test_next_step_returns_first_tile(self):
        g = _grid()
        assert Pathfinder(g).next_step(Vector2(0, 0), Vector2(3, 0)) == Vector2(1, 0)

    def test_next_step_no_path(self):
        g = _grid()
        g.set_kind(5, 5, TileKind.WALL)
        assert Pathfinder(g).next_step(Vector2(0, 0), Vector2(5, 5)) is None

    def test_next_step_already_there(self):
        g = _grid()
        assert Pathfinder(g).next_step(Vector2(2, 2), Vector2(2, 2)) is None
