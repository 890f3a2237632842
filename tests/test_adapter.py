"""Tests for online maze adaptation and its solvability guard."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from neuromaze.config import GameConfig
from neuromaze.core.enums import TileKind
from neuromaze.core.grid import Grid
from neuromaze.core.models import Vector2
from neuromaze.systems.adapter import MazeAdapter, axis_bias
from neuromaze.systems.connectivity import reachable, reachable_under_hypothetical
from neuromaze.systems.maze_generator import MazeGenerator
from neuromaze.systems.rng import DeterministicRNG

CORRIDOR = [
    "#######",
    "#.#####",
    "#.....#",
    "##.##.#",
    "#####.#",
    "#####.#",
    "#######",
]


def _saturate(grid: Grid, value: float = 0.99) -> Grid:
    """Give every interior tile the same high adaptability."""
    for x, y in grid.interior():
        grid.set_adaptability(x, y, value)
    return grid


def _adapter(**overrides) -> MazeAdapter:
    """An adapter whose roll always succeeds on saturated grids."""
    defaults = dict(adaptation_rate=2.0, adapt_min_radius=0, axis_bias_strength=0.0)
    defaults.update(overrides)
    return MazeAdapter(GameConfig(**defaults), DeterministicRNG(42))


class TestGuard:
    def test_cut_tiles_rejected_dead_ends_accepted(self):
        grid = _saturate(Grid.from_rows(CORRIDOR))
        result = _adapter().adapt(grid, Vector2(1, 1), Vector2(5, 5), tick=1)
        assert reachable(grid, Vector2(1, 1), Vector2(5, 5))
        # Every tile on the only route stays floor
        for pos in [(1, 2), (2, 2), (3, 2), (4, 2), (5, 2), (5, 3), (5, 4)]:
            assert grid.is_walkable_xy(*pos), f"{pos} was sealed"
        rejected = {(p.x, p.y) for p in result.rejected}
        assert (3, 2) in rejected
        # The dead-end spur at (2, 3) can be walled off safely
        assert grid.tile_at(2, 3).is_wall

    def test_wall_removal_always_committed(self):
        grid = _saturate(Grid.from_rows(CORRIDOR))
        result = _adapter().adapt(grid, Vector2(1, 1), Vector2(5, 5), tick=1)
        floored = {(f.pos.x, f.pos.y) for f in result.committed if f.new_kind == TileKind.FLOOR}
        assert (4, 4) in floored
        assert grid.is_walkable_xy(4, 4)

    @pytest.mark.parametrize("seed", range(10))
    def test_rejection_is_idempotent(self, seed):
        """A flip that would disconnect the pre-tick grid never lands this tick."""
        rng = DeterministicRNG(seed)
        grid = _saturate(MazeGenerator(GameConfig(seed=seed), rng).generate())
        player, exit_ = Vector2(1, 1), Vector2(13, 13)
        doomed = [
            (x, y) for x, y in grid.interior()
            if grid.is_walkable_xy(x, y)
            and not reachable_under_hypothetical(grid, player, exit_, (Vector2(x, y), TileKind.WALL))
        ]
        _adapter().adapt(grid, player, exit_, tick=seed + 1)
        for x, y in doomed:
            assert grid.is_walkable_xy(x, y)

    def test_anchor_start_kept_connected(self):
        grid = _saturate(Grid.from_rows(CORRIDOR))
        # Player stands at the exit end; start must still reach the exit
        _adapter().adapt(grid, Vector2(5, 4), Vector2(5, 5), tick=1, anchors=(Vector2(1, 1),))
        assert reachable(grid, Vector2(1, 1), Vector2(5, 5))

    @pytest.mark.parametrize("seed", range(5))
    def test_exit_reachable_over_many_ticks(self, seed):
        cfg = GameConfig(seed=seed, adaptation_rate=0.3)
        rng = DeterministicRNG(seed)
        grid = MazeGenerator(cfg, rng).generate()
        adapter = MazeAdapter(cfg, rng)
        start, exit_ = Vector2(1, 1), Vector2(13, 13)
        for tick in range(1, 150):
            adapter.adapt(grid, start, exit_, tick)
            assert reachable(grid, start, exit_), f"disconnected at tick {tick}"


class TestEligibility:
    def test_radius_exit_and_protected_untouched(self):
        grid = _saturate(Grid(9))
        player = Vector2(4, 4)
        protected = [Vector2(1, 7)]
        before = grid.rows()
        _adapter(adapt_min_radius=2).adapt(grid, player, Vector2(7, 7), tick=3, protected=protected)
        after = grid.rows()
        for x, y in grid.interior():
            if abs(x - 4) + abs(y - 4) <= 2 or (x, y) in {(7, 7), (1, 7)}:
                assert after[y][x] == before[y][x], f"({x}, {y}) should not mutate"

    def test_border_never_mutates(self):
        grid = _saturate(Grid(9))
        _adapter().adapt(grid, Vector2(1, 1), Vector2(7, 7), tick=1)
        for i in range(9):
            assert grid.tile_at(i, 0).is_wall and grid.tile_at(0, i).is_wall

    def test_zero_rate_changes_nothing(self):
        grid = _saturate(Grid.from_rows(CORRIDOR))
        before = grid.rows()
        result = _adapter(adaptation_rate=0.0).adapt(grid, Vector2(1, 1), Vector2(5, 5), tick=1)
        assert grid.rows() == before
        assert result.committed == []

    def test_zero_adaptability_never_selected(self):
        grid = Grid.from_rows(CORRIDOR)
        before = grid.rows()
        _adapter().adapt(grid, Vector2(1, 1), Vector2(5, 5), tick=1)
        assert grid.rows() == before


class TestWarningPhase:
    def test_wall_is_telegraphed_then_committed(self):
        grid = _saturate(Grid.from_rows(CORRIDOR))
        adapter = _adapter(wall_warning_ticks=5)
        pending: dict[tuple[int, int], int] = {}
        result = adapter.adapt(grid, Vector2(1, 1), Vector2(5, 5), tick=10, pending=pending)
        assert (2, 3) in pending and pending[(2, 3)] == 15
        assert grid.is_walkable_xy(2, 3)
        assert any(f.pos == Vector2(2, 3) for f in result.warned)

        early = adapter.resolve_pending(grid, pending, Vector2(1, 1), Vector2(5, 5), tick=14)
        assert early.committed == [] and (2, 3) in pending

        done = adapter.resolve_pending(grid, pending, Vector2(1, 1), Vector2(5, 5), tick=15)
        assert any(f.pos == Vector2(2, 3) for f in done.committed)
        assert grid.tile_at(2, 3).is_wall
        assert pending == {}

    def test_warning_cancelled_when_it_would_disconnect(self):
        grid = Grid.from_rows(CORRIDOR)
        adapter = _adapter(wall_warning_ticks=5)
        pending = {(3, 2): 5}
        result = adapter.resolve_pending(grid, pending, Vector2(1, 1), Vector2(5, 5), tick=5)
        assert result.rejected == [Vector2(3, 2)]
        assert grid.is_walkable_xy(3, 2)

    def test_warning_cancelled_under_entity(self):
        grid = Grid.from_rows(CORRIDOR)
        pending = {(2, 3): 5}
        result = _adapter().resolve_pending(grid, pending, Vector2(1, 1), Vector2(5, 5), tick=6,
                                            protected=[Vector2(2, 3)])
        assert result.committed == []
        assert grid.is_walkable_xy(2, 3)

    def test_pending_tiles_not_reproposed(self):
        grid = _saturate(Grid.from_rows(CORRIDOR))
        pending = {(2, 3): 99}
        result = _adapter(wall_warning_ticks=5).adapt(grid, Vector2(1, 1), Vector2(5, 5), tick=1, pending=pending)
        assert all(f.pos != Vector2(2, 3) for f in result.warned + result.committed)
        assert pending[(2, 3)] == 99


class TestAxisBias:
    def test_no_history(self):
        assert axis_bias([]) == (None, 0.0)

    def test_horizontal_dominance(self):
        axis, strength = axis_bias([(1, 0), (1, 0), (-1, 0), (0, 1)])
        assert axis == "x"
        assert strength == pytest.approx(0.5)

    def test_balanced(self):
        assert axis_bias([(1, 0), (0, 1)]) == (None, 0.0)

    def test_bias_only_raises_wall_odds(self):
        """With bias on, every tile selected without bias is still selected."""
        history = [(1, 0)] * 10
        base = _saturate(Grid(11), 0.5)
        biased = base.copy()
        cfg = dict(adaptation_rate=0.3, adapt_min_radius=0)
        plain = MazeAdapter(GameConfig(axis_bias_strength=0.0, **cfg), DeterministicRNG(3))
        leaning = MazeAdapter(GameConfig(axis_bias_strength=1.0, **cfg), DeterministicRNG(3))
        r_plain = plain.adapt(base, Vector2(5, 5), Vector2(9, 9), tick=1, move_history=history)
        r_bias = leaning.adapt(biased, Vector2(5, 5), Vector2(9, 9), tick=1, move_history=history)
        proposed_plain = {f.pos for f in r_plain.committed} | set(r_plain.rejected)
        proposed_bias = {f.pos for f in r_bias.committed} | set(r_bias.rejected)
        assert proposed_plain <= proposed_bias
