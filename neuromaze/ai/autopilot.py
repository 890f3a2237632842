"""Autopilot — a scripted input source that walks the player to the exit.

Used by the headless CLI and end-to-end tests in place of a keyboard.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from neuromaze.ai.pathfinding import Pathfinder, node_budget

if TYPE_CHECKING:
    from neuromaze.engine.game_loop import GameLoop


class Autopilot:
    """Every *interval* ticks, take one A* step toward the exit."""

    __slots__ = ("_interval", "moves_made")

    def __init__(self, interval: int = 4) -> None:
        self._interval = max(interval, 1)
        self.moves_made = 0

    def __call__(self, loop: GameLoop) -> None:
        state = loop.state
        if state.tick % self._interval != 0:
            return
        budget = node_budget(state.grid, loop.config.max_path_nodes)
        step = Pathfinder(state.grid, budget).next_step(state.player.pos, state.exit)
        if step is None:
            return
        result = loop.attempt_player_move(step.x - state.player.pos.x, step.y - state.player.pos.y)
        if result.accepted:
            self.moves_made += 1
