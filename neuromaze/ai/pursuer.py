"""PursuerAI — per-enemy chase decisions on a fixed cadence.

Every ``enemy_decision_interval`` ticks an enemy either pursues (A* to
the player, one tile per decision) or, if it fails its intelligence roll,
wanders one random walkable tile. When the player is sealed off and A*
finds nothing, a greedy axis step is tried instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from neuromaze.ai.pathfinding import Pathfinder, node_budget
from neuromaze.core.enums import Domain
from neuromaze.core.models import DIRECTION_OFFSETS, Vector2

if TYPE_CHECKING:
    from neuromaze.config import GameConfig
    from neuromaze.core.grid import Grid
    from neuromaze.core.models import Enemy
    from neuromaze.systems.rng import DeterministicRNG


def greedy_step(grid: Grid, pos: Vector2, target: Vector2) -> Vector2:
    """One tile toward *target* along the larger delta, else the other axis.

    Returns *pos* unchanged when both candidate tiles are walls.
    """
    dx = target.x - pos.x
    dy = target.y - pos.y
    step_x = Vector2(pos.x + (1 if dx > 0 else -1), pos.y) if dx else None
    step_y = Vector2(pos.x, pos.y + (1 if dy > 0 else -1)) if dy else None
    order = (step_x, step_y) if abs(dx) >= abs(dy) else (step_y, step_x)
    for candidate in order:
        if candidate is not None and grid.is_walkable(candidate):
            return candidate
    return pos


class PursuerAI:
    """Stateless decision maker; all per-enemy state lives on the Enemy."""

    __slots__ = ("_config", "_rng")

    def __init__(self, config: GameConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng

    def update(self, enemy: Enemy, grid: Grid, player_pos: Vector2, tick: int) -> bool:
        """Advance the decision timer; decide and move when it fires.

        Returns True if a decision was taken this tick.
        """
        enemy.decision_timer += 1
        if enemy.decision_timer < self._config.enemy_decision_interval:
            return False
        enemy.decision_timer = 0
        enemy.pos = self.decide(enemy, grid, player_pos, tick)
        return True

    def decide(self, enemy: Enemy, grid: Grid, player_pos: Vector2, tick: int) -> Vector2:
        """Return the enemy's next authoritative position (at most one tile away)."""
        cfg = self._config
        pursue = self._rng.next_float(Domain.AI_DECISION, enemy.id, tick) < enemy.intelligence
        enemy.intelligence = min(enemy.intelligence + cfg.enemy_intelligence_growth,
                                 cfg.enemy_intelligence_max)
        if not pursue:
            enemy.path = []
            return self.random_step(enemy, grid, tick)

        enemy.path = Pathfinder(grid, node_budget(grid, cfg.max_path_nodes)).find_path(enemy.pos, player_pos)
        if len(enemy.path) > 1:
            return enemy.path[1]
        if enemy.path:
            return enemy.pos  # already on the player's tile
        return greedy_step(grid, enemy.pos, player_pos)

    def random_step(self, enemy: Enemy, grid: Grid, tick: int) -> Vector2:
        options = [enemy.pos + d for d in DIRECTION_OFFSETS.values() if grid.is_walkable(enemy.pos + d)]
        if not options:
            return enemy.pos
        return self._rng.choice(Domain.AI_DECISION, enemy.id, -(tick + 1), options)
