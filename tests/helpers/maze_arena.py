"""MazeArena — test fixture for game-loop mechanics.

Builds a GameLoop over a hand-drawn ASCII maze with no random enemies or
powerups, so a test places exactly the entities it needs.

Usage:
    arena = MazeArena(OPEN_7)
    arena.add_enemy((3, 1))
    arena.run_ticks(12)
    assert arena.player.health == 80
"""

from __future__ import annotations

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from neuromaze.config import GameConfig
from neuromaze.core.enums import PowerupKind
from neuromaze.core.game_state import GameState
from neuromaze.core.grid import Grid
from neuromaze.core.models import Enemy, Powerup, Vector2
from neuromaze.engine.game_loop import GameLoop
from neuromaze.systems.rng import DeterministicRNG
from neuromaze.utils.event_log import GameEvent

OPEN_7 = [
    "#######",
    "#.....#",
    "#.....#",
    "#.....#",
    "#.....#",
    "#.....#",
    "#######",
]


class MazeArena:
    """Small hand-built game with a full GameLoop pipeline.

    Adaptation is off and enemies always pursue unless overridden.
    """

    def __init__(
        self,
        rows: list[str] | None = None,
        seed: int = 42,
        player: tuple[int, int] = (1, 1),
        **config_overrides,
    ):
        rows = rows or OPEN_7
        defaults = dict(
            seed=seed,
            grid_size=len(rows),
            adaptation_rate=0.0,
            enemy_intelligence_base=1.0,
            enemy_intelligence_max=1.0,
            powerup_count=0,
        )
        defaults.update(config_overrides)
        self.config = GameConfig(**defaults)
        self.rng = DeterministicRNG(seed=seed)

        grid = Grid.from_rows(rows)
        pl = GameState.new_player(Vector2(*player), self.config.player_max_health,
                                  self.config.move_history_length)
        self.state = GameState(seed=seed, grid=grid, player=pl)
        self.loop = GameLoop(self.config, self.rng, state=self.state)
        self.events: list[GameEvent] = []

    @property
    def player(self):
        return self.state.player

    @property
    def grid(self) -> Grid:
        return self.state.grid

    def add_enemy(self, pos: tuple[int, int], intelligence: float = 1.0) -> Enemy:
        enemy = Enemy(id=self.state.allocate_enemy_id(), pos=Vector2(*pos), intelligence=intelligence)
        enemy.snap_visual()
        self.state.add_enemy(enemy)
        return enemy

    def add_powerup(self, pos: tuple[int, int], kind: PowerupKind = PowerupKind.SCORE) -> Powerup:
        powerup = Powerup(pos=Vector2(*pos), kind=kind)
        self.state.add_powerup(powerup)
        return powerup

    def move(self, dx: int, dy: int):
        result = self.loop.attempt_player_move(dx, dy)
        self.events.extend(self.loop.drain_events())
        return result

    def run_ticks(self, n: int) -> list[GameEvent]:
        """Run *n* ticks (stopping early on game over); return their events."""
        new_events: list[GameEvent] = []
        for _ in range(n):
            alive = self.loop.tick_once()
            new_events.extend(self.loop.drain_events())
            if not alive:
                break
        self.events.extend(new_events)
        return new_events

    def events_of(self, category: str) -> list[GameEvent]:
        return [e for e in self.events if e.category == category]
