"""Mutable authoritative game state — only mutated by the GameLoop."""

from __future__ import annotations

from collections import deque

from neuromaze.core.enums import GameStatus
from neuromaze.core.grid import Grid
from neuromaze.core.models import Enemy, Player, Powerup, Vector2


class GameState:
    """The single source of truth for one game session."""

    __slots__ = (
        "tick", "seed", "level", "status", "grid", "start", "exit",
        "player", "enemies", "powerups", "pending_walls",
        "_next_enemy_id", "_powerup_serial",
    )

    def __init__(self, seed: int, grid: Grid, player: Player, level: int = 1) -> None:
        self.tick: int = 0
        self.seed: int = seed
        self.level: int = level
        self.status: GameStatus = GameStatus.RUNNING
        self.grid: Grid = grid
        self.start: Vector2 = Vector2(1, 1)
        self.exit: Vector2 = Vector2(grid.size - 2, grid.size - 2)
        self.player: Player = player
        self.enemies: dict[int, Enemy] = {}
        self.powerups: list[Powerup] = []
        self.pending_walls: dict[tuple[int, int], int] = {}
        self._next_enemy_id: int = 1
        self._powerup_serial: int = 0

    @classmethod
    def new_player(cls, pos: Vector2, max_health: int = 100, history_length: int = 20) -> Player:
        player = Player(
            pos=pos, health=max_health, max_health=max_health,
            move_history=deque(maxlen=history_length),
        )
        player.snap_visual()
        return player

    def allocate_enemy_id(self) -> int:
        eid = self._next_enemy_id
        self._next_enemy_id += 1
        return eid

    def next_powerup_serial(self) -> int:
        self._powerup_serial += 1
        return self._powerup_serial

    def add_enemy(self, enemy: Enemy) -> None:
        self.enemies[enemy.id] = enemy

    def add_powerup(self, powerup: Powerup) -> None:
        self.powerups.append(powerup)

    def powerup_at(self, pos: Vector2) -> Powerup | None:
        for p in self.powerups:
            if p.pos == pos:
                return p
        return None

    def remove_powerup(self, powerup: Powerup) -> None:
        self.powerups.remove(powerup)

    def enemy_positions(self) -> set[Vector2]:
        return {e.pos for e in self.enemies.values()}

    def occupied_positions(self) -> set[Vector2]:
        """Tiles holding the player, an enemy, or a powerup."""
        occupied = self.enemy_positions()
        occupied.update(p.pos for p in self.powerups)
        occupied.add(self.player.pos)
        return occupied
