"""Entity spawner — places enemies and powerups on free floor tiles."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from neuromaze.core.enums import Domain, PowerupKind
from neuromaze.core.models import Enemy, Powerup, Vector2
from neuromaze.systems.connectivity import reachable_region

if TYPE_CHECKING:
    from neuromaze.config import GameConfig
    from neuromaze.core.game_state import GameState
    from neuromaze.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


class EntitySpawner:
    """Deterministic placement of a level's enemies and powerups.

    Candidates are collected in row-major order and one is picked by index,
    so placement never loops waiting for a lucky draw.
    """

    __slots__ = ("_config", "_rng")

    def __init__(self, config: GameConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng

    def enemy_count(self, level: int) -> int:
        return self._config.enemy_base_count + level // 2

    def initial_intelligence(self, level: int) -> float:
        cfg = self._config
        value = cfg.enemy_intelligence_base + cfg.enemy_intelligence_per_level * (level - 1)
        return min(value, cfg.enemy_intelligence_max)

    def spawn_enemies(self, state: GameState) -> list[Enemy]:
        """Create this level's enemies inside the spawn band, away from the player."""
        grid = state.grid
        lo = self._config.enemy_spawn_min
        hi = grid.size - 2
        taken = state.occupied_positions() | {state.exit, state.start}
        candidates = [
            Vector2(x, y)
            for y in range(lo, hi + 1)
            for x in range(lo, hi + 1)
            if grid.is_walkable_xy(x, y) and Vector2(x, y) not in taken
        ]

        enemies: list[Enemy] = []
        for i in range(self.enemy_count(state.level)):
            if not candidates:
                logger.warning("Level %d: no free tile left for enemy %d", state.level, i)
                break
            idx = self._rng.next_int(Domain.SPAWN, state.level, i, 0, len(candidates) - 1)
            pos = candidates.pop(idx)
            enemy = Enemy(id=state.allocate_enemy_id(), pos=pos,
                          intelligence=self.initial_intelligence(state.level))
            enemy.snap_visual()
            enemies.append(enemy)
        return enemies

    def spawn_powerup(self, state: GameState) -> Powerup | None:
        """Place one powerup on a free floor tile the player can reach."""
        serial = state.next_powerup_serial()
        region = reachable_region(state.grid, state.player.pos)
        taken = state.occupied_positions() | {state.exit}
        candidates = sorted(
            (Vector2(x, y) for x, y in region if Vector2(x, y) not in taken),
            key=lambda p: (p.y, p.x),
        )
        if not candidates:
            logger.warning("Level %d: no free tile for a powerup", state.level)
            return None

        pos = self._rng.choice(Domain.POWERUP, serial, state.level, candidates)
        if self._rng.next_bool(Domain.POWERUP, serial, -state.level, self._config.powerup_health_chance):
            kind = PowerupKind.HEALTH
        else:
            kind = PowerupKind.SCORE
        return Powerup(pos=pos, kind=kind)
