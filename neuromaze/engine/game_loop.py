"""GameLoop — the simulation clock.

Tick cycle:
  1. Easing — visual positions slide toward authoritative cells
  2. Adaptation — expired wall warnings resolve; on the adaptation cadence
     the adapter mutates the maze using the pre-tick player position
  3. Pursuit — every enemy advances its decision timer and may step
  4. Collision — enemy hits, powerup pickups, exit arrival
  5. Regeneration — the special-ability charge refills

Movement and collision therefore always see the post-adaptation grid.
Player input arrives between ticks through ``attempt_player_move`` and
``trigger_special_ability``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from neuromaze.ai.pursuer import PursuerAI
from neuromaze.core.enums import GameStatus, PowerupKind
from neuromaze.core.game_state import GameState
from neuromaze.core.models import Vector2
from neuromaze.core.snapshot import Snapshot
from neuromaze.systems.adapter import AdaptationResult, MazeAdapter
from neuromaze.systems.maze_generator import MazeGenerator
from neuromaze.systems.rng import DeterministicRNG
from neuromaze.systems.spawner import EntitySpawner
from neuromaze.utils.event_log import GameEvent

if TYPE_CHECKING:
    from neuromaze.config import GameConfig
    from neuromaze.core.models import Enemy
    from neuromaze.utils.replay import ReplayRecorder

logger = logging.getLogger(__name__)

_UNIT_STEPS = frozenset({(1, 0), (-1, 0), (0, 1), (0, -1)})


@dataclass(frozen=True, slots=True)
class MoveResult:
    accepted: bool
    reached_exit: bool = False


@dataclass(frozen=True, slots=True)
class AbilityResult:
    activated: bool
    pushed: tuple[int, ...] = field(default_factory=tuple)


class GameLoop:
    """The heartbeat of a game session.

    Owns the GameState exclusively; every mutation happens inside
    ``tick_once`` or one of the input methods, never concurrently.
    """

    __slots__ = (
        "_config",
        "_rng",
        "_state",
        "_generator",
        "_adapter",
        "_pursuer",
        "_spawner",
        "_events",
    )

    def __init__(
        self,
        config: GameConfig,
        rng: DeterministicRNG | None = None,
        state: GameState | None = None,
    ) -> None:
        self._config = config
        self._rng = rng or DeterministicRNG(config.seed)
        self._generator = MazeGenerator(config, self._rng)
        self._adapter = MazeAdapter(config, self._rng)
        self._pursuer = PursuerAI(config, self._rng)
        self._spawner = EntitySpawner(config, self._rng)
        self._events: list[GameEvent] = []
        if state is None:
            player = GameState.new_player(
                Vector2(1, 1), config.player_max_health, config.move_history_length)
            state = GameState(seed=config.seed, grid=self._generator.generate(1), player=player)
            self._populate_level(state)
        self._state = state

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def config(self) -> GameConfig:
        return self._config

    def _emit(self, category: str, message: str, metadata: dict | None = None) -> None:
        self._events.append(GameEvent(
            tick=self._state.tick,
            category=category,
            message=message,
            metadata=metadata,
        ))

    def drain_events(self) -> list[GameEvent]:
        """Return and forget every event emitted since the last drain."""
        events, self._events = self._events, []
        return events

    def create_snapshot(self) -> Snapshot:
        """Create an immutable snapshot of the current game state."""
        return Snapshot.from_state(self._state)

    # -- level lifecycle --

    def _populate_level(self, state: GameState) -> None:
        for enemy in self._spawner.spawn_enemies(state):
            state.add_enemy(enemy)
        for _ in range(self._config.powerup_count):
            powerup = self._spawner.spawn_powerup(state)
            if powerup is not None:
                state.add_powerup(powerup)
        logger.info(
            "Level %d ready: %d enemies, %d powerups",
            state.level, len(state.enemies), len(state.powerups),
        )

    def start_level(self, level: int | None = None) -> None:
        """Generate a new maze and repopulate it. Health and score carry over."""
        state = self._state
        if level is not None:
            state.level = level
        state.grid = self._generator.generate(state.level)
        state.start = Vector2(1, 1)
        state.exit = Vector2(state.grid.size - 2, state.grid.size - 2)
        state.enemies.clear()
        state.powerups.clear()
        state.pending_walls.clear()
        state.player.pos = state.start
        state.player.snap_visual()
        state.player.move_history.clear()
        self._populate_level(state)
        self._emit("level_start", f"Level {state.level} started", {"level": state.level})

    def restart(self) -> None:
        """Start over from level 1 with a fresh player."""
        cfg = self._config
        state = self._state
        state.player = GameState.new_player(state.start, cfg.player_max_health, cfg.move_history_length)
        state.status = GameStatus.RUNNING
        self.start_level(1)
        logger.info("Run restarted at tick %d", state.tick)

    def _complete_level(self) -> None:
        state = self._state
        finished = state.level
        self._emit("level_complete", f"Level {finished} complete",
                   {"level": finished, "score": state.player.score})
        logger.info("Level %d complete at tick %d (score %d)", finished, state.tick, state.player.score)
        self.start_level(finished + 1)

    # -- input --

    def attempt_player_move(self, dx: int, dy: int) -> MoveResult:
        """Move the player one tile; walls and a finished run reject the move."""
        if (dx, dy) not in _UNIT_STEPS:
            raise ValueError(f"move must be a single axis-aligned step, got ({dx}, {dy})")
        state = self._state
        if state.status != GameStatus.RUNNING:
            return MoveResult(accepted=False)

        player = state.player
        target = Vector2(player.pos.x + dx, player.pos.y + dy)
        if not state.grid.is_walkable(target):
            return MoveResult(accepted=False)

        player.pos = target
        player.score += self._config.score_per_move
        player.move_history.append((dx, dy))
        return MoveResult(accepted=True, reached_exit=self._resolve_player_tile())

    def trigger_special_ability(self) -> AbilityResult:
        """Spend a full charge to shove nearby enemies away from the player."""
        cfg = self._config
        state = self._state
        player = state.player
        if state.status != GameStatus.RUNNING or player.ability_charge < cfg.ability_cost:
            return AbilityResult(activated=False)

        player.ability_charge -= cfg.ability_cost
        pushed: list[int] = []
        for eid in sorted(state.enemies):
            enemy = state.enemies[eid]
            if enemy.pos.manhattan(player.pos) > cfg.ability_radius:
                continue
            if self._push_away(enemy, player.pos):
                pushed.append(eid)
        self._emit("ability", f"Pulse pushed {len(pushed)} enemies",
                   {"x": player.pos.x, "y": player.pos.y, "pushed": pushed})
        return AbilityResult(activated=True, pushed=tuple(pushed))

    def _push_away(self, enemy: Enemy, origin: Vector2) -> bool:
        dx = enemy.pos.x - origin.x
        dy = enemy.pos.y - origin.y
        if dx == 0 and dy == 0:
            return False
        if abs(dx) >= abs(dy):
            step = Vector2(1 if dx > 0 else -1, 0)
        else:
            step = Vector2(0, 1 if dy > 0 else -1)
        moved = False
        for _ in range(self._config.ability_push_distance):
            nxt = enemy.pos + step
            if not self._state.grid.is_walkable(nxt):
                break
            enemy.pos = nxt
            moved = True
        if moved:
            enemy.path = []
        return moved

    # -- tick --

    def tick_once(self) -> bool:
        """Execute a single tick. Returns False once the run is over."""
        if self._state.status != GameStatus.RUNNING:
            return False
        self._step()
        self._state.tick += 1
        return self._state.status == GameStatus.RUNNING

    def run(
        self,
        max_ticks: int | None = None,
        controller: Callable[[GameLoop], None] | None = None,
        recorder: ReplayRecorder | None = None,
    ) -> None:
        """Tick until game over or *max_ticks*; *controller* supplies input."""
        limit = max_ticks if max_ticks is not None else self._config.max_ticks
        logger.info("=== Run started (seed=%d) ===", self._state.seed)
        while self._state.tick < limit:
            if controller is not None:
                controller(self)
            alive = self.tick_once()
            if recorder is not None:
                recorder.record_tick(self._state, self.drain_events())
            if not alive:
                break
            if self._state.tick % 200 == 0:
                logger.info("Tick %d: level %d, health %d, score %d",
                            self._state.tick, self._state.level,
                            self._state.player.health, self._state.player.score)
        logger.info("=== Run finished at tick %d ===", self._state.tick)
        if recorder is not None:
            recorder.flush()

    def _step(self) -> None:
        state = self._state
        cfg = self._config

        # --- 1. Easing ---
        state.player.ease(cfg.player_visual_easing)
        for enemy in state.enemies.values():
            enemy.ease(cfg.enemy_visual_easing)

        # --- 2. Adaptation (pre-tick player position) ---
        self._phase_adaptation()

        # --- 3. Pursuit ---
        for eid in sorted(state.enemies):
            self._pursuer.update(state.enemies[eid], state.grid, state.player.pos, state.tick)

        # --- 4. Collision ---
        self._phase_collisions()
        if state.status == GameStatus.RUNNING:
            self._resolve_player_tile()

        # --- 5. Regeneration ---
        player = state.player
        player.ability_charge = min(player.ability_charge + cfg.ability_regen_per_tick,
                                    cfg.ability_max_charge)

    def _phase_adaptation(self) -> None:
        state = self._state
        cfg = self._config
        protected = [state.start, *state.enemy_positions(), *(p.pos for p in state.powerups)]

        if state.pending_walls:
            resolved = self._adapter.resolve_pending(
                state.grid, state.pending_walls, state.player.pos, state.exit,
                state.tick, anchors=(state.start,), protected=protected,
            )
            self._report_flips(resolved)

        if state.tick == 0 or state.tick % cfg.adaptation_interval != 0:
            return
        result = self._adapter.adapt(
            state.grid, state.player.pos, state.exit, state.tick,
            anchors=(state.start,),
            protected=protected,
            move_history=state.player.move_history,
            pending=state.pending_walls,
        )
        self._report_flips(result)
        for flip in result.warned:
            self._emit("tile_warning", f"Wall forming at {flip.pos}",
                       {"x": flip.pos.x, "y": flip.pos.y, "expires": state.pending_walls[(flip.pos.x, flip.pos.y)]})

    def _report_flips(self, result: AdaptationResult) -> None:
        for flip in result.committed:
            self._emit("tile_flip", f"{flip.pos} became {flip.new_kind.name.lower()}",
                       {"x": flip.pos.x, "y": flip.pos.y, "kind": int(flip.new_kind)})

    def _phase_collisions(self) -> None:
        """Enemy contact costs health at most once per decision interval."""
        state = self._state
        cfg = self._config
        player = state.player
        if player.last_hit_tick is not None and state.tick - player.last_hit_tick < cfg.enemy_decision_interval:
            return

        for eid in sorted(state.enemies):
            enemy = state.enemies[eid]
            dist = math.hypot(enemy.pos.x - player.pos.x, enemy.pos.y - player.pos.y)
            if dist >= cfg.collision_distance:
                continue

            player.health -= cfg.collision_damage
            player.last_hit_tick = state.tick
            self._emit("damage", f"Enemy #{eid} hit the player for {cfg.collision_damage}",
                       {"enemy_id": eid, "damage": cfg.collision_damage, "health": player.health})

            if not player.alive:
                state.status = GameStatus.GAME_OVER
                self._emit("game_over", f"Game over on level {state.level}",
                           {"level": state.level, "score": player.score})
                logger.info("Game over at tick %d (level %d, score %d)",
                            state.tick, state.level, player.score)
                return

            # Knockback to the start tile
            player.pos = state.start
            player.snap_visual()
            return

    def _resolve_player_tile(self) -> bool:
        """Apply pickup and exit effects for the player's tile. True on level exit."""
        state = self._state
        cfg = self._config
        player = state.player

        powerup = state.powerup_at(player.pos)
        if powerup is not None:
            if powerup.kind == PowerupKind.HEALTH:
                player.health = min(player.max_health, player.health + cfg.heal_amount)
            else:
                player.score += cfg.score_pickup
            state.remove_powerup(powerup)
            self._emit("pickup", f"Picked up {powerup.kind.name.lower()} at {powerup.pos}",
                       {"x": powerup.pos.x, "y": powerup.pos.y, "kind": int(powerup.kind)})
            replacement = self._spawner.spawn_powerup(state)
            if replacement is not None:
                state.add_powerup(replacement)

        if player.pos == state.exit:
            self._complete_level()
            return True
        return False
