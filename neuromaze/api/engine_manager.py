"""EngineManager — singleton wrapper that runs the GameLoop on a background thread.

The API reads from an atomically-swapped immutable Snapshot. Ticks and
player input both go through ``_sim_lock``, so the loop never sees an
input land halfway through a tick.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING

from neuromaze.core.snapshot import Snapshot
from neuromaze.engine.game_loop import AbilityResult, GameLoop, MoveResult
from neuromaze.systems.rng import DeterministicRNG
from neuromaze.utils.event_log import EventLog, GameEvent
from neuromaze.utils.highscore import HighScoreStore

if TYPE_CHECKING:
    from neuromaze.config import GameConfig
    from neuromaze.core.grid import Grid

logger = logging.getLogger(__name__)


class EngineManager:
    """Manages the game lifecycle on a background thread.

    Provides thread-safe access to:
      - latest snapshot (atomic reference swap)
      - event log (lock-guarded ring buffer)
      - control commands (start / pause / resume / step / reset / restart)
      - player input (move / ability)
    """

    def __init__(self, config: GameConfig, highscores: HighScoreStore | None = None) -> None:
        self._config = config
        self.config = config
        self._tick_rate: float = config.tick_rate

        self._loop: GameLoop | None = None
        self._highscores = highscores or HighScoreStore(config.highscore_file)

        # Thread-safe shared state
        self._sim_lock = threading.Lock()
        self._snapshot_lock = threading.Lock()
        self._latest_snapshot: Snapshot | None = None
        self._event_log = EventLog()

        # Control
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.01, min(value, 2.0))

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def high_score(self) -> int:
        return self._highscores.best

    @property
    def loop(self) -> GameLoop | None:
        return self._loop

    # -- snapshot access --

    def get_snapshot(self) -> Snapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    def get_grid(self) -> Grid | None:
        snap = self.get_snapshot()
        return snap.grid if snap else None

    # -- input --

    def move_player(self, dx: int, dy: int) -> MoveResult:
        assert self._loop is not None
        with self._sim_lock:
            result = self._loop.attempt_player_move(dx, dy)
            self._publish_snapshot_and_events()
        return result

    def trigger_ability(self) -> AbilityResult:
        assert self._loop is not None
        with self._sim_lock:
            result = self._loop.trigger_special_ability()
            self._publish_snapshot_and_events()
        return result

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="engine-loop", daemon=True)
        self._thread.start()
        logger.info("EngineManager started (tick_rate=%.3fs)", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("EngineManager paused at tick %d", self._current_tick())

    def resume(self) -> None:
        self._paused.clear()
        logger.info("EngineManager resumed at tick %d", self._current_tick())

    def step(self) -> None:
        """Execute exactly one tick (must be paused)."""
        if not self._paused.is_set():
            self.pause()
        self._step_requested.set()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        logger.info("EngineManager stopped.")

    def reset(self) -> None:
        """Stop and rebuild from the configured seed, ready to start."""
        self.stop()
        self._event_log.clear()
        self._build()
        logger.info("EngineManager reset.")

    def restart(self) -> None:
        """Begin a new run (level 1) on the current session without rebuilding."""
        assert self._loop is not None
        with self._sim_lock:
            self._loop.restart()
            self._publish_snapshot_and_events()
        if self.running:
            self._paused.clear()

    def tick(self) -> bool:
        """Run one tick synchronously on the caller's thread."""
        assert self._loop is not None
        with self._sim_lock:
            can_continue = self._loop.tick_once()
            self._publish_snapshot_and_events()
        return can_continue

    # -- internals --

    def _build(self) -> None:
        """Construct the game loop from config."""
        rng = DeterministicRNG(self._config.seed)
        self._loop = GameLoop(self._config, rng)
        with self._sim_lock:
            self._publish_snapshot_and_events()

    def _run_loop(self) -> None:
        """Background thread main loop."""
        logger.info("Engine thread started.")
        assert self._loop is not None

        while not self._stop_requested.is_set():
            if self._paused.is_set() and not self._step_requested.is_set():
                time.sleep(0.01)
                continue

            single_step = self._step_requested.is_set()
            if single_step:
                self._step_requested.clear()

            if not self.tick():
                # Game over: idle until restarted or stopped
                self._paused.set()
                logger.info("Run ended at tick %d; waiting for restart.", self._current_tick())
                continue

            if not single_step:
                time.sleep(self._tick_rate)

        self._running.clear()
        logger.info("Engine thread exited.")

    def _publish_snapshot_and_events(self) -> None:
        """Swap snapshot + push drained events. Caller holds ``_sim_lock``."""
        assert self._loop is not None
        snap = self._loop.create_snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap

        events: list[GameEvent] = self._loop.drain_events()
        if not events:
            return
        self._event_log.append_many(events)
        for event in events:
            if event.category == "game_over" and event.metadata:
                self._highscores.record(int(event.metadata.get("score", 0)))

    def _current_tick(self) -> int:
        snap = self.get_snapshot()
        return snap.tick if snap else 0
