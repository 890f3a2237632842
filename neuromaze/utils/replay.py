"""Replay serialization — records tick-by-tick positions for headless runs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from neuromaze.core.game_state import GameState
    from neuromaze.utils.event_log import GameEvent

logger = logging.getLogger(__name__)


class ReplayRecorder:
    """Accumulates tick records and flushes to a JSON replay file."""

    __slots__ = ("_path", "_ticks", "_seed")

    def __init__(self, path: str | Path, seed: int) -> None:
        self._path = Path(path)
        self._seed = seed
        self._ticks: list[dict[str, Any]] = []

    @property
    def tick_count(self) -> int:
        return len(self._ticks)

    def record_tick(self, state: GameState, events: list[GameEvent]) -> None:
        player = state.player
        self._ticks.append(
            {
                "tick": state.tick,
                "level": state.level,
                "player": {
                    "pos": [player.pos.x, player.pos.y],
                    "health": player.health,
                    "score": player.score,
                },
                "enemies": [
                    {"id": e.id, "pos": [e.pos.x, e.pos.y]}
                    for e in state.enemies.values()
                ],
                "events": [
                    {"category": ev.category, "message": ev.message}
                    for ev in events
                ],
            }
        )

    def flush(self) -> None:
        """Write accumulated data to disk."""
        replay = {
            "version": "1.0",
            "seed": self._seed,
            "total_ticks": len(self._ticks),
            "ticks": self._ticks,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(replay, indent=2), encoding="utf-8")
        logger.info("Replay saved to %s (%d ticks)", self._path, len(self._ticks))
