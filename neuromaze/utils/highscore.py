"""High-score persistence — a single scalar kept in a small JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Loads once, saves whenever a run beats the stored best."""

    __slots__ = ("_path", "_best")

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._best = self._load()

    @property
    def best(self) -> int:
        return self._best

    def _load(self) -> int:
        if not self._path.exists():
            return 0
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return int(data.get("high_score", 0))
        except (OSError, ValueError, AttributeError) as exc:
            logger.warning("Ignoring unreadable high score file %s: %s", self._path, exc)
            return 0

    def record(self, score: int) -> bool:
        """Store *score* if it beats the current best. Returns True if it did."""
        if score <= self._best:
            return False
        self._best = score
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps({"high_score": score}), encoding="utf-8")
        logger.info("New high score %d saved to %s", score, self._path)
        return True
