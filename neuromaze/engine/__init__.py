"""Engine layer: the game loop."""

from neuromaze.engine.game_loop import AbilityResult, GameLoop, MoveResult

__all__ = ["AbilityResult", "GameLoop", "MoveResult"]
