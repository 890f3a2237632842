"""AI layer: pathfinding, pursuit, and the scripted autopilot."""

from neuromaze.ai.pathfinding import Pathfinder, find_path, node_budget
from neuromaze.ai.pursuer import PursuerAI

__all__ = ["Pathfinder", "PursuerAI", "find_path", "node_budget"]
